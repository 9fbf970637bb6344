from __future__ import annotations

from unittest import mock

from bs4 import BeautifulSoup
from django.contrib.auth import get_user_model
from django.test import Client, TestCase, override_settings
from django.urls import reverse

from pending_reviews.services import WatchlistAccessError
from pending_reviews.types import DeletedPageItem, ExistingPageItem
from pending_reviews.views import page_header, parse_limit

from .helpers import make_log, make_revision


@override_settings(
    PENDING_REVIEWS_WIKI_URL="https://wiki.example",
    PENDING_REVIEWS_DEFAULT_LIMIT=20,
    PENDING_REVIEWS_MAX_LIMIT=500,
)
class PendingReviewsViewTests(TestCase):
    def setUp(self):
        self.client = Client()
        self.user = get_user_model().objects.create_user("Reviewer", password="secret")
        self.client.force_login(self.user)

        patcher = mock.patch("pending_reviews.views.WikiClient")
        self.mock_client_cls = patcher.start()
        self.addCleanup(patcher.stop)
        self.wiki_client = self.mock_client_cls.return_value
        self.wiki_client.get_pending_reviews_list.return_value = []
        self.wiki_client.talk_page_exists.return_value = False
        self.wiki_client.get_move_target.return_value = ""

    def get(self, **params):
        return self.client.get(reverse("pending_reviews"), params)

    def soup(self, response):
        return BeautifulSoup(response.content.decode(), "lxml")

    def test_requires_login(self):
        self.client.logout()
        response = self.get()
        self.assertEqual(response.status_code, 302)
        self.wiki_client.get_pending_reviews_list.assert_not_called()

    def test_renders_existing_and_deleted_pages(self):
        self.wiki_client.get_pending_reviews_list.return_value = [
            ExistingPageItem(
                title="Page A",
                latest_revid=3,
                log=[make_log(100, user="Mod", log_type="protect", log_action="protect")],
                new_revisions=[
                    make_revision(110, revid=3, parentid=2, comment="later edit"),
                    make_revision(90, revid=2, parentid=1, comment="earlier edit"),
                ],
            ),
            DeletedPageItem(
                deleted_title="Page B",
                deletion_log=[make_log(50, user="U", log_type="delete", log_action="delete")],
            ),
        ]

        response = self.get(limit="20")

        self.assertEqual(response.status_code, 200)
        self.wiki_client.get_pending_reviews_list.assert_called_once_with("Reviewer")
        soup = self.soup(response)
        rows = soup.find("table", class_="pendingreviews-list").find_all("tr")
        self.assertEqual(len(rows), 4)

        changes = [li.get_text() for li in rows[1].find_all("li")]
        self.assertIn("later edit", changes[0])
        self.assertIn("Protected by User:Mod", changes[1])
        self.assertIn("earlier edit", changes[2])

        self.assertIn("Page B", rows[2].find("strong").get_text())
        self.assertIn("Deleted by User:U", rows[3].get_text())
        contact = [a for a in rows[2].find_all("a") if a.get_text() == "Contact U"]
        self.assertEqual(len(contact), 1)
        self.assertIn("You have 2 pending reviews.", soup.get_text())
        self.assertNotIn("Showing the oldest", soup.get_text())

    def test_limit_truncates_rows(self):
        self.wiki_client.get_pending_reviews_list.return_value = [
            ExistingPageItem(title=f"Page {i}") for i in range(25)
        ]

        soup = self.soup(self.get(limit="10"))

        titles = [strong.get_text() for strong in soup.find_all("strong")]
        self.assertEqual(titles, [f"Page {i}" for i in range(10)])
        self.assertIn("You have 25 pending reviews. Showing the oldest 10.", soup.get_text())

    def test_default_limit(self):
        self.wiki_client.get_pending_reviews_list.return_value = [
            ExistingPageItem(title=f"Page {i}") for i in range(25)
        ]

        soup = self.soup(self.get())

        self.assertEqual(len(soup.find_all("tr")), 40)
        self.assertIn("Showing the oldest 20.", soup.get_text())

    def test_clear_notification(self):
        self.wiki_client.resolve_title.return_value = "Talk:Gone"

        response = self.get(clearNotificationTitle="Gone", clearNotificationNS="1")

        self.assertEqual(response.status_code, 200)
        self.wiki_client.resolve_title.assert_called_once_with("Gone", 1)
        self.wiki_client.clear_by_user_and_title.assert_called_once_with("Reviewer", "Talk:Gone")
        self.wiki_client.get_pending_reviews_list.assert_not_called()
        soup = self.soup(response)
        self.assertIn("The notification for Talk:Gone has been cleared.", soup.get_text())
        link = soup.find("a", string="Pending reviews")
        self.assertEqual(link["href"], reverse("pending_reviews"))

    def test_clear_notification_defaults_to_main_namespace(self):
        self.wiki_client.resolve_title.return_value = "Gone"

        self.get(clearNotificationTitle="Gone", clearNotificationNS="not-a-number")

        self.wiki_client.resolve_title.assert_called_once_with("Gone", 0)

    def test_invalid_clear_title_falls_back_to_list(self):
        self.wiki_client.resolve_title.return_value = None
        self.wiki_client.get_pending_reviews_list.return_value = [ExistingPageItem(title="Page")]

        with self.assertLogs("pending_reviews.views", level="WARNING"):
            response = self.get(clearNotificationTitle="Bad<title>")

        self.assertEqual(response.status_code, 200)
        self.wiki_client.clear_by_user_and_title.assert_not_called()
        soup = self.soup(response)
        notice = soup.find(class_="pendingreviews-notice")
        self.assertIn("Bad<title> is not a valid page title", notice.get_text())
        self.assertEqual(len(soup.find_all("tr")), 2)

    def test_namespace_alone_renders_list(self):
        self.get(clearNotificationNS="1")
        self.wiki_client.resolve_title.assert_not_called()
        self.wiki_client.get_pending_reviews_list.assert_called_once()

    def test_other_users_list_requires_staff(self):
        response = self.get(user="Someone else")
        self.assertEqual(response.status_code, 403)
        self.wiki_client.get_pending_reviews_list.assert_not_called()

    def test_own_name_as_user_parameter_is_allowed(self):
        response = self.get(user="Reviewer")
        self.assertEqual(response.status_code, 200)

    def test_staff_can_view_other_users_list(self):
        self.user.is_staff = True
        self.user.save()

        response = self.get(user="Bob")

        self.assertEqual(response.status_code, 200)
        self.wiki_client.get_pending_reviews_list.assert_called_once_with("Bob")
        self.assertEqual(self.soup(response).find("h1").get_text(), "Pending reviews for Bob")

    def accept_buttons(self, **params):
        self.wiki_client.get_pending_reviews_list.return_value = [
            DeletedPageItem(deleted_title="Gone", deletion_log=[make_log(50, user="U")]),
        ]
        soup = self.soup(self.get(**params))
        return soup.find_all("a", class_="pendingreviews-accept-deletion")

    @override_settings(PENDING_REVIEWS_WIKI_USERNAME="Reviewer")
    def test_accept_deletion_shown_to_wiki_account(self):
        self.assertEqual(len(self.accept_buttons()), 1)

    @override_settings(PENDING_REVIEWS_WIKI_USERNAME="BotAccount")
    def test_accept_deletion_hidden_from_other_reviewers(self):
        self.assertEqual(self.accept_buttons(), [])

    @override_settings(PENDING_REVIEWS_WIKI_USERNAME="Reviewer")
    def test_accept_deletion_hidden_when_viewing_another_list(self):
        self.user.is_staff = True
        self.user.save()

        self.assertEqual(self.accept_buttons(user="Bob"), [])

    def test_wiki_errors_return_bad_gateway(self):
        self.wiki_client.get_pending_reviews_list.side_effect = WatchlistAccessError("no token")

        with self.assertLogs("pending_reviews.views", level="ERROR"):
            response = self.get()

        self.assertEqual(response.status_code, 502)
        self.assertIn("no token", response.content.decode())

    def test_only_get_is_allowed(self):
        response = self.client.post(reverse("pending_reviews"))
        self.assertEqual(response.status_code, 405)


@override_settings(PENDING_REVIEWS_DEFAULT_LIMIT=20, PENDING_REVIEWS_MAX_LIMIT=500)
class HelperTests(TestCase):
    def test_parse_limit(self):
        self.assertEqual(parse_limit(None), 20)
        self.assertEqual(parse_limit(""), 20)
        self.assertEqual(parse_limit("abc"), 20)
        self.assertEqual(parse_limit("0"), 20)
        self.assertEqual(parse_limit("-5"), 20)
        self.assertEqual(parse_limit("7"), 7)
        self.assertEqual(parse_limit("100000"), 500)

    def test_page_header(self):
        self.assertEqual(str(page_header(1, 20)), "<p>You have 1 pending review.</p>")
        self.assertEqual(
            str(page_header(30, 20)),
            "<p>You have 30 pending reviews. Showing the oldest 20.</p>",
        )
