from django.apps import AppConfig


class PendingReviewsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pending_reviews"
    verbose_name = "Pending reviews"
