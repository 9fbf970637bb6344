"""
URL configuration for watchanalytics project.

The pending reviews page is served at the site root; the admin provides the
login form used by ``login_required``.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", include("pending_reviews.urls")),
]
