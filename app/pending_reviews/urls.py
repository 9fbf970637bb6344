from django.urls import path

from . import views

urlpatterns = [
    path("", views.pending_reviews, name="pending_reviews"),
]
