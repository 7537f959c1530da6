from django.urls import path

from . import views

app_name = "icsapp"

urlpatterns = [
    path("feed/", views.ics_feed, name="feed-missing-token"),
    path("feed/<str:token>", views.ics_feed, name="feed"),
]
