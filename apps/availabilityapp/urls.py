from django.urls import path

from . import views

app_name = "availabilityapp"

urlpatterns = [
    path(
        "calendar/<str:public_token>/range",
        views.RangeSummaryView.as_view(),
        name="range-summary",
    ),
]
