"""QuorumCal project main URL configuration."""

from __future__ import annotations

from django.contrib import admin
from django.http import JsonResponse
from django.urls import include, path


# -----------------------------------------------------------------------------
# Health check endpoint
# -----------------------------------------------------------------------------
def health(request):
    """Minimal health-check endpoint used by load-balancers / uptime checks."""
    return JsonResponse({"status": "ok"})


# -----------------------------------------------------------------------------
# URL patterns
# -----------------------------------------------------------------------------
urlpatterns = [
    # Django admin
    path("admin/", admin.site.urls),
    # Calendar feeds (public, token-addressed)
    path("api/v1/ics/", include("apps.icsapp.urls")),
    # Availability summaries (public, token-addressed)
    path("api/v1/availabilities/", include("apps.availabilityapp.urls")),
    # Health
    path("health/", health, name="health"),
]
