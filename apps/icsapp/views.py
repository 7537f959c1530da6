import logging

from django.http import HttpResponse
from django.views.decorators.http import require_safe

from core.exceptions import CalendarNotFoundError, QuotaExceededError, UpstreamReadError

from .services.ics_service import ICSService

logger = logging.getLogger(__name__)

ICS_SUFFIX = ".ics"


def get_request_host(request):
    """Serving host: X-Forwarded-Host, then X-Real-Host, then the request's own host"""
    return (
        request.headers.get("X-Forwarded-Host")
        or request.headers.get("X-Real-Host")
        or request.get_host()
    )


def text_response(message, status):
    return HttpResponse(message, status=status, content_type="text/plain; charset=utf-8")


@require_safe
def ics_feed(request, token=""):
    """
    Public iCalendar feed of a calendar, addressed by its ICS token.

    Subscribers poll this URL; responses must never be cached by proxies or
    clients beyond the refresh interval announced in the feed itself.
    """
    if token.endswith(ICS_SUFFIX):
        token = token[: -len(ICS_SUFFIX)]

    if not token:
        return text_response("Token required", 400)

    try:
        feed = ICSService().generate_feed(token, host=get_request_host(request))
    except CalendarNotFoundError:
        return text_response("Calendar not found", 404)
    except QuotaExceededError as e:
        return text_response(str(e.message), 403)
    except UpstreamReadError:
        logger.error("Failed to generate ICS feed", exc_info=True)
        return text_response("Internal server error", 500)

    response = HttpResponse(feed, content_type="text/calendar; charset=utf-8")
    response["Content-Disposition"] = 'inline; filename="calendar.ics"'
    response["Cache-Control"] = "no-cache, no-store, must-revalidate"
    response["Pragma"] = "no-cache"
    response["Expires"] = "0"
    return response
