from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.calendarapp.services.calendar_service import CalendarService

from .serializers import DateSummarySerializer, RangeQuerySerializer
from .services.availability_service import AvailabilityService


class RangeSummaryView(APIView):
    """
    API view summarizing a calendar's availability over a date range

    Endpoint:
    - GET /api/v1/availabilities/calendar/{public_token}/range - Range summary

    Query parameters:
        start: First date, YYYY-MM-DD (required)
        end: Last date, YYYY-MM-DD (required, at most 366 days after start)

    Permissions:
    - Public, the token is the access key

    Returns:
        Response: One item per date having availability
            [
                {
                    "date": "2025-03-04",
                    "total_count": 2,
                    "participants": [
                        {
                            "participant_id": "uuid",
                            "participant_name": "Alice",
                            "start_time": "18:00",
                            "end_time": "22:00",
                            "note": ""
                        },
                        ...
                    ]
                },
                ...
            ]
    """

    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def get(self, request, public_token):
        serializer = RangeQuerySerializer(data=request.query_params)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        # Unknown token propagates as CalendarNotFoundError (404)
        calendar = CalendarService.get_by_public_token(public_token)

        summaries = AvailabilityService.get_range_summary(
            calendar.calendar_id,
            serializer.validated_data["start"],
            serializer.validated_data["end"],
        )
        return Response(DateSummarySerializer(summaries, many=True).data)
