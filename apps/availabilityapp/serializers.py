from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from .services.availability_service import MAX_RANGE_DAYS


class RangeQuerySerializer(serializers.Serializer):
    """Serializer for range summary query parameters"""

    start = serializers.DateField(required=True)
    end = serializers.DateField(required=True)

    def validate(self, data):
        if data["end"] < data["start"]:
            raise serializers.ValidationError(_("End date must be on or after start date"))
        if (data["end"] - data["start"]).days >= MAX_RANGE_DAYS:
            raise serializers.ValidationError(
                _("Date range cannot exceed %(days)s days") % {"days": MAX_RANGE_DAYS}
            )
        return data


class ParticipantSummarySerializer(serializers.Serializer):
    participant_id = serializers.UUIDField()
    participant_name = serializers.CharField()
    start_time = serializers.CharField(allow_null=True)
    end_time = serializers.CharField(allow_null=True)
    note = serializers.CharField(allow_blank=True)


class DateSummarySerializer(serializers.Serializer):
    date = serializers.DateField()
    total_count = serializers.IntegerField()
    participants = ParticipantSummarySerializer(many=True)
