from rest_framework import serializers

from workdesk.calendars.models import CalendarTask


class CalendarTaskSerializer(serializers.ModelSerializer):
    class Meta:
        model = CalendarTask
        fields = [
            "id",
            "name",
            "start_date",
            "end_date",
            "related_system",
            "is_applied",
            "created_at",
        ]
        read_only_fields = fields


class CalendarDaySerializer(serializers.Serializer):
    date = serializers.DateField()
    in_month = serializers.BooleanField()
    tasks = CalendarTaskSerializer(many=True)


class MonthQuerySerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=1900, max_value=2999, required=False)
    month = serializers.IntegerField(min_value=1, max_value=12, required=False)


class DayQuerySerializer(serializers.Serializer):
    date = serializers.DateField(input_formats=["iso-8601"])
