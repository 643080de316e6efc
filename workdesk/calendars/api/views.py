"""Read-only calendar over externally analysed tasks."""

from django.utils import timezone
from drf_spectacular.utils import OpenApiParameter
from drf_spectacular.utils import extend_schema
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from workdesk.calendars.api.serializers import CalendarDaySerializer
from workdesk.calendars.api.serializers import CalendarTaskSerializer
from workdesk.calendars.api.serializers import DayQuerySerializer
from workdesk.calendars.api.serializers import MonthQuerySerializer
from workdesk.calendars.models import CalendarTask
from workdesk.calendars.projection import grid_bounds
from workdesk.calendars.projection import month_grid
from workdesk.calendars.projection import tasks_active_on


class CalendarTaskViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = CalendarTask.objects.all()
    serializer_class = CalendarTaskSerializer
    search_fields = ["name", "related_system"]
    filterset_fields = ["is_applied", "related_system"]

    @extend_schema(summary="Flip the applied flag", request=None)
    @action(detail=True, methods=["post"], url_path="toggle")
    def toggle(self, request, pk=None):
        task = self.get_object()
        task.is_applied = not task.is_applied
        task.save(update_fields=["is_applied"])
        return Response(self.get_serializer(task).data)


class CalendarMonthView(APIView):
    @extend_schema(
        parameters=[
            OpenApiParameter("year", int, description="Defaults to the current year"),
            OpenApiParameter("month", int, description="1-12, defaults to the current month"),
        ],
        responses=CalendarDaySerializer(many=True),
        tags=["Calendar"],
    )
    def get(self, request):
        query = MonthQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        today = timezone.localdate()
        year = query.validated_data.get("year", today.year)
        month = query.validated_data.get("month", today.month)

        first, last = grid_bounds(year, month)
        tasks = CalendarTask.objects.filter(start_date__lte=last, end_date__gte=first)
        weeks = month_grid(year, month, tasks)
        return Response(
            {
                "year": year,
                "month": month,
                "weeks": [CalendarDaySerializer(week, many=True).data for week in weeks],
            },
        )


class CalendarDayView(APIView):
    @extend_schema(
        parameters=[OpenApiParameter("date", str, required=True, description="YYYY-MM-DD")],
        responses=CalendarTaskSerializer(many=True),
        tags=["Calendar"],
    )
    def get(self, request):
        query = DayQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        day = query.validated_data["date"]
        tasks = CalendarTask.objects.filter(start_date__lte=day, end_date__gte=day)
        return Response(
            CalendarTaskSerializer(tasks_active_on(tasks, day), many=True).data,
        )
