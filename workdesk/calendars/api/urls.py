from django.urls import include
from django.urls import path
from rest_framework.routers import SimpleRouter

from workdesk.calendars.api.views import CalendarDayView
from workdesk.calendars.api.views import CalendarMonthView
from workdesk.calendars.api.views import CalendarTaskViewSet

router = SimpleRouter()
router.register("tasks", CalendarTaskViewSet, basename="calendar-task")

urlpatterns = [
    path("month/", CalendarMonthView.as_view(), name="calendar-month"),
    path("day/", CalendarDayView.as_view(), name="calendar-day"),
    path("", include(router.urls)),
]
