from django.urls import path

from workdesk.roster.api.views import EmployeeDetailView
from workdesk.roster.api.views import EmployeeListView
from workdesk.roster.api.views import LoginView
from workdesk.roster.api.views import MeView
from workdesk.roster.api.views import RefreshView

auth_urlpatterns = [
    path("login/", LoginView.as_view(), name="login"),
    path("refresh/", RefreshView.as_view(), name="refresh"),
    path("me/", MeView.as_view(), name="me"),
]

urlpatterns = [
    path("employees/", EmployeeListView.as_view(), name="employee-list"),
    path(
        "employees/<str:employee_id>/",
        EmployeeDetailView.as_view(),
        name="employee-detail",
    ),
]
