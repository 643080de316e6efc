"""Login and roster lookup endpoints."""

import logging

from django.utils.translation import gettext_lazy as _
from drf_spectacular.utils import OpenApiParameter
from drf_spectacular.utils import extend_schema
from rest_framework import permissions
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import RefreshToken

from workdesk.core.exports import truthy_param
from workdesk.core.permissions import caller_employee_id
from workdesk.roster.api.serializers import EmployeeSerializer
from workdesk.roster.api.serializers import LoginSerializer
from workdesk.roster.api.serializers import RefreshSerializer
from workdesk.roster.authentication import issue_tokens
from workdesk.roster.services import get_roster

logger = logging.getLogger(__name__)


class TokenEndpointView(APIView):
    """Anonymous token endpoint that still answers bad credentials with 401."""

    authentication_classes = []
    permission_classes = [permissions.AllowAny]
    www_authenticate_realm = "api"

    def get_authenticate_header(self, request):
        return f'{api_settings.AUTH_HEADER_TYPES[0]} realm="{self.www_authenticate_realm}"'


class LoginView(TokenEndpointView):
    """Flat-file credential match against the roster."""

    @extend_schema(request=LoginSerializer, tags=["Authentication"])
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        employee = serializer.validated_data["employee"]
        logger.info("Employee %s logged in", employee.employee_id)
        return Response(
            {
                **issue_tokens(employee),
                "employee": EmployeeSerializer(employee).data,
            },
            status=status.HTTP_200_OK,
        )


class RefreshView(TokenEndpointView):

    @extend_schema(request=RefreshSerializer, tags=["Authentication"])
    def post(self, request):
        serializer = RefreshSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            refresh = RefreshToken(serializer.validated_data["refresh"])
        except TokenError as exc:
            raise InvalidToken(exc.args[0]) from exc
        # An employee removed from the roster cannot keep refreshing.
        if get_roster().get(str(refresh.get("employee_id", ""))) is None:
            raise AuthenticationFailed(_("Employee is no longer on the roster."))
        return Response({"access": str(refresh.access_token)})


class MeView(APIView):
    @extend_schema(responses=EmployeeSerializer, tags=["Authentication"])
    def get(self, request):
        return Response(EmployeeSerializer(request.user.employee).data)


class EmployeeListView(APIView):
    """Target/processor picker source: the full roster, optionally filtered."""

    @extend_schema(
        parameters=[
            OpenApiParameter("search", str, description="Name or employee ID"),
            OpenApiParameter("exclude_self", bool),
        ],
        responses=EmployeeSerializer(many=True),
        tags=["Roster"],
    )
    def get(self, request):
        employees = get_roster().search(request.query_params.get("search"))
        if truthy_param(request.query_params.get("exclude_self")):
            me = caller_employee_id(request)
            employees = [e for e in employees if e.employee_id != me]
        return Response(EmployeeSerializer(employees, many=True).data)


class EmployeeDetailView(APIView):
    @extend_schema(responses=EmployeeSerializer, tags=["Roster"])
    def get(self, request, employee_id: str):
        employee = get_roster().get(employee_id)
        if employee is None:
            raise NotFound(_("Employee not found."))
        return Response(EmployeeSerializer(employee).data)
