"""JWT identity for roster employees.

Tokens are stateless: the employee's directory fields are embedded as claims
at login, so no database row backs an authenticated request.
"""

from __future__ import annotations

from functools import cached_property

from rest_framework_simplejwt.models import TokenUser
from rest_framework_simplejwt.tokens import AccessToken
from rest_framework_simplejwt.tokens import RefreshToken

from workdesk.roster.services import Employee

IDENTITY_CLAIMS = ("name", "department", "team", "position")


def employee_claims(employee: Employee) -> dict[str, str]:
    claims = {"employee_id": employee.employee_id}
    claims.update({claim: getattr(employee, claim) for claim in IDENTITY_CLAIMS})
    return claims


class RosterUser(TokenUser):
    """Authenticated console user rebuilt from token claims."""

    @cached_property
    def employee_id(self) -> str:
        return str(self.id)

    @cached_property
    def employee(self) -> Employee:
        return Employee(
            employee_id=self.employee_id,
            **{claim: str(self.token.get(claim, "") or "") for claim in IDENTITY_CLAIMS},
        )

    def __str__(self) -> str:
        return f"RosterUser {self.employee_id}"


def issue_tokens(employee: Employee) -> dict[str, str]:
    refresh = RefreshToken()
    for claim, value in employee_claims(employee).items():
        refresh[claim] = value
    return {"refresh": str(refresh), "access": str(refresh.access_token)}


def token_user_for(employee: Employee) -> RosterUser:
    token = AccessToken()
    for claim, value in employee_claims(employee).items():
        token[claim] = value
    return RosterUser(token)
