"""Employee roster loaded from a static CSV.

The roster is the single identity source of the console: every employee id
stored anywhere else in the project refers to a row of this file. The file is
re-read only when its modification time changes.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from dataclasses import field
from functools import lru_cache
from pathlib import Path

from django.conf import settings
from django.utils.crypto import constant_time_compare
from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.exceptions import APIException

logger = logging.getLogger(__name__)

ROSTER_COLUMNS = ("employeeId", "name", "department", "team", "position", "password")


class RosterUnavailable(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = _("The employee roster could not be loaded.")
    default_code = "roster_unavailable"


@dataclass(frozen=True)
class Employee:
    employee_id: str
    name: str
    department: str = ""
    team: str = ""
    position: str = ""
    password: str = field(default="", repr=False, compare=False)

    def as_dict(self) -> dict[str, str]:
        return {
            "employee_id": self.employee_id,
            "name": self.name,
            "department": self.department,
            "team": self.team,
            "position": self.position,
        }


def _row_to_employee(row: dict[str, str | None]) -> Employee | None:
    def col(key: str) -> str:
        return (row.get(key) or "").strip()

    employee_id = col("employeeId")
    if not employee_id:
        return None
    return Employee(
        employee_id=employee_id,
        name=col("name"),
        department=col("department"),
        team=col("team"),
        position=col("position"),
        password=row.get("password") or "",
    )


@lru_cache(maxsize=4)
def _read_roster(path: str, mtime_ns: int) -> tuple[Employee, ...]:
    # mtime_ns is only part of the cache key
    employees: list[Employee] = []
    seen: set[str] = set()
    with Path(path).open(encoding="utf-8-sig", newline="") as handle:
        for row in csv.DictReader(handle):
            employee = _row_to_employee(row)
            if employee is None:
                continue
            if employee.employee_id in seen:
                logger.warning(
                    "Duplicate employeeId %s in roster %s; keeping the first row",
                    employee.employee_id,
                    path,
                )
                continue
            seen.add(employee.employee_id)
            employees.append(employee)
    logger.info("Loaded %d employees from roster %s", len(employees), path)
    return tuple(employees)


class RosterProvider:
    def __init__(self, path: str | Path | None = None):
        self.path = Path(path or settings.ROSTER_PATH)

    def employees(self) -> list[Employee]:
        try:
            mtime_ns = self.path.stat().st_mtime_ns
            return list(_read_roster(str(self.path), mtime_ns))
        except (OSError, csv.Error, UnicodeDecodeError) as exc:
            logger.warning("Roster %s unavailable: %s", self.path, exc)
            raise RosterUnavailable from exc

    def get(self, employee_id: str | None) -> Employee | None:
        if not employee_id:
            return None
        wanted = str(employee_id).strip()
        for employee in self.employees():
            if employee.employee_id == wanted:
                return employee
        return None

    def search(self, keyword: str | None = None) -> list[Employee]:
        """Case-insensitive match on name or employee id."""
        needle = (keyword or "").strip().lower()
        employees = self.employees()
        if not needle:
            return employees
        return [
            e
            for e in employees
            if needle in e.name.lower() or needle in e.employee_id.lower()
        ]

    def authenticate(self, employee_id: str, password: str) -> Employee | None:
        employee = self.get(employee_id)
        if employee is None or not employee.password:
            return None
        if not constant_time_compare(employee.password, password or ""):
            return None
        return employee

    def display_name(self, employee_id: str) -> str:
        """Name for an id, degrading to the raw id when it no longer resolves."""
        employee = self.get(employee_id)
        return employee.name if employee else employee_id


def get_roster() -> RosterProvider:
    return RosterProvider()
