"""Translate search/filter query parameters into storage predicates.

Every builder validates its raw inputs and raises ``QueryParameterError``
before any storage access. A predicate knows how to render itself as a Cosmos
DB SQL ``WHERE`` fragment and how to evaluate itself against a document held
in memory, so both storage backends share one definition of each filter.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Protocol

from employee_api.core.errors import QueryParameterError
from employee_api.services.validator import POSITIONS, parse_date

MIN_BIRTH_YEAR = 1900


class Predicate(Protocol):
    def where_clause(self) -> tuple[str, list[dict[str, Any]]]: ...

    def matches(self, document: dict[str, Any]) -> bool: ...


@dataclass(frozen=True)
class NameContains:
    value: str

    def where_clause(self) -> tuple[str, list[dict[str, Any]]]:
        return "CONTAINS(c.name, @name, true)", [{"name": "@name", "value": self.value}]

    def matches(self, document: dict[str, Any]) -> bool:
        name = document.get("name") or ""
        return self.value.casefold() in name.casefold()


@dataclass(frozen=True)
class FieldEquals:
    # Rendered into SQL as a property path, so only fixed names are ever used here.
    field: str
    value: str

    def where_clause(self) -> tuple[str, list[dict[str, Any]]]:
        return f"c.{self.field} = @{self.field}", [{"name": f"@{self.field}", "value": self.value}]

    def matches(self, document: dict[str, Any]) -> bool:
        return document.get(self.field) == self.value


@dataclass(frozen=True)
class BirthDateParts:
    month: int | None = None
    year: int | None = None

    def where_clause(self) -> tuple[str, list[dict[str, Any]]]:
        clauses: list[str] = ["IS_DEFINED(c.dateOfBirth)"]
        params: list[dict[str, Any]] = []
        if self.month is not None:
            clauses.append('DateTimePart("mm", c.dateOfBirth) = @month')
            params.append({"name": "@month", "value": self.month})
        if self.year is not None:
            clauses.append('DateTimePart("yyyy", c.dateOfBirth) = @year')
            params.append({"name": "@year", "value": self.year})
        return " AND ".join(clauses), params

    def matches(self, document: dict[str, Any]) -> bool:
        raw = document.get("dateOfBirth")
        if not raw:
            return False
        date_of_birth = parse_date(raw)
        if self.month is not None and date_of_birth.month != self.month:
            return False
        if self.year is not None and date_of_birth.year != self.year:
            return False
        return True


def _is_missing(value: str | None) -> bool:
    return value is None or not value.strip()


def build_name_query(name: str | None) -> NameContains:
    if _is_missing(name):
        raise QueryParameterError("Name query parameter is required")
    return NameContains(name.strip())


def build_department_query(department: str | None) -> FieldEquals:
    if _is_missing(department):
        raise QueryParameterError("Department query parameter is required")
    return FieldEquals("department", department.strip())


def build_position_query(position: str | None) -> FieldEquals:
    if _is_missing(position):
        raise QueryParameterError("Position query parameter is required")
    if position not in POSITIONS:
        raise QueryParameterError("Position must be Staff or Manager")
    return FieldEquals("position", position)


def _parse_int(value: str) -> int | None:
    try:
        return int(value.strip())
    except ValueError:
        return None


def build_date_of_birth_query(
    month: str | None,
    year: str | None,
    *,
    today: date,
) -> BirthDateParts:
    if _is_missing(month) and _is_missing(year):
        raise QueryParameterError("At least one of month or year is required")

    month_value: int | None = None
    if not _is_missing(month):
        month_value = _parse_int(month)
        if month_value is None or not 1 <= month_value <= 12:
            raise QueryParameterError("Month must be between 1 and 12")

    year_value: int | None = None
    if not _is_missing(year):
        year_value = _parse_int(year)
        if year_value is None or not MIN_BIRTH_YEAR <= year_value <= today.year:
            raise QueryParameterError("Year must be between 1900 and current year")

    return BirthDateParts(month=month_value, year=year_value)
