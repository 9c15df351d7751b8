"""Field-level validation of candidate employee records.

``validate_employee`` is a pure function over its input and ``today``: it never
raises on bad data and never touches storage. Every field is checked
independently so a single call reports every violation at once.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping
from datetime import date, datetime
from typing import Any

from employee_api.models.employee import FieldError, Gender, Position, ValidationResult
from employee_api.services.age import MAX_AGE, MIN_AGE, derive_age

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^0[0-9]{9}$")

GENDERS = tuple(g.value for g in Gender)
POSITIONS = tuple(p.value for p in Position)

REQUIRED_FIELDS = (
    "name",
    "email",
    "position",
    "department",
    "salary",
    "gender",
    "dateOfBirth",
    "phone",
)

_LABELS: dict[str, str] = {
    "name": "Name",
    "email": "Email",
    "position": "Position",
    "department": "Department",
    "salary": "Salary",
    "gender": "Gender",
    "age": "Age",
    "dateOfBirth": "Date of Birth",
    "phone": "Phone number",
}


class _RuleViolation(Exception):
    pass


def _text(field: str, value: Any) -> str:
    if not isinstance(value, str):
        raise _RuleViolation(f"{_LABELS[field]} must be a string")
    return value.strip()


def _plain_text(field: str) -> Callable[[Any, date], str]:
    def check(value: Any, today: date) -> str:
        return _text(field, value)

    return check


def _check_email(value: Any, today: date) -> str:
    email = _text("email", value)
    if not EMAIL_PATTERN.match(email):
        raise _RuleViolation("Please enter a valid email")
    return email


def _check_phone(value: Any, today: date) -> str:
    phone = _text("phone", value)
    if not PHONE_PATTERN.match(phone):
        raise _RuleViolation("Phone number must be 10 digits and start with 0")
    return phone


def _check_position(value: Any, today: date) -> str:
    position = _text("position", value)
    if position not in POSITIONS:
        raise _RuleViolation("Position must be Staff or Manager")
    return position


def _check_gender(value: Any, today: date) -> str:
    gender = _text("gender", value)
    if gender not in GENDERS:
        raise _RuleViolation("Gender must be Male, Female, or Other")
    return gender


def _to_number(field: str, value: Any) -> float:
    if isinstance(value, bool):
        raise _RuleViolation(f"{_LABELS[field]} must be a number")
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError as err:
            raise _RuleViolation(f"{_LABELS[field]} must be a number") from err
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError as err:
            raise _RuleViolation(f"{_LABELS[field]} must be a number") from err
    else:
        raise _RuleViolation(f"{_LABELS[field]} must be a number")
    if not math.isfinite(number):
        raise _RuleViolation(f"{_LABELS[field]} must be a number")
    return number


def _check_salary(value: Any, today: date) -> float:
    salary = _to_number("salary", value)
    if salary < 0:
        raise _RuleViolation("Salary cannot be negative")
    return salary


def _check_age_range(age: int) -> int:
    if age < MIN_AGE:
        raise _RuleViolation(f"Age must be at least {MIN_AGE}")
    if age > MAX_AGE:
        raise _RuleViolation(f"Age must be at most {MAX_AGE}")
    return age


def _check_age(value: Any, today: date) -> int:
    age = _to_number("age", value)
    if age != int(age):
        raise _RuleViolation("Age must be a whole number")
    return _check_age_range(int(age))


def parse_date(value: Any) -> date:
    """Accept a ``date``, a ``datetime`` or an ISO 8601 date/datetime string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).date()
    raise ValueError(f"unsupported date value: {value!r}")


def _check_date_of_birth(value: Any, today: date) -> date:
    try:
        date_of_birth = parse_date(value)
    except ValueError as err:
        raise _RuleViolation("Date of Birth must be a valid date") from err
    if date_of_birth > today:
        raise _RuleViolation("Date of Birth must be in the past or today")
    return date_of_birth


_RULES: dict[str, Callable[[Any, date], Any]] = {
    "name": _plain_text("name"),
    "email": _check_email,
    "position": _check_position,
    "department": _plain_text("department"),
    "salary": _check_salary,
    "gender": _check_gender,
    "age": _check_age,
    "dateOfBirth": _check_date_of_birth,
    "phone": _check_phone,
}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_employee(
    candidate: Mapping[str, Any],
    *,
    partial: bool = False,
    today: date | None = None,
) -> ValidationResult:
    """Validate and normalize a candidate record.

    With ``partial`` set (updates) only the supplied fields are checked. The
    normalized record never carries ``age``: it is derived, and a supplied
    value is only range-checked. The age implied by a valid ``dateOfBirth`` is
    range-checked as well.
    """
    today = today or date.today()
    record: dict[str, Any] = {}
    errors: list[FieldError] = []

    for field, rule in _RULES.items():
        if field not in candidate:
            if field in REQUIRED_FIELDS and not partial:
                errors.append(FieldError(field=field, message=f"{_LABELS[field]} is required"))
            continue

        value = candidate[field]
        if _is_blank(value):
            if field in REQUIRED_FIELDS:
                errors.append(FieldError(field=field, message=f"{_LABELS[field]} is required"))
            continue

        try:
            record[field] = rule(value, today)
        except _RuleViolation as e:
            errors.append(FieldError(field=field, message=str(e)))

    record.pop("age", None)

    date_of_birth = record.get("dateOfBirth")
    if date_of_birth is not None and not any(e.field == "age" for e in errors):
        try:
            _check_age_range(derive_age(date_of_birth, today))
        except _RuleViolation as e:
            errors.append(FieldError(field="age", message=str(e)))

    return ValidationResult(record=record, errors=errors)
