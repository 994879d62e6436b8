"""Default clinic settings.

Single source for the ORM column defaults, the migration server defaults
and the in-memory fallback served when a settings row cannot be created.
Callers get copies through ``default_business_hours()`` and
``default_settings_row()``; the constants themselves are never mutated.
"""
import copy
from typing import Any, Dict

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

DEFAULT_BUSINESS_HOURS: Dict[str, Dict[str, Any]] = {
    "monday": {"open": "08:00", "close": "17:00", "closed": False},
    "tuesday": {"open": "08:00", "close": "17:00", "closed": False},
    "wednesday": {"open": "08:00", "close": "17:00", "closed": False},
    "thursday": {"open": "08:00", "close": "17:00", "closed": False},
    "friday": {"open": "08:00", "close": "17:00", "closed": False},
    "saturday": {"open": "09:00", "close": "13:00", "closed": False},
    "sunday": {"open": None, "close": None, "closed": True},
}

ATTENDANCE_FIELDS = (
    "required_daily_hours",
    "unpaid_break_minutes",
    "late_threshold_minutes",
    "overtime_multiplier",
)

LEAVE_FIELDS = (
    "annual_leave_days",
    "sick_leave_days",
    "maternity_leave_days",
    "paternity_leave_days",
    "leave_carryover_allowed",
)

DEFAULT_CLINIC_SETTINGS: Dict[str, Any] = {
    # attendance
    "required_daily_hours": 8.00,
    "unpaid_break_minutes": 30,
    "late_threshold_minutes": 15,
    "overtime_multiplier": 1.50,
    # leave
    "annual_leave_days": 21,
    "sick_leave_days": 10,
    "maternity_leave_days": 90,
    "paternity_leave_days": 14,
    "leave_carryover_allowed": False,
    "business_hours": DEFAULT_BUSINESS_HOURS,
}


def default_business_hours() -> Dict[str, Dict[str, Any]]:
    return copy.deepcopy(DEFAULT_BUSINESS_HOURS)


def default_settings_row() -> Dict[str, Any]:
    return copy.deepcopy(DEFAULT_CLINIC_SETTINGS)
