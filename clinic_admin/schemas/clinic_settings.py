from typing import Any, Dict, Optional

from pydantic import BaseModel


class ClinicProfile(BaseModel):
    id: str
    name: str
    town: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    contact_name: Optional[str] = None
    status: str

    class Config:
        from_attributes = True


class AttendanceSettings(BaseModel):
    required_daily_hours: Optional[float] = None
    unpaid_break_minutes: Optional[int] = None
    late_threshold_minutes: Optional[int] = None
    overtime_multiplier: Optional[float] = None


class LeaveSettings(BaseModel):
    annual_leave_days: Optional[int] = None
    sick_leave_days: Optional[int] = None
    maternity_leave_days: Optional[int] = None
    paternity_leave_days: Optional[int] = None
    leave_carryover_allowed: Optional[bool] = None


class GroupedSettings(BaseModel):
    attendance: AttendanceSettings
    leave: LeaveSettings
    business_hours: Optional[Dict[str, Any]] = None


class ClinicSettingsResponse(BaseModel):
    clinic: ClinicProfile
    settings: GroupedSettings


class ClinicProfileUpdate(BaseModel):
    # email and status are not editable from the settings screen
    name: Optional[str] = None
    town: Optional[str] = None
    phone: Optional[str] = None
    contact_name: Optional[str] = None


class ClinicSettingsUpdate(BaseModel):
    """PATCH body. Only keys present in the JSON are applied."""
    clinic: Optional[ClinicProfileUpdate] = None
    attendance: Optional[AttendanceSettings] = None
    leave: Optional[LeaveSettings] = None
    # Stored as sent; replaces the whole stored object
    business_hours: Optional[Dict[str, Any]] = None


class SettingsMessageResponse(BaseModel):
    success: bool = True
    message: str
