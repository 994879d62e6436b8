import uuid
from datetime import datetime

from sqlalchemy import Column, String, DateTime, Integer, Numeric, Boolean, ForeignKey, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from ..database import Base
from ..defaults import DEFAULT_CLINIC_SETTINGS, default_business_hours


class ClinicSettings(Base):
    __tablename__ = "clinic_settings"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    clinic_id = Column(String(36), ForeignKey("clinics.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)

    # Attendance
    required_daily_hours = Column(Numeric(4, 2, asdecimal=False), default=DEFAULT_CLINIC_SETTINGS["required_daily_hours"])
    unpaid_break_minutes = Column(Integer, default=DEFAULT_CLINIC_SETTINGS["unpaid_break_minutes"])
    late_threshold_minutes = Column(Integer, default=DEFAULT_CLINIC_SETTINGS["late_threshold_minutes"])
    overtime_multiplier = Column(Numeric(3, 2, asdecimal=False), default=DEFAULT_CLINIC_SETTINGS["overtime_multiplier"])

    # Leave policy
    annual_leave_days = Column(Integer, default=DEFAULT_CLINIC_SETTINGS["annual_leave_days"])
    sick_leave_days = Column(Integer, default=DEFAULT_CLINIC_SETTINGS["sick_leave_days"])
    maternity_leave_days = Column(Integer, default=DEFAULT_CLINIC_SETTINGS["maternity_leave_days"])
    paternity_leave_days = Column(Integer, default=DEFAULT_CLINIC_SETTINGS["paternity_leave_days"])
    leave_carryover_allowed = Column(Boolean, default=DEFAULT_CLINIC_SETTINGS["leave_carryover_allowed"])

    business_hours = Column(JSON().with_variant(JSONB(), "postgresql"), default=default_business_hours)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    clinic = relationship("Clinic", back_populates="settings")
