import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from ..database import Base


class ClinicStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class Clinic(Base):
    __tablename__ = "clinics"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    town = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True, index=True)
    phone = Column(String(50), nullable=True)
    contact_name = Column(String(255), nullable=True)
    status = Column(String(50), nullable=False, default=ClinicStatus.ACTIVE.value)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    documents = relationship("ClinicDocument", back_populates="clinic", cascade="all, delete-orphan")
    settings = relationship("ClinicSettings", back_populates="clinic", uselist=False, cascade="all, delete-orphan")
