import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import Column, String, DateTime, BigInteger, ForeignKey
from sqlalchemy.orm import relationship

from ..database import Base


class DocumentCategory(str, Enum):
    LICENSE = "license"
    REGISTRATION = "registration"
    INSURANCE = "insurance"
    IDENTITY = "identity"
    CONTRACT = "contract"
    POLICY = "policy"
    CERTIFICATE = "certificate"
    OTHER = "other"


DEFAULT_CONTENT_TYPE = "application/octet-stream"
DEFAULT_UPLOADER_NAME = "Unknown"


class ClinicDocument(Base):
    __tablename__ = "clinic_documents"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    clinic_id = Column(String(36), ForeignKey("clinics.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    file_name = Column(String(255), nullable=False)
    file_path = Column(String(500), nullable=False, unique=True)
    file_size = Column(BigInteger, nullable=False)
    file_type = Column(String(100), nullable=False, default=DEFAULT_CONTENT_TYPE)
    category = Column(String(50), nullable=False, default=DocumentCategory.OTHER.value, index=True)
    uploaded_by = Column(String(36), nullable=True)
    uploaded_by_name = Column(String(255), nullable=False, default=DEFAULT_UPLOADER_NAME)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    clinic = relationship("Clinic", back_populates="documents")
