from .document import (
    DocumentUploadRequest,
    DocumentResponse,
    DocumentEnvelope,
    DocumentListEnvelope,
    DownloadUrlResponse,
    MessageResponse,
)
from .clinic_settings import (
    ClinicProfile,
    AttendanceSettings,
    LeaveSettings,
    GroupedSettings,
    ClinicSettingsResponse,
    ClinicProfileUpdate,
    ClinicSettingsUpdate,
    SettingsMessageResponse,
)

__all__ = [
    "DocumentUploadRequest",
    "DocumentResponse",
    "DocumentEnvelope",
    "DocumentListEnvelope",
    "DownloadUrlResponse",
    "MessageResponse",
    "ClinicProfile",
    "AttendanceSettings",
    "LeaveSettings",
    "GroupedSettings",
    "ClinicSettingsResponse",
    "ClinicProfileUpdate",
    "ClinicSettingsUpdate",
    "SettingsMessageResponse",
]
