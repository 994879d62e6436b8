from .clinic import Clinic, ClinicStatus
from .document import ClinicDocument, DocumentCategory
from .clinic_settings import ClinicSettings

__all__ = [
    "Clinic",
    "ClinicStatus",
    "ClinicDocument",
    "DocumentCategory",
    "ClinicSettings",
]
