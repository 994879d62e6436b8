from .documents import DocumentService
from .clinic_settings import ClinicSettingsService
from .compensation import with_compensation

__all__ = ["DocumentService", "ClinicSettingsService", "with_compensation"]
