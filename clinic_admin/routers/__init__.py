from .documents import router as documents_router
from .clinic_settings import router as clinic_settings_router
from .storage import router as storage_router

__all__ = ["documents_router", "clinic_settings_router", "storage_router"]
