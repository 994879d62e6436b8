"""Clinic settings endpoints.

Mounted under ``/api/clinics``. Errors are rendered as ``{"error": msg}``.
"""
import logging

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..database import get_db
from ..errors import NotFoundError, PersistenceError, ServiceError
from ..schemas.clinic_settings import ClinicSettingsResponse, ClinicSettingsUpdate, SettingsMessageResponse
from ..services.clinic_settings import ClinicSettingsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/clinics", tags=["clinic-settings"])

FALLBACK_HEADER = "X-Settings-Fallback"


def _error_response(error: ServiceError) -> JSONResponse:
    # Only not-found and the two named update failures are shown verbatim
    if isinstance(error, (NotFoundError, PersistenceError)):
        message = error.message
    else:
        message = "Server error"
    return JSONResponse(status_code=error.status_code, content={"error": message})


@router.get("/{clinic_id}/settings", response_model=ClinicSettingsResponse)
def get_clinic_settings(
    clinic_id: str,
    response: Response,
    db: Session = Depends(get_db),
):
    """Clinic profile plus attendance, leave and business-hours settings.

    Creates the settings row on first access. If that fails the defaults are
    returned without being stored and the response is flagged with the
    ``X-Settings-Fallback`` header.
    """
    try:
        snapshot = ClinicSettingsService(db).get_settings(clinic_id)
    except ServiceError as e:
        if not isinstance(e, NotFoundError):
            logger.error(f"Get settings error: {e}")
        return _error_response(e)

    if snapshot.is_fallback:
        response.headers[FALLBACK_HEADER] = "true"
    return ClinicSettingsResponse(clinic=snapshot.clinic, settings=snapshot.settings)


@router.patch("/{clinic_id}/settings", response_model=SettingsMessageResponse)
def update_clinic_settings(
    clinic_id: str,
    update: ClinicSettingsUpdate,
    db: Session = Depends(get_db),
):
    """Apply a partial update. Omitted fields keep their stored values."""
    try:
        ClinicSettingsService(db).update_settings(clinic_id, update)
    except ServiceError as e:
        return _error_response(e)
    return SettingsMessageResponse(message="Settings updated successfully")
