import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..defaults import ATTENDANCE_FIELDS, LEAVE_FIELDS, default_settings_row
from ..errors import NotFoundError, PersistenceError, StoreError
from ..models.clinic import Clinic
from ..models.clinic_settings import ClinicSettings
from ..schemas.clinic_settings import ClinicSettingsUpdate

logger = logging.getLogger(__name__)

CLINIC_PROFILE_FIELDS = ("id", "name", "town", "email", "phone", "contact_name", "status")


@dataclass
class SettingsSnapshot:
    clinic: Dict[str, Any]
    settings: Dict[str, Any]
    is_fallback: bool = False


def group_settings(row: Any) -> Dict[str, Any]:
    """Reshape a flat settings row (ORM object or dict) into attendance/leave/business_hours."""
    def field(name: str) -> Any:
        if isinstance(row, dict):
            return row.get(name)
        return getattr(row, name)

    return {
        "attendance": {name: field(name) for name in ATTENDANCE_FIELDS},
        "leave": {name: field(name) for name in LEAVE_FIELDS},
        "business_hours": field("business_hours"),
    }


def build_settings_update(update: ClinicSettingsUpdate) -> Dict[str, Any]:
    """Collect only the settings fields present in the request body.

    Scalars merge field by field; ``business_hours`` replaces the stored
    object as a whole.
    """
    provided = update.model_dump(exclude_unset=True)
    settings_update: Dict[str, Any] = {}

    for group, fields in (("attendance", ATTENDANCE_FIELDS), ("leave", LEAVE_FIELDS)):
        group_values = provided.get(group)
        if not group_values:
            continue
        for name in fields:
            if name in group_values:
                settings_update[name] = group_values[name]

    if update.business_hours is not None:
        settings_update["business_hours"] = update.business_hours

    return settings_update


def _insert_for(db: Session):
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert
    if dialect == "sqlite":
        return sqlite.insert
    logger.error(f"Settings upsert is not supported on {dialect}")
    raise PersistenceError("Failed to update settings")


class ClinicSettingsService:
    def __init__(self, db: Session):
        self.db = db

    def _get_clinic(self, clinic_id: str) -> Clinic:
        try:
            clinic = self.db.query(Clinic).filter(Clinic.id == clinic_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load clinic {clinic_id}: {e}")
            raise StoreError(str(e)) from e
        if not clinic:
            raise NotFoundError("Clinic not found")
        return clinic

    def _create_default_row(self, clinic_id: str) -> Optional[ClinicSettings]:
        try:
            row = ClinicSettings(clinic_id=clinic_id)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            logger.info(f"Created default settings for clinic {clinic_id}")
            return row
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning(f"Failed to create default settings for clinic {clinic_id}, serving in-memory defaults: {e}")
            return None

    def get_settings(self, clinic_id: str) -> SettingsSnapshot:
        clinic = self._get_clinic(clinic_id)
        profile = {name: getattr(clinic, name) for name in CLINIC_PROFILE_FIELDS}

        try:
            row = self.db.query(ClinicSettings).filter(ClinicSettings.clinic_id == clinic_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load settings for clinic {clinic_id}: {e}")
            raise StoreError(str(e)) from e

        if row is None:
            row = self._create_default_row(clinic_id)

        if row is None:
            return SettingsSnapshot(clinic=profile, settings=group_settings(default_settings_row()), is_fallback=True)

        return SettingsSnapshot(clinic=profile, settings=group_settings(row))

    def update_settings(self, clinic_id: str, update: ClinicSettingsUpdate) -> None:
        if update.clinic is not None:
            clinic_values = update.clinic.model_dump(exclude_unset=True)
            clinic_values["updated_at"] = datetime.utcnow()
            try:
                self.db.query(Clinic).filter(Clinic.id == clinic_id).update(clinic_values, synchronize_session=False)
                self.db.commit()
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"Clinic update error for {clinic_id}: {e}")
                raise PersistenceError("Failed to update clinic profile") from e

        settings_update = build_settings_update(update)
        if not settings_update:
            logger.debug(f"No settings fields supplied for clinic {clinic_id}; skipping settings write")
            return

        settings_update["updated_at"] = datetime.utcnow()
        insert = _insert_for(self.db)
        stmt = insert(ClinicSettings).values(clinic_id=clinic_id, **settings_update)
        stmt = stmt.on_conflict_do_update(
            index_elements=[ClinicSettings.clinic_id],
            set_={name: stmt.excluded[name] for name in settings_update},
        )
        try:
            self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Settings update error for {clinic_id}: {e}")
            raise PersistenceError("Failed to update settings") from e

        logger.info(f"Updated settings for clinic {clinic_id}: {sorted(k for k in settings_update if k != 'updated_at')}")
