"""
Tests for clinic settings.

These tests cover:
- Default settings on first read (created on demand, or served in-memory when creation fails)
- Field-level merge of attendance and leave settings
- Whole-object replacement of business hours
- Clinic profile updates and their failure handling
"""
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from clinic_admin.defaults import DEFAULT_BUSINESS_HOURS, DEFAULT_CLINIC_SETTINGS, default_settings_row
from clinic_admin.errors import PersistenceError
from clinic_admin.models.clinic import Clinic
from clinic_admin.models.clinic_settings import ClinicSettings
from clinic_admin.schemas.clinic_settings import ClinicSettingsUpdate
from clinic_admin.services.clinic_settings import _insert_for, build_settings_update, group_settings

EXPECTED_ATTENDANCE = {
    "required_daily_hours": 8.0,
    "unpaid_break_minutes": 30,
    "late_threshold_minutes": 15,
    "overtime_multiplier": 1.5,
}

EXPECTED_LEAVE = {
    "annual_leave_days": 21,
    "sick_leave_days": 10,
    "maternity_leave_days": 90,
    "paternity_leave_days": 14,
    "leave_carryover_allowed": False,
}


def _fail_commit(self):
    raise OperationalError("COMMIT", {}, Exception("database unavailable"))


class TestSettingsHelpers:
    def test_group_settings_from_dict(self):
        grouped = group_settings(default_settings_row())
        assert grouped["attendance"] == EXPECTED_ATTENDANCE
        assert grouped["leave"] == EXPECTED_LEAVE
        assert grouped["business_hours"] == DEFAULT_BUSINESS_HOURS

    def test_group_settings_ignores_other_columns(self):
        row = {**default_settings_row(), "id": "x", "clinic_id": "c1", "payroll_day": 25}
        grouped = group_settings(row)
        assert set(grouped) == {"attendance", "leave", "business_hours"}
        assert "payroll_day" not in grouped["attendance"]

    def test_default_settings_row_is_a_copy(self):
        row = default_settings_row()
        row["business_hours"]["monday"]["open"] = "06:00"
        assert DEFAULT_CLINIC_SETTINGS["business_hours"]["monday"]["open"] == "08:00"

    def test_build_update_only_includes_present_fields(self):
        update = ClinicSettingsUpdate(**{"attendance": {"overtime_multiplier": 2.0}, "leave": {"sick_leave_days": 12}})
        assert build_settings_update(update) == {"overtime_multiplier": 2.0, "sick_leave_days": 12}

    def test_build_update_keeps_explicit_null(self):
        update = ClinicSettingsUpdate(**{"attendance": {"late_threshold_minutes": None}})
        assert build_settings_update(update) == {"late_threshold_minutes": None}

    def test_build_update_empty(self):
        assert build_settings_update(ClinicSettingsUpdate()) == {}
        assert build_settings_update(ClinicSettingsUpdate(**{"clinic": {"name": "X"}})) == {}

    def test_build_update_business_hours_whole_object(self):
        update = ClinicSettingsUpdate(**{"business_hours": {"sunday": {"open": "10:00", "close": "14:00", "closed": False}}})
        assert build_settings_update(update) == {
            "business_hours": {"sunday": {"open": "10:00", "close": "14:00", "closed": False}},
        }


class TestGetSettings:
    def test_unknown_clinic_returns_404(self, client):
        response = client.get("/api/clinics/missing/settings")
        assert response.status_code == 404
        assert response.json() == {"error": "Clinic not found"}

    def test_first_read_creates_default_row(self, client, db, clinic_a):
        assert db.query(ClinicSettings).count() == 0

        response = client.get("/api/clinics/c1/settings")

        assert response.status_code == 200
        body = response.json()
        assert body["clinic"] == {
            "id": "c1",
            "name": "Clinic A",
            "town": "Nairobi",
            "email": "admin@clinic-a.example",
            "phone": "+254700000001",
            "contact_name": "Alice Admin",
            "status": "active",
        }
        assert body["settings"]["attendance"] == EXPECTED_ATTENDANCE
        assert body["settings"]["leave"] == EXPECTED_LEAVE
        assert body["settings"]["business_hours"] == DEFAULT_BUSINESS_HOURS
        assert "X-Settings-Fallback" not in response.headers

        db.expire_all()
        assert db.query(ClinicSettings).filter(ClinicSettings.clinic_id == "c1").count() == 1

    def test_second_read_reuses_row(self, client, db, clinic_a):
        client.get("/api/clinics/c1/settings")
        client.get("/api/clinics/c1/settings")

        db.expire_all()
        assert db.query(ClinicSettings).count() == 1

    def test_creation_failure_serves_defaults_without_persisting(self, client, db, clinic_a, monkeypatch):
        monkeypatch.setattr(Session, "commit", _fail_commit)

        response = client.get("/api/clinics/c1/settings")

        assert response.status_code == 200
        assert response.headers["X-Settings-Fallback"] == "true"
        body = response.json()
        assert body["settings"]["attendance"] == EXPECTED_ATTENDANCE
        assert body["settings"]["leave"] == EXPECTED_LEAVE
        assert body["settings"]["business_hours"] == DEFAULT_BUSINESS_HOURS

        monkeypatch.undo()
        db.expire_all()
        assert db.query(ClinicSettings).count() == 0

    def test_other_clinic_settings_are_not_visible(self, client, db, clinic_a, clinic_b):
        client.patch("/api/clinics/c2/settings", json={"leave": {"annual_leave_days": 30}})

        response = client.get("/api/clinics/c1/settings")

        assert response.json()["settings"]["leave"]["annual_leave_days"] == 21


class TestUpdateSettings:
    def test_partial_update_keeps_other_fields(self, client, clinic_a):
        client.patch("/api/clinics/c1/settings", json={"attendance": {"late_threshold_minutes": 20}})

        response = client.patch("/api/clinics/c1/settings", json={"attendance": {"overtime_multiplier": 2.0}})
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Settings updated successfully"}

        attendance = client.get("/api/clinics/c1/settings").json()["settings"]["attendance"]
        assert attendance["overtime_multiplier"] == 2.0
        assert attendance["late_threshold_minutes"] == 20
        assert attendance["required_daily_hours"] == 8.0
        assert attendance["unpaid_break_minutes"] == 30

    def test_update_before_first_read_inserts_with_defaults(self, client, db, clinic_a):
        client.patch("/api/clinics/c1/settings", json={"leave": {"leave_carryover_allowed": True}})

        settings = client.get("/api/clinics/c1/settings").json()["settings"]
        assert settings["leave"] == {**EXPECTED_LEAVE, "leave_carryover_allowed": True}
        assert settings["attendance"] == EXPECTED_ATTENDANCE
        assert settings["business_hours"] == DEFAULT_BUSINESS_HOURS

        db.expire_all()
        assert db.query(ClinicSettings).count() == 1

    def test_business_hours_replace_whole_object(self, client, clinic_a):
        client.get("/api/clinics/c1/settings")

        client.patch("/api/clinics/c1/settings", json={
            "business_hours": {"sunday": {"open": "10:00", "close": "14:00", "closed": False}},
        })

        business_hours = client.get("/api/clinics/c1/settings").json()["settings"]["business_hours"]
        assert business_hours == {"sunday": {"open": "10:00", "close": "14:00", "closed": False}}

    def test_business_hours_update_leaves_scalars_alone(self, client, clinic_a):
        client.patch("/api/clinics/c1/settings", json={"leave": {"annual_leave_days": 25}})
        client.patch("/api/clinics/c1/settings", json={
            "business_hours": {"monday": {"open": "07:00", "close": "15:00", "closed": False}},
        })

        settings = client.get("/api/clinics/c1/settings").json()["settings"]
        assert settings["leave"]["annual_leave_days"] == 25

    def test_empty_update_is_a_no_op(self, client, db, clinic_a):
        response = client.patch("/api/clinics/c1/settings", json={})

        assert response.status_code == 200
        assert response.json()["success"] is True
        db.expire_all()
        assert db.query(ClinicSettings).count() == 0

    def test_clinic_profile_update(self, client, db, clinic_a):
        before = clinic_a.updated_at

        response = client.patch("/api/clinics/c1/settings", json={
            "clinic": {"name": "Clinic A Renamed", "town": "Kisumu"},
        })

        assert response.status_code == 200
        db.expire_all()
        clinic = db.query(Clinic).filter(Clinic.id == "c1").first()
        assert clinic.name == "Clinic A Renamed"
        assert clinic.town == "Kisumu"
        assert clinic.phone == "+254700000001"
        assert clinic.contact_name == "Alice Admin"
        assert clinic.updated_at >= before
        assert db.query(ClinicSettings).count() == 0

    def test_clinic_email_and_status_are_not_editable(self, client, db, clinic_a):
        client.patch("/api/clinics/c1/settings", json={
            "clinic": {"name": "New Name", "email": "hijack@example.com", "status": "suspended"},
        })

        db.expire_all()
        clinic = db.query(Clinic).filter(Clinic.id == "c1").first()
        assert clinic.name == "New Name"
        assert clinic.email == "admin@clinic-a.example"
        assert clinic.status == "active"

    def test_clinic_update_failure_aborts_before_settings(self, client, db, clinic_a, monkeypatch):
        monkeypatch.setattr(Session, "commit", _fail_commit)

        response = client.patch("/api/clinics/c1/settings", json={
            "clinic": {"name": "Never Saved"},
            "attendance": {"late_threshold_minutes": 5},
        })

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to update clinic profile"}

        monkeypatch.undo()
        db.expire_all()
        assert db.query(Clinic).filter(Clinic.id == "c1").first().name == "Clinic A"
        assert db.query(ClinicSettings).count() == 0

    def test_settings_write_failure_returns_500(self, client, clinic_a, monkeypatch):
        def failing_execute(self, *args, **kwargs):
            raise OperationalError("INSERT INTO clinic_settings", {}, Exception("database unavailable"))

        monkeypatch.setattr(Session, "execute", failing_execute)

        response = client.patch("/api/clinics/c1/settings", json={"attendance": {"late_threshold_minutes": 5}})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to update settings"}

    @pytest.mark.parametrize("payload", [
        {"attendance": {"required_daily_hours": 7.5}},
        {"leave": {"paternity_leave_days": 21}},
        {"attendance": {"unpaid_break_minutes": 45}, "leave": {"sick_leave_days": 14}},
    ])
    def test_only_named_fields_change(self, client, clinic_a, payload):
        client.get("/api/clinics/c1/settings")

        client.patch("/api/clinics/c1/settings", json=payload)

        settings = client.get("/api/clinics/c1/settings").json()["settings"]
        expected = {"attendance": dict(EXPECTED_ATTENDANCE), "leave": dict(EXPECTED_LEAVE)}
        for group, values in payload.items():
            expected[group].update(values)
        assert settings["attendance"] == expected["attendance"]
        assert settings["leave"] == expected["leave"]
        assert settings["business_hours"] == DEFAULT_BUSINESS_HOURS

    def test_business_hours_stored_as_sent(self, client, clinic_a):
        business_hours = {
            "sunday": {"open": "10:00", "close": "14:00"},
            "monday": {"open": "08:00", "close": "17:00", "closed": False, "note": "staff meeting"},
            "tuesday": None,
        }

        client.patch("/api/clinics/c1/settings", json={"business_hours": business_hours})

        stored = client.get("/api/clinics/c1/settings").json()["settings"]["business_hours"]
        assert stored == business_hours
        assert "closed" not in stored["sunday"]


class TestSettingsValidation:
    def test_badly_typed_field_returns_400(self, client, clinic_a):
        response = client.patch("/api/clinics/c1/settings", json={"attendance": {"unpaid_break_minutes": "thirty"}})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid value for attendance.unpaid_break_minutes"}

    def test_non_object_business_hours_returns_400(self, client, db, clinic_a):
        response = client.patch("/api/clinics/c1/settings", json={"business_hours": "weekdays"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid value for business_hours"}
        db.expire_all()
        assert db.query(ClinicSettings).count() == 0

    def test_missing_body_returns_400(self, client, clinic_a):
        response = client.patch("/api/clinics/c1/settings")

        assert response.status_code == 400
        assert set(response.json()) == {"error"}

    def test_unsupported_dialect_is_a_settings_failure(self):
        db = MagicMock()
        db.get_bind.return_value.dialect.name = "mysql"

        with pytest.raises(PersistenceError, match="Failed to update settings"):
            _insert_for(db)
