import sys

from .database import SessionLocal
from .models.clinic import Clinic, ClinicStatus
from .models.clinic_settings import ClinicSettings

DEMO_CLINIC_NAME = "Demo Clinic"


def seed_demo_clinic():
    db = SessionLocal()
    try:
        clinic = db.query(Clinic).filter(Clinic.name == DEMO_CLINIC_NAME).first()
        if clinic:
            print(f"Demo Clinic already exists: {clinic.name} (id: {clinic.id})")
        else:
            clinic = Clinic(
                name=DEMO_CLINIC_NAME,
                town="Nairobi",
                email="admin@demo-clinic.example",
                phone="+254700000000",
                contact_name="Demo Admin",
                status=ClinicStatus.ACTIVE.value,
            )
            db.add(clinic)
            db.commit()
            db.refresh(clinic)
            print(f"Created Demo Clinic: {clinic.name} (id: {clinic.id})")

        # the database trigger does this on PostgreSQL; other engines need it done here
        settings = db.query(ClinicSettings).filter(ClinicSettings.clinic_id == clinic.id).first()
        if not settings:
            db.add(ClinicSettings(clinic_id=clinic.id))
            db.commit()
            print(f"Created default settings for {clinic.name}")
        return clinic
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] != "seed":
        print(f"Unknown command: {sys.argv[1]}")
        print("Usage: python -m clinic_admin.cli [seed]")
        sys.exit(1)
    seed_demo_clinic()
