import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from clinic_admin.main import app
from clinic_admin.database import Base, get_db
from clinic_admin.models.clinic import Clinic
from clinic_admin.storage import InMemoryObjectStore, get_object_store

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def store():
    return InMemoryObjectStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_object_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def clinic_a(db):
    clinic = Clinic(
        id="c1",
        name="Clinic A",
        town="Nairobi",
        email="admin@clinic-a.example",
        phone="+254700000001",
        contact_name="Alice Admin",
    )
    db.add(clinic)
    db.commit()
    db.refresh(clinic)
    return clinic


@pytest.fixture
def clinic_b(db):
    clinic = Clinic(
        id="c2",
        name="Clinic B",
        town="Mombasa",
        email="admin@clinic-b.example",
        phone="+254700000002",
        contact_name="Bob Admin",
    )
    db.add(clinic)
    db.commit()
    db.refresh(clinic)
    return clinic
