from collections.abc import Generator
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from biomarker_trends.config import settings
from biomarker_trends.database import Base, get_db
from biomarker_trends.main import app
from biomarker_trends.schemas.lab_result import LabResult


@pytest.fixture()
def db_session() -> Generator:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db_session, monkeypatch) -> Generator[TestClient, None, None]:
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    # Tests use an in-memory DB via dependency override; skip the Alembic head check.
    monkeypatch.setattr(settings, "check_schema_on_startup", False)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def make_result():
    def _make(test_name="Hemoglobin", value="14.0", report_date=date(2025, 1, 1), **overrides) -> LabResult:
        fields = {
            "test_name": test_name,
            "value": value,
            "unit": "g/dL",
            "reference_range": "12.0-15.5",
            "is_abnormal": False,
            "report_date": report_date,
            "category": "Hematology",
        }
        fields.update(overrides)
        return LabResult(**fields)

    return _make
