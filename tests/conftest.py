"""Pytest fixtures for testing"""

import os
import uuid
from datetime import datetime

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from influencer_tax.api.main import create_app
from influencer_tax.infrastructure.database.models import Base
from influencer_tax.infrastructure.database.session import get_db
from influencer_tax.domain.models import Influencer, TaxAssessment


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_influencer(name: str = "Kwame Mensah", **overrides) -> Influencer:
    """Build an influencer with sensible defaults for aggregation tests"""
    values = {
        "name": name,
        "platform": "youtube",
        "handle": name.lower().replace(" ", ""),
    }
    values.update(overrides)
    return Influencer(**values)


def make_assessment(status: str = "pending", **overrides) -> TaxAssessment:
    values = {
        "influencer_id": uuid.uuid4(),
        "assessment_period_start": datetime(2025, 1, 1),
        "assessment_period_end": datetime(2025, 12, 31),
        "taxable_income": 100000,
        "tax_rate": 0.25,
        "tax_amount": 25000,
        "status": status,
    }
    values.update(overrides)
    return TaxAssessment(**values)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def sample_influencers() -> list[Influencer]:
    """A(120k, compliant), B(80k, pending), C(no revenue, non-compliant)"""
    return [
        make_influencer("Ama Serwaa", estimated_annual_revenue=120000, tax_liability=30000,
                        compliance_status="compliant", region="Greater Accra"),
        make_influencer("Kofi Boateng", platform="tiktok", estimated_annual_revenue=80000,
                        tax_liability=20000, compliance_status="pending", region="Ashanti"),
        make_influencer("Esi Owusu", compliance_status="non-compliant"),
    ]
