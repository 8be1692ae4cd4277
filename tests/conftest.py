"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from loan_gateway.api.main import create_app
from loan_gateway.config import settings
from loan_gateway.domain.grade_cache import GradeCache
from loan_gateway.domain.grade_resolver import CrimeGradeResolver
from loan_gateway.domain.models import LoanApplication
from loan_gateway.infrastructure.database.models import Base
from loan_gateway.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


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
def app(db: Session) -> FastAPI:
    """FastAPI app bound to the test database, with a fresh grade cache"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create FastAPI test client with test database"""
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"x-api-key": settings.api_key}


@pytest.fixture
def resolver() -> CrimeGradeResolver:
    """Simulation-only resolver with its own empty cache"""
    return CrimeGradeResolver(GradeCache())


@pytest.fixture
def loan_payload() -> dict:
    """Application that passes every check"""
    return {
        "applicantName": "John Doe",
        "propertyAddress": "558 Carlisle Way Sunnyvale CA 94087",
        "creditScore": 750,
        "monthlyIncome": 10000,
        "requestedAmount": 150000,
        "loanTermMonths": 24,
    }


@pytest.fixture
def good_application() -> LoanApplication:
    return LoanApplication(
        applicant_name="John Doe",
        property_address="100 Beverly Hills Drive",
        credit_score=750,
        monthly_income=10000,
        requested_amount=150000,
        loan_term_months=24,
    )
