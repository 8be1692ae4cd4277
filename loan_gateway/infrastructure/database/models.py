"""SQLAlchemy ORM models for persisted loan decisions"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Boolean, Float, DateTime, Integer, Text, JSON, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LoanApplicationRecord(Base):
    """Loan application together with its eligibility decision"""

    __tablename__ = "loan_application"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    applicant_name = Column(Text, nullable=False)
    property_address = Column(Text, nullable=False)
    credit_score = Column(Integer, nullable=False)
    monthly_income = Column(Float, nullable=False)
    requested_amount = Column(Float, nullable=False)
    loan_term_months = Column(Integer, nullable=False)
    eligible = Column(Boolean, nullable=False)
    reason = Column(Text, nullable=False)
    crime_grade = Column(String(1), nullable=False)
    checks = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow)
