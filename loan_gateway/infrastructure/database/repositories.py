"""Data access layer for loan applications"""

import uuid
from typing import Any, List, Optional
from sqlalchemy.orm import Session
from loan_gateway.infrastructure.database.models import LoanApplicationRecord
from loan_gateway.domain.models import LoanApplication, EligibilityResult


class LoanRepository:
    """Repository for loan applications and their decisions"""

    def __init__(self, db: Session):
        self.db = db

    def create_loan(
        self,
        application: LoanApplication,
        crime_grade: str,
        result: EligibilityResult,
    ) -> LoanApplicationRecord:
        """Persist application and decision to database"""
        db_loan = LoanApplicationRecord(
            applicant_name=application.applicant_name,
            property_address=application.property_address,
            credit_score=application.credit_score,
            monthly_income=application.monthly_income,
            requested_amount=application.requested_amount,
            loan_term_months=application.loan_term_months,
            eligible=result.eligible,
            reason=result.reason,
            crime_grade=crime_grade,
            checks=result.checks.as_dict(),
        )
        self.db.add(db_loan)
        self.db.flush()  # Get ID without committing
        return db_loan

    def get_loan_by_id(self, loan_id: uuid.UUID) -> Optional[LoanApplicationRecord]:
        return (
            self.db.query(LoanApplicationRecord)
            .filter(LoanApplicationRecord.id == loan_id)
            .first()
        )

    def list_loans(self) -> List[LoanApplicationRecord]:
        """Fetch all applications, newest first"""
        return (
            self.db.query(LoanApplicationRecord)
            .order_by(LoanApplicationRecord.created_at.desc(), LoanApplicationRecord.id.desc())
            .all()
        )

    def update_loan(self, db_loan: LoanApplicationRecord, **fields: Any) -> LoanApplicationRecord:
        """Apply field changes to an existing application"""
        for name, value in fields.items():
            setattr(db_loan, name, value)
        self.db.flush()
        return db_loan

    def update_decision(
        self,
        db_loan: LoanApplicationRecord,
        crime_grade: str,
        result: EligibilityResult,
    ) -> LoanApplicationRecord:
        """Overwrite the decision fields together so they never disagree"""
        return self.update_loan(
            db_loan,
            eligible=result.eligible,
            reason=result.reason,
            crime_grade=crime_grade,
            checks=result.checks.as_dict(),
        )

    def delete_loan(self, db_loan: LoanApplicationRecord) -> None:
        self.db.delete(db_loan)
        self.db.flush()
