"""Loan application endpoints - submit, fetch, list, update, delete"""

import time
import uuid
import logging
from typing import List, Tuple
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from loan_gateway.api.v1.schemas import (
    ChecksSchema,
    LoanApplicationRequest,
    LoanResponse,
    LoanUpdateRequest,
)
from loan_gateway.api.dependencies import get_grade_resolver, get_request_id, require_api_key
from loan_gateway.infrastructure.database.session import get_db
from loan_gateway.infrastructure.database.repositories import LoanRepository
from loan_gateway.infrastructure.database.models import LoanApplicationRecord
from loan_gateway.domain.eligibility import evaluate_eligibility
from loan_gateway.domain.exceptions import InvalidApplicationError
from loan_gateway.domain.grade_resolver import CrimeGradeResolver
from loan_gateway.domain.models import EligibilityResult, LoanApplication
from loan_gateway.infrastructure.observability.metrics import record_decision
from loan_gateway.infrastructure.observability.logging import log_decision

router = APIRouter(dependencies=[Depends(require_api_key)])

# Changing any of these requires a fresh decision
ELIGIBILITY_FIELDS = {
    "credit_score",
    "monthly_income",
    "requested_amount",
    "loan_term_months",
    "property_address",
}


async def assess_application(
    application: LoanApplication,
    resolver: CrimeGradeResolver,
) -> Tuple[str, EligibilityResult]:
    """Resolve the property's crime grade and run the eligibility checks against it"""
    crime_grade = await resolver.resolve(application.property_address)
    return crime_grade, evaluate_eligibility(application, crime_grade)


def to_loan_response(db_loan: LoanApplicationRecord) -> LoanResponse:
    return LoanResponse(
        id=str(db_loan.id),
        applicant_name=db_loan.applicant_name,
        property_address=db_loan.property_address,
        credit_score=db_loan.credit_score,
        monthly_income=db_loan.monthly_income,
        requested_amount=db_loan.requested_amount,
        loan_term_months=db_loan.loan_term_months,
        eligible=db_loan.eligible,
        reason=db_loan.reason,
        crime_grade=db_loan.crime_grade,
        checks=ChecksSchema(**db_loan.checks),
        created_at=db_loan.created_at.isoformat(),
        updated_at=db_loan.updated_at.isoformat(),
    )


def parse_loan_id(loan_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(loan_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid loan ID format")


def get_loan_or_404(repo: LoanRepository, loan_id: str) -> LoanApplicationRecord:
    db_loan = repo.get_loan_by_id(parse_loan_id(loan_id))
    if not db_loan:
        raise HTTPException(status_code=404, detail="Loan application not found")
    return db_loan


@router.post("/loan", response_model=LoanResponse, status_code=status.HTTP_201_CREATED)
async def create_loan(
    request_body: LoanApplicationRequest,
    request: Request,
    db: Session = Depends(get_db),
    resolver: CrimeGradeResolver = Depends(get_grade_resolver),
):
    """
    Submit a loan application and decide its eligibility.

    Flow:
    1. Resolve crime grade for the property address (cached, never fails)
    2. Run credit, income and crime checks
    3. Persist application + decision
    4. Return the stored record
    """
    start_time = time.time()
    request_id = get_request_id(request)
    application = request_body.to_domain()

    try:
        crime_grade, result = await assess_application(application, resolver)

        repo = LoanRepository(db)
        db_loan = repo.create_loan(application, crime_grade, result)
        db.commit()

        duration_ms = (time.time() - start_time) * 1000
        record_decision(result.eligible, crime_grade, result.checks.as_dict())
        log_decision(request_id, str(db_loan.id), result.eligible, crime_grade, result.reason, duration_ms)

        return to_loan_response(db_loan)

    except InvalidApplicationError as e:
        db.rollback()
        logging.warning(f"Invalid application: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/loan/{loan_id}", response_model=LoanResponse)
def get_loan(loan_id: str, db: Session = Depends(get_db)):
    """Retrieve a loan application and its decision by ID"""
    return to_loan_response(get_loan_or_404(LoanRepository(db), loan_id))


@router.get("/loans", response_model=List[LoanResponse])
def list_loans(db: Session = Depends(get_db)):
    """Retrieve all loan applications, newest first"""
    return [to_loan_response(db_loan) for db_loan in LoanRepository(db).list_loans()]


@router.put("/loan/{loan_id}", response_model=LoanResponse)
async def update_loan(
    loan_id: str,
    request_body: LoanUpdateRequest,
    request: Request,
    db: Session = Depends(get_db),
    resolver: CrimeGradeResolver = Depends(get_grade_resolver),
):
    """
    Update an application.

    Changing any eligibility input re-runs the decision. The crime grade is
    only re-resolved when the property address changes.
    """
    request_id = get_request_id(request)
    repo = LoanRepository(db)
    db_loan = get_loan_or_404(repo, loan_id)

    updates = request_body.model_dump(exclude_unset=True, exclude_none=True)
    if not updates:
        return to_loan_response(db_loan)

    try:
        repo.update_loan(db_loan, **updates)

        if updates.keys() & ELIGIBILITY_FIELDS:
            application = LoanApplication(
                applicant_name=db_loan.applicant_name,
                property_address=db_loan.property_address,
                credit_score=db_loan.credit_score,
                monthly_income=db_loan.monthly_income,
                requested_amount=db_loan.requested_amount,
                loan_term_months=db_loan.loan_term_months,
            )
            if "property_address" in updates:
                crime_grade = await resolver.resolve(application.property_address)
            else:
                crime_grade = db_loan.crime_grade

            result = evaluate_eligibility(application, crime_grade)
            repo.update_decision(db_loan, crime_grade, result)
            record_decision(result.eligible, crime_grade, result.checks.as_dict())
            logging.info(
                "Decision re-evaluated",
                extra={"request_id": request_id, "loan_id": loan_id, "eligible": result.eligible},
            )

        db.commit()
        return to_loan_response(db_loan)

    except InvalidApplicationError as e:
        db.rollback()
        logging.warning(f"Invalid application: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/loan/{loan_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_loan(loan_id: str, db: Session = Depends(get_db)):
    """Delete a loan application"""
    repo = LoanRepository(db)
    repo.delete_loan(get_loan_or_404(repo, loan_id))
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
