"""Eligibility engine - the business policy for loan decisions"""

from typing import List
from loan_gateway.domain.models import LoanApplication, EligibilityChecks, EligibilityResult
from loan_gateway.domain.exceptions import InvalidApplicationError

MIN_CREDIT_SCORE = 700
INCOME_MULTIPLIER = 1.5
FAILING_CRIME_GRADE = "F"

PASSED_REASON = "Passed all checks"
CREDIT_FAILURE_REASON = "Credit score too low"
INCOME_FAILURE_REASON = "Monthly income too low"
CRIME_FAILURE_REASON = "Property location has high crime rate"


def check_credit_score(credit_score: int) -> bool:
    """Credit score must be at least MIN_CREDIT_SCORE (700 passes, 699 fails)"""
    return credit_score >= MIN_CREDIT_SCORE


def check_income(monthly_income: float, requested_amount: float, loan_term_months: int) -> bool:
    """
    Monthly income must strictly exceed 1.5x the flat monthly repayment.

    Example:
        150000 over 24 months -> 6250/month -> 9375 required
        9375 fails, 9376 passes
    """
    if loan_term_months < 1:
        raise InvalidApplicationError(f"Loan term must be at least 1 month, got {loan_term_months}")

    monthly_payment = requested_amount / loan_term_months
    required_income = monthly_payment * INCOME_MULTIPLIER
    return monthly_income > required_income


def check_crime_grade(crime_grade: str) -> bool:
    """Grades A-E pass equally; only F disqualifies"""
    return crime_grade != FAILING_CRIME_GRADE


def build_reason(checks: EligibilityChecks) -> str:
    """Failed check phrases in fixed order [credit, income, crime], or the pass message"""
    failed: List[str] = []
    if not checks.credit_score:
        failed.append(CREDIT_FAILURE_REASON)
    if not checks.income:
        failed.append(INCOME_FAILURE_REASON)
    if not checks.crime_grade:
        failed.append(CRIME_FAILURE_REASON)

    if not failed:
        return PASSED_REASON
    return ", ".join(failed)


def evaluate_eligibility(application: LoanApplication, crime_grade: str) -> EligibilityResult:
    """
    Main entry point: run the three checks and combine them into a decision.

    The application is eligible only when every check passes. No side effects.
    """
    checks = EligibilityChecks(
        credit_score=check_credit_score(application.credit_score),
        income=check_income(
            application.monthly_income,
            application.requested_amount,
            application.loan_term_months,
        ),
        crime_grade=check_crime_grade(crime_grade),
    )

    return EligibilityResult(
        eligible=checks.credit_score and checks.income and checks.crime_grade,
        reason=build_reason(checks),
        checks=checks,
    )
