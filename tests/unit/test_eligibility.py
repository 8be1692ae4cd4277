"""Unit tests for eligibility rules"""

import pytest
from dataclasses import replace
from loan_gateway.domain.models import LoanApplication, EligibilityChecks
from loan_gateway.domain.eligibility import (
    build_reason,
    check_credit_score,
    check_crime_grade,
    check_income,
    evaluate_eligibility,
)
from loan_gateway.domain.exceptions import InvalidApplicationError


@pytest.mark.parametrize("score, expected", [(300, False), (699, False), (700, True), (850, True)])
def test_check_credit_score_boundary(score, expected):
    """Test 700 is the lowest passing credit score"""
    assert check_credit_score(score) is expected


def test_check_income_must_strictly_exceed_requirement():
    """Test 150000 over 24 months requires more than 9375/month"""
    # 150000 / 24 = 6250 monthly payment, x1.5 = 9375
    assert check_income(9375, 150000, 24) is False
    assert check_income(9376, 150000, 24) is True


def test_check_income_uses_real_division():
    """Test non-integer monthly payments are not truncated"""
    # 100 / 8 = 12.5 monthly payment, x1.5 = 18.75 (integer division would give 18)
    assert check_income(18.5, 100, 8) is False
    assert check_income(18.75, 100, 8) is False
    assert check_income(18.76, 100, 8) is True


def test_check_income_rejects_zero_term():
    """Test a zero-month term fails loudly instead of deciding"""
    with pytest.raises(InvalidApplicationError):
        check_income(10000, 150000, 0)


@pytest.mark.parametrize("grade", ["A", "B", "C", "D", "E"])
def test_check_crime_grade_passing(grade):
    assert check_crime_grade(grade) is True


def test_check_crime_grade_f_fails():
    assert check_crime_grade("F") is False


def test_build_reason_passed():
    assert build_reason(EligibilityChecks(True, True, True)) == "Passed all checks"


def test_build_reason_fixed_order():
    """Test failed checks are listed credit, income, crime"""
    assert build_reason(EligibilityChecks(False, False, False)) == (
        "Credit score too low, Monthly income too low, Property location has high crime rate"
    )
    assert build_reason(EligibilityChecks(True, False, False)) == (
        "Monthly income too low, Property location has high crime rate"
    )
    assert build_reason(EligibilityChecks(False, True, False)) == (
        "Credit score too low, Property location has high crime rate"
    )


def test_evaluate_eligibility_all_pass(good_application: LoanApplication):
    result = evaluate_eligibility(good_application, "A")

    assert result.eligible is True
    assert result.reason == "Passed all checks"
    assert result.checks == EligibilityChecks(credit_score=True, income=True, crime_grade=True)


def test_evaluate_eligibility_low_credit_keeps_other_checks(good_application: LoanApplication):
    """Test a credit failure does not affect the other checks"""
    application = replace(good_application, credit_score=650)

    result = evaluate_eligibility(application, "A")

    assert result.eligible is False
    assert result.reason == "Credit score too low"
    assert result.checks.credit_score is False
    assert result.checks.income is True
    assert result.checks.crime_grade is True


def test_evaluate_eligibility_grade_f_only(good_application: LoanApplication):
    result = evaluate_eligibility(good_application, "F")

    assert result.eligible is False
    assert result.reason == "Property location has high crime rate"


def test_evaluate_eligibility_everything_fails():
    application = LoanApplication(
        applicant_name="Jane Smith",
        property_address="1 Warehouse Row",
        credit_score=650,
        monthly_income=2000,
        requested_amount=200000,
        loan_term_months=120,
    )

    result = evaluate_eligibility(application, "F")

    assert result.eligible is False
    assert result.reason == (
        "Credit score too low, Monthly income too low, Property location has high crime rate"
    )
    assert result.checks.as_dict() == {"credit_score": False, "income": False, "crime_grade": False}
