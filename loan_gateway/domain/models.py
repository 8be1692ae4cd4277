"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LoanApplication:
    """Validated loan application as submitted by the applicant"""

    applicant_name: str
    property_address: str
    credit_score: int
    monthly_income: float
    requested_amount: float
    loan_term_months: int


@dataclass
class EligibilityChecks:
    """Outcome of each individual eligibility rule"""

    credit_score: bool
    income: bool
    crime_grade: bool

    def as_dict(self) -> dict[str, bool]:
        return {
            "credit_score": self.credit_score,
            "income": self.income,
            "crime_grade": self.crime_grade,
        }


@dataclass
class EligibilityResult:
    """Output of the eligibility evaluation"""

    eligible: bool
    reason: str
    checks: EligibilityChecks
