"""Pydantic schemas for API request/response validation"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from loan_gateway.domain.models import LoanApplication


class CamelModel(BaseModel):
    """Base schema exposing camelCase field names on the wire"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoanApplicationRequest(CamelModel):
    """Request body for POST /v1/loan"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

    applicant_name: str = Field(..., min_length=1, description="Applicant full name")
    property_address: str = Field(..., min_length=1, description="Address of the property being financed")
    credit_score: int = Field(..., ge=300, le=850, description="Applicant credit score")
    monthly_income: float = Field(..., gt=0, allow_inf_nan=False, description="Gross monthly income")
    requested_amount: float = Field(..., gt=0, allow_inf_nan=False, description="Requested loan amount")
    loan_term_months: int = Field(..., gt=0, le=480, description="Loan term in months")

    def to_domain(self) -> LoanApplication:
        return LoanApplication(
            applicant_name=self.applicant_name,
            property_address=self.property_address,
            credit_score=self.credit_score,
            monthly_income=self.monthly_income,
            requested_amount=self.requested_amount,
            loan_term_months=self.loan_term_months,
        )


class LoanUpdateRequest(CamelModel):
    """Request body for PUT /v1/loan/{loan_id}; omitted fields keep their value"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

    applicant_name: Optional[str] = Field(None, min_length=1)
    property_address: Optional[str] = Field(None, min_length=1)
    credit_score: Optional[int] = Field(None, ge=300, le=850)
    monthly_income: Optional[float] = Field(None, gt=0, allow_inf_nan=False)
    requested_amount: Optional[float] = Field(None, gt=0, allow_inf_nan=False)
    loan_term_months: Optional[int] = Field(None, gt=0, le=480)


class ChecksSchema(CamelModel):
    """Per-rule eligibility outcome"""

    credit_score: bool
    income: bool
    crime_grade: bool


class LoanResponse(CamelModel):
    """Persisted loan application with its decision"""

    id: str
    applicant_name: str
    property_address: str
    credit_score: int
    monthly_income: float
    requested_amount: float
    loan_term_months: int
    eligible: bool
    reason: str
    crime_grade: str
    checks: ChecksSchema
    created_at: str
    updated_at: str
