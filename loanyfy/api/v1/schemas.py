"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional


class CamelModel(BaseModel):
    """Fields are snake_case in Python and camelCase on the wire"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BusinessSchema(CamelModel):
    """Step 2 business details"""

    trade_name: Optional[str] = None
    vintage: Optional[str] = None
    address: Optional[str] = None
    pincode: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    constitution_type: Optional[str] = None
    annual_turnover: Optional[str] = None
    industry_type: Optional[str] = None
    monthly_obligation: Optional[float] = None
    gst_number: Optional[str] = None
    business_type: Optional[str] = None
    employee_count: Optional[str] = None
    revenue_last_year: Optional[str] = None
    registration_number: Optional[str] = None


class CalculatorSchema(CamelModel):
    """Step 3 calculator inputs and outputs"""

    loan_amount: Optional[float] = None
    tenure_months: Optional[float] = None
    interest_rate: Optional[float] = None
    monthly_emi: Optional[float] = None
    total_interest: Optional[float] = None
    total_amount: Optional[float] = None


class ApplicationCreate(CamelModel):
    """Request body for POST /api/applications"""

    full_name: str = Field(..., min_length=1, description="Applicant full name")
    mobile: str = Field(..., min_length=1, description="Applicant mobile number")
    email: Optional[str] = None
    pan_number: Optional[str] = None
    alt_mobile: Optional[str] = None
    dob: Optional[str] = None
    aadhaar_number: Optional[str] = None
    product_type: Optional[str] = None
    business: BusinessSchema = Field(default_factory=BusinessSchema)
    calculator: CalculatorSchema = Field(default_factory=CalculatorSchema)


class ApplicationCreated(CamelModel):
    """Response for POST /api/applications"""

    success: bool = True
    id: str
    application_id: str


class DocumentsUploaded(BaseModel):
    """Response for POST /api/applications/upload-docs"""

    success: bool = True
    message: str
