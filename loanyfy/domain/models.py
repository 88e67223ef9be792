"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

OVERDRAFT_LIMIT = "Overdraft Limit"
TERM_LOAN = "Term Loan"


@dataclass
class LoanCalculatorInput:
    """Calculator inputs; all three must be positive for a non-zero result"""

    principal: float
    term_months: int
    annual_rate_percent: float


@dataclass(frozen=True)
class LoanCalculatorOutput:
    """Derived from LoanCalculatorInput, never edited by hand"""

    installment: float
    total_interest: float
    total_cost: float


@dataclass(frozen=True)
class ApplicantProfile:
    """Step 1 applicant identity"""

    full_name: str
    mobile_phone: str
    email: str
    tax_id: str  # PAN, upper-cased


@dataclass(frozen=True)
class BusinessProfile:
    """Step 2 business details"""

    trade_name: str
    vintage: str
    address: str
    pincode: str
    city: str
    state: str
    constitution_type: str
    annual_turnover: str
    industry_type: str
    monthly_obligation: float = 0.0  # Existing EMIs, card dues etc.
    gst_number: Optional[str] = None
    registration_number: Optional[str] = None


@dataclass(frozen=True)
class UploadDocument:
    """Opaque file selected by the user"""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


MultipartFile = Tuple[str, Tuple[str, bytes, str]]


@dataclass
class DocumentSet:
    """Documents chosen on the completion step"""

    identity_doc: Optional[UploadDocument] = None
    address_doc: Optional[UploadDocument] = None
    business_registration_doc: Optional[UploadDocument] = None
    utility_bill_doc: Optional[UploadDocument] = None
    bank_statements: List[UploadDocument] = field(default_factory=list)

    def multipart_files(self) -> Iterator[MultipartFile]:
        """Yield (field name, file tuple) pairs in selection order"""
        named = [
            ("identityDoc", self.identity_doc),
            ("addressDoc", self.address_doc),
            ("businessRegistrationDoc", self.business_registration_doc),
            ("utilityBillDoc", self.utility_bill_doc),
        ]
        for name, doc in named:
            if doc is not None:
                yield name, (doc.filename, doc.content, doc.content_type)

        for idx, doc in enumerate(self.bank_statements):
            yield "bankStatementDoc", (doc.filename or f"bank_{idx}", doc.content, doc.content_type)

    def __len__(self) -> int:
        return sum(1 for _ in self.multipart_files())
