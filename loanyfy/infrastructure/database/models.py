"""SQLAlchemy ORM models for loan applications"""

import uuid
from sqlalchemy import Column, DateTime, JSON, Text, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()

# Wire field name → column, one column per document slot
DOCUMENT_SLOTS = {
    "identityDoc": "identity_doc",
    "addressDoc": "address_doc",
    "businessRegistrationDoc": "business_registration_doc",
    "utilityBillDoc": "utility_bill_doc",
    "bankStatementDoc": "bank_statements",
}


class LoanApplication(Base):
    """Application created from wizard steps 1-3, documents attached later"""

    __tablename__ = "loan_application"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Step 1
    full_name = Column(Text, nullable=False)
    mobile = Column(Text, nullable=False)
    email = Column(Text, nullable=True)
    pan_number = Column(Text, nullable=True)
    alt_mobile = Column(Text, nullable=True)
    dob = Column(Text, nullable=True)
    aadhaar_number = Column(Text, nullable=True)

    # Step 3
    product_type = Column(Text, nullable=True)  # "Overdraft Limit" | "Term Loan"
    business = Column(JSON, nullable=False, default=dict)
    calculator = Column(JSON, nullable=False, default=dict)

    # Documents, stored as public paths
    identity_doc = Column(Text, nullable=True)
    address_doc = Column(Text, nullable=True)
    business_registration_doc = Column(Text, nullable=True)
    utility_bill_doc = Column(Text, nullable=True)
    bank_statements = Column(JSON, nullable=True)

    status = Column(Text, nullable=False, default="New")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
