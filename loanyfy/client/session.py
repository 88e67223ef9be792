"""Per-wizard session state"""

import asyncio
import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from loanyfy.client.calculator_state import CalculatorState
from loanyfy.domain.models import ApplicantProfile, BusinessProfile

logger = logging.getLogger(__name__)

_BUSINESS_KEYS = {
    "trade_name": "tradeName",
    "vintage": "vintage",
    "address": "address",
    "pincode": "pincode",
    "city": "city",
    "state": "state",
    "constitution_type": "constitutionType",
    "annual_turnover": "annualTurnover",
    "industry_type": "industryType",
    "monthly_obligation": "monthlyObligation",
    "gst_number": "gstNumber",
    "registration_number": "registrationNumber",
}


@dataclass
class SessionState:
    """
    Everything one applicant enters between wizard start and restart.

    The application id is written only through assign_application_id while
    holding id_lock; the first id stored wins for the rest of the session.
    """

    calculator: CalculatorState = field(default_factory=CalculatorState)
    applicant: Optional[ApplicantProfile] = None
    business: Optional[BusinessProfile] = None
    application_id: Optional[str] = None
    submission_in_flight: bool = False
    upload_in_flight: bool = False
    id_lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    def assign_application_id(self, application_id: str) -> str:
        """Store the id unless one is already set; returns the stored id"""
        if self.application_id is None:
            self.application_id = application_id
            logger.info("Application id assigned", extra={"application_id": application_id})
        elif self.application_id != application_id:
            logger.warning(
                "Ignoring second application id for session",
                extra={"application_id": self.application_id, "ignored_id": application_id},
            )
        return self.application_id

    def build_payload(self, product_type: Optional[str]) -> Dict[str, Any]:
        """Create-application request body"""
        applicant = self.applicant
        business: Dict[str, Any] = {}
        if self.business is not None:
            business = {
                _BUSINESS_KEYS[key]: value
                for key, value in asdict(self.business).items()
                if value is not None
            }

        return {
            "fullName": applicant.full_name if applicant else "",
            "mobile": applicant.mobile_phone if applicant else "",
            "email": applicant.email if applicant else "",
            "panNumber": applicant.tax_id if applicant else "",
            "productType": product_type,
            "business": business,
            "calculator": self.calculator.as_payload(),
        }
