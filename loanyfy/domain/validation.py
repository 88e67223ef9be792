"""Step-transition validation for applicant and business forms"""

import math
import re
from typing import Any, Mapping

from loanyfy.domain.exceptions import ValidationError
from loanyfy.domain.models import ApplicantProfile, BusinessProfile

MOBILE_PATTERN = re.compile(r"^\d{10}$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PAN_PATTERN = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$", re.IGNORECASE)

BUSINESS_FIELD_LABELS = {
    "trade_name": "the trade name",
    "vintage": "the business vintage",
    "address": "the business address",
    "pincode": "the pincode",
    "city": "the city",
    "state": "the state",
    "constitution_type": "the constitution type",
    "annual_turnover": "the annual turnover",
    "industry_type": "the industry type",
}
REQUIRED_BUSINESS_FIELDS = tuple(BUSINESS_FIELD_LABELS)


def _text(form: Mapping[str, Any], key: str) -> str:
    value = form.get(key)
    return "" if value is None else str(value).strip()


def validate_applicant(form: Mapping[str, Any], terms_accepted: bool = True) -> ApplicantProfile:
    """
    Validate the step 1 form.

    Checks run in form order and stop at the first failure, so the
    message always names a single field.

    Raises:
        ValidationError: naming the offending field
    """
    full_name = _text(form, "full_name")
    mobile = _text(form, "mobile_phone")
    email = _text(form, "email")
    tax_id = _text(form, "tax_id")

    if not full_name:
        raise ValidationError("full_name", "Please enter your full name.")
    if not MOBILE_PATTERN.match(mobile):
        raise ValidationError("mobile_phone", "Please enter a valid 10-digit mobile number.")
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("email", "Please enter a valid email address.")
    if not PAN_PATTERN.match(tax_id):
        raise ValidationError("tax_id", "Please enter a valid PAN card number.")
    if not terms_accepted:
        raise ValidationError("terms", "Please agree to the Terms & Conditions.")

    return ApplicantProfile(
        full_name=full_name,
        mobile_phone=mobile,
        email=email,
        tax_id=tax_id.upper(),
    )


def validate_business(form: Mapping[str, Any]) -> BusinessProfile:
    """
    Validate the step 2 form.

    Required fields are checked for presence only. The monthly obligation is
    optional; when given it must be a finite, non-negative amount.

    Raises:
        ValidationError: naming the first offending field
    """
    for name in REQUIRED_BUSINESS_FIELDS:
        if not _text(form, name):
            raise ValidationError(name, f"Please enter {BUSINESS_FIELD_LABELS[name]}.")

    raw_obligation = _text(form, "monthly_obligation")
    try:
        monthly_obligation = float(raw_obligation) if raw_obligation else 0.0
    except ValueError:
        monthly_obligation = math.nan
    if not math.isfinite(monthly_obligation) or monthly_obligation < 0:
        raise ValidationError("monthly_obligation", "Please enter a valid monthly obligation amount.")

    values = {name: _text(form, name) for name in REQUIRED_BUSINESS_FIELDS}
    return BusinessProfile(
        **values,
        monthly_obligation=monthly_obligation,
        gst_number=_text(form, "gst_number") or None,
        registration_number=_text(form, "registration_number") or None,
    )
