"""Tax estimation and the write contracts the store honours for influencer records"""

from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from influencer_tax.domain.exceptions import InvalidFieldValueError, MissingRequiredFieldError
from influencer_tax.domain.models import (
    ASSESSMENT_STATUSES,
    COMPLIANCE_STATUSES,
    DEFAULT_COMPLIANCE_STATUS,
    PLATFORMS,
    REGIONS,
    Influencer,
    TaxAssessment,
)
from influencer_tax.utils.numbers import round_half_up

FLAT_TAX_RATE = 0.25
MONTHS_PER_YEAR = 12

REQUIRED_INFLUENCER_FIELDS = ("name", "platform", "handle")

_ENUM_FIELDS = {
    "platform": PLATFORMS,
    "compliance_status": COMPLIANCE_STATUSES,
    "region": REGIONS,
}


def derive_annual_revenue(
    monthly_revenue: Optional[float],
    annual_revenue: Optional[float],
) -> Optional[float]:
    """Use the stated annual figure, otherwise annualise the monthly one"""
    if annual_revenue:
        return annual_revenue
    if monthly_revenue:
        return monthly_revenue * MONTHS_PER_YEAR
    return None


def compute_tax_liability(annual_revenue: Optional[float], rate: float = FLAT_TAX_RATE) -> Optional[int]:
    """
    Flat-rate liability on estimated annual revenue.

    Example:
        120000 at 25% -> 30000
        No (or zero) revenue -> None, the liability stays unset
    """
    if not annual_revenue:
        return None
    return round_half_up(annual_revenue * rate)


def normalize_handle(handle: Optional[str]) -> Optional[str]:
    """
    Trim whitespace and every leading "@" from a handle.

    Example:
        " @@kofi " -> "kofi"
        "kofi@gh"  -> "kofi@gh"
    """
    if handle is None:
        return None
    return handle.strip().lstrip("@").strip()


def validate_enum_fields(values: Dict[str, Any]) -> None:
    """Reject enumerated fields holding a value outside their set; None is allowed"""
    for field_name, allowed in _ENUM_FIELDS.items():
        value = values.get(field_name)
        if value is not None and value not in allowed:
            raise InvalidFieldValueError(field_name, value)


def prepare_new_influencer(
    influencer: Influencer,
    now: Optional[datetime] = None,
    rate: float = FLAT_TAX_RATE,
) -> Influencer:
    """
    Apply the create contract to an influencer before it is stored.

    - leading "@" characters on the handle are dropped
    - name, platform and handle are required, checked after the "@" is dropped
    - annual revenue falls back to monthly x 12
    - tax liability is derived from annual revenue when not supplied
    - compliance status defaults to "pending"
    - the data-refresh time is stamped
    """
    influencer = replace(influencer, handle=normalize_handle(influencer.handle))

    for field_name in REQUIRED_INFLUENCER_FIELDS:
        value = getattr(influencer, field_name)
        if value is None or not str(value).strip():
            raise MissingRequiredFieldError(field_name)

    validate_enum_fields(
        {
            "platform": influencer.platform,
            "compliance_status": influencer.compliance_status,
            "region": influencer.region,
        }
    )

    annual_revenue = derive_annual_revenue(
        influencer.estimated_monthly_revenue,
        influencer.estimated_annual_revenue,
    )
    tax_liability = influencer.tax_liability
    if tax_liability is None:
        tax_liability = compute_tax_liability(annual_revenue, rate)

    return replace(
        influencer,
        estimated_annual_revenue=annual_revenue,
        tax_liability=tax_liability,
        compliance_status=influencer.compliance_status or DEFAULT_COMPLIANCE_STATUS,
        last_data_refresh=now or datetime.now(timezone.utc),
    )


def clean_updates(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset (None) fields from a partial update so stored values survive"""
    cleaned = {key: value for key, value in changes.items() if value is not None}
    if "handle" in cleaned:
        cleaned["handle"] = normalize_handle(cleaned["handle"])

    for field_name in REQUIRED_INFLUENCER_FIELDS:
        if field_name in cleaned and not str(cleaned[field_name]).strip():
            raise MissingRequiredFieldError(field_name)

    validate_enum_fields(cleaned)
    return cleaned


def compute_assessment_tax(taxable_income: float, tax_rate: float) -> int:
    """Tax due on an assessment, rounded half-up to whole cedis"""
    return round_half_up(taxable_income * tax_rate)


def prepare_new_assessment(assessment: TaxAssessment, now: Optional[datetime] = None) -> TaxAssessment:
    """Validate an assessment and stamp its assessment date"""
    if assessment.status not in ASSESSMENT_STATUSES:
        raise InvalidFieldValueError("status", assessment.status)
    if assessment.assessment_period_end < assessment.assessment_period_start:
        raise InvalidFieldValueError("assessment_period_end", assessment.assessment_period_end)

    return replace(
        assessment,
        assessment_date=assessment.assessment_date or now or datetime.now(timezone.utc),
    )
