"""Domain models - pure Python dataclasses representing business entities"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

PLATFORMS = ("youtube", "tiktok")

COMPLIANCE_STATUSES = ("compliant", "non-compliant", "pending", "under-review")
DEFAULT_COMPLIANCE_STATUS = "pending"

ASSESSMENT_STATUSES = ("draft", "pending", "approved", "disputed")
DEFAULT_ASSESSMENT_STATUS = "draft"

REGIONS = (
    "Greater Accra",
    "Ashanti",
    "Western",
    "Eastern",
    "Central",
    "Northern",
    "Volta",
    "Upper East",
    "Upper West",
    "Bono",
    "Bono East",
    "Ahafo",
    "Western North",
    "Oti",
    "North East",
    "Savannah",
)
UNKNOWN_REGION = "Unknown"


@dataclass
class Influencer:
    """Content creator tracked for tax purposes"""

    name: str
    platform: str  # "youtube" or "tiktok"
    handle: str
    id: Optional[uuid.UUID] = None
    channel_id: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    # Channel metrics
    subscribers: Optional[int] = None
    total_views: Optional[int] = None
    avg_engagement_rate: Optional[float] = None
    total_videos: Optional[int] = None

    # Revenue & tax
    estimated_monthly_revenue: Optional[float] = None
    estimated_annual_revenue: Optional[float] = None
    tax_liability: Optional[float] = None
    tax_id_number: Optional[str] = None

    # Compliance
    compliance_score: Optional[float] = None  # 0-100
    compliance_status: Optional[str] = None

    region: Optional[str] = None
    notes: Optional[str] = None
    last_assessed_at: Optional[datetime] = None
    last_data_refresh: Optional[datetime] = None
    created_at: Optional[datetime] = None


@dataclass
class TaxAssessment:
    """Officer-recorded evaluation of an influencer's tax position for a period"""

    influencer_id: uuid.UUID
    assessment_period_start: datetime
    assessment_period_end: datetime
    taxable_income: float
    tax_rate: float
    tax_amount: float
    status: str = DEFAULT_ASSESSMENT_STATUS
    id: Optional[uuid.UUID] = None
    assessment_date: Optional[datetime] = None
    assessed_by: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class AuditLogEntry:
    """Append-only record of a system action"""

    action: str  # e.g. "created_influencer"
    entity_type: str  # e.g. "influencer", "assessment"
    id: Optional[uuid.UUID] = None
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    entity_id: Optional[str] = None
    details: Optional[str] = None
    timestamp: Optional[datetime] = None


@dataclass
class DashboardSummary:
    """Headline figures for the dashboard"""

    total_influencers: int
    total_estimated_revenue: float
    total_tax_liability: float
    compliance_rate: int
    pending_assessments: int
    approved_assessments: int
    disputed_assessments: int


@dataclass
class DistributionEntry:
    """One bucket of a chart distribution"""

    name: str
    value: int
    color: Optional[str] = None


@dataclass
class ComplianceCount:
    status: str
    count: int


@dataclass
class InfluencerStats:
    """Registry-level statistics shown on the influencer overview"""

    total_influencers: int
    total_estimated_tax: float
    total_estimated_revenue: float
    compliance_rate: int
    pending_assessments: int
    youtube_count: int
    tiktok_count: int


@dataclass
class RiskAssessment:
    """Audit priority for a single influencer"""

    influencer: Influencer
    score: float
    risk: str  # "High", "Medium" or "Low"


@dataclass
class MonthlyRevenuePoint:
    month: str
    revenue: float
