"""Pydantic schemas for API request/response validation"""

import uuid
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Literal, Optional

Platform = Literal["youtube", "tiktok"]
ComplianceStatus = Literal["compliant", "non-compliant", "pending", "under-review"]
AssessmentStatus = Literal["draft", "pending", "approved", "disputed"]


class InfluencerFields(BaseModel):
    """Optional attributes shared by create and update requests"""

    channel_id: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    subscribers: Optional[int] = Field(None, ge=0)
    total_views: Optional[int] = Field(None, ge=0)
    avg_engagement_rate: Optional[float] = Field(None, ge=0)
    total_videos: Optional[int] = Field(None, ge=0)
    estimated_monthly_revenue: Optional[float] = Field(None, ge=0)
    estimated_annual_revenue: Optional[float] = Field(None, ge=0)
    tax_liability: Optional[float] = Field(None, ge=0)
    tax_id_number: Optional[str] = None
    compliance_score: Optional[float] = Field(None, ge=0, le=100)
    compliance_status: Optional[ComplianceStatus] = None
    region: Optional[str] = Field(None, description="One of the 16 administrative regions")
    notes: Optional[str] = None


class InfluencerCreate(InfluencerFields):
    """Request body for POST /v1/influencers"""

    name: str = Field(..., min_length=1)
    platform: Platform
    handle: str = Field(..., min_length=1)


class InfluencerUpdate(InfluencerFields):
    """Request body for PATCH /v1/influencers/{id}; omitted or null fields are left unchanged"""

    name: Optional[str] = None
    platform: Optional[Platform] = None
    handle: Optional[str] = None


class InfluencerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    platform: str
    handle: str
    channel_id: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    subscribers: Optional[int] = None
    total_views: Optional[int] = None
    avg_engagement_rate: Optional[float] = None
    total_videos: Optional[int] = None
    estimated_monthly_revenue: Optional[float] = None
    estimated_annual_revenue: Optional[float] = None
    tax_liability: Optional[float] = None
    tax_id_number: Optional[str] = None
    compliance_score: Optional[float] = None
    compliance_status: Optional[str] = None
    region: Optional[str] = None
    notes: Optional[str] = None
    last_assessed_at: Optional[datetime] = None
    last_data_refresh: Optional[datetime] = None
    created_at: Optional[datetime] = None


class InfluencerStatsResponse(BaseModel):
    """Response for GET /v1/influencers/stats"""

    model_config = ConfigDict(from_attributes=True)

    total_influencers: int
    total_estimated_tax: float
    total_estimated_revenue: float
    compliance_rate: int
    pending_assessments: int
    youtube_count: int
    tiktok_count: int


class DashboardSummaryResponse(BaseModel):
    """Response for GET /v1/analytics/dashboard"""

    model_config = ConfigDict(from_attributes=True)

    total_influencers: int
    total_estimated_revenue: float
    total_tax_liability: float
    compliance_rate: int
    pending_assessments: int
    approved_assessments: int
    disputed_assessments: int


class DistributionEntrySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    value: int
    color: Optional[str] = None


class ComplianceCountSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status: str
    count: int


class MonthlyRevenueSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month: str
    revenue: float


class RiskAssessmentSchema(BaseModel):
    """Single row of the audit risk list"""

    model_config = ConfigDict(from_attributes=True)

    influencer: InfluencerResponse
    score: float
    risk: Literal["High", "Medium", "Low"]


class AssessmentCreate(BaseModel):
    """Request body for POST /v1/assessments"""

    influencer_id: uuid.UUID
    assessment_period_start: datetime
    assessment_period_end: datetime
    taxable_income: float = Field(..., ge=0)
    tax_rate: float = Field(..., ge=0, le=1)
    tax_amount: Optional[float] = Field(None, ge=0, description="Derived from income and rate when omitted")
    status: AssessmentStatus = "draft"
    assessed_by: Optional[str] = None
    notes: Optional[str] = None


class AssessmentStatusUpdate(BaseModel):
    """Request body for PATCH /v1/assessments/{id}"""

    status: AssessmentStatus
    notes: Optional[str] = None


class AssessmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    influencer_id: uuid.UUID
    assessment_date: datetime
    assessment_period_start: datetime
    assessment_period_end: datetime
    taxable_income: float
    tax_rate: float
    tax_amount: float
    status: str
    assessed_by: Optional[str] = None
    notes: Optional[str] = None


class AuditLogCreate(BaseModel):
    """Request body for POST /v1/audit-logs"""

    user_id: Optional[str] = None
    user_name: Optional[str] = None
    action: str = Field(..., min_length=1)
    entity_type: str = Field(..., min_length=1)
    entity_id: Optional[str] = None
    details: Optional[str] = None


class AuditLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    action: str
    entity_type: str
    entity_id: Optional[str] = None
    details: Optional[str] = None
    timestamp: datetime