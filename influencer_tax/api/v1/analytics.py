"""/v1/analytics - dashboard aggregations"""

from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from influencer_tax.api.v1.schemas import (
    ComplianceCountSchema,
    DashboardSummaryResponse,
    DistributionEntrySchema,
    InfluencerResponse,
    MonthlyRevenueSchema,
    RiskAssessmentSchema,
)
from influencer_tax.api.dependencies import get_settings
from influencer_tax.config import Settings
from influencer_tax.infrastructure.database.session import get_db
from influencer_tax.infrastructure.database.repositories import AssessmentRepository, InfluencerRepository
from influencer_tax.domain.metrics import (
    build_dashboard_summary,
    compliance_breakdown,
    monthly_revenue_series,
    platform_distribution,
    regional_distribution,
    top_influencers,
)
from influencer_tax.domain.risk import assess_audit_risk
from influencer_tax.infrastructure.observability.metrics import record_dashboard_query

router = APIRouter()


@router.get("/analytics/dashboard", response_model=DashboardSummaryResponse)
def get_dashboard_metrics(db: Session = Depends(get_db)):
    """
    Headline dashboard figures.

    Returns:
        Influencer count, revenue and liability totals, compliance rate,
        and pending/approved/disputed assessment counts
    """
    influencers = InfluencerRepository(db).list()
    assessments = AssessmentRepository(db).list()

    summary = build_dashboard_summary(influencers, assessments)
    record_dashboard_query("dashboard", summary.compliance_rate)
    return summary


@router.get("/analytics/platform-distribution", response_model=List[DistributionEntrySchema])
def get_platform_distribution(db: Session = Depends(get_db)):
    record_dashboard_query("platform_distribution")
    return platform_distribution(InfluencerRepository(db).list())


@router.get("/analytics/regional-distribution", response_model=List[DistributionEntrySchema])
def get_regional_distribution(db: Session = Depends(get_db)):
    record_dashboard_query("regional_distribution")
    return regional_distribution(InfluencerRepository(db).list())


@router.get("/analytics/compliance-breakdown", response_model=List[ComplianceCountSchema])
def get_compliance_breakdown(db: Session = Depends(get_db)):
    record_dashboard_query("compliance_breakdown")
    return compliance_breakdown(InfluencerRepository(db).list())


@router.get("/analytics/top-influencers", response_model=List[InfluencerResponse])
def get_top_influencers(
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings),
):
    record_dashboard_query("top_influencers")
    return top_influencers(InfluencerRepository(db).list(), limit=config.top_influencers_limit)


@router.get("/analytics/revenue-by-month", response_model=List[MonthlyRevenueSchema])
def get_revenue_by_month(db: Session = Depends(get_db)):
    """Always empty until revenue history is stored"""
    record_dashboard_query("revenue_by_month")
    return monthly_revenue_series(InfluencerRepository(db).list())


@router.get("/analytics/risk-assessment", response_model=List[RiskAssessmentSchema])
def get_risk_assessment(
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings),
):
    """Top earners with their compliance score and audit risk band"""
    record_dashboard_query("risk_assessment")
    top = top_influencers(InfluencerRepository(db).list(), limit=config.risk_list_limit)
    return assess_audit_risk(top)
