"""Dashboard metrics - pure aggregations over already-fetched influencer and assessment records"""

from typing import Dict, List

from influencer_tax.domain.models import (
    COMPLIANCE_STATUSES,
    DEFAULT_COMPLIANCE_STATUS,
    UNKNOWN_REGION,
    ComplianceCount,
    DashboardSummary,
    DistributionEntry,
    Influencer,
    InfluencerStats,
    MonthlyRevenuePoint,
    TaxAssessment,
)
from influencer_tax.utils.numbers import percentage

TOP_INFLUENCERS_LIMIT = 10

# Fixed output order and chart colours for the platform split
PLATFORM_BUCKETS = (
    ("youtube", "YouTube", "#FF0000"),
    ("tiktok", "TikTok", "#00F2EA"),
)


def annual_revenue_of(influencer: Influencer) -> float:
    return influencer.estimated_annual_revenue or 0


def tax_liability_of(influencer: Influencer) -> float:
    return influencer.tax_liability or 0


def compliance_status_of(influencer: Influencer) -> str:
    return influencer.compliance_status or DEFAULT_COMPLIANCE_STATUS


def region_of(influencer: Influencer) -> str:
    return influencer.region or UNKNOWN_REGION


def compliance_rate(influencers: List[Influencer]) -> int:
    """Share of compliant influencers as a whole percentage, 0 for an empty registry"""
    compliant = sum(1 for i in influencers if compliance_status_of(i) == "compliant")
    return percentage(compliant, len(influencers))


def build_dashboard_summary(
    influencers: List[Influencer],
    assessments: List[TaxAssessment],
) -> DashboardSummary:
    """
    Headline totals for the dashboard.

    Missing revenue and liability count as 0; assessment counts only
    cover the pending, approved and disputed statuses.
    """
    return DashboardSummary(
        total_influencers=len(influencers),
        total_estimated_revenue=sum(annual_revenue_of(i) for i in influencers),
        total_tax_liability=sum(tax_liability_of(i) for i in influencers),
        compliance_rate=compliance_rate(influencers),
        pending_assessments=sum(1 for a in assessments if a.status == "pending"),
        approved_assessments=sum(1 for a in assessments if a.status == "approved"),
        disputed_assessments=sum(1 for a in assessments if a.status == "disputed"),
    )


def platform_distribution(influencers: List[Influencer]) -> List[DistributionEntry]:
    """Always exactly two entries, YouTube then TikTok, even when a bucket is empty"""
    return [
        DistributionEntry(
            name=label,
            value=sum(1 for i in influencers if i.platform == platform),
            color=color,
        )
        for platform, label, color in PLATFORM_BUCKETS
    ]


def regional_distribution(influencers: List[Influencer]) -> List[DistributionEntry]:
    """
    Influencer count per region, largest first.

    Only regions that occur are emitted; missing regions are bucketed
    as "Unknown". Order between equal counts is not part of the contract.
    """
    counts: Dict[str, int] = {}
    for influencer in influencers:
        region = region_of(influencer)
        counts[region] = counts.get(region, 0) + 1

    entries = [DistributionEntry(name=name, value=value) for name, value in counts.items()]
    return sorted(entries, key=lambda e: e.value, reverse=True)


def compliance_breakdown(influencers: List[Influencer]) -> List[ComplianceCount]:
    """
    Count per compliance status, zero-filled, in enumeration order.

    Unrecognised statuses fall into no bucket.
    """
    counts = {status: 0 for status in COMPLIANCE_STATUSES}
    for influencer in influencers:
        status = compliance_status_of(influencer)
        if status in counts:
            counts[status] += 1

    return [ComplianceCount(status=status, count=counts[status]) for status in COMPLIANCE_STATUSES]


def top_influencers(influencers: List[Influencer], limit: int = TOP_INFLUENCERS_LIMIT) -> List[Influencer]:
    """Highest estimated annual revenue first (missing counts as 0), truncated to limit"""
    return sorted(influencers, key=annual_revenue_of, reverse=True)[:limit]


def influencer_stats(influencers: List[Influencer]) -> InfluencerStats:
    """Registry statistics; pending counts both "pending" and "under-review" records"""
    return InfluencerStats(
        total_influencers=len(influencers),
        total_estimated_tax=sum(tax_liability_of(i) for i in influencers),
        total_estimated_revenue=sum(annual_revenue_of(i) for i in influencers),
        compliance_rate=compliance_rate(influencers),
        pending_assessments=sum(
            1 for i in influencers if compliance_status_of(i) in ("pending", "under-review")
        ),
        youtube_count=sum(1 for i in influencers if i.platform == "youtube"),
        tiktok_count=sum(1 for i in influencers if i.platform == "tiktok"),
    )


def monthly_revenue_series(influencers: List[Influencer]) -> List[MonthlyRevenuePoint]:
    # No revenue history is stored; a single snapshot must not be turned into a trend.
    return []


def platform_revenue(influencers: List[Influencer]) -> Dict[str, float]:
    """Summed annual revenue per platform, keyed by platform id"""
    return {
        platform: sum(annual_revenue_of(i) for i in influencers if i.platform == platform)
        for platform, _, _ in PLATFORM_BUCKETS
    }
