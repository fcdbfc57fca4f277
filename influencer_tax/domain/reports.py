"""Plain-text report export built on top of the dashboard aggregations"""

from datetime import date
from typing import List, Optional

from influencer_tax.domain.exceptions import InvalidFieldValueError
from influencer_tax.domain.metrics import (
    annual_revenue_of,
    build_dashboard_summary,
    compliance_breakdown,
    compliance_status_of,
    platform_revenue,
)
from influencer_tax.domain.models import Influencer, TaxAssessment

REPORT_TYPES = ("tax-summary", "compliance-overview", "influencer-list", "revenue-analysis")

RULE = "━" * 45
CURRENCY = "GH₵"


def format_amount(value: float) -> str:
    """Thousands-separated amount without trailing zero decimals (1234.50 -> 1,234.5)"""
    text = f"{value:,.2f}"
    return text.rstrip("0").rstrip(".")


def report_filename(report_type: str, on: Optional[date] = None) -> str:
    on = on or date.today()
    return f"gra-{report_type}-{on.isoformat()}.txt"


def _header(authority: str, title: str, generated_on: date) -> str:
    generated = f"{generated_on:%B} {generated_on.day}, {generated_on.year}"
    return f"\n{authority}\n{title}\n{RULE}\nGenerated: {generated}\n{RULE}\n\n"


def _tax_summary(influencers: List[Influencer], assessments: List[TaxAssessment]) -> str:
    summary = build_dashboard_summary(influencers, assessments)
    return (
        "TAX SUMMARY REPORT\n\n"
        f"Total Registered Influencers: {summary.total_influencers}\n"
        f"Total Estimated Revenue: {CURRENCY}{format_amount(summary.total_estimated_revenue)}\n"
        f"Total Tax Liability: {CURRENCY}{format_amount(summary.total_tax_liability)}\n"
        f"Compliance Rate: {summary.compliance_rate}%\n"
        f"Pending Assessments: {summary.pending_assessments}\n"
        f"Approved Assessments: {summary.approved_assessments}\n"
        f"Disputed Assessments: {summary.disputed_assessments}\n"
    )


def _compliance_overview(influencers: List[Influencer]) -> str:
    lines = [
        f"  {c.status.upper():<16} {c.count} influencer(s)"
        for c in compliance_breakdown(influencers)
    ]
    return "COMPLIANCE OVERVIEW\n\nStatus Breakdown:\n" + "\n".join(lines) + "\n"


def _influencer_list(influencers: List[Influencer]) -> str:
    columns = f"{'Name':<25} {'Platform':<10} {'Handle':<20} {'Status':<15} Est. Revenue"
    rows = [
        f"{i.name:<25} {i.platform:<10} @{i.handle:<19} {compliance_status_of(i):<15} "
        f"{CURRENCY}{format_amount(annual_revenue_of(i))}"
        for i in influencers
    ]
    return (
        "INFLUENCER REGISTRY\n\n"
        f"Total Records: {len(influencers)}\n\n"
        f"{columns}\n{'─' * 90}\n" + "\n".join(rows) + "\n"
    )


def _revenue_analysis(influencers: List[Influencer]) -> str:
    revenue = platform_revenue(influencers)
    total = revenue["youtube"] + revenue["tiktok"]
    return (
        "REVENUE ANALYSIS\n\n"
        "By Platform:\n"
        f"  YouTube:  {CURRENCY}{format_amount(revenue['youtube'])}\n"
        f"  TikTok:   {CURRENCY}{format_amount(revenue['tiktok'])}\n"
        f"  Total:    {CURRENCY}{format_amount(total)}\n"
    )


def render_report(
    report_type: str,
    influencers: List[Influencer],
    assessments: List[TaxAssessment],
    authority: str,
    title: str,
    generated_on: Optional[date] = None,
) -> str:
    """
    Render one of the downloadable text reports.

    Raises:
        InvalidFieldValueError: If report_type is not one of REPORT_TYPES
    """
    if report_type == "tax-summary":
        body = _tax_summary(influencers, assessments)
    elif report_type == "compliance-overview":
        body = _compliance_overview(influencers)
    elif report_type == "influencer-list":
        body = _influencer_list(influencers)
    elif report_type == "revenue-analysis":
        body = _revenue_analysis(influencers)
    else:
        raise InvalidFieldValueError("report_type", report_type)

    return _header(authority, title, generated_on or date.today()) + body
