"""Unit tests for plain-text report rendering"""

import pytest
from datetime import date
from conftest import make_assessment
from influencer_tax.domain.exceptions import InvalidFieldValueError
from influencer_tax.domain.reports import format_amount, render_report, report_filename

AUTHORITY = "GHANA REVENUE AUTHORITY"
TITLE = "Influencer Tax Liability Dashboard"
GENERATED = date(2026, 3, 1)


def render(report_type, influencers, assessments=None):
    return render_report(
        report_type,
        influencers,
        assessments or [],
        authority=AUTHORITY,
        title=TITLE,
        generated_on=GENERATED,
    )


def test_format_amount():
    assert format_amount(200000) == "200,000"
    assert format_amount(1234.5) == "1,234.5"
    assert format_amount(0) == "0"


def test_report_filename():
    assert report_filename("tax-summary", GENERATED) == "gra-tax-summary-2026-03-01.txt"


def test_header_present(sample_influencers):
    content = render("tax-summary", sample_influencers)

    assert content.startswith(f"\n{AUTHORITY}\n{TITLE}\n")
    assert "Generated: March 1, 2026" in content


def test_tax_summary_report(sample_influencers):
    content = render("tax-summary", sample_influencers, [make_assessment("approved")])

    assert "TAX SUMMARY REPORT" in content
    assert "Total Registered Influencers: 3" in content
    assert "Total Estimated Revenue: GH₵200,000" in content
    assert "Total Tax Liability: GH₵50,000" in content
    assert "Compliance Rate: 33%" in content
    assert "Approved Assessments: 1" in content


def test_compliance_overview_lists_every_status(sample_influencers):
    content = render("compliance-overview", sample_influencers)

    for status in ("COMPLIANT", "NON-COMPLIANT", "PENDING", "UNDER-REVIEW"):
        assert status in content
    assert "UNDER-REVIEW     0 influencer(s)" in content


def test_influencer_list_report(sample_influencers):
    content = render("influencer-list", sample_influencers)

    assert "Total Records: 3" in content
    assert "@amaserwaa" in content
    assert "GH₵120,000" in content
    # Missing revenue renders as zero
    assert content.rstrip().endswith("GH₵0")


def test_revenue_analysis_report(sample_influencers):
    content = render("revenue-analysis", sample_influencers)

    assert "YouTube:  GH₵120,000" in content
    assert "TikTok:   GH₵80,000" in content
    assert "Total:    GH₵200,000" in content


def test_unknown_report_type(sample_influencers):
    with pytest.raises(InvalidFieldValueError):
        render("payroll", sample_influencers)
