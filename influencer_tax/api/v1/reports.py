"""GET /v1/reports/{report_type} - plain-text report downloads"""

from datetime import date
from typing import Literal
from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from influencer_tax.api.dependencies import get_settings
from influencer_tax.config import Settings
from influencer_tax.infrastructure.database.session import get_db
from influencer_tax.infrastructure.database.repositories import AssessmentRepository, InfluencerRepository
from influencer_tax.domain.reports import render_report, report_filename
from influencer_tax.infrastructure.observability.metrics import record_dashboard_query

router = APIRouter()

ReportType = Literal["tax-summary", "compliance-overview", "influencer-list", "revenue-analysis"]


@router.get("/reports/{report_type}", response_class=PlainTextResponse)
def download_report(
    report_type: ReportType,
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings),
):
    """
    Render a report as a downloadable text file.

    Returns:
        text/plain body named gra-<type>-<YYYY-MM-DD>.txt
    """
    today = date.today()
    content = render_report(
        report_type,
        influencers=InfluencerRepository(db).list(),
        assessments=AssessmentRepository(db).list(),
        authority=config.report_authority_name,
        title=config.report_title,
        generated_on=today,
    )
    record_dashboard_query(f"report_{report_type}")

    return PlainTextResponse(
        content,
        headers={"Content-Disposition": f'attachment; filename="{report_filename(report_type, today)}"'},
    )
