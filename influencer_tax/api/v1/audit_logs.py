"""/v1/audit-logs - activity log endpoints"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from influencer_tax.api.v1.schemas import AuditLogCreate, AuditLogResponse
from influencer_tax.api.dependencies import get_settings
from influencer_tax.config import Settings
from influencer_tax.infrastructure.database.session import get_db
from influencer_tax.infrastructure.database.repositories import AuditLogRepository

router = APIRouter()


@router.post("/audit-logs", response_model=AuditLogResponse, status_code=201)
def log_activity(request_body: AuditLogCreate, db: Session = Depends(get_db)):
    """Append an activity entry; the timestamp is assigned by the service"""
    entry = AuditLogRepository(db).log_activity(**request_body.model_dump())
    db.commit()
    return entry


@router.get("/audit-logs", response_model=List[AuditLogResponse])
def get_recent_logs(
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings),
):
    """Most recent entries first"""
    return AuditLogRepository(db).recent(limit or config.recent_logs_default_limit)


@router.get("/audit-logs/entity/{entity_type}", response_model=List[AuditLogResponse])
def get_logs_by_entity(
    entity_type: str,
    entity_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return AuditLogRepository(db).by_entity(entity_type, entity_id)
