"""/v1/influencers - influencer registry endpoints"""

import time
import uuid
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from influencer_tax.api.v1.schemas import (
    ComplianceStatus,
    InfluencerCreate,
    InfluencerResponse,
    InfluencerStatsResponse,
    InfluencerUpdate,
    Platform,
)
from influencer_tax.api.dependencies import Actor, get_actor, get_request_id, get_settings
from influencer_tax.config import Settings
from influencer_tax.infrastructure.database.session import get_db
from influencer_tax.infrastructure.database.repositories import AuditLogRepository, InfluencerRepository
from influencer_tax.domain.models import Influencer
from influencer_tax.domain.metrics import influencer_stats
from influencer_tax.domain.tax import clean_updates, prepare_new_influencer
from influencer_tax.domain.exceptions import EntityNotFoundError, InvalidFieldValueError, MissingRequiredFieldError
from influencer_tax.infrastructure.observability.metrics import record_dashboard_query, record_mutation
from influencer_tax.infrastructure.observability.logging import log_mutation

router = APIRouter()


@router.get("/influencers", response_model=List[InfluencerResponse])
def list_influencers(
    platform: Optional[Platform] = Query(None),
    compliance_status: Optional[ComplianceStatus] = Query(None),
    region: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """List influencers, optionally filtered by platform, compliance status and region"""
    return InfluencerRepository(db).list(
        platform=platform,
        compliance_status=compliance_status,
        region=region,
    )


@router.get("/influencers/search", response_model=List[InfluencerResponse])
def search_influencers(
    q: str = Query("", description="Name or handle fragment"),
    db: Session = Depends(get_db),
):
    return InfluencerRepository(db).search(q)


@router.get("/influencers/stats", response_model=InfluencerStatsResponse)
def get_influencer_stats(db: Session = Depends(get_db)):
    """Registry totals, compliance rate and per-platform counts"""
    stats = influencer_stats(InfluencerRepository(db).list())
    record_dashboard_query("influencer_stats", stats.compliance_rate)
    return stats


@router.get("/influencers/{influencer_id}", response_model=InfluencerResponse)
def get_influencer(influencer_id: uuid.UUID, db: Session = Depends(get_db)):
    influencer = InfluencerRepository(db).get(influencer_id)
    if not influencer:
        raise HTTPException(status_code=404, detail="Influencer not found")
    return influencer


@router.post("/influencers", response_model=InfluencerResponse, status_code=201)
def create_influencer(
    request_body: InfluencerCreate,
    request: Request,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
    config: Settings = Depends(get_settings),
):
    """
    Register an influencer.

    Flow:
    1. Apply the create contract (required fields, derived revenue and
       liability, default compliance status, refresh stamp)
    2. Persist the record
    3. Append an audit log entry
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        influencer = prepare_new_influencer(
            Influencer(**request_body.model_dump()),
            rate=config.flat_tax_rate,
        )
        created = InfluencerRepository(db).create(influencer)
        AuditLogRepository(db).log_activity(
            action="created_influencer",
            entity_type="influencer",
            entity_id=str(created.id),
            details=f"Registered {created.name} (@{created.handle}) on {created.platform}",
            user_id=actor.user_id,
            user_name=actor.user_name,
        )
        db.commit()

    except (MissingRequiredFieldError, InvalidFieldValueError) as e:
        db.rollback()
        logging.warning(f"Rejected influencer: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_mutation("created_influencer")
    log_mutation(request_id, "created_influencer", "influencer", str(created.id), (time.time() - start_time) * 1000)
    return created


@router.patch("/influencers/{influencer_id}", response_model=InfluencerResponse)
def update_influencer(
    influencer_id: uuid.UUID,
    request_body: InfluencerUpdate,
    request: Request,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    """Partially update an influencer; omitted and null fields keep their stored values"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        changes = clean_updates(request_body.model_dump(exclude_unset=True))
        updated = InfluencerRepository(db).update(influencer_id, changes)
        AuditLogRepository(db).log_activity(
            action="updated_influencer",
            entity_type="influencer",
            entity_id=str(influencer_id),
            details=f"Updated {', '.join(sorted(changes)) or 'nothing'}",
            user_id=actor.user_id,
            user_name=actor.user_name,
        )
        db.commit()

    except EntityNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Influencer not found")

    except (MissingRequiredFieldError, InvalidFieldValueError) as e:
        db.rollback()
        logging.warning(f"Rejected update: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_mutation("updated_influencer")
    log_mutation(request_id, "updated_influencer", "influencer", str(influencer_id), (time.time() - start_time) * 1000)
    return updated


@router.delete("/influencers/{influencer_id}", status_code=204)
def delete_influencer(
    influencer_id: uuid.UUID,
    request: Request,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    """Delete an influencer and its assessments; unknown ids answer 404"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        InfluencerRepository(db).delete(influencer_id)
        AuditLogRepository(db).log_activity(
            action="deleted_influencer",
            entity_type="influencer",
            entity_id=str(influencer_id),
            user_id=actor.user_id,
            user_name=actor.user_name,
        )
        db.commit()

    except EntityNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Influencer not found")

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_mutation("deleted_influencer")
    log_mutation(request_id, "deleted_influencer", "influencer", str(influencer_id), (time.time() - start_time) * 1000)
    return Response(status_code=204)
