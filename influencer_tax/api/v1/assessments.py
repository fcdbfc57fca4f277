"""/v1/assessments - tax assessment endpoints"""

import time
import uuid
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from influencer_tax.api.v1.schemas import (
    AssessmentCreate,
    AssessmentResponse,
    AssessmentStatus,
    AssessmentStatusUpdate,
)
from influencer_tax.api.dependencies import Actor, get_actor, get_request_id
from influencer_tax.infrastructure.database.session import get_db
from influencer_tax.infrastructure.database.repositories import AssessmentRepository, AuditLogRepository
from influencer_tax.domain.models import TaxAssessment
from influencer_tax.domain.tax import compute_assessment_tax, prepare_new_assessment
from influencer_tax.domain.exceptions import EntityNotFoundError, InvalidFieldValueError
from influencer_tax.infrastructure.observability.metrics import record_mutation
from influencer_tax.infrastructure.observability.logging import log_mutation

router = APIRouter()


@router.get("/assessments", response_model=List[AssessmentResponse])
def list_assessments(
    status: Optional[AssessmentStatus] = Query(None),
    influencer_id: Optional[uuid.UUID] = Query(None),
    db: Session = Depends(get_db),
):
    """Assessments newest first, optionally for one influencer or one status"""
    repo = AssessmentRepository(db)
    if influencer_id:
        assessments = repo.list_for_influencer(influencer_id)
        return [a for a in assessments if status is None or a.status == status]
    return repo.list(status=status)


@router.post("/assessments", response_model=AssessmentResponse, status_code=201)
def create_assessment(
    request_body: AssessmentCreate,
    request: Request,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    """Record an assessment; the tax amount is derived from income and rate when omitted"""
    start_time = time.time()
    request_id = get_request_id(request)

    tax_amount = request_body.tax_amount
    if tax_amount is None:
        tax_amount = compute_assessment_tax(request_body.taxable_income, request_body.tax_rate)

    try:
        assessment = prepare_new_assessment(
            TaxAssessment(
                influencer_id=request_body.influencer_id,
                assessment_period_start=request_body.assessment_period_start,
                assessment_period_end=request_body.assessment_period_end,
                taxable_income=request_body.taxable_income,
                tax_rate=request_body.tax_rate,
                tax_amount=tax_amount,
                status=request_body.status,
                assessed_by=request_body.assessed_by or actor.user_id,
                notes=request_body.notes,
            )
        )
        created = AssessmentRepository(db).create(assessment)
        AuditLogRepository(db).log_activity(
            action="created_assessment",
            entity_type="assessment",
            entity_id=str(created.id),
            details=f"Assessed {tax_amount} on income {request_body.taxable_income}",
            user_id=actor.user_id,
            user_name=actor.user_name,
        )
        db.commit()

    except EntityNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Influencer not found")

    except InvalidFieldValueError as e:
        db.rollback()
        logging.warning(f"Rejected assessment: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_mutation("created_assessment")
    log_mutation(request_id, "created_assessment", "assessment", str(created.id), (time.time() - start_time) * 1000)
    return created


@router.patch("/assessments/{assessment_id}", response_model=AssessmentResponse)
def update_assessment_status(
    assessment_id: uuid.UUID,
    request_body: AssessmentStatusUpdate,
    request: Request,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    """Move an assessment between draft, pending, approved and disputed"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        updated = AssessmentRepository(db).update_status(
            assessment_id,
            request_body.status,
            notes=request_body.notes,
        )
        AuditLogRepository(db).log_activity(
            action="updated_assessment",
            entity_type="assessment",
            entity_id=str(assessment_id),
            details=f"Status set to {request_body.status}",
            user_id=actor.user_id,
            user_name=actor.user_name,
        )
        db.commit()

    except EntityNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Assessment not found")

    except InvalidFieldValueError as e:
        db.rollback()
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_mutation("updated_assessment")
    log_mutation(request_id, "updated_assessment", "assessment", str(assessment_id), (time.time() - start_time) * 1000)
    return updated
