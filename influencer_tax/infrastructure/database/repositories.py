"""Data access layer for influencers, tax assessments and audit logs"""

import uuid
from dataclasses import asdict
from typing import Any, Dict, List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from influencer_tax.infrastructure.database.models import (
    AuditLogRecord,
    InfluencerRecord,
    TaxAssessmentRecord,
)
from influencer_tax.domain.exceptions import EntityNotFoundError, InvalidFieldValueError
from influencer_tax.domain.models import ASSESSMENT_STATUSES, AuditLogEntry, Influencer, TaxAssessment

_INFLUENCER_FIELDS = [c.name for c in InfluencerRecord.__table__.columns]
_ASSESSMENT_FIELDS = [c.name for c in TaxAssessmentRecord.__table__.columns]
_AUDIT_FIELDS = [c.name for c in AuditLogRecord.__table__.columns]

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so a search term matches literally"""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def to_influencer(record: InfluencerRecord) -> Influencer:
    return Influencer(**{name: getattr(record, name) for name in _INFLUENCER_FIELDS})


def to_assessment(record: TaxAssessmentRecord) -> TaxAssessment:
    return TaxAssessment(**{name: getattr(record, name) for name in _ASSESSMENT_FIELDS})


def to_audit_entry(record: AuditLogRecord) -> AuditLogEntry:
    return AuditLogEntry(**{name: getattr(record, name) for name in _AUDIT_FIELDS})


class InfluencerRepository:
    """Repository for influencer records"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, influencer: Influencer) -> Influencer:
        """Persist an influencer that has already passed the create contract"""
        values = {k: v for k, v in asdict(influencer).items() if k in _INFLUENCER_FIELDS and v is not None}
        record = InfluencerRecord(**values)
        self.db.add(record)
        self.db.flush()  # Get ID and defaults without committing
        return to_influencer(record)

    def _get_record(self, influencer_id: uuid.UUID) -> InfluencerRecord:
        record = self.db.get(InfluencerRecord, influencer_id)
        if record is None:
            raise EntityNotFoundError("influencer", influencer_id)
        return record

    def get(self, influencer_id: uuid.UUID) -> Optional[Influencer]:
        record = self.db.get(InfluencerRecord, influencer_id)
        return to_influencer(record) if record else None

    def list(
        self,
        platform: Optional[str] = None,
        compliance_status: Optional[str] = None,
        region: Optional[str] = None,
    ) -> List[Influencer]:
        """Full scan, narrowed by any of the indexed filters supplied"""
        query = self.db.query(InfluencerRecord)
        if platform:
            query = query.filter(InfluencerRecord.platform == platform)
        if compliance_status:
            query = query.filter(InfluencerRecord.compliance_status == compliance_status)
        if region:
            query = query.filter(InfluencerRecord.region == region)
        return [to_influencer(r) for r in query.order_by(InfluencerRecord.created_at).all()]

    def search(self, term: str) -> List[Influencer]:
        """Case-insensitive match on name or handle; a blank term returns everyone"""
        term = term.strip()
        if not term:
            return self.list()

        pattern = f"%{escape_like(term)}%"
        records = (
            self.db.query(InfluencerRecord)
            .filter(
                or_(
                    InfluencerRecord.name.ilike(pattern, escape=LIKE_ESCAPE),
                    InfluencerRecord.handle.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
            .order_by(InfluencerRecord.created_at)
            .all()
        )
        return [to_influencer(r) for r in records]

    def update(self, influencer_id: uuid.UUID, changes: Dict[str, Any]) -> Influencer:
        """
        Patch only the supplied fields.

        None values are skipped so an unset field never clears stored data.

        Raises:
            EntityNotFoundError: If no influencer has this id
        """
        record = self._get_record(influencer_id)
        for name, value in changes.items():
            if value is None or name not in _INFLUENCER_FIELDS or name == "id":
                continue
            setattr(record, name, value)
        self.db.flush()
        return to_influencer(record)

    def delete(self, influencer_id: uuid.UUID) -> None:
        """
        Raises:
            EntityNotFoundError: If no influencer has this id
        """
        record = self._get_record(influencer_id)
        self.db.delete(record)
        self.db.flush()


class AssessmentRepository:
    """Repository for tax assessments"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, assessment: TaxAssessment) -> TaxAssessment:
        if self.db.get(InfluencerRecord, assessment.influencer_id) is None:
            raise EntityNotFoundError("influencer", assessment.influencer_id)

        values = {k: v for k, v in asdict(assessment).items() if v is not None}
        record = TaxAssessmentRecord(**values)
        self.db.add(record)
        self.db.flush()
        return to_assessment(record)

    def list(self, status: Optional[str] = None) -> List[TaxAssessment]:
        query = self.db.query(TaxAssessmentRecord)
        if status:
            query = query.filter(TaxAssessmentRecord.status == status)
        return [to_assessment(r) for r in query.order_by(TaxAssessmentRecord.assessment_date.desc()).all()]

    def list_for_influencer(self, influencer_id: uuid.UUID) -> List[TaxAssessment]:
        records = (
            self.db.query(TaxAssessmentRecord)
            .filter(TaxAssessmentRecord.influencer_id == influencer_id)
            .order_by(TaxAssessmentRecord.assessment_date.desc())
            .all()
        )
        return [to_assessment(r) for r in records]

    def update_status(
        self,
        assessment_id: uuid.UUID,
        status: str,
        notes: Optional[str] = None,
    ) -> TaxAssessment:
        """
        Move an assessment to another status.

        Raises:
            InvalidFieldValueError: If status is not a known assessment status
            EntityNotFoundError: If no assessment has this id
        """
        if status not in ASSESSMENT_STATUSES:
            raise InvalidFieldValueError("status", status)

        record = self.db.get(TaxAssessmentRecord, assessment_id)
        if record is None:
            raise EntityNotFoundError("assessment", assessment_id)

        record.status = status
        if notes is not None:
            record.notes = notes
        self.db.flush()
        return to_assessment(record)


class AuditLogRepository:
    """Repository for the append-only audit log"""

    def __init__(self, db: Session):
        self.db = db

    def log_activity(
        self,
        action: str,
        entity_type: str,
        entity_id: Optional[str] = None,
        details: Optional[str] = None,
        user_id: Optional[str] = None,
        user_name: Optional[str] = None,
    ) -> AuditLogEntry:
        """Append an entry; the timestamp is assigned here, never by the caller"""
        record = AuditLogRecord(
            user_id=user_id,
            user_name=user_name,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            details=details,
        )
        self.db.add(record)
        self.db.flush()
        return to_audit_entry(record)

    def recent(self, limit: int = 20) -> List[AuditLogEntry]:
        """Newest entries first"""
        records = (
            self.db.query(AuditLogRecord)
            .order_by(AuditLogRecord.timestamp.desc())
            .limit(limit)
            .all()
        )
        return [to_audit_entry(r) for r in records]

    def by_entity(self, entity_type: str, entity_id: Optional[str] = None) -> List[AuditLogEntry]:
        """Entries for an entity type, optionally a single entity, newest first"""
        query = self.db.query(AuditLogRecord).filter(AuditLogRecord.entity_type == entity_type)
        if entity_id:
            query = query.filter(AuditLogRecord.entity_id == entity_id)
        return [to_audit_entry(r) for r in query.order_by(AuditLogRecord.timestamp.desc()).all()]
