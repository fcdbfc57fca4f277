"""SQLAlchemy ORM models for influencers, tax assessments and audit logs"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, BigInteger, Float, DateTime, ForeignKey, Text, Uuid
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InfluencerRecord(Base):
    """Registered creator"""

    __tablename__ = "influencers"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    platform = Column(String(16), nullable=False, index=True)
    handle = Column(Text, nullable=False)
    channel_id = Column(Text, nullable=True)
    email = Column(Text, nullable=True)
    phone = Column(Text, nullable=True)

    subscribers = Column(BigInteger, nullable=True)
    total_views = Column(BigInteger, nullable=True)
    avg_engagement_rate = Column(Float, nullable=True)
    total_videos = Column(BigInteger, nullable=True)

    estimated_monthly_revenue = Column(Float, nullable=True)
    estimated_annual_revenue = Column(Float, nullable=True)
    tax_liability = Column(Float, nullable=True)
    tax_id_number = Column(Text, nullable=True)

    compliance_score = Column(Float, nullable=True)
    compliance_status = Column(String(16), nullable=True, index=True)

    region = Column(String(32), nullable=True, index=True)
    notes = Column(Text, nullable=True)
    last_assessed_at = Column(DateTime(timezone=True), nullable=True)
    last_data_refresh = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    assessments = relationship("TaxAssessmentRecord", back_populates="influencer", cascade="all, delete-orphan")


class TaxAssessmentRecord(Base):
    """Officer assessment of an influencer for a period"""

    __tablename__ = "tax_assessments"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    influencer_id = Column(
        Uuid(as_uuid=True), ForeignKey("influencers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    assessment_date = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    assessment_period_start = Column(DateTime(timezone=True), nullable=False)
    assessment_period_end = Column(DateTime(timezone=True), nullable=False)
    taxable_income = Column(Float, nullable=False)
    tax_rate = Column(Float, nullable=False)
    tax_amount = Column(Float, nullable=False)
    status = Column(String(16), nullable=False, default="draft", index=True)
    assessed_by = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    influencer = relationship("InfluencerRecord", back_populates="assessments")


class AuditLogRecord(Base):
    """Append-only activity log"""

    __tablename__ = "audit_logs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=True, index=True)
    user_name = Column(Text, nullable=True)
    action = Column(Text, nullable=False)
    entity_type = Column(Text, nullable=False, index=True)
    entity_id = Column(Text, nullable=True)
    details = Column(Text, nullable=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
