"""
SQLAlchemy ORM models for the lead qualification engine.

Persisted entities: per-negotiation qualification records and the
organization-wide qualification config.
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    Column, String, Integer, Float, Boolean, DateTime, Text, Index,
)
from sqlalchemy.orm import DeclarativeBase


def _uuid() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass


class LeadQualification(Base):
    __tablename__ = "lead_qualifications"

    id = Column(String(36), primary_key=True, default=_uuid)
    lead_id = Column(String(36), nullable=True, index=True)
    negotiation_id = Column(String(36), nullable=False, unique=True)
    qualified_by = Column(String(36), nullable=True)

    # Last computed result
    score = Column(Integer, default=0)
    engagement_score = Column(Integer, default=0)
    intent_score = Column(Integer, default=0)
    completeness_score = Column(Integer, default=0)
    classification = Column(String(10), default="cold")  # hot, warm, cold
    qualification_tier = Column(String(2), nullable=True)  # Q1, Q2, Q3

    # Raw form answers
    vehicle_interest = Column(String(255), nullable=True)
    budget_min = Column(Float, nullable=True)
    budget_max = Column(Float, nullable=True)
    down_payment = Column(Float, nullable=True)
    max_installment = Column(Float, nullable=True)
    payment_method = Column(String(30), nullable=True)
    has_trade_in = Column(Boolean, default=False)
    trade_in_vehicle = Column(String(255), nullable=True)
    trade_in_value = Column(Float, nullable=True)
    purchase_timeline = Column(String(30), nullable=True)
    decision_maker = Column(Boolean, default=False)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("ix_lq_classification_tier", "classification", "qualification_tier"),
    )


class QualificationConfig(Base):
    """Singleton row holding the target tier."""
    __tablename__ = "qualification_config"

    id = Column(String(36), primary_key=True, default=_uuid)
    target_tier = Column(String(2), nullable=False, default="Q1")
    version = Column(Integer, nullable=False, default=1)
    updated_at = Column(DateTime, default=datetime.utcnow)
    updated_by = Column(String(36), nullable=True)
