"""
Lead Qualification API Routes.
"""

import logging
from datetime import datetime
from typing import List, Dict, Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from database.session import get_db
from qualification import (
    LeadQualificationEngine,
    Message,
    QualificationFormData,
    QualificationService,
    QUALIFICATION_TIERS,
    ScoreClassification,
    TierSnapshot,
)
from qualification.aggregator import (
    classification_label,
    classification_message,
    classification_color,
)

logger = logging.getLogger(__name__)

router = APIRouter()

engine = LeadQualificationEngine()


# ── Models ────────────────────────────────────────────

class MessageIn(BaseModel):
    id: str = ""
    content: Optional[str] = None
    direction: Optional[str] = None
    created_at: Optional[datetime] = None


class FormIn(BaseModel):
    vehicle_interest: Optional[str] = None
    budget_min: Optional[float] = None
    budget_max: Optional[float] = None
    down_payment: Optional[float] = None
    max_installment: Optional[float] = None
    payment_method: Optional[str] = None
    purchase_timeline: Optional[str] = None
    decision_maker: Optional[bool] = None
    has_trade_in: Optional[bool] = None
    trade_in_vehicle: Optional[str] = None
    trade_in_value: Optional[float] = None
    notes: Optional[str] = None


class LeadIn(BaseModel):
    """Lead fields that feed the tier but are not part of the form."""
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    source: Optional[str] = None


class ScoreRequest(BaseModel):
    messages: List[MessageIn] = []
    form: FormIn = Field(default_factory=FormIn)
    lead: Optional[LeadIn] = None


class QualifyRequest(ScoreRequest):
    lead_id: Optional[str] = None
    qualified_by: Optional[str] = None


class ScoreResponse(BaseModel):
    engagement: int
    intent: int
    completeness: int
    total: int
    classification: str
    label: str
    message: str
    color: str
    tier: Optional[str]
    matched_keywords: List[str] = []
    interest_hints: List[str] = []


class QualificationRecord(BaseModel):
    id: str
    negotiation_id: str
    lead_id: Optional[str]
    qualified_by: Optional[str]
    score: int
    engagement_score: int
    intent_score: int
    completeness_score: int
    classification: str
    qualification_tier: Optional[str]
    vehicle_interest: Optional[str]
    budget_min: Optional[float]
    budget_max: Optional[float]
    down_payment: Optional[float]
    max_installment: Optional[float]
    payment_method: Optional[str]
    has_trade_in: bool
    trade_in_vehicle: Optional[str]
    trade_in_value: Optional[float]
    purchase_timeline: Optional[str]
    decision_maker: bool
    notes: Optional[str]
    created_at: Optional[str]
    updated_at: Optional[str]


# ── Helpers ───────────────────────────────────────────

def _to_inputs(request: ScoreRequest):
    messages = [Message.from_dict(m.model_dump()) for m in request.messages]
    form = QualificationFormData(**request.form.model_dump())
    lead = request.lead or LeadIn()
    snapshot = TierSnapshot.from_form(
        form, name=lead.name, phone=lead.phone, email=lead.email, source=lead.source
    )
    return messages, form, snapshot


def _score_response(result) -> ScoreResponse:
    breakdown = result.breakdown
    return ScoreResponse(
        engagement=breakdown.engagement,
        intent=breakdown.intent,
        completeness=breakdown.completeness,
        total=breakdown.total,
        classification=result.classification.value,
        label=classification_label(result.classification),
        message=classification_message(result.classification),
        color=classification_color(result.classification),
        tier=result.tier.value if result.tier else None,
        matched_keywords=result.matched_keywords,
        interest_hints=result.interest_hints,
    )


def _record_response(record) -> QualificationRecord:
    return QualificationRecord(
        id=record.id,
        negotiation_id=record.negotiation_id,
        lead_id=record.lead_id,
        qualified_by=record.qualified_by,
        score=record.score,
        engagement_score=record.engagement_score,
        intent_score=record.intent_score,
        completeness_score=record.completeness_score,
        classification=record.classification,
        qualification_tier=record.qualification_tier,
        vehicle_interest=record.vehicle_interest,
        budget_min=record.budget_min,
        budget_max=record.budget_max,
        down_payment=record.down_payment,
        max_installment=record.max_installment,
        payment_method=record.payment_method,
        has_trade_in=bool(record.has_trade_in),
        trade_in_vehicle=record.trade_in_vehicle,
        trade_in_value=record.trade_in_value,
        purchase_timeline=record.purchase_timeline,
        decision_maker=bool(record.decision_maker),
        notes=record.notes,
        created_at=record.created_at.isoformat() if record.created_at else None,
        updated_at=record.updated_at.isoformat() if record.updated_at else None,
    )


# ── Endpoints ─────────────────────────────────────────

@router.post("/qualification/score", response_model=ScoreResponse)
async def score_lead(request: ScoreRequest):
    """Score a transcript and intake form without storing anything."""
    messages, form, snapshot = _to_inputs(request)
    result = engine.evaluate(messages, form, snapshot)
    return _score_response(result)


@router.get("/qualification/tiers")
async def list_tiers() -> List[Dict[str, Any]]:
    """Tier labels, colors and requirements for display."""
    return [info.to_dict() for info in QUALIFICATION_TIERS.values()]


@router.get("/qualification/leads", response_model=List[QualificationRecord])
async def list_qualifications(
    classification: ScoreClassification,
    limit: int = Query(default=50, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
):
    """Stored qualifications with a classification, highest score first."""
    records = await QualificationService(db, engine).list_by_classification(
        classification, limit=limit
    )
    return [_record_response(r) for r in records]


@router.get("/negotiations/{negotiation_id}/qualification", response_model=QualificationRecord)
async def get_qualification(negotiation_id: str, db: AsyncSession = Depends(get_db)):
    """Get the stored qualification of a negotiation."""
    record = await QualificationService(db, engine).get(negotiation_id)
    if not record:
        raise HTTPException(status_code=404, detail="Qualification not found")
    return _record_response(record)


@router.put("/negotiations/{negotiation_id}/qualification", response_model=QualificationRecord)
async def qualify_negotiation(
    negotiation_id: str,
    request: QualifyRequest,
    db: AsyncSession = Depends(get_db),
):
    """Compute and store (create or overwrite) a negotiation's qualification."""
    messages, form, snapshot = _to_inputs(request)
    record, _ = await QualificationService(db, engine).qualify(
        negotiation_id,
        messages,
        form,
        snapshot=snapshot,
        lead_id=request.lead_id,
        qualified_by=request.qualified_by,
    )
    return _record_response(record)
