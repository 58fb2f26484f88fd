"""
Value types for the lead qualification engine.

Messages and intake forms arrive from other subsystems with any field
possibly missing; every type here accepts that and the scorers treat an
absent value as a zero contribution.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class MessageDirection(str, Enum):
    """Who sent a WhatsApp message."""
    INCOMING = "incoming"  # lead -> store
    OUTGOING = "outgoing"  # store -> lead


class ScoreClassification(str, Enum):
    """Temperature label derived from the total score."""
    HOT = "hot"
    WARM = "warm"
    COLD = "cold"


class QualificationTier(str, Enum):
    """Progressive data-sufficiency tier."""
    Q1 = "Q1"  # name + contact
    Q2 = "Q2"  # + vehicle interest + source
    Q3 = "Q3"  # + budget, payment method, timeline


@dataclass(frozen=True)
class Message:
    """A single message of a lead's conversation transcript."""
    id: str
    content: Optional[str] = None
    direction: Optional[MessageDirection] = None
    created_at: Optional[datetime] = None

    @property
    def is_incoming(self) -> bool:
        return self.direction == MessageDirection.INCOMING

    @property
    def is_outgoing(self) -> bool:
        return self.direction == MessageDirection.OUTGOING

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        """Build a message from a loosely-typed row, dropping what doesn't parse."""
        direction = data.get("direction")
        if not isinstance(direction, MessageDirection):
            try:
                direction = MessageDirection(direction)
            except ValueError:
                direction = None

        created_at = data.get("created_at")
        if isinstance(created_at, str):
            try:
                created_at = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
            except ValueError:
                created_at = None
        elif not isinstance(created_at, datetime):
            created_at = None

        content = data.get("content")
        return cls(
            id=str(data.get("id") or ""),
            content=content if isinstance(content, str) else None,
            direction=direction,
            created_at=created_at,
        )


@dataclass(frozen=True)
class QualificationFormData:
    """Structured intake answers collected by the salesperson. All optional."""
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

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TierSnapshot:
    """Lead, customer and negotiation fields the tier calculator looks at."""
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    vehicle_interest: Optional[str] = None
    source: Optional[str] = None
    budget_min: Optional[float] = None
    budget_max: Optional[float] = None
    payment_method: Optional[str] = None
    purchase_timeline: Optional[str] = None

    @classmethod
    def from_form(
        cls,
        form: QualificationFormData,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        source: Optional[str] = None,
    ) -> "TierSnapshot":
        """Merge lead contact data with the intake form answers."""
        return cls(
            name=name,
            phone=phone,
            email=email,
            vehicle_interest=form.vehicle_interest,
            source=source,
            budget_min=form.budget_min,
            budget_max=form.budget_max,
            payment_method=form.payment_method,
            purchase_timeline=form.purchase_timeline,
        )


@dataclass(frozen=True)
class ScoreBreakdown:
    """Subscores and their sum. `total` is always the sum of the three parts."""
    engagement: int = 0
    intent: int = 0
    completeness: int = 0

    @property
    def total(self) -> int:
        return self.engagement + self.intent + self.completeness

    def to_dict(self) -> Dict[str, int]:
        return {
            "engagement": self.engagement,
            "intent": self.intent,
            "completeness": self.completeness,
            "total": self.total,
        }


@dataclass(frozen=True)
class QualificationResult:
    """Everything the engine computes for one lead."""
    breakdown: ScoreBreakdown
    classification: ScoreClassification
    tier: Optional[QualificationTier] = None
    matched_keywords: List[str] = field(default_factory=list)
    interest_hints: List[str] = field(default_factory=list)

    @property
    def score(self) -> int:
        return self.breakdown.total

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "breakdown": self.breakdown.to_dict(),
            "classification": self.classification.value,
            "tier": self.tier.value if self.tier else None,
            "matched_keywords": list(self.matched_keywords),
            "interest_hints": list(self.interest_hints),
        }


@dataclass(frozen=True)
class QualificationConfig:
    """The organization-wide target tier."""
    id: str
    target_tier: QualificationTier
    version: int
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "target_tier": self.target_tier.value,
            "version": self.version,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "updated_by": self.updated_by,
        }
