"""
Lead Qualification Module for the dealership CRM.

This module turns WhatsApp conversations and intake forms into:
- Engagement, intent and completeness subscores (0-100 total)
- A hot/warm/cold classification
- A progressive data tier (Q1/Q2/Q3)
- An organization-wide target tier that defines "qualified"
"""

from .models import (
    Message,
    MessageDirection,
    QualificationConfig,
    QualificationFormData,
    QualificationResult,
    QualificationTier,
    ScoreBreakdown,
    ScoreClassification,
    TierSnapshot,
)
from .exceptions import (
    QualificationError,
    NotFoundError,
    ConfigNotFoundError,
    StaleConfigError,
)
from .engagement import EngagementScorer
from .intent import IntentScorer, IntentResult
from .completeness import CompletenessScorer
from .aggregator import ScoreAggregator
from .tiers import TierCalculator, tier_rank, is_qualified, QUALIFICATION_TIERS
from .engine import LeadQualificationEngine
from .config_manager import QualificationConfigManager
from .service import QualificationService

__all__ = [
    "Message",
    "MessageDirection",
    "QualificationConfig",
    "QualificationFormData",
    "QualificationResult",
    "QualificationTier",
    "ScoreBreakdown",
    "ScoreClassification",
    "TierSnapshot",
    "QualificationError",
    "NotFoundError",
    "ConfigNotFoundError",
    "StaleConfigError",
    "EngagementScorer",
    "IntentScorer",
    "IntentResult",
    "CompletenessScorer",
    "ScoreAggregator",
    "TierCalculator",
    "tier_rank",
    "is_qualified",
    "QUALIFICATION_TIERS",
    "LeadQualificationEngine",
    "QualificationConfigManager",
    "QualificationService",
]
