"""
Lead qualification engine.

Runs the three scorers, aggregates and classifies the total, and derives
the qualification tier. Pure computation: no I/O, no shared state, safe
to call from any number of callers at once.
"""

import logging
from typing import Iterable, Optional

from .aggregator import ScoreAggregator
from .completeness import CompletenessScorer
from .engagement import EngagementScorer
from .intent import IntentScorer
from .models import (
    Message,
    QualificationFormData,
    QualificationResult,
    ScoreBreakdown,
    TierSnapshot,
)
from .tiers import TierCalculator

logger = logging.getLogger(__name__)


class LeadQualificationEngine:
    """
    Computes score, classification and tier for a lead.

    Score composition (0-100):
    - Engagement (0-40): message volume and quick replies
    - Intent (0-30): buying phrases in the lead's messages
    - Completeness (0-30): filled intake form fields
    """

    def __init__(
        self,
        engagement_scorer: Optional[EngagementScorer] = None,
        intent_scorer: Optional[IntentScorer] = None,
        completeness_scorer: Optional[CompletenessScorer] = None,
        aggregator: Optional[ScoreAggregator] = None,
        tier_calculator: Optional[TierCalculator] = None,
    ):
        self.engagement_scorer = engagement_scorer or EngagementScorer()
        self.intent_scorer = intent_scorer or IntentScorer()
        self.completeness_scorer = completeness_scorer or CompletenessScorer()
        self.aggregator = aggregator or ScoreAggregator()
        self.tier_calculator = tier_calculator or TierCalculator()

    def score(
        self, messages: Iterable[Message], form: QualificationFormData
    ) -> ScoreBreakdown:
        """Subscores and total for a transcript and intake form."""
        messages = list(messages)
        return self.aggregator.aggregate(
            engagement=self.engagement_scorer.score(messages),
            intent=self.intent_scorer.score(messages),
            completeness=self.completeness_scorer.score(form),
        )

    def evaluate(
        self,
        messages: Iterable[Message],
        form: QualificationFormData,
        snapshot: Optional[TierSnapshot] = None,
    ) -> QualificationResult:
        """
        Full qualification of a lead.

        Args:
            messages: Conversation transcript in chronological order
            form: Intake form answers
            snapshot: Lead fields for the tier; built from `form` alone if omitted

        Returns:
            QualificationResult with breakdown, classification and tier
        """
        messages = list(messages)
        intent = self.intent_scorer.analyze(messages)
        breakdown = self.aggregator.aggregate(
            engagement=self.engagement_scorer.score(messages),
            intent=intent.score,
            completeness=self.completeness_scorer.score(form),
        )
        classification = self.aggregator.classify(breakdown.total)

        if snapshot is None:
            snapshot = TierSnapshot.from_form(form)
        tier = self.tier_calculator.calculate(snapshot)

        logger.debug(
            f"Qualification computed: {breakdown.to_dict()} "
            f"classification={classification.value} tier={tier.value if tier else None}"
        )

        return QualificationResult(
            breakdown=breakdown,
            classification=classification,
            tier=tier,
            matched_keywords=intent.matched_keywords,
            interest_hints=intent.low_matches,
        )
