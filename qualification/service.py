"""
Qualification persistence service.

Computes a lead's qualification fully in memory, then creates or updates
the negotiation's LeadQualification record. Database errors propagate to
the caller unchanged.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from database.models import LeadQualification
from database.repositories import LeadQualificationRepository

from .engine import LeadQualificationEngine
from .models import (
    Message,
    QualificationFormData,
    QualificationResult,
    ScoreClassification,
    TierSnapshot,
)

logger = logging.getLogger(__name__)


class QualificationService:
    """Stores engine results per negotiation."""

    def __init__(
        self,
        session: AsyncSession,
        engine: Optional[LeadQualificationEngine] = None,
    ):
        self.repository = LeadQualificationRepository(session)
        self.engine = engine or LeadQualificationEngine()

    async def qualify(
        self,
        negotiation_id: str,
        messages: Iterable[Message],
        form: QualificationFormData,
        snapshot: Optional[TierSnapshot] = None,
        lead_id: Optional[str] = None,
        qualified_by: Optional[str] = None,
    ) -> Tuple[LeadQualification, QualificationResult]:
        """
        Qualify a negotiation's lead and persist the result.

        The first call for a negotiation creates its record; later calls
        overwrite the scores, tier and form answers of the same record.

        Returns:
            (stored record, computed result)
        """
        result = self.engine.evaluate(messages, form, snapshot)
        values = self._record_values(result, form)

        record = await self.repository.get_by_negotiation(negotiation_id)
        if record is None:
            record = await self.repository.create(
                negotiation_id, lead_id=lead_id, qualified_by=qualified_by, **values
            )
            logger.info(
                f"Qualification created for negotiation {negotiation_id}: "
                f"score={result.score}, {result.classification.value}"
            )
        else:
            if lead_id is not None:
                values["lead_id"] = lead_id
            if qualified_by is not None:
                values["qualified_by"] = qualified_by
            record = await self.repository.update(record, **values)
            logger.info(
                f"Qualification updated for negotiation {negotiation_id}: "
                f"score={result.score}, {result.classification.value}"
            )
        return record, result

    async def get(self, negotiation_id: str) -> Optional[LeadQualification]:
        return await self.repository.get_by_negotiation(negotiation_id)

    async def list_by_classification(
        self, classification: ScoreClassification, limit: int = 50
    ) -> List[LeadQualification]:
        """Stored qualifications with a classification, best score first."""
        return await self.repository.list_by_classification(
            ScoreClassification(classification).value, limit=limit
        )

    @staticmethod
    def _record_values(result: QualificationResult, form: QualificationFormData) -> dict:
        values = {
            "score": result.score,
            "engagement_score": result.breakdown.engagement,
            "intent_score": result.breakdown.intent,
            "completeness_score": result.breakdown.completeness,
            "classification": result.classification.value,
            "qualification_tier": result.tier.value if result.tier else None,
        }
        values.update(form.to_dict())
        values["has_trade_in"] = bool(form.has_trade_in)
        values["decision_maker"] = bool(form.decision_maker)
        return values
