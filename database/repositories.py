"""
Repository classes for the qualification data access layer.

Each repository encapsulates CRUD operations for a specific model.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .models import LeadQualification, QualificationConfig

logger = logging.getLogger(__name__)


class LeadQualificationRepository:
    """Data access for per-negotiation qualification records."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, negotiation_id: str, **kwargs) -> LeadQualification:
        record = LeadQualification(negotiation_id=negotiation_id, **kwargs)
        self.session.add(record)
        await self.session.flush()
        return record

    async def update(self, record: LeadQualification, **kwargs) -> LeadQualification:
        for k, v in kwargs.items():
            if hasattr(record, k):
                setattr(record, k, v)
        record.updated_at = datetime.utcnow()
        await self.session.flush()
        return record

    async def get_by_negotiation(self, negotiation_id: str) -> Optional[LeadQualification]:
        result = await self.session.execute(
            select(LeadQualification).where(LeadQualification.negotiation_id == negotiation_id)
        )
        return result.scalar_one_or_none()

    async def list_by_classification(
        self, classification: str, limit: int = 50
    ) -> List[LeadQualification]:
        result = await self.session.execute(
            select(LeadQualification)
            .where(LeadQualification.classification == classification)
            .order_by(LeadQualification.score.desc())
            .limit(limit)
        )
        return list(result.scalars().all())


class QualificationConfigRepository:
    """Data access for the qualification config singleton."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self) -> Optional[QualificationConfig]:
        result = await self.session.execute(
            select(QualificationConfig).order_by(QualificationConfig.id).limit(1)
        )
        return result.scalar_one_or_none()

    async def create(
        self, target_tier: str, updated_by: Optional[str] = None
    ) -> QualificationConfig:
        config = QualificationConfig(
            target_tier=target_tier,
            version=1,
            updated_at=datetime.utcnow(),
            updated_by=updated_by,
        )
        self.session.add(config)
        await self.session.flush()
        return config

    async def update_target_tier(
        self,
        target_tier: str,
        updated_by: Optional[str] = None,
        expected_version: Optional[int] = None,
    ) -> int:
        """
        Set the target tier in a single conditional UPDATE.

        The version is bumped in the same statement. When `expected_version`
        is given, the row is only touched if it still carries that version.

        Returns:
            Number of rows updated (0 or 1)
        """
        stmt = update(QualificationConfig).values(
            target_tier=target_tier,
            updated_at=datetime.utcnow(),
            updated_by=updated_by,
            version=QualificationConfig.version + 1,
        )
        if expected_version is not None:
            stmt = stmt.where(QualificationConfig.version == expected_version)

        result = await self.session.execute(
            stmt.execution_options(synchronize_session=False)
        )
        await self.session.flush()
        # Drop cached identities so the next read sees the new row state
        self.session.expire_all()
        return result.rowcount
