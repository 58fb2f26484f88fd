"""
Qualification config management.

The organization keeps one config row with the target tier: the minimum
tier a lead needs to count as "qualified" in listings and reports.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from database.repositories import QualificationConfigRepository

from .exceptions import ConfigNotFoundError, StaleConfigError
from .models import QualificationConfig, QualificationTier
from .tiers import is_qualified

logger = logging.getLogger(__name__)


class QualificationConfigManager:
    """
    Reads and updates the target tier singleton.

    Updates are a single conditional UPDATE that bumps a version counter.
    Pass `expected_version` (from a previous read) to make the write fail
    with StaleConfigError instead of overwriting someone else's change.
    """

    def __init__(self, session: AsyncSession):
        self.repository = QualificationConfigRepository(session)

    async def get_config(self) -> QualificationConfig:
        """
        Get the current config.

        Raises:
            ConfigNotFoundError: If the singleton row was never created
        """
        row = await self.repository.get()
        if row is None:
            raise ConfigNotFoundError()
        return self._to_config(row)

    async def set_target_tier(
        self,
        tier: QualificationTier,
        updated_by: Optional[str] = None,
        expected_version: Optional[int] = None,
    ) -> QualificationConfig:
        """
        Change the organization's target tier.

        Args:
            tier: New target tier
            updated_by: User making the change
            expected_version: Version the caller last saw, for conflict detection

        Returns:
            The updated config

        Raises:
            ConfigNotFoundError: If the singleton row does not exist
            StaleConfigError: If the row is no longer at `expected_version`
        """
        updated = await self.repository.update_target_tier(
            tier.value, updated_by=updated_by, expected_version=expected_version
        )

        if updated == 0:
            row = await self.repository.get()
            if row is None:
                raise ConfigNotFoundError()
            raise StaleConfigError(expected_version, row.version)

        config = await self.get_config()
        logger.info(
            f"Qualification target tier set to {config.target_tier.value} "
            f"(version {config.version}, by {updated_by or 'system'})"
        )
        return config

    async def ensure_config(
        self, default_tier: QualificationTier = QualificationTier.Q1
    ) -> QualificationConfig:
        """Create the singleton with `default_tier` if it is missing."""
        row = await self.repository.get()
        if row is None:
            row = await self.repository.create(default_tier.value)
            logger.info(f"Qualification config seeded with target tier {default_tier.value}")
        return self._to_config(row)

    async def is_lead_qualified(self, tier: Optional[QualificationTier]) -> bool:
        """Compare a lead's tier against the current target tier."""
        config = await self.get_config()
        return is_qualified(tier, config.target_tier)

    @staticmethod
    def _to_config(row) -> QualificationConfig:
        return QualificationConfig(
            id=row.id,
            target_tier=QualificationTier(row.target_tier),
            version=row.version,
            updated_at=row.updated_at,
            updated_by=row.updated_by,
        )
