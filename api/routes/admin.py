"""
Admin API Routes: qualification target tier.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from database.session import get_db
from qualification import (
    ConfigNotFoundError,
    QualificationConfigManager,
    QualificationTier,
    StaleConfigError,
    QUALIFICATION_TIERS,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ── Models ────────────────────────────────────────────

class ConfigResponse(BaseModel):
    id: str
    target_tier: str
    target_label: str
    version: int
    updated_at: Optional[str]
    updated_by: Optional[str]


class ConfigUpdate(BaseModel):
    target_tier: QualificationTier
    updated_by: Optional[str] = None
    expected_version: Optional[int] = None


def _config_response(config) -> ConfigResponse:
    data = config.to_dict()
    return ConfigResponse(
        target_label=QUALIFICATION_TIERS[config.target_tier].label,
        **data,
    )


# ── Endpoints ─────────────────────────────────────────

@router.get("/qualification/config", response_model=ConfigResponse)
async def get_qualification_config(db: AsyncSession = Depends(get_db)):
    """Current organization-wide target tier."""
    try:
        config = await QualificationConfigManager(db).get_config()
    except ConfigNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _config_response(config)


@router.put("/qualification/config", response_model=ConfigResponse)
async def update_qualification_config(
    request: ConfigUpdate, db: AsyncSession = Depends(get_db)
):
    """Change the target tier. Send `expected_version` to detect conflicting edits."""
    try:
        config = await QualificationConfigManager(db).set_target_tier(
            request.target_tier,
            updated_by=request.updated_by,
            expected_version=request.expected_version,
        )
    except ConfigNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StaleConfigError as e:
        logger.warning(f"Rejected stale qualification config update: {e}")
        raise HTTPException(status_code=409, detail=str(e))
    return _config_response(config)
