"""
Per-SRO risk scoring profiles.

Each SRO can calibrate its own factor weights and country overrides
(profile name "Standard" unless stated otherwise). Resolution order for
a batch recompute: explicit request values → stored profile → defaults.
"""
from __future__ import annotations

from typing import Optional

import structlog
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from compliance_engine.models.score_records import RiskScoringProfile
from compliance_engine.schemas.risk_request import RiskWeights
from compliance_engine.scoring.customer_risk import DEFAULT_WEIGHTS

logger = structlog.get_logger()


async def load_profile(db: AsyncSession, sro: str, name: str) -> Optional[RiskScoringProfile]:
    stmt = select(RiskScoringProfile).where(
        RiskScoringProfile.sro == sro,
        RiskScoringProfile.name == name,
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


def profile_weights(profile: Optional[RiskScoringProfile]) -> RiskWeights:
    if profile is None or not profile.weights:
        return DEFAULT_WEIGHTS
    try:
        return RiskWeights(**profile.weights)
    except (TypeError, ValidationError) as e:
        logger.warning("risk_profile_weights_invalid", sro=profile.sro, name=profile.name, error=str(e))
        return DEFAULT_WEIGHTS


def profile_country_map(profile: Optional[RiskScoringProfile]) -> dict[str, int]:
    if profile is None or not profile.country_risk_map:
        return {}

    overrides: dict[str, int] = {}
    for code, score in profile.country_risk_map.items():
        try:
            overrides[str(code).upper()] = int(score)
        except (TypeError, ValueError):
            logger.warning("risk_profile_country_override_skipped", sro=profile.sro, code=code, value=score)
    return overrides
