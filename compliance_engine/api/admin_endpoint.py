"""
Admin API — calibration of per-SRO risk scoring profiles.

Endpoints:
  GET /v1/admin/risk-profiles
  GET /v1/admin/risk-profiles/{sro}
  PUT /v1/admin/risk-profiles/{sro}
    → Read / upsert factor weights and country overrides

All calibration changes are audit-logged.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from compliance_engine.core.auth import verify_token
from compliance_engine.core.config import get_settings
from compliance_engine.models.database import get_db
from compliance_engine.models.score_records import RiskScoringProfile
from compliance_engine.schemas.risk_request import RiskWeights
from compliance_engine.services.risk_profiles import load_profile

logger = structlog.get_logger()
router = APIRouter(prefix="/v1/admin", tags=["admin"])


# ── Pydantic Schemas ──

class RiskProfileResponse(BaseModel):
    sro: str
    name: str
    weights: RiskWeights
    country_risk_map: dict[str, int]
    updated_at: Optional[datetime]
    updated_by: Optional[str]


class RiskProfileUpdate(BaseModel):
    name: Optional[str] = None
    weights: RiskWeights
    country_risk_map: dict[str, int] = Field(default_factory=dict)


def _to_response(profile: RiskScoringProfile) -> RiskProfileResponse:
    return RiskProfileResponse(
        sro=profile.sro,
        name=profile.name,
        weights=RiskWeights(**(profile.weights or {})),
        country_risk_map=profile.country_risk_map or {},
        updated_at=profile.updated_at,
        updated_by=profile.updated_by,
    )


# ── Endpoints ──

@router.get("/risk-profiles", response_model=list[RiskProfileResponse])
async def list_profiles(db: AsyncSession = Depends(get_db), token: dict = Depends(verify_token)):
    result = await db.execute(select(RiskScoringProfile).order_by(RiskScoringProfile.sro, RiskScoringProfile.name))
    return [_to_response(p) for p in result.scalars().all()]


@router.get("/risk-profiles/{sro}", response_model=RiskProfileResponse)
async def get_profile(
    sro: str,
    name: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    token: dict = Depends(verify_token),
):
    profile = await load_profile(db, sro, name or get_settings().default_risk_profile_name)
    if profile is None:
        raise HTTPException(404, f"No risk profile found for SRO {sro}")
    return _to_response(profile)


@router.put("/risk-profiles/{sro}", response_model=RiskProfileResponse)
async def update_profile(
    sro: str,
    update: RiskProfileUpdate,
    db: AsyncSession = Depends(get_db),
    token: dict = Depends(verify_token),
):
    name = update.name or get_settings().default_risk_profile_name
    user = token.get("sub", "unknown")
    country_map = {code.strip().upper(): score for code, score in update.country_risk_map.items()}

    profile = await load_profile(db, sro, name)
    old_weights = profile.weights if profile else None
    if profile is None:
        profile = RiskScoringProfile(sro=sro, name=name)
        db.add(profile)

    profile.weights = update.weights.model_dump()
    profile.country_risk_map = country_map
    profile.updated_at = datetime.now(timezone.utc)
    profile.updated_by = user
    await db.commit()

    logger.info(
        "risk_profile_updated",
        sro=sro,
        name=name,
        old_weights=old_weights,
        new_weights=profile.weights,
        country_overrides=len(country_map),
        user=user,
    )
    return _to_response(profile)
