"""
POST /v1/audit/score

Computes the audit readiness score from organisation aggregates the
caller has already assembled. With an organization_id the result is
cached as a snapshot (total + full category details) for the dashboard
and the historical audit trail.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from compliance_engine.core.auth import verify_token
from compliance_engine.models.database import get_db
from compliance_engine.models.score_records import AuditScoreSnapshot
from compliance_engine.schemas.audit import AuditScoreRequest, AuditScoreResult
from compliance_engine.scoring.audit_score import calculate_audit_score
from compliance_engine.services.event_publisher import publish_audit_score_event

logger = structlog.get_logger()
router = APIRouter(prefix="/v1/audit", tags=["audit"])


@router.post(
    "/score",
    response_model=AuditScoreResult,
    summary="Calculate the audit readiness score of an organisation",
)
async def score_audit_readiness(
    request: AuditScoreRequest,
    token_payload: dict = Depends(verify_token),
    db: AsyncSession = Depends(get_db),
) -> AuditScoreResult:
    caller = token_payload.get("sub", "unknown")
    computed_at = datetime.now(timezone.utc)

    try:
        result = calculate_audit_score(request, reference_time=computed_at)
    except Exception as e:
        logger.error("scoring_failed", organization_id=request.organization_id, error=str(e))
        raise HTTPException(status_code=500, detail=f"Scoring engine error: {e}")

    logger.info(
        "audit_score_computed",
        organization_id=request.organization_id,
        total=result.total,
        label=result.label,
        caller=caller,
    )

    if request.organization_id is None:
        return result

    # ── Persist snapshot ──
    db.add(AuditScoreSnapshot(
        snapshot_id=str(uuid.uuid4()),
        organization_id=request.organization_id,
        total=result.total,
        label=result.label,
        categories_json=result.categories.model_dump(mode="json"),
        input_payload=request.model_dump(mode="json", exclude={"profile_fields"}),
        computed_at=computed_at,
        computed_by=caller,
    ))
    await db.commit()

    await publish_audit_score_event(request.organization_id, result)

    return result
