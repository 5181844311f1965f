"""
Customer risk scoring endpoints.

POST /v1/risk/customer
    Score a single customer. Stateless, nothing persisted.

POST /v1/risk/organizations/{organization_id}/recalculate
    Batch recompute for all customers of an organisation.
    Upserts the latest score per customer (audit trail) and
    publishes one event per customer to Kafka (if enabled).
"""
from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from compliance_engine.core.auth import verify_token
from compliance_engine.core.config import get_settings
from compliance_engine.models.database import get_db
from compliance_engine.models.score_records import CustomerRiskScore
from compliance_engine.schemas.risk_request import BatchRiskRequest, CustomerRiskRequest
from compliance_engine.schemas.risk_response import BatchRiskResponse, RiskResult
from compliance_engine.scoring.customer_risk import DEFAULT_WEIGHTS, calculate_customer_risk
from compliance_engine.services.event_publisher import publish_customer_risk_event
from compliance_engine.services.risk_profiles import load_profile, profile_country_map, profile_weights

logger = structlog.get_logger()
router = APIRouter(prefix="/v1/risk", tags=["risk"])


@router.post(
    "/customer",
    response_model=RiskResult,
    summary="Calculate the AML risk score of one customer",
)
async def score_customer(
    request: CustomerRiskRequest,
    token_payload: dict = Depends(verify_token),
) -> RiskResult:
    try:
        result = calculate_customer_risk(
            request.customer,
            request.weights or DEFAULT_WEIGHTS,
            request.country_risk_map,
        )
    except Exception as e:
        logger.error("scoring_failed", caller=token_payload.get("sub", "unknown"), error=str(e))
        raise HTTPException(status_code=500, detail=f"Scoring engine error: {e}")

    logger.info(
        "customer_risk_scored",
        overall_score=result.overall_score,
        risk_level=result.risk_level.value,
        caller=token_payload.get("sub", "unknown"),
    )
    return result


@router.post(
    "/organizations/{organization_id}/recalculate",
    response_model=BatchRiskResponse,
    summary="Recalculate risk scores for all customers of an organisation",
)
async def recalculate_organization(
    organization_id: str,
    request: BatchRiskRequest,
    token_payload: dict = Depends(verify_token),
    db: AsyncSession = Depends(get_db),
) -> BatchRiskResponse:
    settings = get_settings()
    caller = token_payload.get("sub", "unknown")

    # ── Weights: request → SRO profile → defaults ──
    weights = request.weights
    country_map = request.country_risk_map
    if weights is None or country_map is None:
        sro = request.sro or settings.default_sro
        profile = await load_profile(db, sro, settings.default_risk_profile_name)
        if weights is None:
            weights = profile_weights(profile)
        if country_map is None:
            country_map = profile_country_map(profile)
        logger.info("risk_profile_resolved", sro=sro, found=profile is not None)

    logger.info(
        "risk_recalculation_started",
        organization_id=organization_id,
        customers=len(request.customers),
        caller=caller,
    )

    calculated = 0
    results: list[tuple[str, RiskResult]] = []
    now = datetime.now(timezone.utc)

    for customer in request.customers:
        try:
            result = calculate_customer_risk(customer.data, weights, country_map)
        except Exception as e:
            logger.error("scoring_failed", customer_id=customer.customer_id, error=str(e))
            continue

        await db.merge(CustomerRiskScore(
            customer_id=customer.customer_id,
            organization_id=organization_id,
            model_version=settings.scoring_model_version,
            overall_score=result.overall_score,
            risk_level=result.risk_level.value,
            factors_json=result.factors.model_dump(),
            breakdown_json=[b.model_dump() for b in result.breakdown],
            weights_json=weights.model_dump(),
            calculated_at=now,
            calculated_by=caller,
        ))
        results.append((customer.customer_id, result))
        calculated += 1

    await db.commit()

    # ── Publish to Kafka (fire-and-forget) ──
    for customer_id, result in results:
        await publish_customer_risk_event(organization_id, customer_id, result)

    logger.info(
        "risk_recalculation_complete",
        organization_id=organization_id,
        calculated=calculated,
        total=len(request.customers),
    )

    return BatchRiskResponse(
        organization_id=organization_id,
        calculated=calculated,
        total=len(request.customers),
    )


@router.get("/health", tags=["health"])
async def health():
    settings = get_settings()
    return {"status": "ok", "service": settings.app_name, "model_version": settings.scoring_model_version}
