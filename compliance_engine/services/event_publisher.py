"""
Kafka event publisher — fire-and-forget.

Publishes score events for downstream consumers
(dashboards, reminder jobs, data warehouse sync).
Gracefully degrades if Kafka is unavailable.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone

import structlog
from compliance_engine.core.config import get_settings
from compliance_engine.schemas.audit import AuditScoreResult
from compliance_engine.schemas.risk_response import RiskResult

logger = structlog.get_logger()

_producer = None


async def _get_producer():
    global _producer
    settings = get_settings()
    if not settings.kafka_enabled:
        return None
    if _producer is None:
        from aiokafka import AIOKafkaProducer
        _producer = AIOKafkaProducer(bootstrap_servers=settings.kafka_bootstrap)
        await _producer.start()
    return _producer


async def _publish(event: dict, key: str) -> None:
    settings = get_settings()
    if not settings.kafka_enabled:
        return

    try:
        producer = await _get_producer()
        if producer:
            await producer.send_and_wait(
                settings.kafka_topic_score_events,
                json.dumps(event).encode("utf-8"),
                key=key.encode("utf-8"),
            )
            logger.info("kafka_event_published", event_type=event["event_type"], key=key)
    except Exception as e:
        # Fire-and-forget: log but don't fail the request
        logger.warning("kafka_publish_failed", event_type=event["event_type"], error=str(e))


async def publish_customer_risk_event(organization_id: str, customer_id: str, result: RiskResult) -> None:
    await _publish(
        {
            "event_type": "CUSTOMER_RISK_SCORED",
            "organization_id": organization_id,
            "customer_id": customer_id,
            "overall_score": result.overall_score,
            "risk_level": result.risk_level.value,
            "model_version": get_settings().scoring_model_version,
            "calculated_at": datetime.now(timezone.utc).isoformat(),
        },
        key=customer_id,
    )


async def publish_audit_score_event(organization_id: str, result: AuditScoreResult) -> None:
    await _publish(
        {
            "event_type": "AUDIT_SCORE_COMPUTED",
            "organization_id": organization_id,
            "total": result.total,
            "label": result.label,
            "computed_at": datetime.now(timezone.utc).isoformat(),
        },
        key=organization_id,
    )


async def close_producer() -> None:
    global _producer
    if _producer is not None:
        await _producer.stop()
        _producer = None
