"""
Persistent score tables.

  compliance.customer_risk_score    — latest score per customer (upserted)
  compliance.audit_score_snapshot   — every audit readiness computation
  compliance.risk_scoring_profile   — per-SRO weights + country overrides
"""
from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, DateTime, JSON, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase

SCHEMA = "compliance"


class Base(DeclarativeBase):
    pass


class CustomerRiskScore(Base):
    __tablename__ = "customer_risk_score"
    __table_args__ = {"schema": SCHEMA}

    customer_id = Column(String(100), primary_key=True)
    organization_id = Column(String(100), nullable=False, index=True)

    # ── Scoring outputs ──
    model_version = Column(String(10), nullable=False)
    overall_score = Column(Integer, nullable=False)
    risk_level = Column(String(20), nullable=False)

    # ── Factor breakdown (JSON for flexibility) ──
    factors_json = Column(JSON, nullable=False)
    breakdown_json = Column(JSON, nullable=False)
    weights_json = Column(JSON, nullable=False)

    # ── Metadata ──
    calculated_at = Column(DateTime(timezone=True), nullable=False)
    calculated_by = Column(String(100), nullable=True)

    def __repr__(self):
        return f"<CustomerRiskScore {self.customer_id} level={self.risk_level} score={self.overall_score}>"


class AuditScoreSnapshot(Base):
    __tablename__ = "audit_score_snapshot"
    __table_args__ = {"schema": SCHEMA}

    snapshot_id = Column(String(36), primary_key=True)
    organization_id = Column(String(100), nullable=False, index=True)

    total = Column(Integer, nullable=False)
    label = Column(String(20), nullable=False)
    categories_json = Column(JSON, nullable=False)

    # ── Full input for replay ──
    input_payload = Column(JSON, nullable=False)

    computed_at = Column(DateTime(timezone=True), nullable=False)
    computed_by = Column(String(100), nullable=True)

    def __repr__(self):
        return f"<AuditScoreSnapshot {self.organization_id} total={self.total}>"


class RiskScoringProfile(Base):
    __tablename__ = "risk_scoring_profile"
    __table_args__ = (
        UniqueConstraint("sro", "name", name="uq_risk_scoring_profile_sro_name"),
        {"schema": SCHEMA},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    sro = Column(String(50), nullable=False)
    name = Column(String(100), nullable=False, default="Standard")

    weights = Column(JSON, nullable=False)
    country_risk_map = Column(JSON, nullable=False, default=dict)

    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_by = Column(String(100), nullable=True)

    def __repr__(self):
        return f"<RiskScoringProfile {self.sro}/{self.name}>"
