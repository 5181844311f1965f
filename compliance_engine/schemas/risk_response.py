"""
Customer risk scoring results.

`breakdown` is persisted as the audit trail of a score; the UI uses
`risk_level` (or color / bg / label) for badges.
"""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class RiskLevel(str, Enum):
    LOW = "low"
    STANDARD = "standard"
    ELEVATED = "elevated"
    HIGH = "high"


class DisplayStyle(BaseModel):
    """Badge colours + label for a score."""
    color: str
    bg: str
    label: str


class RiskFactors(BaseModel):
    """The six raw factor scores, each 0-100."""
    country: int
    industry: int
    pep: int
    products: int
    volume: int
    source_of_funds: int


class FactorBreakdown(BaseModel):
    """Individual factor contribution to the overall score."""
    factor: str
    label: str
    weight: float
    score: int
    weighted: float


class RiskResult(BaseModel):
    overall_score: int = Field(ge=0, le=100)
    risk_level: RiskLevel
    factors: RiskFactors
    breakdown: list[FactorBreakdown]

    # ── Display (derived from risk_level) ──
    color: str
    bg: str
    label: str


class BatchRiskResponse(BaseModel):
    organization_id: str
    calculated: int
    total: int
