"""
Customer Risk Scoring Engine

Six weighted factors, each scored 0-100 (HIGHER = riskier):
  1. Country          — max over nationality, country, geo_focus
  2. Industry         — table lookup
  3. PEP status       — strict binary (90 / 5)
  4. Products         — max over all products
  5. Volume           — keyword classification
  6. Source of funds  — keyword classification

Overall = Σ score × weight × norm / 100, norm = 100 / Σ weights,
rounded half up and clamped to [0, 100].

Pure function, no I/O. Never raises for sparse or malformed customer
data: every factor has a numeric fallback.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional, Union

import structlog

from compliance_engine.schemas.risk_request import CustomerData, RiskWeights
from compliance_engine.schemas.risk_response import FactorBreakdown, RiskFactors, RiskResult
from compliance_engine.scoring.country_risk import get_country_risk, risk_category, risk_display
from compliance_engine.scoring.numeric import clamp_score, round_half_up
from compliance_engine.scoring.risk_tables import (
    DEFAULT_RISK,
    industry_risk,
    product_risk,
    source_of_funds_risk,
    split_values,
    volume_risk,
)

logger = structlog.get_logger()


DEFAULT_WEIGHTS = RiskWeights(
    country=25,
    industry=15,
    pep=20,
    products=15,
    volume=10,
    source_of_funds=15,
)

PEP_SCORE = 90
NON_PEP_SCORE = 5
PEP_TRUE_VALUES = ("yes", "true")

# Breakdown order is fixed (audit trail display).
FACTOR_LABELS: tuple[tuple[str, str], ...] = (
    ("country", "Länderrisiko"),
    ("industry", "Branchenrisiko"),
    ("pep", "PEP-Status"),
    ("products", "Produktrisiko"),
    ("volume", "Transaktionsvolumen"),
    ("source_of_funds", "Mittelherkunft"),
)

CustomerInput = Union[CustomerData, Mapping[str, Any]]


def calculate_customer_risk(
    customer: CustomerInput,
    weights: RiskWeights = DEFAULT_WEIGHTS,
    country_risk_map: Optional[Mapping[str, int]] = None,
) -> RiskResult:
    """
    Main scoring entry point.
    """
    weights = weights or DEFAULT_WEIGHTS
    total_weight = weights.total()
    norm = 100 / total_weight if total_weight > 0 else 1

    factors = RiskFactors(
        country=score_country(customer, country_risk_map),
        industry=score_industry(_get(customer, "industry")),
        pep=score_pep(_get(customer, "pep_status")),
        products=score_products(_get(customer, "products")),
        volume=score_volume(_get(customer, "tx_volume")),
        source_of_funds=score_source_of_funds(_get(customer, "source_of_funds")),
    )

    breakdown: list[FactorBreakdown] = []
    total = 0.0
    for name, label in FACTOR_LABELS:
        weight = getattr(weights, name)
        score = getattr(factors, name)
        weighted = score * weight * norm / 100
        total += weighted
        breakdown.append(FactorBreakdown(
            factor=name,
            label=label,
            weight=weight,
            score=score,
            weighted=weighted,
        ))

    overall = clamp_score(round_half_up(total))
    level = risk_category(overall)
    display = risk_display(overall)

    logger.debug(
        "customer_risk_calculated",
        overall_score=overall,
        risk_level=level.value,
        factors=factors.model_dump(),
    )

    return RiskResult(
        overall_score=overall,
        risk_level=level,
        factors=factors,
        breakdown=breakdown,
        color=display.color,
        bg=display.bg,
        label=display.label,
    )


# ═══════════════════════════════════════════════════════════════
# Factor scorers
# ═══════════════════════════════════════════════════════════════

def score_country(customer: CustomerInput, country_risk_map: Optional[Mapping[str, int]] = None) -> int:
    """Conservative: the riskiest of all listed countries, never an average."""
    candidates = (
        split_values(_get(customer, "nationality"))
        + split_values(_get(customer, "country"))
        + split_values(_get(customer, "geo_focus"))
    )
    if not candidates:
        return DEFAULT_RISK
    return max(get_country_risk(c, country_risk_map) for c in candidates)


def score_industry(industry: Any) -> int:
    if not industry:
        return DEFAULT_RISK
    return industry_risk(str(industry))


def score_pep(pep_status: Any) -> int:
    # Absence means "declared not PEP" (5), not the generic 30 fallback.
    if pep_status is True:
        return PEP_SCORE
    if isinstance(pep_status, str) and pep_status in PEP_TRUE_VALUES:
        return PEP_SCORE
    return NON_PEP_SCORE


def score_products(products: Any) -> int:
    scores = [product_risk(p) for p in split_values(products)]
    return max(scores) if scores else DEFAULT_RISK


def score_volume(tx_volume: Any) -> int:
    return volume_risk(str(tx_volume)) if tx_volume else DEFAULT_RISK


def score_source_of_funds(source: Any) -> int:
    return source_of_funds_risk(str(source)) if source else DEFAULT_RISK


def _get(customer: CustomerInput, field: str) -> Any:
    if customer is None:
        return None
    if isinstance(customer, Mapping):
        return customer.get(field)
    return getattr(customer, field, None)
