"""
Inbound payloads for customer risk scoring.

Customer records arrive as stored by the portal: every attribute is
optional and several of them are free text or "value or list" fields.
The engine degrades missing data to documented fallbacks, so the models
here stay deliberately lenient.
"""
from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class CustomerData(BaseModel):
    """Customer attributes relevant for AML risk scoring."""
    model_config = ConfigDict(extra="ignore")

    nationality: Optional[Union[str, list[str]]] = Field(
        None,
        description="ISO-2 country code(s); dual nationals as list or comma-joined string",
    )
    country: Optional[Union[str, list[str]]] = Field(
        None,
        description="ISO-2 country of residence / domicile",
    )
    geo_focus: Optional[Union[str, list[str]]] = Field(
        None,
        description="Countries of business activity: single code, list, or comma-joined string",
    )
    industry: Optional[str] = Field(None, description="Industry label (German taxonomy)")
    # Passed through unconverted: 1 or "True" must not become a PEP.
    pep_status: Any = Field(
        None,
        description="true / 'yes' / 'true' mark a PEP; anything else does not",
    )
    products: Optional[Union[str, list[str]]] = Field(
        None,
        description="Products used: single label, list, or comma-joined string",
    )
    tx_volume: Optional[str] = Field(None, description="Free-text transaction volume bucket, e.g. '1-5 Mio'")
    source_of_funds: Optional[str] = Field(None, description="Free-text source of funds")


class RiskWeights(BaseModel):
    """
    Factor weights. Need not sum to 100 — the engine normalises.
    Immutable: organisation-specific weights are passed as a new instance.
    """
    model_config = ConfigDict(frozen=True)

    country: float = Field(25, ge=0)
    industry: float = Field(15, ge=0)
    pep: float = Field(20, ge=0)
    products: float = Field(15, ge=0)
    volume: float = Field(10, ge=0)
    source_of_funds: float = Field(15, ge=0)

    def total(self) -> float:
        return (
            self.country + self.industry + self.pep
            + self.products + self.volume + self.source_of_funds
        )


class CustomerRiskRequest(BaseModel):
    """POST /v1/risk/customer"""
    customer: CustomerData
    weights: Optional[RiskWeights] = None
    country_risk_map: Optional[dict[str, int]] = Field(
        None,
        description="Organisation-specific country overrides (ISO-2 → score), highest precedence",
    )


class StoredCustomer(BaseModel):
    """One customer row as sent for a batch recompute."""
    customer_id: str
    data: CustomerData = Field(default_factory=CustomerData)


class BatchRiskRequest(BaseModel):
    """
    POST /v1/risk/organizations/{organization_id}/recalculate

    If weights / country_risk_map are omitted, the stored risk-scoring
    profile of the given SRO is used, then the defaults.
    """
    customers: list[StoredCustomer]
    sro: Optional[str] = None
    weights: Optional[RiskWeights] = None
    country_risk_map: Optional[dict[str, int]] = None
