"""
Audit readiness payloads.

The caller assembles organisation-level aggregates (documents, company
profile, customers, action counts) from storage; the engine only scores.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from compliance_engine.data.profile_fields import PROFILE_FIELDS, ProfileFieldDef


class AuditDocument(BaseModel):
    doc_type: str
    status: str
    next_review: Optional[str] = None


class AuditCustomer(BaseModel):
    status: str = ""
    next_review: Optional[str] = Field(None, description="ISO date of the next periodic review")
    has_kyc_doc: bool = Field(False, description="Computed by the caller, e.g. approved KYC document exists")


class AuditInputData(BaseModel):
    documents: list[AuditDocument] = []
    profile_data: Optional[dict[str, Any]] = None
    profile_fields: list[ProfileFieldDef] = Field(default_factory=lambda: list(PROFILE_FIELDS))
    customers: list[AuditCustomer] = []
    open_action_count: int = Field(0, ge=0)
    overdue_action_count: int = Field(0, ge=0)
    has_annual_report: bool = False
    doc_type_count: int = Field(0, ge=0, description="Distinct document types present")
    last_doc_update_days: Optional[int] = Field(None, description="Days since last document update; null = unknown")


class AuditScoreRequest(AuditInputData):
    """POST /v1/audit/score — with organization_id the result is cached."""
    organization_id: Optional[str] = None


class CategoryScore(BaseModel):
    score: int = Field(ge=0, le=100)
    weight: float
    weighted: float
    details: list[str] = []


class AuditCategories(BaseModel):
    documents: CategoryScore
    profile: CategoryScore
    customers: CategoryScore
    actions: CategoryScore
    training: CategoryScore


class AuditScoreResult(BaseModel):
    total: int = Field(ge=0, le=100)
    categories: AuditCategories
    color: str
    bg: str
    label: str
