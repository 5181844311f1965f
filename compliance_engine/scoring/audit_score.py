"""
Audit Readiness Scoring Engine

Five independently scored categories (0-100 each), fixed weights:

  Category     Weight   Basis
  ─────────────────────────────────────────────────────────
  documents    0.30     status of the 5 required documents
  profile      0.15     required company-profile fields filled
  customers    0.25     review freshness + KYC-document coverage
  actions      0.15     open / overdue action counts
  training     0.15     annual report, update recency, doc diversity
  ─────────────────────────────────────────────────────────
  Total        1.00

total = round(Σ score × weight). Deficiencies are reported per category
in `details` (German, shown as-is in the UI).

Deterministic given `reference_time`, which only drives the customer
review-expiry check.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

import structlog

from compliance_engine.schemas.audit import (
    AuditCategories,
    AuditCustomer,
    AuditDocument,
    AuditInputData,
    AuditScoreResult,
    CategoryScore,
)
from compliance_engine.schemas.risk_response import DisplayStyle
from compliance_engine.scoring.numeric import clamp_score, round_half_up
from compliance_engine.scoring.profile_completion import is_filled, required_fields

logger = structlog.get_logger()


# ═══════════════════════════════════════════════════════════════
# Category weights — must sum to 1.0
# ═══════════════════════════════════════════════════════════════
CATEGORY_WEIGHTS: dict[str, float] = {
    "documents": 0.30,
    "profile": 0.15,
    "customers": 0.25,
    "actions": 0.15,
    "training": 0.15,
}
assert abs(sum(CATEGORY_WEIGHTS.values()) - 1.0) < 1e-9, "Weights must sum to 1.0"


# Required document set, in display order
REQUIRED_DOCS: tuple[tuple[str, str], ...] = (
    ("aml_policy", "GwG-Richtlinie"),
    ("kyc_checklist", "KYC-Checkliste"),
    ("risk_assessment", "Risikobewertung"),
    ("kyt_policy", "KYT-Richtlinie"),
    ("annual_report", "Jahresbericht"),
)

DOC_STATUS_SCORE: dict[str, int] = {
    "current": 100,
    "review": 40,
    "draft": 20,
    "outdated": 10,
}

DOC_STATUS_LABEL: dict[str, str] = {
    "review": "Überprüfung",
    "draft": "Entwurf",
    "outdated": "Veraltet",
}


def calculate_audit_score(
    data: AuditInputData,
    reference_time: Optional[datetime] = None,
) -> AuditScoreResult:
    """
    Main scoring entry point.
    """
    now = _as_utc(reference_time or datetime.now(timezone.utc))

    categories = AuditCategories(
        documents=score_documents(data.documents),
        profile=score_profile(data.profile_data, data.profile_fields),
        customers=score_customers(data.customers, now),
        actions=score_actions(data.open_action_count, data.overdue_action_count),
        training=score_training(data.has_annual_report, data.last_doc_update_days, data.doc_type_count),
    )

    total = clamp_score(round_half_up(
        categories.documents.weighted
        + categories.profile.weighted
        + categories.customers.weighted
        + categories.actions.weighted
        + categories.training.weighted
    ))
    display = audit_color(total)

    logger.debug(
        "audit_score_calculated",
        total=total,
        documents=categories.documents.score,
        profile=categories.profile.score,
        customers=categories.customers.score,
        actions=categories.actions.score,
        training=categories.training.score,
    )

    return AuditScoreResult(
        total=total,
        categories=categories,
        color=display.color,
        bg=display.bg,
        label=display.label,
    )


def audit_color(score: float) -> DisplayStyle:
    """
    Badge for an audit readiness total. Independent of the risk-level
    styling: different thresholds, different vocabulary.
    """
    if score >= 80:
        return DisplayStyle(color="#16654e", bg="#ecf5f1", label="Bereit")
    if score >= 50:
        return DisplayStyle(color="#d97706", bg="#fffbeb", label="Teilweise")
    return DisplayStyle(color="#dc2626", bg="#fef2f2", label="Kritisch")


def _category(name: str, score: int, details: list[str]) -> CategoryScore:
    weight = CATEGORY_WEIGHTS[name]
    return CategoryScore(score=score, weight=weight, weighted=score * weight, details=details)


# ═══════════════════════════════════════════════════════════════
# 1. DOCUMENTS  (weight = 0.30)
#    Average over the 5 required types; extras are ignored.
# ═══════════════════════════════════════════════════════════════
def score_documents(docs: list[AuditDocument]) -> CategoryScore:
    details: list[str] = []
    doc_total = 0

    for doc_type, label in REQUIRED_DOCS:
        matching = [d for d in docs if d.doc_type == doc_type]
        if not matching:
            details.append(f"{label}: fehlt")
            continue

        # Best status wins; ties keep the first document
        best = max(matching, key=lambda d: DOC_STATUS_SCORE.get(d.status, 0))
        s = DOC_STATUS_SCORE.get(best.status, 0)
        doc_total += s
        if s < 100:
            status_label = DOC_STATUS_LABEL.get(best.status, best.status)
            details.append(f"{label}: {status_label} ({s}%)")

    score = round_half_up(doc_total / len(REQUIRED_DOCS))
    return _category("documents", score, details)


# ═══════════════════════════════════════════════════════════════
# 2. PROFILE  (weight = 0.15)
# ═══════════════════════════════════════════════════════════════
def score_profile(profile_data, fields) -> CategoryScore:
    if profile_data is None:
        return _category("profile", 0, ["Kein Firmenprofil vorhanden"])

    required = required_fields(fields)
    missing = [f.label for f in required if not is_filled(profile_data.get(f.id))]
    filled = len(required) - len(missing)

    score = round_half_up(filled / len(required) * 100) if required else 100

    details: list[str] = []
    if missing:
        more = "..." if len(missing) > 3 else ""
        details.append(f"{len(missing)} Pflichtfelder fehlen: {', '.join(missing[:3])}{more}")

    return _category("profile", score, details)


# ═══════════════════════════════════════════════════════════════
# 3. CUSTOMERS  (weight = 0.25)
#    50% review freshness (active customers only)
#    50% KYC-document coverage (all customers)
# ═══════════════════════════════════════════════════════════════
def score_customers(customers: list[AuditCustomer], now: datetime) -> CategoryScore:
    if not customers:
        return _category("customers", 100, ["Keine Kunden erfasst (100%)"])

    details: list[str] = []
    active = [c for c in customers if c.status == "active"]

    fresh = 0
    expired = 0
    for c in active:
        if c.next_review and _review_expired(c.next_review, now):
            expired += 1
        else:
            fresh += 1  # no review date set → assume OK
    kyc_ok = sum(1 for c in customers if c.has_kyc_doc)

    if expired > 0:
        details.append(f"{expired} Kunden mit abgelaufenem Review")

    review_score = round_half_up(fresh / len(active) * 100) if active else 100
    doc_score = round_half_up(kyc_ok / len(customers) * 100)
    score = round_half_up(review_score * 0.5 + doc_score * 0.5)

    if review_score < 100:
        details.append(f"Review-Aktualität: {review_score}%")
    if doc_score < 100:
        details.append(f"KYC-Dokumente: {doc_score}%")

    return _category("customers", score, details)


def _review_expired(next_review: str, now: datetime) -> bool:
    """A review is fresh only if it lies strictly in the future; unparsable dates count as expired."""
    try:
        review_at = datetime.fromisoformat(str(next_review).strip().replace("Z", "+00:00"))
    except ValueError:
        return True
    return not _as_utc(review_at) > now


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# ═══════════════════════════════════════════════════════════════
# 4. ACTIONS  (weight = 0.15)
#    Step function on open count, −5 per overdue action, floor 0
# ═══════════════════════════════════════════════════════════════
ACTION_STEPS = [
    (0, 100),
    (2, 80),
    (5, 60),
    (10, 40),
]
OVERDUE_PENALTY = 5


def score_actions(open_count: int, overdue_count: int) -> CategoryScore:
    open_count = max(0, open_count or 0)
    overdue_count = max(0, overdue_count or 0)

    score = 20
    for upper, step_score in ACTION_STEPS:
        if open_count <= upper:
            score = step_score
            break
    score = max(0, score - overdue_count * OVERDUE_PENALTY)

    details: list[str] = []
    if open_count > 0:
        details.append(f"{open_count} offene Massnahmen")
    if overdue_count > 0:
        details.append(f"{overdue_count} überfällig")

    return _category("actions", score, details)


# ═══════════════════════════════════════════════════════════════
# 5. TRAINING / DOCUMENTATION  (weight = 0.15)
#    40% annual report, 30% update recency, 30% doc-type diversity
# ═══════════════════════════════════════════════════════════════
def score_training(
    has_annual_report: bool,
    last_doc_update_days: Optional[int],
    doc_type_count: int,
) -> CategoryScore:
    details: list[str] = []

    annual_score = 100 if has_annual_report else 0
    if not has_annual_report:
        details.append("Jahresbericht fehlt")

    # Unknown → neutral 50
    if last_doc_update_days is None:
        update_score = 50
    elif last_doc_update_days <= 30:
        update_score = 100
    elif last_doc_update_days <= 90:
        update_score = 70
    elif last_doc_update_days <= 180:
        update_score = 40
    else:
        update_score = 10

    doc_type_count = doc_type_count or 0
    if doc_type_count >= 5:
        diversity_score = 100
    elif doc_type_count >= 3:
        diversity_score = 70
    elif doc_type_count >= 1:
        diversity_score = 40
    else:
        diversity_score = 0

    score = round_half_up(annual_score * 0.4 + update_score * 0.3 + diversity_score * 0.3)
    return _category("training", score, details)
