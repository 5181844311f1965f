"""
Company profile completeness.

A required field counts as filled unless it is absent, None, "" or an
empty list. Shared by the profile page percentage and the audit
readiness "profile" category.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from compliance_engine.data.profile_fields import ProfileFieldDef
from compliance_engine.schemas.risk_response import DisplayStyle
from compliance_engine.scoring.numeric import round_half_up


def is_filled(value: Any) -> bool:
    if value is None or value == "":
        return False
    if isinstance(value, (list, tuple)) and len(value) == 0:
        return False
    return True


def required_fields(fields: Iterable[ProfileFieldDef]) -> list[ProfileFieldDef]:
    return [f for f in fields if f.is_required]


def missing_profile_fields(data: Optional[Mapping[str, Any]], fields: Iterable[ProfileFieldDef]) -> list[str]:
    """Labels of required fields that are not filled, in form order."""
    data = data or {}
    return [f.label for f in required_fields(fields) if not is_filled(data.get(f.id))]


def calc_profile_completion(data: Optional[Mapping[str, Any]], fields: Iterable[ProfileFieldDef]) -> int:
    """Completion percentage 0-100. No profile → 0; no required fields → 100."""
    if data is None:
        return 0
    required = required_fields(fields)
    if not required:
        return 100
    filled = sum(1 for f in required if is_filled(data.get(f.id)))
    return round_half_up(filled / len(required) * 100)


def completion_color(pct: float) -> DisplayStyle:
    if pct >= 80:
        return DisplayStyle(color="#16654e", bg="#ecf5f1", label="Gut")
    if pct >= 50:
        return DisplayStyle(color="#d97706", bg="#fffbeb", label="Unvollständig")
    return DisplayStyle(color="#dc2626", bg="#fef2f2", label="Lückenhaft")
