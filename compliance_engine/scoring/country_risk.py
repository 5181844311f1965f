"""
Country risk reference data — FATF / SECO lists.

Sources: FATF High-Risk Jurisdictions, FATF increased monitoring,
SECO sanction lists. Last updated: 2026-02.

Convention: 0-100, HIGHER score = HIGHER risk.

Lookup precedence (first hit wins):
  1. Organisation-specific override map
  2. FATF high-risk (call for action)
  3. SECO sanctions
  4. FATF grey list
  5. Low-risk allow-list (fixed 10)
  6. Default 30 ("standard")
"""
from __future__ import annotations

from typing import Mapping, Optional

from compliance_engine.schemas.risk_response import DisplayStyle, RiskLevel

DEFAULT_COUNTRY_RISK = 30
LOW_COUNTRY_RISK = 10


# ═══════════════════════════════════════════════════════════════
# FATF high-risk (call for action)
# ═══════════════════════════════════════════════════════════════
FATF_HIGH_RISK: Mapping[str, int] = {
    "IR": 90,  # Iran
    "KP": 95,  # North Korea
    "MM": 85,  # Myanmar
}

# ═══════════════════════════════════════════════════════════════
# FATF increased monitoring (grey list)
# ═══════════════════════════════════════════════════════════════
FATF_GREY_LIST: Mapping[str, int] = {
    "SY": 85,  # Syria
    "AF": 80,  # Afghanistan
    "YE": 75,  # Yemen
    "LY": 75,  # Libya
    "SD": 75,  # Sudan
    "SO": 80,  # Somalia
    "IQ": 70,  # Iraq
    "VE": 65,  # Venezuela
    "NI": 60,  # Nicaragua
    "PK": 60,  # Pakistan
    "HT": 65,  # Haiti
    "KH": 55,  # Cambodia
    "ML": 60,  # Mali
    "GW": 60,  # Guinea-Bissau
    "MZ": 55,  # Mozambique
    "UG": 55,  # Uganda
    "ZW": 55,  # Zimbabwe
    "CD": 65,  # DR Congo
    "CF": 65,  # Central African Republic
    "SS": 70,  # South Sudan
    "BF": 55,  # Burkina Faso
    "TD": 55,  # Chad
    "NG": 50,  # Nigeria
    "TZ": 45,  # Tanzania
    "JO": 40,  # Jordan
    "PH": 45,  # Philippines
    "TT": 40,  # Trinidad and Tobago
    "VN": 40,  # Vietnam
    "AL": 40,  # Albania
    "BB": 35,  # Barbados
    "BG": 35,  # Bulgaria
    "BJ": 40,  # Benin
    "CM": 45,  # Cameroon
    "GH": 40,  # Ghana
    "HR": 30,  # Croatia
    "MC": 30,  # Monaco
    "SN": 35,  # Senegal
    "ZA": 35,  # South Africa
}

# ═══════════════════════════════════════════════════════════════
# SECO-specific sanctions list additions
# ═══════════════════════════════════════════════════════════════
SECO_SANCTIONS: Mapping[str, int] = {
    "BY": 60,  # Belarus
    "RU": 65,  # Russia
    "CU": 55,  # Cuba
    "ER": 55,  # Eritrea
    "LB": 50,  # Lebanon
}

# ═══════════════════════════════════════════════════════════════
# Low-risk countries (FATF members / EEA / Switzerland)
# ═══════════════════════════════════════════════════════════════
LOW_RISK_COUNTRIES: frozenset[str] = frozenset({
    "CH", "DE", "AT", "FR", "IT", "GB", "US", "CA", "JP", "AU", "NZ",
    "SE", "NO", "DK", "FI", "NL", "BE", "LU", "IE", "ES", "PT",
    "SG", "HK", "KR", "IL", "IS", "LI", "EE", "CZ", "PL", "SI",
    "SK", "LT", "LV", "MT", "CY",
})


def get_country_risk(country_code: Optional[str], custom_map: Optional[Mapping[str, int]] = None) -> int:
    """
    Risk score for an ISO-2 country code, case-insensitive.
    Unknown or empty codes fall back to 30 (standard), never to low risk.
    """
    code = str(country_code or "").strip().upper()
    if not code:
        return DEFAULT_COUNTRY_RISK

    if custom_map:
        overrides = {str(k).strip().upper(): v for k, v in custom_map.items()}
        if code in overrides:
            return int(overrides[code])

    if code in FATF_HIGH_RISK:
        return FATF_HIGH_RISK[code]
    if code in SECO_SANCTIONS:
        return SECO_SANCTIONS[code]
    if code in FATF_GREY_LIST:
        return FATF_GREY_LIST[code]
    if code in LOW_RISK_COUNTRIES:
        return LOW_COUNTRY_RISK

    return DEFAULT_COUNTRY_RISK


# ═══════════════════════════════════════════════════════════════
# Score → category, and category → badge styling
#   score <= 25  → low
#   score <= 50  → standard
#   score <= 75  → elevated
#   else         → high
# ═══════════════════════════════════════════════════════════════
CATEGORY_THRESHOLDS = [
    (25, RiskLevel.LOW),
    (50, RiskLevel.STANDARD),
    (75, RiskLevel.ELEVATED),
]

RISK_STYLES: Mapping[RiskLevel, DisplayStyle] = {
    RiskLevel.LOW: DisplayStyle(color="#16a34a", bg="#f0fdf4", label="Tief"),
    RiskLevel.STANDARD: DisplayStyle(color="#ca8a04", bg="#fefce8", label="Standard"),
    RiskLevel.ELEVATED: DisplayStyle(color="#ea580c", bg="#fff7ed", label="Erhöht"),
    RiskLevel.HIGH: DisplayStyle(color="#dc2626", bg="#fef2f2", label="Hoch"),
}
UNKNOWN_STYLE = DisplayStyle(color="#6b7280", bg="#f9fafb", label="Unbekannt")


def risk_category(score: float) -> RiskLevel:
    for threshold, level in CATEGORY_THRESHOLDS:
        if score <= threshold:
            return level
    return RiskLevel.HIGH


def _style(level) -> DisplayStyle:
    try:
        return RISK_STYLES[RiskLevel(level)]
    except ValueError:
        return UNKNOWN_STYLE


def risk_color(level) -> str:
    return _style(level).color


def risk_bg(level) -> str:
    return _style(level).bg


def risk_label(level) -> str:
    """German badge label for a risk level; 'Unbekannt' for anything else."""
    return _style(level).label


def risk_display(score: float) -> DisplayStyle:
    return _style(risk_category(score))
