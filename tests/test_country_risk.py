"""
Unit tests for the country risk table and the score → category mapping.
"""
from compliance_engine.schemas.risk_response import RiskLevel
from compliance_engine.scoring.country_risk import (
    FATF_GREY_LIST,
    FATF_HIGH_RISK,
    LOW_RISK_COUNTRIES,
    SECO_SANCTIONS,
    get_country_risk,
    risk_bg,
    risk_category,
    risk_color,
    risk_display,
    risk_label,
)


class TestCountryLookup:
    def test_high_risk(self):
        assert get_country_risk("IR") == 90
        assert get_country_risk("KP") == 95

    def test_low_risk(self):
        assert get_country_risk("CH") == 10

    def test_unknown_is_standard(self):
        assert get_country_risk("XX") == 30

    def test_empty_is_standard_not_low(self):
        assert get_country_risk("") == 30
        assert get_country_risk(None) == 30
        assert get_country_risk("   ") == 30

    def test_case_insensitive(self):
        assert get_country_risk("ir") == 90
        assert get_country_risk(" ch ") == 10

    def test_sanctions(self):
        assert get_country_risk("RU") == 65
        assert get_country_risk("BY") == 60

    def test_grey_list(self):
        assert get_country_risk("SY") == 85
        assert get_country_risk("NG") == 50
        assert get_country_risk("HR") == 30


class TestCustomOverrides:
    def test_override_wins_over_high_risk(self):
        assert get_country_risk("IR", {"IR": 20}) == 20

    def test_override_wins_over_low_risk(self):
        assert get_country_risk("CH", {"CH": 70}) == 70

    def test_override_keys_case_insensitive(self):
        assert get_country_risk("DE", {"de": 55}) == 55

    def test_override_for_other_country_ignored(self):
        assert get_country_risk("IR", {"CH": 70}) == 90

    def test_empty_override_map(self):
        assert get_country_risk("XX", {}) == 30


class TestListIntegrity:
    def test_low_risk_countries_not_on_risk_lists(self):
        risky = set(FATF_HIGH_RISK) | set(SECO_SANCTIONS) | set(FATF_GREY_LIST)
        assert not (LOW_RISK_COUNTRIES & risky)

    def test_scores_in_range(self):
        for table in (FATF_HIGH_RISK, SECO_SANCTIONS, FATF_GREY_LIST):
            assert all(0 <= v <= 100 for v in table.values())


class TestRiskCategory:
    def test_boundaries(self):
        assert risk_category(0) == RiskLevel.LOW
        assert risk_category(25) == RiskLevel.LOW
        assert risk_category(26) == RiskLevel.STANDARD
        assert risk_category(50) == RiskLevel.STANDARD
        assert risk_category(51) == RiskLevel.ELEVATED
        assert risk_category(75) == RiskLevel.ELEVATED
        assert risk_category(76) == RiskLevel.HIGH
        assert risk_category(100) == RiskLevel.HIGH


class TestRiskDisplay:
    def test_colors(self):
        assert risk_color("low") == "#16a34a"
        assert risk_color("standard") == "#ca8a04"
        assert risk_color("elevated") == "#ea580c"
        assert risk_color("high") == "#dc2626"

    def test_backgrounds(self):
        assert risk_bg(RiskLevel.LOW) == "#f0fdf4"
        assert risk_bg(RiskLevel.HIGH) == "#fef2f2"

    def test_labels(self):
        assert risk_label("low") == "Tief"
        assert risk_label("standard") == "Standard"
        assert risk_label("elevated") == "Erhöht"
        assert risk_label("high") == "Hoch"

    def test_unknown_level(self):
        assert risk_color("bogus") == "#6b7280"
        assert risk_bg("bogus") == "#f9fafb"
        assert risk_label("bogus") == "Unbekannt"

    def test_display_from_score(self):
        d = risk_display(83)
        assert (d.color, d.bg, d.label) == ("#dc2626", "#fef2f2", "Hoch")
