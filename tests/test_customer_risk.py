"""
Tests for the customer risk scoring engine.
"""
from compliance_engine.schemas.risk_request import CustomerData, RiskWeights
from compliance_engine.schemas.risk_response import RiskLevel
from compliance_engine.scoring.customer_risk import (
    DEFAULT_WEIGHTS,
    calculate_customer_risk,
    score_pep,
)
from compliance_engine.scoring.numeric import round_half_up


def _make_customer(**kwargs) -> CustomerData:
    defaults = {
        "nationality": "CH",
        "country": "CH",
        "industry": "IT / Software",
        "pep_status": False,
        "products": "Banking",
        "tx_volume": "< 1 Mio",
        "source_of_funds": "Gehalt",
    }
    defaults.update(kwargs)
    return CustomerData(**defaults)


class TestDefaultWeights:
    def test_values(self):
        assert DEFAULT_WEIGHTS.model_dump() == {
            "country": 25,
            "industry": 15,
            "pep": 20,
            "products": 15,
            "volume": 10,
            "source_of_funds": 15,
        }
        assert DEFAULT_WEIGHTS.total() == 100


class TestCountryFactor:
    def test_multi_country_takes_max(self):
        r = calculate_customer_risk(CustomerData(nationality="CH", geo_focus="IR, DE"))
        assert r.factors.country == 90

    def test_geo_focus_list(self):
        r = calculate_customer_risk({"geo_focus": ["CH", "RU,DE"]})
        assert r.factors.country == 65

    def test_no_countries(self):
        r = calculate_customer_risk(CustomerData())
        assert r.factors.country == 30

    def test_list_valued_nationality(self):
        r = calculate_customer_risk({"nationality": ["IR"], "country": "CH"})
        assert r.factors.country == 90

    def test_dual_nationality_in_model(self):
        r = calculate_customer_risk(CustomerData(nationality=["CH", "RU"], country="CH"))
        assert r.factors.country == 65

    def test_custom_map_applies(self):
        r = calculate_customer_risk(CustomerData(nationality="CH"), country_risk_map={"CH": 60})
        assert r.factors.country == 60


class TestPepFactor:
    def test_absent_is_not_pep(self):
        assert score_pep(None) == 5
        assert calculate_customer_risk(CustomerData()).factors.pep == 5

    def test_true_values(self):
        assert score_pep(True) == 90
        assert score_pep("yes") == 90
        assert score_pep("true") == 90

    def test_false_values(self):
        assert score_pep(False) == 5
        assert score_pep("no") == 5
        assert score_pep("") == 5

    def test_truthy_non_bool_in_model_is_not_pep(self):
        c = CustomerData(pep_status=1)
        assert c.pep_status == 1
        assert calculate_customer_risk(c).factors.pep == 5
        assert calculate_customer_risk(CustomerData(pep_status="True")).factors.pep == 5


class TestProductFactor:
    def test_max_of_products(self):
        r = calculate_customer_risk(CustomerData(products="Insurance, DeFi Services"))
        assert r.factors.products == 80

    def test_list(self):
        r = calculate_customer_risk(CustomerData(products=["Banking", "Crypto Custody"]))
        assert r.factors.products == 65

    def test_unknown_product(self):
        r = calculate_customer_risk(CustomerData(products="Kaffee"))
        assert r.factors.products == 30

    def test_missing(self):
        assert calculate_customer_risk(CustomerData(products=[])).factors.products == 30


class TestFallbacks:
    def test_empty_customer_is_standard(self):
        r = calculate_customer_risk(CustomerData())
        assert r.factors.model_dump() == {
            "country": 30,
            "industry": 30,
            "pep": 5,
            "products": 30,
            "volume": 30,
            "source_of_funds": 30,
        }
        # 30*25 + 30*15 + 5*20 + 30*15 + 30*10 + 30*15 = 2500 → 25
        assert r.overall_score == 25
        assert r.risk_level == RiskLevel.LOW

    def test_plain_dict_with_junk_types(self):
        r = calculate_customer_risk({
            "nationality": 42,
            "industry": ["not", "a", "label"],
            "pep_status": 1,
            "products": None,
            "tx_volume": 5,
        })
        assert 0 <= r.overall_score <= 100
        assert r.factors.pep == 5

    def test_none_customer(self):
        r = calculate_customer_risk(None)
        assert r.overall_score == 25


class TestWeights:
    def test_zero_weights_do_not_divide_by_zero(self):
        zero = RiskWeights(country=0, industry=0, pep=0, products=0, volume=0, source_of_funds=0)
        r = calculate_customer_risk(_make_customer(), zero)
        assert r.overall_score == 0
        assert r.risk_level == RiskLevel.LOW

    def test_weights_are_normalised(self):
        only_country = RiskWeights(country=3, industry=0, pep=0, products=0, volume=0, source_of_funds=0)
        r = calculate_customer_risk(CustomerData(nationality="IR"), only_country)
        assert r.overall_score == 90

    def test_scaled_weights_same_result(self):
        doubled = RiskWeights(**{k: v * 2 for k, v in DEFAULT_WEIGHTS.model_dump().items()})
        c = _make_customer(nationality="RU", pep_status="yes")
        assert calculate_customer_risk(c, doubled).overall_score == calculate_customer_risk(c).overall_score

    def test_default_weights_not_mutated(self):
        before = DEFAULT_WEIGHTS.model_dump()
        calculate_customer_risk(_make_customer(), RiskWeights(country=100))
        assert DEFAULT_WEIGHTS.model_dump() == before


class TestBreakdown:
    def test_fixed_order(self):
        r = calculate_customer_risk(_make_customer())
        assert [b.factor for b in r.breakdown] == [
            "country", "industry", "pep", "products", "volume", "source_of_funds",
        ]
        assert r.breakdown[0].label == "Länderrisiko"
        assert r.breakdown[-1].label == "Mittelherkunft"

    def test_weighted_sum_matches_overall(self):
        c = _make_customer(nationality="NG", industry="Fintech", products="Forex / CFD", tx_volume="hoch")
        r = calculate_customer_risk(c)
        assert round_half_up(sum(b.weighted for b in r.breakdown)) == r.overall_score

    def test_breakdown_scores_match_factors(self):
        r = calculate_customer_risk(_make_customer())
        for b in r.breakdown:
            assert b.score == getattr(r.factors, b.factor)


class TestEndToEnd:
    def test_low_risk_customer(self):
        r = calculate_customer_risk(_make_customer())
        # 10*25 + 15*15 + 5*20 + 35*15 + 15*10 + 10*15 = 1400 → 14
        assert r.overall_score == 14
        assert r.risk_level == RiskLevel.LOW
        assert r.label == "Tief"

    def test_high_risk_customer(self):
        c = CustomerData(
            nationality="IR",
            industry="Krypto / Blockchain / DLT",
            pep_status=True,
            products="Crypto Trading",
            tx_volume="sehr hoch",
            source_of_funds="bar",
        )
        r = calculate_customer_risk(c)
        # 90*25 + 80*15 + 90*20 + 75*15 + 80*10 + 75*15 = 8300 → 83
        assert r.overall_score == 83
        assert r.risk_level == RiskLevel.HIGH
        assert r.color == "#dc2626"

    def test_deterministic(self):
        c = _make_customer(geo_focus=["IR", "DE"])
        assert calculate_customer_risk(c) == calculate_customer_risk(c)

    def test_override_above_100_is_clamped(self):
        r = calculate_customer_risk(
            CustomerData(nationality="XX", pep_status=True, industry="Money Service Business (MSB)"),
            RiskWeights(country=1, industry=0, pep=0, products=0, volume=0, source_of_funds=0),
            country_risk_map={"XX": 250},
        )
        assert r.overall_score == 100
        assert r.risk_level == RiskLevel.HIGH
