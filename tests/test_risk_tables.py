"""
Unit tests for industry / product / volume / source-of-funds tables.
"""
from compliance_engine.scoring.risk_tables import (
    Industry,
    Product,
    industry_risk,
    product_risk,
    source_of_funds_risk,
    split_values,
    volume_risk,
)


class TestIndustry:
    def test_exact_label(self):
        assert industry_risk("Krypto / Blockchain / DLT") == 80
        assert industry_risk("Money Service Business (MSB)") == 85
        assert industry_risk("IT / Software") == 15

    def test_enum_member(self):
        assert industry_risk(Industry.TRUST) == 55

    def test_unmatched(self):
        assert industry_risk("Bäckerei") == 30
        assert industry_risk("krypto / blockchain / dlt") == 30  # exact match only

    def test_missing(self):
        assert industry_risk(None) == 30


class TestProducts:
    def test_exact_label(self):
        assert product_risk("DeFi Services") == 80
        assert product_risk("Insurance") == 25

    def test_enum_member(self):
        assert product_risk(Product.CRYPTO_TRADING) == 75

    def test_unmatched(self):
        assert product_risk("Kaffee") == 30


class TestVolume:
    def test_very_high(self):
        assert volume_risk("> 10 Mio") == 80
        assert volume_risk("sehr hoch") == 80

    def test_high(self):
        assert volume_risk("5-10 Mio") == 60
        assert volume_risk("Hoch") == 60

    def test_medium(self):
        assert volume_risk("1-5 Mio") == 40
        assert volume_risk("mittel") == 40

    def test_low(self):
        assert volume_risk("< 1 Mio") == 15
        assert volume_risk("gering") == 15

    def test_unmatched(self):
        assert volume_risk("unbekannt") == 30
        assert volume_risk("") == 30
        assert volume_risk(None) == 30


class TestSourceOfFunds:
    def test_families(self):
        assert source_of_funds_risk("Erbschaft") == 40
        assert source_of_funds_risk("Geschenk der Eltern") == 55
        assert source_of_funds_risk("Bitcoin Mining") == 65
        assert source_of_funds_risk("Lottery") == 70
        assert source_of_funds_risk("Cash") == 75
        assert source_of_funds_risk("Gehalt") == 10
        assert source_of_funds_risk("Umsatz") == 25
        assert source_of_funds_risk("Investment") == 30
        assert source_of_funds_risk("Verkauf Liegenschaft") == 30

    def test_first_family_wins(self):
        # inheritance is checked before cash
        assert source_of_funds_risk("Erbschaft in bar") == 40

    def test_unmatched(self):
        assert source_of_funds_risk("xyz") == 30
        assert source_of_funds_risk(None) == 30


class TestSplitValues:
    def test_comma_string(self):
        assert split_values("IR, DE") == ["IR", "DE"]

    def test_list_with_embedded_commas(self):
        assert split_values(["CH", "IR,DE", " "]) == ["CH", "IR", "DE"]

    def test_single(self):
        assert split_values("CH") == ["CH"]

    def test_empty(self):
        assert split_values(None) == []
        assert split_values("") == []
        assert split_values([]) == []
        assert split_values(" , ") == []
