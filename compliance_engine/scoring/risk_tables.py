"""
Industry, product, volume and source-of-funds risk tables.

Industry and product are closed German taxonomies (exact label match).
Volume and source of funds are free text, classified by keyword search.
The keyword tables are kept verbatim: changing classification boundaries
changes real risk outcomes.

Convention: 0-100, HIGHER score = HIGHER risk. Anything unmatched → 30.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterable, Mapping, Optional, Union

DEFAULT_RISK = 30


# ═══════════════════════════════════════════════════════════════
# INDUSTRY
# ═══════════════════════════════════════════════════════════════
class Industry(str, Enum):
    CRYPTO = "Krypto / Blockchain / DLT"
    MSB = "Money Service Business (MSB)"
    PAYMENT_PROVIDER_DE = "Zahlungsdienstleister"
    PAYMENT_PROVIDER = "Payment Service Provider"
    REMITTANCE = "Geldtransfer / Remittance"
    CROWDFUNDING = "Crowdfunding"
    INVESTMENT = "Investment / Fondsmanagement"
    INVESTMENT_COMPANY = "Investmentgesellschaft"
    VENTURE_CAPITAL = "Venture Capital / PE"
    FINTECH = "Fintech"
    BANK = "Bank / Kreditinstitut"
    WEALTH_MANAGEMENT = "Vermögensverwaltung"
    INSURANCE = "Versicherung"
    TRUST = "Treuhand / Trust"
    REAL_ESTATE = "Immobilien"
    TRADE = "Handel / E-Commerce"
    IT = "IT / Software"
    CONSULTING = "Beratung / Consulting"


INDUSTRY_RISK: Mapping[Industry, int] = {
    # High risk
    Industry.CRYPTO: 80,
    Industry.MSB: 85,
    Industry.PAYMENT_PROVIDER_DE: 65,
    Industry.PAYMENT_PROVIDER: 65,
    Industry.REMITTANCE: 80,
    Industry.CROWDFUNDING: 55,
    Industry.INVESTMENT: 50,
    Industry.INVESTMENT_COMPANY: 50,
    Industry.VENTURE_CAPITAL: 45,
    # Medium risk
    Industry.FINTECH: 50,
    Industry.BANK: 40,
    Industry.WEALTH_MANAGEMENT: 45,
    Industry.INSURANCE: 30,
    Industry.TRUST: 55,
    # Low risk
    Industry.REAL_ESTATE: 35,
    Industry.TRADE: 30,
    Industry.IT: 15,
    Industry.CONSULTING: 20,
}


# ═══════════════════════════════════════════════════════════════
# PRODUCTS
# ═══════════════════════════════════════════════════════════════
class Product(str, Enum):
    CRYPTO_TRADING = "Crypto Trading"
    CRYPTO_CUSTODY = "Crypto Custody"
    DEFI = "DeFi Services"
    NFT = "NFT Marketplace"
    TOKEN_ISSUANCE = "Token Issuance / ICO / STO"
    PAYMENT_PROCESSING = "Payment Processing"
    REMITTANCE = "Remittance"
    CROWDFUNDING = "Crowdfunding"
    INVESTMENT = "Investment / Fondsmanagement"
    FOREX = "Forex / CFD"
    LENDING = "Lending / Credit"
    INSURANCE = "Insurance"
    BANKING = "Banking"
    ASSET_MANAGEMENT = "Asset Management"


PRODUCT_RISK: Mapping[Product, int] = {
    Product.CRYPTO_TRADING: 75,
    Product.CRYPTO_CUSTODY: 65,
    Product.DEFI: 80,
    Product.NFT: 60,
    Product.TOKEN_ISSUANCE: 75,
    Product.PAYMENT_PROCESSING: 55,
    Product.REMITTANCE: 75,
    Product.CROWDFUNDING: 50,
    Product.INVESTMENT: 45,
    Product.FOREX: 60,
    Product.LENDING: 45,
    Product.INSURANCE: 25,
    Product.BANKING: 35,
    Product.ASSET_MANAGEMENT: 40,
}


def industry_risk(label: Optional[str]) -> int:
    try:
        return INDUSTRY_RISK[Industry(label)]
    except ValueError:
        return DEFAULT_RISK


def product_risk(label: Optional[str]) -> int:
    try:
        return PRODUCT_RISK[Product(label)]
    except ValueError:
        return DEFAULT_RISK


# ═══════════════════════════════════════════════════════════════
# TRANSACTION VOLUME
#    Checked top-down, so "sehr hoch" must precede "hoch".
# ═══════════════════════════════════════════════════════════════
VOLUME_RULES: tuple[tuple[tuple[str, ...], int], ...] = (
    (("> 10 mio", ">10m", "sehr hoch"), 80),
    (("5-10 mio", "5m-10m", "hoch"), 60),
    (("1-5 mio", "1m-5m", "mittel"), 40),
    (("< 1 mio", "<1m", "tief", "gering"), 15),
)


def volume_risk(tx_volume: Optional[str]) -> int:
    return _classify(tx_volume, VOLUME_RULES)


# ═══════════════════════════════════════════════════════════════
# SOURCE OF FUNDS
#    Keyword families, first match wins.
#    Range: 10 (salary) … 75 (cash).
# ═══════════════════════════════════════════════════════════════
SOURCE_OF_FUNDS_RULES: tuple[tuple[tuple[str, ...], int], ...] = (
    (("ererbt", "erbschaft"), 40),                # inheritance
    (("geschenk", "donation"), 55),               # gift
    (("krypto", "crypto", "mining"), 65),         # crypto / mining
    (("gewinn", "gambling", "lottery"), 70),      # winnings
    (("bar", "cash"), 75),                        # cash
    (("gehalt", "lohn", "salary"), 10),           # salary
    (("geschäfts", "business", "umsatz"), 25),    # business revenue
    (("investition", "investment"), 30),          # investment proceeds
    (("verkauf", "sale"), 30),                    # asset sale
)


def source_of_funds_risk(source: Optional[str]) -> int:
    return _classify(source, SOURCE_OF_FUNDS_RULES)


def _classify(text: Optional[str], rules) -> int:
    if not text:
        return DEFAULT_RISK
    lower = str(text).lower()
    for keywords, score in rules:
        if any(kw in lower for kw in keywords):
            return score
    return DEFAULT_RISK


# ═══════════════════════════════════════════════════════════════
# "value | list | comma-joined string" → flat list of strings
# ═══════════════════════════════════════════════════════════════
def split_values(value: Union[str, Iterable, None]) -> list[str]:
    """
    Normalise geo_focus / products style fields:
      "IR, DE"        → ["IR", "DE"]
      ["CH", "IR,DE"] → ["CH", "IR", "DE"]
      None / "" / []  → []
    """
    if value is None:
        return []
    items = [value] if isinstance(value, (str, bytes)) or not isinstance(value, Iterable) else value

    out: list[str] = []
    for item in items:
        if item is None:
            continue
        if isinstance(item, bytes):
            item = item.decode("utf-8", errors="replace")
        for part in str(item).split(","):
            part = part.strip()
            if part:
                out.append(part)
    return out
