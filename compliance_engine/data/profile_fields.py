"""
Company profile form schema.

Drives both the profile-completion percentage and the "profile" category
of the audit readiness score. A field counts as required unless
`required` is explicitly False.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class ProfileFieldDef(BaseModel):
    id: str
    label: str
    type: str = "text"  # text | textarea | number | select | multi | toggle
    section: Optional[str] = None
    required: Optional[bool] = None
    options: list[str] = []
    hint: Optional[str] = None

    @property
    def is_required(self) -> bool:
        return self.required is not False


def _field(id: str, label: str, type: str, section: str, required: bool = True, **kwargs) -> ProfileFieldDef:
    return ProfileFieldDef(id=id, label=label, type=type, section=section, required=required, **kwargs)


PROFILE_FIELDS: tuple[ProfileFieldDef, ...] = (
    # ── Stammdaten ──
    _field("company_name", "Firmenname (rechtlich)", "text", "Stammdaten",
           hint="Identifikation des Finanzintermediärs"),
    _field("legal_form", "Rechtsform", "select", "Stammdaten",
           options=["AG", "GmbH", "Einzelfirma", "Genossenschaft", "Stiftung", "Verein"]),
    _field("uid", "UID / Handelsregisternummer", "text", "Stammdaten", hint="Eindeutige Identifikation"),
    _field("address", "Sitz / Geschäftsadresse", "text", "Stammdaten"),
    _field("founding_year", "Gründungsjahr", "number", "Stammdaten"),

    # ── Geschäftstätigkeit ──
    _field("industry", "Branche / Geschäftsfeld", "select", "Geschäftstätigkeit",
           options=["Fintech", "Crypto / DLT", "Vermögensverwaltung", "Zahlungsverkehr",
                    "Leasing / Finanzierung", "Versicherung", "Andere"]),
    _field("business_detail", "Detaillierte Geschäftstätigkeit", "textarea", "Geschäftstätigkeit"),

    # ── Organisation ──
    _field("employees", "Anzahl Mitarbeitende", "number", "Organisation"),
    _field("management", "Geschäftsleitung / VR-Mitglieder", "text", "Organisation"),
    _field("compliance_officer", "Compliance Officer", "text", "Organisation", hint="Art. 24 AMLO-FINMA"),

    # ── Regulierung ──
    _field("sro", "SRO-Mitgliedschaft", "select", "Regulierung",
           options=["VQF", "PolyReg", "SO-FIT", "ARIF", "OAR-G", "Keine / In Bearbeitung"]),
    _field("sro_status", "SRO-Status", "select", "Regulierung",
           options=["Aktives Mitglied", "Aufnahme beantragt", "In Vorbereitung", "Nicht erforderlich"]),
    _field("finma_license", "FINMA-Lizenz", "select", "Regulierung", required=False,
           options=["Keine", "Fintech-Lizenz", "Banklizenz", "Effektenhändler", "Vermögensverwalter"]),

    # ── Risikoprofil ──
    _field("tx_volume", "Transaktionsvolumen (jährl.)", "select", "Risikoprofil",
           options=["< CHF 1 Mio.", "CHF 1-10 Mio.", "CHF 10-50 Mio.", "CHF 50-100 Mio.", "> CHF 100 Mio."]),
    _field("client_types", "Kundentypen", "multi", "Risikoprofil",
           options=["B2B (Unternehmen)", "B2C (Privatkunden)", "Institutionelle Kunden", "NPOs / Vereine"]),
    _field("geo_focus", "Geogr. Fokus der Kunden", "multi", "Risikoprofil",
           options=["Schweiz", "EU/EWR", "USA/UK", "Asien", "Naher Osten", "Afrika", "Lateinamerika"]),
    _field("products", "Produkte & Dienstleistungen", "multi", "Risikoprofil",
           options=["Zahlungsabwicklung", "Kreditvergabe / Leasing", "Vermögensverwaltung",
                    "Custody / Verwahrung", "Crypto-Exchange", "Tokenisierung", "Beratung"]),
    _field("crypto", "Crypto/DLT-Bezug", "toggle", "Risikoprofil"),
    _field("cross_border", "Grenzüberschreitende Tätigkeit", "toggle", "Risikoprofil"),
    _field("existing_infra", "Bestehende Compliance-Infrastruktur", "multi", "Risikoprofil", required=False,
           options=["KYC-Software", "Transaktionsmonitoring", "Sanktionslisten-Screening",
                    "Schulungsplattform", "DMS", "Keine"]),
)
