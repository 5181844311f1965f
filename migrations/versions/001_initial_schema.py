"""
001 — Initial schema: score tables + risk scoring profiles

Revision ID: 001
Create Date: 2026-03-02
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSON

revision = "001"
down_revision = None
branch_labels = None
depends_on = None

DEFAULT_WEIGHTS = {"country": 25, "industry": 15, "pep": 20, "products": 15, "volume": 10, "source_of_funds": 15}
SROS = ["VQF", "PolyReg", "SO-FIT", "ARIF", "OAR-G"]


def upgrade() -> None:
    op.execute("CREATE SCHEMA IF NOT EXISTS compliance")

    op.create_table(
        "customer_risk_score",
        sa.Column("customer_id", sa.String(100), primary_key=True),
        sa.Column("organization_id", sa.String(100), nullable=False),

        sa.Column("model_version", sa.String(10), nullable=False),
        sa.Column("overall_score", sa.Integer, nullable=False),
        sa.Column("risk_level", sa.String(20), nullable=False),

        sa.Column("factors_json", JSON, nullable=False),
        sa.Column("breakdown_json", JSON, nullable=False),
        sa.Column("weights_json", JSON, nullable=False),

        sa.Column("calculated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("calculated_by", sa.String(100), nullable=True),

        schema="compliance",
    )
    op.create_index("ix_customer_risk_score_organization_id", "customer_risk_score", ["organization_id"], schema="compliance")
    op.create_index("ix_customer_risk_score_risk_level", "customer_risk_score", ["risk_level"], schema="compliance")

    op.create_table(
        "audit_score_snapshot",
        sa.Column("snapshot_id", sa.String(36), primary_key=True),
        sa.Column("organization_id", sa.String(100), nullable=False),

        sa.Column("total", sa.Integer, nullable=False),
        sa.Column("label", sa.String(20), nullable=False),
        sa.Column("categories_json", JSON, nullable=False),
        sa.Column("input_payload", JSON, nullable=False),

        sa.Column("computed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("computed_by", sa.String(100), nullable=True),

        schema="compliance",
    )
    op.create_index("ix_audit_score_snapshot_organization_id", "audit_score_snapshot", ["organization_id"], schema="compliance")
    op.create_index("ix_audit_score_snapshot_computed_at", "audit_score_snapshot", ["computed_at"], schema="compliance")

    profiles = op.create_table(
        "risk_scoring_profile",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("sro", sa.String(50), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("weights", JSON, nullable=False),
        sa.Column("country_risk_map", JSON, nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_by", sa.String(100), nullable=True),
        sa.UniqueConstraint("sro", "name", name="uq_risk_scoring_profile_sro_name"),
        schema="compliance",
    )

    # ── Seed: one "Standard" profile per SRO with the default weights ──
    op.bulk_insert(profiles, [
        {"sro": sro, "name": "Standard", "weights": DEFAULT_WEIGHTS, "country_risk_map": {}, "updated_by": "migration_001"}
        for sro in SROS
    ])


def downgrade() -> None:
    op.drop_table("risk_scoring_profile", schema="compliance")
    op.drop_table("audit_score_snapshot", schema="compliance")
    op.drop_table("customer_risk_score", schema="compliance")
