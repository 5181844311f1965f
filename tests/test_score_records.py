"""
Tests for audit-trail table definitions and settings.
"""
from compliance_engine.core.config import Settings
from compliance_engine.models.score_records import SCHEMA, RiskScoringProfile


class TestRiskScoringProfileTable:
    def test_updated_at_default_is_timezone_aware(self):
        default = RiskScoringProfile.__table__.c.updated_at.default
        assert default.is_callable
        assert default.arg(None).tzinfo is not None

    def test_tables_live_in_compliance_schema(self):
        assert RiskScoringProfile.__table__.schema == SCHEMA == "compliance"


class TestSettings:
    def test_no_unused_schema_setting(self):
        assert "db_schema" not in Settings.model_fields
