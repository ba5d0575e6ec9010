"""
Test Suite for Settings and Logging Setup
"""

import logging

import pytest

from eeat_engine.dedup.gate import DedupThresholds
from eeat_engine.quality import EEATWeights, ExternalSignals
from eeat_engine.utils import Settings, configure_logging, get_settings


class TestSettings:
    """Test environment-based configuration."""

    def test_defaults(self):
        settings = Settings()

        assert settings.WEIGHT_EXPERTISE == 0.30
        assert settings.MIN_EEAT_SCORE == 60
        assert settings.DEDUP_GLOBAL_THRESHOLD == 0.9
        assert settings.STRICT_WEIGHTS is False

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("MIN_CITATION_COUNT", "5")
        monkeypatch.setenv("weight_experience", "0.4")

        settings = Settings()

        assert settings.MIN_CITATION_COUNT == 5
        assert settings.WEIGHT_EXPERIENCE == 0.4

    def test_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()


class TestFromSettings:
    """Test building scoring inputs from settings."""

    def test_weights(self):
        weights = EEATWeights.from_settings(Settings(WEIGHT_EXPERIENCE=0.35, WEIGHT_EXPERTISE=0.20))

        assert weights.experience == 0.35
        assert weights.expertise == 0.20
        assert weights.total == pytest.approx(1.0)

    def test_external_signals(self):
        external = ExternalSignals.from_settings(Settings(FACT_CHECK_SCORE_DEFAULT=90))

        assert external.fact_check_score == 90
        assert external.technical_accuracy == 70
        assert external.fallback_domain_authority == 30

    def test_dedup_thresholds(self):
        thresholds = DedupThresholds.from_settings(Settings())
        assert thresholds == DedupThresholds(campaign=0.8, site=0.9)


class TestConfigureLogging:
    """Test logging setup."""

    def test_explicit_level(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

        configure_logging("debug")

        assert calls["level"] == logging.DEBUG

    def test_level_from_settings(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        get_settings.cache_clear()

        configure_logging()
        get_settings.cache_clear()

        assert calls["level"] == logging.WARNING
