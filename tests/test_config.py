"""Tests for configuration loading and validation."""

from dataclasses import replace

import pytest

from booking_engine.config import (
    AppConfig,
    BusinessConfig,
    SubmissionConfig,
    _safe_int,
    _validate_config,
)


def _with_business(**overrides) -> AppConfig:
    config = AppConfig.__new__(AppConfig)
    object.__setattr__(config, "business", replace(BusinessConfig(), **overrides))
    object.__setattr__(config, "submission", SubmissionConfig())
    object.__setattr__(config, "log_level", "INFO")
    return config


def _with_submission(**overrides) -> AppConfig:
    config = AppConfig.__new__(AppConfig)
    object.__setattr__(config, "business", BusinessConfig())
    object.__setattr__(config, "submission", replace(SubmissionConfig(), **overrides))
    object.__setattr__(config, "log_level", "INFO")
    return config


class TestConfigValidation:
    def test_default_config_passes_validation(self):
        _validate_config(AppConfig())  # should not raise

    def test_unknown_timezone(self):
        with pytest.raises(ValueError, match="BUSINESS_TIMEZONE"):
            _validate_config(_with_business(timezone="Mars/Olympus_Mons"))

    def test_open_after_close(self):
        with pytest.raises(ValueError, match="WEEKDAY_OPEN_HOUR"):
            _validate_config(_with_business(weekday_open_hour=19, weekday_close_hour=10))

    def test_close_hour_out_of_range(self):
        with pytest.raises(ValueError, match="WEEKEND_CLOSE_HOUR"):
            _validate_config(_with_business(weekend_close_hour=25))

    def test_unsupported_slot_step(self):
        with pytest.raises(ValueError, match="SLOT_STEP_MINUTES"):
            _validate_config(_with_business(slot_step_minutes=45))

    def test_downpayment_percent_range(self):
        with pytest.raises(ValueError, match="DOWNPAYMENT_PERCENT"):
            _validate_config(_with_business(downpayment_percent=120))

    def test_lowercase_prefix(self):
        with pytest.raises(ValueError, match="REFERENCE_PREFIX"):
            _validate_config(_with_business(reference_prefix="ios"))

    def test_min_name_length(self):
        with pytest.raises(ValueError, match="MIN_NAME_LENGTH"):
            _validate_config(_with_submission(min_name_length=0))

    def test_name_max_below_min(self):
        with pytest.raises(ValueError, match="NAME_MAX_LENGTH"):
            _validate_config(_with_submission(name_max_length=1, min_name_length=2))


class TestSafeInt:
    def test_reads_env(self, monkeypatch):
        monkeypatch.setenv("SLOT_STEP_MINUTES", "15")
        assert _safe_int("SLOT_STEP_MINUTES", "30") == 15

    def test_default(self, monkeypatch):
        monkeypatch.delenv("SLOT_STEP_MINUTES", raising=False)
        assert _safe_int("SLOT_STEP_MINUTES", "30") == 30

    def test_bad_value(self, monkeypatch):
        monkeypatch.setenv("SLOT_STEP_MINUTES", "half-hour")
        with pytest.raises(ValueError, match="SLOT_STEP_MINUTES"):
            _safe_int("SLOT_STEP_MINUTES", "30")
