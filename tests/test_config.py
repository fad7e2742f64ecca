"""Tests for configuration loading and validation."""

from dataclasses import replace
from decimal import Decimal

import pytest

from src.config import (
    AppConfig,
    DistanceConfig,
    DriverConfig,
    PricingConfig,
    ScheduleConfig,
    _validate_config,
)


class TestConfigValidation:
    def test_default_config_passes_validation(self):
        config = AppConfig()
        _validate_config(config)  # should not raise

    def test_defaults_match_service(self):
        config = AppConfig()
        assert config.pricing.fixed_fee == Decimal("10.00")
        assert config.schedule.first_slot == "08:30"
        assert config.schedule.last_slot == "16:00"

    def test_driver_phone_must_be_digits(self):
        config = replace(AppConfig(), driver=replace(DriverConfig(), phone="+55 11 9"))
        with pytest.raises(ValueError, match="DRIVER_PHONE"):
            _validate_config(config)

    def test_empty_messaging_host(self):
        config = replace(AppConfig(), driver=replace(DriverConfig(), messaging_host=" "))
        with pytest.raises(ValueError, match="MESSAGING_HOST"):
            _validate_config(config)

    def test_negative_fixed_fee(self):
        config = replace(AppConfig(), pricing=replace(PricingConfig(), fixed_fee=Decimal("-1")))
        with pytest.raises(ValueError, match="FIXED_FEE"):
            _validate_config(config)

    def test_distance_range_inverted(self):
        config = replace(AppConfig(), distance=replace(DistanceConfig(), min_km=60, max_km=55))
        with pytest.raises(ValueError, match="DISTANCE_MAX_KM"):
            _validate_config(config)

    def test_negative_delay(self):
        config = replace(AppConfig(), distance=replace(DistanceConfig(), delay_sec=-0.5))
        with pytest.raises(ValueError, match="DISTANCE_DELAY_SEC"):
            _validate_config(config)

    def test_zero_slot_step(self):
        config = replace(AppConfig(), schedule=replace(ScheduleConfig(), slot_step_minutes=0))
        with pytest.raises(ValueError, match="SLOT_STEP_MINUTES"):
            _validate_config(config)

    def test_malformed_slot_time(self):
        config = replace(AppConfig(), schedule=replace(ScheduleConfig(), first_slot="8h30"))
        with pytest.raises(ValueError, match="FIRST_SLOT"):
            _validate_config(config)

    def test_window_inverted(self):
        config = replace(
            AppConfig(),
            schedule=replace(ScheduleConfig(), first_slot="17:00", last_slot="16:00"),
        )
        with pytest.raises(ValueError, match="LAST_SLOT"):
            _validate_config(config)


class TestEnvParsing:
    def test_safe_int_parsing(self):
        from src.config import _safe_int

        assert _safe_int("NONEXISTENT_VAR_12345", "42") == 42

    def test_safe_float_parsing(self):
        from src.config import _safe_float

        assert _safe_float("NONEXISTENT_VAR_12345", "3.14") == pytest.approx(3.14)

    def test_safe_decimal_parsing(self):
        from src.config import _safe_decimal

        assert _safe_decimal("NONEXISTENT_VAR_12345", "10.00") == Decimal("10.00")

    def test_safe_int_bad_value(self, monkeypatch):
        from src.config import _safe_int

        monkeypatch.setenv("BOOKING_TEST_INT", "abc")
        with pytest.raises(ValueError, match="BOOKING_TEST_INT"):
            _safe_int("BOOKING_TEST_INT", "1")

    def test_safe_decimal_bad_value(self, monkeypatch):
        from src.config import _safe_decimal

        monkeypatch.setenv("BOOKING_TEST_DEC", "ten")
        with pytest.raises(ValueError, match="BOOKING_TEST_DEC"):
            _safe_decimal("BOOKING_TEST_DEC", "1")
