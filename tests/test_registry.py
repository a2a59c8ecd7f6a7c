"""Tests for mapper lookup by provider and category."""

import pytest

from shim_normalize import normalize
from shim_normalize.config import MappingSettings
from shim_normalize.exceptions import MappingConfigurationError
from shim_normalize.mappers.googlefit import GoogleFitCaloriesBurnedMapper
from shim_normalize.mappers.ihealth import IHealthBloodPressureMapper
from shim_normalize.provider_types import Category, Provider
from shim_normalize.registry import get_mapper, supported_categories


class TestRegistry:
    """Tests for provider x category lookup."""

    def test_get_mapper(self):
        assert isinstance(get_mapper(Provider.IHEALTH, Category.BLOOD_PRESSURE), IHealthBloodPressureMapper)
        assert isinstance(get_mapper("googlefit", "calories_burned"), GoogleFitCaloriesBurnedMapper)

    def test_unsupported_pair(self):
        with pytest.raises(MappingConfigurationError):
            get_mapper(Provider.IHEALTH, Category.CALORIES_BURNED)

    def test_unknown_provider(self):
        with pytest.raises(MappingConfigurationError):
            get_mapper("fitbit", Category.HEART_RATE)

    def test_supported_categories(self):
        assert supported_categories(Provider.GOOGLE_FIT) == [
            Category.CALORIES_BURNED,
            Category.HEART_RATE,
            Category.STEP_COUNT,
            Category.BODY_WEIGHT,
        ]

    def test_normalize_dispatches(self, load_response):
        points = normalize(
            [load_response("ihealth-blood-pressure")],
            Provider.IHEALTH,
            Category.BLOOD_PRESSURE,
            MappingSettings(log_skipped_records=False),
        )
        assert len(points) == 2
