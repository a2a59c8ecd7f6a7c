"""Lookup of category mappers by provider and category."""

from collections.abc import Iterable
from typing import Any

from .config import MappingSettings
from .exceptions import MappingConfigurationError
from .mappers.base import CategoryMapper
from .mappers.googlefit import (
    GoogleFitBodyWeightMapper,
    GoogleFitCaloriesBurnedMapper,
    GoogleFitHeartRateMapper,
    GoogleFitStepCountMapper,
)
from .mappers.ihealth import (
    IHealthBloodPressureMapper,
    IHealthBodyWeightMapper,
    IHealthHeartRateMapper,
    IHealthOxygenSaturationMapper,
)
from .provider_types import Category, Provider
from .schema import DataPoint

MAPPERS: dict[tuple[Provider, Category], CategoryMapper] = {
    (Provider.IHEALTH, Category.BLOOD_PRESSURE): IHealthBloodPressureMapper(),
    (Provider.IHEALTH, Category.HEART_RATE): IHealthHeartRateMapper(),
    (Provider.IHEALTH, Category.OXYGEN_SATURATION): IHealthOxygenSaturationMapper(),
    (Provider.IHEALTH, Category.BODY_WEIGHT): IHealthBodyWeightMapper(),
    (Provider.GOOGLE_FIT, Category.CALORIES_BURNED): GoogleFitCaloriesBurnedMapper(),
    (Provider.GOOGLE_FIT, Category.HEART_RATE): GoogleFitHeartRateMapper(),
    (Provider.GOOGLE_FIT, Category.STEP_COUNT): GoogleFitStepCountMapper(),
    (Provider.GOOGLE_FIT, Category.BODY_WEIGHT): GoogleFitBodyWeightMapper(),
}


def get_mapper(provider: Provider | str, category: Category | str) -> CategoryMapper:
    """
    Return the mapper for a provider and category.

    Raises:
        MappingConfigurationError: If the pair is not supported
    """
    try:
        key = (Provider(provider), Category(category))
    except ValueError as e:
        raise MappingConfigurationError(str(e), provider=str(provider)) from e

    mapper = MAPPERS.get(key)
    if mapper is None:
        raise MappingConfigurationError(
            f"No mapper for {key[0].value} {key[1].value}",
            provider=key[0].value,
        )
    return mapper


def supported_categories(provider: Provider | str) -> list[Category]:
    """List the categories a provider can be mapped for."""
    provider = Provider(provider)
    return [category for p, category in MAPPERS if p is provider]


def normalize(
    documents: Iterable[Any],
    provider: Provider | str,
    category: Category | str,
    settings: MappingSettings | None = None,
) -> list[DataPoint]:
    """
    Normalize provider response documents to canonical data points.

    This function dispatches to the provider x category mapper.

    Args:
        documents: Raw response documents (one per page or call)
        provider: Data provider
        category: Measurement category

    Returns:
        Canonical data points, in input order
    """
    return get_mapper(provider, category).map(documents, settings)
