"""Provider x category mappers."""

from .base import (
    CategoryMapper,
    DocumentContext,
    MappingReport,
    ProviderMapper,
    SkippedRecord,
    SkipReason,
    map_documents,
    map_documents_with_report,
)
from .googlefit import (
    GoogleFitBodyWeightMapper,
    GoogleFitCaloriesBurnedMapper,
    GoogleFitHeartRateMapper,
    GoogleFitStepCountMapper,
)
from .ihealth import (
    IHealthBloodPressureMapper,
    IHealthBodyWeightMapper,
    IHealthHeartRateMapper,
    IHealthOxygenSaturationMapper,
)

__all__ = [
    "CategoryMapper",
    "DocumentContext",
    "MappingReport",
    "ProviderMapper",
    "SkippedRecord",
    "SkipReason",
    "map_documents",
    "map_documents_with_report",
    "GoogleFitBodyWeightMapper",
    "GoogleFitCaloriesBurnedMapper",
    "GoogleFitHeartRateMapper",
    "GoogleFitStepCountMapper",
    "IHealthBloodPressureMapper",
    "IHealthBodyWeightMapper",
    "IHealthHeartRateMapper",
    "IHealthOxygenSaturationMapper",
]
