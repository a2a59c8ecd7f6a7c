"""
Shim Normalize Library

Maps heterogeneous health and fitness API responses (iHealth, Google Fit)
into a single canonical schema of typed measurements.
"""

from .config import MappingSettings
from .exceptions import (
    InvalidTimestampError,
    MappingConfigurationError,
    MappingError,
    MissingRequiredFieldError,
    RecordError,
    TypeMismatchError,
    UnsupportedUnitError,
)
from .mappers import (
    CategoryMapper,
    MappingReport,
    SkippedRecord,
    SkipReason,
    map_documents,
    map_documents_with_report,
)
from .provider_types import Category, Provider
from .registry import get_mapper, normalize, supported_categories
from .schema import DataPoint, DataPointHeader, Measure, Modality, TimeFrame

__version__ = "0.1.0"

__all__ = [
    "MappingSettings",
    "MappingError",
    "RecordError",
    "MissingRequiredFieldError",
    "TypeMismatchError",
    "UnsupportedUnitError",
    "InvalidTimestampError",
    "MappingConfigurationError",
    "CategoryMapper",
    "MappingReport",
    "SkippedRecord",
    "SkipReason",
    "map_documents",
    "map_documents_with_report",
    "Provider",
    "Category",
    "get_mapper",
    "normalize",
    "supported_categories",
    "DataPoint",
    "DataPointHeader",
    "Measure",
    "Modality",
    "TimeFrame",
]
