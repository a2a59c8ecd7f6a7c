"""
Google Fit category mappers.

Google Fit dataset responses carry their records in a "point" list:

    {
        "dataSourceId": "derived:com.google.calories.expended:...:merge_calories_expended",
        "point": [
            {
                "startTimeNanos": "1439924400000000000",
                "endTimeNanos": "1439928000000000000",
                "dataTypeName": "com.google.calories.expended",
                "originDataSourceId": "derived:...:from_activities",
                "value": [{"fpVal": 175.5}]
            }
        ]
    }

Timestamps are UTC nanosecond epochs; a point whose start equals its end is an
instantaneous reading.
"""

from collections.abc import Mapping
from datetime import UTC
from typing import Any

from ..coercion import optional_string, require_double, require_int
from ..policy import admits_measurement, admits_source
from ..provenance import build_provenance, modality_from_origin
from ..provider_types import Category, Provider
from ..schema import (
    AcquisitionProvenance,
    BodyWeight,
    CaloriesBurned,
    HeartRate,
    StepCount,
    TimeFrame,
    UnitValue,
)
from ..timeframes import EpochUnit, TimestampScheme, resolve_time_frame
from ..units import HeartRateUnit, KcalUnit, MassUnit
from .base import DocumentContext, ProviderMapper

GOOGLE_FIT_TIMESTAMPS = TimestampScheme(
    start_field="startTimeNanos",
    end_field="endTimeNanos",
    epoch_unit=EpochUnit.NANOSECONDS,
    default_offset=UTC,
    collapse_equal_interval=True,
)

ORIGIN_FIELD = "originDataSourceId"
USER_INPUT_MARKER = "user_input"
# Calories from basal metabolic rate are not activity calories
BMR_MARKER = "bmr"


class GoogleFitMapper(ProviderMapper):
    """Behavior shared by all Google Fit category mappers."""

    provider = Provider.GOOGLE_FIT
    source_name = "Google Fit API"
    list_path = "point"
    timestamps = GOOGLE_FIT_TIMESTAMPS

    def resolve_time_frame(
        self, record: Mapping[str, Any], context: DocumentContext
    ) -> TimeFrame | None:
        return resolve_time_frame(record, self.timestamps, context.document)

    def resolve_provenance(
        self, record: Mapping[str, Any], context: DocumentContext
    ) -> AcquisitionProvenance:
        origin = optional_string(record, ORIGIN_FIELD)
        return build_provenance(
            self.source_name,
            modality_from_origin(origin, (USER_INPUT_MARKER,)),
            source_origin_id=origin,
        )


class GoogleFitCaloriesBurnedMapper(GoogleFitMapper):
    """Maps "com.google.calories.expended" points to CaloriesBurned."""

    category = Category.CALORIES_BURNED

    def is_included(self, record: Mapping[str, Any]) -> bool:
        return admits_source(record, ORIGIN_FIELD, (BMR_MARKER,))

    def build_body(self, record: Mapping[str, Any], context: DocumentContext) -> CaloriesBurned:
        return CaloriesBurned(
            kcal_burned=UnitValue(
                value=require_double(record, "value.0.fpVal"),
                unit=KcalUnit.KILOCALORIE.value,
            )
        )


class GoogleFitHeartRateMapper(GoogleFitMapper):
    """Maps "com.google.heart_rate.bpm" points to HeartRate."""

    category = Category.HEART_RATE

    def is_included(self, record: Mapping[str, Any]) -> bool:
        return admits_measurement(record, "value.0.fpVal")

    def build_body(self, record: Mapping[str, Any], context: DocumentContext) -> HeartRate:
        return HeartRate(
            heart_rate=UnitValue(
                value=require_double(record, "value.0.fpVal"),
                unit=HeartRateUnit.BEATS_PER_MINUTE.value,
            )
        )


class GoogleFitStepCountMapper(GoogleFitMapper):
    """Maps "com.google.step_count.delta" points to StepCount."""

    category = Category.STEP_COUNT

    def is_included(self, record: Mapping[str, Any]) -> bool:
        return admits_measurement(record, "value.0.intVal")

    def build_body(self, record: Mapping[str, Any], context: DocumentContext) -> StepCount:
        return StepCount(step_count=require_int(record, "value.0.intVal"))


class GoogleFitBodyWeightMapper(GoogleFitMapper):
    """Maps "com.google.weight" points (kilograms) to BodyWeight."""

    category = Category.BODY_WEIGHT

    def is_included(self, record: Mapping[str, Any]) -> bool:
        return admits_measurement(record, "value.0.fpVal")

    def build_body(self, record: Mapping[str, Any], context: DocumentContext) -> BodyWeight:
        return BodyWeight(
            body_weight=UnitValue(
                value=require_double(record, "value.0.fpVal"),
                unit=MassUnit.KILOGRAM.value,
            )
        )
