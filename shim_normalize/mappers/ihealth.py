"""
iHealth category mappers.

iHealth list records share a common shape:

    {
        "DataID": "d7fb9db14b0fc3e8e1635720c28bda64",
        "DataSource": "FromDevice",     # "Manual" for user-entered values
        "LastChangeTime": 1443044760,   # UTC epoch seconds
        "MDate": 1443023160,            # local wall-clock time as epoch seconds
        "Note": "",
        "TimeZone": "-0600",
        ...measurement fields...
    }

Units are declared once per response (e.g. "BPUnit") as integer codes.
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from ..coercion import optional_int, optional_string, require_double, require_int
from ..exceptions import InvalidTimestampError
from ..policy import admits_measurement
from ..provenance import build_provenance, modality_from_flag
from ..provider_types import Category, Provider
from ..schema import (
    AcquisitionProvenance,
    BloodPressure,
    BodyWeight,
    HeartRate,
    OxygenSaturation,
    TimeFrame,
    UnitValue,
)
from ..timeframes import EpochUnit, TimestampScheme, resolve_time_frame
from ..units import (
    BloodPressureUnit,
    HeartRateUnit,
    MassUnit,
    PercentUnit,
    resolve_unit_code,
    to_kilograms,
    to_mm_of_mercury,
)
from .base import DocumentContext, ProviderMapper

IHEALTH_TIMESTAMPS = TimestampScheme(
    instant_field="MDate",
    epoch_unit=EpochUnit.SECONDS,
    offset_field="TimeZone",
    epoch_is_local=True,
)

IHEALTH_BLOOD_PRESSURE_UNITS = {
    0: BloodPressureUnit.MM_OF_MERCURY,
    1: BloodPressureUnit.KILOPASCAL,
}

IHEALTH_BODY_WEIGHT_UNITS = {
    0: MassUnit.KILOGRAM,
    1: MassUnit.POUND,
    2: MassUnit.STONE,
}

MANUAL_DATA_SOURCE = "Manual"


class IHealthMapper(ProviderMapper):
    """Behavior shared by all iHealth category mappers."""

    provider = Provider.IHEALTH
    source_name = "iHealth"
    timestamps = IHEALTH_TIMESTAMPS
    unit_field: str | None = None
    unit_codes: Mapping[int, Enum] = {}

    def resolve_unit(self, document: Mapping[str, Any]) -> Enum | None:
        if self.unit_field is None:
            return None
        code = require_int(document, self.unit_field)
        return resolve_unit_code(code, self.unit_codes, self.unit_field)

    def resolve_time_frame(
        self, record: Mapping[str, Any], context: DocumentContext
    ) -> TimeFrame | None:
        return resolve_time_frame(record, self.timestamps, context.document)

    def resolve_provenance(
        self, record: Mapping[str, Any], context: DocumentContext
    ) -> AcquisitionProvenance:
        return build_provenance(
            self.source_name,
            modality_from_flag(record, "DataSource", (MANUAL_DATA_SOURCE,)),
            source_updated_date_time=self._last_change_time(record),
        )

    def external_id(self, record: Mapping[str, Any]) -> str | None:
        return optional_string(record, "DataID")

    @staticmethod
    def user_notes(record: Mapping[str, Any]) -> str | None:
        """Return the record's note, treating an empty note as no note."""
        note = optional_string(record, "Note")
        return note or None

    @staticmethod
    def _last_change_time(record: Mapping[str, Any]) -> datetime | None:
        seconds = optional_int(record, "LastChangeTime")
        if seconds is None:
            return None
        try:
            return datetime.fromtimestamp(seconds, tz=UTC)
        except (OverflowError, OSError, ValueError) as e:
            raise InvalidTimestampError(
                f"LastChangeTime out of range: {seconds}", path="LastChangeTime"
            ) from e


class IHealthBloodPressureMapper(IHealthMapper):
    """Maps the blood pressure endpoint ("BPDataList") to BloodPressure."""

    category = Category.BLOOD_PRESSURE
    list_path = "BPDataList"
    unit_field = "BPUnit"
    unit_codes = IHEALTH_BLOOD_PRESSURE_UNITS

    def build_body(self, record: Mapping[str, Any], context: DocumentContext) -> BloodPressure:
        unit = context.unit
        systolic = to_mm_of_mercury(require_double(record, "HP"), unit)
        diastolic = to_mm_of_mercury(require_double(record, "LP"), unit)

        return BloodPressure(
            systolic_blood_pressure=UnitValue(
                value=systolic, unit=BloodPressureUnit.MM_OF_MERCURY.value
            ),
            diastolic_blood_pressure=UnitValue(
                value=diastolic, unit=BloodPressureUnit.MM_OF_MERCURY.value
            ),
            user_notes=self.user_notes(record),
        )


class IHealthHeartRateMapper(IHealthMapper):
    """
    Maps heart rate readings from the blood oxygen endpoint ("BODataList").

    A heart rate of 0 means the device did not take a pulse reading.
    """

    category = Category.HEART_RATE
    list_path = "BODataList"

    def is_included(self, record: Mapping[str, Any]) -> bool:
        return admits_measurement(record, "HR")

    def build_body(self, record: Mapping[str, Any], context: DocumentContext) -> HeartRate:
        return HeartRate(
            heart_rate=UnitValue(
                value=require_double(record, "HR"),
                unit=HeartRateUnit.BEATS_PER_MINUTE.value,
            ),
            user_notes=self.user_notes(record),
        )


class IHealthOxygenSaturationMapper(IHealthMapper):
    """Maps SpO2 readings from the blood oxygen endpoint ("BODataList")."""

    category = Category.OXYGEN_SATURATION
    list_path = "BODataList"

    def is_included(self, record: Mapping[str, Any]) -> bool:
        return admits_measurement(record, "BO")

    def build_body(self, record: Mapping[str, Any], context: DocumentContext) -> OxygenSaturation:
        return OxygenSaturation(
            oxygen_saturation=UnitValue(
                value=require_double(record, "BO"),
                unit=PercentUnit.PERCENT.value,
            ),
            user_notes=self.user_notes(record),
        )


class IHealthBodyWeightMapper(IHealthMapper):
    """Maps the weight endpoint ("WeightDataList") to BodyWeight in kilograms."""

    category = Category.BODY_WEIGHT
    list_path = "WeightDataList"
    unit_field = "WeightUnit"
    unit_codes = IHEALTH_BODY_WEIGHT_UNITS

    def is_included(self, record: Mapping[str, Any]) -> bool:
        return admits_measurement(record, "WeightValue")

    def build_body(self, record: Mapping[str, Any], context: DocumentContext) -> BodyWeight:
        weight = to_kilograms(require_double(record, "WeightValue"), context.unit)

        return BodyWeight(
            body_weight=UnitValue(value=weight, unit=MassUnit.KILOGRAM.value),
            user_notes=self.user_notes(record),
        )
