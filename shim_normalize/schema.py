"""Canonical measurement schema that all provider data is normalized to."""

import uuid
from datetime import UTC, datetime
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, model_validator

from .units import BloodPressureUnit, HeartRateUnit, KcalUnit, MassUnit, PercentUnit


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class SchemaId(_Frozen):
    """Identifier of a canonical measurement schema."""

    namespace: str = "omh"
    name: str
    version: str

    def __str__(self) -> str:
        return f"{self.namespace}:{self.name}:{self.version}"


class Modality(str, Enum):
    """How a measurement was acquired."""

    SENSED = "sensed"
    SELF_REPORTED = "self-reported"


class TimeInterval(_Frozen):
    """Half-open interval ``[start_date_time, end_date_time)``."""

    start_date_time: AwareDatetime
    end_date_time: AwareDatetime

    @model_validator(mode="after")
    def check_order(self) -> "TimeInterval":
        if self.end_date_time < self.start_date_time:
            raise ValueError("Interval ends before it starts")
        return self


class TimeFrame(_Frozen):
    """Either a single instant or an interval, never both."""

    date_time: AwareDatetime | None = None
    time_interval: TimeInterval | None = None

    @model_validator(mode="after")
    def check_exactly_one(self) -> "TimeFrame":
        if (self.date_time is None) == (self.time_interval is None):
            raise ValueError("A time frame is either an instant or an interval")
        return self

    @classmethod
    def of_instant(cls, date_time: datetime) -> "TimeFrame":
        return cls(date_time=date_time)

    @classmethod
    def of_interval(cls, start: datetime, end: datetime) -> "TimeFrame":
        return cls(time_interval=TimeInterval(start_date_time=start, end_date_time=end))


class UnitValue(_Frozen):
    """A numeric value with its unit."""

    value: float
    unit: str


class AcquisitionProvenance(_Frozen):
    """Where a data point came from and how it was acquired."""

    source_name: str = Field(..., description="Provider API the data was read from")
    modality: Modality = Field(Modality.SENSED, description="Sensed or self-reported")
    source_origin_id: str | None = Field(
        None,
        description="Provider's originating data-source identifier, copied verbatim",
    )
    source_updated_date_time: AwareDatetime | None = Field(
        None,
        description="When the provider last changed the record",
    )


class Measure(_Frozen):
    """
    Base class of canonical bodies.

    Subclasses declare their ``SCHEMA_ID`` and the single ``CANONICAL_UNIT``
    every ``UnitValue`` field must use.
    """

    SCHEMA_ID: ClassVar[SchemaId]
    CANONICAL_UNIT: ClassVar[str | None] = None

    user_notes: str | None = None

    @model_validator(mode="after")
    def check_canonical_unit(self) -> "Measure":
        if self.CANONICAL_UNIT is None:
            return self
        for name in type(self).model_fields:
            value = getattr(self, name)
            if isinstance(value, UnitValue) and value.unit != self.CANONICAL_UNIT:
                raise ValueError(
                    f"{name} must be in {self.CANONICAL_UNIT}, got {value.unit}"
                )
        return self


class BloodPressure(Measure):
    SCHEMA_ID: ClassVar[SchemaId] = SchemaId(name="blood-pressure", version="3.1")
    CANONICAL_UNIT: ClassVar[str | None] = BloodPressureUnit.MM_OF_MERCURY.value

    systolic_blood_pressure: UnitValue
    diastolic_blood_pressure: UnitValue


class HeartRate(Measure):
    SCHEMA_ID: ClassVar[SchemaId] = SchemaId(name="heart-rate", version="1.1")
    CANONICAL_UNIT: ClassVar[str | None] = HeartRateUnit.BEATS_PER_MINUTE.value

    heart_rate: UnitValue


class OxygenSaturation(Measure):
    SCHEMA_ID: ClassVar[SchemaId] = SchemaId(name="oxygen-saturation", version="1.0")
    CANONICAL_UNIT: ClassVar[str | None] = PercentUnit.PERCENT.value

    oxygen_saturation: UnitValue


class BodyWeight(Measure):
    SCHEMA_ID: ClassVar[SchemaId] = SchemaId(name="body-weight", version="1.0")
    CANONICAL_UNIT: ClassVar[str | None] = MassUnit.KILOGRAM.value

    body_weight: UnitValue


class CaloriesBurned(Measure):
    SCHEMA_ID: ClassVar[SchemaId] = SchemaId(name="calories-burned", version="2.0")
    CANONICAL_UNIT: ClassVar[str | None] = KcalUnit.KILOCALORIE.value

    kcal_burned: UnitValue


class StepCount(Measure):
    SCHEMA_ID: ClassVar[SchemaId] = SchemaId(name="step-count", version="2.0")

    step_count: int = Field(..., ge=0)


MeasureT = TypeVar("MeasureT", bound=Measure)


class DataPointHeader(_Frozen):
    """Metadata attached to every canonical data point."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    creation_date_time: AwareDatetime = Field(default_factory=lambda: datetime.now(UTC))
    schema_id: SchemaId
    acquisition_provenance: AcquisitionProvenance
    effective_time_frame: TimeFrame | None = None
    external_id: str | None = None


class DataPoint(_Frozen, Generic[MeasureT]):
    """
    A canonical data point: a body and a header consistent with it.

    A data point is always fully constructed; there is no partially filled state.
    """

    header: DataPointHeader
    body: MeasureT

    @model_validator(mode="after")
    def check_schema_id(self) -> "DataPoint":
        if self.header.schema_id != self.body.SCHEMA_ID:
            raise ValueError(
                f"Header schema {self.header.schema_id} does not match body "
                f"schema {self.body.SCHEMA_ID}"
            )
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return self.model_dump(mode="json")
