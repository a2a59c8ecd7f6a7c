"""Tests for the canonical schema models."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from shim_normalize.schema import (
    AcquisitionProvenance,
    BloodPressure,
    DataPoint,
    DataPointHeader,
    HeartRate,
    Modality,
    TimeFrame,
    TimeInterval,
    UnitValue,
)

PROVENANCE = AcquisitionProvenance(source_name="iHealth")


def _heart_rate(value: float = 60) -> HeartRate:
    return HeartRate(heart_rate=UnitValue(value=value, unit="beats/min"))


class TestTimeFrame:
    """Tests for TimeFrame validation."""

    def test_naive_datetime_rejected(self):
        with pytest.raises(ValidationError):
            TimeFrame.of_instant(datetime(2015, 9, 23, 15, 46))

    def test_instant_or_interval_not_both(self):
        start = datetime(2015, 9, 23, tzinfo=UTC)
        with pytest.raises(ValidationError):
            TimeFrame(
                date_time=start,
                time_interval=TimeInterval(start_date_time=start, end_date_time=start),
            )
        with pytest.raises(ValidationError):
            TimeFrame()

    def test_reversed_interval_rejected(self):
        with pytest.raises(ValidationError):
            TimeFrame.of_interval(
                datetime(2015, 9, 23, 2, tzinfo=UTC), datetime(2015, 9, 23, 1, tzinfo=UTC)
            )


class TestMeasure:
    """Tests for canonical bodies."""

    def test_canonical_unit_enforced(self):
        """Bodies only hold values in their canonical unit."""
        with pytest.raises(ValidationError):
            BloodPressure(
                systolic_blood_pressure=UnitValue(value=16, unit="kPa"),
                diastolic_blood_pressure=UnitValue(value=12, unit="kPa"),
            )

    def test_bodies_are_immutable(self):
        body = _heart_rate()
        with pytest.raises(ValidationError):
            body.user_notes = "changed"


class TestDataPoint:
    """Tests for DataPoint consistency."""

    def test_header_defaults(self):
        header = DataPointHeader(schema_id=HeartRate.SCHEMA_ID, acquisition_provenance=PROVENANCE)

        assert header.id
        assert header.creation_date_time.tzinfo is not None
        assert header.acquisition_provenance.modality is Modality.SENSED
        assert header.effective_time_frame is None

    def test_schema_mismatch_rejected(self):
        header = DataPointHeader(schema_id=BloodPressure.SCHEMA_ID, acquisition_provenance=PROVENANCE)
        with pytest.raises(ValidationError):
            DataPoint(header=header, body=_heart_rate())

    def test_to_dict(self):
        header = DataPointHeader(schema_id=HeartRate.SCHEMA_ID, acquisition_provenance=PROVENANCE)
        point = DataPoint(header=header, body=_heart_rate(72))

        data = point.to_dict()

        assert data["header"]["schema_id"]["name"] == "heart-rate"
        assert data["header"]["acquisition_provenance"]["modality"] == "sensed"

    def test_schema_id_str(self):
        assert str(HeartRate.SCHEMA_ID) == "omh:heart-rate:1.1"
