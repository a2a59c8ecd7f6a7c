"""Acquisition provenance: modality and originating data-source id."""

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from .coercion import Path, optional_node
from .schema import AcquisitionProvenance, Modality


def modality_from_flag(
    record: Any,
    field: Path,
    self_reported_values: Iterable[Any] = (True,),
    default: Modality = Modality.SENSED,
) -> Modality:
    """
    Derive modality from a "manually entered" flag on the record.

    Args:
        record: Raw record
        field: Flag field name
        self_reported_values: Flag values that mark a manual entry
        default: Provider-level modality used when the flag is absent or not set

    Returns:
        SELF_REPORTED if the flag marks a manual entry, otherwise ``default``
    """
    flag = optional_node(record, field)
    if flag is not None and flag in tuple(self_reported_values):
        return Modality.SELF_REPORTED
    return default


def modality_from_origin(
    source_origin_id: str | None,
    markers: Iterable[str] = ("user_input",),
    default: Modality = Modality.SENSED,
) -> Modality:
    """Derive modality from markers embedded in an originating source id."""
    if source_origin_id and any(marker in source_origin_id for marker in markers):
        return Modality.SELF_REPORTED
    return default


def build_provenance(
    source_name: str,
    modality: Modality,
    source_origin_id: str | None = None,
    source_updated_date_time: datetime | None = None,
) -> AcquisitionProvenance:
    """Build the provenance attached to a data point header."""
    return AcquisitionProvenance(
        source_name=source_name,
        modality=modality,
        source_origin_id=source_origin_id,
        source_updated_date_time=source_updated_date_time,
    )
