"""
Category mapper contract and the shared mapping loop.

Every provider x category mapper implements the ``CategoryMapper`` capability
set. ``map_documents`` drives any such mapper over a sequence of raw response
documents:

    points = map_documents(IHealthBloodPressureMapper(), [response])

Records excluded by the inclusion policy and records that fail required
coercion produce no data point; neither aborts the batch. Errors signaling a
gap in the mapping rules (``MappingConfigurationError``) always propagate.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from pydantic import ValidationError

from ..coercion import Path, optional_node
from ..config import MappingSettings
from ..exceptions import RecordError, TypeMismatchError
from ..provider_types import Category, Provider
from ..schema import AcquisitionProvenance, DataPoint, DataPointHeader, Measure, TimeFrame

logger = logging.getLogger(__name__)

MeasureT = TypeVar("MeasureT", bound=Measure)
MeasureT_co = TypeVar("MeasureT_co", bound=Measure, covariant=True)


@dataclass(frozen=True)
class DocumentContext:
    """Values resolved once per response document."""

    document: Mapping[str, Any]
    document_index: int
    unit: Enum | None = None


class SkipReason(str, Enum):
    """Why a raw record produced no data point."""

    EXCLUDED = "excluded"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class SkippedRecord:
    document_index: int
    record_index: int | None  # None when the whole document was unusable
    reason: SkipReason
    detail: str | None = None


@dataclass
class MappingReport(Generic[MeasureT]):
    """Data points produced by one mapping call, plus what was skipped."""

    data_points: list[DataPoint[MeasureT]] = field(default_factory=list)
    skipped: list[SkippedRecord] = field(default_factory=list)

    @property
    def excluded_count(self) -> int:
        return sum(1 for s in self.skipped if s.reason is SkipReason.EXCLUDED)

    @property
    def dropped_count(self) -> int:
        return sum(1 for s in self.skipped if s.reason is SkipReason.MALFORMED)


@runtime_checkable
class CategoryMapper(Protocol[MeasureT_co]):
    """
    Capabilities a provider x category mapper must offer.

    Attributes:
        provider: Provider the mapper reads
        category: Measurement category it produces
        list_path: Location of the raw records list inside a response document
    """

    provider: Provider
    category: Category
    list_path: Path

    def resolve_unit(self, document: Mapping[str, Any]) -> Enum | None:
        """Resolve a document-scoped unit declaration, or None if the category has none."""
        ...

    def is_included(self, record: Mapping[str, Any]) -> bool:
        """Inclusion policy; False filters the record out silently."""
        ...

    def build_body(self, record: Mapping[str, Any], context: DocumentContext) -> MeasureT_co:
        ...

    def resolve_time_frame(
        self, record: Mapping[str, Any], context: DocumentContext
    ) -> TimeFrame | None:
        ...

    def resolve_provenance(
        self, record: Mapping[str, Any], context: DocumentContext
    ) -> AcquisitionProvenance:
        ...

    def external_id(self, record: Mapping[str, Any]) -> str | None:
        ...


def _locate_records(document: Any, list_path: Path) -> list[Any] | None:
    if not isinstance(document, Mapping):
        return None
    records = optional_node(document, list_path)
    if not isinstance(records, list):
        return None
    return records


def _map_record(
    mapper: CategoryMapper[MeasureT],
    record: Any,
    context: DocumentContext,
) -> DataPoint[MeasureT] | None:
    """Map one raw record; None means the inclusion policy rejected it."""
    if not isinstance(record, Mapping):
        raise TypeMismatchError(
            f"Expected a record object, got {type(record).__name__}",
            expected="object",
        )
    if not mapper.is_included(record):
        return None

    body = mapper.build_body(record, context)
    header = DataPointHeader(
        schema_id=body.SCHEMA_ID,
        acquisition_provenance=mapper.resolve_provenance(record, context),
        effective_time_frame=mapper.resolve_time_frame(record, context),
        external_id=mapper.external_id(record),
    )
    return DataPoint(header=header, body=body)


def _skip(
    report: MappingReport,
    mapper: CategoryMapper,
    settings: MappingSettings,
    entry: SkippedRecord,
) -> None:
    report.skipped.append(entry)
    if settings.log_skipped_records:
        logger.log(
            settings.skip_log_level,
            "Skipped %s %s record %s of document %s (%s): %s",
            mapper.provider.value,
            mapper.category.value,
            entry.record_index,
            entry.document_index,
            entry.reason.value,
            entry.detail,
        )


def _describe(error: Exception, mapper: CategoryMapper) -> str:
    if isinstance(error, RecordError):
        if error.provider is None:
            error.provider = mapper.provider.value
        return error.message
    return str(error)


def map_documents_with_report(
    mapper: CategoryMapper[MeasureT],
    documents: Iterable[Any],
    settings: MappingSettings | None = None,
) -> MappingReport[MeasureT]:
    """
    Map raw response documents to canonical data points, reporting skipped records.

    Args:
        mapper: Category mapper to apply
        documents: Raw response documents, in the order their records should appear
        settings: Mapping settings (defaults to environment)

    Returns:
        MappingReport with the data points in input order and the skipped records

    Raises:
        MappingConfigurationError: If the mapping rules cannot handle a declared value
    """
    settings = settings or MappingSettings.from_env()
    report: MappingReport[MeasureT] = MappingReport()
    document_count = 0

    for document_index, document in enumerate(documents):
        document_count += 1
        records = _locate_records(document, mapper.list_path)
        if records is None:
            logger.debug(
                "No %s records in document %s", mapper.category.value, document_index
            )
            continue

        try:
            unit = mapper.resolve_unit(document)
        except RecordError as e:
            detail = _describe(e, mapper)
            for record_index in range(len(records)):
                _skip(
                    report,
                    mapper,
                    settings,
                    SkippedRecord(document_index, record_index, SkipReason.MALFORMED, detail),
                )
            continue

        context = DocumentContext(document=document, document_index=document_index, unit=unit)

        for record_index, record in enumerate(records):
            try:
                point = _map_record(mapper, record, context)
            except (RecordError, ValidationError) as e:
                _skip(
                    report,
                    mapper,
                    settings,
                    SkippedRecord(
                        document_index, record_index, SkipReason.MALFORMED, _describe(e, mapper)
                    ),
                )
                continue

            if point is None:
                _skip(
                    report,
                    mapper,
                    settings,
                    SkippedRecord(document_index, record_index, SkipReason.EXCLUDED),
                )
                continue

            report.data_points.append(point)

    logger.debug(
        "Mapped %d %s %s data points from %d documents (%d excluded, %d dropped)",
        len(report.data_points),
        mapper.provider.value,
        mapper.category.value,
        document_count,
        report.excluded_count,
        report.dropped_count,
    )
    return report


def map_documents(
    mapper: CategoryMapper[MeasureT],
    documents: Iterable[Any],
    settings: MappingSettings | None = None,
) -> list[DataPoint[MeasureT]]:
    """Map raw response documents to canonical data points, in input order."""
    return map_documents_with_report(mapper, documents, settings).data_points


class ProviderMapper:
    """
    Shared behavior for the mappers of one provider.

    Subclasses set the provider constants; category mappers further set
    ``category``, ``list_path`` and implement ``build_body``.
    """

    provider: Provider
    category: Category
    list_path: Path
    source_name: str

    def resolve_unit(self, document: Mapping[str, Any]) -> Enum | None:
        return None

    def is_included(self, record: Mapping[str, Any]) -> bool:
        return True

    def external_id(self, record: Mapping[str, Any]) -> str | None:
        return None

    def map(
        self,
        documents: Iterable[Any],
        settings: MappingSettings | None = None,
    ) -> list[DataPoint]:
        return map_documents(self, documents, settings)

    def map_with_report(
        self,
        documents: Iterable[Any],
        settings: MappingSettings | None = None,
    ) -> MappingReport:
        return map_documents_with_report(self, documents, settings)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
