"""
genotyping/services/assay_result_set.py

Query layer over the parsed results of one assayed sample.

A result set is built once from a local export file or a remote data
object and is immutable afterwards. Identity queries (sample name, SNP set
name) never guess: zero-or-many answers are reported as errors so that
downstream VCF generation only ever sees single-sample, single-panel data.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from genotyping.config import get_assay_settings
from genotyping.domain.assay_result import AssayRecord
from genotyping.domain.errors import (
    DuplicateAddressError,
    MetadataCountError,
    MultipleSamplesError,
    NoSourceError,
    NotFoundError,
)
from genotyping.parsers.assay_parser import AssayResultParser
from genotyping.storage.object_store import DataObject

logger = logging.getLogger(__name__)

IN_MEMORY_SOURCE = "<in-memory>"


class AssayResultSet:
    """
    Ordered, read-only collection of AssayRecords for one sample.
    """

    def __init__(
        self,
        records: Iterable[AssayRecord],
        *,
        file_name: str | Path | None = None,
        data_object: DataObject | None = None,
    ) -> None:
        if file_name is not None and data_object is not None:
            raise ValueError("An assay result set has either a file_name or a data_object, not both.")

        self._records: tuple[AssayRecord, ...] = tuple(records)
        self._file_name = str(file_name) if file_name is not None else None
        self._data_object = data_object

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_file(
        cls,
        file_name: str | Path,
        *,
        parser: AssayResultParser | None = None,
    ) -> "AssayResultSet":
        parser = parser or AssayResultParser()
        path = Path(file_name)
        with path.open("rb") as handle:
            records = parser.parse(handle, name=str(path))
        return cls(records, file_name=path)

    @classmethod
    def from_data_object(
        cls,
        data_object: DataObject,
        *,
        parser: AssayResultParser | None = None,
    ) -> "AssayResultSet":
        parser = parser or AssayResultParser()
        with io.BytesIO(data_object.read()) as handle:
            records = parser.parse(handle, name=data_object.path)
        return cls(records, data_object=data_object)

    # ------------------------------------------------------------------
    # Basic accessors
    # ------------------------------------------------------------------

    @property
    def source(self) -> str:
        """
        Diagnostic name of the data behind this result set.
        """

        if self._data_object is not None:
            return self._data_object.path
        if self._file_name is not None:
            return self._file_name
        return IN_MEMORY_SOURCE

    @property
    def file_name(self) -> str | None:
        return self._file_name

    @property
    def data_object(self) -> DataObject | None:
        return self._data_object

    def size(self) -> int:
        return len(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[AssayRecord]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"<AssayResultSet source={self.source!r} size={self.size()}>"

    # ------------------------------------------------------------------
    # Identity queries
    # ------------------------------------------------------------------

    def sample_name(self) -> str | None:
        """
        Return the one sample name found in non-empty wells.

        Results are split into one file per sample, so more than one
        distinct non-blank name means the input is wrong and
        MultipleSamplesError is raised. Blank names are skipped. None is
        returned when no well names a sample.
        """

        names = _unique_in_order(
            record.sample_name
            for record in self._records
            if not record.is_empty and record.sample_name
        )
        if len(names) > 1:
            raise MultipleSamplesError(source=self.source, names=names)
        return names[0] if names else None

    def snpset_name(self) -> str:
        """
        Return the SNP set name annotated on the backing data object.
        """

        if self._data_object is None:
            raise NoSourceError(
                f"Failed to determine SNP set name: '{self.source}' is not held in an object store"
            )

        key = get_assay_settings().plex_key
        values = [annotation.value for annotation in self._data_object.find_in_metadata(key)]
        if len(values) != 1:
            raise MetadataCountError(source=self.source, key=key, values=values)
        return values[0]

    # ------------------------------------------------------------------
    # Enumeration and lookup
    # ------------------------------------------------------------------

    def snp_names(self) -> list[str]:
        # Some wells have no template and therefore no SNP assayed.
        return sorted({record.snp_assayed for record in self._records if record.snp_assayed})

    def assay_addresses(self) -> list[str]:
        return [record.assay_address for record in self._records]

    def result_at(self, assay_address: str) -> AssayRecord:
        """
        Return the record at `assay_address`.

        Raises NotFoundError when there is none and DuplicateAddressError
        when the address occurs more than once.
        """

        if not assay_address:
            raise ValueError("The assay_address argument was empty.")

        found = [record for record in self._records if record.assay_address == assay_address]
        if not found:
            raise NotFoundError(source=self.source, address=assay_address)
        if len(found) > 1:
            raise DuplicateAddressError(source=self.source, address=assay_address, count=len(found))
        return found[0]

    def filter_on_confidence(self, confidence_threshold: float) -> list[AssayRecord]:
        """
        Return non-control records with confidence >= threshold, ordered by
        SNP name (file order among equal names).
        """

        if confidence_threshold is None:
            raise ValueError("The confidence_threshold argument was not defined.")

        ordered = sorted(self._records, key=lambda record: record.snp_assayed)
        filtered = [
            record
            for record in ordered
            if record.confidence >= confidence_threshold and not record.is_control
        ]
        logger.debug(
            "filter_on_confidence source=%s threshold=%s kept=%d of %d",
            self.source,
            confidence_threshold,
            len(filtered),
            len(self._records),
        )
        return filtered


def _unique_in_order(values: Iterable[str]) -> list[str]:
    seen: dict[str, None] = {}
    for value in values:
        seen.setdefault(value, None)
    return list(seen)
