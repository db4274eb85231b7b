"""
genotyping/domain/errors.py

Exceptions raised while parsing and querying assay result sets.
"""

from __future__ import annotations

from collections.abc import Sequence


class AssayDataError(Exception):
    """Base exception for assay result failures."""


# ---------------------------------------------------------------------------
# Input shape
# ---------------------------------------------------------------------------


class ParseError(AssayDataError):
    """
    Raised when the input cannot be tokenized into records at all.
    """

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class MalformedRecordError(AssayDataError):
    """
    Raised when one record does not have the expected number of fields.
    """

    def __init__(
        self,
        *,
        raw_line: str,
        found: int,
        expected: int,
        line_number: int,
        message: str | None = None,
    ) -> None:
        super().__init__(
            message
            or f"Invalid assay record {raw_line!r} at line {line_number}: "
            f"expected {expected} fields but found {found}"
        )
        self.raw_line = raw_line
        self.found = found
        self.expected = expected
        self.line_number = line_number


class InvalidFieldValueError(MalformedRecordError):
    """
    Raised when a field has the right position but an unusable value.
    """

    def __init__(
        self,
        *,
        raw_line: str,
        field: str,
        value: str,
        expected: int,
        line_number: int,
    ) -> None:
        super().__init__(
            raw_line=raw_line,
            found=expected,
            expected=expected,
            line_number=line_number,
            message=(
                f"Invalid assay record {raw_line!r} at line {line_number}: "
                f"field '{field}' must be numeric, got {value!r}"
            ),
        )
        self.field = field
        self.value = value


# ---------------------------------------------------------------------------
# Identity violations
# ---------------------------------------------------------------------------


class MultipleSamplesError(AssayDataError):
    """
    Raised when a result set holds data for more than one sample.
    """

    def __init__(self, *, source: str, names: Sequence[str]) -> None:
        super().__init__(
            f"Assay result set '{source}' contains data for >1 sample: "
            f"[{', '.join(names)}]"
        )
        self.source = source
        self.names = tuple(names)


class MetadataCountError(AssayDataError):
    """
    Raised when a metadata key resolves to zero or several values.
    """

    def __init__(self, *, source: str, key: str, values: Sequence[str]) -> None:
        if values:
            message = (
                f"{len(values)} values for '{key}' defined in metadata of "
                f"'{source}': [{', '.join(values)}]"
            )
        else:
            message = f"No values for '{key}' defined in metadata of '{source}'"
        super().__init__(message)
        self.source = source
        self.key = key
        self.values = tuple(values)


class NotFoundError(AssayDataError, LookupError):
    """
    Raised when no record exists at an assay address.
    """

    def __init__(self, *, source: str, address: str) -> None:
        super().__init__(
            f"The result set '{source}' does not contain an assay at address '{address}'"
        )
        self.source = source
        self.address = address


class DuplicateAddressError(AssayDataError):
    """
    Raised when more than one record shares an assay address.
    """

    def __init__(self, *, source: str, address: str, count: int) -> None:
        super().__init__(
            f"The result set '{source}' contains {count} assays at address '{address}'"
        )
        self.source = source
        self.address = address
        self.count = count


class NoSourceError(AssayDataError):
    """
    Raised when an operation needs an object store source that is absent.
    """
