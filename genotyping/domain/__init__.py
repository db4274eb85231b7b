"""
genotyping/domain package marker.
"""

from genotyping.domain.assay_result import ASSAY_FIELDS, AssayRecord
from genotyping.domain.errors import (
    AssayDataError,
    DuplicateAddressError,
    InvalidFieldValueError,
    MalformedRecordError,
    MetadataCountError,
    MultipleSamplesError,
    NoSourceError,
    NotFoundError,
    ParseError,
)

__all__ = [
    "ASSAY_FIELDS",
    "AssayDataError",
    "AssayRecord",
    "DuplicateAddressError",
    "InvalidFieldValueError",
    "MalformedRecordError",
    "MetadataCountError",
    "MultipleSamplesError",
    "NoSourceError",
    "NotFoundError",
    "ParseError",
]
