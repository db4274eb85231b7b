"""
genotyping/validators/assay_validator.py

Record-level validation and type parsing for instrument export lines.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from genotyping.domain.assay_result import ASSAY_FIELDS, NUMERIC_FIELDS, AssayRecord
from genotyping.domain.errors import InvalidFieldValueError, MalformedRecordError

FIELD_DELIMITER = "\t"


class AssayRecordValidator:
    """
    Validates one tokenized export line and builds an AssayRecord.
    """

    def __init__(self, *, control_names: frozenset[str] = frozenset({"NTC"})) -> None:
        self._control_names = control_names

    @property
    def expected_field_count(self) -> int:
        return len(ASSAY_FIELDS)

    def validate_fields(self, fields: Sequence[str], *, line_number: int) -> AssayRecord:
        """
        Check the field count and numeric columns of one line.

        Raises MalformedRecordError (or InvalidFieldValueError) on the first
        violation; no partial record is ever returned.
        """

        raw_line = self.canonical_line(fields)
        found = len(fields)
        if found != self.expected_field_count:
            raise MalformedRecordError(
                raw_line=raw_line,
                found=found,
                expected=self.expected_field_count,
                line_number=line_number,
            )

        values: dict[str, object] = {}
        for name, raw_value in zip(ASSAY_FIELDS, fields):
            if name in NUMERIC_FIELDS:
                values[name] = self._parse_float(
                    value=raw_value,
                    field=name,
                    raw_line=raw_line,
                    line_number=line_number,
                )
            else:
                values[name] = raw_value

        return AssayRecord(
            raw_line=raw_line,
            control_names=self._control_names,
            **values,  # type: ignore[arg-type]
        )

    @staticmethod
    def canonical_line(fields: Sequence[str]) -> str:
        return FIELD_DELIMITER.join(fields)

    def _parse_float(
        self,
        *,
        value: str,
        field: str,
        raw_line: str,
        line_number: int,
    ) -> float:
        try:
            parsed = float(value.strip())
        except ValueError:
            parsed = math.nan
        if math.isnan(parsed) or math.isinf(parsed):
            raise InvalidFieldValueError(
                raw_line=raw_line,
                field=field,
                value=value,
                expected=self.expected_field_count,
                line_number=line_number,
            )
        return parsed
