"""
genotyping/parsers/assay_parser.py

Tab-delimited instrument export parser.
"""

from __future__ import annotations

import csv
import io
import logging
from typing import BinaryIO

from genotyping.config import get_assay_settings
from genotyping.domain.assay_result import AssayRecord
from genotyping.domain.errors import ParseError
from genotyping.validators.assay_validator import FIELD_DELIMITER, AssayRecordValidator

logger = logging.getLogger(__name__)


class AssayResultParser:
    """
    Turns a raw byte stream into AssayRecords, one per line, in file order.

    Lines are split on tabs with no quoting or escaping; line terminators
    are normalized. The first invalid line aborts the whole parse.
    """

    def __init__(
        self,
        *,
        validator: AssayRecordValidator | None = None,
        encoding: str | None = None,
    ) -> None:
        settings = get_assay_settings()
        self._validator = validator or AssayRecordValidator(
            control_names=settings.normalized_control_names,
        )
        self._encoding = encoding or settings.encoding

    def parse(self, source: bytes | BinaryIO, *, name: str | None = None) -> list[AssayRecord]:
        """
        Parse every line of `source`.

        The stream is read to completion but never closed here; whoever
        opened it owns its lifecycle.
        """

        raw_stream: BinaryIO = io.BytesIO(source) if isinstance(source, bytes) else source
        text_stream: io.TextIOWrapper | None = None
        records: list[AssayRecord] = []

        try:
            text_stream = io.TextIOWrapper(raw_stream, encoding=self._encoding, newline="")
            reader = csv.reader(
                text_stream,
                delimiter=FIELD_DELIMITER,
                quoting=csv.QUOTE_NONE,
                strict=True,
            )
            for fields in reader:
                record = self._validator.validate_fields(fields, line_number=reader.line_num)
                logger.debug("Building a new result from '%s'", record.raw_line)
                records.append(record)
        except UnicodeDecodeError as exc:
            raise ParseError(
                f"Parse error within '{name or '<stream>'}': input is not valid {self._encoding}",
                source=name,
            ) from exc
        except csv.Error as exc:
            raise ParseError(
                f"Parse error within '{name or '<stream>'}': {exc}",
                source=name,
            ) from exc
        finally:
            # Detaching flushes the wrapper, which fails once the caller has
            # closed the underlying stream.
            if text_stream is not None and not raw_stream.closed:
                text_stream.detach()

        logger.debug("Parsed %d assay records from '%s'", len(records), name or "<stream>")
        return records


def parse_assay_results(source: bytes | BinaryIO, *, name: str | None = None) -> list[AssayRecord]:
    """Public API (AssayResultParser)

    Contract:
    - 12 tab-separated fields per line, no header, no quoting.
    - Deterministic, file order preserved, no de-duplication.
    - Fails fast on the first malformed line.
    """
    return AssayResultParser().parse(source, name=name)
