"""
pipeline_db/populator.py

Idempotent population of the dictionary tables from .ini resources.

Every resource is read and validated before the first write, so a missing
or malformed file never leaves a half-populated database behind. Each row
is written with find-or-create; running populate again on the same
configuration changes nothing. Wrapping populate in
DictionaryStore.run_in_transaction is left to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pipeline_db.config import read_ini
from pipeline_db.errors import ConfigError, NotConnectedError
from pipeline_db.logging_utils import log_event
from pipeline_db.repositories.dictionary_repository import DictionaryCollection
from pipeline_db.store import DictionaryStore

logger = logging.getLogger(__name__)

PLATE_ROWS = 16
PLATE_COLUMNS = 24
ADDRESS_DICTIONARY = "address"


@dataclass(frozen=True)
class PlateAddress:
    """
    One plate well in zero-padded (A01) and unpadded (A1) label styles.
    """

    label1: str
    label2: str


@dataclass(frozen=True)
class DictionaryResource:
    """
    One .ini resource feeding one dictionary.

    When list_param is set, every value of that parameter in every section
    becomes its own row; otherwise each section is one row.
    """

    dictionary: str
    filename: str
    list_param: str | None = None


DICTIONARY_RESOURCES: tuple[DictionaryResource, ...] = (
    DictionaryResource(dictionary="gender", filename="genders.ini"),
    DictionaryResource(dictionary="relation", filename="relations.ini"),
    DictionaryResource(dictionary="state", filename="states.ini"),
    DictionaryResource(dictionary="method", filename="methods.ini"),
    DictionaryResource(dictionary="snpset", filename="snpsets.ini", list_param="name"),
)


@dataclass(frozen=True)
class PopulationSummary:
    """
    Distinct rows found or created per dictionary during one populate run.
    """

    rows: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.rows.values())


def plate_addresses(rows: int = PLATE_ROWS, columns: int = PLATE_COLUMNS) -> list[PlateAddress]:
    """
    Enumerate the wells of a plate row by row: A01/A1, A02/A2, ... P24/P24.
    """

    return [
        PlateAddress(
            label1=f"{chr(64 + row)}{column:02d}",
            label2=f"{chr(64 + row)}{column}",
        )
        for row in range(1, rows + 1)
        for column in range(1, columns + 1)
    ]


class DictionaryPopulator:
    """
    Loads dictionary resources from a configuration directory into a store.
    """

    def __init__(
        self,
        store: DictionaryStore,
        *,
        resources: tuple[DictionaryResource, ...] = DICTIONARY_RESOURCES,
    ) -> None:
        self._store = store
        self._resources = resources

    def populate(self, config_root: str | Path) -> PopulationSummary:
        if not self._store.is_connected():
            raise NotConnectedError("Failed to populate database: not connected")

        root = Path(config_root)
        loaded = [(resource, self._load_resource(root, resource)) for resource in self._resources]

        counts: dict[str, int] = {ADDRESS_DICTIONARY: self._populate_addresses()}
        for resource, rows in loaded:
            collection = self._store.collection(resource.dictionary)
            row_ids = {collection.find_or_create(**row).id for row in rows}
            counts[resource.dictionary] = len(row_ids)

        summary = PopulationSummary(rows=counts)
        log_event(
            logger,
            logging.INFO,
            "dictionaries_populated",
            dbfile=self._store.dbfile,
            config_root=root,
            rows=summary.rows,
        )
        return summary

    def _populate_addresses(self) -> int:
        collection = self._store.collection(ADDRESS_DICTIONARY)
        addresses = plate_addresses()
        row_ids = {
            collection.find_or_create(label1=address.label1, label2=address.label2).id
            for address in addresses
        }
        return len(row_ids)

    def _load_resource(self, root: Path, resource: DictionaryResource) -> list[dict[str, Any]]:
        path = root / resource.filename
        parser = read_ini(path)
        collection = self._store.collection(resource.dictionary)

        rows: list[dict[str, Any]] = []
        for section in parser.sections():
            if resource.list_param is None:
                fields = {key: value for key, value in parser.items(section)}
                rows.append(self._coerce_row(collection, fields, path=path, section=section))
                continue

            raw_values = parser.get(section, resource.list_param, fallback="")
            values = [value.strip() for value in raw_values.splitlines() if value.strip()]
            if not values:
                raise ConfigError(
                    f"Section [{section}] of {path} declares no '{resource.list_param}' values"
                )
            for value in values:
                rows.append(
                    self._coerce_row(
                        collection,
                        {resource.list_param: value},
                        path=path,
                        section=section,
                    )
                )

        logger.debug("Loaded %d %s rows from %s", len(rows), resource.dictionary, path)
        return rows

    @staticmethod
    def _coerce_row(
        collection: DictionaryCollection,
        fields: dict[str, str],
        *,
        path: Path,
        section: str,
    ) -> dict[str, Any]:
        unknown = sorted(set(fields) - set(collection.columns))
        if unknown:
            raise ConfigError(
                f"Section [{section}] of {path} has unknown key(s) {', '.join(unknown)}. "
                f"Allowed keys for '{collection.name}': {', '.join(collection.columns)}."
            )

        missing = [column for column in collection.natural_key if not fields.get(column, "").strip()]
        if missing:
            raise ConfigError(
                f"Section [{section}] of {path} is missing required key(s) {', '.join(missing)}"
            )

        column_types = collection.column_types
        coerced: dict[str, Any] = {}
        for column, raw_value in fields.items():
            python_type = column_types[column]
            if python_type is str:
                coerced[column] = raw_value
                continue
            if raw_value.strip() == "":
                coerced[column] = None
                continue
            try:
                coerced[column] = python_type(raw_value.strip())
            except (TypeError, ValueError) as exc:
                raise ConfigError(
                    f"Section [{section}] of {path}: value {raw_value!r} for '{column}' "
                    f"is not a valid {python_type.__name__}"
                ) from exc
        return coerced
