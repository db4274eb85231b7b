"""
Dictionary name -> collection accessor resolution.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.orm import registry as Registry

import pipeline_db.models  # noqa: F401  registers every dictionary model on Base
from pipeline_db.base import Base, DictionaryMixin
from pipeline_db.errors import NotConnectedError, UnknownDictionaryError
from pipeline_db.repositories.dictionary_repository import DictionaryCollection

if TYPE_CHECKING:
    from pipeline_db.store import DictionaryStore


class CapabilityResolver:
    """
    Maps dictionary names to their collections.

    The set of names is read once from the declarative registry (one name
    per mapped dictionary table). Collections are built on first request
    and cached for the lifetime of the resolver.
    """

    def __init__(self, store: DictionaryStore, *, registry: Registry | None = None) -> None:
        self._store = store
        self._sources = self._load_sources(registry or Base.registry)
        self._accessors: dict[str, DictionaryCollection] = {}

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._sources))

    def is_resolved(self, name: str) -> bool:
        return self._normalize(name) in self._accessors

    def resolve(self, name: str) -> DictionaryCollection:
        if not self._store.is_connected():
            raise NotConnectedError(
                f"Cannot access dictionary '{name}': database '{self._store.settings.dbfile}' "
                "is not connected"
            )

        key = self._normalize(name)
        cached = self._accessors.get(key)
        if cached is not None:
            return cached

        model = self._sources.get(key)
        if model is None:
            raise UnknownDictionaryError(name=name, permitted=self.names())

        collection: DictionaryCollection = DictionaryCollection(self._store, model)
        self._accessors[key] = collection
        return collection

    @staticmethod
    def _normalize(name: str) -> str:
        return name.strip().lower()

    @staticmethod
    def _load_sources(registry: Registry) -> dict[str, type[DictionaryMixin]]:
        sources: dict[str, type[DictionaryMixin]] = {}
        for mapper in registry.mappers:
            model = mapper.class_
            if not issubclass(model, DictionaryMixin):
                continue
            sources[mapper.local_table.name] = model
        return sources
