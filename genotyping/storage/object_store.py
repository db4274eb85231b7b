"""
Object store interfaces for remote assay data and their annotations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Annotation:
    """
    One key/value metadata pair attached to a stored object.
    """

    key: str
    value: str


class ObjectStore(ABC):
    """
    Storage abstraction for remote data objects and their metadata.
    """

    @abstractmethod
    def read(self, path: str) -> bytes:
        """
        Return the full content of the object at `path`.
        """

    @abstractmethod
    def find_annotations(self, path: str, key: str) -> list[Annotation]:
        """
        Return every annotation of the object at `path` whose key is `key`.
        """


@dataclass(frozen=True)
class DataObject:
    """
    Handle on one object held in an ObjectStore.
    """

    store: ObjectStore
    path: str

    def read(self) -> bytes:
        return self.store.read(self.path)

    def find_in_metadata(self, key: str) -> list[Annotation]:
        return list(self.store.find_annotations(self.path, key))

    def __str__(self) -> str:
        return self.path
