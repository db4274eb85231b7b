"""
genotyping/storage package marker.
"""

from genotyping.storage.object_store import Annotation, DataObject, ObjectStore

__all__ = [
    "Annotation",
    "DataObject",
    "ObjectStore",
]
