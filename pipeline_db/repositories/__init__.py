"""
Repository layer exports.
"""

from pipeline_db.repositories.dictionary_repository import DictionaryCollection

__all__ = [
    "DictionaryCollection",
]
