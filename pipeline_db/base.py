"""
pipeline_db/base.py

Declarative base and shared mixins for all dictionary models.
"""

from typing import Any, ClassVar

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Project-wide declarative base.
    All models must inherit from this class.
    """

    type_annotation_map: dict[type, Any] = {}


class DictionaryMixin:
    """
    Mixin for controlled-vocabulary tables.

    __natural_key__ names the columns that identify a row independently of
    its surrogate id; find-or-create looks rows up by these columns only.
    """

    __natural_key__: ClassVar[tuple[str, ...]] = ("name",)
