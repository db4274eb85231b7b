"""
Dictionary collection handle responsible for find-or-create and lookups.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pipeline_db.base import DictionaryMixin

if TYPE_CHECKING:
    from pipeline_db.store import DictionaryStore

RowT = TypeVar("RowT", bound=DictionaryMixin)


class DictionaryCollection(Generic[RowT]):
    """
    Row collection of one dictionary table, bound to a DictionaryStore.

    Writes go through the store's session. Outside of
    DictionaryStore.run_in_transaction each write is committed at once.
    """

    def __init__(self, store: DictionaryStore, model: type[RowT]) -> None:
        self._store = store
        self._model = model

    @property
    def name(self) -> str:
        return self._model.__tablename__  # type: ignore[attr-defined]

    @property
    def model(self) -> type[RowT]:
        return self._model

    @property
    def natural_key(self) -> tuple[str, ...]:
        return self._model.__natural_key__

    @property
    def columns(self) -> tuple[str, ...]:
        """
        Writable column attributes (the surrogate primary key excluded).
        """

        mapper = self._model.__mapper__  # type: ignore[attr-defined]
        primary = set(mapper.primary_key)
        return tuple(
            prop.key
            for prop in mapper.column_attrs
            if not set(prop.columns) & primary
        )

    @property
    def column_types(self) -> dict[str, type]:
        mapper = self._model.__mapper__  # type: ignore[attr-defined]
        return {
            key: mapper.column_attrs[key].columns[0].type.python_type
            for key in self.columns
        }

    @property
    def _session(self) -> Session:
        return self._store.session

    def find(self, **key: Any) -> RowT | None:
        """
        Return the row with the given natural key, or None.
        """

        values = self._natural_key_values(key)
        stmt = select(self._model)
        for column, value in values.items():
            stmt = stmt.where(getattr(self._model, column) == value)
        return self._session.execute(stmt).scalars().first()

    def find_or_create(self, **fields: Any) -> RowT:
        """
        Return the row with the natural key in `fields`, inserting it first
        when missing. An existing row is returned unchanged.
        """

        unknown = sorted(set(fields) - set(self.columns))
        if unknown:
            raise ValueError(
                f"Unknown column(s) for dictionary '{self.name}': {', '.join(unknown)}. "
                f"Allowed columns: {', '.join(self.columns)}."
            )

        key = self._natural_key_values(fields)
        existing = self.find(**key)
        if existing is not None:
            return existing

        row = self._model(**fields)
        try:
            self._session.add(row)
            self._session.flush()
            self._store.autocommit()
        except SQLAlchemyError:
            self._store.autorollback()
            raise
        return row

    def all(self) -> list[RowT]:
        stmt = select(self._model).order_by(self._model.id)  # type: ignore[attr-defined]
        return list(self._session.scalars(stmt).all())

    def count(self) -> int:
        stmt = select(func.count()).select_from(self._model)
        return int(self._session.execute(stmt).scalar_one())

    def _natural_key_values(self, fields: dict[str, Any]) -> dict[str, Any]:
        missing = [column for column in self.natural_key if fields.get(column) in (None, "")]
        if missing:
            raise ValueError(
                f"Natural key column(s) {', '.join(missing)} missing for dictionary '{self.name}'."
            )
        return {column: fields[column] for column in self.natural_key}

    def __repr__(self) -> str:
        return f"<DictionaryCollection name={self.name!r}>"
