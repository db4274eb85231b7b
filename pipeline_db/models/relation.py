"""
pipeline_db/models/relation.py

Sample-to-sample relation dictionary.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from pipeline_db.base import Base, DictionaryMixin


class Relation(Base, DictionaryMixin):
    __tablename__ = "relation"

    id: Mapped[int] = mapped_column("id_relation", Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(String, nullable=True)

    def __repr__(self) -> str:
        return f"<Relation id={self.id} name={self.name!r}>"
