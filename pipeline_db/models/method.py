"""
pipeline_db/models/method.py

Analysis method dictionary.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from pipeline_db.base import Base, DictionaryMixin


class Method(Base, DictionaryMixin):
    __tablename__ = "method"

    id: Mapped[int] = mapped_column("id_method", Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(String, nullable=True)

    def __repr__(self) -> str:
        return f"<Method id={self.id} name={self.name!r}>"
