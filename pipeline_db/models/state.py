"""
pipeline_db/models/state.py

Sample state dictionary.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from pipeline_db.base import Base, DictionaryMixin


class State(Base, DictionaryMixin):
    __tablename__ = "state"

    id: Mapped[int] = mapped_column("id_state", Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(String, nullable=True)

    def __repr__(self) -> str:
        return f"<State id={self.id} name={self.name!r}>"
