"""
pipeline_db/models/gender.py

Sample gender dictionary.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from pipeline_db.base import Base, DictionaryMixin


class Gender(Base, DictionaryMixin):
    __tablename__ = "gender"

    id: Mapped[int] = mapped_column("id_gender", Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    code: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Numeric code used by downstream genotype formats",
    )
    description: Mapped[str | None] = mapped_column(String, nullable=True)

    def __repr__(self) -> str:
        return f"<Gender id={self.id} name={self.name!r} code={self.code!r}>"
