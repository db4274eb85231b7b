"""
pipeline_db/models/snpset.py

SNP set (plex) dictionary.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from pipeline_db.base import Base, DictionaryMixin


class Snpset(Base, DictionaryMixin):
    """
    A named panel of markers assayed together (Infinium, Sequenom, Fluidigm).
    """

    __tablename__ = "snpset"

    id: Mapped[int] = mapped_column("id_snpset", Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Snpset id={self.id} name={self.name!r}>"
