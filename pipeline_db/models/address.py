"""
pipeline_db/models/address.py

Plate well address dictionary.
"""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pipeline_db.base import Base, DictionaryMixin


class Address(Base, DictionaryMixin):
    """
    One well of a 16x24 plate in both label styles, e.g. ('A01', 'A1').
    """

    __tablename__ = "address"
    __natural_key__ = ("label1", "label2")

    id: Mapped[int] = mapped_column("id_address", Integer, primary_key=True)
    label1: Mapped[str] = mapped_column(
        String,
        nullable=False,
        comment="Zero-padded column label, e.g. A01",
    )
    label2: Mapped[str] = mapped_column(
        String,
        nullable=False,
        comment="Unpadded column label, e.g. A1",
    )

    __table_args__ = (UniqueConstraint("label1", "label2", name="uq_address_labels"),)

    def __repr__(self) -> str:
        return f"<Address id={self.id} label1={self.label1!r} label2={self.label2!r}>"
