"""
Model package exports.

Import all SQLAlchemy models here so every dictionary table is registered
on Base.metadata before the schema is inspected.
"""

from pipeline_db.models.address import Address
from pipeline_db.models.gender import Gender
from pipeline_db.models.method import Method
from pipeline_db.models.relation import Relation
from pipeline_db.models.snpset import Snpset
from pipeline_db.models.state import State

__all__ = [
    "Address",
    "Gender",
    "Method",
    "Relation",
    "Snpset",
    "State",
]
