"""
genotyping/services package marker.
"""

from genotyping.services.assay_result_set import AssayResultSet

__all__ = [
    "AssayResultSet",
]
