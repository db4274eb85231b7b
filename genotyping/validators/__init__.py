"""
genotyping/validators package marker.
"""

from genotyping.validators.assay_validator import AssayRecordValidator

__all__ = [
    "AssayRecordValidator",
]
