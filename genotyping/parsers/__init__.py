"""
genotyping/parsers package marker.
"""

from genotyping.parsers.assay_parser import AssayResultParser, parse_assay_results

__all__ = [
    "AssayResultParser",
    "parse_assay_results",
]
