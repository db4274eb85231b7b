"""
genotyping/domain/assay_result.py

One validated line of genotyping instrument output.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# Positional layout of an instrument export line.
ASSAY_FIELDS: tuple[str, ...] = (
    "assay",
    "snp_assayed",
    "x_allele",
    "y_allele",
    "sample_name",
    "type",
    "auto",
    "confidence",
    "final",
    "converted_call",
    "x_intensity",
    "y_intensity",
)

NUMERIC_FIELDS: frozenset[str] = frozenset({"confidence", "x_intensity", "y_intensity"})

EMPTY_NAME = "[ Empty ]"
NO_CALL = "No Call"
NO_CALL_GENOTYPE = "NN"
CALL_SEPARATOR = ":"
ADDRESS_SEPARATOR = "-"


@dataclass(frozen=True)
class AssayRecord:
    """
    Immutable assay result for one marker at one plate address.

    control_names holds the upper-cased sample/type values that mark a
    no-template control well.
    """

    assay: str
    snp_assayed: str
    x_allele: str
    y_allele: str
    sample_name: str
    type: str
    auto: str
    confidence: float
    final: str
    converted_call: str
    x_intensity: float
    y_intensity: float
    raw_line: str = ""
    control_names: frozenset[str] = field(
        default=frozenset({"NTC"}),
        compare=False,
        repr=False,
    )

    @property
    def assay_address(self) -> str:
        _, sep, address = self.assay.partition(ADDRESS_SEPARATOR)
        return address if sep else self.assay

    @property
    def sample_address(self) -> str:
        sample_address, sep, _ = self.assay.partition(ADDRESS_SEPARATOR)
        return sample_address if sep else ""

    @property
    def is_empty(self) -> bool:
        # Wells with no template have no SNP assayed.
        return self.snp_assayed == "" or self.sample_name == EMPTY_NAME

    @property
    def is_no_template_control(self) -> bool:
        return (
            self.type.strip().upper() in self.control_names
            or self.sample_name.strip().upper() in self.control_names
        )

    @property
    def is_control(self) -> bool:
        return self.is_empty or self.is_no_template_control

    @property
    def is_call(self) -> bool:
        return self.converted_call != NO_CALL

    @property
    def genotype(self) -> str:
        """
        Compact two-letter call, e.g. 'C:T' -> 'CT'; 'NN' for no call.
        """

        if not self.is_call:
            return NO_CALL_GENOTYPE
        return self.converted_call.replace(CALL_SEPARATOR, "")
