"""
tests/test_assay_result_set.py

Pytest unit tests for AssayRecord and AssayResultSet.

Records are built directly or parsed from in-memory bytes; the object store
is a small in-test fake.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from genotyping.domain.assay_result import AssayRecord
from genotyping.domain.errors import (
    DuplicateAddressError,
    MalformedRecordError,
    MetadataCountError,
    MultipleSamplesError,
    NoSourceError,
    NotFoundError,
)
from genotyping.services.assay_result_set import AssayResultSet
from genotyping.storage.object_store import Annotation, DataObject, ObjectStore


class FakeObjectStore(ObjectStore):
    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.annotations: dict[str, list[Annotation]] = {}

    def add_object(self, path: str, content: bytes, **metadata: str) -> DataObject:
        self.objects[path] = content
        self.annotations[path] = [Annotation(key=k, value=v) for k, v in metadata.items()]
        return DataObject(store=self, path=path)

    def add_annotation(self, path: str, key: str, value: str) -> None:
        self.annotations.setdefault(path, []).append(Annotation(key=key, value=value))

    def read(self, path: str) -> bytes:
        return self.objects[path]

    def find_annotations(self, path: str, key: str) -> list[Annotation]:
        return [a for a in self.annotations.get(path, []) if a.key == key]


def _record(
    assay: str = "S01-A01",
    snp: str = "rs0123",
    sample: str = "sample_001",
    confidence: float = 0.99,
    type_: str = "Unknown",
    converted_call: str = "C:T",
) -> AssayRecord:
    return AssayRecord(
        assay=assay,
        snp_assayed=snp,
        x_allele="C",
        y_allele="T",
        sample_name=sample,
        type=type_,
        auto="XY",
        confidence=confidence,
        final="XY",
        converted_call=converted_call,
        x_intensity=0.28,
        y_intensity=0.49,
    )


def _export(*records: AssayRecord) -> bytes:
    lines = []
    for r in records:
        fields = [
            r.assay, r.snp_assayed, r.x_allele, r.y_allele, r.sample_name, r.type,
            r.auto, str(r.confidence), r.final, r.converted_call,
            str(r.x_intensity), str(r.y_intensity),
        ]
        lines.append("\t".join(fields) + "\n")
    return "".join(lines).encode("utf-8")


# ---------------------------------------------------------------------------
# AssayRecord
# ---------------------------------------------------------------------------


class TestAssayRecord:
    def test_is_frozen(self) -> None:
        record = _record()
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.confidence = 0.1  # type: ignore[misc]

    def test_addresses_come_from_assay_id(self) -> None:
        record = _record(assay="S12-A07")
        assert record.assay_address == "A07"
        assert record.sample_address == "S12"

    def test_assay_without_separator_is_its_own_address(self) -> None:
        record = _record(assay="A07")
        assert record.assay_address == "A07"
        assert record.sample_address == ""

    def test_empty_well(self) -> None:
        assert _record(snp="").is_empty
        assert _record(sample="[ Empty ]").is_empty
        assert not _record().is_empty

    def test_controls(self) -> None:
        assert _record(type_="NTC").is_control
        assert _record(sample="ntc").is_control
        assert _record(snp="").is_control
        assert not _record().is_control

    def test_genotype(self) -> None:
        assert _record(converted_call="C:T").genotype == "CT"
        assert _record(converted_call="No Call").genotype == "NN"
        assert not _record(converted_call="No Call").is_call


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "fluidigm_001.csv"
        path.write_bytes(_export(_record(), _record(assay="S01-A02", snp="rs0456")))

        result_set = AssayResultSet.from_file(path)

        assert result_set.size() == 2
        assert len(result_set) == 2
        assert result_set.file_name == str(path)
        assert result_set.source == str(path)
        assert result_set.data_object is None

    def test_from_file_propagates_malformed_record(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.csv"
        path.write_bytes(b"too\tfew\n")
        with pytest.raises(MalformedRecordError):
            AssayResultSet.from_file(path)

    def test_from_data_object(self) -> None:
        store = FakeObjectStore()
        data_object = store.add_object("/seq/fluidigm/001.csv", _export(_record()))

        result_set = AssayResultSet.from_data_object(data_object)

        assert result_set.size() == 1
        assert result_set.source == "/seq/fluidigm/001.csv"
        assert result_set.data_object is data_object

    def test_both_sources_are_rejected(self) -> None:
        store = FakeObjectStore()
        data_object = store.add_object("/x.csv", b"")
        with pytest.raises(ValueError):
            AssayResultSet([], file_name="x.csv", data_object=data_object)

    def test_iterates_in_order(self) -> None:
        records = [_record(assay="S01-A02"), _record(assay="S01-A01")]
        assert list(AssayResultSet(records)) == records


# ---------------------------------------------------------------------------
# Sample name
# ---------------------------------------------------------------------------


class TestSampleName:
    def test_single_sample(self) -> None:
        result_set = AssayResultSet(
            [_record(), _record(assay="S01-A02", snp="rs0456")]
        )
        assert result_set.sample_name() == "sample_001"

    def test_empty_wells_are_ignored(self) -> None:
        result_set = AssayResultSet(
            [_record(), _record(assay="S01-A02", snp="", sample="[ Empty ]")]
        )
        assert result_set.sample_name() == "sample_001"

    def test_blank_sample_names_are_ignored(self) -> None:
        result_set = AssayResultSet(
            [_record(), _record(assay="S01-A02", snp="rs0456", sample="")]
        )
        assert result_set.sample_name() == "sample_001"
        assert AssayResultSet([_record(sample="")]).sample_name() is None

    def test_no_non_empty_records_gives_none(self) -> None:
        result_set = AssayResultSet([_record(snp="", sample="[ Empty ]")])
        assert result_set.sample_name() is None
        assert AssayResultSet([]).sample_name() is None

    def test_multiple_samples_raise(self) -> None:
        result_set = AssayResultSet(
            [_record(), _record(assay="S01-A02", sample="sample_002")]
        )
        with pytest.raises(MultipleSamplesError) as excinfo:
            result_set.sample_name()

        assert excinfo.value.names == ("sample_001", "sample_002")
        assert "sample_001" in str(excinfo.value)
        assert "sample_002" in str(excinfo.value)


# ---------------------------------------------------------------------------
# SNP set name
# ---------------------------------------------------------------------------


class TestSnpsetName:
    def test_requires_object_store_source(self, tmp_path: Path) -> None:
        path = tmp_path / "local.csv"
        path.write_bytes(_export(_record()))
        with pytest.raises(NoSourceError):
            AssayResultSet.from_file(path).snpset_name()

    def test_in_memory_set_has_no_source(self) -> None:
        with pytest.raises(NoSourceError):
            AssayResultSet([_record()]).snpset_name()

    def test_single_annotation(self) -> None:
        store = FakeObjectStore()
        data_object = store.add_object("/a.csv", _export(_record()), fluidigm_plex="qc")
        assert AssayResultSet.from_data_object(data_object).snpset_name() == "qc"

    def test_missing_annotation_raises(self) -> None:
        store = FakeObjectStore()
        data_object = store.add_object("/a.csv", _export(_record()))
        with pytest.raises(MetadataCountError) as excinfo:
            AssayResultSet.from_data_object(data_object).snpset_name()
        assert excinfo.value.values == ()
        assert excinfo.value.key == "fluidigm_plex"

    def test_several_annotations_raise_listing_all(self) -> None:
        store = FakeObjectStore()
        data_object = store.add_object("/a.csv", _export(_record()), fluidigm_plex="qc")
        store.add_annotation("/a.csv", "fluidigm_plex", "W30467")

        with pytest.raises(MetadataCountError) as excinfo:
            AssayResultSet.from_data_object(data_object).snpset_name()

        assert excinfo.value.values == ("qc", "W30467")
        assert "qc" in str(excinfo.value)
        assert "W30467" in str(excinfo.value)


# ---------------------------------------------------------------------------
# SNP names and addresses
# ---------------------------------------------------------------------------


class TestSnpNamesAndAddresses:
    def test_snp_names_are_unique_and_sorted(self) -> None:
        records = [
            _record(assay="S01-A01", snp="rs9"),
            _record(assay="S01-A02", snp="rs1"),
            _record(assay="S01-A03", snp="rs9"),
            _record(assay="S01-A04", snp="", sample="[ Empty ]"),
            _record(assay="S01-A05", snp="rs10"),
        ]
        assert AssayResultSet(records).snp_names() == ["rs1", "rs10", "rs9"]

    def test_snp_names_ignore_input_order(self) -> None:
        records = [
            _record(assay="S01-A01", snp="rs3"),
            _record(assay="S01-A02", snp="rs1"),
            _record(assay="S01-A03", snp="rs2"),
        ]
        forward = AssayResultSet(records).snp_names()
        backward = AssayResultSet(list(reversed(records))).snp_names()
        assert forward == backward == ["rs1", "rs2", "rs3"]

    def test_assay_addresses_keep_file_order_and_duplicates(self) -> None:
        records = [
            _record(assay="S01-A02"),
            _record(assay="S01-A01"),
            _record(assay="S01-A02"),
        ]
        assert AssayResultSet(records).assay_addresses() == ["A02", "A01", "A02"]


# ---------------------------------------------------------------------------
# Address lookup
# ---------------------------------------------------------------------------


class TestResultAt:
    def test_returns_unique_match(self) -> None:
        target = _record(assay="S01-A02", snp="rs0456")
        result_set = AssayResultSet([_record(), target])
        assert result_set.result_at("A02") is target

    def test_missing_address_raises(self) -> None:
        with pytest.raises(NotFoundError) as excinfo:
            AssayResultSet([_record()]).result_at("A96")
        assert excinfo.value.address == "A96"

    def test_duplicate_address_raises(self) -> None:
        result_set = AssayResultSet([_record(), _record(snp="rs0456")])
        with pytest.raises(DuplicateAddressError) as excinfo:
            result_set.result_at("A01")
        assert excinfo.value.count == 2
        assert "2 assays at address 'A01'" in str(excinfo.value)

    def test_empty_address_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            AssayResultSet([_record()]).result_at("")


# ---------------------------------------------------------------------------
# Confidence filtering
# ---------------------------------------------------------------------------


class TestFilterOnConfidence:
    def test_threshold_is_inclusive(self) -> None:
        at = _record(assay="S01-A01", snp="rs1", confidence=0.9)
        below = _record(assay="S01-A02", snp="rs2", confidence=0.89)
        above = _record(assay="S01-A03", snp="rs3", confidence=0.95)

        filtered = AssayResultSet([below, above, at]).filter_on_confidence(0.9)

        assert filtered == [at, above]

    def test_controls_are_excluded(self) -> None:
        sample = _record(assay="S01-A01", snp="rs1")
        ntc = _record(assay="S01-A02", snp="rs2", type_="NTC")
        empty = _record(assay="S01-A03", snp="", sample="[ Empty ]")

        assert AssayResultSet([sample, ntc, empty]).filter_on_confidence(0.0) == [sample]

    def test_sorted_by_snp_with_file_order_tie_break(self) -> None:
        first_b = _record(assay="S01-A01", snp="rsB")
        only_a = _record(assay="S01-A02", snp="rsA")
        second_b = _record(assay="S01-A03", snp="rsB")

        filtered = AssayResultSet([first_b, only_a, second_b]).filter_on_confidence(0)

        assert filtered == [only_a, first_b, second_b]
        assert filtered[1] is first_b
        assert filtered[2] is second_b

    def test_zero_threshold_without_controls_returns_all_sorted(self) -> None:
        records = [
            _record(assay="S01-A01", snp="rs3", confidence=0.0),
            _record(assay="S01-A02", snp="rs1", confidence=0.5),
            _record(assay="S01-A03", snp="rs2", confidence=1.0),
        ]
        filtered = AssayResultSet(records).filter_on_confidence(0)
        assert [r.snp_assayed for r in filtered] == ["rs1", "rs2", "rs3"]

    def test_undefined_threshold_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            AssayResultSet([_record()]).filter_on_confidence(None)  # type: ignore[arg-type]
