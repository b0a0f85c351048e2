"""Tests for header normalization and header row detection."""

import pytest

from mergebom.errors import HeaderError
from mergebom.models import CanonicalHeader, FieldKind
from mergebom.normalizer import HeaderNormalizer
from mergebom.schema import STANDARD_HEADERS


@pytest.fixture
def normalizer():
    return HeaderNormalizer()


# =============================================================================
# STANDARD HEADERS
# =============================================================================

class TestStandardHeaders:

    @pytest.mark.parametrize("raw,kind,label", [
        ("Designator", FieldKind.DESIGNATOR, "Designator"),
        ("designator", FieldKind.DESIGNATOR, "Designator"),
        ("COMMENT", FieldKind.COMMENT, "Comment"),
        ("Footprint", FieldKind.FOOTPRINT, "Footprint"),
        ("description", FieldKind.DESCRIPTION, "Description"),
        ("Layer", FieldKind.LAYER, "Layer"),
        ("mounttechnology", FieldKind.MOUNT_TECHNOLOGY, "MountTechnology"),
        ("Mount_Technology", FieldKind.MOUNT_TECHNOLOGY, "MountTechnology"),
        ("MountTechnology", FieldKind.MOUNT_TECHNOLOGY, "MountTechnology"),
        ("  Comment  ", FieldKind.COMMENT, "Comment"),
    ])
    def test_standard_label(self, normalizer, raw, kind, label):
        header = normalizer.normalize(raw)
        assert header.kind is kind
        assert header.label == label
        assert header.key == kind.value

    def test_standard_template(self, normalizer):
        assert normalizer.get_standard_template() == STANDARD_HEADERS
        assert normalizer.get_standard_template() is not STANDARD_HEADERS


# =============================================================================
# EXTRA HEADERS
# =============================================================================

class TestExtraHeaders:

    @pytest.mark.parametrize("raw,identity", [
        ("Code Farnell", "CODE FARNELL"),
        ("code farnell", "CODE FARNELL"),
        ("Code Mouser", "CODE MOUSER"),
        ("Note Mouser", "NOTE MOUSER"),
        ("Code Digikey", "CODE DIGIKEY"),
        ("Note Digi", "NOTE DIGI"),
        ("Note Uno Due Tre", "NOTE UNO DUE TRE"),
        ("Code Due", "CODE DUE"),
    ])
    def test_extra_label(self, normalizer, raw, identity):
        header = normalizer.normalize(raw)
        assert header.kind is FieldKind.EXTRA
        assert header.label == identity
        assert header.key == identity

    def test_case_variants_share_one_column(self, normalizer):
        assert normalizer.normalize("Note Mouser") == normalizer.normalize("NOTE MOUSER")
        assert normalizer.normalize("note mouser") == normalizer.normalize("NoTe MoUsEr")

    def test_inner_whitespace_is_collapsed(self, normalizer):
        assert normalizer.normalize("Note   Mouser").label == "NOTE MOUSER"

    def test_pattern_found_inside_label(self, normalizer):
        """Only the matched part of the label becomes the identity."""
        assert normalizer.normalize("Supplier Code Farnell").label == "CODE FARNELL"


# =============================================================================
# UNRECOGNIZED HEADERS
# =============================================================================

class TestUnrecognizedHeaders:

    @pytest.mark.parametrize("raw", ["No Uno", "Node 1223", "Quantity", "Qty", "Value", "Notes", ""])
    def test_raises_header_error(self, normalizer, raw):
        with pytest.raises(HeaderError) as excinfo:
            normalizer.normalize(raw)
        assert excinfo.value.raw_label == raw

    def test_error_message(self, normalizer):
        with pytest.raises(HeaderError, match="Invalid header key: No Uno"):
            normalizer.normalize("No Uno")

    def test_normalize_column_name_returns_none(self, normalizer):
        assert normalizer.normalize_column_name("Qty") is None
        assert normalizer.normalize_column_name("Comment") == CanonicalHeader(FieldKind.COMMENT, "Comment")


# =============================================================================
# HEADER ROWS
# =============================================================================

class TestHeaderRows:

    def test_map_headers_drops_unknown_columns(self, normalizer):
        header_map = normalizer.map_headers(["Designator", "Qty", "Code Farnell", "", "Comment"])
        assert sorted(header_map) == [0, 2, 4]
        assert header_map[0].kind is FieldKind.DESIGNATOR
        assert header_map[2].label == "CODE FARNELL"
        assert header_map[4].kind is FieldKind.COMMENT

    def test_find_header_row_skips_title_block(self, normalizer):
        rows = [
            ["Bill of Materials", "", ""],
            ["Project: Mainboard rev B", "", ""],
            ["", "", ""],
            ["Designator", "Comment", "Footprint"],
            ["R1", "10k", "0603"],
        ]
        index, header_map = normalizer.find_header_row(rows)
        assert index == 3
        assert [h.label for h in header_map.values()] == ["Designator", "Comment", "Footprint"]

    def test_find_header_row_skips_code_title(self, normalizer):
        rows = [
            ["Source code v2"],
            ["Designator", "Comment"],
            ["R1", "10k"],
        ]
        index, header_map = normalizer.find_header_row(rows)
        assert index == 1
        assert [h.kind for h in header_map.values()] == [FieldKind.DESIGNATOR, FieldKind.COMMENT]

    def test_extra_labels_alone_are_not_a_header(self, normalizer):
        rows = [["Note Mouser", "Code Farnell"], ["m", "f"]]
        assert normalizer.find_header_row(rows) == (-1, {})

    def test_find_header_row_without_headers(self, normalizer):
        assert normalizer.find_header_row([["a", "b"], ["1", "2"]]) == (-1, {})
        assert normalizer.find_header_row([]) == (-1, {})

    def test_mapping_report(self, normalizer):
        report = normalizer.get_mapping_report(
            ["Designator", "Quantity", "Note Mouser", "NOTE MOUSER", None, ""]
        )
        assert report["mapped"] == {
            "Designator": ["Designator"],
            "NOTE MOUSER": ["Note Mouser", "NOTE MOUSER"],
        }
        assert report["unmapped"] == ["Quantity"]
        assert report["standard_headers"] == STANDARD_HEADERS
