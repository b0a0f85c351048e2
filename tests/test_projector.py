"""Tests for the table projector."""

from mergebom.keygen import KeyGenerator
from mergebom.models import Bom, ItemsTable
from mergebom.normalizer import HeaderNormalizer
from mergebom.projector import discover_extra_headers, project
from mergebom.row_parser import parse_row, parse_rows
from mergebom.schema import STANDARD_HEADERS


def make_bom(header_row, rows, merge_fields=("comment", "footprint", "description")):
    header_map = HeaderNormalizer().map_headers(header_row)
    generator = KeyGenerator(merge_fields=merge_fields, seed=1)
    return Bom(items=generator.process(parse_row(row, header_map) for row in rows))


# =============================================================================
# HEADERS
# =============================================================================

class TestHeaders:

    def test_empty_bom_has_standard_headers_only(self):
        table = project(Bom())
        assert table.headers == STANDARD_HEADERS
        assert table.rows == []

    def test_extras_follow_standard_headers_in_discovery_order(self):
        bom = make_bom(
            ["Designator", "Note Mouser", "Code Farnell"],
            [["R1", "m1", "f1"]],
        )
        assert project(bom).headers == STANDARD_HEADERS + ["NOTE MOUSER", "CODE FARNELL"]

    def test_extras_sorted_on_request(self):
        bom = make_bom(
            ["Designator", "Note Mouser", "Code Farnell"],
            [["R1", "m1", "f1"]],
        )
        table = project(bom, sort_extra_headers=True)
        assert table.headers[len(STANDARD_HEADERS):] == ["CODE FARNELL", "NOTE MOUSER"]

    def test_case_variants_produce_one_column(self):
        first = make_bom(["Designator", "Note Mouser"], [["R1", "a"]])
        second = make_bom(["Designator", "NOTE MOUSER"], [["R2", "b"]])
        bom = Bom.concat([first, second])
        assert discover_extra_headers(bom) == ["NOTE MOUSER"]
        assert project(bom).headers.count("NOTE MOUSER") == 1


# =============================================================================
# ROWS
# =============================================================================

class TestRows:

    def test_rows_grouped_by_category_rank(self):
        bom = make_bom(
            ["Designator", "Comment"],
            [["U1", "MCU"], ["C1", "100nF"], ["TP1", "Test"], ["J1", "USB"], ["R1", "10k"]],
        )
        table = project(bom)
        assert [r.category for r in table.rows] == [
            "Connectors", "Resistors", "Capacitors", "IC", "Invalid"
        ]

    def test_order_within_category_is_stable(self):
        bom = make_bom(
            ["Designator", "Comment"],
            [["R3", "1k"], ["C1", "1nF"], ["R1", "2k"], ["R2", "3k"]],
        )
        rows = [r for r in project(bom).rows if r.category == "Resistors"]
        assert [r.fields[1] for r in rows] == ["R3", "R1", "R2"]

    def test_rows_are_padded_to_headers(self):
        bom = make_bom(
            ["Designator", "Comment", "Code Farnell"],
            [["R1, R2", "10k", "123"], ["C1", "1nF"]],
        )
        table = project(bom)
        for row in table.rows:
            assert len(row.fields) == len(table.headers)
        capacitor = next(r for r in table.rows if r.category == "Capacitors")
        assert capacitor.fields == ["1", "C1", "1nF", "", "", "", "", ""]

    def test_quantity_cell_and_view_attributes(self):
        bom = make_bom(["Designator", "Comment"], [["J1, J2", "USB"]]).merge()
        row = project(bom).rows[0]
        assert row.fields[0] == "2"
        assert row.quantity == 2
        assert row.is_merged is True
        assert row.unique_id == "Connectors-Connector--"
        assert row.to_dict()["category"] == "Connectors"

    def test_bom_to_table(self):
        bom = make_bom(["Designator", "Comment"], [["R1", "10k"]])
        assert isinstance(bom.to_table(), ItemsTable)
        assert len(bom.to_table()) == 1


class TestRoundTrip:

    def test_table_reparses_to_same_items(self):
        header_row = ["Designator", "Comment", "Footprint", "Description", "Code Farnell"]
        bom = make_bom(
            header_row,
            [
                ["R1, R2", "10k", "0603", "Res", "111"],
                ["C1", "100nF", "0402", "Cap", "222"],
                ["U1", "MCU", "QFN-32", "Micro", "333"],
            ],
            merge_fields=(),
        )
        table = project(bom)
        normalizer = HeaderNormalizer()
        rows = table.to_rows()
        index, header_map = normalizer.find_header_row(rows)
        assert index == 0

        reparsed = parse_rows(rows[1:], header_map)
        by_first_designator = {i.designators[0]: i for i in reparsed}
        for item in bom.items:
            again = by_first_designator[item.designators[0]]
            assert again.designators == item.designators
            for key in ("comment", "footprint", "description", "CODE FARNELL"):
                assert again.text(key) == item.text(key)
