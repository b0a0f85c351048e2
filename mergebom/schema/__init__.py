"""BOM schema definitions: standard headers, header aliases and category tables."""

import re
from typing import Dict, List

# Output table headers in order
STANDARD_HEADERS = [
    "Quantity",
    "Designator",
    "Comment",
    "Footprint",
    "Description",
    "Layer",
    "MountTechnology",
]

# Canonical field id -> accepted raw labels (compared case-insensitively)
COLUMN_MAPPINGS: Dict[str, List[str]] = {
    "designator": ["designator"],
    "comment": ["comment"],
    "footprint": ["footprint"],
    "description": ["description"],
    "layer": ["layer"],
    "mounttechnology": ["mounttechnology", "mount_technology"],
}

# Canonical field id -> display label
FIELD_LABELS: Dict[str, str] = {
    "designator": "Designator",
    "comment": "Comment",
    "footprint": "Footprint",
    "description": "Description",
    "layer": "Layer",
    "mounttechnology": "MountTechnology",
}

# Names a caller may use to build the merge key
MERGE_FIELD_NAMES = (
    "comment",
    "footprint",
    "description",
    "designator",
    "layer",
    "mounttechnology",
)

# Supplier/free-form columns: "Code Farnell", "Note Mouser", ...
EXTRA_HEADER_PATTERN = re.compile(r"(note|code)\s+(.+)", re.IGNORECASE)

# Not-populated marker, case-sensitive on purpose
NP_PATTERN = re.compile(r"^NP ")

# Leading designator letters; underscore kept for "R_G" style prefixes
DESIGNATOR_PREFIX_PATTERN = re.compile(r"^([a-zA-Z_]{1,3})")

# Expandable designator range, e.g. "R1-R4"
DESIGNATOR_RANGE_PATTERN = re.compile(r"^([A-Za-z_]+)(\d+)\s*-\s*([A-Za-z_]+)(\d+)$")

# Upper-cased designator prefix -> category name
CATEGORY_PREFIXES: Dict[str, str] = {
    "J": "Connectors",
    "X": "Connectors",
    "P": "Connectors",
    "SIM": "Connectors",
    "S": "Mechanicals",
    "SCR": "Mechanicals",
    "SPA": "Mechanicals",
    "BAT": "Mechanicals",
    "BUZ": "Mechanicals",
    "BT": "Mechanicals",
    "B": "Mechanicals",
    "SW": "Mechanicals",
    "MP": "Mechanicals",
    "K": "Mechanicals",
    "F": "Fuses",
    "FU": "Fuses",
    "R": "Resistors",
    "RN": "Resistors",
    "R_G": "Resistors",
    "C": "Capacitors",
    "CAP": "Capacitors",
    "D": "Diode",
    "DZ": "Diode",
    "L": "Inductors",
    "Q": "Transistor",
    "TR": "Transformers",
    "Y": "Cristal",
    "U": "IC",
}

# Category name -> (rank, banner letter). Higher rank sorts first in the output.
CATEGORY_RANKS: Dict[str, int] = {
    "Connectors": 11,
    "Mechanicals": 10,
    "Fuses": 9,
    "Resistors": 8,
    "Capacitors": 7,
    "Diode": 6,
    "Inductors": 5,
    "Transistor": 4,
    "Transformers": 3,
    "Cristal": 2,
    "IC": 1,
    "Invalid": 0,
}

CATEGORY_LETTERS: Dict[str, str] = {
    "Connectors": "J",
    "Mechanicals": "S",
    "Fuses": "F",
    "Resistors": "R",
    "Capacitors": "C",
    "Diode": "D",
    "Inductors": "L",
    "Transistor": "Q",
    "Transformers": "Tr",
    "Cristal": "Y",
    "IC": "U",
    "Invalid": "-",
}

# Category name -> pint unit of the component value held in the comment
CATEGORY_UNITS: Dict[str, str] = {
    "Resistors": "ohm",
    "Capacitors": "farad",
    "Inductors": "henry",
    "Cristal": "hertz",
}

__all__ = [
    "STANDARD_HEADERS",
    "COLUMN_MAPPINGS",
    "FIELD_LABELS",
    "MERGE_FIELD_NAMES",
    "EXTRA_HEADER_PATTERN",
    "NP_PATTERN",
    "DESIGNATOR_PREFIX_PATTERN",
    "DESIGNATOR_RANGE_PATTERN",
    "CATEGORY_PREFIXES",
    "CATEGORY_RANKS",
    "CATEGORY_LETTERS",
    "CATEGORY_UNITS",
]
