import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .errors import HeaderError
from .models import CanonicalHeader, FieldKind
from .schema import COLUMN_MAPPINGS, EXTRA_HEADER_PATTERN, FIELD_LABELS, STANDARD_HEADERS

logger = logging.getLogger(__name__)

HeaderMap = Dict[int, CanonicalHeader]


class HeaderNormalizer:
    """Maps raw spreadsheet column labels to canonical headers.

    Standard labels (designator, comment, ...) match case-insensitively.
    Labels of the form ``Note X`` / ``Code X`` become extra columns whose
    identity is the upper-cased matched label, so ``Note Mouser`` and
    ``NOTE MOUSER`` land in the same column.
    """

    def __init__(self):
        """Initialize the normalizer with column mappings."""
        # Create forward lookup: variation -> canonical header
        self._variation_to_standard: Dict[str, CanonicalHeader] = {}
        for standard, variations in COLUMN_MAPPINGS.items():
            header = CanonicalHeader(FieldKind(standard), FIELD_LABELS[standard])
            for variation in variations:
                self._variation_to_standard[variation.lower()] = header

    def get_standard_template(self) -> List[str]:
        """Get the output table headers.

        Returns:
            List of standard header names in order
        """
        return list(STANDARD_HEADERS)

    def normalize(self, raw_label: str) -> CanonicalHeader:
        """Normalize a raw column label.

        Args:
            raw_label: The column label as found in the file

        Returns:
            The canonical header for the label

        Raises:
            HeaderError: If the label is not recognized
        """
        if raw_label is None:
            raise HeaderError("")

        label = str(raw_label).strip()
        standard = self._variation_to_standard.get(label.lower())
        if standard is not None:
            return standard

        match = EXTRA_HEADER_PATTERN.search(label)
        if match:
            # Collapse inner whitespace so "Note  Mouser" is not a new column
            identity = re.sub(r"\s+", " ", match.group(0)).upper()
            return CanonicalHeader(FieldKind.EXTRA, identity)

        raise HeaderError(label)

    def normalize_column_name(self, column_name: str) -> Optional[CanonicalHeader]:
        """Like ``normalize`` but returns None for unrecognized labels."""
        try:
            return self.normalize(column_name)
        except HeaderError:
            return None

    def map_headers(self, header_row: Sequence[str]) -> HeaderMap:
        """Build the column index -> canonical header map for a header row.

        Unrecognized columns are left out of the map; the row parser then
        skips their cells.
        """
        header_map: HeaderMap = {}
        for index, raw_label in enumerate(header_row):
            try:
                header_map[index] = self.normalize(raw_label)
            except HeaderError as e:
                if str(raw_label or "").strip():
                    logger.debug("Dropping column %d: %s", index, e)
        return header_map

    def find_header_row(self, rows: Sequence[Sequence[str]]) -> Tuple[int, HeaderMap]:
        """Locate the header row of a sheet.

        The header row is the first row holding at least one standard label
        (designator, comment, footprint, ...). Supplier columns alone do not
        qualify, so a title such as "Source code v2" is not taken for a
        header. Anything above the header row is a title block.

        Returns:
            Tuple of (row index, header map); (-1, {}) when no row qualifies
        """
        for index, row in enumerate(rows):
            header_map = self.map_headers(row)
            if any(h.kind is not FieldKind.EXTRA for h in header_map.values()):
                return index, header_map
        return -1, {}

    def get_mapping_report(self, header_row: Sequence[str]) -> Dict[str, Any]:
        """Generate a report of column mappings for debugging.

        Args:
            header_row: Raw header labels of a sheet

        Returns:
            Dictionary with mapping information
        """
        mapped: Dict[str, List[str]] = {}
        unmapped: List[str] = []

        for column in header_row:
            if column is None or not str(column).strip():
                continue
            header = self.normalize_column_name(str(column))
            if header:
                mapped.setdefault(header.label, []).append(str(column))
            else:
                unmapped.append(str(column))

        return {
            "mapped": mapped,
            "unmapped": unmapped,
            "standard_headers": list(STANDARD_HEADERS),
        }
