"""Row parser: turns one spreadsheet row into an ``Item``."""

import logging
from typing import Dict, Iterable, List, Sequence, Tuple

from .errors import FieldParseError
from .models import (
    FIELD_TYPES,
    CanonicalHeader,
    Designator,
    Extra,
    Field,
    FieldKind,
    Invalid,
    Item,
    ListField,
    unique,
)
from .schema import DESIGNATOR_RANGE_PATTERN

logger = logging.getLogger(__name__)


def expand_designator_range(piece: str) -> List[str]:
    """Expand a designator range such as ``R1-R4`` into single designators.

    Pieces that are not a same-prefix ascending range are returned unchanged.
    """
    match = DESIGNATOR_RANGE_PATTERN.match(piece)
    if not match:
        return [piece]
    start_prefix, start_num, end_prefix, end_num = match.groups()
    if start_prefix != end_prefix or int(start_num) > int(end_num):
        return [piece]
    return [f"{start_prefix}{num}" for num in range(int(start_num), int(end_num) + 1)]


def split_designators(cell: str, expand_ranges: bool = False) -> Tuple[str, ...]:
    """Split a designator cell on commas, dropping blanks and repeats."""
    pieces = [p.strip() for p in cell.split(",")]
    pieces = [p for p in pieces if p]
    if expand_ranges:
        expanded = []
        for piece in pieces:
            expanded.extend(expand_designator_range(piece))
        pieces = expanded
    return unique(pieces)


def build_field(header: CanonicalHeader, cell: str, expand_ranges: bool = False) -> Field:
    """Build the typed field for one cell.

    Raises:
        FieldParseError: If the cell carries no usable value
    """
    if cell is None or not str(cell).strip():
        raise FieldParseError(header.label, "" if cell is None else str(cell))
    cell = str(cell)

    kind = header.kind
    if kind is FieldKind.DESIGNATOR:
        values = split_designators(cell, expand_ranges)
        if not values:
            raise FieldParseError(header.label, cell, "no designator in cell")
        return Designator(values=values)
    if kind in (FieldKind.COMMENT, FieldKind.FOOTPRINT, FieldKind.DESCRIPTION):
        return FIELD_TYPES[kind](value=cell)
    if kind in (FieldKind.LAYER, FieldKind.MOUNT_TECHNOLOGY):
        return FIELD_TYPES[kind](values=(cell,))
    if kind is FieldKind.EXTRA:
        # Supplier codes compare case-insensitively
        return Extra(label=header.label, values=(cell.strip().upper(),))
    raise FieldParseError(header.label, cell, f"no field type for {kind.value}")


def parse_row(
    cells: Sequence[str],
    header_map: Dict[int, CanonicalHeader],
    expand_ranges: bool = False,
    source: str = "",
) -> Item:
    """Convert a row of cells into an Item.

    Cells without a header are skipped. Cells that fail to parse are kept as
    ``Invalid`` diagnostics on the item. The result may have no fields; the
    caller decides whether to keep it.
    """
    fields: Dict[str, Field] = {}
    invalid: List[Invalid] = []

    for index, cell in enumerate(cells):
        header = header_map.get(index)
        if header is None:
            if cell is not None and str(cell).strip():
                logger.debug("No header for column %d (%r), skip it", index, cell)
            continue
        try:
            new_field = build_field(header, cell, expand_ranges)
        except FieldParseError as e:
            logger.debug("%s, drop cell", e)
            invalid.append(Invalid(header=e.header, raw=e.raw, reason=e.reason))
            continue

        existing = fields.get(new_field.key)
        if existing is None:
            fields[new_field.key] = new_field
        elif isinstance(existing, ListField):
            fields[new_field.key] = existing.union(new_field)
        # repeated single-valued column: first one wins

    designator = fields.get(FieldKind.DESIGNATOR.value)
    quantity = len(designator) if isinstance(designator, Designator) else 0
    return Item(fields=fields, quantity=quantity, source=source, invalid=tuple(invalid))


def parse_rows(
    rows: Iterable[Sequence[str]],
    header_map: Dict[int, CanonicalHeader],
    expand_ranges: bool = False,
    source: str = "",
) -> List[Item]:
    """Parse data rows, dropping rows that produce no fields."""
    items = []
    dropped = 0
    for row in rows:
        item = parse_row(row, header_map, expand_ranges=expand_ranges, source=source)
        if not item.fields:
            dropped += 1
            continue
        items.append(item)
    if dropped:
        logger.debug("%s: dropped %d empty rows", source or "<rows>", dropped)
    return items
