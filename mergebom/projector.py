"""Table projector: lays a Bom out as an ordered, padded table."""

import logging
from typing import Dict, List

from .models import Bom, FieldKind, ItemsTable, ItemView
from .schema import STANDARD_HEADERS

logger = logging.getLogger(__name__)

# Standard header -> field key ("Quantity" is filled from the item itself)
_STANDARD_KEYS = {
    "Designator": FieldKind.DESIGNATOR.value,
    "Comment": FieldKind.COMMENT.value,
    "Footprint": FieldKind.FOOTPRINT.value,
    "Description": FieldKind.DESCRIPTION.value,
    "Layer": FieldKind.LAYER.value,
    "MountTechnology": FieldKind.MOUNT_TECHNOLOGY.value,
}


def discover_extra_headers(bom: Bom, sort: bool = False) -> List[str]:
    """Extra column labels in first-discovery order, or sorted."""
    headers: List[str] = []
    for item in bom.items:
        for extra in item.extras:
            if extra.label not in headers:
                headers.append(extra.label)
    if sort:
        headers.sort()
    return headers


def project(bom: Bom, sort_extra_headers: bool = False) -> ItemsTable:
    """Build the exportable table of a Bom.

    Headers are the standard columns followed by the extra columns. Rows are
    grouped by category, highest rank first; items keep their Bom order
    within a category. Each row is padded with empty strings so that
    ``row.fields[i]`` belongs to ``headers[i]``.
    """
    extra_headers = discover_extra_headers(bom, sort=sort_extra_headers)
    headers = list(STANDARD_HEADERS) + extra_headers

    columns: Dict[str, str] = dict(_STANDARD_KEYS)
    for label in extra_headers:
        columns[label] = label

    rows: List[ItemView] = []
    for item in sorted(bom.items, key=lambda i: i.category.rank, reverse=True):
        cells = [str(item.quantity)]
        for header in headers[1:]:
            cells.append(item.text(columns[header]))
        rows.append(
            ItemView(
                quantity=item.quantity,
                unique_id=item.unique_id,
                is_merged=item.is_merged,
                is_not_populated=item.is_not_populated,
                category=item.category.value,
                fields=cells,
            )
        )

    logger.info("Projected %d rows over %d columns", len(rows), len(headers))
    return ItemsTable(headers=headers, rows=rows)
