"""Merge engine: collapses items that share a merge key."""

import logging
from typing import Dict

from .models import Bom, Field, Item, ListField

logger = logging.getLogger(__name__)


def merge_items(representative: Item, incoming: Item) -> Item:
    """Fold a colliding item into the group representative.

    List fields (designators, layers, mount technologies, extra columns) are
    unioned in first-appearance order. Single-valued fields keep the
    representative's value and are only filled in when it lacks them.
    """
    fields: Dict[str, Field] = dict(representative.fields)
    for key, incoming_field in incoming.fields.items():
        existing = fields.get(key)
        if existing is None:
            fields[key] = incoming_field
        elif isinstance(existing, ListField):
            fields[key] = existing.union(incoming_field)

    merged = representative.evolve(
        fields=fields,
        is_merged=representative.is_merged or incoming.is_merged,
        is_not_populated=representative.is_not_populated or incoming.is_not_populated,
    )
    return merged.evolve(quantity=len(merged.designators))


def merge(bom: Bom) -> Bom:
    """Group items by ``unique_id``; the first item seen represents its group.

    Returns a new Bom, the input is left untouched. Item order of the result
    follows first appearance of each key but callers must not rely on it:
    the table projector owns display order.
    """
    merged: Dict[str, Item] = {}
    collisions = 0
    for item in bom.items:
        previous = merged.get(item.unique_id)
        if previous is None:
            merged[item.unique_id] = item.evolve(quantity=len(item.designators))
            continue
        collisions += 1
        merged[item.unique_id] = merge_items(previous, item)

    logger.info(
        "Merged %d items into %d (%d collisions)", len(bom.items), len(merged), collisions
    )
    return Bom(items=list(merged.values()))
