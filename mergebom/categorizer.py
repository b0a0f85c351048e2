"""Designator-prefix categorizer."""

import logging

from .errors import CategoryError
from .models import Category, Item
from .schema import CATEGORY_PREFIXES, DESIGNATOR_PREFIX_PATTERN

logger = logging.getLogger(__name__)


def category_for_designator(designator: str) -> Category:
    """Look up the category for a single designator.

    Raises:
        CategoryError: If the designator has no known prefix
    """
    match = DESIGNATOR_PREFIX_PATTERN.match(designator or "")
    if not match:
        raise CategoryError(f"No prefix in designator {designator!r}")
    prefix = match.group(1).upper()
    name = CATEGORY_PREFIXES.get(prefix)
    if name is None:
        raise CategoryError(f"Unknown designator prefix {prefix!r} in {designator!r}")
    return Category(name)


def categorize(item: Item) -> Category:
    """Assign a category from the item's first designator.

    Only the first designator counts, even when later ones carry other
    prefixes. Items without designators, or with an unknown prefix, are
    ``Category.INVALID``.
    """
    designators = item.designators
    if not designators:
        return Category.INVALID
    try:
        return category_for_designator(designators[0])
    except CategoryError as e:
        logger.debug("%s, using %s", e, Category.INVALID)
        return Category.INVALID
