"""Merge key generation.

The merge key (``unique_id``) is the category name followed by the values of
the configured merge fields, joined with ``-``. A ``-`` or ``\\`` inside a
value is escaped with ``\\`` so that different splits of the same text never
share a key.

Some categories rewrite the comment before the key is built so that rows
differing only in their label still collapse:

- Connectors: comment becomes "Connector" (or "NP Connector")
- Diode with "LED" in the footprint: comment becomes "LED" (or "NP LED")
- with ``extended_rewrites``: tactile switches and relays likewise

With no merge fields configured every item gets a random 15 digit key.
"""

import logging
import random
from typing import Iterable, List, NamedTuple, Optional

from .categorizer import categorize
from .config import DEFAULT_MERGE_FIELDS, normalize_merge_fields
from .models import Category, Comment, FieldKind, Item
from .schema import NP_PATTERN
from .unit_normalizer import UnitNormalizer

logger = logging.getLogger(__name__)

KEY_SEPARATOR = "-"
KEY_ESCAPE = "\\"
RANDOM_KEY_DIGITS = 15


class KeyResult(NamedTuple):
    unique_id: str
    is_not_populated: bool
    is_merged: bool
    item: Item


class RandomKeySource:
    """Issues distinct random keys for the no-merge path.

    One source serves a whole merge run, so keys stay distinct across every
    table of the run, whatever their source labels.
    """

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)
        self._issued = set()

    def next_key(self) -> str:
        low = 10 ** (RANDOM_KEY_DIGITS - 1)
        while True:
            key = str(self._rng.randrange(low, low * 10))
            if key not in self._issued:
                self._issued.add(key)
                return key


def is_not_populated(value: str) -> bool:
    return bool(NP_PATTERN.match(value or ""))


def escape_key_part(value: str) -> str:
    """Escape the separator inside one key contribution."""
    return value.replace(KEY_ESCAPE, KEY_ESCAPE * 2).replace(KEY_SEPARATOR, KEY_ESCAPE + KEY_SEPARATOR)


class KeyGenerator:
    """Computes merge keys for categorized items.

    Args:
        merge_fields: Ordered field names building the key; empty disables merging
        seed: Seed of the random key path when no key_source is given
        extended_rewrites: Also rewrite tactile switches and relays
        normalize_values: Use the canonical value of passive components' comments
    """

    def __init__(
        self,
        merge_fields: Iterable[str] = DEFAULT_MERGE_FIELDS,
        seed: Optional[int] = None,
        extended_rewrites: bool = False,
        normalize_values: bool = False,
        unit_normalizer: Optional[UnitNormalizer] = None,
        key_source: Optional[RandomKeySource] = None,
    ):
        self.merge_fields = normalize_merge_fields(merge_fields)
        self.extended_rewrites = extended_rewrites
        self.normalize_values = normalize_values
        self.unit_normalizer = unit_normalizer or UnitNormalizer()
        self.key_source = key_source or RandomKeySource(seed)

    def comment_rewrite(self, item: Item) -> Optional[str]:
        """Canonical comment label for the item's category, if any applies."""
        footprint = item.text(FieldKind.FOOTPRINT.value)
        if item.category is Category.CONNECTORS:
            return "Connector"
        if item.category is Category.DIODE and "LED" in footprint:
            return "LED"
        if self.extended_rewrites:
            lowered = footprint.lower()
            if item.category is Category.MECHANICALS and "tactile" in lowered:
                return "Tactile Switch"
            if item.category is Category.IC and ("rele" in lowered or "relay" in lowered):
                return "Relay"
        return None

    def compute_key(self, item: Item) -> KeyResult:
        """Derive the merge key and flags of a categorized item.

        Returns:
            KeyResult whose ``item`` is a new Item carrying the key, the flags,
            the recomputed quantity and any rewritten comment
        """
        quantity = len(item.designators)

        if not self.merge_fields:
            unique_id = self.key_source.next_key()
            keyed = item.evolve(
                quantity=quantity,
                unique_id=unique_id,
                is_not_populated=False,
                is_merged=False,
            )
            return KeyResult(unique_id, False, False, keyed)

        np_flag = any(is_not_populated(item.text(name)) for name in self.merge_fields)
        is_merged = False

        rewrite = self.comment_rewrite(item)
        if rewrite is not None:
            raw_comment = item.text(FieldKind.COMMENT.value)
            if is_not_populated(raw_comment):
                np_flag = True
                rewrite = f"NP {rewrite}"
            item = item.with_field(Comment(value=rewrite))
            is_merged = True

        contributions = [item.category.value]
        for name in self.merge_fields:
            value = item.text(name)
            if name == FieldKind.COMMENT.value and self.normalize_values and rewrite is None:
                canonical = self.unit_normalizer.canonical_value(value, item.category)
                if canonical is not None:
                    value = canonical
            contributions.append(escape_key_part(value))
        unique_id = KEY_SEPARATOR.join(contributions)

        keyed = item.evolve(
            quantity=quantity,
            unique_id=unique_id,
            is_not_populated=np_flag,
            is_merged=is_merged,
        )
        logger.debug("unique id >> %s (np=%s, rewritten=%s)", unique_id, np_flag, is_merged)
        return KeyResult(unique_id, np_flag, is_merged, keyed)

    def process(self, items: Iterable[Item]) -> List[Item]:
        """Categorize and key a sequence of freshly parsed items."""
        keyed = []
        for item in items:
            item = item.evolve(category=categorize(item))
            keyed.append(self.compute_key(item).item)
        return keyed
