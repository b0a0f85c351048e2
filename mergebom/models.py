"""Data model for merged Bills of Materials.

An ``Item`` holds a closed family of ``Field`` types keyed by their normalized
label. Items flow through categorization, key generation and merging as values:
every stage returns a new ``Item`` rather than editing the one it was given.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, ClassVar, Dict, Iterable, Iterator, List, Optional, Tuple

from .schema import CATEGORY_LETTERS, CATEGORY_RANKS, FIELD_LABELS, STANDARD_HEADERS


def unique(values: Iterable[str]) -> Tuple[str, ...]:
    """De-duplicate while keeping the first occurrence order."""
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return tuple(result)


class Category(Enum):
    """Component category derived from the designator prefix."""

    CONNECTORS = "Connectors"
    MECHANICALS = "Mechanicals"
    FUSES = "Fuses"
    RESISTORS = "Resistors"
    CAPACITORS = "Capacitors"
    DIODE = "Diode"
    INDUCTORS = "Inductors"
    TRANSISTOR = "Transistor"
    TRANSFORMERS = "Transformers"
    CRISTAL = "Cristal"
    IC = "IC"
    INVALID = "Invalid"

    @property
    def rank(self) -> int:
        """Output grouping rank, Connectors highest and Invalid lowest."""
        return CATEGORY_RANKS[self.value]

    @property
    def banner(self) -> str:
        """Group separator text used by the spreadsheet writer."""
        return f"** {CATEGORY_LETTERS[self.value]} {self.value} **"

    def __str__(self) -> str:
        return self.value


class FieldKind(Enum):
    """Canonical field identifiers."""

    DESIGNATOR = "designator"
    COMMENT = "comment"
    FOOTPRINT = "footprint"
    DESCRIPTION = "description"
    LAYER = "layer"
    MOUNT_TECHNOLOGY = "mounttechnology"
    EXTRA = "extra"
    INVALID = "invalid"

    @property
    def label(self) -> str:
        return FIELD_LABELS.get(self.value, self.value.title())


@dataclass(frozen=True)
class CanonicalHeader:
    """A recognized column: its field kind plus the display label.

    For ``EXTRA`` headers the label is the upper-cased identity of the column,
    e.g. ``CODE FARNELL``, and doubles as the field key.
    """

    kind: FieldKind
    label: str

    @property
    def key(self) -> str:
        if self.kind is FieldKind.EXTRA:
            return self.label
        return self.kind.value


# =============================================================================
# FIELDS
# =============================================================================

@dataclass(frozen=True)
class Field:
    """Base of the closed field family. Never instantiated directly."""

    kind: ClassVar[FieldKind] = FieldKind.INVALID

    @property
    def key(self) -> str:
        return self.kind.value

    @property
    def text(self) -> str:
        raise NotImplementedError

    def union(self, other: "Field") -> "Field":
        """Combine with a field of the same key coming from a colliding item."""
        raise NotImplementedError

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class TextField(Field):
    """Single-valued free text; first value seen wins on union."""

    value: str = ""

    @property
    def text(self) -> str:
        return self.value

    def union(self, other: Field) -> Field:
        return self


@dataclass(frozen=True)
class ListField(Field):
    """Ordered set of strings; union appends unseen values."""

    values: Tuple[str, ...] = ()

    @property
    def text(self) -> str:
        return ", ".join(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def union(self, other: Field) -> Field:
        if not isinstance(other, ListField) or other.key != self.key:
            raise TypeError(f"Cannot merge {other.key} into {self.key}")
        return replace(self, values=unique(self.values + other.values))


@dataclass(frozen=True)
class Designator(ListField):
    kind: ClassVar[FieldKind] = FieldKind.DESIGNATOR


@dataclass(frozen=True)
class Comment(TextField):
    kind: ClassVar[FieldKind] = FieldKind.COMMENT


@dataclass(frozen=True)
class Footprint(TextField):
    kind: ClassVar[FieldKind] = FieldKind.FOOTPRINT


@dataclass(frozen=True)
class Description(TextField):
    kind: ClassVar[FieldKind] = FieldKind.DESCRIPTION


@dataclass(frozen=True)
class Layer(ListField):
    kind: ClassVar[FieldKind] = FieldKind.LAYER


@dataclass(frozen=True)
class MountTechnology(ListField):
    kind: ClassVar[FieldKind] = FieldKind.MOUNT_TECHNOLOGY


@dataclass(frozen=True)
class Extra(ListField):
    """Dynamically discovered supplier/note column, keyed by its label."""

    kind: ClassVar[FieldKind] = FieldKind.EXTRA
    label: str = ""

    @property
    def key(self) -> str:
        return self.label


@dataclass(frozen=True)
class Invalid(Field):
    """Diagnostic record of a dropped cell. Never merged or projected."""

    kind: ClassVar[FieldKind] = FieldKind.INVALID
    header: str = ""
    raw: str = ""
    reason: str = ""

    @property
    def text(self) -> str:
        return self.raw

    def union(self, other: Field) -> Field:
        raise TypeError("Invalid fields are never merged")


FIELD_TYPES: Dict[FieldKind, type] = {
    FieldKind.DESIGNATOR: Designator,
    FieldKind.COMMENT: Comment,
    FieldKind.FOOTPRINT: Footprint,
    FieldKind.DESCRIPTION: Description,
    FieldKind.LAYER: Layer,
    FieldKind.MOUNT_TECHNOLOGY: MountTechnology,
    FieldKind.EXTRA: Extra,
    FieldKind.INVALID: Invalid,
}


# =============================================================================
# ITEMS AND BOMS
# =============================================================================

@dataclass
class Item:
    """One BOM line."""

    fields: Dict[str, Field] = field(default_factory=dict)
    quantity: int = 0
    unique_id: str = ""
    is_merged: bool = False
    is_not_populated: bool = False
    category: Category = Category.INVALID
    source: str = ""
    invalid: Tuple[Invalid, ...] = ()

    def get(self, key: str) -> Optional[Field]:
        return self.fields.get(key)

    def text(self, key: str) -> str:
        """String value of a field, empty when the item lacks it."""
        f = self.fields.get(key)
        return f.text if f is not None else ""

    @property
    def designators(self) -> Tuple[str, ...]:
        f = self.fields.get(FieldKind.DESIGNATOR.value)
        if isinstance(f, Designator):
            return f.values
        return ()

    @property
    def extras(self) -> List[Extra]:
        return [f for f in self.fields.values() if isinstance(f, Extra)]

    def with_field(self, new_field: Field) -> "Item":
        """Return a copy with ``new_field`` set under its key."""
        fields = dict(self.fields)
        fields[new_field.key] = new_field
        return replace(self, fields=fields)

    def evolve(self, **changes: Any) -> "Item":
        """Return a copy with the given attributes replaced."""
        if "fields" not in changes:
            changes["fields"] = dict(self.fields)
        return replace(self, **changes)


@dataclass
class Bom:
    """Ordered sequence of items loaded from one or more files."""

    items: List[Item] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)

    @classmethod
    def concat(cls, boms: Iterable["Bom"]) -> "Bom":
        items: List[Item] = []
        for bom in boms:
            items.extend(bom.items)
        return cls(items=items)

    def merge(self) -> "Bom":
        """Collapse items sharing a merge key into a new Bom."""
        from .merger import merge
        return merge(self)

    def to_table(self, sort_extra_headers: bool = False) -> "ItemsTable":
        from .projector import project
        return project(self, sort_extra_headers=sort_extra_headers)


@dataclass
class ItemView:
    """A projected table row; ``fields`` is aligned with the table headers."""

    quantity: int
    unique_id: str
    is_merged: bool
    is_not_populated: bool
    category: str
    fields: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "quantity": self.quantity,
            "unique_id": self.unique_id,
            "is_merged": self.is_merged,
            "is_not_populated": self.is_not_populated,
            "category": self.category,
            "fields": list(self.fields),
        }


@dataclass
class ItemsTable:
    headers: List[str] = field(default_factory=lambda: list(STANDARD_HEADERS))
    rows: List[ItemView] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    def to_rows(self) -> List[List[str]]:
        """Header row followed by the data rows, as plain cell strings."""
        return [list(self.headers)] + [list(row.fields) for row in self.rows]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "headers": list(self.headers),
            "rows": [row.to_dict() for row in self.rows],
        }
