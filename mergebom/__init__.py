from .parser import BomParser, LoadResult, MergeResult
from .normalizer import HeaderNormalizer
from .row_parser import parse_row
from .categorizer import categorize
from .keygen import KeyGenerator
from .merger import merge
from .projector import project
from .unit_normalizer import UnitNormalizer
from .config import MergeConfig
from .models import Bom, Category, Item, ItemsTable, ItemView
from .schema import STANDARD_HEADERS

__all__ = [
    "BomParser",
    "LoadResult",
    "MergeResult",
    "HeaderNormalizer",
    "parse_row",
    "categorize",
    "KeyGenerator",
    "merge",
    "project",
    "UnitNormalizer",
    "MergeConfig",
    "Bom",
    "Category",
    "Item",
    "ItemsTable",
    "ItemView",
    "STANDARD_HEADERS",
]
