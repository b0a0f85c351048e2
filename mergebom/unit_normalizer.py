"""Component value normalization using Pint for engineering-prefix selection.

Passive component values arrive in many spellings ("100n", "100nF", "0,1uF",
"4k7", "4.7k"). ``UnitNormalizer.canonical_value`` parses the leading value of
a comment and renders it in one canonical engineering notation so that equal
parts produce equal merge keys.
"""

import re
from typing import Optional

from pint import UnitRegistry

from .models import Category
from .schema import CATEGORY_UNITS

# Initialize Pint unit registry
ureg = UnitRegistry()

# Leading number, optional multiplier letter (RKM style allows it in place of
# the decimal point: "4k7"), optional trailing digits, then the unit text.
VALUE_PATTERN = re.compile(r"^(\d*(?:\.\d+)?)([GMKkRmunpµ]?)(\d*)(.*)$")
UNIT_TEXT_PATTERN = re.compile(r"^[A-Za-zΩµ]*$")
BARE_NUMBER_PATTERN = re.compile(r"^\d+(?:\.\d+)?$")

# Unit text allowed after the multiplier when the unit is a separate word
SPACED_UNIT_WORDS = {"", "f", "h", "hz", "ohm", "ohms", "ω"}

MULTIPLIER_EXPONENTS = {
    "G": 9,
    "M": 6,
    "K": 3,
    "k": 3,
    "R": 0,
    "": 0,
    "m": -3,
    "u": -6,
    "µ": -6,
    "n": -9,
    "p": -12,
}

PREFIX_LETTERS = {
    "tera": "T",
    "giga": "G",
    "mega": "M",
    "kilo": "k",
    "": "",
    "milli": "m",
    "micro": "u",
    "nano": "n",
    "pico": "p",
    "femto": "f",
}

UNIT_SYMBOLS = {
    "ohm": "ohm",
    "farad": "F",
    "henry": "H",
    "hertz": "Hz",
}


class UnitNormalizer:
    """Normalizes component values held in comments to engineering notation."""

    def __init__(self):
        """Initialize the unit normalizer."""
        self.ureg = ureg

    def unit_for_category(self, category: Category) -> Optional[str]:
        """Pint unit name of a category's value, None for non-passives."""
        return CATEGORY_UNITS.get(category.value)

    def _read_token(self, token: str, unit_words=None) -> Optional[float]:
        """Read one value token such as "100nF", "4k7" or "0.33R".

        With ``unit_words`` the unit text after the multiplier must be one of
        them (lower-cased); otherwise any run of letters is accepted.
        """
        match = VALUE_PATTERN.match(token)
        if not match:
            return None
        left, multiplier, right, unit_text = match.groups()
        if not left and not right:
            return None
        if "." in left and right:
            return None
        if unit_words is not None:
            if unit_text.lower() not in unit_words:
                return None
        elif not UNIT_TEXT_PATTERN.match(unit_text):
            return None

        if right:
            number = float(f"{left or '0'}.{right}")
        else:
            number = float(left)
        return number * 10 ** MULTIPLIER_EXPONENTS[multiplier]

    def parse_value(self, comment: str) -> Optional[float]:
        """Parse the leading component value of a comment.

        A bare number followed by a unit word ("100 nF", "4.7 k") is read as
        one value.

        Examples:
            parse_value("100nF") -> 1e-07
            parse_value("100 nF") -> 1e-07
            parse_value("4k7") -> 4700.0
            parse_value("0.33R") -> 0.33
            parse_value("4.7mH inductor") -> 0.0047
            parse_value("NP") -> None

        Returns:
            The value in base units, or None if no value can be read
        """
        if not comment:
            return None
        text = comment.strip()
        if not text or text.upper().startswith("NP"):
            return None

        words = text.split()
        token = words[0].rstrip(",;").replace(",", ".")

        if BARE_NUMBER_PATTERN.match(token) and len(words) > 1:
            joined = self._read_token(token + words[1].rstrip(",;"), SPACED_UNIT_WORDS)
            if joined is not None:
                return joined
        return self._read_token(token)

    def to_engineering(self, value: float, unit: str) -> Optional[str]:
        """Render a base-unit value with an engineering prefix.

        Resistances use RKM style ("4k7", "100R", "1M"); other units append
        the unit symbol ("100nF", "12MHz", "4.7uH").
        """
        symbol = UNIT_SYMBOLS.get(unit)
        if symbol is None:
            return None
        if value == 0:
            return "0R" if unit == "ohm" else f"0{symbol}"

        # Trim float noise first so 999.9999e-9 does not stay in nano
        value = float(f"{value:.9g}")
        quantity = self.ureg.Quantity(value, unit).to_compact()
        unit_name = str(quantity.units)
        if not unit_name.endswith(unit):
            return None
        letter = PREFIX_LETTERS.get(unit_name[: -len(unit)])
        if letter is None:
            return None

        number = f"{round(quantity.magnitude, 6):g}"
        if unit != "ohm":
            return f"{number}{letter}{symbol}"
        if letter in ("G", "M", "k"):
            if "." in number:
                return number.replace(".", letter)
            return f"{number}{letter}"
        if letter:
            return f"{number}{letter}{symbol}"
        return f"{number}R"

    def canonical_value(self, comment: str, category: Category) -> Optional[str]:
        """Canonical value of a passive component's comment.

        Returns:
            The normalized value string, or None when the category has no
            unit or the comment holds no readable value
        """
        unit = self.unit_for_category(category)
        if unit is None:
            return None
        value = self.parse_value(comment)
        if value is None:
            return None
        return self.to_engineering(value, unit)
