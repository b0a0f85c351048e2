"""Error taxonomy for the merge engine.

Only ``LoaderError`` and ``ConfigError`` ever reach a caller. Header, field and
category errors are raised and handled inside the pipeline: the column, cell or
category lookup is dropped and processing continues.
"""


class MergeBomError(Exception):
    """Base class for all mergebom errors."""


class HeaderError(MergeBomError, ValueError):
    """Raised when a raw column label maps to no canonical header."""

    def __init__(self, raw_label: str):
        self.raw_label = raw_label
        super().__init__(f"Invalid header key: {raw_label}")


class FieldParseError(MergeBomError, ValueError):
    """Raised when a cell under a known header cannot become a field."""

    def __init__(self, header: str, raw: str, reason: str = "empty cell"):
        self.header = header
        self.raw = raw
        self.reason = reason
        super().__init__(f"Invalid field {header} -> {raw!r}: {reason}")


class CategoryError(MergeBomError, ValueError):
    """Raised when no category can be derived from a designator."""


class LoaderError(MergeBomError):
    """Raised when an input file cannot be decoded into rows."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not load {path}: {reason}")


class ConfigError(MergeBomError, ValueError):
    """Raised for an invalid merge configuration."""
