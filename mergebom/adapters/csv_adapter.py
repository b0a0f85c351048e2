import csv
import io
import logging
from pathlib import Path
from typing import List, Tuple

import chardet

from ..errors import LoaderError

logger = logging.getLogger(__name__)

SNIFF_BYTES = 10000
SNIFF_CHARS = 4096
DELIMITERS = ",;\t"
FALLBACK_ENCODINGS = ("cp1252", "latin-1")
UTF8_BOM = b"\xef\xbb\xbf"


class CsvAdapter:
    """Reads CSV and TSV exports as raw rows.

    Altium and spreadsheet exports arrive in UTF-8 (with or without BOM) or a
    Windows code page, separated by commas, semicolons or tabs. Title lines
    above the header row are returned like any other row; locating the
    header is the parser's job.
    """

    def can_handle(self, file_path: str) -> bool:
        """Check if this adapter can handle the given file."""
        return Path(file_path).suffix.lower() in [".csv", ".tsv"]

    def _detect_encoding(self, raw_data: bytes) -> str:
        """Guess the encoding of a byte sample, UTF-8 BOM first."""
        if raw_data.startswith(UTF8_BOM):
            return "utf-8-sig"

        encoding = chardet.detect(raw_data[:SNIFF_BYTES]).get("encoding") or "utf-8"
        # an ascii guess only covers the sample
        if encoding.lower().replace("-", "") in ("utf8", "ascii"):
            return "utf-8"
        return encoding

    def _decode(self, file_path: str, raw_data: bytes) -> Tuple[str, str]:
        """Decode file bytes, trying the fallback code pages on failure.

        Returns:
            Tuple of (text, encoding used)
        """
        encoding = self._detect_encoding(raw_data)
        try:
            return raw_data.decode(encoding), encoding
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug("%s: %s decoding failed (%s), trying fallbacks", file_path, encoding, e)
            first_error = e

        for fallback in FALLBACK_ENCODINGS:
            try:
                return raw_data.decode(fallback), fallback
            except UnicodeDecodeError:
                continue
        raise LoaderError(str(file_path), f"could not decode file: {first_error}")

    def _detect_delimiter(self, sample: str, suffix: str) -> str:
        """Pick the delimiter of a text sample; ``.tsv`` is always tab."""
        if suffix == ".tsv":
            return "\t"

        try:
            return csv.Sniffer().sniff(sample, delimiters=DELIMITERS).delimiter
        except csv.Error:
            pass

        # Sniffer gives up on ragged rows; count on the first line instead
        first_line = sample.splitlines()[0] if sample else ""
        counts = {d: first_line.count(d) for d in DELIMITERS}
        best = max(counts, key=lambda d: counts[d])
        return best if counts[best] else ","

    def read(self, file_path: str) -> List[List[str]]:
        """Read a CSV file and return its raw rows.

        Args:
            file_path: Path to the CSV/TSV file

        Returns:
            List of rows, each a list of cell strings, header row included

        Raises:
            LoaderError: If the file is missing, cannot be decoded or parsed
        """
        path = Path(file_path)
        if not path.exists():
            raise LoaderError(str(file_path), "file not found")

        raw_data = path.read_bytes()
        if not raw_data:
            return []

        text, encoding = self._decode(file_path, raw_data)
        delimiter = self._detect_delimiter(text[:SNIFF_CHARS], path.suffix.lower())

        try:
            rows = list(csv.reader(io.StringIO(text, newline=""), delimiter=delimiter))
        except csv.Error as e:
            raise LoaderError(str(file_path), f"error parsing CSV: {e}")

        logger.debug("%s: read %d rows (encoding=%s, delimiter=%r)", file_path, len(rows), encoding, delimiter)
        return rows
