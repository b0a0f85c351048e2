import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .adapters import CsvAdapter, ExcelAdapter
from .config import MergeConfig
from .errors import LoaderError
from .keygen import KeyGenerator, RandomKeySource
from .models import Bom, ItemsTable
from .normalizer import HeaderNormalizer
from .row_parser import parse_rows

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    bom: Bom
    skipped_files: List[str] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        return len(self.skipped_files)


@dataclass
class MergeResult:
    table: ItemsTable
    skipped_files: List[str] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        return len(self.skipped_files)


class BomParser:
    """Loads BOM files and runs them through the merge pipeline.

    Each file is read by the first registered adapter that can handle it,
    its header row is located and normalized, and its rows become keyed
    items. Files are processed in the order given; that order decides which
    row represents a merged group.
    """

    def __init__(self, config: Optional[MergeConfig] = None, register_defaults: bool = True):
        """Initialize the BOM parser.

        Args:
            config: Merge settings (default: ``MergeConfig()``)
            register_defaults: Register the CSV and Excel adapters (default: True)
        """
        self.config = config or MergeConfig()
        self.adapters = []
        self.normalizer = HeaderNormalizer()
        self.key_source = RandomKeySource(self.config.seed)
        if register_defaults:
            self.register_adapter(CsvAdapter())
            self.register_adapter(ExcelAdapter())

    def register_adapter(self, adapter):
        """Register a file adapter for parsing.

        Args:
            adapter: Adapter instance with can_handle() and read() methods
        """
        self.adapters.append(adapter)

    def _find_adapter(self, file_path: str):
        for adapter in self.adapters:
            if adapter.can_handle(file_path):
                return adapter
        return None

    def read_rows(self, file_path: str) -> List[List[str]]:
        """Read the raw rows of a file.

        Raises:
            LoaderError: If no adapter handles the file or reading fails
        """
        adapter = self._find_adapter(file_path)
        if adapter is None:
            raise LoaderError(str(file_path), f"unsupported file type {Path(file_path).suffix!r}")
        try:
            return adapter.read(str(file_path))
        except OSError as e:
            raise LoaderError(str(file_path), str(e))

    def parse_file(self, file_path: str) -> Bom:
        """Parse one file into a Bom of categorized, keyed items.

        Raises:
            LoaderError: If the file cannot be read
        """
        rows = self.read_rows(file_path)
        return self.parse_table(rows, source=str(file_path))

    def parse_table(self, rows: Sequence[Sequence[str]], source: str = "") -> Bom:
        """Parse already materialized rows (header row included) into a Bom."""
        header_index, header_map = self.normalizer.find_header_row(rows)
        if header_index < 0:
            logger.warning("%s: no header row found", source or "<rows>")
            return Bom()

        items = parse_rows(
            rows[header_index + 1:],
            header_map,
            expand_ranges=self.config.expand_designator_ranges,
            source=source,
        )
        generator = KeyGenerator(
            merge_fields=self.config.merge_fields,
            key_source=self.key_source,
            extended_rewrites=self.config.extended_rewrites,
            normalize_values=self.config.normalize_values,
        )
        bom = Bom(items=generator.process(items))
        logger.info("%s: loaded %d items", source or "<rows>", len(bom))
        return bom

    def load(self, paths: Sequence[str]) -> LoadResult:
        """Load several files into one Bom, skipping files that fail.

        A failing file never aborts the others; it is reported in
        ``skipped_files``.
        """
        # one key source per run keeps random keys distinct across files
        self.key_source = RandomKeySource(self.config.seed)
        boms = []
        skipped: List[str] = []
        for path in paths:
            try:
                boms.append(self.parse_file(str(path)))
            except LoaderError as e:
                logger.warning("%s, skip it", e)
                skipped.append(str(path))
        return LoadResult(bom=Bom.concat(boms), skipped_files=skipped)

    def merge_files(self, paths: Sequence[str]) -> MergeResult:
        """Load, merge and project a set of files into the output table."""
        result = self.load(paths)
        merged = result.bom.merge()
        table = merged.to_table(sort_extra_headers=self.config.sort_extra_headers)
        return MergeResult(table=table, skipped_files=result.skipped_files)

    def get_mapping_report(self, file_path: str) -> Dict[str, Any]:
        """Get a report of how columns from a file map to canonical headers.

        Args:
            file_path: Path to the BOM file

        Returns:
            Dictionary with mapping information including mapped and unmapped columns
        """
        rows = self.read_rows(file_path)
        header_index, _ = self.normalizer.find_header_row(rows)
        if header_index < 0:
            return {"mapped": {}, "unmapped": [], "header_row": None}
        report = self.normalizer.get_mapping_report(rows[header_index])
        report["header_row"] = header_index
        return report
