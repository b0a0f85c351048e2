"""Command line entry point: ``mergebom INPUT... -o OUTPUT``."""

import argparse
import logging
import sys
from typing import List, Optional

from .config import DEFAULT_MERGE_FIELDS, MergeConfig
from .errors import ConfigError
from .parser import BomParser
from .schema import MERGE_FIELD_NAMES
from .writer import export_table

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mergebom",
        description="Merge BOM spreadsheets into one deduplicated, categorized parts list",
    )
    parser.add_argument("inputs", nargs="+", help="BOM files (.csv, .tsv, .xlsx)")
    parser.add_argument("-o", "--output", required=True, help="Output file (.xlsx, .csv or .json)")
    parser.add_argument(
        "-k",
        "--merge-key",
        nargs="+",
        metavar="FIELD",
        default=None,
        help=f"Fields building the merge key (default: {' '.join(DEFAULT_MERGE_FIELDS)}; "
             f"allowed: {', '.join(MERGE_FIELD_NAMES)})",
    )
    parser.add_argument("--no-merge", action="store_true", help="Keep every row as a distinct item")
    parser.add_argument("--sort-extra-headers", action="store_true",
                        help="Sort Note/Code columns alphabetically instead of discovery order")
    parser.add_argument("--extended-rewrites", action="store_true",
                        help="Also collapse tactile switches and relays by footprint")
    parser.add_argument("--normalize-values", action="store_true",
                        help="Compare passive component values in engineering notation")
    parser.add_argument("--expand-ranges", action="store_true",
                        help="Expand designator ranges such as R1-R4")
    parser.add_argument("--seed", type=int, default=None, help="Seed for --no-merge keys")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase log verbosity (-v info, -vv debug)")
    return parser


def config_from_args(args: argparse.Namespace) -> MergeConfig:
    merge_fields = DEFAULT_MERGE_FIELDS if args.merge_key is None else tuple(args.merge_key)
    if args.no_merge:
        merge_fields = ()
    return MergeConfig(
        merge_fields=merge_fields,
        sort_extra_headers=args.sort_extra_headers,
        extended_rewrites=args.extended_rewrites,
        normalize_values=args.normalize_values,
        expand_designator_ranges=args.expand_ranges,
        seed=args.seed,
    )


def main(argv: Optional[List[str]] = None) -> int:
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = config_from_args(args)
    except ConfigError as e:
        arg_parser.error(str(e))

    result = BomParser(config).merge_files(args.inputs)
    output = export_table(result.table, args.output)

    print(f"✓ {len(result.table.rows)} rows written to {output}")
    if result.skipped_files:
        print(f"⚠️  Skipped {result.skipped} file(s): {', '.join(result.skipped_files)}")
    if result.skipped == len(args.inputs):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
