"""Command-line interface for schedule conversion."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import build_options
from .database import create_tables, get_db_engine, save_rows
from .exporter import save_rows as export_rows
from .main import process_batch
from .utils import format_schedule_report, is_supported_file, validate_rows


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="fpc-convert",
        description="Convert broadcast grid spreadsheets into a flat, sorted schedule.",
    )
    p.add_argument("files", nargs="+", help="Grid files (.xlsx, .xlsm, .csv)")
    p.add_argument("--config", type=Path, default=None, help="Settings file (.toml or .json)")
    p.add_argument("--region", default=None, help="Region code written on every row (default: ROA)")
    p.add_argument("--timezone-order", dest="timezone_order", default=None,
                   help="Comma-separated timezone sort order (default: WAT,CAT)")
    p.add_argument("--text-color", dest="text_color", default=None, help="Text color (default: #FFFFFF)")
    p.add_argument("--bg-color", dest="bg_color", default=None, help="Background color (default: #1A1A1A)")
    p.add_argument("--no-merge-slots", dest="merge_slots", action="store_const", const=False, default=None,
                   help="Accepted for compatibility; durations always follow merged cells")
    p.add_argument("--day-start-hour", dest="day_start_hour", type=int, default=None,
                   help="Broadcast day start hour (default: hour of the first program)")
    p.add_argument("--year", type=int, default=None, help="Year for day headers without one")
    p.add_argument("--output", type=Path, default=None,
                   help="Output file; format from suffix .csv, .json or .xlsx")
    p.add_argument("--db", type=Path, default=None, help="Also store rows in this SQLite database")
    p.add_argument("--verbose", action="store_true", help="Log parsing decisions")
    return p


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for command-line execution."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    unsupported = [f for f in args.files if not is_supported_file(f)]
    if unsupported:
        print(f"\n✗ Error: Unsupported file format: {', '.join(unsupported)}")
        print("  Supported formats: XLSX, XLSM, CSV")
        return 1

    try:
        options = build_options(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"\n✗ Config Error: {e}")
        return 1

    output_path = args.output or Path(Path(args.files[0]).stem + "_schedule.csv")

    result = process_batch(args.files, options)

    if result.issues:
        print("\n" + "=" * 70)
        print("ISSUES")
        print("=" * 70)
        for issue in result.issues:
            print(f"⚠ {issue}")

    warnings = validate_rows(result.rows)
    if warnings:
        print("\n" + "=" * 70)
        print("VALIDATION WARNINGS")
        print("=" * 70)
        for warning in warnings:
            print(f"⚠ {warning}")

    if not result.rows:
        print("\n✗ No schedule rows were produced")
        return 1

    print("\n" + "=" * 70)
    print("SUMMARY")
    print("=" * 70)
    print(format_schedule_report(result.rows))

    try:
        export_rows(result.rows, output_path)
    except (ValueError, OSError) as e:
        print(f"\n✗ Export Error: {e}")
        return 1
    print(f"\n✓ Saved to: {output_path}")

    if args.db:
        engine = get_db_engine(args.db)
        create_tables(engine)
        source_id = save_rows(engine, ", ".join(str(f) for f in args.files), result.rows)
        print(f"✓ Stored {len(result.rows)} row(s) in {args.db} (source id {source_id})")

    return 0


if __name__ == "__main__":
    sys.exit(main())
