"""Core execution logic for schedule conversion."""

from pathlib import Path
from typing import Iterable, Optional, Union

from .assembler import assemble
from .grid_parser import parse_grid
from .models import ConversionOptions, ConversionResult, RawGrid
from .reader import WorkbookReader
from .utils import SUPPORTED_EXTENSIONS


def convert_grid(grid: RawGrid, options: Optional[ConversionOptions] = None) -> ConversionResult:
    """
    Convert one decoded grid into sorted output rows.

    Never raises for a well-formed grid; the worst outcome is no rows and a
    non-empty issues list.
    """
    options = options or ConversionOptions()
    parsed = parse_grid(grid, year=options.year)
    rows = assemble(parsed, options)
    return ConversionResult(rows=rows, issues=list(parsed.issues))


def process_schedule(file_path: Union[str, Path], options: Optional[ConversionOptions] = None) -> ConversionResult:
    """
    Convert a single broadcast grid file into schedule rows.

    Args:
        file_path: Path to a .xlsx/.xlsm/.csv grid
        options: Region, colors and ordering for the rows

    Returns:
        ConversionResult with sorted rows and parse issues

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file format is not supported or cannot be decoded
    """
    try:
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if file_path.suffix.lower() not in SUPPORTED_EXTENSIONS:
            raise ValueError(
                f"Unsupported file format: {file_path.suffix}. "
                f"Supported formats: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
            )

        print(f"▶ Converting schedule: {file_path.name}")

        print("\n[1/3] Reading grid...")
        grid = WorkbookReader().read(file_path)
        print(f"✓ {grid.n_rows} rows x {grid.n_cols} columns, {len(grid.merges)} merged range(s)")

        print("\n[2/3] Parsing grid structure...")
        options = options or ConversionOptions()
        parsed = parse_grid(grid, year=options.year)
        for block in parsed.timezone_blocks:
            print(f"  → {block.timezone}: {len(block.days)} day(s), {len(block)} program(s), "
                  f"{block.slot_minutes} minute slots")
        if parsed.issues:
            print(f"  ⚠ {len(parsed.issues)} issue(s)")

        print("\n[3/3] Assembling rows...")
        rows = assemble(parsed, options)
        print(f"✓ Produced {len(rows)} row(s)")

        return ConversionResult(rows=rows, issues=list(parsed.issues))

    except (FileNotFoundError, ValueError) as e:
        print(f"\n✗ Validation error: {str(e)}")
        raise


def process_batch(
    file_paths: Iterable[Union[str, Path]],
    options: Optional[ConversionOptions] = None,
) -> ConversionResult:
    """
    Convert several grid files, one after the other.

    Rows are concatenated in file order. Parse issues are reported per file
    as "<name>: <issue>, <issue>"; a file that cannot be read is reported as
    "<name>: <error>" and the remaining files are still converted.
    """
    combined = ConversionResult()

    for file_path in file_paths:
        name = Path(file_path).name
        try:
            result = process_schedule(file_path, options)
        except (FileNotFoundError, ValueError) as e:
            combined.issues.append(f"{name}: {e}")
            continue

        combined.rows.extend(result.rows)
        if result.issues:
            combined.issues.append(f"{name}: {', '.join(result.issues)}")

    return combined
