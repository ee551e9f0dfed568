"""Schedule Engine Package for broadcast grid conversion."""

__version__ = "0.1.0"

from .main import convert_grid, process_schedule, process_batch
from .models import (
    ConversionOptions,
    ConversionResult,
    DayColumn,
    MergeRange,
    OutputRow,
    ParsedProgram,
    ParseResult,
    ProgramCell,
    RawGrid,
    TimezoneBlock,
    Weekday,
)
from .time_math import normalize_time, add_minutes
from .text_parser import parse_program_cell
from .grid_discovery import discover, ScanWindows
from .duration import analyze, infer_slot_duration
from .grid_parser import parse_grid
from .assembler import assemble, sort_rows
from .reader import WorkbookReader
from .exporter import save_rows
from .utils import validate_rows, is_supported_file

__all__ = [
    'convert_grid',
    'process_schedule',
    'process_batch',
    'ConversionOptions',
    'ConversionResult',
    'DayColumn',
    'MergeRange',
    'OutputRow',
    'ParsedProgram',
    'ParseResult',
    'ProgramCell',
    'RawGrid',
    'TimezoneBlock',
    'Weekday',
    'normalize_time',
    'add_minutes',
    'parse_program_cell',
    'discover',
    'ScanWindows',
    'analyze',
    'infer_slot_duration',
    'parse_grid',
    'assemble',
    'sort_rows',
    'WorkbookReader',
    'save_rows',
    'validate_rows',
    'is_supported_file',
]
