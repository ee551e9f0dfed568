"""Decode spreadsheet files into raw grids with merge metadata."""

import csv
import logging
import zipfile
from pathlib import Path
from typing import Union

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from .models import MergeRange, RawGrid

logger = logging.getLogger(__name__)


class WorkbookReader:
    """Reads the first sheet of a workbook, or a CSV file, into a RawGrid."""

    def __init__(self):
        """Initialize the reader."""
        self.supported_workbook_formats = {'.xlsx', '.xlsm'}
        self.supported_text_formats = {'.csv'}

    @property
    def supported_formats(self) -> set[str]:
        return self.supported_workbook_formats | self.supported_text_formats

    def read(self, file_path: Union[str, Path]) -> RawGrid:
        """
        Decode a spreadsheet file.

        Args:
            file_path: Path to the spreadsheet file

        Returns:
            RawGrid of the first sheet

        Raises:
            ValueError: If the format is unsupported or the file cannot be decoded
        """
        file_path = Path(file_path)
        extension = file_path.suffix.lower()

        if extension in self.supported_workbook_formats:
            return self._read_workbook(file_path)
        elif extension in self.supported_text_formats:
            return self._read_csv(file_path)
        else:
            raise ValueError(f"Unsupported file format: {extension}")

    def _read_workbook(self, file_path: Path) -> RawGrid:
        """
        Load the first worksheet with cell values and merged ranges.

        Args:
            file_path: Path to an .xlsx/.xlsm workbook

        Returns:
            RawGrid with 0-based merge ranges
        """
        try:
            # Merged ranges are not available in read-only mode
            workbook = load_workbook(file_path, data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, OSError, KeyError, ValueError) as e:
            raise ValueError(f"Error reading workbook {file_path}: {e}") from e

        try:
            if not workbook.worksheets:
                return RawGrid()
            sheet = workbook.worksheets[0]
            if len(workbook.worksheets) > 1:
                logger.info("%s: reading first sheet %r of %d", file_path.name, sheet.title, len(workbook.worksheets))

            cells = [list(row) for row in sheet.iter_rows(values_only=True)]
            merges = [
                MergeRange(
                    start_row=r.min_row - 1,
                    start_col=r.min_col - 1,
                    end_row=r.max_row - 1,
                    end_col=r.max_col - 1,
                )
                for r in sheet.merged_cells.ranges
            ]
        finally:
            workbook.close()

        logger.debug("%s: %d rows, %d merged ranges", file_path.name, len(cells), len(merges))
        return RawGrid(cells=cells, merges=merges)

    def _read_csv(self, file_path: Path) -> RawGrid:
        """CSV files carry no merges; every cell is its own slot."""
        try:
            with open(file_path, newline='', encoding='utf-8-sig') as f:
                cells = [list(row) for row in csv.reader(f)]
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise ValueError(f"Error reading CSV {file_path}: {e}") from e

        return RawGrid(cells=cells)
