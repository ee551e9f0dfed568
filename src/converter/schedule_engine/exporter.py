"""Export output rows to CSV, JSON and XLSX files."""

import csv
import json
from pathlib import Path
from typing import Sequence, Union

from openpyxl import Workbook

from .models import OUTPUT_COLUMNS, OutputRow

EXPORT_FORMATS = {'.csv', '.json', '.xlsx'}


def to_csv(rows: Sequence[OutputRow], output_path: Union[str, Path]) -> None:
    """Write rows as CSV with the output column header."""
    with open(output_path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=OUTPUT_COLUMNS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row.to_dict())


def to_json(rows: Sequence[OutputRow], output_path: Union[str, Path]) -> None:
    """
    Save rows to a JSON file.

    Args:
        rows: Rows to save
        output_path: Path to output JSON file
    """
    data = [row.to_dict() for row in rows]

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def to_xlsx(rows: Sequence[OutputRow], output_path: Union[str, Path]) -> None:
    """Write rows to a single "Schedule" sheet."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Schedule"
    sheet.append(list(OUTPUT_COLUMNS))
    for row in rows:
        sheet.append(list(row.to_dict().values()))
    workbook.save(output_path)


def save_rows(rows: Sequence[OutputRow], output_path: Union[str, Path]) -> Path:
    """
    Export rows in the format named by the output file's suffix.

    Raises:
        ValueError: If the suffix is not one of .csv, .json, .xlsx
    """
    output_path = Path(output_path)
    extension = output_path.suffix.lower()

    if extension == '.csv':
        to_csv(rows, output_path)
    elif extension == '.json':
        to_json(rows, output_path)
    elif extension == '.xlsx':
        to_xlsx(rows, output_path)
    else:
        raise ValueError(
            f"Unsupported export format: {extension}. "
            f"Supported formats: {', '.join(sorted(EXPORT_FORMATS))}"
        )

    return output_path
