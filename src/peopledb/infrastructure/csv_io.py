"""
CSV file reading and writing utilities.

This module knows how to get rows in and out of a CSV file. It does not know
what the rows mean; turning rows into records is the store's job.
"""

import csv
import os
from pathlib import Path
from typing import Iterable, Iterator

from .logging_config import get_logger

logger = get_logger(__name__)


class CsvReadError(ValueError):
    """The file is not valid CSV at the given line."""

    def __init__(self, line: int, message: str):
        super().__init__(f"line {line}: {message}")
        self.line = line
        self.message = message


def iter_csv_rows(file_path: Path) -> Iterator[tuple[int, list[str]]]:
    """
    Iterate over the rows of a CSV file.

    Blank lines are skipped. The header, if any, is yielded like any other row.

    Args:
        file_path: Path to the CSV file.

    Yields:
        Tuples of (line number, row values). The line number is the 1-based
        physical line on which the row ends.

    Raises:
        OSError: If the file cannot be opened or read.
        CsvReadError: If the csv module cannot parse a row.
    """
    with open(file_path, "r", encoding="utf-8-sig", newline="") as f:
        reader = csv.reader(f)
        while True:
            try:
                row = next(reader)
            except StopIteration:
                return
            except csv.Error as e:
                raise CsvReadError(reader.line_num, str(e)) from e

            if not row:
                continue
            yield reader.line_num, row


def write_csv_atomic(file_path: Path, header: list[str], rows: Iterable[list[str]]) -> int:
    """
    Write a CSV file so that readers see either the old or the new content.

    The data goes to a temporary file in the same directory, which then
    replaces the target. If anything fails the target is left untouched.

    Args:
        file_path: Destination path.
        header: Header row.
        rows: Data rows.

    Returns:
        Number of data rows written.

    Raises:
        OSError: If the temporary file cannot be written or moved into place.
    """
    temp_file = file_path.with_name(file_path.name + ".tmp")
    count = 0

    try:
        with open(temp_file, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerow(header)
            for row in rows:
                writer.writerow(row)
                count += 1
            f.flush()
            os.fsync(f.fileno())

        # Replace old file with new file atomically
        temp_file.replace(file_path)
    except BaseException:
        try:
            temp_file.unlink(missing_ok=True)
        except OSError as cleanup_error:
            logger.warning(f"Could not remove temporary file {temp_file}: {cleanup_error}")
        raise

    logger.debug(f"Wrote {count} rows to {file_path.name}")
    return count
