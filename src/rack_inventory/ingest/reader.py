# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Read ``.xlsx`` rack spreadsheets into a cell grid and ingest them.

Only this module touches the file system or the binary workbook format.
Everything downstream works on a plain list of rows.
"""

from __future__ import annotations

import asyncio
import logging
from io import BytesIO
from pathlib import Path
from typing import Any

from openpyxl import load_workbook

from rack_inventory.data.models import IngestionResult
from rack_inventory.errors import FileReadError, SpreadsheetDecodeError
from rack_inventory.ingest.assembler import RackAssembler
from rack_inventory.ingest.extractor import extract_rack_data

logger = logging.getLogger(__name__)


def read_grid(content: bytes, sheet_name: str | None = None) -> list[list[Any]]:
    """Decode workbook bytes into rows of cell values.

    Reads *sheet_name*, or the first sheet when omitted.  Trailing empty
    cells are dropped, so a blank row becomes ``[]``.

    Raises:
        SpreadsheetDecodeError: If the bytes are not a readable workbook
            or the requested sheet does not exist.
    """
    try:
        wb = load_workbook(BytesIO(content), read_only=True, data_only=True)
    except Exception as exc:
        raise SpreadsheetDecodeError(f"Could not decode spreadsheet: {exc}") from exc

    try:
        if sheet_name is None:
            ws = wb.worksheets[0]
        elif sheet_name in wb.sheetnames:
            ws = wb[sheet_name]
        else:
            available = ", ".join(wb.sheetnames)
            raise SpreadsheetDecodeError(
                f"Sheet '{sheet_name}' not found. Available: {available}"
            )

        grid: list[list[Any]] = []
        try:
            for values in ws.iter_rows(values_only=True):
                row = list(values)
                while row and (row[-1] is None or row[-1] == ""):
                    row.pop()
                grid.append(row)
        except Exception as exc:
            raise SpreadsheetDecodeError(f"Could not read sheet {ws.title}: {exc}") from exc
    finally:
        wb.close()

    logger.debug("Read %d rows from sheet %s", len(grid), ws.title)
    return grid


def parse_rack_bytes(content: bytes, sheet_name: str | None = None) -> IngestionResult:
    """Decode, extract and assemble one rack spreadsheet."""
    grid = read_grid(content, sheet_name)
    return RackAssembler().assemble(extract_rack_data(grid))


async def parse_rack_file(
    path: str | Path, sheet_name: str | None = None
) -> IngestionResult:
    """Read *path* without blocking the event loop, then ingest it.

    Raises:
        FileReadError: If the file cannot be read.
        SpreadsheetDecodeError: If the file is not a readable workbook.
    """
    file_path = Path(path).expanduser()
    try:
        content = await asyncio.to_thread(file_path.read_bytes)
    except OSError as exc:
        raise FileReadError(file_path, exc.strerror or str(exc)) from exc
    logger.info("Read %d bytes from %s", len(content), file_path)
    return parse_rack_bytes(content, sheet_name)


def load_rack_file(path: str | Path, sheet_name: str | None = None) -> IngestionResult:
    """Blocking wrapper around :func:`parse_rack_file` for scripts and the CLI."""
    return asyncio.run(parse_rack_file(path, sheet_name))
