"""Utility functions for Excel cell operations."""
from openpyxl.cell.cell import MergedCell, Cell
from openpyxl.worksheet.worksheet import Worksheet
from typing import Any


def is_empty_value(value: Any) -> bool:
    """Check if a raw value is empty or contains only whitespace."""
    return value is None or (isinstance(value, str) and value.strip() == "")


def merged_top_left(ws: Worksheet, row: int, column: int) -> Cell:
    """Get the top-left cell of the merged range covering a coordinate."""
    for merged_range in ws.merged_cells.ranges:
        if merged_range.min_row <= row <= merged_range.max_row and \
                merged_range.min_col <= column <= merged_range.max_col:
            return ws.cell(row=merged_range.min_row, column=merged_range.min_col)
    return ws.cell(row=row, column=column)


def get_cell_value(ws: Worksheet, row: int, column: int) -> Any:
    """Safely get a cell value, reading merged cells from their top-left."""
    # ws.cell() would grow the sheet and ws.max_row scans every cell
    cell = ws._cells.get((row, column))
    if cell is None:
        return None
    if isinstance(cell, MergedCell):
        cell = merged_top_left(ws, row, column)
    return cell.value
