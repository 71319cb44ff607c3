"""Domain-specific exceptions."""
from typing import Any, Optional

from openpyxl.utils import get_column_letter


class SheetBinderError(Exception):
    """Base exception for sheet binding operations."""
    pass


class ConfigurationError(SheetBinderError):
    """Raised when a bindable type is declared incorrectly."""
    pass


class InstantiationError(SheetBinderError):
    """Raised when a target type cannot be constructed without arguments."""
    pass


class FieldAccessError(SheetBinderError):
    """Raised when a value cannot be assigned to a member."""
    pass


class CellExtractionError(SheetBinderError):
    """Raised when a single cell cannot be converted to its member type."""

    def __init__(
        self,
        message: str,
        sheet_name: str,
        row: int,
        column: int,
        value_type: Optional[type] = None,
        value: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.sheet_name = sheet_name
        self.row = row
        self.column = column
        self.value_type = value_type
        self.value = value

    @property
    def coordinate(self) -> str:
        """A1-style coordinate of the failing cell."""
        return cell_coordinate(self.row, self.column)


def cell_coordinate(row: int, column: int) -> str:
    """Format a 1-based row/column pair in A1 notation."""
    if row < 1 or column < 1:
        return f"R{row}C{column}"
    return f"{get_column_letter(column)}{row}"
