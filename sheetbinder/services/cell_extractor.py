"""Conversion of worksheet cells into typed scalar values."""
import logging
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional

from openpyxl.worksheet.worksheet import Worksheet

from sheetbinder.config import config, ExtractionConfig
from sheetbinder.domain.exceptions import CellExtractionError, ConfigurationError, cell_coordinate
from sheetbinder.domain.models import CellResult
from sheetbinder.utils.cell_helpers import get_cell_value, is_empty_value

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[CellExtractionError], None]

_ZERO_VALUES = {
    int: 0,
    float: 0.0,
    Decimal: Decimal(0),
    bool: False,
}


def _cell_error(
    reason: str,
    sheet_name: str,
    row: int,
    column: int,
    value_type: type,
    raw: Any = None,
) -> CellExtractionError:
    """Build an error naming the sheet and the A1 coordinate of the cell."""
    message = f"{reason} in sheet {sheet_name} at {cell_coordinate(row, column)}"
    if raw is not None:
        message += f": {raw!r}"
    return CellExtractionError(message, sheet_name, row, column, value_type, raw)


class CellValueExtractor:
    """Service for reading typed values out of an openpyxl worksheet.

    Rows and columns are 1-based, as in the worksheet itself.
    """

    SUPPORTED_TYPES = (str, int, float, Decimal, bool, datetime, date)

    def __init__(self, extraction_config: Optional[ExtractionConfig] = None):
        self.config = extraction_config or config.extraction

    def get_cell_value(
        self,
        sheet: Worksheet,
        sheet_name: str,
        value_type: type,
        row: int,
        column: int,
        zero_if_null: bool,
        error_handler: ErrorHandler,
    ) -> Any:
        """Read one cell, passing any conversion failure to ``error_handler``."""
        result = self.read(sheet, sheet_name, value_type, row, column, zero_if_null)
        if not result.ok:
            error_handler(result.error)
        return result.value

    def read(
        self,
        sheet: Worksheet,
        sheet_name: str,
        value_type: type,
        row: int,
        column: int,
        zero_if_null: bool,
    ) -> CellResult:
        """Read one cell and convert it to ``value_type``."""
        if value_type not in self.SUPPORTED_TYPES:
            raise ConfigurationError(
                f"Unsupported member type {getattr(value_type, '__name__', value_type)!r}"
            )
        if row < 1 or column < 1:
            return CellResult(error=_cell_error("Invalid cell coordinate", sheet_name, row, column, value_type))

        raw = get_cell_value(sheet, row, column)
        if is_empty_value(raw):
            if zero_if_null:
                return CellResult(value=_ZERO_VALUES.get(value_type))
            return CellResult()

        try:
            return CellResult(value=self._convert(value_type, raw))
        except (ValueError, TypeError, OverflowError, InvalidOperation):
            kind = "date" if value_type in (datetime, date) else value_type.__name__
            if value_type in (int, float, Decimal):
                kind = "number"
            error = _cell_error(f"Invalid {kind} found", sheet_name, row, column, value_type, raw)
            logger.debug("%s", error)
            return CellResult(error=error)

    def _convert(self, value_type: type, raw: Any) -> Any:
        if value_type is str:
            return self._to_str(raw)
        if value_type is bool:
            return self._to_bool(raw)
        if value_type is int:
            return self._to_int(raw)
        if value_type is float:
            if isinstance(raw, bool) or not isinstance(raw, (int, float, Decimal, str)):
                raise TypeError(raw)
            return float(raw)
        if value_type is Decimal:
            if isinstance(raw, bool) or not isinstance(raw, (int, float, Decimal, str)):
                raise TypeError(raw)
            return Decimal(str(raw).strip())
        if value_type is datetime:
            return self._to_datetime(raw)
        return self._to_date(raw)

    def _to_str(self, raw: Any) -> str:
        if isinstance(raw, bool):
            return str(raw).upper()
        if isinstance(raw, float) and raw.is_integer():
            return str(int(raw))
        if isinstance(raw, (datetime, date, time)):
            return raw.isoformat()
        return str(raw).strip()

    def _to_int(self, raw: Any) -> int:
        if isinstance(raw, bool):
            raise TypeError(raw)
        if isinstance(raw, int):
            return raw
        if isinstance(raw, (float, Decimal)):
            if raw != int(raw):
                raise ValueError(raw)
            return int(raw)
        if isinstance(raw, str):
            text = raw.strip()
            try:
                return int(text)
            except ValueError:
                number = float(text)
                if not number.is_integer():
                    raise
                return int(number)
        raise TypeError(raw)

    def _to_bool(self, raw: Any) -> bool:
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, (int, float)) and raw in (0, 1):
            return bool(raw)
        if isinstance(raw, str):
            text = raw.strip().lower()
            if text in self.config.true_values:
                return True
            if text in self.config.false_values:
                return False
        raise ValueError(raw)

    def _to_datetime(self, raw: Any) -> datetime:
        if isinstance(raw, datetime):
            return raw
        if isinstance(raw, date):
            return datetime(raw.year, raw.month, raw.day)
        if isinstance(raw, str):
            return self._parse_date_string(raw.strip())
        raise TypeError(raw)

    def _to_date(self, raw: Any) -> date:
        if isinstance(raw, datetime):
            return raw.date()
        if isinstance(raw, date):
            return raw
        if isinstance(raw, str):
            return self._parse_date_string(raw.strip()).date()
        raise TypeError(raw)

    def _parse_date_string(self, text: str) -> datetime:
        for fmt in self.config.date_formats:
            try:
                return datetime.strptime(text, fmt)
            except ValueError:
                continue
        raise ValueError(text)
