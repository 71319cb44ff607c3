"""Domain models for sheet binding."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from sheetbinder.domain.exceptions import CellExtractionError


class ScanDirection(Enum):
    """Axis along which a scan range advances."""
    ROW = "row"
    COLUMN = "column"


class Cardinality(Enum):
    """How many nested instances a member holds."""
    SINGLE = "single"
    LIST = "list"


class ErrorPolicy(Enum):
    """What assembly does with a cell that fails to convert."""
    STRICT = "strict"
    CONTINUE = "continue"


@dataclass(frozen=True)
class ScanDescriptor:
    """Inclusive scan range declared on a bindable type."""
    start: int
    end: int
    direction: ScanDirection = ScanDirection.ROW
    zero_if_null: bool = False

    def positions(self) -> range:
        # A descending range is empty, never an error.
        return range(self.start, self.end + 1)

    def coordinates(self, position: int, member_position: int) -> tuple:
        """Return ``(row, column)`` for a scan position and member position."""
        if self.direction is ScanDirection.ROW:
            return position, member_position
        return member_position, position


@dataclass(frozen=True)
class MemberBinding:
    """A scalar member bound to a fixed ordinal position."""
    position: int
    name: str
    value_type: type


@dataclass(frozen=True)
class NestedBinding:
    """A member assembled recursively from another bindable type."""
    name: str
    cardinality: Cardinality
    element_type: type


@dataclass(frozen=True)
class CellResult:
    """Outcome of reading one cell: a value or a structured error."""
    value: Any = None
    error: Optional[CellExtractionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class AssemblyResult:
    """Instances assembled in permissive mode with the errors encountered."""
    instances: List[Any]
    errors: List[CellExtractionError] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.instances)

    @property
    def ok(self) -> bool:
        return len(self.errors) == 0
