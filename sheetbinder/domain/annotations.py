"""Declarative sheet metadata for dataclasses.

``excel_object()`` marks a dataclass as bindable and records the scan range.
``excel_field()`` and ``mapped_excel_object()`` wrap ``dataclasses.field()``
and store the binding in the field metadata, so the binder can be driven by
the dataclass definition alone::

    @excel_object(start=2, end=10)
    @dataclass
    class Student:
        roll_number: int = excel_field(1)
        name: str = excel_field(2)
        address: Address = mapped_excel_object()
"""
import dataclasses
from typing import Any, Optional

from sheetbinder.domain.exceptions import ConfigurationError
from sheetbinder.domain.models import ScanDescriptor, ScanDirection

SCAN_DESCRIPTOR_ATTR = "__excel_object__"
EXCEL_FIELD_META_KEY = "excel_field"
MAPPED_OBJECT_META_KEY = "mapped_excel_object"


def excel_object(
    start: int,
    end: int,
    direction: ScanDirection = ScanDirection.ROW,
    zero_if_null: bool = False,
):
    """Class decorator declaring the scan range of a bindable dataclass.

    Parameters
    ----------
    start, end:
        Inclusive range of 1-based rows (or columns) to scan. Each position
        yields one instance.
    direction:
        ``ScanDirection.ROW`` advances down the rows and reads members from
        columns; ``ScanDirection.COLUMN`` advances across columns and reads
        members from rows.
    zero_if_null:
        Substitute a zero value for empty numeric and boolean cells.
    """
    if not isinstance(start, int) or not isinstance(end, int):
        raise ConfigurationError(f"Scan range must be integers, got start={start!r}, end={end!r}")
    if not isinstance(direction, ScanDirection):
        raise ConfigurationError(f"Invalid scan direction {direction!r}")
    descriptor = ScanDescriptor(
        start=start,
        end=end,
        direction=direction,
        zero_if_null=bool(zero_if_null),
    )

    def decorate(cls):
        if not dataclasses.is_dataclass(cls):
            raise ConfigurationError(
                f"Invalid class configuration - {cls.__name__} must be a dataclass "
                "(apply @excel_object above @dataclass)"
            )
        setattr(cls, SCAN_DESCRIPTOR_ATTR, descriptor)
        return cls

    return decorate


def excel_field(position: int, default: Any = None, default_factory: Any = None):
    """Create a dataclass field read from a fixed row/column position."""
    if not isinstance(position, int) or isinstance(position, bool) or position < 1:
        raise ConfigurationError(f"Field position must be a positive integer, got {position!r}")
    metadata = {EXCEL_FIELD_META_KEY: {"position": position}}
    if default_factory is not None:
        return dataclasses.field(default_factory=default_factory, metadata=metadata)
    return dataclasses.field(default=default, metadata=metadata)


def mapped_excel_object(
    element_type: Optional[type] = None,
    default: Any = None,
    default_factory: Any = None,
):
    """Create a dataclass field assembled from another bindable type.

    A ``list[T]`` annotation yields every instance of ``T``; any other
    annotation receives the first instance only. ``element_type`` overrides
    the type derived from the annotation.
    """
    metadata = {MAPPED_OBJECT_META_KEY: {"element_type": element_type}}
    if default_factory is not None:
        return dataclasses.field(default_factory=default_factory, metadata=metadata)
    return dataclasses.field(default=default, metadata=metadata)
