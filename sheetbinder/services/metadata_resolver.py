"""Lookups over the sheet metadata declared on bindable types."""
import dataclasses
import typing
from typing import Dict, List, Tuple

from sheetbinder.domain.annotations import (
    EXCEL_FIELD_META_KEY,
    MAPPED_OBJECT_META_KEY,
    SCAN_DESCRIPTOR_ATTR,
)
from sheetbinder.domain.exceptions import ConfigurationError
from sheetbinder.domain.models import Cardinality, NestedBinding, ScanDescriptor
from sheetbinder.utils.type_helpers import (
    is_concrete_type,
    is_list_type,
    list_element_type,
    unwrap_optional,
)


def resolve_scan_descriptor(cls) -> ScanDescriptor:
    """Return the scan descriptor declared directly on ``cls``."""
    # vars() so a subclass does not silently reuse its parent's range
    descriptor = vars(cls).get(SCAN_DESCRIPTOR_ATTR) if isinstance(cls, type) else None
    if descriptor is None:
        name = getattr(cls, "__name__", repr(cls))
        raise ConfigurationError(
            f"Invalid class configuration - excel_object declaration missing - {name}"
        )
    return descriptor


def declared_types(cls) -> Dict[str, typing.Any]:
    """Resolve the annotations of ``cls``, including forward references."""
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError) as e:
        raise ConfigurationError(f"Cannot resolve member types of {cls.__name__}: {e}") from e


def position_fields(cls) -> List[Tuple[int, dataclasses.Field]]:
    """Return ``(position, field)`` for every ``excel_field`` of ``cls``."""
    if not dataclasses.is_dataclass(cls):
        raise ConfigurationError(f"Invalid class configuration - {cls.__name__} is not a dataclass")
    result = []
    for f in dataclasses.fields(cls):
        meta = f.metadata.get(EXCEL_FIELD_META_KEY)
        if meta is not None:
            result.append((meta["position"], f))
    return result


def nested_bindings(cls) -> List[NestedBinding]:
    """Return the nested bindings of ``cls`` in declaration order."""
    if not dataclasses.is_dataclass(cls):
        raise ConfigurationError(f"Invalid class configuration - {cls.__name__} is not a dataclass")
    mapped = [f for f in dataclasses.fields(cls) if MAPPED_OBJECT_META_KEY in f.metadata]
    if not mapped:
        return []

    hints = declared_types(cls)
    bindings = []
    for f in mapped:
        declared = hints.get(f.name, f.type)
        explicit = f.metadata[MAPPED_OBJECT_META_KEY]["element_type"]
        if is_list_type(declared):
            element_type = explicit or list_element_type(declared)
            cardinality = Cardinality.LIST
        else:
            element_type = explicit or unwrap_optional(declared)
            cardinality = Cardinality.SINGLE
        if not is_concrete_type(element_type):
            raise ConfigurationError(
                f"Cannot determine nested type of {cls.__name__}.{f.name} "
                f"(declared as {declared!r})"
            )
        bindings.append(NestedBinding(name=f.name, cardinality=cardinality, element_type=element_type))
    return bindings
