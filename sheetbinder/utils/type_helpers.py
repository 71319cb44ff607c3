"""Utility functions for inspecting declared member types."""
import collections.abc
import typing
from typing import Optional, Tuple

_LIST_ORIGINS = (list, collections.abc.Sequence, collections.abc.MutableSequence)


def unwrap_optional(tp):
    """Return ``X`` for ``Optional[X]``, otherwise the type unchanged."""
    args = typing.get_args(tp)
    if typing.get_origin(tp) is typing.Union and type(None) in args:
        remaining = [arg for arg in args if arg is not type(None)]
        if len(remaining) == 1:
            return remaining[0]
    return tp


def is_list_type(tp) -> bool:
    """Check if a declared type is a list or sequence."""
    tp = unwrap_optional(tp)
    return tp in _LIST_ORIGINS or typing.get_origin(tp) in _LIST_ORIGINS


def list_element_type(tp) -> Optional[type]:
    """Return the element type of ``list[X]``, or None if it is not declared."""
    args = typing.get_args(unwrap_optional(tp))
    if len(args) == 1 and is_concrete_type(args[0]):
        return args[0]
    return None


def runtime_type(tp) -> Tuple[type, ...]:
    """Return the class(es) usable with ``isinstance`` for a declared type."""
    tp = unwrap_optional(tp)
    if is_concrete_type(tp):
        return (tp,)
    origin = typing.get_origin(tp)
    if isinstance(origin, type):
        return (origin,)
    return (object,)


def is_concrete_type(tp) -> bool:
    """Check if a declared type is a plain class rather than a generic alias."""
    return isinstance(tp, type) and typing.get_origin(tp) is None
