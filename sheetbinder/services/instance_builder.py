"""Construction of target instances and member assignment."""
import logging
from typing import Any, Optional

from sheetbinder.domain.exceptions import FieldAccessError, InstantiationError
from sheetbinder.utils.type_helpers import runtime_type

logger = logging.getLogger(__name__)


def new_instance(cls):
    """Create an instance of ``cls`` through its zero-argument constructor."""
    try:
        return cls()
    except Exception as e:
        logger.error("Exception occurred while instantiating the class %s", cls.__qualname__, exc_info=True)
        raise InstantiationError(
            f"Exception occurred while instantiating the class {cls.__qualname__}: {e}"
        ) from e


def assign(instance: Any, name: str, value: Any, expected_type: Optional[type] = None) -> None:
    """Set one member, checking the value against its declared type."""
    if value is not None and expected_type is not None:
        if not isinstance(value, runtime_type(expected_type)):
            raise FieldAccessError(
                f"Cannot assign {type(value).__name__} to "
                f"{type(instance).__name__}.{name} of type {getattr(expected_type, '__name__', expected_type)}"
            )
    try:
        setattr(instance, name, value)
    except (AttributeError, TypeError) as e:
        logger.error("Exception occurred while setting %s.%s", type(instance).__name__, name, exc_info=True)
        raise FieldAccessError(
            f"Exception occurred while setting field value {type(instance).__name__}.{name}: {e}"
        ) from e
