"""Per-type cache of position to member bindings."""
import logging
import threading
from types import MappingProxyType
from typing import Dict, Mapping

from sheetbinder.domain.exceptions import ConfigurationError
from sheetbinder.domain.models import MemberBinding
from sheetbinder.services.metadata_resolver import declared_types, position_fields
from sheetbinder.utils.type_helpers import is_concrete_type, unwrap_optional

logger = logging.getLogger(__name__)


class MemberPositionCache:
    """Memoizes the ``position -> MemberBinding`` mapping of each bindable type.

    Entries are built on first request and never evicted; declared metadata
    is immutable for the life of the process. Safe to share between threads.
    """

    def __init__(self):
        self._entries: Dict[type, Mapping[int, MemberBinding]] = {}
        self._lock = threading.Lock()
        self.scan_count = 0

    def position_map(self, cls) -> Mapping[int, MemberBinding]:
        """Get the position mapping for ``cls``, scanning it on first use."""
        existing = self._entries.get(cls)
        if existing is not None:
            return existing
        with self._lock:
            existing = self._entries.get(cls)
            if existing is None:
                existing = self._load(cls)
                self._entries[cls] = existing
            return existing

    def _load(self, cls) -> Mapping[int, MemberBinding]:
        self.scan_count += 1
        fields = position_fields(cls)
        hints = declared_types(cls) if fields else {}
        bindings: Dict[int, MemberBinding] = {}
        for position, f in sorted(fields, key=lambda item: item[0]):
            if position in bindings:
                raise ConfigurationError(
                    f"Duplicate position {position} in {cls.__name__}: "
                    f"'{bindings[position].name}' and '{f.name}'"
                )
            value_type = unwrap_optional(hints.get(f.name, f.type))
            if not is_concrete_type(value_type):
                raise ConfigurationError(
                    f"Member {cls.__name__}.{f.name} must declare a concrete type, got {value_type!r}"
                )
            bindings[position] = MemberBinding(position=position, name=f.name, value_type=value_type)
        logger.debug("Loaded %d positioned members for %s", len(bindings), cls.__name__)
        return MappingProxyType(bindings)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, cls) -> bool:
        return cls in self._entries

    def __len__(self) -> int:
        return len(self._entries)
