"""Entity assembly service binding worksheet regions to dataclass graphs."""
import logging
from typing import List, Optional, Tuple, Type, TypeVar

from openpyxl.worksheet.worksheet import Worksheet

from sheetbinder.config import config, BinderConfig
from sheetbinder.domain.exceptions import CellExtractionError, ConfigurationError
from sheetbinder.domain.models import AssemblyResult, Cardinality, ErrorPolicy
from sheetbinder.services.cell_extractor import CellValueExtractor, ErrorHandler
from sheetbinder.services.instance_builder import assign, new_instance
from sheetbinder.services.metadata_resolver import nested_bindings, resolve_scan_descriptor
from sheetbinder.services.position_cache import MemberPositionCache

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _raise_error(error: CellExtractionError) -> None:
    raise error


class EntityAssembler:
    """Service for assembling instances of bindable types from a worksheet.

    Each position of a type's scan range yields one instance. Positioned
    members are read through the cell extractor; mapped members are
    assembled recursively from their own types against the same sheet.
    """

    def __init__(
        self,
        extractor: Optional[CellValueExtractor] = None,
        position_cache: Optional[MemberPositionCache] = None,
        binder_config: Optional[BinderConfig] = None,
    ):
        self.extractor = extractor or CellValueExtractor()
        self.position_cache = position_cache or MemberPositionCache()
        self.config = binder_config or config.binder

    def create_entity(
        self,
        sheet: Worksheet,
        sheet_name: str,
        cls: Type[T],
        error_handler: Optional[ErrorHandler] = None,
    ) -> List[T]:
        """Assemble every instance of ``cls`` declared by its scan range.

        Without ``error_handler`` the first cell that fails to convert aborts
        the whole assembly with ``CellExtractionError``. With one, each
        failure is passed to the handler and assembly continues, leaving the
        failing member at the extractor's default.
        """
        if error_handler is None:
            return self._assemble(sheet, sheet_name, cls, ErrorPolicy.STRICT, _raise_error, ())
        return self._assemble(sheet, sheet_name, cls, ErrorPolicy.CONTINUE, error_handler, ())

    def collect_entity(self, sheet: Worksheet, sheet_name: str, cls: Type[T]) -> AssemblyResult:
        """Assemble ``cls`` permissively, returning instances and cell errors together."""
        errors: List[CellExtractionError] = []
        instances = self.create_entity(sheet, sheet_name, cls, errors.append)
        return AssemblyResult(instances=instances, errors=errors)

    def _assemble(
        self,
        sheet: Worksheet,
        sheet_name: str,
        cls: Type[T],
        policy: ErrorPolicy,
        error_handler: ErrorHandler,
        path: Tuple[type, ...],
    ) -> List[T]:
        path = path + (cls,)
        if len(path) > self.config.max_depth:
            chain = " -> ".join(t.__name__ for t in path)
            raise ConfigurationError(
                f"Nesting deeper than {self.config.max_depth} levels, "
                f"type graph may be cyclic: {chain}"
            )

        descriptor = resolve_scan_descriptor(cls)
        positions = self.position_cache.position_map(cls)
        nested = nested_bindings(cls)
        logger.debug(
            "Assembling %s from sheet %s, positions %d..%d by %s",
            cls.__name__, sheet_name, descriptor.start, descriptor.end, descriptor.direction.value,
        )

        handler = error_handler
        if policy is ErrorPolicy.CONTINUE:
            handler = self._warning_handler(cls, error_handler)

        entities = []
        for location in descriptor.positions():
            entity = new_instance(cls)
            for member_position, binding in positions.items():
                row, column = descriptor.coordinates(location, member_position)
                value = self.extractor.get_cell_value(
                    sheet, sheet_name, binding.value_type, row, column,
                    descriptor.zero_if_null, handler,
                )
                assign(entity, binding.name, value, binding.value_type)

            for binding in nested:
                children = self._assemble(
                    sheet, sheet_name, binding.element_type, policy, error_handler, path,
                )
                if binding.cardinality is Cardinality.LIST:
                    assign(entity, binding.name, children)
                elif children:
                    if len(children) > 1:
                        logger.warning(
                            "%s.%s holds a single %s but %d were assembled; keeping the first",
                            cls.__name__, binding.name, binding.element_type.__name__, len(children),
                        )
                    assign(entity, binding.name, children[0], binding.element_type)
            entities.append(entity)
        return entities

    @staticmethod
    def _warning_handler(cls: type, error_handler: ErrorHandler) -> ErrorHandler:
        def handle(error: CellExtractionError) -> None:
            logger.warning("Skipping cell %s!%s for %s: %s", error.sheet_name, error.coordinate, cls.__name__, error)
            error_handler(error)
        return handle
