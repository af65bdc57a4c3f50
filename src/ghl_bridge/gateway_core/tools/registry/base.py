"""Read-only tool catalog."""

from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Tuple

from ..models import ToolDefinition
from ...exceptions import ToolRegistrationError
from ...logger import get_logger

logger = get_logger(__name__)


class ToolRegistry:
    """
    The static catalog of tools the gateway may forward.

    Definitions are checked and stored once, at construction. Afterwards the
    registry only offers read access, so a single instance can be shared by
    any number of concurrent requests without locking.
    """

    def __init__(self, definitions: Iterable[ToolDefinition]) -> None:
        """Load and check the catalog.

        Args:
            definitions: The tool definitions, in the order they should be listed.

        Raises:
            ToolRegistrationError: If a name repeats or a parameter is both required and optional.
        """
        tools: dict[str, ToolDefinition] = {}
        for definition in definitions:
            self._check_definition(definition)
            if definition.name in tools:
                msg = f"Tool '{definition.name}' is already registered."
                logger.error(msg)
                raise ToolRegistrationError(msg)
            tools[definition.name] = definition

        self._tools: Mapping[str, ToolDefinition] = MappingProxyType(tools)
        self._ordered: Tuple[ToolDefinition, ...] = tuple(tools.values())
        logger.info("Loaded %d tools into the catalog.", len(self._ordered))

    @staticmethod
    def _check_definition(definition: ToolDefinition) -> None:
        overlap = set(definition.required_params) & set(definition.optional_params)
        if overlap:
            msg = (
                f"Tool '{definition.name}' declares parameters as both required and optional: "
                f"{', '.join(sorted(overlap))}"
            )
            logger.error(msg)
            raise ToolRegistrationError(msg)

        for group in (definition.required_params, definition.optional_params):
            if len(set(group)) != len(group):
                msg = f"Tool '{definition.name}' declares a parameter twice."
                logger.error(msg)
                raise ToolRegistrationError(msg)

    @property
    def tools(self) -> Mapping[str, ToolDefinition]:
        """A read-only name -> definition view."""
        return self._tools

    @property
    def names(self) -> Tuple[str, ...]:
        """All tool names in insertion order."""
        return tuple(self._tools.keys())

    def get(self, name: str) -> Optional[ToolDefinition]:
        return self._tools.get(name)

    def describe(self) -> Tuple[ToolDefinition, ...]:
        """Enumerate the catalog in insertion order."""
        return self._ordered

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)
