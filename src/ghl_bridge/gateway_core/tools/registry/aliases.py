from types import MappingProxyType
from typing import Mapping, Optional

from .base import ToolRegistry
from ...exceptions import ToolRegistrationError
from ...logger import get_logger

logger = get_logger(__name__)


class AliasResolver:
    """Maps short tool names such as ``contacts`` to their canonical catalog names.

    Names without an alias pass through unchanged, so validation still rejects
    them if they are not in the catalog either.
    """

    def __init__(self, aliases: Mapping[str, str], registry: Optional[ToolRegistry] = None) -> None:
        """
        Args:
            aliases: Alias -> canonical name table.
            registry: When given, every alias target must exist in it.

        Raises:
            ToolRegistrationError: If an alias points at a tool the registry does not know.
        """
        if registry is not None:
            dangling = [alias for alias, target in aliases.items() if target not in registry]
            if dangling:
                msg = f"Aliases point at unknown tools: {', '.join(dangling)}"
                logger.error(msg)
                raise ToolRegistrationError(msg)
        self._aliases: Mapping[str, str] = MappingProxyType(dict(aliases))

    @property
    def aliases(self) -> Mapping[str, str]:
        return self._aliases

    def resolve(self, name: str) -> str:
        canonical = self._aliases.get(name, name)
        if canonical != name:
            logger.debug("Resolved tool alias '%s' -> '%s'.", name, canonical)
        return canonical
