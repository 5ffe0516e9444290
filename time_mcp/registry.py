import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from mcp.types import Tool

__all__ = ["ToolEntry", "ToolHandler", "ToolRegistry"]

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Mapping[str, Any]], str]


@dataclass(frozen=True, slots=True)
class ToolEntry:
    """A tool descriptor together with the function that executes it."""

    descriptor: Tool
    handler: ToolHandler

    @property
    def name(self) -> str:
        return self.descriptor.name


class ToolRegistry:
    """Immutable catalog of tools, built once at start."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[ToolEntry]) -> None:
        registered: dict[str, ToolEntry] = {}
        for entry in entries:
            if entry.name in registered:
                raise ValueError(f"Tool already registered: {entry.name}")
            registered[entry.name] = entry
            logger.debug("Registered tool: %s", entry.name)
        self._entries: Mapping[str, ToolEntry] = MappingProxyType(registered)

    @property
    def tools(self) -> list[Tool]:
        """Return tool descriptors in registration order."""
        return [entry.descriptor for entry in self._entries.values()]

    def get(self, name: str) -> ToolEntry | None:
        return self._entries.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[ToolEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)
