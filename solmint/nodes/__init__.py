"""Node registry - maps node names to factories and builds nodes on demand."""

from __future__ import annotations

from typing import Callable

from solmint.errors import UnknownNodeError
from solmint.nodes import mint_token
from solmint.nodes.base import BaseNode, NodeContext

NodeFactory = Callable[[], BaseNode]

__all__ = ["BaseNode", "NodeContext", "NodeFactory", "NodeRegistry", "default_registry"]


class NodeRegistry:
    """Registry that holds node factories and provides lookup.

    Nodes are built fresh on every ``build`` call; nothing is cached.
    """

    def __init__(self) -> None:
        self._factories: dict[str, NodeFactory] = {}

    def register(self, name: str, factory: NodeFactory) -> None:
        """Register ``factory`` under ``name``, replacing any previous entry."""
        self._factories[name] = factory

    def build(self, name: str) -> BaseNode:
        """Build a node by name."""
        factory = self._factories.get(name)
        if factory is None:
            raise UnknownNodeError(name)
        node = factory()
        if node.name != name:
            raise ValueError(f"Factory for '{name}' built node '{node.name}'")
        return node

    def names(self) -> list[str]:
        return sorted(self._factories)

    def node_definitions(self) -> list[dict]:
        """Return definitions of every registered node."""
        return [self.build(name).to_node_definition() for name in self.names()]


def default_registry() -> NodeRegistry:
    """A new registry with all built-in nodes registered."""
    registry = NodeRegistry()
    registry.register(mint_token.NODE_NAME, mint_token.build)
    return registry
