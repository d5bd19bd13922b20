"""Abstract base class for all nodes."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from solmint.execution import Executor
from solmint.logging_config import log_node_execution


@dataclass
class NodeContext:
    """Collaborators a node may use while running.

    ``client`` answers ledger queries (a solana-py ``AsyncClient`` or anything
    with the same ``get_account_info`` coroutine); ``executor`` submits
    instruction sets.
    """

    client: Any
    executor: Executor


class BaseNode(ABC):
    """Base class that all nodes must inherit from."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Node name as the orchestration layer refers to it."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        ...

    @property
    @abstractmethod
    def inputs(self) -> dict:
        """JSON Schema for the node's input fields."""
        ...

    @property
    @abstractmethod
    def outputs(self) -> dict:
        """JSON Schema for the node's output fields."""
        ...

    @abstractmethod
    async def run(self, ctx: NodeContext, **kwargs: Any) -> dict:
        """Run the node. Raises a SolmintError subclass on failure."""
        ...

    async def invoke(self, ctx: NodeContext, inputs: dict) -> dict:
        """Run the node and record the execution in the audit log."""
        start = time.monotonic()
        try:
            result = await self.run(ctx, **inputs)
        except Exception as exc:
            log_node_execution(self.name, inputs, f"error: {exc}", time.monotonic() - start)
            raise
        log_node_execution(self.name, inputs, str(result), time.monotonic() - start)
        return result

    def to_node_definition(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "inputs": self.inputs,
            "outputs": self.outputs,
        }
