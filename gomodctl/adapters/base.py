"""
Adapter base — the protocol contract between services and tools.

This defines the abstract interface every toolchain adapter implements.
Services only talk to tools through this protocol, never by calling
subprocess directly, so tests can swap in the MockAdapter.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

from pydantic import BaseModel, Field

from gomodctl.core.models.command import CommandResult


class ExecutionContext(BaseModel):
    """Everything an adapter needs to run one command.

    ``args`` excludes the executable itself; the adapter prepends it.
    """

    args: list[str]
    working_dir: str = "."
    env: dict[str, str] | None = None

    @property
    def key(self) -> str:
        """Stable identifier for the invocation, e.g. ``"mod tidy"``."""
        return " ".join(self.args)


class Adapter(ABC):
    """Abstract base class for all adapters.

    Adapters perform external side effects and return results.
    They NEVER raise exceptions — failures are captured in the
    CommandResult.

    To create a new adapter:
        1. Subclass Adapter
        2. Implement name, is_available, validate, execute, stream
        3. Hand it to the client that needs it
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'go', 'mock')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this adapter's underlying tool is available.

        Should be fast and never raise.
        """

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Validate that the command can be executed.

        Returns:
            (is_valid, error_message). error_message is empty if valid.
        """

    @abstractmethod
    def execute(self, context: ExecutionContext) -> CommandResult:
        """Run the command to completion and capture its output.

        MUST never raise. All failures are captured in the result
        with status='failed'.
        """

    @abstractmethod
    def stream(
        self,
        context: ExecutionContext,
        on_line: Callable[[str], None],
    ) -> CommandResult:
        """Run the command, handing each output line to ``on_line`` as it arrives.

        The returned result carries the full merged output in ``stdout``.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
