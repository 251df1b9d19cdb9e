"""
Mock adapter — scripted stand-in for the go toolchain.

Used by tests to simulate toolchain behavior without a real ``go``
binary. Responses are keyed by the subcommand line (``"list -m all"``);
anything unscripted succeeds with empty output.
"""

from __future__ import annotations

from collections.abc import Callable

from gomodctl.adapters.base import Adapter, ExecutionContext
from gomodctl.core.models.command import CommandResult


class MockAdapter(Adapter):
    """Scripted mock adapter for testing."""

    def __init__(
        self,
        adapter_name: str = "mock",
        available: bool = True,
        default_output: str = "",
    ):
        self._name = adapter_name
        self._available = available
        self._default_output = default_output
        self._responses: dict[str, CommandResult] = {}
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        """Number of commands run."""
        return len(self._call_log)

    @property
    def calls(self) -> list[str]:
        """Subcommand lines in call order."""
        return [c.key for c in self._call_log]

    def is_available(self) -> bool:
        return self._available

    def set_output(self, key: str, stdout: str) -> None:
        """Script a successful response for a subcommand line."""
        self._responses[key] = CommandResult.success(
            adapter=self._name,
            command=key.split(),
            stdout=stdout,
            return_code=0,
        )

    def set_failure(self, key: str, error: str = "Mock failure", return_code: int = 1) -> None:
        """Script a subcommand line to exit non-zero."""
        self._responses[key] = CommandResult.failure(
            adapter=self._name,
            command=key.split(),
            stderr=error,
            return_code=return_code,
        )

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> CommandResult:
        self._call_log.append(context)

        if context.key in self._responses:
            return self._responses[context.key]

        return CommandResult.success(
            adapter=self._name,
            command=list(context.args),
            stdout=self._default_output,
            return_code=0,
        )

    def stream(
        self,
        context: ExecutionContext,
        on_line: Callable[[str], None],
    ) -> CommandResult:
        result = self.execute(context)
        for line in result.output.splitlines():
            on_line(line)
        return result

    def reset(self) -> None:
        """Clear call log and scripted responses."""
        self._call_log.clear()
        self._responses.clear()
