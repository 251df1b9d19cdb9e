"""
CommandResult model — the execution contract for toolchain invocations.

Adapters run one external command and hand back a CommandResult.
They never raise: a missing binary or a non-zero exit is captured
here, and the client layer decides what to raise.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class CommandResult(BaseModel):
    """Captured outcome of one toolchain invocation.

    Ephemeral: consumed by the calling workflow and then discarded.
    """

    adapter: str
    command: list[str] = Field(default_factory=list)
    status: Literal["ok", "failed"] = "ok"
    return_code: int | None = None

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        """Whether the command exited zero."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the command failed to run or exited non-zero."""
        return self.status == "failed"

    @property
    def output(self) -> str:
        """Text worth showing a user: stdout, else stderr."""
        return self.stdout if self.stdout.strip() else self.stderr

    @property
    def command_line(self) -> str:
        return " ".join(self.command)

    @classmethod
    def success(
        cls,
        adapter: str,
        command: list[str],
        stdout: str = "",
        **kwargs: Any,
    ) -> CommandResult:
        """Create a success result."""
        return cls(
            adapter=adapter,
            command=command,
            status="ok",
            stdout=stdout,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        adapter: str,
        command: list[str],
        stderr: str,
        **kwargs: Any,
    ) -> CommandResult:
        """Create a failure result."""
        return cls(
            adapter=adapter,
            command=command,
            status="failed",
            stderr=stderr,
            **kwargs,
        )
