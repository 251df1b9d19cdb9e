"""
Workflow outcome model — what a workflow command reports back.

Informational results (already at latest, no versions, declined) are
outcomes, not errors.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel


class WorkflowOutcome(BaseModel):
    """Result of one workflow command invocation."""

    command: str
    status: Literal["ok", "noop", "declined", "cancelled", "skipped"] = "ok"
    target: str | None = None
    version: str | None = None
    message: str = ""
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()
