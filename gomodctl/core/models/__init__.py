"""
Domain models — Pydantic types for gomodctl.

All models are re-exported here for convenient access:

    from gomodctl.core.models import CommandResult, ModuleEntry, WorkflowOutcome
"""

from gomodctl.core.models.command import CommandResult
from gomodctl.core.models.module import ModuleEntry, OutdatedModule
from gomodctl.core.models.outcome import WorkflowOutcome
from gomodctl.core.models.settings import Settings

__all__ = [
    "CommandResult",
    "ModuleEntry",
    "OutdatedModule",
    "Settings",
    "WorkflowOutcome",
]
