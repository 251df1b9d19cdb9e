"""
Module workflows — the user-facing module commands.

Each workflow runs Resolving-Target → Invoking-Tool → Reporting, once,
synchronously.  Upgrade-All is the exception: it streams from a
background run so a slow full-graph upgrade never blocks the host.

Informational results come back as WorkflowOutcome; real failures
(GoModError subclasses) propagate to the host untouched.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from gomodctl.core.context import ModuleContext
from gomodctl.core.models.module import ModuleEntry, OutdatedModule
from gomodctl.core.models.outcome import WorkflowOutcome
from gomodctl.core.services.mod_client import (
    BackgroundRun,
    GoModClient,
    GoModError,
    SelectionCancelled,
    ToolInvocationFailed,
)
from gomodctl.core.services.mod_host import Host
from gomodctl.core.services.mod_mode import require_modules
from gomodctl.core.services.mod_resolver import resolve_module

logger = logging.getLogger(__name__)


class ModWorkflows:
    """Upgrade, get, tidy, replace, why and format for one working directory."""

    def __init__(self, context: ModuleContext, client: GoModClient, host: Host):
        self.context = context
        self.client = client
        self.host = host

    def _resolve(self, line: str | None) -> str:
        return resolve_module(self.context, self.client, self.host, line)

    # ── Read-only ───────────────────────────────────────────────

    def list_modules(self) -> list[ModuleEntry]:
        require_modules(self.context, self.client)
        return self.client.list_modules()

    def outdated(self) -> list[OutdatedModule]:
        require_modules(self.context, self.client)
        return self.client.list_outdated()

    # ── Upgrade ─────────────────────────────────────────────────

    def upgrade_one(self, line: str | None = None) -> WorkflowOutcome:
        """Offer the upgrade candidate for one module and apply it on confirmation."""
        try:
            target = self._resolve(line)
        except SelectionCancelled:
            return WorkflowOutcome(command="upgrade", status="cancelled", message="No module selected")

        candidate = self.client.upgrade_candidate(target)
        if candidate is None:
            return WorkflowOutcome(
                command="upgrade",
                status="noop",
                target=target,
                message=f"{target} is already at latest",
            )

        if not self.host.confirm(f"Upgrade {target} to {candidate}?"):
            logger.debug("Upgrade of %s declined", target)
            return WorkflowOutcome(
                command="upgrade",
                status="declined",
                target=target,
                version=candidate,
                message=f"Left {target} as is",
            )

        output = self.client.get(target, candidate)
        return WorkflowOutcome(
            command="upgrade",
            target=target,
            version=candidate,
            message=f"Upgraded {target} to {candidate}",
            output=output,
        )

    def start_upgrade_all(self, patch_only: bool = False) -> BackgroundRun:
        """Kick off the full (or patch-only) upgrade; output goes to the host as it arrives."""
        return self.client.upgrade_all(patch_only=patch_only, on_line=self.host.display)

    def upgrade_all(self, patch_only: bool = False) -> WorkflowOutcome:
        """Run the full (or patch-only) upgrade, streaming, and report when done."""
        result = self.start_upgrade_all(patch_only).wait()
        if result is None:
            raise GoModError("go get finished without a result")
        if result.failed:
            raise ToolInvocationFailed(result)
        scope = "patch" if patch_only else "all"
        return WorkflowOutcome(
            command="upgrade-all",
            version=scope,
            message=f"Upgraded dependencies ({scope})",
            output=result.output,
        )

    def get_version(self, line: str | None = None, version: str | None = None) -> WorkflowOutcome:
        """Switch one module to a chosen version."""
        try:
            target = self._resolve(line)
        except SelectionCancelled:
            return WorkflowOutcome(command="get", status="cancelled", message="No module selected")

        if version is None:
            versions = self.client.available_versions(target)
            if not versions:
                return WorkflowOutcome(
                    command="get",
                    status="noop",
                    target=target,
                    message=f"No other versions available for {target}",
                )
            version = self.host.select_one(f"Version of {target}", versions)
            if not version:
                return WorkflowOutcome(
                    command="get", status="cancelled", target=target, message="No version selected",
                )

        output = self.client.get(target, version)
        return WorkflowOutcome(
            command="get",
            target=target,
            version=version,
            message=f"{target}@{version}",
            output=output,
        )

    # ── Manifest edits ──────────────────────────────────────────

    def tidy(self) -> WorkflowOutcome:
        output = self.client.tidy()
        return WorkflowOutcome(command="tidy", message="go.mod tidied", output=output)

    def replace_with_local(self, line: str | None = None, path: str | None = None) -> WorkflowOutcome:
        """Point a module at a local checkout via a replace directive."""
        try:
            target = self._resolve(line)
        except SelectionCancelled:
            return WorkflowOutcome(command="replace", status="cancelled", message="No module selected")

        if path is None:
            path = self.host.read_text(f"Replace {target} with local path")
        if not path.strip():
            return WorkflowOutcome(
                command="replace", status="cancelled", target=target, message="No path given",
            )

        local = Path(path.strip()).expanduser()
        if not local.is_absolute():
            local = self.context.working_dir / local
        relative = os.path.relpath(local, self.context.working_dir)

        output = self.client.replace(target, relative)
        return WorkflowOutcome(
            command="replace",
            target=target,
            message=f"{target} => {relative}",
            output=output,
        )

    def why(self, line: str | None = None) -> WorkflowOutcome:
        try:
            target = self._resolve(line)
        except SelectionCancelled:
            return WorkflowOutcome(command="why", status="cancelled", message="No module selected")

        output = self.client.why(target)
        return WorkflowOutcome(command="why", target=target, output=output)

    def format_on_save(self, saved_path: Path | str) -> WorkflowOutcome:
        """Reformat the manifest after it was saved; other files are ignored."""
        saved = Path(saved_path)
        if saved.name != self.context.manifest_name:
            return WorkflowOutcome(
                command="fmt", status="skipped", message=f"{saved.name} is not a manifest",
            )
        if not self.context.format_on_save:
            return WorkflowOutcome(command="fmt", status="skipped", message="format_on_save is off")

        output = self.client.format_manifest()
        logger.debug("Formatted %s", saved)
        return WorkflowOutcome(command="fmt", message=f"Formatted {saved.name}", output=output)
