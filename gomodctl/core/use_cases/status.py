"""
Status use case — what the toolchain and working directory look like.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from gomodctl.core.context import ModuleContext
from gomodctl.core.services.mod_client import GoModClient, ToolInvocationFailed
from gomodctl.core.services.mod_mode import modules_enabled
from gomodctl.core.services.mod_refs import NO_MODULE_SENTINELS


@dataclass
class StatusResult:
    """Toolchain and module summary for one working directory."""

    working_dir: Path | None = None
    go_binary: str = "go"
    toolchain_available: bool = False
    toolchain_version: str = ""
    go111module: str = "auto"
    has_manifest: bool = False
    has_lock: bool = False
    current_module: str = ""
    modules_enabled: bool = False
    error: str | None = None

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        result: dict = {
            "working_dir": str(self.working_dir) if self.working_dir else "",
            "toolchain": {
                "binary": self.go_binary,
                "available": self.toolchain_available,
                "version": self.toolchain_version,
            },
            "go111module": self.go111module,
            "files": {
                "manifest": self.has_manifest,
                "lock": self.has_lock,
            },
            "module": self.current_module,
            "modules_enabled": self.modules_enabled,
        }
        if self.error:
            result["error"] = self.error
        return result


def get_status(context: ModuleContext, client: GoModClient) -> StatusResult:
    """Collect status without raising; toolchain problems land in ``error``."""
    result = StatusResult(
        working_dir=context.working_dir,
        go_binary=context.go_binary,
        go111module=context.go111module,
        has_manifest=context.manifest_path.is_file(),
        has_lock=context.lock_path.is_file(),
    )

    result.toolchain_available = client.adapter.is_available()
    if not result.toolchain_available:
        result.error = f"'{context.go_binary}' not found on PATH"
        return result

    try:
        result.toolchain_version = client.toolchain_version()
        result.modules_enabled = modules_enabled(context, client)
        if result.modules_enabled:
            current = client.current_module()
            result.current_module = "" if current in NO_MODULE_SENTINELS else current
    except ToolInvocationFailed as e:
        result.error = str(e)

    return result
