"""
Module context — the explicit state every command runs against.

Replaces ambient process environment: the module-mode flag lives on
this object and is handed to each child process through
``subprocess_env()``.  Entry points build ONE context at startup:

    - CLI:    main.py → ModuleContext.from_settings(settings, cwd)
    - Tests:  ModuleContext(working_dir=tmp_path, ...)

Initialization (``mod_mode.initialize_module_mode``) may flip
``go111module`` once; nothing else mutates it.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from gomodctl.core.models.settings import ModuleMode, Settings


class ModuleContext(BaseModel):
    """Where and how to talk to the go toolchain."""

    model_config = ConfigDict(validate_assignment=True)

    working_dir: Path = Field(default_factory=Path.cwd)
    go_binary: str = "go"
    go111module: ModuleMode = "auto"
    auto_enable_versions: list[str] = Field(default_factory=lambda: ["go1.11"])
    format_on_save: bool = True
    watch_interval: float = 1.0
    manifest_name: str = "go.mod"
    lock_name: str = "go.sum"

    @classmethod
    def from_settings(cls, settings: Settings, working_dir: Path | None = None) -> ModuleContext:
        """Build a context from loaded settings."""
        return cls(
            working_dir=(working_dir or Path.cwd()).resolve(),
            go_binary=settings.go_binary,
            go111module=settings.go111module,
            auto_enable_versions=list(settings.auto_enable_versions),
            format_on_save=settings.format_on_save,
            watch_interval=settings.watch_interval,
        )

    @property
    def manifest_path(self) -> Path:
        return self.working_dir / self.manifest_name

    @property
    def lock_path(self) -> Path:
        return self.working_dir / self.lock_name

    def subprocess_env(self, base: dict[str, str] | None = None) -> dict[str, str]:
        """Environment for a child go process, with GO111MODULE from this context."""
        env = dict(os.environ if base is None else base)
        env["GO111MODULE"] = self.go111module
        return env
