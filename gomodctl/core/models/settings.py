"""
Settings model — user configuration from .gomodctl.yml and environment.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

ModuleMode = Literal["on", "off", "auto"]


class Settings(BaseModel):
    """Static configuration used to build a ModuleContext."""

    go_binary: str = "go"
    go111module: ModuleMode = "auto"
    # "go version" substrings for which "auto" is upgraded to "on"
    auto_enable_versions: list[str] = Field(default_factory=lambda: ["go1.11"])
    format_on_save: bool = True
    watch_interval: float = Field(default=1.0, gt=0)
