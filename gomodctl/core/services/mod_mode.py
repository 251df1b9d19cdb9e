"""
Module-mode detection and one-time enablement.

Module support counts as enabled when the context's GO111MODULE flag
is a set enablement signal ("on" or "auto") AND ``go list -m`` names a
real main module rather than a no-module sentinel.

``initialize_module_mode`` runs once per session and may upgrade the
flag:

    off  → on                       (force-enable)
    auto → on                       if ``go version`` matches a known version
    auto → auto                     otherwise (the toolchain decides)
    on   → on
"""

from __future__ import annotations

import logging

from gomodctl.core.context import ModuleContext
from gomodctl.core.services.mod_client import GoModClient, GoModError, ToolInvocationFailed
from gomodctl.core.services.mod_refs import NO_MODULE_SENTINELS

logger = logging.getLogger(__name__)

_ENABLED_SIGNALS = ("on", "auto")


class ModulesDisabled(GoModError):
    """Module-aware mode is not active for the working directory."""


def initialize_module_mode(context: ModuleContext, client: GoModClient) -> str:
    """Apply the one-time GO111MODULE upgrade to ``context``; return the new state."""
    state = context.go111module

    if state == "off":
        context.go111module = "on"
        logger.info("GO111MODULE off → on (forced)")
    elif state == "auto":
        version = client.toolchain_version()
        matched = next((v for v in context.auto_enable_versions if v in version), None)
        if matched:
            context.go111module = "on"
            logger.info("GO111MODULE auto → on (%s matches %s)", version, matched)
        else:
            logger.debug("GO111MODULE stays auto (%s)", version)

    return context.go111module


def modules_enabled(context: ModuleContext, client: GoModClient) -> bool:
    """Whether module-aware commands can run in the context's working directory."""
    if context.go111module not in _ENABLED_SIGNALS:
        return False

    try:
        current = client.current_module()
    except ToolInvocationFailed as e:
        logger.debug("No main module: %s", e)
        return False

    return current not in NO_MODULE_SENTINELS


def require_modules(context: ModuleContext, client: GoModClient) -> None:
    """Raise ModulesDisabled unless module mode is active."""
    if not modules_enabled(context, client):
        raise ModulesDisabled(
            f"Go modules are not enabled in {context.working_dir} "
            f"(GO111MODULE={context.go111module}, no main module found)"
        )
