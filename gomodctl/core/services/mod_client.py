"""
Go module client — one method per ``go`` subcommand this tool uses.

The single seam between workflows and the toolchain's text output:
every subcommand is issued here and every output format is parsed
here (via ``mod_refs``).  Workflows never see raw argv or raw parsing.

Failure policy:
    - binary missing → ToolchainUnavailable, before anything is spawned
    - non-zero exit  → ToolInvocationFailed, tool text passed verbatim
    - no retries; the toolchain owns its own network/retry semantics
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from gomodctl.adapters.base import Adapter, ExecutionContext
from gomodctl.adapters.languages.go import GoAdapter
from gomodctl.core.context import ModuleContext
from gomodctl.core.models.command import CommandResult
from gomodctl.core.models.module import ModuleEntry, OutdatedModule
from gomodctl.core.services.mod_refs import (
    parse_current_version,
    parse_module_list,
    parse_outdated,
    parse_upgrade_candidate,
    parse_versions,
)

logger = logging.getLogger(__name__)


# ── Errors ──────────────────────────────────────────────────────


class GoModError(Exception):
    """Base class for every failure a module command can surface."""


class ToolchainUnavailable(GoModError):
    """The go executable cannot be located."""

    def __init__(self, binary: str):
        super().__init__(
            f"'{binary}' not found on PATH — install Go or set go_binary in .gomodctl.yml"
        )
        self.binary = binary


class ToolInvocationFailed(GoModError):
    """A go subcommand exited non-zero.

    ``str()`` is the tool's own message, unclassified.
    """

    def __init__(self, result: CommandResult):
        super().__init__(
            result.stderr.strip()
            or result.stdout.strip()
            or f"{result.command_line} exited with code {result.return_code}"
        )
        self.result = result


class SelectionCancelled(GoModError):
    """The user dismissed a prompt without choosing."""


# ── Background runs ─────────────────────────────────────────────


class BackgroundRun:
    """A streaming go invocation running on a daemon thread."""

    def __init__(
        self,
        adapter: Adapter,
        context: ExecutionContext,
        on_line: Callable[[str], None],
    ):
        self._adapter = adapter
        self._context = context
        self._on_line = on_line
        self._result: CommandResult | None = None
        self._error: Exception | None = None
        self._thread = threading.Thread(
            target=self._run,
            daemon=True,
            name=f"go-{context.args[0]}",
        )

    def start(self) -> BackgroundRun:
        self._thread.start()
        logger.info("Started background: go %s", self._context.key)
        return self

    def _run(self) -> None:
        try:
            self._result = self._adapter.stream(self._context, self._on_line)
        except Exception as e:
            logger.error("Background go %s failed: %s", self._context.key, e)
            self._error = e

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def wait(self, timeout: float | None = None) -> CommandResult | None:
        """Block until the run finishes; None if ``timeout`` expires first.

        Raises:
            GoModError: If the run itself crashed instead of producing a result.
        """
        self._thread.join(timeout)
        if self._error is not None:
            raise GoModError(f"go {self._context.key} failed: {self._error}") from self._error
        return self._result


# ── Client ──────────────────────────────────────────────────────


class GoModClient:
    """Structured access to the go module subcommands.

    Args:
        context: Working directory, binary and module-mode flag.
        adapter: Adapter to run commands through (default: GoAdapter).
    """

    def __init__(self, context: ModuleContext, adapter: Adapter | None = None):
        self.context = context
        self.adapter = adapter or GoAdapter(context.go_binary)

    # ── Plumbing ────────────────────────────────────────────────

    def _exec_context(self, *args: str) -> ExecutionContext:
        return ExecutionContext(
            args=list(args),
            working_dir=str(self.context.working_dir),
            env=self.context.subprocess_env(),
        )

    def ensure_available(self) -> None:
        """Raise ToolchainUnavailable when the go binary is missing."""
        if not self.adapter.is_available():
            raise ToolchainUnavailable(self.context.go_binary)

    def run(self, *args: str) -> CommandResult:
        """Run one subcommand and return its result, raising on failure."""
        self.ensure_available()
        result = self.adapter.execute(self._exec_context(*args))
        if result.failed:
            logger.debug("go %s failed: %s", " ".join(args), result.stderr.strip())
            raise ToolInvocationFailed(result)
        return result

    def _text(self, *args: str) -> str:
        return self.run(*args).stdout

    # ── Queries ─────────────────────────────────────────────────

    def toolchain_version(self) -> str:
        """``go version`` output, trimmed."""
        return self._text("version").strip()

    def current_module(self) -> str:
        """Path of the main module (``go list -m``), trimmed."""
        return self._text("list", "-m").strip()

    def list_modules(self) -> list[ModuleEntry]:
        """Every module in the build list (``go list -m all``)."""
        return parse_module_list(self._text("list", "-m", "all"))

    def list_outdated(self) -> list[OutdatedModule]:
        """Modules with a newer version available (``go list -m -u all``)."""
        return parse_outdated(self._text("list", "-m", "-u", "all"))

    def upgrade_candidate(self, module: str) -> str | None:
        """Newest version reported for ``module``, or None when already current."""
        output = self._text("list", "-m", "-u", module).strip()
        candidate = parse_upgrade_candidate(output)
        if candidate is None or candidate == parse_current_version(output):
            return None
        return candidate

    def available_versions(self, module: str) -> list[str]:
        """Tagged versions of ``module`` (``go list -m -versions``)."""
        return parse_versions(self._text("list", "-m", "-versions", module))

    # ── Mutations (delegated to the toolchain) ──────────────────

    def get(self, module: str, version: str = "latest") -> str:
        """``go get module@version``; version may also be ``latest`` or ``main``."""
        return self.run("get", f"{module}@{version}").output

    def upgrade_all(
        self,
        patch_only: bool = False,
        on_line: Callable[[str], None] | None = None,
    ) -> BackgroundRun:
        """Start ``go get -u[=patch] -m all`` in the background, streaming lines."""
        self.ensure_available()
        flag = "-u=patch" if patch_only else "-u"
        run = BackgroundRun(
            self.adapter,
            self._exec_context("get", flag, "-m", "all"),
            on_line or (lambda line: logger.info("%s", line)),
        )
        return run.start()

    def tidy(self) -> str:
        return self.run("mod", "tidy").output

    def replace(self, module: str, path: str) -> str:
        """``go mod edit -replace module=path``."""
        return self.run("mod", "edit", "-replace", f"{module}={path}").output

    def why(self, module: str) -> str:
        return self.run("mod", "why", module).output

    def format_manifest(self) -> str:
        """``go mod edit -fmt``."""
        return self.run("mod", "edit", "-fmt").output
