"""
Go adapter — runs the ``go`` executable.

Detects the toolchain and executes one subcommand per call, either
captured (``execute``) or line-streamed (``stream``).  Knows nothing
about what the subcommands mean; parsing lives in the services.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from collections.abc import Callable

from gomodctl.adapters.base import Adapter, ExecutionContext
from gomodctl.core.models.command import CommandResult

logger = logging.getLogger(__name__)


class GoAdapter(Adapter):
    """Go toolchain adapter.

    Args:
        binary: Executable name or path (default: ``go`` on PATH).
    """

    def __init__(self, binary: str = "go"):
        self._binary = binary

    @property
    def name(self) -> str:
        return "go"

    @property
    def binary(self) -> str:
        return self._binary

    def is_available(self) -> bool:
        return shutil.which(self._binary) is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        if not context.args:
            return False, "Missing go subcommand"
        return True, ""

    def _argv(self, context: ExecutionContext) -> list[str]:
        return [self._binary, *context.args]

    def _not_found(self, context: ExecutionContext) -> str:
        # FileNotFoundError covers a missing cwd as well as a missing binary
        if not os.path.isdir(context.working_dir):
            return f"Working directory not found: {context.working_dir}"
        return f"{self._binary}: executable not found"

    def execute(self, context: ExecutionContext) -> CommandResult:
        argv = self._argv(context)
        valid, error = self.validate(context)
        if not valid:
            return CommandResult.failure(adapter=self.name, command=argv, stderr=error)

        logger.debug("Executing: %s (cwd=%s)", " ".join(argv), context.working_dir)
        start = time.monotonic()

        try:
            result = subprocess.run(
                argv,
                cwd=context.working_dir,
                env=context.env,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError:
            return CommandResult.failure(
                adapter=self.name,
                command=argv,
                stderr=self._not_found(context),
            )
        except OSError as e:
            return CommandResult.failure(
                adapter=self.name,
                command=argv,
                stderr=f"Command execution error: {e}",
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.info("%s exited %d in %dms", context.key, result.returncode, elapsed_ms)

        if result.returncode == 0:
            return CommandResult.success(
                adapter=self.name,
                command=argv,
                stdout=result.stdout,
                stderr=result.stderr,
                return_code=0,
                duration_ms=elapsed_ms,
            )
        return CommandResult.failure(
            adapter=self.name,
            command=argv,
            stderr=result.stderr,
            stdout=result.stdout,
            return_code=result.returncode,
            duration_ms=elapsed_ms,
        )

    def stream(
        self,
        context: ExecutionContext,
        on_line: Callable[[str], None],
    ) -> CommandResult:
        argv = self._argv(context)
        valid, error = self.validate(context)
        if not valid:
            return CommandResult.failure(adapter=self.name, command=argv, stderr=error)

        logger.debug("Streaming: %s (cwd=%s)", " ".join(argv), context.working_dir)
        start = time.monotonic()
        lines: list[str] = []

        try:
            proc = subprocess.Popen(
                argv,
                cwd=context.working_dir,
                env=context.env,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
            )
        except FileNotFoundError:
            return CommandResult.failure(
                adapter=self.name,
                command=argv,
                stderr=self._not_found(context),
            )
        except OSError as e:
            return CommandResult.failure(
                adapter=self.name,
                command=argv,
                stderr=f"Command execution error: {e}",
            )

        try:
            if proc.stdout:
                for line in proc.stdout:
                    line = line.rstrip()
                    lines.append(line)
                    on_line(line)
        except Exception as e:
            logger.warning("Output handler failed for %s, stopping: %s", context.key, e)
            proc.kill()
            proc.wait()
            return CommandResult.failure(
                adapter=self.name,
                command=argv,
                stdout="\n".join(lines),
                stderr=f"Output handler failed: {e}",
                return_code=proc.returncode,
                duration_ms=int((time.monotonic() - start) * 1000),
            )
        finally:
            if proc.stdout:
                proc.stdout.close()
        proc.wait()

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.info("%s exited %d in %dms", context.key, proc.returncode, elapsed_ms)
        output = "\n".join(lines)

        if proc.returncode == 0:
            return CommandResult.success(
                adapter=self.name,
                command=argv,
                stdout=output,
                return_code=0,
                duration_ms=elapsed_ms,
            )
        return CommandResult.failure(
            adapter=self.name,
            command=argv,
            stderr=output,
            return_code=proc.returncode,
            duration_ms=elapsed_ms,
        )
