"""
Module resolver — decide which module a workflow acts on.

A line of text (the editor's current line, a CLI argument) is matched
first; failing that, the user picks from the live build list.
"""

from __future__ import annotations

import logging
from pathlib import Path

from gomodctl.core.context import ModuleContext
from gomodctl.core.services.mod_client import GoModClient, SelectionCancelled
from gomodctl.core.services.mod_host import Host
from gomodctl.core.services.mod_mode import require_modules
from gomodctl.core.services.mod_refs import extract_reference

logger = logging.getLogger(__name__)


def resolve_module(
    context: ModuleContext,
    client: GoModClient,
    host: Host,
    line: str | None = None,
) -> str:
    """Return the module path to act on.

    Raises:
        ModulesDisabled: Module mode is not active.
        SelectionCancelled: No line match and the user dismissed the list.
    """
    require_modules(context, client)

    if line:
        reference = extract_reference(line)
        if reference:
            logger.debug("Resolved %s from line", reference)
            return reference

    choices = [entry.path for entry in client.list_modules()]
    choice = host.select_one("Module", choices)
    if not choice:
        raise SelectionCancelled("No module selected")
    return choice


def read_line_at(location: str, base_dir: Path | None = None) -> str:
    """Return the text of ``FILE:LINENO`` (1-based), relative paths against ``base_dir``."""
    path_part, sep, number_part = location.rpartition(":")
    if not sep or not path_part:
        raise ValueError(f"Expected FILE:LINE, got {location!r}")
    try:
        number = int(number_part)
    except ValueError as e:
        raise ValueError(f"Line number must be an integer: {number_part!r}") from e
    if number < 1:
        raise ValueError(f"Line numbers start at 1, got {number}")

    path = Path(path_part)
    if base_dir is not None and not path.is_absolute():
        path = base_dir / path

    lines = path.read_text(encoding="utf-8").splitlines()
    if number > len(lines):
        raise ValueError(f"{path} has only {len(lines)} lines")
    return lines[number - 1]
