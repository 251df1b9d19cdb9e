"""
Logging setup for gomodctl.

The go toolchain's own output never travels through logging: it is
printed or streamed by the CLI.  Log records describe what gomodctl
itself did (which subcommands ran, how long they took, which config
file was picked up, how GO111MODULE was settled).

The console level comes from the first of:
    --debug / --verbose / --quiet  >  GOMODCTL_LOG_LEVEL  >  WARNING

GOMODCTL_LOG_FILE adds a file handler; GOMODCTL_LOG_FILE_LEVEL lets it
record more (or less) than the console shows.
"""

from __future__ import annotations

import logging
import sys

# ── Format strings ──────────────────────────────────────────────

# Warnings and errors read like CLI messages
_FMT_MINIMAL = "%(message)s"

# --verbose: clock time plus the emitting module
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_DATEFMT_VERBOSE = "%H:%M:%S"

# --debug: level and source line too
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"

# Log file: full date, always the debug layout
_FMT_FILE = _FMT_DEBUG
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install gomodctl's handlers on the root logger.

    Safe to call more than once; earlier handlers are replaced, which
    keeps repeated CliRunner invocations from stacking output.

    Args:
        level: Console level name. Unknown names fall back to WARNING.
        log_file: Append records to this file as well.
        log_file_level: Level for the file handler (default: ``level``).
    """
    console_level = _parse_level(level)

    if console_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_DEBUG
    elif console_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT_VERBOSE
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    # stdout belongs to command output (and --json)
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(file_handler)

    # Root passes everything either handler wants; handlers filter
    root.setLevel(root_level)

    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Level name → numeric level, WARNING for blanks and unknown names."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
