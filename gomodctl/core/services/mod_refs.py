"""
Module reference matching — module paths and versions in text.

Two independent regex matchers pull a module path and a version out of
any line of go.mod / go.sum text (or toolchain output).  Leftmost match
wins; nothing else about the manifest grammar is parsed.

Also hosts the parsers for the plain-text output formats of
``go list -m`` that the client depends on:

    go list -m all           path version [=> replacement]
    go list -m -u <mod>      path version [latest]
    go list -m -versions     path v1 v2 v3 ...

Pure functions, no I/O.
"""

from __future__ import annotations

import re

from gomodctl.core.models.module import ModuleEntry, OutdatedModule

# ── Patterns ────────────────────────────────────────────────────

MODULE_PATH_RE = re.compile(
    r"(?:[a-z0-9-]+\.)+[a-z]+"    # domain: github.com, go.uber.org
    r"(?:/[A-Za-z0-9_-]+)*"       # path: /lib/pq
    r"(?:\.[A-Za-z0-9_-]+)?"      # dotted suffix: /yaml.v2, /foo.bar
    r"(?:\.v[0-9]+)?"             # major version suffix
)

VERSION_RE = re.compile(
    r"v[0-9]+\.[0-9]+\.[0-9]+"
    r"(?:-[0-9a-z]+(?:[.-][0-9a-z]+)*)?"   # pre-release / pseudo-version
    r"(?:\+incompatible)?"
    r"(?:/go\.mod)?"
)

_BRACKET_RE = re.compile(r"\[([^\]]*)\]")

# ``go list -m`` prints this when there is no main module
NO_MODULE_SENTINELS = frozenset({"", "command-line-arguments"})


# ── Matchers ────────────────────────────────────────────────────


def extract_reference(line: str) -> str | None:
    """Return the leftmost module path in ``line``, or None."""
    match = MODULE_PATH_RE.search(line)
    return match.group(0) if match else None


def extract_version(text: str) -> str | None:
    """Return the leftmost version token in ``text``, or None."""
    match = VERSION_RE.search(text)
    return match.group(0) if match else None


def extract_pair(line: str) -> tuple[str | None, str | None]:
    """Module path and version of a manifest or lock line, each possibly None."""
    return extract_reference(line), extract_version(line)


# ── Output parsers ──────────────────────────────────────────────


def parse_module_list(text: str) -> list[ModuleEntry]:
    """Parse ``go list -m all`` output into entries, in listing order."""
    entries: list[ModuleEntry] = []
    for line in text.splitlines():
        fields = line.split()
        if not fields:
            continue

        replace = ""
        if "=>" in fields:
            arrow = fields.index("=>")
            replace = " ".join(fields[arrow + 1:])
            fields = fields[:arrow]

        entries.append(ModuleEntry(
            path=fields[0],
            version=fields[1] if len(fields) > 1 else "",
            replace=replace,
        ))
    return entries


def parse_upgrade_candidate(text: str) -> str | None:
    """Version inside the first ``[...]`` segment of ``go list -m -u`` output."""
    match = _BRACKET_RE.search(text)
    if not match:
        return None
    return extract_version(match.group(1))


def parse_current_version(text: str) -> str | None:
    """The selected version column (second token) of a ``go list -m`` line."""
    fields = text.split()
    if len(fields) < 2 or fields[1].startswith("["):
        return None
    return fields[1]


def parse_versions(text: str) -> list[str]:
    """Parse ``go list -m -versions`` output: drop the leading module name."""
    return text.split()[1:]


def parse_outdated(text: str) -> list[OutdatedModule]:
    """Modules in ``go list -m -u all`` output that carry a bracketed candidate."""
    outdated: list[OutdatedModule] = []
    for line in text.splitlines():
        latest = parse_upgrade_candidate(line)
        if not latest:
            continue
        fields = line.split()
        current = parse_current_version(line) or ""
        if current == latest:
            continue
        outdated.append(OutdatedModule(path=fields[0], current=current, latest=latest))
    return outdated
