"""
Module models — what the toolchain tells us about resolved modules.

These are produced fresh from ``go list`` output on every query and
never cached: the toolchain is the source of truth.
"""

from __future__ import annotations

from pydantic import BaseModel


class ModuleEntry(BaseModel):
    """One line of a ``go list -m all`` listing.

    The main module has no version. A replaced module carries the
    text after ``=>`` in ``replace``.
    """

    path: str
    version: str = ""
    replace: str = ""

    def as_pair(self) -> tuple[str, str]:
        return (self.path, self.version)

    def __str__(self) -> str:
        text = f"{self.path} {self.version}".strip()
        if self.replace:
            text += f" => {self.replace}"
        return text


class OutdatedModule(BaseModel):
    """A module with a newer version reported by ``go list -m -u``."""

    path: str
    current: str = ""
    latest: str
