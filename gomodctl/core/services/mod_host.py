"""
Interactive host protocol — the four primitives workflows need.

The host (a terminal, an editor, a test script) supplies choices,
confirmations and free text, and shows messages.  Workflows never
touch a terminal directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class Host(ABC):
    """What a workflow may ask of its user."""

    @abstractmethod
    def select_one(self, title: str, options: list[str]) -> str | None:
        """Pick one of ``options``; None when the user cancels."""

    @abstractmethod
    def confirm(self, message: str) -> bool:
        """Yes/no question."""

    @abstractmethod
    def read_text(self, prompt: str, default: str | None = None) -> str:
        """Free-text answer."""

    @abstractmethod
    def display(self, message: str) -> None:
        """Show a message or a line of tool output."""
