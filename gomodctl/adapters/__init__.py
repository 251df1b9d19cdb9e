"""Adapters — tool bindings for the go toolchain.

Public re-exports for convenient access.
"""

from gomodctl.adapters.base import Adapter, ExecutionContext
from gomodctl.adapters.languages.go import GoAdapter
from gomodctl.adapters.mock import MockAdapter

__all__ = [
    "Adapter",
    "ExecutionContext",
    "GoAdapter",
    "MockAdapter",
]
