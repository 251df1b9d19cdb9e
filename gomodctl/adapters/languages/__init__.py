"""Language adapters — go."""

from gomodctl.adapters.languages.go import GoAdapter

__all__ = ["GoAdapter"]
