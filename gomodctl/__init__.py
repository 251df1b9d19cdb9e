"""gomodctl — Go module manifest tooling on top of the ``go`` command."""

__version__ = "0.1.0"
