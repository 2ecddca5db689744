"""Pin files per project and branch, and hop between them."""

__version__ = "0.1.0"
