"""Style profile persistence."""

from .style_store import JsonStyleStore, StyleNotFoundError, StyleStore

__all__ = ["JsonStyleStore", "StyleNotFoundError", "StyleStore"]
