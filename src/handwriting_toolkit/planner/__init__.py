"""Page planning for long answers."""

from .paginator import plan_pages

__all__ = ["plan_pages"]
