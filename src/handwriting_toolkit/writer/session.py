"""
Module: writer.session

Purpose:
    Stale-write prevention for renders that can be superseded. Each render
    takes a ticket from a RenderSession; starting a newer render makes every
    older ticket stale, and stale work is abandoned instead of applied.

Key Classes:
    - RenderSession: Lock-protected generation counter
    - RenderTicket: Handle checked at suspension points
    - RenderCancelled: Raised when a stale ticket is checked

Used By:
    - writer.layout: Checks its ticket after math calls and per paragraph
    - builder.controller: One ticket per exam render, commit on completion
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class RenderCancelled(Exception):
    """Raised when a render has been superseded by a newer one."""

    def __init__(self, generation: int, current: int):
        self.generation = generation
        self.current = current
        super().__init__(f"Render {generation} superseded by {current}")


class RenderTicket:
    """Identifies one render generation within a session."""

    def __init__(self, session: RenderSession, generation: int):
        self._session = session
        self.generation = generation

    @property
    def is_stale(self) -> bool:
        return self._session.current_generation != self.generation

    def raise_if_stale(self) -> None:
        """Raise RenderCancelled if a newer render has begun."""
        current = self._session.current_generation
        if current != self.generation:
            raise RenderCancelled(self.generation, current)

    def __repr__(self) -> str:
        return f"RenderTicket(generation={self.generation})"


class RenderSession:
    """
    Tracks which render is current for one output (e.g. a preview pane).

    Example:
        >>> session = RenderSession()
        >>> first = session.begin()
        >>> second = session.begin()
        >>> first.is_stale, second.is_stale
        (True, False)
    """

    def __init__(self, on_commit: Optional[Callable[[Any], None]] = None):
        self._lock = threading.Lock()
        self._generation = 0
        self._on_commit = on_commit
        self.committed: Any = None

    @property
    def current_generation(self) -> int:
        with self._lock:
            return self._generation

    def begin(self) -> RenderTicket:
        """Start a new render; all earlier tickets become stale."""
        with self._lock:
            self._generation += 1
            generation = self._generation
        logger.debug(f"Render generation {generation} started")
        return RenderTicket(self, generation)

    def commit(self, ticket: RenderTicket, value: Any) -> bool:
        """
        Apply a render result if its ticket is still current.

        Returns:
            True if applied, False if the result was stale and dropped
        """
        with self._lock:
            if ticket.generation != self._generation:
                logger.debug(
                    f"Dropping stale render {ticket.generation} (current {self._generation})"
                )
                return False
            self.committed = value
        if self._on_commit is not None:
            self._on_commit(value)
        return True
