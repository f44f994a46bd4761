"""Mutual-exclusion flag held for the duration of each mutating entry point."""

from __future__ import annotations

from types import TracebackType
from typing import Optional, Type

from .errors import ReentrantCall


class ReentrancyGuard:
    """
    Single held/released flag.

    Use as a context manager. Entering while the flag is held raises
    ``ReentrantCall`` immediately and leaves the flag held by the outer call.
    """

    def __init__(self) -> None:
        self._entered = False

    @property
    def entered(self) -> bool:
        return self._entered

    def __enter__(self) -> "ReentrancyGuard":
        if self._entered:
            raise ReentrantCall()
        self._entered = True
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self._entered = False
