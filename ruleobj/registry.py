# ruleobj/registry.py
# Accepted rule names and the nesting limit consulted by the parser.
#
# Lookups are exact (case-sensitive); removal matches case-insensitively.
# Writers publish a fresh tuple under a lock, readers use whatever tuple is
# current, so a single lookup never observes a half-applied add/remove.

from __future__ import annotations
import logging
import threading
from typing import Iterable, Iterator, Tuple

from .errors import ObjectNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 2   # root is level 0


class NameRegistry:
    def __init__(self, names: Iterable[str] = (), max_depth: int = DEFAULT_MAX_DEPTH):
        self._lock = threading.Lock()
        self._names: Tuple[str, ...] = tuple(names)
        self.max_depth = max_depth

    @property
    def names(self) -> Tuple[str, ...]:
        return self._names

    def add(self, *names: str) -> None:
        """Append names in order. Duplicates are kept."""
        if not names:
            return
        with self._lock:
            self._names = self._names + tuple(names)
        logger.debug("registered rule names: %s", ", ".join(names))

    def remove(self, name: str) -> None:
        """Drop every entry equal to `name`, ignoring case. Absent names are fine."""
        target = name.casefold()
        with self._lock:
            before = len(self._names)
            self._names = tuple(n for n in self._names if n.casefold() != target)
            dropped = before - len(self._names)
        logger.debug("removed %d entr%s for rule name %r", dropped, "y" if dropped == 1 else "ies", name)

    def is_supported(self, name: str) -> bool:
        return name in self._names

    def require(self, name: str) -> str:
        if not self.is_supported(name):
            raise ObjectNotFoundError(name)
        return name

    def set_max_depth(self, limit: int) -> None:
        # no bounds check: 0 or negative limits reject everything below the root
        self.max_depth = limit
        logger.debug("max depth limit set to %d", limit)

    def clear(self) -> None:
        with self._lock:
            self._names = ()

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"NameRegistry(names={list(self._names)!r}, max_depth={self.max_depth})"


# ----------------------------- process-wide registry ------------------------

default_registry = NameRegistry()


def add_object_name(*names: str) -> None:
    default_registry.add(*names)


def remove_object_name(name: str) -> None:
    default_registry.remove(name)


def set_max_depth_limit(limit: int) -> None:
    default_registry.set_max_depth(limit)
