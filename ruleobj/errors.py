# ruleobj/errors.py
# Error family raised while turning a rule expression into RuleNode trees.
# Every failure derives from RuleObjectError so callers can catch the family.

from __future__ import annotations
from typing import Any


class RuleObjectError(Exception):
    pass


class ObjectUndefinedError(RuleObjectError):
    def __init__(self, reason: str):
        super().__init__(f"object undefined: {reason}")
        self.reason = reason


class ObjectNotAcceptableError(RuleObjectError):
    def __init__(self, value: Any):
        super().__init__(f"object not acceptable: {_short(value)}, please choose one")
        self.value = value


class ObjectNotFoundError(RuleObjectError):
    def __init__(self, name: str):
        super().__init__(f"'{name}' object not found")
        self.name = name


class MaxDepthExceededError(RuleObjectError):
    def __init__(self, level: int, limit: int):
        super().__init__(f"object max depth limit ({limit}) exceeded at level {level}")
        self.level = level
        self.limit = limit


class MalformedObjectError(RuleObjectError):
    """Value is not a bare name, a name with a list, or a name with an object."""
    def __init__(self, value: Any, detail: str | None = None):
        msg = f"malformed object: {_short(value)}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)
        self.value = value
        self.detail = detail


class DocumentError(Exception):
    """Raised when the surrounding document cannot be decoded or has the wrong shape."""
    pass


def _short(value: Any, limit: int = 80) -> str:
    s = repr(value)
    if len(s) > limit:
        return s[:limit - 3] + "..."
    return s
