# ruleobj/parser.py
# Turns a decoded rule expression (the value bound to a document's `rule:` key)
# into a RuleNode tree.
#
# A value takes one of three shapes, checked in this order:
#   A. bare name            "user"
#   B. name with a list     {"and": ["user", {"or": [...]}]}
#   C. name with an object  {"location": {"region": "uk"}}
# Once a shape is picked, any error (unknown name, depth, bad child) is final.

from __future__ import annotations
import json
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple, Union

from .errors import (
    MalformedObjectError,
    MaxDepthExceededError,
    ObjectNotAcceptableError,
    ObjectUndefinedError,
)
from .registry import NameRegistry, default_registry

SHAPE_NAME = "name"
SHAPE_LIST = "list"
SHAPE_OBJECT = "object"


@dataclass(frozen=True)
class RuleNode:
    name: str
    level: int = 0
    children: Tuple["RuleNode", ...] = ()
    arguments: str = ""     # compact JSON, keys sorted; "" when the node has none

    @property
    def args(self) -> Any:
        """Decoded arguments, or None for nodes without them."""
        if not self.arguments:
            return None
        return json.loads(self.arguments)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def walk(self) -> Iterator["RuleNode"]:
        """Pre-order, depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "level": self.level,
            "children": [c.to_dict() for c in self.children],
            "arguments": self.args,
        }


def serialize_arguments(value: Any) -> str:
    # str() covers YAML scalars that have no JSON form (dates, timestamps)
    return json.dumps(_text_keys(value), separators=(",", ":"), sort_keys=True, ensure_ascii=False, default=str)


def _text_keys(value: Any) -> Any:
    """Turn mapping keys into JSON object keys (YAML allows `yes:`, `1:`, dates)."""
    if isinstance(value, dict):
        return {_key_text(k): _text_keys(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_text_keys(v) for v in value]
    return value


def _key_text(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    return str(key)


# ----------------------------- entry points ----------------------------------

def parse_rule(value: Any, registry: Optional[NameRegistry] = None) -> RuleNode:
    """Parse an already-decoded rule expression into a RuleNode tree.

    Raises a RuleObjectError subclass on the first problem found; no partial
    tree is ever returned.
    """
    reg = registry if registry is not None else default_registry
    _check_root(value)
    return _parse_node(value, 0, reg)


def parse_rule_json(raw: Union[str, bytes], registry: Optional[NameRegistry] = None) -> RuleNode:
    """Same as parse_rule, but for the JSON text of the rule expression."""
    if isinstance(raw, (bytes, bytearray)):
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedObjectError(raw, str(e)) from e
    else:
        text = raw
    s = (text or "").strip()
    if s == '""':
        raise ObjectUndefinedError("object has empty string")
    if s == "null" or s == "":
        raise ObjectUndefinedError("object is null object")
    if s.startswith("["):
        raise ObjectNotAcceptableError(s)
    try:
        value = json.loads(s)
    except json.JSONDecodeError as e:
        raise MalformedObjectError(s, str(e)) from e
    return parse_rule(value, registry)


def _check_root(value: Any) -> None:
    if value is None:
        raise ObjectUndefinedError("object is null object")
    if isinstance(value, str) and value == "":
        raise ObjectUndefinedError("object has empty string")
    if isinstance(value, list):
        # a list is only valid as the value of a named key
        raise ObjectNotAcceptableError(value)


# ----------------------------- recursion -------------------------------------

def classify(value: Any) -> str:
    """Return SHAPE_NAME, SHAPE_LIST or SHAPE_OBJECT for a non-root value.

    Raises MalformedObjectError for anything else and ObjectNotAcceptableError
    for mappings carrying more than one name.
    """
    # null decodes as an empty name below the root, which then fails the lookup
    if value is None or isinstance(value, str):
        return SHAPE_NAME
    if isinstance(value, dict):
        if not value:
            raise MalformedObjectError(value, "mapping has no rule name")
        if len(value) > 1:
            raise ObjectNotAcceptableError(list(value))
        (inner,) = value.values()
        if inner is None or isinstance(inner, list):
            return SHAPE_LIST
        return SHAPE_OBJECT
    raise MalformedObjectError(value, f"unexpected {type(value).__name__}")


def _parse_node(value: Any, level: int, reg: NameRegistry) -> RuleNode:
    if level > reg.max_depth:
        raise MaxDepthExceededError(level, reg.max_depth)

    shape = classify(value)

    if shape == SHAPE_NAME:
        name = value if value is not None else ""
        return RuleNode(name=reg.require(name), level=level)

    (name, inner), = value.items()
    if not isinstance(name, str):
        # YAML allows non-string keys (e.g. `1: [...]`); names must be text
        raise MalformedObjectError(value, f"rule name must be a string, got {type(name).__name__}")
    reg.require(name)

    if shape == SHAPE_LIST:
        children = tuple(_parse_node(child, level + 1, reg) for child in (inner or []))
        return RuleNode(name=name, level=level, children=children)

    return RuleNode(name=name, level=level, arguments=serialize_arguments(inner))
