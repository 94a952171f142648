"""Rule-object parser.

Turns a small rule-expression language, written as nested YAML/JSON values,
into a tree of RuleNode objects whose names come from a NameRegistry.

    from ruleobj import NameRegistry, parse_rule
    reg = NameRegistry(["and", "user", "service"])
    parse_rule({"and": ["user", "service"]}, reg)
"""

from .errors import (
    DocumentError,
    MalformedObjectError,
    MaxDepthExceededError,
    ObjectNotAcceptableError,
    ObjectNotFoundError,
    ObjectUndefinedError,
    RuleObjectError,
)
from .registry import (
    DEFAULT_MAX_DEPTH,
    NameRegistry,
    add_object_name,
    default_registry,
    remove_object_name,
    set_max_depth_limit,
)
from .parser import RuleNode, classify, parse_rule, parse_rule_json
from .document import DEFAULT_RULE_KEY, load_document, parse_rule_document, parse_rule_file

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_RULE_KEY",
    "DocumentError",
    "MalformedObjectError",
    "MaxDepthExceededError",
    "NameRegistry",
    "ObjectNotAcceptableError",
    "ObjectNotFoundError",
    "ObjectUndefinedError",
    "RuleNode",
    "RuleObjectError",
    "add_object_name",
    "classify",
    "default_registry",
    "load_document",
    "parse_rule",
    "parse_rule_document",
    "parse_rule_file",
    "parse_rule_json",
    "remove_object_name",
    "set_max_depth_limit",
]
