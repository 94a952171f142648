# ruleobj/document.py
# Loads YAML/JSON rule documents and hands the value under the rule key to
# the parser. JSON is a YAML subset, so one loader covers both formats.

from __future__ import annotations
import logging
import re
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .errors import DocumentError, ObjectUndefinedError
from .parser import RuleNode, parse_rule
from .registry import NameRegistry

logger = logging.getLogger(__name__)

DEFAULT_RULE_KEY = "rule"

_INT_TAG = "tag:yaml.org,2002:int"
_FLOAT_TAG = "tag:yaml.org,2002:float"


class RuleLoader(yaml.SafeLoader):
    """SafeLoader without YAML 1.1 base-60 numbers, so `opening: 10:00` stays text."""


RuleLoader.yaml_implicit_resolvers = {
    first: [(tag, rx) for tag, rx in resolvers if tag not in (_INT_TAG, _FLOAT_TAG)]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
RuleLoader.add_implicit_resolver(
    _INT_TAG,
    re.compile(r"""^(?:[-+]?0b[0-1_]+
                    |[-+]?0[0-7_]+
                    |[-+]?(?:0|[1-9][0-9_]*)
                    |[-+]?0x[0-9a-fA-F_]+)$""", re.X),
    list("-+0123456789"),
)
RuleLoader.add_implicit_resolver(
    _FLOAT_TAG,
    re.compile(r"""^(?:[-+]?(?:[0-9][0-9_]*)\.[0-9_]*(?:[eE][-+][0-9]+)?
                    |\.[0-9][0-9_]*(?:[eE][-+][0-9]+)?
                    |[-+]?\.(?:inf|Inf|INF)
                    |\.(?:nan|NaN|NAN))$""", re.X),
    list("-+0123456789."),
)


def load_document(text: str) -> Any:
    try:
        return yaml.load(text, Loader=RuleLoader)
    except yaml.YAMLError as e:
        raise DocumentError(f"cannot decode rule document: {e}") from e


def parse_rule_document(
    text: str,
    key: str = DEFAULT_RULE_KEY,
    registry: Optional[NameRegistry] = None,
) -> RuleNode:
    """Parse the rule expression bound to `key` in a YAML or JSON document.

    A missing key is treated like `rule: ~` (undefined).
    """
    doc = load_document(text)
    if not isinstance(doc, dict):
        raise DocumentError(f"rule document must be a mapping, got {type(doc).__name__}")
    if key not in doc:
        raise ObjectUndefinedError(f"document has no '{key}' field")
    node = parse_rule(doc[key], registry)
    logger.debug("parsed rule %r (%d nodes)", node.name, sum(1 for _ in node.walk()))
    return node


def parse_rule_file(
    path: Union[str, Path],
    key: str = DEFAULT_RULE_KEY,
    registry: Optional[NameRegistry] = None,
) -> RuleNode:
    p = Path(path)
    logger.info("loading rule document %s", p)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentError(f"cannot read rule document {p}: {e}") from e
    return parse_rule_document(text, key=key, registry=registry)
