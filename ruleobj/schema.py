# ruleobj/schema.py
# JSON Schema checks for serialized RuleNode trees (RuleNode.to_dict()).

from __future__ import annotations
import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Union

import jsonschema
from jsonschema import Draft202012Validator

from .parser import RuleNode

SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "rule-node.schema.json"


@lru_cache(maxsize=1)
def load_schema() -> Dict[str, Any]:
    # BOM-safe read
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8-sig"))


def validate_tree(tree: Union[RuleNode, Dict[str, Any]]) -> Dict[str, Any]:
    """Validate a node (or its dict form); raises jsonschema.ValidationError.

    Levels are checked too: the schema alone cannot relate a child's level
    to its parent's.
    """
    obj = tree.to_dict() if isinstance(tree, RuleNode) else tree
    jsonschema.validate(instance=obj, schema=load_schema(), cls=Draft202012Validator)
    check_levels(obj)
    return obj


def check_levels(obj: Dict[str, Any], expected: int | None = None) -> None:
    level = obj.get("level")
    if expected is not None and level != expected:
        raise jsonschema.ValidationError(
            f"node {obj.get('name')!r} has level {level}, expected {expected}"
        )
    for child in obj.get("children") or []:
        check_levels(child, level + 1)
