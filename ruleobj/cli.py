# ruleobj/cli.py
# CLI for parsing a rule document and printing the resulting node tree.

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema

from .document import DEFAULT_RULE_KEY, parse_rule_file
from .errors import DocumentError, RuleObjectError
from .registry import DEFAULT_MAX_DEPTH, NameRegistry
from .schema import validate_tree

logger = logging.getLogger(__name__)

ENV_NAMES = "RULEOBJ_NAMES"
ENV_MAX_DEPTH = "RULEOBJ_MAX_DEPTH"


def _split_names(values: Optional[List[str]]) -> List[str]:
    out: List[str] = []
    for chunk in values or []:
        out.extend(n.strip() for n in chunk.split(",") if n.strip())
    return out


def _build_registry(p: argparse.ArgumentParser, args: argparse.Namespace) -> NameRegistry:
    names = _split_names(args.names)
    if not names and os.environ.get(ENV_NAMES):
        names = _split_names([os.environ[ENV_NAMES]])
    max_depth = args.max_depth
    if max_depth is None:
        raw = os.environ.get(ENV_MAX_DEPTH, "").strip()
        if not raw:
            max_depth = DEFAULT_MAX_DEPTH
        else:
            try:
                max_depth = int(raw)
            except ValueError:
                p.error(f"${ENV_MAX_DEPTH} must be an integer, got {raw!r}")
    return NameRegistry(names, max_depth=max_depth)


def _dump(obj: Dict[str, Any]) -> str:
    return json.dumps(obj, indent=2, sort_keys=True, ensure_ascii=False)


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="ruleobj",
        description="Parse the rule expression of a YAML/JSON document into a node tree.",
    )
    p.add_argument("document", nargs="?", help="Path to the rule document (.yaml | .yml | .json).")
    p.add_argument("--names", action="append", default=None,
                   help=f"Accepted rule names, comma separated (repeatable; falls back to ${ENV_NAMES}).")
    p.add_argument("--max-depth", type=int, default=None,
                   help=f"Maximum node level (default: ${ENV_MAX_DEPTH} or {DEFAULT_MAX_DEPTH}).")
    p.add_argument("--key", default=DEFAULT_RULE_KEY, help=f"Document field holding the rule (default: {DEFAULT_RULE_KEY}).")
    p.add_argument("--emit-tree", metavar="PATH", help="Write the parsed tree as JSON to PATH.")
    p.add_argument("--validate", action="store_true", help="Check the tree against the node schema.")
    p.add_argument("-v", "--verbose", action="store_true")
    args = p.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if not args.document:
        p.error("document path required (e.g., rules/access.yaml)")

    path = Path(args.document)
    if not path.is_file():
        p.error(f"document not found: {path}")

    registry = _build_registry(p, args)
    logger.debug("using %r", registry)

    try:
        node = parse_rule_file(path, key=args.key, registry=registry)
        tree = node.to_dict()
        if args.validate:
            validate_tree(tree)
    except (RuleObjectError, DocumentError, jsonschema.ValidationError) as e:
        logger.info("rule document %s rejected: %s", path, e)
        reason = e.message if isinstance(e, jsonschema.ValidationError) else str(e)
        print(_dump({"status": "error", "kind": type(e).__name__, "reason": reason, "document": str(path)}))
        return 1

    print(_dump(tree))
    if args.emit_tree:
        Path(args.emit_tree).write_text(_dump(tree), encoding="utf-8")
        print(f"Wrote tree: {args.emit_tree}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
