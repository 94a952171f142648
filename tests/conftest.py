# Ensure the project root (the folder that contains 'ruleobj' and 'tests') is on
# sys.path so `import ruleobj` works without installing the package.

import sys
import pathlib

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)

if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)

from ruleobj.registry import NameRegistry, default_registry  # noqa: E402

RULE_NAMES = (
    "or",
    "and",
    "user",
    "service",
    "location",
    "opening-hours",
    "relationship",
)


@pytest.fixture
def registry() -> NameRegistry:
    return NameRegistry(RULE_NAMES)


@pytest.fixture
def global_registry():
    """The process-wide registry, restored after the test."""
    saved_names = default_registry.names
    saved_depth = default_registry.max_depth
    default_registry.clear()
    try:
        yield default_registry
    finally:
        default_registry.clear()
        default_registry.add(*saved_names)
        default_registry.set_max_depth(saved_depth)
