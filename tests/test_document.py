from textwrap import dedent
import datetime

import pytest

from ruleobj import (
    DocumentError,
    MaxDepthExceededError,
    NameRegistry,
    ObjectNotAcceptableError,
    ObjectNotFoundError,
    ObjectUndefinedError,
    RuleNode,
    load_document,
    parse_rule_document,
    parse_rule_file,
)


def _doc_nested_with_objects() -> str:
    return dedent("""\
    rule:
      or:
        - user
        - and:
            - service
            - opening-hours:
                opening: 10:00
                closing: 20:00
            - relationship:
                levels:
                  - comprehensive
                  - parent
    """)


def _doc_max_depth_exceeded() -> str:
    return dedent("""\
    rule:
      and: # level 0
        - or: # level 1
          - and: # level 2
            - or: # level 3 -> max depth limit exceeded
    """)


def _doc_list_root() -> str:
    return dedent("""\
    rule:
      - user
      - location:
          region: uk
    """)


CASES = {
    "string format": ("rule: user", RuleNode("user")),
    "object format": (
        "rule:\n  location:\n    region: uk\n",
        RuleNode("location", arguments='{"region":"uk"}'),
    ),
    "list format": (
        "rule:\n  and:\n    - user\n    - service\n",
        RuleNode("and", children=(RuleNode("user", 1), RuleNode("service", 1))),
    ),
    "nested format": (
        dedent("""\
        rule:
          or:
            - user
            - and:
                - service
                - opening-hours
        """),
        RuleNode("or", children=(
            RuleNode("user", 1),
            RuleNode("and", 1, children=(RuleNode("service", 2), RuleNode("opening-hours", 2))),
        )),
    ),
    "nested format with object": (
        _doc_nested_with_objects(),
        RuleNode("or", children=(
            RuleNode("user", 1),
            RuleNode("and", 1, children=(
                RuleNode("service", 2),
                RuleNode("opening-hours", 2, arguments='{"closing":"20:00","opening":"10:00"}'),
                RuleNode("relationship", 2, arguments='{"levels":["comprehensive","parent"]}'),
            )),
        )),
    ),
}


@pytest.mark.parametrize("name", sorted(CASES))
def test_rule_document_formats(registry, name):
    text, expected = CASES[name]
    assert parse_rule_document(text, registry=registry) == expected


@pytest.mark.parametrize("text, exc", [
    (_doc_max_depth_exceeded(), MaxDepthExceededError),
    ("rule: ~", ObjectUndefinedError),
    ('rule: ""', ObjectUndefinedError),
    ('rule: "invalid"', ObjectNotFoundError),
    (_doc_list_root(), ObjectNotAcceptableError),
])
def test_rule_document_errors(registry, text, exc):
    with pytest.raises(exc):
        parse_rule_document(text, registry=registry)


def test_json_document(registry):
    text = '{"rule": {"and": ["user", {"location": {"region": "uk"}}]}}'
    node = parse_rule_document(text, registry=registry)
    assert node.children[1].args == {"region": "uk"}


def test_custom_key(registry):
    node = parse_rule_document("policy: user\nrule: invalid\n", key="policy", registry=registry)
    assert node.name == "user"


def test_missing_key_is_undefined(registry):
    with pytest.raises(ObjectUndefinedError) as ex:
        parse_rule_document("name: access\n", registry=registry)
    assert "'rule'" in str(ex.value)


@pytest.mark.parametrize("text", ["- user\n- service\n", "just text", ""])
def test_document_must_be_a_mapping(registry, text):
    with pytest.raises(DocumentError):
        parse_rule_document(text, registry=registry)


def test_yaml_syntax_error_is_document_error():
    with pytest.raises(DocumentError) as ex:
        load_document("rule: [user, service\n")
    assert ex.value.__cause__ is not None


def test_yaml_dates_in_arguments_are_kept_as_text():
    reg = NameRegistry(["window"])
    node = parse_rule_document("rule:\n  window:\n    since: 2024-01-31\n", registry=reg)
    assert node.args == {"since": str(datetime.date(2024, 1, 31))}


def test_parse_rule_file(tmp_path, registry):
    p = tmp_path / "access.yaml"
    p.write_text(_doc_nested_with_objects(), encoding="utf-8")
    node = parse_rule_file(p, registry=registry)
    assert node.name == "or"
    assert [n.level for n in node.walk()] == [0, 1, 1, 2, 2, 2]


def test_parse_rule_file_missing(tmp_path, registry):
    with pytest.raises(DocumentError):
        parse_rule_file(tmp_path / "nope.yaml", registry=registry)


def test_clock_times_stay_text(registry):
    node = parse_rule_document("rule:\n  opening-hours:\n    opening: 10:00\n    closing: 20:00\n", registry=registry)
    assert node.arguments == '{"closing":"20:00","opening":"10:00"}'


def test_plain_numbers_still_resolve():
    doc = load_document("a: 12\nb: -3\nc: 0x1f\nd: 1.5\ne: .inf\nf: 1_000\n")
    assert doc["a"] == 12 and doc["b"] == -3 and doc["c"] == 31
    assert doc["d"] == 1.5 and doc["e"] == float("inf") and doc["f"] == 1000


def test_bool_and_mixed_argument_keys(registry):
    node = parse_rule_document("rule:\n  location:\n    yes: 1\n    region: uk\n    2: two\n", registry=registry)
    assert node.args == {"true": 1, "region": "uk", "2": "two"}
    assert node.arguments == '{"2":"two","region":"uk","true":1}'


def test_date_argument_keys(registry):
    node = parse_rule_document("rule:\n  opening-hours:\n    2024-01-01: closed\n    default: open\n", registry=registry)
    assert node.args == {"2024-01-01": "closed", "default": "open"}
