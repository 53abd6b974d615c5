"""Unit tests for registry.py"""

import json

import pytest

from promptmd.core.models import FunctionSpec
from promptmd.registry import EMPTY_REGISTRY, FunctionRegistry, load_registry, resolve_function


EMAIL_ID = "xyz98765-wxyz-4321-lmno-pqrstuvwxyza"


def test_get_and_contains(registry):
    assert registry.get(EMAIL_ID).internal_id == "fn_send_email"
    assert EMAIL_ID in registry
    assert "missing" not in registry
    assert registry.get("missing") is None


def test_resolve_function_is_a_pure_lookup(registry):
    assert resolve_function(EMAIL_ID, registry) is registry.get(EMAIL_ID)
    assert resolve_function("missing", EMPTY_REGISTRY) is None


def test_declaration_order(registry):
    assert registry.ids()[0] == EMAIL_ID
    assert len(registry) == 3
    assert [s.id for s in registry] == registry.ids()


def test_first_duplicate_wins():
    reg = FunctionRegistry.of([
        {"id": "a", "internalId": "first"},
        {"id": "a", "internalId": "second"},
    ])
    assert reg.get("a").internal_id == "first"


def test_registry_is_immutable(registry):
    with pytest.raises(AttributeError):
        registry.functions = ()


def test_search_by_name_and_description(registry):
    assert [s.internal_id for s in registry.search("email")] == ["fn_send_email"]
    assert [s.internal_id for s in registry.search("BOOKS")] == ["fn_schedule"]
    assert registry.search("nothing-like-this") == []


def test_search_limit(registry):
    assert len(registry.search("", limit=2)) == 2


def test_load_registry_yaml_list(tmp_path):
    path = tmp_path / "functions.yaml"
    path.write_text(
        "- id: abc-1\n"
        "  internalId: fn_a\n"
        "  description: Alpha - the first\n"
        "- id: def-2\n"
        "  function_internal_id: fn_b\n"
    )
    reg = load_registry(path)
    assert reg.ids() == ["abc-1", "def-2"]
    assert reg.get("def-2").internal_id == "fn_b"


def test_load_registry_mapping(tmp_path):
    path = tmp_path / "functions.yaml"
    path.write_text("functions:\n  - id: abc-1\n    internal_id: fn_a\n")
    assert load_registry(path).ids() == ["abc-1"]


def test_load_registry_json(tmp_path):
    path = tmp_path / "functions.json"
    path.write_text(json.dumps([{"id": "abc-1", "internalId": "fn_a", "description": "A"}]))
    assert load_registry(path).get("abc-1") == FunctionSpec(id="abc-1", internal_id="fn_a", description="A")


def test_load_registry_empty_file(tmp_path):
    path = tmp_path / "functions.yaml"
    path.write_text("")
    assert len(load_registry(path)) == 0


def test_load_registry_invalid_yaml(tmp_path):
    path = tmp_path / "functions.yaml"
    path.write_text("- id: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid functions.yaml"):
        load_registry(path)


def test_load_registry_missing_fields(tmp_path):
    path = tmp_path / "functions.yaml"
    path.write_text("- description: no id here\n")
    with pytest.raises(ValueError, match="Invalid functions.yaml"):
        load_registry(path)


def test_load_registry_wrong_shape(tmp_path):
    path = tmp_path / "functions.yaml"
    path.write_text("just a string\n")
    with pytest.raises(ValueError, match="expected a list"):
        load_registry(path)
