"""Tests for SchemaResolver.get_dependencies()."""

from schemaref import SchemaResolver, exceptions
from schemaref.types import DocumentDict

from pytest import raises


def _document() -> DocumentDict:
    return {
        "components": {
            "schemas": {
                "User": {
                    "type": "object",
                    "properties": {
                        "id": {"type": "number"},
                        "profile": {"$ref": "#/components/schemas/Profile"},
                    },
                },
                "Profile": {
                    "type": "object",
                    "properties": {
                        "settings": {"$ref": "#/components/schemas/Settings"},
                        "tags": {
                            "type": "array",
                            "items": {"$ref": "#/components/schemas/Tag"},
                        },
                    },
                },
                "Settings": {
                    "type": "object",
                    "properties": {"theme": {"type": "string"}},
                },
                "Tag": {"type": "string"},
                "CircularA": {
                    "type": "object",
                    "properties": {"b": {"$ref": "#/components/schemas/CircularB"}},
                },
                "CircularB": {
                    "type": "object",
                    "properties": {"a": {"$ref": "#/components/schemas/CircularA"}},
                },
                "Dangling": {
                    "type": "object",
                    "properties": {"x": {"$ref": "#/components/schemas/Gone"}},
                },
                "Broken": {
                    "type": "object",
                    "properties": {"x": {"$ref": "elsewhere.json#/X"}},
                },
            }
        },
        "definitions": {
            "LegacyOrder": {
                "type": "object",
                "properties": {"user": {"$ref": "#/components/schemas/User"}},
            }
        },
    }


def test_lists_transitive_dependencies_in_discovery_order():
    # given
    resolver = SchemaResolver(_document())

    # when
    dependencies = resolver.get_dependencies("User")

    # then
    assert dependencies == ["Profile", "Settings", "Tag"]


def test_schema_without_references_has_no_dependencies():
    assert SchemaResolver(_document()).get_dependencies("Settings") == []


def test_unknown_schema_has_no_dependencies():
    assert SchemaResolver(_document()).get_dependencies("NonExistent") == []


def test_cycles_terminate_and_exclude_the_root():
    # given
    resolver = SchemaResolver(_document())

    # when
    dependencies = resolver.get_dependencies("CircularA")

    # then
    assert dependencies == ["CircularB"]


def test_is_not_bounded_by_depth():
    # given
    schemas = {
        f"S{i}": {
            "type": "object",
            "properties": {"next": {"$ref": f"#/components/schemas/S{i + 1}"}},
        }
        for i in range(30)
    }
    schemas["S30"] = {"type": "string"}
    resolver = SchemaResolver({"components": {"schemas": schemas}})

    # when
    dependencies = resolver.get_dependencies("S0")

    # then
    assert dependencies == [f"S{i}" for i in range(1, 31)]


def test_dangling_reference_is_listed_but_not_followed():
    assert SchemaResolver(_document()).get_dependencies("Dangling") == ["Gone"]


def test_legacy_definitions_are_searched():
    # given
    resolver = SchemaResolver(_document())

    # when
    dependencies = resolver.get_dependencies("LegacyOrder")

    # then
    assert dependencies == ["User", "Profile", "Settings", "Tag"]


def test_malformed_pointer_raises():
    with raises(exceptions.PointerFormatError):
        SchemaResolver(_document()).get_dependencies("Broken")


def test_long_chains_do_not_exhaust_the_stack():
    # given
    schemas = {
        f"S{i}": {
            "type": "object",
            "properties": {"next": {"$ref": f"#/components/schemas/S{i + 1}"}},
        }
        for i in range(1500)
    }
    schemas["S1500"] = {"type": "string"}
    resolver = SchemaResolver({"components": {"schemas": schemas}})

    # when
    dependencies = resolver.get_dependencies("S0")

    # then
    assert dependencies == [f"S{i}" for i in range(1, 1501)]


def test_siblings_are_listed_in_document_order():
    # given
    document = {
        "components": {
            "schemas": {
                "Root": {
                    "type": "object",
                    "properties": {
                        "a": {"$ref": "#/components/schemas/A"},
                        "b": {"$ref": "#/components/schemas/B"},
                    },
                },
                "A": {
                    "type": "array",
                    "items": {"$ref": "#/components/schemas/C"},
                },
                "B": {"type": "string"},
                "C": {"type": "string"},
            }
        }
    }

    # when
    dependencies = SchemaResolver(document).get_dependencies("Root")

    # then
    assert dependencies == ["A", "C", "B"]
