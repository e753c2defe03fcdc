"""Tests for the classification of document values into node types."""

from schemaref._internals import (
    _MappingNode,
    _ReferenceNode,
    _ScalarNode,
    _SequenceNode,
    make_node,
)


def test_scalars():
    for value in ["text", 1, 2.5, True, None]:
        assert isinstance(make_node(value), _ScalarNode)


def test_lists_are_sequences():
    assert isinstance(make_node([{"$ref": "#/definitions/A"}]), _SequenceNode)


def test_mappings_with_string_ref_are_references():
    # when
    node = make_node({"$ref": "#/components/schemas/a~1b", "description": "x"})

    # then
    assert isinstance(node, _ReferenceNode)
    assert node.pointer == "#/components/schemas/a~1b"
    assert node.name == "a/b"


def test_mappings_with_non_string_ref_are_plain_mappings():
    assert isinstance(make_node({"$ref": {"nested": True}}), _MappingNode)
    assert isinstance(make_node({"type": "object"}), _MappingNode)
