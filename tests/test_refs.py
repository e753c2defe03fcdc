"""Tests for the generic reference scanner."""

from schemaref.refs import RefInfo, extract_first_ref, extract_refs, has_refs


def test_finds_a_reference_at_the_top_level():
    # given
    obj = {"$ref": "#/components/schemas/User"}

    # when
    refs = extract_refs(obj)

    # then
    assert refs == [RefInfo("#/components/schemas/User", ())]


def test_finds_a_nested_reference_and_its_keypath():
    # given
    obj = {
        "content": {
            "application/json": {
                "schema": {"$ref": "#/components/schemas/LoginRequest"}
            }
        }
    }

    # when
    refs = extract_refs(obj)

    # then
    assert len(refs) == 1
    assert refs[0].ref == "#/components/schemas/LoginRequest"
    assert refs[0].keypath == ("content", "application/json", "schema")


def test_finds_multiple_references():
    # given
    obj = {
        "requestBody": {
            "content": {
                "application/json": {
                    "schema": {"$ref": "#/components/schemas/CreateUserRequest"}
                }
            }
        },
        "responses": {
            "200": {"schema": {"$ref": "#/components/schemas/UserResponse"}},
            "400": {"schema": {"$ref": "#/definitions/ErrorResponse"}},
        },
    }

    # when
    refs = extract_refs(obj)

    # then
    assert [r.ref for r in refs] == [
        "#/components/schemas/CreateUserRequest",
        "#/components/schemas/UserResponse",
        "#/definitions/ErrorResponse",
    ]


def test_searches_lists_using_string_indices():
    # given
    obj = {"allOf": [{"type": "object"}, {"$ref": "#/components/schemas/Base"}]}

    # when
    refs = extract_refs(obj)

    # then
    assert refs == [RefInfo("#/components/schemas/Base", ("allOf", "1"))]


def test_reference_is_reported_before_references_nested_beside_it():
    # given
    obj = {
        "$ref": "#/components/schemas/Outer",
        "description": {"$ref": "#/components/schemas/Inner"},
    }

    # when
    refs = extract_refs(obj)

    # then
    assert [r.ref for r in refs] == [
        "#/components/schemas/Outer",
        "#/components/schemas/Inner",
    ]


def test_respects_max_depth():
    # given
    obj = {"a": {"b": {"c": {"$ref": "#/components/schemas/Deep"}}}}

    # when
    shallow = extract_refs(obj, max_depth=3)
    deep = extract_refs(obj, max_depth=4)

    # then
    assert shallow == []
    assert len(deep) == 1


def test_ignores_non_string_refs_and_scalars():
    assert extract_refs({"$ref": 42}) == []
    assert extract_refs("#/components/schemas/User") == []
    assert extract_refs(None) == []


def test_extract_first_ref():
    # given
    obj = {"responses": {"200": {"schema": {"$ref": "#/definitions/A"}}}}

    # then
    assert extract_first_ref(obj) == "#/definitions/A"
    assert extract_first_ref({"type": "string"}) is None


def test_has_refs():
    assert has_refs({"items": {"$ref": "#/definitions/A"}})
    assert not has_refs({"items": {"type": "string"}})
