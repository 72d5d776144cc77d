import pytest

from js2ts.typenodes import (
    PRIMITIVE_NAMES,
    KeywordType,
    TypeAnnotation,
    TypeReference,
    UnionType,
    create_ts_type,
)


@pytest.mark.parametrize("name", ["string", "number", "boolean", "any", "void", "null", "undefined"])
def test_keyword_types(name):
    assert create_ts_type(name) == KeywordType(keyword=name)
    assert create_ts_type(name.upper()) == KeywordType(keyword=name)
    assert create_ts_type(name.capitalize()) == KeywordType(keyword=name)


def test_date_maps_to_date_reference():
    for spelling in ("date", "Date", "DATE"):
        assert create_ts_type(spelling) == TypeReference(name="Date")


@pytest.mark.parametrize("name", sorted(PRIMITIVE_NAMES))
def test_primitive_lookup_is_case_insensitive(name):
    assert create_ts_type(name.upper()) == create_ts_type(name)
    assert create_ts_type(name.title()) == create_ts_type(name)


def test_unknown_names_are_references_with_case_preserved():
    assert create_ts_type("User") == TypeReference(name="User")
    assert create_ts_type("user") == TypeReference(name="user")
    assert create_ts_type("Promise<User>") == TypeReference(name="Promise<User>")


def test_render():
    union = UnionType(members=[TypeReference(name="User"), KeywordType(keyword="null")])
    assert union.render() == "User | null"
    assert TypeAnnotation(type=union).render() == ": User | null"
    assert TypeAnnotation(type=KeywordType(keyword="string")).render() == ": string"
