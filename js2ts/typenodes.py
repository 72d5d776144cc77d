"""
TypeScript type nodes and the name → node builder.

Primitive names are matched case-insensitively; every other name becomes a
named reference kept verbatim.
"""
from typing import List, Union

from pydantic import BaseModel, ConfigDict


class KeywordType(BaseModel):
    """Built-in keyword type: ``string``, ``number``, ``void`` ..."""

    model_config = ConfigDict(frozen=True)

    keyword: str

    def render(self) -> str:
        return self.keyword


class TypeReference(BaseModel):
    """Reference to a named type (interface, alias, enum, class, ``Date`` ...)."""

    model_config = ConfigDict(frozen=True)

    name: str

    def render(self) -> str:
        return self.name


class UnionType(BaseModel):
    model_config = ConfigDict(frozen=True)

    members: List[Union[KeywordType, TypeReference]]

    def render(self) -> str:
        return " | ".join(m.render() for m in self.members)


TypeNode = Union[KeywordType, TypeReference, UnionType]


class TypeAnnotation(BaseModel):
    """``: <type>`` attached to a binding or a function return position."""

    model_config = ConfigDict(frozen=True)

    type: TypeNode

    def render(self) -> str:
        return f": {self.type.render()}"


_PRIMITIVES: dict[str, TypeNode] = {
    "string": KeywordType(keyword="string"),
    "number": KeywordType(keyword="number"),
    "boolean": KeywordType(keyword="boolean"),
    "any": KeywordType(keyword="any"),
    "void": KeywordType(keyword="void"),
    "null": KeywordType(keyword="null"),
    "undefined": KeywordType(keyword="undefined"),
    "date": TypeReference(name="Date"),
}

PRIMITIVE_NAMES = frozenset(_PRIMITIVES)


def create_ts_type(type_name: str) -> Union[KeywordType, TypeReference]:
    primitive = _PRIMITIVES.get(type_name.lower())
    if primitive is not None:
        return primitive
    return TypeReference(name=type_name)


def type_reference(name: str) -> TypeAnnotation:
    return TypeAnnotation(type=TypeReference(name=name))


def keyword(name: str) -> TypeAnnotation:
    return TypeAnnotation(type=KeywordType(keyword=name))
