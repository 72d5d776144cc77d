from js2ts.models import ParsedSignature, SymbolEntry, SymbolKind
from js2ts.signature import (
    create_type_annotation,
    parse_function_signature,
    parse_signature,
    split_union,
)
from js2ts.typenodes import KeywordType, TypeReference, UnionType


def test_parse_signature_basic():
    sig = parse_signature("(name: string, age: number): User")
    assert sig == ParsedSignature(params={"name": "string", "age": "number"}, return_type="User")


def test_parse_signature_from_declaration_text():
    sig = parse_signature("function createUser(name: string, email: string, age: number): User;")
    assert sig.params == {"name": "string", "email": "string", "age": "number"}
    assert sig.return_type == "User"


def test_parse_signature_union_return_type():
    sig = parse_signature("function findUserByEmail(email: string): User | null;")
    assert sig.params == {"email": "string"}
    assert sig.return_type == "User | null"


def test_return_type_stops_at_brace():
    sig = parse_signature("function f(a: number): boolean {\n  return true;\n}")
    assert sig.return_type == "boolean"


def test_no_parenthesised_group():
    sig = parse_signature("interface User { name: string }")
    assert sig.params == {}
    assert sig.return_type == "any"


def test_empty_parameter_list():
    sig = parse_signature("function noop(): void;")
    assert sig.params == {}
    assert sig.return_type == "void"


def test_untyped_fragments_are_dropped():
    sig = parse_signature("function f(a, b: string, : number)")
    assert sig.params == {"b": "string"}
    # no "):" anywhere -> default
    assert sig.return_type == "any"


def test_nested_parentheses_are_mis_split():
    # only text up to the first ")" is considered
    sig = parse_signature("function on(cb: (x: number) => void, flag: boolean): void;")
    assert sig.params == {"cb": "(x: number"}
    assert sig.return_type == "void"


def test_parse_function_signature_requires_function_kind():
    fn = SymbolEntry(name="f", raw_signature="function f(a: string): void;",
                     source_file="x.d.ts", kind=SymbolKind.FUNCTION)
    iface = SymbolEntry(name="f", raw_signature="interface f { (a: string): void }",
                        source_file="x.d.ts", kind=SymbolKind.INTERFACE)

    assert parse_function_signature(fn) == ParsedSignature(params={"a": "string"}, return_type="void")
    assert parse_function_signature(iface) is None
    assert parse_function_signature(None) is None


def test_split_union_keeps_order():
    assert split_union("string | null") == ["string", "null"]
    assert split_union("null|User|undefined") == ["null", "User", "undefined"]
    assert split_union("string") == ["string"]


def test_create_type_annotation():
    assert create_type_annotation("string").type == KeywordType(keyword="string")
    assert create_type_annotation("User").type == TypeReference(name="User")

    ann = create_type_annotation("User | null")
    assert ann.type == UnionType(members=[TypeReference(name="User"), KeywordType(keyword="null")])
    assert ann.render() == ": User | null"
