"""
Best-effort textual parsing of declaration signatures.

Only the first parenthesised group is inspected and it is split on commas
without any nesting awareness, so nested parentheses (callback parameters,
default values), generic type arguments and rest parameters are mis-split.
The input is always text produced by the declaration extractor.
"""
import re
from typing import List, Optional

from js2ts.models import ANY_TYPE, ParsedSignature, SymbolEntry, SymbolKind
from js2ts.typenodes import TypeAnnotation, UnionType, create_ts_type

_PARAMS_RE = re.compile(r"\(([^)]*)\)")
_RETURN_TYPE_RE = re.compile(r"\):\s*([^;{]+)")


def parse_signature(raw: str) -> ParsedSignature:
    """
    Extract parameter types and the return type from *raw*.

    >>> parse_signature("(name: string, age: number): User")
    ParsedSignature(params={'name': 'string', 'age': 'number'}, return_type='User')
    """
    params: dict[str, str] = {}

    m = _PARAMS_RE.search(raw)
    if m and m.group(1):
        for fragment in m.group(1).split(","):
            name, sep, type_name = fragment.partition(":")
            name, type_name = name.strip(), type_name.strip()
            if sep and name and type_name:
                params[name] = type_name

    m = _RETURN_TYPE_RE.search(raw)
    return_type = m.group(1).strip() if m else ""

    return ParsedSignature(params=params, return_type=return_type or ANY_TYPE)


def parse_function_signature(entry: Optional[SymbolEntry]) -> Optional[ParsedSignature]:
    """ParsedSignature for a Function-kind entry, ``None`` for anything else."""
    if entry is None or entry.kind != SymbolKind.FUNCTION:
        return None
    return parse_signature(entry.raw_signature)


def split_union(type_name: str) -> List[str]:
    return [part.strip() for part in type_name.split("|")]


def create_type_annotation(type_name: str) -> TypeAnnotation:
    # "string | null" -> union, "string" -> single type
    atoms = split_union(type_name)
    if len(atoms) > 1:
        return TypeAnnotation(type=UnionType(members=[create_ts_type(a) for a in atoms]))
    return TypeAnnotation(type=create_ts_type(atoms[0]))
