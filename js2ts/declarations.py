"""
Build the project-wide symbol table from ``.d.ts`` declaration files.
"""
from pathlib import Path
from typing import Iterable, Iterator, List

from tree_sitter import Node

from js2ts.errors import DeclarationParseError
from js2ts.lang.typescript import get_node_text, parse_declarations, render_declaration
from js2ts.logger import Js2TsLogger as logger
from js2ts.models import SymbolEntry, SymbolKind, SymbolTable

# tree-sitter node type -> symbol kind
DECLARATION_KINDS: dict[str, SymbolKind] = {
    "interface_declaration": SymbolKind.INTERFACE,
    "type_alias_declaration": SymbolKind.TYPE_ALIAS,
    "enum_declaration": SymbolKind.ENUM,
    "function_declaration": SymbolKind.FUNCTION,
    "generator_function_declaration": SymbolKind.FUNCTION,
    # `declare function f(...): T;` and overload signatures
    "function_signature": SymbolKind.FUNCTION,
    "class_declaration": SymbolKind.CLASS,
    "abstract_class_declaration": SymbolKind.CLASS,
}


def _iter_declarations(node: Node) -> Iterator[tuple[Node, SymbolKind]]:
    """Pre-order walk yielding every declaration node and its kind."""
    stack = [node]
    while stack:
        n = stack.pop()
        kind = DECLARATION_KINDS.get(n.type)
        if kind is not None:
            yield n, kind
        stack.extend(reversed(n.children))


def extract_file_declarations(path: str, source: bytes) -> List[SymbolEntry]:
    """Return the declarations of one file in source order."""
    tree = parse_declarations(source, path)
    entries: List[SymbolEntry] = []
    for node, kind in _iter_declarations(tree.root_node):
        name = get_node_text(node.child_by_field_name("name"))
        if not name:
            # anonymous `export default class {}` and friends
            continue
        entries.append(
            SymbolEntry(
                name=name,
                raw_signature=render_declaration(node, source),
                source_file=path,
                kind=kind,
            )
        )
    return entries


def _read(path: str) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise DeclarationParseError(path, reason=f"cannot read file ({exc.strerror or exc})") from exc


def extract_type_definitions(paths: Iterable[str | Path]) -> SymbolTable:
    """
    Parse every declaration file in *paths* (in order) into one symbol table.

    A later declaration with an already-seen name replaces the earlier one.
    Any read or parse failure raises ``DeclarationParseError``.
    """
    entries: List[SymbolEntry] = []
    for p in paths:
        path = str(p)
        file_entries = extract_file_declarations(path, _read(path))
        logger.debug("declarations extracted", path=path, count=len(file_entries))
        entries.extend(file_entries)
    return SymbolTable(entries)
