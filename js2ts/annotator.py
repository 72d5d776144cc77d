"""
Attach TypeScript annotations to a parsed JavaScript module.

Matching is purely name based: identifiers are looked up in the symbol table
built from the project's ``.d.ts`` files, plus two fixed parameter-name
heuristics (``user`` and ``email``) for non-declaration functions.
"""
from typing import Optional

from js2ts.logger import Js2TsLogger as logger
from js2ts.models import SymbolKind, SymbolTable
from js2ts.signature import create_type_annotation, parse_function_signature
from js2ts.syntax import (
    AssignmentExpression,
    Binding,
    CallExpression,
    ClassProperty,
    DocumentationMarker,
    FunctionNode,
    Program,
    SyntaxKind,
    SyntaxNode,
    VariableDeclarator,
    walk,
)
from js2ts.typenodes import keyword, type_reference

_VARIABLE_KINDS = (SymbolKind.INTERFACE, SymbolKind.TYPE_ALIAS, SymbolKind.ENUM)

USER_PARAM = "user"
USER_TYPE = "User"
EMAIL_PARAM = "email"


class TreeAnnotator:
    """
    Single-pass annotator for one ``Program``.

    The symbol table is read-only context; the program is mutated in place.
    Nothing without a match is touched and nothing here raises for
    unmatched input.
    """

    def __init__(self, table: SymbolTable, path: Optional[str] = None) -> None:
        self.table = table
        self.path = path

    def annotate(self, program: Program) -> None:
        self._add_documentation_markers(program)
        for node in walk(program):
            self._visit(node)

    # ------------------------------------------------------------------ #
    def _visit(self, node: SyntaxNode) -> None:
        match node.kind:
            case SyntaxKind.VARIABLE_DECLARATOR:
                self._handle_variable(node)
            case SyntaxKind.FUNCTION_DECLARATION:
                self._handle_function_declaration(node)
            case SyntaxKind.FUNCTION:
                self._handle_function(node)
            case SyntaxKind.CLASS_PROPERTY:
                self._handle_class_property(node)
            case SyntaxKind.CALL_EXPRESSION:
                self._handle_call(node)
            case SyntaxKind.ASSIGNMENT_EXPRESSION:
                self._handle_assignment(node)

    def _add_documentation_markers(self, program: Program) -> None:
        markers = [
            DocumentationMarker(name=e.name, signature=e.raw_signature)
            for e in self.table.of_kind(SymbolKind.INTERFACE)
        ]
        if markers:
            program.prepend(markers)

    # ------------------------------------------------------------------ #
    def _handle_variable(self, node: VariableDeclarator) -> None:
        b = node.binding
        if b is None:
            return
        entry = self.table.lookup(b.name, *_VARIABLE_KINDS)
        if entry is not None:
            b.type_annotation = type_reference(entry.name)

    def _handle_function_declaration(self, node: FunctionNode) -> None:
        if not node.name:
            return
        sig = parse_function_signature(self.table.get(node.name))
        if sig is None:
            return

        if node.return_slot is not None:
            node.return_slot.type_annotation = create_type_annotation(sig.return_type)

        for p in node.params:
            if p is not None and p.name in sig.params:
                p.type_annotation = create_type_annotation(sig.params[p.name])

    def _handle_function(self, node: FunctionNode) -> None:
        for p in node.params:
            if p is not None:
                self._apply_param_heuristics(p)

    def _apply_param_heuristics(self, param: Binding) -> None:
        if param.name == USER_PARAM:
            if USER_TYPE in self.table:
                param.type_annotation = type_reference(USER_TYPE)
        elif param.name == EMAIL_PARAM:
            param.type_annotation = keyword("string")

    def _handle_class_property(self, node: ClassProperty) -> None:
        b = node.binding
        if b is None:
            return
        entry = self.table.get(b.name)
        if entry is not None:
            b.type_annotation = type_reference(entry.name)

    # ---- CommonJS module boundaries: recognised, left as-is ---------- #
    def _handle_call(self, node: CallExpression) -> None:
        if (
            node.callee == "require"
            and len(node.arguments) == 1
            and node.arguments[0][0] == "string"
            and node.parent_type in ("variable_declarator", "assignment_expression")
        ):
            logger.debug("require() left unchanged", path=self.path, line=node.line,
                         module=node.arguments[0][1])

    def _handle_assignment(self, node: AssignmentExpression) -> None:
        if node.target == "module.exports":
            logger.debug("module.exports left unchanged", path=self.path, line=node.line)


def annotate(program: Program, table: SymbolTable) -> None:
    TreeAnnotator(table, program.path).annotate(program)
