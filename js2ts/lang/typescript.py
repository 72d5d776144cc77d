import re
from typing import Callable, Iterator, List, Optional

from tree_sitter import Language, Node, Parser, Tree
import tree_sitter_typescript as tsts  # pip install tree_sitter_typescript

from js2ts.errors import DeclarationParseError, ParseError, SourceParseError
from js2ts.syntax import (
    AnnotationSlot,
    AssignmentExpression,
    Binding,
    CallExpression,
    ClassProperty,
    Function,
    FunctionDeclaration,
    FunctionNode,
    Program,
    Statement,
    SyntaxNode,
    VariableDeclarator,
)

# ---------------------------------------------------------------------- #
# .d.ts files use the plain TypeScript grammar, sources the TSX one so JSX
# and stray TypeScript syntax in .js files parse.
TS_LANGUAGE = Language(tsts.language_typescript())
TSX_LANGUAGE = Language(tsts.language_tsx())
_declaration_parser: Parser | None = None
_source_parser: Parser | None = None


def _get_declaration_parser() -> Parser:
    global _declaration_parser
    if _declaration_parser is None:
        _declaration_parser = Parser(TS_LANGUAGE)
    return _declaration_parser


def _get_source_parser() -> Parser:
    global _source_parser
    if _source_parser is None:
        _source_parser = Parser(TSX_LANGUAGE)
    return _source_parser
# ---------------------------------------------------------------------- #


def get_node_text(node: Optional[Node]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf8")


def _error_nodes(node: Node) -> Iterator[Node]:
    """Yield every ERROR / MISSING node below *node* (pre-order)."""
    if node.type == "ERROR" or node.is_missing:
        yield node
    for child in node.children:
        if child.has_error or child.is_missing:
            yield from _error_nodes(child)


def _check_errors(
    tree: Tree,
    path: Optional[str],
    error_cls: type[ParseError],
    tolerated: Optional[Callable[[Node], bool]] = None,
) -> None:
    root = tree.root_node
    if not root.has_error:
        return
    for bad in _error_nodes(root):
        if tolerated is None or not tolerated(bad):
            break
    else:
        return
    row, col = bad.start_point
    if bad.is_missing:
        reason = f"missing {bad.type!r}"
    else:
        snippet = get_node_text(bad).splitlines()[0:1]
        reason = f"unexpected {snippet[0]!r}" if snippet and snippet[0] else "syntax error"
    raise error_cls(path, row + 1, col + 1, reason)


# ---------------------------------------------------------------------- #
# Declarations
# ---------------------------------------------------------------------- #
# tsc emits `export default function (a: string): void;` for a nameless
# default export; the grammar only knows that form with a body.
_ANONYMOUS_DEFAULT_FUNCTION = re.compile(rb"export\s+default\s+(?:async\s+)?function\s*\*?\s*[(<]")


def _in_anonymous_default_function(node: Node) -> bool:
    """True if the error *node* belongs to a body-less anonymous default export."""
    candidates: List[Node] = []
    parent: Optional[Node] = node
    while parent is not None:
        if parent.type in ("export_statement", "ERROR"):
            candidates.append(parent)
        parent = parent.parent

    # error recovery may leave the trailing `;` as a sibling of the statement
    prev = node.prev_sibling
    if (
        prev is not None
        and prev.type in ("export_statement", "ERROR")
        and prev.end_point[0] == node.start_point[0]
    ):
        candidates.append(prev)

    return any(_is_anonymous_default_signature(c.text or b"") for c in candidates)


def _is_anonymous_default_signature(text: bytes) -> bool:
    """Match the signature alone: no statement may follow its closing `;`."""
    if not _ANONYMOUS_DEFAULT_FUNCTION.match(text):
        return False
    body = text.rstrip()
    depth = 0
    for i, ch in enumerate(body):
        if ch in b"({[":
            depth += 1
        elif ch in b")}]":
            depth -= 1
        elif ch == ord(";") and depth <= 0 and i != len(body) - 1:
            return False
    return True


def parse_declarations(source: bytes, path: Optional[str] = None) -> Tree:
    """
    Parse ``.d.ts`` text; raise ``DeclarationParseError`` on syntax errors.

    Anonymous default-exported function signatures are let through: they
    declare nothing nameable and the rest of the file is still extracted.
    """
    tree = _get_declaration_parser().parse(source)
    _check_errors(tree, path, DeclarationParseError, tolerated=_in_anonymous_default_function)
    return tree


def _comment_ranges(node: Node) -> List[tuple[int, int]]:
    out: List[tuple[int, int]] = []
    stack = [node]
    while stack:
        n = stack.pop()
        if n.type == "comment":
            out.append((n.start_byte, n.end_byte))
            continue
        stack.extend(n.children)
    return sorted(out)


def render_declaration(node: Node, source: bytes) -> str:
    """
    Canonical text of a declaration node: its source with comments removed,
    trailing whitespace stripped and blank lines dropped.
    """
    pieces: List[bytes] = []
    pos = node.start_byte
    for start, end in _comment_ranges(node):
        pieces.append(source[pos:start])
        pos = end
    pieces.append(source[pos:node.end_byte])
    text = b"".join(pieces).decode("utf8")
    lines = [ln.rstrip() for ln in text.splitlines()]
    return "\n".join(ln for ln in lines if ln.strip())


# ---------------------------------------------------------------------- #
# Sources
# ---------------------------------------------------------------------- #
_FUNCTION_DECLARATIONS = {"function_declaration", "generator_function_declaration"}
_FUNCTIONS = {
    "function_expression",
    "function",  # older grammars; the keyword token is unnamed
    "generator_function",
    "arrow_function",
    "method_definition",
}
_CLASS_PROPERTIES = {"public_field_definition", "field_definition"}
_PARAMETERS = {"required_parameter", "optional_parameter"}


class ProgramBuilder:
    """
    Convert a tree-sitter tree into the annotator's ``Program`` model.

    Only the node categories in ``js2ts.syntax.SyntaxKind`` become nodes;
    everything else is transparent and its modelled descendants are
    attached to the closest modelled ancestor.
    """

    def __init__(self, source: bytes, path: Optional[str] = None) -> None:
        self.source = source
        self.path = path

    def build(self, tree: Tree) -> Program:
        root = tree.root_node
        program = Program(source=self.source, path=self.path)
        for child in root.named_children:
            if child.type == "hash_bang_line":
                program.prologue_end = child.end_byte
                continue
            program.body.append(
                Statement(
                    start_byte=child.start_byte,
                    end_byte=child.end_byte,
                    children=self._visit(child),
                )
            )
        return program

    # ------------------------------------------------------------------ #
    def _visit(self, node: Node) -> List[SyntaxNode]:
        children: List[SyntaxNode] = []
        for ch in node.named_children:
            children.extend(self._visit(ch))

        sn = self._make_node(node)
        if sn is None:
            return children
        sn.children = children
        return [sn]

    def _make_node(self, node: Node) -> Optional[SyntaxNode]:
        span = dict(
            start_byte=node.start_byte,
            end_byte=node.end_byte,
            line=node.start_point[0] + 1,
        )
        match node.type:
            case "variable_declarator":
                name = node.child_by_field_name("name")
                binding = None
                if name is not None and name.type == "identifier":
                    binding = self._binding(name, node.child_by_field_name("type"))
                return VariableDeclarator(binding=binding, **span)
            case t if t in _FUNCTION_DECLARATIONS:
                fn = FunctionDeclaration(**span)
                self._fill_function(fn, node)
                params = node.child_by_field_name("parameters")
                if params is not None:
                    existing = node.child_by_field_name("return_type")
                    fn.return_slot = self._slot(params.end_byte, existing)
                return fn
            case t if t in _FUNCTIONS and node.is_named:
                fn = Function(**span)
                self._fill_function(fn, node)
                return fn
            case t if t in _CLASS_PROPERTIES:
                name = node.child_by_field_name("name") or node.child_by_field_name("property")
                binding = None
                if name is not None and name.type == "property_identifier":
                    binding = self._binding(name, node.child_by_field_name("type"))
                return ClassProperty(binding=binding, **span)
            case "call_expression":
                callee = node.child_by_field_name("function")
                args = node.child_by_field_name("arguments")
                return CallExpression(
                    callee=get_node_text(callee) if callee is not None and callee.type == "identifier" else None,
                    arguments=[
                        (a.type, get_node_text(a))
                        for a in (args.named_children if args is not None else [])
                        if a.type != "comment"
                    ],
                    parent_type=node.parent.type if node.parent is not None else None,
                    **span,
                )
            case "assignment_expression":
                left = node.child_by_field_name("left")
                target = None
                if left is not None and left.type == "member_expression":
                    target = get_node_text(left)
                return AssignmentExpression(target=target, **span)
        return None

    # ------------------------------------------------------------------ #
    def _fill_function(self, fn: FunctionNode, node: Node) -> None:
        name = node.child_by_field_name("name")
        fn.name = get_node_text(name) if name is not None else None

        # arrow function with a single, unparenthesised parameter
        bare = node.child_by_field_name("parameter")
        if bare is not None:
            binding = self._binding(bare, None)
            binding.parenthesize = True
            fn.params = [binding]
            return

        params = node.child_by_field_name("parameters")
        if params is None:
            return
        for prm in params.named_children:
            if prm.type == "comment":
                continue
            fn.params.append(self._parameter(prm))

    def _parameter(self, prm: Node) -> Optional[Binding]:
        if prm.type == "identifier":
            return self._binding(prm, None)
        if prm.type not in _PARAMETERS:
            return None
        pattern = prm.child_by_field_name("pattern")
        # defaulted parameters are assignment patterns, not identifiers
        if pattern is None or pattern.type != "identifier" or prm.child_by_field_name("value") is not None:
            return None
        return self._binding(pattern, prm.child_by_field_name("type"))

    def _binding(self, ident: Node, existing_type: Optional[Node]) -> Binding:
        anchor = ident.end_byte
        # keep the optional / definite-assignment marker before the type
        nxt = ident.next_sibling
        if nxt is not None and nxt.type in ("?", "!"):
            anchor = nxt.end_byte
        return Binding(
            name=get_node_text(ident),
            start_byte=ident.start_byte,
            end_byte=ident.end_byte,
            slot=self._slot(anchor, existing_type),
        )

    @staticmethod
    def _slot(anchor: int, existing_type: Optional[Node]) -> AnnotationSlot:
        if existing_type is not None:
            return AnnotationSlot(anchor=existing_type.start_byte, replace_end=existing_type.end_byte)
        return AnnotationSlot(anchor=anchor)


def parse_module(text: str, path: Optional[str] = None) -> Program:
    """Parse JavaScript *text*; raise ``SourceParseError`` on syntax errors."""
    source = text.encode("utf8")
    tree = _get_source_parser().parse(source)
    _check_errors(tree, path, SourceParseError)
    return ProgramBuilder(source, path).build(tree)
