"""
Mutable syntax tree for one JavaScript module and its serializer.

The tree only models the node categories the annotator cares about; every
other construct stays in the original source bytes. Type annotations are
attached to ``AnnotationSlot`` objects and spliced back into the source by
``generate`` so untouched code keeps its exact text, comments and line
positions.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterator, List, NamedTuple, Optional, Union

from js2ts.typenodes import TypeAnnotation


class SyntaxKind(str, Enum):
    PROGRAM = "program"
    VARIABLE_DECLARATOR = "variable_declarator"
    # named function declarations (incl. generators)
    FUNCTION_DECLARATION = "function_declaration"
    # every other function-like node: expressions, arrows, methods
    FUNCTION = "function"
    CLASS_PROPERTY = "class_property"
    CALL_EXPRESSION = "call_expression"
    ASSIGNMENT_EXPRESSION = "assignment_expression"


# --------------------------------------------------------------------------- #
# Annotation positions
# --------------------------------------------------------------------------- #
@dataclass
class AnnotationSlot:
    """
    Byte position where ``: <type>`` goes.

    When the source already carries an annotation there, ``replace_end``
    marks its end and the new annotation replaces ``[anchor, replace_end)``.
    """
    anchor: int
    replace_end: Optional[int] = None
    type_annotation: Optional[TypeAnnotation] = None


@dataclass
class Binding:
    """An identifier that can carry a type annotation."""
    name: str
    start_byte: int
    end_byte: int
    slot: AnnotationSlot
    # bare arrow parameter (``x => ...``) needs parentheses once typed
    parenthesize: bool = False

    @property
    def type_annotation(self) -> Optional[TypeAnnotation]:
        return self.slot.type_annotation

    @type_annotation.setter
    def type_annotation(self, value: Optional[TypeAnnotation]) -> None:
        self.slot.type_annotation = value


# --------------------------------------------------------------------------- #
# Node variants
# --------------------------------------------------------------------------- #
@dataclass
class SyntaxNode:
    kind: ClassVar[SyntaxKind]

    start_byte: int
    end_byte: int
    line: int  # 1-based
    children: List["SyntaxNode"] = field(default_factory=list)


@dataclass
class VariableDeclarator(SyntaxNode):
    kind: ClassVar[SyntaxKind] = SyntaxKind.VARIABLE_DECLARATOR

    # None for destructuring patterns
    binding: Optional[Binding] = None


@dataclass
class FunctionNode(SyntaxNode):
    name: Optional[str] = None
    # one entry per parameter; None for anything but a plain identifier
    params: List[Optional[Binding]] = field(default_factory=list)
    return_slot: Optional[AnnotationSlot] = None


@dataclass
class FunctionDeclaration(FunctionNode):
    kind: ClassVar[SyntaxKind] = SyntaxKind.FUNCTION_DECLARATION


@dataclass
class Function(FunctionNode):
    kind: ClassVar[SyntaxKind] = SyntaxKind.FUNCTION


@dataclass
class ClassProperty(SyntaxNode):
    kind: ClassVar[SyntaxKind] = SyntaxKind.CLASS_PROPERTY

    # None for computed / private / literal keys
    binding: Optional[Binding] = None


@dataclass
class CallExpression(SyntaxNode):
    kind: ClassVar[SyntaxKind] = SyntaxKind.CALL_EXPRESSION

    callee: Optional[str] = None
    # (node type, raw text) per argument
    arguments: List[tuple[str, str]] = field(default_factory=list)
    parent_type: Optional[str] = None


@dataclass
class AssignmentExpression(SyntaxNode):
    kind: ClassVar[SyntaxKind] = SyntaxKind.ASSIGNMENT_EXPRESSION

    # dotted path of a member-expression target (``module.exports``), else None
    target: Optional[str] = None


# --------------------------------------------------------------------------- #
# Program
# --------------------------------------------------------------------------- #
@dataclass
class Statement:
    """An original top-level statement, kept as a byte range of the source."""
    start_byte: int
    end_byte: int
    children: List[SyntaxNode] = field(default_factory=list)


@dataclass
class DocumentationMarker:
    """Non-executable statement: a block comment followed by ``;``."""
    name: str
    signature: str

    def render(self) -> str:
        lines = [f"{self.name} interface (imported from .d.ts)"]
        lines.extend(self.signature.splitlines())
        body = "\n".join(f" * {ln}".rstrip() for ln in lines)
        # a nested "*/" would end the comment early
        body = body.replace("*/", "* /")
        return f"/*\n{body}\n */;"


ProgramItem = Union[Statement, DocumentationMarker]


@dataclass
class Program:
    source: bytes
    path: Optional[str] = None
    body: List[ProgramItem] = field(default_factory=list)
    # end of a leading ``#!`` line; markers are emitted after it
    prologue_end: int = 0

    kind: ClassVar[SyntaxKind] = SyntaxKind.PROGRAM

    def prepend(self, items: List[ProgramItem]) -> None:
        self.body[:0] = items


def walk(program: Program) -> Iterator[SyntaxNode]:
    """Pre-order iteration over every modelled node of *program*."""
    stack: List[SyntaxNode] = []
    for item in reversed(program.body):
        if isinstance(item, Statement):
            stack.extend(reversed(item.children))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


# --------------------------------------------------------------------------- #
# Serialization
# --------------------------------------------------------------------------- #
class _Edit(NamedTuple):
    start: int
    end: int
    text: bytes


def _collect_edits(program: Program) -> List[_Edit]:
    edits: List[_Edit] = []

    def add_slot(slot: Optional[AnnotationSlot], suffix: str = "") -> bool:
        if slot is None or slot.type_annotation is None:
            return False
        end = slot.replace_end if slot.replace_end is not None else slot.anchor
        text = slot.type_annotation.render() + suffix
        edits.append(_Edit(slot.anchor, end, text.encode("utf8")))
        return True

    def add_binding(b: Optional[Binding]) -> None:
        if b is None:
            return
        if b.parenthesize:
            if add_slot(b.slot, ")"):
                edits.append(_Edit(b.start_byte, b.start_byte, b"("))
        else:
            add_slot(b.slot)

    for node in walk(program):
        if isinstance(node, (VariableDeclarator, ClassProperty)):
            add_binding(node.binding)
        elif isinstance(node, FunctionNode):
            for p in node.params:
                add_binding(p)
            add_slot(node.return_slot)

    edits.sort(key=lambda e: (e.start, e.end))
    return edits


def generate(program: Program) -> str:
    """
    Serialize *program* back to source text.

    Original bytes are copied through unchanged except at annotation slots;
    documentation markers are rendered where they sit in ``program.body``.
    """
    source = program.source
    edits = _collect_edits(program)
    out: List[bytes] = [source[:program.prologue_end]]
    cursor = program.prologue_end
    pending = 0

    def copy_until(end: int, inclusive: bool) -> None:
        nonlocal cursor, pending
        pos = cursor
        while pending < len(edits):
            e = edits[pending]
            if e.start > end or (e.start == end and not inclusive):
                break
            out.append(source[pos:e.start])
            out.append(e.text)
            pos = max(e.end, e.start)
            pending += 1
        out.append(source[pos:end])
        cursor = end

    for item in program.body:
        if isinstance(item, DocumentationMarker):
            if out[-1] and not out[-1].endswith(b"\n"):
                out.append(b"\n")
            out.append(item.render().encode("utf8") + b"\n")
            continue
        if item.end_byte > cursor:
            copy_until(item.end_byte, inclusive=False)

    copy_until(len(source), inclusive=True)
    return b"".join(out).decode("utf8")
