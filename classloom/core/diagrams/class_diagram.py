"""Deterministic PlantUML class diagram generator.

Walks a declaration tree in source order and writes one PlantUML line per
type, member and inheritance edge. No sorting, no layout hints, purely
data-driven.
"""

import io
import logging
from typing import List, TextIO, Union

from ..ast_parser.models import (
    CompilationUnit,
    ConstructorDeclaration,
    Declaration,
    EnumDeclaration,
    EnumMember,
    Expression,
    FieldDeclaration,
    MethodDeclaration,
    NamespaceDeclaration,
    Parameter,
    PropertyDeclaration,
    TypeDeclaration,
    TypeKind,
    UnsupportedDeclaration,
)
from ..constants import DEFAULT_INDENT
from .emitter import LineEmitter
from .modifiers import (
    get_accessor_modifiers_text,
    get_member_modifiers_text,
    get_type_modifiers_text,
)

logger = logging.getLogger(__name__)

Node = Union[CompilationUnit, Declaration, EnumMember]

_CONTAINER_TYPES = (TypeDeclaration, EnumDeclaration, NamespaceDeclaration, UnsupportedDeclaration)


class ClassDiagramGenerator:
    """Writes the PlantUML body for a declaration tree.

    Blocks open before their children and close after them; inheritance
    edges follow the closing brace at column zero. Structs render as
    `class X <<struct>>` without edges or type stereotypes.
    """

    def __init__(self, writer: TextIO, indent: str = DEFAULT_INDENT):
        self._out = LineEmitter(writer, indent)

    def visit(self, node: Node) -> None:
        if isinstance(node, CompilationUnit):
            self._visit_all(node.members)
        elif isinstance(node, NamespaceDeclaration):
            self._visit_all(node.members)
        elif isinstance(node, TypeDeclaration):
            if node.kind is TypeKind.STRUCT:
                self.visit_struct(node)
            else:
                self.visit_type(node)
        elif isinstance(node, EnumDeclaration):
            self.visit_enum(node)
        elif isinstance(node, EnumMember):
            self.visit_enum_member(node)
        elif isinstance(node, FieldDeclaration):
            self.visit_field(node)
        elif isinstance(node, PropertyDeclaration):
            self.visit_property(node)
        elif isinstance(node, MethodDeclaration):
            self.visit_method(node)
        elif isinstance(node, ConstructorDeclaration):
            self.visit_constructor(node)
        elif isinstance(node, UnsupportedDeclaration):
            logger.debug("Skipping unsupported declaration %s %s", node.kind, node.name)
            # Nested types are still drawn; loose members would float outside any block
            self._visit_all(m for m in node.members if isinstance(m, _CONTAINER_TYPES))
        else:
            logger.debug("Skipping unknown node %s", type(node).__name__)

    def _visit_all(self, nodes) -> None:
        for child in nodes:
            self.visit(child)

    # =========================================================================
    # Types
    # =========================================================================

    def visit_type(self, node: TypeDeclaration) -> None:
        """Class or interface block followed by its inheritance edges."""
        modifiers = get_type_modifiers_text(node.modifiers)
        keyword = ("abstract " if "abstract" in node.modifiers else "") + node.kind.value

        self._out.write(f"{keyword} {node.name}{node.type_parameters} {modifiers}{{")
        with self._out.nested():
            self._visit_all(node.members)
        self._out.write("}")

        for base in node.base_types:
            self._out.write_flush(f"{node.name} <|-- {base}")

    def visit_struct(self, node: TypeDeclaration) -> None:
        self._out.write(f"class {node.name}{node.type_parameters} <<struct>> {{")
        with self._out.nested():
            self._visit_all(node.members)
        self._out.write("}")

    def visit_enum(self, node: EnumDeclaration) -> None:
        self._out.write(f"enum {node.name} {{")
        with self._out.nested():
            self._visit_all(node.members)
        self._out.write("}")

    def visit_enum_member(self, node: EnumMember) -> None:
        # Trailing comma on every member, the last one included
        value = f" = {node.value.text}" if node.value is not None else ""
        self._out.write(f"{node.name}{value},")

    # =========================================================================
    # Members
    # =========================================================================

    def visit_constructor(self, node: ConstructorDeclaration) -> None:
        modifiers = get_member_modifiers_text(node.modifiers)
        self._out.write(f"{modifiers}{node.name}({_params(node.parameters)})")

    def visit_field(self, node: FieldDeclaration) -> None:
        modifiers = get_member_modifiers_text(node.modifiers)
        for variable in node.variables:
            init = _literal_suffix(variable.initializer)
            self._out.write(f"{modifiers}{variable.name} : {node.type}{init}")

    def visit_property(self, node: PropertyDeclaration) -> None:
        modifiers = get_member_modifiers_text(node.modifiers)
        accessors = " ".join(
            f"<<{get_accessor_modifiers_text(a.modifiers)}{a.kind}>>"
            for a in node.accessors
            if not a.is_private
        )
        init = _literal_suffix(node.initializer)
        self._out.write(f"{modifiers}{node.name} : {node.type} {accessors}{init}")

    def visit_method(self, node: MethodDeclaration) -> None:
        modifiers = get_member_modifiers_text(node.modifiers)
        self._out.write(f"{modifiers}{node.name}({_params(node.parameters)}) : {node.return_type}")


def _params(parameters: List[Parameter]) -> str:
    return ", ".join(f"{p.name}:{p.type}" for p in parameters)


def _literal_suffix(initializer: Expression | None) -> str:
    """Only literal initializers are shown; calls and expressions are dropped."""
    if initializer is not None and initializer.is_literal:
        return f" = {initializer.text}"
    return ""


def emit(tree: Node, indent: str = DEFAULT_INDENT) -> List[str]:
    """Return the diagram body for a tree as a list of lines."""
    buffer = io.StringIO()
    ClassDiagramGenerator(buffer, indent).visit(tree)
    return buffer.getvalue().splitlines()


def generate_class_diagram(tree: Node, indent: str = DEFAULT_INDENT, wrap: bool = True) -> str:
    """Generate a PlantUML class diagram document for a tree.

    With wrap=True the body is enclosed in @startuml/@enduml.
    """
    buffer = io.StringIO()
    if wrap:
        buffer.write("@startuml\n")
    ClassDiagramGenerator(buffer, indent).visit(tree)
    if wrap:
        buffer.write("@enduml\n")
    return buffer.getvalue()
