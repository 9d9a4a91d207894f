"""C# AST parser using tree-sitter.

Walks the tree-sitter AST and builds the declaration tree (classes,
interfaces, structs, enums, fields, properties, methods, constructors)
consumed by the class diagram generator.
"""

import logging
import re
from typing import List, Optional

import tree_sitter
import tree_sitter_c_sharp

from .base import BaseLanguageParser
from .models import (
    Accessor,
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
    VariableDeclarator,
)

logger = logging.getLogger(__name__)

_CSHARP_LANGUAGE = tree_sitter.Language(tree_sitter_c_sharp.language())

_TYPE_KINDS = {
    "class_declaration": TypeKind.CLASS,
    "interface_declaration": TypeKind.INTERFACE,
    "struct_declaration": TypeKind.STRUCT,
}

_ACCESSOR_KEYWORDS = frozenset({"get", "set", "init"})

_LINE_BREAK = re.compile(r"[ \t]*\r?\n\s*")


class CSharpParser(BaseLanguageParser):
    """tree-sitter based C# parser.

    Builds:
    - Class / interface / struct declarations -> TypeDeclaration
    - Enum declarations -> EnumDeclaration
    - Field declarations -> FieldDeclaration (one declarator per variable)
    - Property declarations -> PropertyDeclaration
    - Method declarations -> MethodDeclaration
    - Constructor declarations -> ConstructorDeclaration
    - Namespaces (block and file-scoped) -> NamespaceDeclaration
    - Any other *_declaration node -> UnsupportedDeclaration
    """

    def get_language(self) -> str:
        return "csharp"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _CSHARP_LANGUAGE

    def extract_usings(self, tree: tree_sitter.Tree, source: bytes) -> List[str]:
        """Extract using directives from the AST."""
        usings = []
        for child in tree.root_node.children:
            if child.type == "using_directive":
                usings.append(self._text(child, source).strip())
        return usings

    def build_tree(
        self, tree: tree_sitter.Tree, source: bytes, file_path: str
    ) -> CompilationUnit:
        """Build the declaration tree for a C# compilation unit."""
        members: List[Declaration] = []
        file_namespace: Optional[NamespaceDeclaration] = None

        for child in tree.root_node.children:
            if child.type == "file_scoped_namespace_declaration":
                # Declarations after `namespace Foo;` are siblings in the
                # grammar but belong to the namespace
                file_namespace = NamespaceDeclaration(
                    name=self._get_child_text(child, "name", source) or "",
                    members=self._walk_members(child, source),
                )
                members.append(file_namespace)
                continue

            declaration = self._build_declaration(child, source)
            if declaration is None:
                continue
            if file_namespace is not None:
                file_namespace.members.append(declaration)
            else:
                members.append(declaration)

        return CompilationUnit(file_path=file_path, members=members)

    # =========================================================================
    # Recursive member walker
    # =========================================================================

    def _walk_members(self, node: tree_sitter.Node, source: bytes) -> List[Declaration]:
        """Build declarations for the children of a body node, in source order."""
        members: List[Declaration] = []
        for child in node.children:
            declaration = self._build_declaration(child, source)
            if declaration is not None:
                members.append(declaration)
        return members

    def _build_declaration(self, node: tree_sitter.Node, source: bytes) -> Optional[Declaration]:
        """Dispatch on node type. Returns None for non-declaration nodes."""
        if node.type in _TYPE_KINDS:
            return self._build_type(node, source, _TYPE_KINDS[node.type])

        elif node.type == "enum_declaration":
            return self._build_enum(node, source)

        elif node.type == "namespace_declaration":
            body = node.child_by_field_name("body") or self._get_child_by_type(node, "declaration_list")
            return NamespaceDeclaration(
                name=self._get_child_text(node, "name", source) or "",
                members=self._walk_members(body, source) if body else [],
            )

        elif node.type == "field_declaration":
            return self._build_field(node, source)

        elif node.type == "property_declaration":
            return self._build_property(node, source)

        elif node.type == "method_declaration":
            return self._build_method(node, source)

        elif node.type == "constructor_declaration":
            return ConstructorDeclaration(
                name=self._get_child_text(node, "name", source) or "",
                parameters=self._extract_parameters(node, source),
                modifiers=self._extract_modifiers(node, source),
            )

        elif node.type.endswith("_declaration"):
            body = node.child_by_field_name("body")
            if body is None or body.type != "declaration_list":
                body = self._get_child_by_type(node, "declaration_list")
            return UnsupportedDeclaration(
                kind=node.type,
                name=self._get_child_text(node, "name", source) or "",
                members=self._walk_members(body, source) if body else [],
            )

        return None

    # =========================================================================
    # Type-level builders
    # =========================================================================

    def _build_type(self, node: tree_sitter.Node, source: bytes, kind: TypeKind) -> TypeDeclaration:
        """Build a class/interface/struct declaration and its members."""
        body = node.child_by_field_name("body") or self._get_child_by_type(node, "declaration_list")
        type_params = self._get_child_by_type(node, "type_parameter_list")

        return TypeDeclaration(
            kind=kind,
            name=self._get_child_text(node, "name", source) or "",
            type_parameters=self._text(type_params, source).strip() if type_params else "",
            modifiers=self._extract_modifiers(node, source),
            base_types=self._extract_base_types(node, source),
            members=self._walk_members(body, source) if body else [],
        )

    def _build_enum(self, node: tree_sitter.Node, source: bytes) -> EnumDeclaration:
        """Build an enum declaration with its members."""
        members = []
        body = node.child_by_field_name("body") or self._get_child_by_type(node, "enum_member_declaration_list")
        if body:
            for child in body.children:
                if child.type != "enum_member_declaration":
                    continue
                value_node = child.child_by_field_name("value") or self._value_after_equals(child)
                members.append(EnumMember(
                    name=self._get_child_text(child, "name", source) or "",
                    value=self._expression(value_node, source),
                ))

        return EnumDeclaration(
            name=self._get_child_text(node, "name", source) or "",
            members=members,
            modifiers=self._extract_modifiers(node, source),
        )

    # =========================================================================
    # Member builders
    # =========================================================================

    def _build_field(self, node: tree_sitter.Node, source: bytes) -> FieldDeclaration:
        """Build a field declaration: one type, one or more declarators."""
        type_text = ""
        variables = []

        declaration = self._get_child_by_type(node, "variable_declaration")
        if declaration:
            type_node = declaration.child_by_field_name("type")
            type_text = self._text(type_node, source).strip() if type_node else ""
            for child in declaration.children:
                if child.type != "variable_declarator":
                    continue
                name = self._get_child_text(child, "name", source)
                if name is None:
                    identifier = self._get_child_by_type(child, "identifier")
                    name = self._text(identifier, source) if identifier else ""
                variables.append(VariableDeclarator(
                    name=name,
                    initializer=self._expression(self._value_after_equals(child), source),
                ))

        return FieldDeclaration(
            type=type_text,
            variables=variables,
            modifiers=self._extract_modifiers(node, source),
        )

    def _build_property(self, node: tree_sitter.Node, source: bytes) -> PropertyDeclaration:
        """Build a property declaration with its accessors and initializer."""
        accessors = []
        initializer = None

        accessor_list = node.child_by_field_name("accessors") or self._get_child_by_type(node, "accessor_list")
        if accessor_list:
            for child in accessor_list.children:
                if child.type == "accessor_declaration":
                    accessor = self._build_accessor(child, source)
                    if accessor:
                        accessors.append(accessor)

        value = node.child_by_field_name("value")
        if value is None and accessor_list is not None:
            value = self._value_after_equals(node)
        if value is not None:
            if value.type == "arrow_expression_clause":
                # `int X => expr;` is a read-only property
                accessors.append(Accessor(kind="get"))
            else:
                initializer = self._expression(value, source)

        type_node = node.child_by_field_name("type")
        return PropertyDeclaration(
            name=self._get_child_text(node, "name", source) or "",
            type=self._text(type_node, source).strip() if type_node else "",
            accessors=accessors,
            modifiers=self._extract_modifiers(node, source),
            initializer=initializer,
        )

    def _build_accessor(self, node: tree_sitter.Node, source: bytes) -> Optional[Accessor]:
        keyword = node.child_by_field_name("name")
        kind = self._text(keyword, source).strip() if keyword else ""
        if kind not in _ACCESSOR_KEYWORDS:
            kind = next((c.type for c in node.children if c.type in _ACCESSOR_KEYWORDS), "")
        if not kind:
            return None
        return Accessor(kind=kind, modifiers=self._extract_modifiers(node, source))

    def _build_method(self, node: tree_sitter.Node, source: bytes) -> MethodDeclaration:
        returns = node.child_by_field_name("returns") or node.child_by_field_name("type")
        return MethodDeclaration(
            name=self._get_child_text(node, "name", source) or "",
            return_type=self._text(returns, source).strip() if returns else "",
            parameters=self._extract_parameters(node, source),
            modifiers=self._extract_modifiers(node, source),
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _text(node: tree_sitter.Node, source: bytes) -> str:
        return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    @staticmethod
    def _get_child_text(node: tree_sitter.Node, field_name: str, source: bytes) -> Optional[str]:
        child = node.child_by_field_name(field_name)
        if child:
            return source[child.start_byte:child.end_byte].decode("utf-8", errors="replace")
        return None

    @staticmethod
    def _get_child_by_type(node: tree_sitter.Node, type_name: str) -> Optional[tree_sitter.Node]:
        for child in node.children:
            if child.type == type_name:
                return child
        return None

    @staticmethod
    def _value_after_equals(node: tree_sitter.Node) -> Optional[tree_sitter.Node]:
        """Return the expression following `=` in a declarator.

        Older grammars wrap it in an equals_value_clause node.
        """
        seen_equals = False
        for child in node.children:
            if child.type == "equals_value_clause":
                return child.named_children[0] if child.named_children else None
            if child.type == "=":
                seen_equals = True
            elif seen_equals and child.is_named:
                return child
        return None

    def _expression(self, node: Optional[tree_sitter.Node], source: bytes) -> Optional[Expression]:
        if node is None:
            return None
        # One diagram line per member: fold multi-line verbatim strings and
        # wrapped expressions onto a single line
        text = _LINE_BREAK.sub(" ", self._text(node, source).strip())
        return Expression(kind=node.type, text=text)

    def _extract_modifiers(self, node: tree_sitter.Node, source: bytes) -> List[str]:
        """Extract modifier keywords (public, static, override, virtual, etc.)."""
        modifiers = []
        for child in node.children:
            if child.type == "modifier":
                modifiers.append(self._text(child, source).strip())
        return modifiers

    def _extract_base_types(self, node: tree_sitter.Node, source: bytes) -> List[str]:
        """Extract base class and interface references in declaration order.

        `class Foo : Bar, IDisposable` -> ["Bar", "IDisposable"]
        """
        base_list = self._get_child_by_type(node, "base_list")
        if not base_list:
            return []

        base_types = []
        for child in base_list.named_children:
            if child.is_extra or child.type in ("argument_list", "comment"):
                continue
            if child.type == "primary_constructor_base_type":
                # record Foo(int X) : Bar(X) -> "Bar"
                type_node = child.child_by_field_name("type") or child.named_children[0]
                child = type_node
            text = self._text(child, source).strip()
            if text:
                base_types.append(text)
        return base_types

    def _extract_parameters(self, node: tree_sitter.Node, source: bytes) -> List[Parameter]:
        """Extract (name, type) pairs from a parameter_list."""
        params_node = node.child_by_field_name("parameters") or self._get_child_by_type(node, "parameter_list")
        if not params_node:
            return []

        parameters = []
        # `params T[] xs` is not wrapped in a parameter node: the grammar
        # emits the `params` token, the array type and the identifier as
        # siblings in the list
        params_type: Optional[str] = None
        in_params = False
        for child in params_node.children:
            if child.is_extra or child.type == "comment":
                continue
            if child.type in ("parameter", "parameter_array"):
                type_node = child.child_by_field_name("type")
                parameters.append(Parameter(
                    name=self._get_child_text(child, "name", source) or "",
                    type=self._text(type_node, source).strip() if type_node else "",
                ))
            elif child.type == "params":
                in_params = True
                params_type = None
            elif in_params and child.is_named:
                if params_type is None:
                    params_type = self._text(child, source).strip()
                else:
                    parameters.append(Parameter(name=self._text(child, source).strip(), type=params_type))
                    in_params = False
        return parameters
