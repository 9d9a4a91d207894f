"""AST Parser data models.

Defines the declaration tree consumed by the class diagram generator.
These are pure data containers with no parsing logic. Nothing downstream of the
parser mutates them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class TypeKind(Enum):
    """Declaration shape of a type with members."""
    CLASS = "class"
    INTERFACE = "interface"
    STRUCT = "struct"


@dataclass
class Expression:
    """Initializer or enum value, kept as source text plus its node kind."""

    kind: str  # tree-sitter node type, e.g. "integer_literal", "object_creation_expression"
    text: str

    @property
    def is_literal(self) -> bool:
        # Bare `default` is a literal in C#; `default(T)` is not
        if self.text == "default":
            return True
        return self.kind.endswith("literal")


@dataclass
class Parameter:
    name: str
    type: str


@dataclass
class VariableDeclarator:
    name: str
    initializer: Optional[Expression] = None


@dataclass
class Accessor:
    """A property accessor: `get`, `set` or `init`."""

    kind: str
    modifiers: List[str] = field(default_factory=list)

    @property
    def is_private(self) -> bool:
        return "private" in self.modifiers


@dataclass
class FieldDeclaration:
    type: str
    variables: List[VariableDeclarator]
    modifiers: List[str] = field(default_factory=list)


@dataclass
class PropertyDeclaration:
    name: str
    type: str
    accessors: List[Accessor] = field(default_factory=list)
    modifiers: List[str] = field(default_factory=list)
    initializer: Optional[Expression] = None


@dataclass
class MethodDeclaration:
    name: str
    return_type: str
    parameters: List[Parameter] = field(default_factory=list)
    modifiers: List[str] = field(default_factory=list)


@dataclass
class ConstructorDeclaration:
    name: str
    parameters: List[Parameter] = field(default_factory=list)
    modifiers: List[str] = field(default_factory=list)


@dataclass
class EnumMember:
    name: str
    value: Optional[Expression] = None


@dataclass
class EnumDeclaration:
    name: str
    members: List[EnumMember] = field(default_factory=list)
    modifiers: List[str] = field(default_factory=list)


@dataclass
class UnsupportedDeclaration:
    """A declaration the model has no shape for (delegate, event, record...).

    Declarations in its body (a record's nested classes, for instance) are
    kept in members.
    """

    kind: str  # tree-sitter node type
    name: str = ""
    members: List["Declaration"] = field(default_factory=list)


@dataclass
class TypeDeclaration:
    """A class, interface or struct and its members in source order."""

    kind: TypeKind
    name: str
    type_parameters: str = ""  # "<T, U>" including brackets
    modifiers: List[str] = field(default_factory=list)
    base_types: List[str] = field(default_factory=list)
    members: List["Declaration"] = field(default_factory=list)


@dataclass
class NamespaceDeclaration:
    """Block or file-scoped namespace. Transparent to the diagram."""

    name: str
    members: List["Declaration"] = field(default_factory=list)


Declaration = Union[
    TypeDeclaration,
    EnumDeclaration,
    NamespaceDeclaration,
    FieldDeclaration,
    PropertyDeclaration,
    MethodDeclaration,
    ConstructorDeclaration,
    UnsupportedDeclaration,
]


@dataclass
class CompilationUnit:
    """Root of one parsed source file."""

    file_path: str
    members: List[Declaration] = field(default_factory=list)


@dataclass
class ParseError:
    """An error encountered during parsing."""

    file_path: str
    line: int
    message: str
    severity: str = "warning"  # "warning" | "error"


@dataclass
class ParseResult:
    """Complete parse output for a single file.

    Contains the declaration tree, using directives, and any parse errors.
    """

    file_path: str
    language: str
    tree: CompilationUnit
    usings: List[str] = field(default_factory=list)
    line_count: int = 0
    errors: List[ParseError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(e.severity == "error" for e in self.errors)
