"""ClassLoom AST Parser: tree-sitter based declaration trees.

Public API:
    parse_file(path, project_root) → ParseResult
    parse_source(source, file_path, language) → ParseResult
    detect_language(file_path) → str | None
"""

from .models import (
    Accessor,
    CompilationUnit,
    ConstructorDeclaration,
    EnumDeclaration,
    EnumMember,
    Expression,
    FieldDeclaration,
    MethodDeclaration,
    NamespaceDeclaration,
    Parameter,
    ParseError,
    ParseResult,
    PropertyDeclaration,
    TypeDeclaration,
    TypeKind,
    UnsupportedDeclaration,
    VariableDeclarator,
)
from .utils import detect_language, get_parser, is_supported_file, should_skip_directory

__all__ = [
    "parse_file",
    "parse_source",
    "detect_language",
    "get_parser",
    "is_supported_file",
    "should_skip_directory",
    "Accessor",
    "CompilationUnit",
    "ConstructorDeclaration",
    "EnumDeclaration",
    "EnumMember",
    "Expression",
    "FieldDeclaration",
    "MethodDeclaration",
    "NamespaceDeclaration",
    "Parameter",
    "ParseError",
    "ParseResult",
    "PropertyDeclaration",
    "TypeDeclaration",
    "TypeKind",
    "UnsupportedDeclaration",
    "VariableDeclarator",
]


def parse_file(file_path: str, project_root: str = "") -> ParseResult:
    """Parse a source file into a declaration tree.

    Args:
        file_path: Absolute path to the source file
        project_root: Project root for computing relative paths

    Returns:
        ParseResult containing the declaration tree

    Raises:
        ValueError: If the file extension maps to no supported language
    """
    language = detect_language(file_path)
    if language is None:
        raise ValueError(f"Unsupported file type: {file_path}")
    return get_parser(language).parse_file(file_path, project_root)


def parse_source(source_text: str, file_path: str, language: str | None = None) -> ParseResult:
    """Parse source code string into a declaration tree.

    Args:
        source_text: Source code as string
        file_path: Relative file path (for metadata)
        language: Language identifier. If None, detected from file_path.

    Returns:
        ParseResult containing the declaration tree

    Raises:
        ValueError: If no supported language applies
    """
    if language is None:
        language = detect_language(file_path)
    if language is None:
        raise ValueError(f"Unsupported file type: {file_path}")
    return get_parser(language).parse_source(source_text, file_path)
