"""Base interface for language-specific AST parsers.

Defines the Strategy pattern base class that all language parsers implement.
Shared parsing logic lives here; declaration tree building is delegated.
"""

import logging
from abc import ABC, abstractmethod
from typing import List

import tree_sitter

from .models import CompilationUnit, ParseError, ParseResult

logger = logging.getLogger(__name__)


class BaseLanguageParser(ABC):
    """Abstract base for language-specific tree-sitter parsers.

    Subclasses implement:
    - get_language(): returns language name string
    - get_tree_sitter_language(): returns tree-sitter Language object
    - build_tree(): walks AST tree and builds the declaration tree
    - extract_usings(): extracts using/import directives from AST
    """

    @abstractmethod
    def get_language(self) -> str:
        """Return the language identifier (e.g., 'csharp')."""
        ...

    @abstractmethod
    def get_tree_sitter_language(self) -> tree_sitter.Language:
        """Return the tree-sitter Language object for this language."""
        ...

    @abstractmethod
    def build_tree(
        self, tree: tree_sitter.Tree, source: bytes, file_path: str
    ) -> CompilationUnit:
        """Build the declaration tree from a parsed tree-sitter AST.

        Args:
            tree: Parsed tree-sitter tree
            source: Raw source bytes
            file_path: Relative file path within project

        Returns:
            CompilationUnit holding top-level declarations in source order
        """
        ...

    @abstractmethod
    def extract_usings(self, tree: tree_sitter.Tree, source: bytes) -> List[str]:
        """Extract using directives from the AST.

        Args:
            tree: Parsed tree-sitter tree
            source: Raw source bytes

        Returns:
            List of directive strings
        """
        ...

    def parse_file(self, file_path: str, project_root: str = "") -> ParseResult:
        """Parse a source file into a ParseResult.

        Shared logic: reads file, creates tree-sitter parser,
        delegates to subclass build methods.

        Args:
            file_path: Absolute path to the source file
            project_root: Project root for computing relative paths

        Returns:
            ParseResult with the declaration tree and metadata
        """
        # Compute relative path
        if project_root and file_path.startswith(project_root):
            rel_path = file_path[len(project_root):].lstrip("/")
        else:
            rel_path = file_path

        try:
            with open(file_path, "r", encoding="utf-8", errors="replace") as f:
                source_text = f.read()
        except OSError as e:
            return ParseResult(
                file_path=rel_path,
                language=self.get_language(),
                tree=CompilationUnit(file_path=rel_path),
                errors=[ParseError(file_path=rel_path, line=0, message=str(e), severity="error")],
            )

        return self.parse_source(source_text, rel_path)

    def parse_source(self, source_text: str, file_path: str) -> ParseResult:
        """Parse source code string into a ParseResult.

        Args:
            source_text: Source code as string
            file_path: Relative file path (for metadata)

        Returns:
            ParseResult with the declaration tree and metadata
        """
        errors: List[ParseError] = []
        source_bytes = source_text.encode("utf-8")
        line_count = source_text.count("\n") + (1 if source_text and not source_text.endswith("\n") else 0)

        parser = tree_sitter.Parser(self.get_tree_sitter_language())
        tree = parser.parse(source_bytes)

        # tree-sitter still yields a best-effort tree on syntax errors
        if tree.root_node.has_error:
            errors.append(
                ParseError(
                    file_path=file_path,
                    line=self._first_error_line(tree.root_node),
                    message="Tree-sitter reported parse errors in file",
                    severity="warning",
                )
            )

        try:
            usings = self.extract_usings(tree, source_bytes)
        except Exception as e:
            logger.warning(f"Failed to extract usings from {file_path}: {e}")
            usings = []
            errors.append(ParseError(file_path=file_path, line=0, message=f"Using extraction failed: {e}"))

        try:
            unit = self.build_tree(tree, source_bytes, file_path)
        except Exception as e:
            logger.error(f"Failed to build declaration tree for {file_path}: {e}")
            unit = CompilationUnit(file_path=file_path)
            errors.append(ParseError(file_path=file_path, line=0, message=f"Tree building failed: {e}", severity="error"))

        return ParseResult(
            file_path=file_path,
            language=self.get_language(),
            tree=unit,
            usings=usings,
            line_count=line_count,
            errors=errors,
        )

    @staticmethod
    def _first_error_line(node: tree_sitter.Node) -> int:
        """Return the 1-based line of the first ERROR or MISSING node, 0 if none."""
        stack = [node]
        while stack:
            current = stack.pop()
            if current.type == "ERROR" or current.is_missing:
                return current.start_point.row + 1
            if current.has_error:
                stack.extend(reversed(current.children))
        return 0
