"""Source discovery helpers and the parser registry.

Maps file extensions to grammars, hands out one cached parser per
language, and decides which folders a directory conversion walks into.
"""

import os
from typing import Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .base import BaseLanguageParser

# .cs is the only extension with a grammar behind it
SUPPORTED_EXTENSIONS: Dict[str, str] = {
    ".cs": "csharp",
}

# Build output, IDE state and restored packages never hold hand-written sources
SKIP_DIRECTORIES = frozenset({
    "bin",
    "obj",
    "packages",
    "TestResults",
    "node_modules",
    "dist",
    "build",
})

_parser_registry: Dict[str, "BaseLanguageParser"] = {}


def detect_language(file_path: str) -> Optional[str]:
    """Return the language id for a path's extension (case-insensitive), or None."""
    _, ext = os.path.splitext(file_path)
    return SUPPORTED_EXTENSIONS.get(ext.lower())


def get_parser(language: str) -> "BaseLanguageParser":
    """Return the shared parser for a language id.

    The C# grammar is loaded on first use, not at import time.

    Raises:
        ValueError: If no grammar is registered for the language
    """
    parser = _parser_registry.get(language)
    if parser is not None:
        return parser

    if language != "csharp":
        raise ValueError(
            f"No parser for language {language!r}; "
            f"known: {sorted(set(SUPPORTED_EXTENSIONS.values()))}"
        )

    from .csharp_parser import CSharpParser
    parser = _parser_registry[language] = CSharpParser()
    return parser


def should_skip_directory(dir_name: str) -> bool:
    """True for build output folders and hidden folders such as .git or .vs."""
    return dir_name in SKIP_DIRECTORIES or dir_name.startswith(".")


def is_supported_file(file_path: str) -> bool:
    return detect_language(file_path) is not None
