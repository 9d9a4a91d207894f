"""Shared constants for ClassLoom.

This module contains constants that are used across multiple modules
to avoid duplication and ensure consistency.
"""

# =============================================================================
# Diagram Output
# =============================================================================

# Indent unit for one nesting level
DEFAULT_INDENT_SIZE = 4
DEFAULT_INDENT = " " * DEFAULT_INDENT_SIZE

# Extension of generated diagram files
PUML_EXTENSION = ".puml"

# =============================================================================
# Environment Overrides
# =============================================================================

ENV_LOG_LEVEL = "CLASSLOOM_LOG_LEVEL"
ENV_INDENT_SIZE = "CLASSLOOM_INDENT_SIZE"

DEFAULT_LOG_LEVEL = "INFO"
