"""Shared constants for typedmessages.

This module provides centralized configuration constants used across the
syntax, codegen and localization packages. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for parsing, inference and serialization
- Input limits: Size constraints on message source text
- File conventions: Names of translation and generated files
- Generated code: Banner, runtime modules and TypeScript type fragments

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Input limits
    "MAX_MESSAGE_SIZE",
    # File conventions
    "DEV_TRANSLATION_FILE_NAME",
    "ALT_TRANSLATION_FILE_SUFFIX",
    "GENERATED_MODULE_FILE_NAME",
    "DEFAULT_TRANSLATIONS_DIRECTORY_SUFFIX",
    "DEPENDENCY_DIRECTORY_GLOB",
    "META_KEY",
    "EMPTY_TRANSLATION_FILE_CONTENT",
    "CONFIG_FILE_NAME",
    # Generated code
    "BANNER",
    "DEFAULT_RUNTIME_MODULE",
    "DEFAULT_TYPES_MODULE",
    "STRING_TYPE",
    "NUMBER_TYPE",
    "DATE_TYPE",
    "TAG_TYPE",
    "MARKUP_RETURN_TYPE",
    "MARKUP_FORMAT_RETURN",
    "MARKUP_GENERIC",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Unified maximum depth for recursion protection.
# Used by: parser (nesting), inferencer (AST walk), type serializer.
# Real messages nest plural inside select inside tag a handful of levels deep;
# 100 levels is malformed input.
MAX_DEPTH: int = 100

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum size of a single message string (1 MB).
MAX_MESSAGE_SIZE: int = 1024 * 1024

# ============================================================================
# FILE CONVENTIONS
# ============================================================================

DEV_TRANSLATION_FILE_NAME: str = "translations.json"

# Derived-locale files are named "<language>.translations.json"
ALT_TRANSLATION_FILE_SUFFIX: str = ".translations.json"

GENERATED_MODULE_FILE_NAME: str = "index.ts"

DEFAULT_TRANSLATIONS_DIRECTORY_SUFFIX: str = ".vocab"

DEPENDENCY_DIRECTORY_GLOB: str = "**/node_modules/**"

# Top-level key reserved for file metadata inside a translation file
META_KEY: str = "_meta"

# Seed content written into newly created translation directories
EMPTY_TRANSLATION_FILE_CONTENT: str = "{}"

CONFIG_FILE_NAME: str = "typedmessages.toml"

# ============================================================================
# GENERATED CODE
# ============================================================================

BANNER: str = (
    "// This file is automatically generated by typedmessages.\n"
    "// To make changes update translation.json files directly."
)

DEFAULT_RUNTIME_MODULE: str = "@vocab/core/runtime"
DEFAULT_TYPES_MODULE: str = "@vocab/types"

STRING_TYPE: str = "string"
NUMBER_TYPE: str = "number"
DATE_TYPE: str = "Date | number"
TAG_TYPE: str = "FormatXMLElementFn<T>"

MARKUP_RETURN_TYPE: str = "NonNullable<ReactNode>"
MARKUP_FORMAT_RETURN: str = "string | T | Array<string | T>"
MARKUP_GENERIC: str = "<T = string>"
