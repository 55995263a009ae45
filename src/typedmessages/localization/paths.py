"""Path conventions for translation directories.

A translation directory is any directory whose name ends with the configured
suffix (default ``.vocab``). Inside it:

    translations.json            dev language messages (the translation unit)
    <language>.translations.json messages for another language
    index.ts                     generated module

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from typedmessages.constants import (
    ALT_TRANSLATION_FILE_SUFFIX,
    DEPENDENCY_DIRECTORY_GLOB,
    DEV_TRANSLATION_FILE_NAME,
    GENERATED_MODULE_FILE_NAME,
)
from typedmessages.enums import TranslationFileKind

if TYPE_CHECKING:
    from typedmessages.config import UserConfig

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Watch globs
    "dev_translation_glob",
    "alt_translation_glob",
    "translation_directory_glob",
    # Predicates
    "is_dev_language_file",
    "is_alt_language_file",
    "is_translation_directory",
    "is_ignored",
    "classify_path",
    # Mappings
    "get_alt_language_from_file",
    "get_dev_file_from_alt",
    "get_alt_language_file_path",
    "get_generated_module_path",
    "relative_to_root",
]


def dev_translation_glob(suffix: str) -> str:
    """Glob matching dev language files under a project root."""
    return f"**/*{suffix}/{DEV_TRANSLATION_FILE_NAME}"


def alt_translation_glob(suffix: str) -> str:
    """Glob matching other-language files under a project root."""
    return f"**/*{suffix}/*{ALT_TRANSLATION_FILE_SUFFIX}"


def translation_directory_glob(suffix: str) -> str:
    """Glob matching translation directories under a project root."""
    return f"**/*{suffix}"


def is_translation_directory(path: Path, suffix: str) -> bool:
    """Check whether a directory name has the translation directory shape."""
    return path.name.endswith(suffix)


def is_dev_language_file(path: Path, suffix: str) -> bool:
    """Check for ``<dir><suffix>/translations.json``."""
    return path.name == DEV_TRANSLATION_FILE_NAME and is_translation_directory(path.parent, suffix)


def is_alt_language_file(path: Path, suffix: str) -> bool:
    """Check for ``<dir><suffix>/<language>.translations.json``."""
    return (
        path.name != DEV_TRANSLATION_FILE_NAME
        and path.name.endswith(ALT_TRANSLATION_FILE_SUFFIX)
        and len(path.name) > len(ALT_TRANSLATION_FILE_SUFFIX)
        and is_translation_directory(path.parent, suffix)
    )


def classify_path(path: Path, suffix: str) -> TranslationFileKind:
    """Classify a file path as a dev language file, other-language file or neither.

    Example:
        >>> classify_path(Path("app/home.vocab/fr.translations.json"), ".vocab")
        <TranslationFileKind.ALT: 'alt'>
    """
    if is_dev_language_file(path, suffix):
        return TranslationFileKind.DEV
    if is_alt_language_file(path, suffix):
        return TranslationFileKind.ALT
    return TranslationFileKind.OTHER


def get_alt_language_from_file(path: Path) -> str:
    """Language name encoded in an other-language file name."""
    return path.name.removesuffix(ALT_TRANSLATION_FILE_SUFFIX)


def get_dev_file_from_alt(path: Path) -> Path:
    """Dev language file sibling of an other-language file."""
    return path.parent / DEV_TRANSLATION_FILE_NAME


def get_alt_language_file_path(dev_file: Path, language: str) -> Path:
    """Path of a language's file next to the dev language file."""
    return dev_file.parent / f"{language}{ALT_TRANSLATION_FILE_SUFFIX}"


def get_generated_module_path(dev_file: Path) -> Path:
    """Path of the generated module next to the dev language file."""
    return dev_file.parent / GENERATED_MODULE_FILE_NAME


def relative_to_root(path: Path, config: UserConfig) -> PurePosixPath:
    """Path relative to the project root, as posix; absolute if outside it."""
    try:
        return PurePosixPath(path.relative_to(config.project_root).as_posix())
    except ValueError:
        return PurePosixPath(path.as_posix())


def is_ignored(path: Path, config: UserConfig) -> bool:
    """Check a path against dependency directories and the configured ignore globs.

    Globs are matched against the path relative to the project root.
    """
    relative = relative_to_root(path, config)
    return any(
        relative.full_match(pattern) for pattern in (DEPENDENCY_DIRECTORY_GLOB, *config.ignore)
    )
