"""Translation unit loading.

A translation unit is one dev language file plus the files for every other
configured language beside it. Files are JSON objects:

    {
      "_meta": {"tags": ["home"]},
      "hello": {"message": "Hello {name}", "description": "Greeting"},
      "bye": {"message": "Bye", "tags": ["footer"]}
    }

The ``_meta`` entry is file metadata and never treated as a message.

Components:
    TranslationMessage - One message entry
    LoadedTranslation - Every language's messages for one unit
    read_translation_file - Parse and validate one file
    load_translation - Load one unit, applying fallbacks
    load_all_translations - Load every unit under the project root

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import assert_never

from typedmessages.config import UserConfig
from typedmessages.constants import DEV_TRANSLATION_FILE_NAME, META_KEY
from typedmessages.diagnostics import ErrorTemplate, TranslationFileError
from typedmessages.enums import FallbackMode

from .paths import (
    get_alt_language_file_path,
    is_ignored,
    is_translation_directory,
    relative_to_root,
)
from .types import LanguageName, MessageSource, TranslationKey

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Data
    "TranslationMessage",
    "LoadedTranslation",
    # Loading
    "read_translation_file",
    "load_translation",
    "load_all_translations",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TranslationMessage:
    """One message entry of a translation file.

    Attributes:
        message: ICU message text
        description: Optional note for translators
        tags: Optional labels attached to the entry
    """

    message: MessageSource
    description: str | None = None
    tags: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class LoadedTranslation:
    """All languages' messages for one translation unit.

    Attributes:
        file_path: Dev language file identifying the unit
        keys: Union of keys across languages, dev language first, in discovery order
        languages: Language -> key -> message, after fallbacks were applied.
                   Every configured language is present, possibly empty.
    """

    file_path: Path
    keys: tuple[TranslationKey, ...]
    languages: Mapping[LanguageName, Mapping[TranslationKey, TranslationMessage]]

    def messages_for(self, language: LanguageName) -> Mapping[TranslationKey, TranslationMessage]:
        """Messages of one language, empty if the language is not part of the unit."""
        return self.languages.get(language, {})


def _is_utf8_encodable(text: str) -> bool:
    """False for strings holding lone surrogates, which JSON escapes can produce."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _parse_entry(file_path: Path, key: str, raw: object) -> TranslationMessage:
    match raw:
        case {"message": str(message), **rest}:
            pass
        case _:
            raise TranslationFileError(
                ErrorTemplate.translation_entry_invalid(
                    str(file_path), key, "expected an object with a string 'message'"
                )
            )

    description = rest.get("description")
    if description is not None and not isinstance(description, str):
        raise TranslationFileError(
            ErrorTemplate.translation_entry_invalid(
                str(file_path), key, "'description' must be a string"
            )
        )
    tags = rest.get("tags", [])
    if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
        raise TranslationFileError(
            ErrorTemplate.translation_entry_invalid(
                str(file_path), key, "'tags' must be a list of strings"
            )
        )
    if not all(_is_utf8_encodable(text) for text in (key, message, description or "", *tags)):
        raise TranslationFileError(
            ErrorTemplate.translation_entry_invalid(
                str(file_path),
                key.encode("utf-8", "backslashreplace").decode("utf-8"),
                "contains an unpaired surrogate escape",
            )
        )
    return TranslationMessage(message=message, description=description, tags=tuple(tags))


def read_translation_file(
    file_path: Path, *, required: bool = True
) -> dict[TranslationKey, TranslationMessage]:
    """Read and validate one translation file.

    Args:
        file_path: JSON file to read
        required: When False a missing file reads as empty

    Returns:
        Key -> message, in file order, without the metadata entry

    Raises:
        TranslationFileError: If the file is unreadable, not JSON, or has
            malformed entries
    """
    try:
        text = file_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        if not required:
            return {}
        raise TranslationFileError(
            ErrorTemplate.translation_file_unreadable(str(file_path), "file does not exist")
        ) from None
    except (OSError, UnicodeDecodeError) as e:
        raise TranslationFileError(
            ErrorTemplate.translation_file_unreadable(str(file_path), str(e))
        ) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise TranslationFileError(
            ErrorTemplate.translation_file_invalid(str(file_path), str(e))
        ) from e
    if not isinstance(data, dict):
        raise TranslationFileError(
            ErrorTemplate.translation_file_invalid(str(file_path), "top level must be an object")
        )

    return {
        key: _parse_entry(file_path, key, raw) for key, raw in data.items() if key != META_KEY
    }


def _fallback_languages(
    language: LanguageName, config: UserConfig, fallbacks: FallbackMode
) -> tuple[LanguageName, ...]:
    """Languages consulted, in order, when a message is missing."""
    match fallbacks:
        case FallbackMode.NONE:
            return ()
        case FallbackMode.VALID:
            return config.extends_chain(language)
        case FallbackMode.ALL:
            chain = config.extends_chain(language)
            if language != config.dev_language and config.dev_language not in chain:
                chain = (*chain, config.dev_language)
            return chain
        case _ as unreachable:
            assert_never(unreachable)


def load_translation(
    file_path: Path,
    config: UserConfig,
    *,
    fallbacks: FallbackMode = FallbackMode.ALL,
) -> LoadedTranslation:
    """Load one translation unit.

    Args:
        file_path: Dev language file of the unit
        config: Project configuration
        fallbacks: How missing messages are filled in

    Returns:
        Loaded unit with every configured language

    Raises:
        TranslationFileError: If any file of the unit is malformed
    """
    file_path = Path(file_path)
    own: dict[LanguageName, dict[TranslationKey, TranslationMessage]] = {
        config.dev_language: read_translation_file(file_path)
    }
    for language in config.language_names:
        if language != config.dev_language:
            own[language] = read_translation_file(
                get_alt_language_file_path(file_path, language), required=False
            )

    discovered: dict[TranslationKey, None] = {}
    for language in config.language_names:
        discovered.update(dict.fromkeys(own[language]))
    keys = tuple(discovered)

    languages: dict[LanguageName, dict[TranslationKey, TranslationMessage]] = {}
    for language in config.language_names:
        chain = _fallback_languages(language, config, fallbacks)
        sources = (own[language], *(own[name] for name in chain))
        resolved: dict[TranslationKey, TranslationMessage] = {}
        for key in keys:
            for source in sources:
                if key in source:
                    resolved[key] = source[key]
                    break
        languages[language] = resolved

    logger.debug(
        "Loaded %d keys in %d languages from %s (fallbacks=%s)",
        len(keys),
        len(languages),
        relative_to_root(file_path, config),
        fallbacks,
    )
    return LoadedTranslation(file_path=file_path, keys=keys, languages=languages)


def _find_dev_files(config: UserConfig) -> list[Path]:
    """Every dev language file under the project root, ignored paths excluded."""
    found: list[Path] = []
    suffix = config.translations_directory_suffix
    for directory, dirnames, filenames in config.project_root.walk():
        dirnames[:] = [name for name in dirnames if not is_ignored(directory / name, config)]
        if (
            is_translation_directory(directory, suffix)
            and DEV_TRANSLATION_FILE_NAME in filenames
            and not is_ignored(directory / DEV_TRANSLATION_FILE_NAME, config)
        ):
            found.append(directory / DEV_TRANSLATION_FILE_NAME)
    return sorted(found)


def load_all_translations(
    config: UserConfig,
    *,
    fallbacks: FallbackMode = FallbackMode.ALL,
) -> list[LoadedTranslation]:
    """Load every translation unit in the project, sorted by dev file path.

    Raises:
        TranslationFileError: If any unit is malformed
    """
    units = [load_translation(path, config, fallbacks=fallbacks) for path in _find_dev_files(config)]
    logger.debug("Found %d translation units under %s", len(units), config.project_root)
    return units
