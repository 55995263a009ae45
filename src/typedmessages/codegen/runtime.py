"""Runtime module generation for translation units.

Turns a LoadedTranslation into the text of its generated ``index.ts``:

    // This file is automatically generated by typedmessages.
    // To make changes update translation.json files directly.

    import { createLanguage, createTranslationFile } from '@vocab/core/runtime';

    const translations = createTranslationFile<'en' | 'fr', { 'hello': () => 'Hello' | 'Bonjour' }>({
      'en': createLanguage({"hello": "Hello"}),
      'fr': createLanguage({"hello": "Bonjour"}),
    });

    export default translations;

Each key becomes an accessor type. A key without placeholders is a
zero-argument function returning the union of its literal messages; a key
with placeholders takes a ``values`` object typed from the inferred
parameter map, and becomes generic over the tag render result when any
language's message contains markup.

Generation is deterministic: identical units produce identical text, and
write_if_changed() skips the write when the file already holds that text.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from typedmessages.constants import (
    BANNER,
    DEFAULT_RUNTIME_MODULE,
    DEFAULT_TYPES_MODULE,
    MARKUP_FORMAT_RETURN,
    MARKUP_GENERIC,
    MARKUP_RETURN_TYPE,
    MAX_DEPTH,
    STRING_TYPE,
)
from typedmessages.core.depth_guard import DepthGuard
from typedmessages.diagnostics import MessageSyntaxError
from typedmessages.localization.paths import get_generated_module_path
from typedmessages.locale_utils import plural_categories
from typedmessages.syntax import MessageParser
from typedmessages.syntax.ast import PluralElement, SelectElement, TagElement

from .encoding import quote_literal
from .formatting import format_source
from .inference import ParamConflict, ParamTypeCollector, infer_message_types
from .serializer import serialize_object_to_type

if TYPE_CHECKING:
    from typedmessages.config import UserConfig
    from typedmessages.localization.loading import LoadedTranslation
    from typedmessages.syntax.ast import MessageElement

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Type info
    "TranslationTypeInfo",
    "collect_translation_types",
    # Text generation
    "serialize_translation_runtime",
    # Output
    "generate_runtime",
    "write_if_changed",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TranslationTypeInfo:
    """Merged type information for one key across every language.

    Attributes:
        params: Placeholder name -> type expression, last writer wins
        has_tags: True if any language's message contains markup
        messages: Distinct message strings, first-seen order
        conflicts: Placeholders whose type was overwritten during merging
    """

    params: Mapping[str, str]
    has_tags: bool
    messages: tuple[str, ...]
    conflicts: tuple[ParamConflict, ...] = ()

    @property
    def return_type(self) -> str:
        """Render result type of the message."""
        return MARKUP_RETURN_TYPE if self.has_tags else STRING_TYPE

    @property
    def message(self) -> str:
        """Union of the quoted literal messages."""
        return " | ".join(quote_literal(message) for message in self.messages) or STRING_TYPE

    @property
    def accessor_type(self) -> str:
        """Function type of the key's accessor in the generated module."""
        if not self.params:
            return f"() => {self.message}"
        generic = MARKUP_GENERIC if self.has_tags else ""
        format_return = MARKUP_FORMAT_RETURN if self.has_tags else STRING_TYPE
        return f"{generic}(values: {serialize_object_to_type(self.params)}) => {format_return}"


def _iter_plurals(
    elements: Iterable[MessageElement], guard: DepthGuard
) -> Iterator[PluralElement]:
    for element in elements:
        match element:
            case PluralElement(options=options):
                yield element
                with guard:
                    for option in options:
                        yield from _iter_plurals(option.value, guard)
            case SelectElement(options=options):
                with guard:
                    for option in options:
                        yield from _iter_plurals(option.value, guard)
            case TagElement(children=children):
                with guard:
                    yield from _iter_plurals(children, guard)
            case _:
                pass


def _check_plural_categories(
    elements: Iterable[MessageElement], *, key: str, language: str, file_path: Path
) -> None:
    """Warn about plural selectors the language's CLDR rules never produce."""
    for plural in _iter_plurals(elements, DepthGuard(max_depth=MAX_DEPTH)):
        categories = plural_categories(language, plural.plural_type)
        if categories is None:
            continue
        for selector in plural.selectors:
            if not selector.startswith("=") and selector not in categories:
                logger.warning(
                    "Plural category '%s' of '%s' in message '%s' (%s, %s) is never "
                    "selected; expected one of %s",
                    selector,
                    plural.value,
                    key,
                    language,
                    file_path,
                    ", ".join(sorted(categories)),
                )


def collect_translation_types(
    loaded: LoadedTranslation,
    *,
    types_module: str = DEFAULT_TYPES_MODULE,
) -> tuple[dict[str, TranslationTypeInfo], tuple[str, ...]]:
    """Infer and merge type information for every key of a unit.

    Args:
        loaded: Translation unit
        types_module: Module the tag callback type is imported from

    Returns:
        (types, imports): key -> merged type info in key order, and the
        import statements the types need, deduplicated in first-seen order

    Raises:
        MessageSyntaxError: If any language's message fails to parse
    """
    parser = MessageParser()
    imports = ParamTypeCollector()
    types: dict[str, TranslationTypeInfo] = {}

    for key in loaded.keys:
        collector = ParamTypeCollector()
        conflicts: list[ParamConflict] = []
        messages: dict[str, None] = {}
        has_tags = False

        for language, translations in loaded.languages.items():
            translation = translations.get(key)
            if translation is None:
                continue
            try:
                elements = parser.parse(translation.message)
            except MessageSyntaxError:
                logger.error(
                    "Failed to parse message '%s' (%s) in %s", key, language, loaded.file_path
                )
                raise

            inferred = infer_message_types(elements, types_module=types_module)
            has_tags = has_tags or inferred.has_tags
            conflicts.extend(inferred.conflicts)
            collector.merge(inferred.params)
            imports.add_imports(inferred.imports)
            messages.setdefault(translation.message, None)
            _check_plural_categories(
                elements, key=key, language=language, file_path=loaded.file_path
            )

        conflicts.extend(collector.conflicts)
        types[key] = TranslationTypeInfo(
            params=collector.params,
            has_tags=has_tags,
            messages=tuple(messages),
            conflicts=tuple(conflicts),
        )

    return types, imports.imports


def serialize_translation_runtime(
    types: Mapping[str, TranslationTypeInfo],
    imports: Iterable[str],
    loaded: LoadedTranslation,
    *,
    runtime_module: str = DEFAULT_RUNTIME_MODULE,
) -> str:
    """Assemble the generated module text for a unit.

    Args:
        types: Key -> merged type info
        imports: Import statements the accessor types need
        loaded: Translation unit supplying the per-language payloads
        runtime_module: Module providing createLanguage/createTranslationFile

    Returns:
        Module text ending in a single newline
    """
    accessor_types = {key: info.accessor_type for key, info in types.items()}
    language_union = " | ".join(quote_literal(language) for language in loaded.languages) or "never"

    payloads = []
    for language, translations in loaded.languages.items():
        data = {key: translations[key].message for key in loaded.keys if key in translations}
        payloads.append(
            f"  {quote_literal(language)}: createLanguage({json.dumps(data, ensure_ascii=False)}),"
        )

    import_lines = [
        *dict.fromkeys(imports),
        f"import {{ createLanguage, createTranslationFile }} from {quote_literal(runtime_module)};",
    ]
    lines = [
        BANNER,
        "",
        *import_lines,
        "",
        f"const translations = createTranslationFile<{language_union}, "
        f"{serialize_object_to_type(accessor_types)}>({{",
        *payloads,
        "});",
        "",
        "export default translations;",
    ]
    return "\n".join(lines) + "\n"


def write_if_changed(path: Path, contents: str) -> bool:
    """Write contents to path unless the file already holds exactly those bytes.

    A file that cannot be read counts as absent and is always written.

    Returns:
        True if the file was written
    """
    encoded = contents.encode("utf-8")
    try:
        existing: bytes | None = path.read_bytes()
    except OSError:
        existing = None

    if existing == encoded:
        logger.debug("Unchanged, skipping write: %s", path)
        return False
    path.write_bytes(encoded)
    logger.debug("Wrote %s", path)
    return True


def generate_runtime(loaded: LoadedTranslation, config: UserConfig | None = None) -> bool:
    """Generate and write the module for one translation unit.

    Args:
        loaded: Translation unit
        config: Project configuration (formatter and module names); defaults apply
            when omitted

    Returns:
        True if the generated module was written, False if it was already current

    Raises:
        MessageSyntaxError: If any message fails to parse
        FormatterError: If the configured formatter fails
    """
    runtime_module = config.runtime_module if config is not None else DEFAULT_RUNTIME_MODULE
    types_module = config.types_module if config is not None else DEFAULT_TYPES_MODULE
    format_command = config.format_command if config is not None else None

    logger.debug("Generating types for %s", loaded.file_path)
    types, imports = collect_translation_types(loaded, types_module=types_module)
    source = serialize_translation_runtime(types, imports, loaded, runtime_module=runtime_module)

    output_path = get_generated_module_path(loaded.file_path)
    formatted = format_source(source, output_path, format_command)
    return write_if_changed(output_path, formatted)
