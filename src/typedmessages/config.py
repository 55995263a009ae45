"""Project configuration.

Configuration lives in ``typedmessages.toml`` or in the
``[tool.typedmessages]`` table of ``pyproject.toml``:

    [tool.typedmessages]
    project_root = "."
    dev_language = "en"
    languages = [
        { name = "en" },
        { name = "en-AU", extends = "en" },
        { name = "fr" },
    ]
    ignore = ["**/build/**"]
    format_command = ["npx", "prettier"]

Python 3.13+.
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from typedmessages.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_RUNTIME_MODULE,
    DEFAULT_TRANSLATIONS_DIRECTORY_SUFFIX,
    DEFAULT_TYPES_MODULE,
)
from typedmessages.diagnostics import ConfigError, ErrorTemplate

__all__ = [
    "LanguageTarget",
    "UserConfig",
    "config_from_mapping",
    "find_config_file",
    "load_config",
]

logger = logging.getLogger(__name__)

_PYPROJECT = "pyproject.toml"


@dataclass(frozen=True, slots=True)
class LanguageTarget:
    """A configured language.

    Attributes:
        name: Language label, also used in file names (fr.translations.json)
        extends: Language whose messages fill gaps in this one
    """

    name: str
    extends: str | None = None


@dataclass(frozen=True, slots=True)
class UserConfig:
    """Validated project configuration.

    Attributes:
        project_root: Directory searched for translation directories
        dev_language: Authoring language, stored in translations.json
        languages: Every language including the dev language
        translations_directory_suffix: Suffix marking translation directories
        ignore: Extra glob patterns (relative to project_root) to skip
        format_command: Optional external formatter argv prefix
        runtime_module: Module providing createLanguage/createTranslationFile
        types_module: Module providing FormatXMLElementFn
    """

    project_root: Path
    dev_language: str
    languages: tuple[LanguageTarget, ...]
    translations_directory_suffix: str = DEFAULT_TRANSLATIONS_DIRECTORY_SUFFIX
    ignore: tuple[str, ...] = ()
    format_command: tuple[str, ...] | None = None
    runtime_module: str = DEFAULT_RUNTIME_MODULE
    types_module: str = DEFAULT_TYPES_MODULE
    _by_name: dict[str, LanguageTarget] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Normalize containers and validate language references.

        Raises:
            ConfigError: If languages are malformed, unknown or cyclic
        """
        object.__setattr__(self, "project_root", Path(self.project_root))
        object.__setattr__(self, "languages", tuple(self.languages))
        object.__setattr__(self, "ignore", tuple(self.ignore))
        if self.format_command is not None:
            object.__setattr__(self, "format_command", tuple(self.format_command))

        if not self.translations_directory_suffix:
            raise ConfigError(
                ErrorTemplate.config_invalid("translations_directory_suffix must not be empty")
            )

        by_name: dict[str, LanguageTarget] = {}
        for language in self.languages:
            _validate_language_name(language.name)
            if language.name in by_name:
                raise ConfigError(
                    ErrorTemplate.config_invalid(f"language '{language.name}' listed twice")
                )
            by_name[language.name] = language
        object.__setattr__(self, "_by_name", by_name)

        if self.dev_language not in by_name:
            raise ConfigError(ErrorTemplate.unknown_language(self.dev_language, "dev_language"))
        for language in self.languages:
            if language.extends is not None and language.extends not in by_name:
                raise ConfigError(
                    ErrorTemplate.unknown_language(
                        language.extends, f"extends of '{language.name}'"
                    )
                )
            self.extends_chain(language.name)

    @property
    def language_names(self) -> tuple[str, ...]:
        """Configured language names, dev language first, then configuration order."""
        names = (language.name for language in self.languages)
        others = (name for name in names if name != self.dev_language)
        return (self.dev_language, *others)

    def get_language(self, name: str) -> LanguageTarget:
        """Look up a configured language.

        Raises:
            ConfigError: If the language is not configured
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise ConfigError(ErrorTemplate.unknown_language(name, "lookup")) from None

    def extends_chain(self, name: str) -> tuple[str, ...]:
        """Ancestors of a language along 'extends', nearest first.

        Raises:
            ConfigError: If the chain loops
        """
        chain: list[str] = []
        visited = [name]
        current = self.get_language(name).extends
        while current is not None:
            if current in visited:
                raise ConfigError(ErrorTemplate.extends_cycle((*visited, current)))
            visited.append(current)
            chain.append(current)
            current = self.get_language(current).extends
        return tuple(chain)


def _validate_language_name(name: object) -> None:
    if not isinstance(name, str) or not name.strip():
        raise ConfigError(ErrorTemplate.config_invalid("language names must be non-empty strings"))
    if "/" in name or "\\" in name or ".." in name:
        raise ConfigError(
            ErrorTemplate.config_invalid(f"language name '{name}' must not contain path separators")
        )


def _parse_languages(raw: object, source: str | None) -> tuple[LanguageTarget, ...]:
    if not isinstance(raw, Sequence) or isinstance(raw, str) or not raw:
        raise ConfigError(
            ErrorTemplate.config_invalid("'languages' must be a non-empty list", source)
        )
    languages: list[LanguageTarget] = []
    for item in raw:
        match item:
            case str():
                languages.append(LanguageTarget(item))
            case {"name": str(name), **rest}:
                extends = rest.get("extends")
                if extends is not None and not isinstance(extends, str):
                    raise ConfigError(
                        ErrorTemplate.config_invalid(f"'extends' of '{name}' must be a string", source)
                    )
                languages.append(LanguageTarget(name, extends))
            case _:
                raise ConfigError(
                    ErrorTemplate.config_invalid(f"invalid language entry {item!r}", source)
                )
    return tuple(languages)


def _string_tuple(data: Mapping[str, object], key: str, source: str | None) -> tuple[str, ...] | None:
    raw = data.get(key)
    if raw is None:
        return None
    if isinstance(raw, str):
        return (raw,)
    if isinstance(raw, Sequence) and all(isinstance(item, str) for item in raw):
        return tuple(raw)
    raise ConfigError(ErrorTemplate.config_invalid(f"'{key}' must be a list of strings", source))


def config_from_mapping(
    data: Mapping[str, object],
    base_dir: Path,
    *,
    source: str | None = None,
) -> UserConfig:
    """Build a UserConfig from a parsed TOML table.

    Args:
        data: Table contents
        base_dir: Directory relative paths are resolved against
        source: Config file path for error messages

    Raises:
        ConfigError: On missing or malformed values
    """
    dev_language = data.get("dev_language")
    if not isinstance(dev_language, str):
        raise ConfigError(ErrorTemplate.config_invalid("'dev_language' is required", source))

    project_root = base_dir / str(data.get("project_root", "."))
    optional: dict[str, object] = {}
    for key in ("translations_directory_suffix", "runtime_module", "types_module"):
        if key in data:
            value = data[key]
            if not isinstance(value, str):
                raise ConfigError(ErrorTemplate.config_invalid(f"'{key}' must be a string", source))
            optional[key] = value

    return UserConfig(
        project_root=project_root.resolve(),
        dev_language=dev_language,
        languages=_parse_languages(data.get("languages"), source),
        ignore=_string_tuple(data, "ignore", source) or (),
        format_command=_string_tuple(data, "format_command", source),
        **optional,  # type: ignore[arg-type]
    )


def _read_table(path: Path) -> dict[str, object] | None:
    """Read the typedmessages table from a config file, None if absent."""
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(ErrorTemplate.config_invalid(str(e), str(path))) from e
    if path.name == _PYPROJECT:
        table = data.get("tool", {}).get("typedmessages")
        return table if isinstance(table, dict) else None
    return data


def find_config_file(start: Path | None = None) -> Path | None:
    """Find the nearest typedmessages.toml, or pyproject.toml with a [tool.typedmessages] table."""
    start = (start or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
        pyproject = directory / _PYPROJECT
        if pyproject.is_file() and _read_table(pyproject) is not None:
            return pyproject
    return None


def load_config(path: Path | str | None = None, *, start: Path | None = None) -> UserConfig:
    """Load project configuration.

    Args:
        path: Explicit config file; searched upward from start when omitted
        start: Directory to search from (default: current directory)

    Returns:
        Validated configuration

    Raises:
        ConfigError: If no configuration is found or it is invalid
    """
    config_path = Path(path) if path is not None else find_config_file(start)
    if config_path is None:
        raise ConfigError(ErrorTemplate.config_not_found(str(start or Path.cwd())))

    table = _read_table(config_path)
    if table is None:
        raise ConfigError(
            ErrorTemplate.config_invalid("no [tool.typedmessages] table", str(config_path))
        )
    config = config_from_mapping(table, config_path.parent, source=str(config_path))
    logger.debug("Loaded configuration from %s", config_path)
    return config
