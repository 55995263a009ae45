"""typedmessages - typed translation modules from ICU message files.

Compiles per-language translation files into a generated TypeScript module
per translation directory, with one typed accessor per message key, and
regenerates modules as translation files change.

Public API:
    compile_translations - Generate every module, optionally keep watching
    watch - Start a change watcher, return its close function
    TranslationWatcher - Change watcher as an explicit resource
    generate_runtime - Generate the module of one translation unit
    load_config - Read typedmessages.toml / [tool.typedmessages]
    UserConfig - Project configuration
    parse_message - Parse an ICU message to AST

Exceptions:
    TypedMessagesError - Base exception class
    MessageSyntaxError - Malformed ICU message
    TranslationFileError - Malformed translation file
    ConfigError - Invalid configuration
    FormatterError - External formatter failure

Submodules:
    typedmessages.syntax - ICU message parser and AST
    typedmessages.codegen - Type inference and module generation
    typedmessages.localization - Path conventions and translation loading
    typedmessages.diagnostics - Error types and diagnostics
"""

# Essential Public API - Minimal exports for clean namespace
from .codegen import generate_runtime
from .compiler import TranslationWatcher, compile_translations, watch
from .config import LanguageTarget, UserConfig, load_config
from .diagnostics import (
    ConfigError,
    FormatterError,
    MessageSyntaxError,
    TranslationFileError,
    TypedMessagesError,
)
from .enums import FallbackMode
from .localization import LoadedTranslation, load_all_translations, load_translation
from .syntax import parse_message

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("typedmessages")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ConfigError",
    "FallbackMode",
    "FormatterError",
    "LanguageTarget",
    "LoadedTranslation",
    "MessageSyntaxError",
    "TranslationFileError",
    "TranslationWatcher",
    "TypedMessagesError",
    "UserConfig",
    "__version__",
    "compile_translations",
    "generate_runtime",
    "load_all_translations",
    "load_config",
    "load_translation",
    "parse_message",
    "watch",
]
