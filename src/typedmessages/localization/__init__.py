"""Translation files: path conventions and loading.

Python 3.13+.
"""

from .loading import (
    LoadedTranslation,
    TranslationMessage,
    load_all_translations,
    load_translation,
    read_translation_file,
)
from .paths import (
    alt_translation_glob,
    classify_path,
    dev_translation_glob,
    get_alt_language_file_path,
    get_alt_language_from_file,
    get_dev_file_from_alt,
    get_generated_module_path,
    is_alt_language_file,
    is_dev_language_file,
    is_ignored,
    is_translation_directory,
    relative_to_root,
    translation_directory_glob,
)
from .types import LanguageName, MessageSource, TranslationKey

__all__ = [
    "LanguageName",
    "LoadedTranslation",
    "MessageSource",
    "TranslationKey",
    "TranslationMessage",
    "alt_translation_glob",
    "classify_path",
    "dev_translation_glob",
    "get_alt_language_file_path",
    "get_alt_language_from_file",
    "get_dev_file_from_alt",
    "get_generated_module_path",
    "is_alt_language_file",
    "is_dev_language_file",
    "is_ignored",
    "is_translation_directory",
    "load_all_translations",
    "load_translation",
    "read_translation_file",
    "relative_to_root",
    "translation_directory_glob",
]
