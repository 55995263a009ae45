"""TypeScript code generation for translation units.

Components:
    inference - Placeholder type inference over message ASTs
    encoding - Single-quoted literal escaping
    serializer - Nested mapping -> TypeScript object type text
    runtime - Generated module assembly and write-if-changed output
    formatting - Optional external formatter bridge

Python 3.13+.
"""

from .encoding import (
    encode_backslash,
    encode_line_terminators,
    encode_within_single_quotes,
    quote_literal,
)
from .formatting import find_formatter_config, format_source
from .inference import (
    ICUParams,
    InferredTypes,
    ParamConflict,
    ParamTypeCollector,
    extract_has_tags,
    extract_param_types,
    infer_message_types,
    tag_type_import,
)
from .runtime import (
    TranslationTypeInfo,
    collect_translation_types,
    generate_runtime,
    serialize_translation_runtime,
    write_if_changed,
)
from .serializer import TypeTree, serialize_object_to_type

__all__ = [
    "ICUParams",
    "InferredTypes",
    "ParamConflict",
    "ParamTypeCollector",
    "TranslationTypeInfo",
    "TypeTree",
    "collect_translation_types",
    "encode_backslash",
    "encode_line_terminators",
    "encode_within_single_quotes",
    "extract_has_tags",
    "extract_param_types",
    "find_formatter_config",
    "format_source",
    "generate_runtime",
    "infer_message_types",
    "quote_literal",
    "serialize_object_to_type",
    "serialize_translation_runtime",
    "tag_type_import",
    "write_if_changed",
]
