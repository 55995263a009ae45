"""ICU message parser module.

Module Organization:
- core.py: MessageParser class and parse() entry point
- primitives.py: Names, selectors, tag names, apostrophe quoting
- rules.py: Grammar rules (messages, arguments, options, tags)

Public API:
    MessageParser: Main parser class
    ParseContext: Parse context for depth tracking (advanced usage)
"""

from typedmessages.syntax.parser.core import MessageParser
from typedmessages.syntax.parser.rules import ParseContext

__all__ = ["MessageParser", "ParseContext"]
