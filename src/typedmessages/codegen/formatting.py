"""Bridge to an external source formatter for generated modules.

Generated text is laid out deterministically by the generator itself. A
project can additionally pipe it through its own formatter (typically
prettier) by configuring ``format_command``; the nearest formatter
configuration above the output file is passed along so that the result
matches the rest of the codebase.

Python 3.13+.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from typedmessages.diagnostics import ErrorTemplate, FormatterError

__all__ = [
    "FORMATTER_CONFIG_FILES",
    "find_formatter_config",
    "format_source",
]

logger = logging.getLogger(__name__)

# Searched in this order within each directory, nearest directory first.
FORMATTER_CONFIG_FILES: tuple[str, ...] = (
    ".prettierrc",
    ".prettierrc.json",
    ".prettierrc.yaml",
    ".prettierrc.yml",
    ".prettierrc.json5",
    ".prettierrc.toml",
    ".prettierrc.js",
    ".prettierrc.cjs",
    ".prettierrc.mjs",
    "prettier.config.js",
    "prettier.config.cjs",
    "prettier.config.mjs",
)


def find_formatter_config(target: Path) -> Path | None:
    """Find the formatter configuration nearest to target.

    Walks from target's directory up to the filesystem root.

    Args:
        target: Output file path (need not exist yet)

    Returns:
        Path of the nearest configuration file, or None
    """
    for directory in (target.parent, *target.parent.parents):
        for name in FORMATTER_CONFIG_FILES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    return None


def format_source(
    source: str,
    target: Path,
    command: Sequence[str] | None = None,
) -> str:
    """Format generated source text for target.

    Without a command the text is returned with exactly one trailing newline.
    With a command, the text is piped through it on stdin with
    ``--stdin-filepath <target>`` (plus ``--config <nearest>`` when a
    configuration file is found) and stdout is returned.

    Args:
        source: Assembled module text
        target: Path the module will be written to
        command: Formatter argv prefix, e.g. ("npx", "prettier")

    Returns:
        Formatted text

    Raises:
        FormatterError: If the formatter cannot be started or exits non-zero
    """
    if not command:
        return source.rstrip("\n") + "\n"

    argv = [*command, "--stdin-filepath", str(target)]
    config_path = find_formatter_config(target)
    if config_path is not None:
        argv += ["--config", str(config_path)]
    logger.debug("Formatting %s with %s", target, " ".join(argv))

    try:
        completed = subprocess.run(
            argv,
            input=source,
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=True,
        )
    except subprocess.CalledProcessError as e:
        raise FormatterError(
            ErrorTemplate.formatter_failed(" ".join(command), str(target), e.stderr or "")
        ) from e
    except OSError as e:
        raise FormatterError(
            ErrorTemplate.formatter_failed(" ".join(command), str(target), str(e))
        ) from e
    return completed.stdout
