"""Tests for the external formatter bridge."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from typedmessages.codegen.formatting import find_formatter_config, format_source
from typedmessages.diagnostics import DiagnosticCode, FormatterError

# Echoes stdin upper-cased, then its own arguments on a trailing comment line.
ECHO_SCRIPT = (
    "import sys; "
    "sys.stdout.write(sys.stdin.read().upper()); "
    "sys.stdout.write('// ' + ' '.join(sys.argv[1:]) + '\\n')"
)
FAILING_SCRIPT = "import sys; sys.stderr.write('boom'); sys.exit(2)"


class TestWithoutCommand:
    """Test the built-in layout."""

    @pytest.mark.parametrize("source", ["x", "x\n", "x\n\n\n"])
    def test_single_trailing_newline(self, source: str, tmp_path: Path) -> None:
        """Text ends in exactly one newline."""
        assert format_source(source, tmp_path / "index.ts") == "x\n"

    def test_empty_command_is_no_command(self, tmp_path: Path) -> None:
        """An empty argv means no formatter."""
        assert format_source("x", tmp_path / "index.ts", ()) == "x\n"


class TestExternalFormatter:
    """Test piping through a formatter process."""

    def test_stdout_is_returned(self, tmp_path: Path) -> None:
        """The formatter's stdout replaces the text."""
        target = tmp_path / "a.vocab" / "index.ts"

        result = format_source("const a = 1;\n", target, (sys.executable, "-c", ECHO_SCRIPT))

        assert result.startswith("CONST A = 1;\n")
        assert f"--stdin-filepath {target}" in result
        assert "--config" not in result

    def test_nearest_config_is_passed(self, tmp_path: Path) -> None:
        """The nearest formatter configuration is passed with --config."""
        (tmp_path / ".prettierrc").write_text("{}", encoding="utf-8")
        target = tmp_path / "src" / "a.vocab" / "index.ts"
        target.parent.mkdir(parents=True)

        result = format_source("x", target, (sys.executable, "-c", ECHO_SCRIPT))

        assert f"--config {tmp_path / '.prettierrc'}" in result

    def test_non_zero_exit_raises(self, tmp_path: Path) -> None:
        """A failing formatter raises FormatterError carrying stderr."""
        with pytest.raises(FormatterError, match="boom") as exc_info:
            format_source("x", tmp_path / "index.ts", (sys.executable, "-c", FAILING_SCRIPT))

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.FORMATTER_FAILED

    def test_missing_executable_raises(self, tmp_path: Path) -> None:
        """A formatter that cannot be started raises FormatterError."""
        missing = str(tmp_path / "no-such-formatter")

        with pytest.raises(FormatterError):
            format_source("x", tmp_path / "index.ts", (missing,))


class TestFindFormatterConfig:
    """Test formatter configuration discovery."""

    def test_nearest_directory_wins(self, tmp_path: Path) -> None:
        """A closer configuration shadows one further up."""
        (tmp_path / ".prettierrc").write_text("{}", encoding="utf-8")
        inner = tmp_path / "pkg"
        inner.mkdir()
        (inner / "prettier.config.js").write_text("", encoding="utf-8")

        assert find_formatter_config(inner / "x.vocab" / "index.ts") == inner / "prettier.config.js"

    def test_name_order_within_directory(self, tmp_path: Path) -> None:
        """Within one directory .prettierrc comes before .prettierrc.json."""
        (tmp_path / ".prettierrc.json").write_text("{}", encoding="utf-8")
        (tmp_path / ".prettierrc").write_text("{}", encoding="utf-8")

        assert find_formatter_config(tmp_path / "index.ts") == tmp_path / ".prettierrc"

    def test_directories_are_not_configs(self, tmp_path: Path) -> None:
        """A directory named like a configuration file is skipped."""
        (tmp_path / ".prettierrc").mkdir()
        (tmp_path / ".prettierrc.yaml").write_text("", encoding="utf-8")

        assert find_formatter_config(tmp_path / "index.ts") == tmp_path / ".prettierrc.yaml"
