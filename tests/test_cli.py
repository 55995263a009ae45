"""Tests for the command line entry point."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from typedmessages.cli import main
from tests.helpers.project_files import write_json, write_toml

CONFIG = """\
dev_language = "en"
languages = ["en", "fr"]
"""


@pytest.fixture
def project(tmp_path: Path) -> Path:
    write_toml(tmp_path / "typedmessages.toml", CONFIG)
    write_json(tmp_path / "src" / "home.vocab" / "translations.json", {"hi": {"message": "Hi"}})
    return tmp_path


class TestCompileCommand:
    """Test `typedmessages compile`."""

    def test_compile_succeeds(self, project: Path) -> None:
        """A valid project exits 0 and writes its modules."""
        assert main(["compile", "--config", str(project / "typedmessages.toml")]) == 0
        assert (project / "src" / "home.vocab" / "index.ts").exists()

    def test_config_discovered_from_cwd(
        self, project: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without --config the nearest configuration is used."""
        monkeypatch.chdir(project / "src")

        assert main(["compile", "-v"]) == 0

    def test_missing_config(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """A missing configuration exits 1 with the error logged."""
        assert main(["compile", "-c", str(tmp_path / "nope.toml")]) == 1
        assert "CONFIG_INVALID" in caplog.text

    def test_generation_error(self, project: Path, caplog: pytest.LogCaptureFixture) -> None:
        """A malformed message exits 1."""
        write_json(project / "src" / "bad.vocab" / "translations.json", {"x": {"message": "{name"}})

        assert main(["compile", "-c", str(project / "typedmessages.toml")]) == 1
        assert "UNEXPECTED_EOF" in caplog.text

    def test_watch_until_stopped(self, project: Path) -> None:
        """Watch mode compiles, then runs until the stop event is set."""
        stop = threading.Event()
        stop.set()

        assert main(["compile", "--watch", "-c", str(project / "typedmessages.toml")], stop=stop) == 0
        assert (project / "src" / "home.vocab" / "index.ts").exists()

    def test_command_required(self) -> None:
        """Running without a subcommand is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 2
