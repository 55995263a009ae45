"""Tests for TranslationWatcher event handling.

Most tests drive the handler methods directly with watchdog event objects so
they do not depend on filesystem notification timing. TestObserverLifecycle
runs a real observer.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path

import pytest
from watchdog.events import (
    DirCreatedEvent,
    DirModifiedEvent,
    DirMovedEvent,
    FileCreatedEvent,
    FileModifiedEvent,
    FileMovedEvent,
)

from typedmessages import compiler
from typedmessages.compiler import TranslationWatcher
from typedmessages.config import LanguageTarget, UserConfig
from tests.helpers.generated_code import payloads


@pytest.fixture
def watcher(config: UserConfig) -> TranslationWatcher:
    return TranslationWatcher(config)


def _index(dev_file: Path) -> Path:
    return dev_file.parent / "index.ts"


def _wait_for(predicate, timeout: float = 10.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.05)
    return predicate()


# ============================================================================
# TRANSLATION CHANGES
# ============================================================================


class TestTranslationChanges:
    """Test regeneration on translation file events."""

    def test_dev_file_change_regenerates(
        self, watcher: TranslationWatcher, write_translations
    ) -> None:
        """A changed dev file regenerates its unit."""
        dev_file = write_translations("src/a.vocab", en={"hi": "Hi"})

        assert watcher.handle_translation_change(dev_file)
        assert payloads(_index(dev_file).read_text(encoding="utf-8"))["en"] == {"hi": "Hi"}

    def test_alt_file_change_regenerates_dev_unit(
        self, watcher: TranslationWatcher, write_translations
    ) -> None:
        """A changed language file regenerates the sibling unit."""
        dev_file = write_translations("a.vocab", en={"hi": "Hi"}, fr={"hi": "Salut"})

        watcher.handle_translation_change(dev_file.parent / "fr.translations.json")

        assert payloads(_index(dev_file).read_text(encoding="utf-8"))["fr"] == {"hi": "Salut"}

    def test_relative_path_is_resolved(
        self, watcher: TranslationWatcher, write_translations
    ) -> None:
        """Relative paths are taken from the project root."""
        dev_file = write_translations("a.vocab", en={"hi": "Hi"})

        assert watcher.handle_translation_change(Path("a.vocab/translations.json"))
        assert _index(dev_file).exists()

    def test_unchanged_unit_is_not_rewritten(
        self, watcher: TranslationWatcher, write_translations
    ) -> None:
        """A second event for an unchanged unit writes nothing."""
        dev_file = write_translations("a.vocab", en={"hi": "Hi"})

        assert watcher.handle_translation_change(dev_file)
        assert not watcher.handle_translation_change(dev_file)

    @pytest.mark.parametrize(
        "relative",
        ["a.vocab/index.ts", "a/translations.json", "README.md"],
    )
    def test_other_files_ignored(
        self, watcher: TranslationWatcher, config: UserConfig, relative: str
    ) -> None:
        """Files outside the translation layout trigger nothing."""
        assert not watcher.handle_translation_change(config.project_root / relative)

    def test_dependency_directories_ignored(
        self, watcher: TranslationWatcher, write_translations
    ) -> None:
        """Events under node_modules trigger nothing."""
        dev_file = write_translations("node_modules/p/a.vocab", en={"hi": "Hi"})

        assert not watcher.handle_translation_change(dev_file)
        assert not _index(dev_file).exists()

    def test_failure_is_logged_not_raised(
        self,
        watcher: TranslationWatcher,
        write_translations,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """A malformed message is logged and the watcher keeps going."""
        dev_file = write_translations("a.vocab", en={"bad": "{oops"})

        with caplog.at_level(logging.ERROR, logger="typedmessages.compiler"):
            assert not watcher.handle_translation_change(dev_file)

        assert "Failed to generate types for a.vocab/translations.json" in caplog.text
        assert not _index(dev_file).exists()

    def test_broken_json_is_logged(
        self,
        watcher: TranslationWatcher,
        write_translations,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """A half-written file is logged, and a later event succeeds."""
        dev_file = write_translations("a.vocab", en={"hi": "Hi"})
        dev_file.write_text("{", encoding="utf-8")

        with caplog.at_level(logging.ERROR, logger="typedmessages.compiler"):
            assert not watcher.handle_translation_change(dev_file)
        assert "Failed to generate types" in caplog.text

        dev_file.write_text('{"hi": {"message": "Hi"}}', encoding="utf-8")
        assert watcher.handle_translation_change(dev_file)

    def test_same_unit_is_serialized(
        self,
        watcher: TranslationWatcher,
        write_translations,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Concurrent events for one unit never regenerate it concurrently."""
        dev_file = write_translations("a.vocab", en={"hi": "Hi"})
        active = 0
        peak = 0
        counter_lock = threading.Lock()

        def slow_generate(loaded, config) -> bool:
            nonlocal active, peak
            with counter_lock:
                active += 1
                peak = max(peak, active)
            time.sleep(0.05)
            with counter_lock:
                active -= 1
            return True

        monkeypatch.setattr(compiler, "generate_runtime", slow_generate)
        threads = [
            threading.Thread(target=watcher.handle_translation_change, args=(dev_file,))
            for _ in range(4)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert peak == 1


# ============================================================================
# NEW DIRECTORIES
# ============================================================================


class TestNewDirectory:
    """Test seeding of new translation directories."""

    def test_seeds_empty_dev_file(self, watcher: TranslationWatcher, config: UserConfig) -> None:
        """A new translation directory receives translations.json containing {}."""
        directory = config.project_root / "src" / "new.vocab"
        directory.mkdir(parents=True)

        assert watcher.handle_new_directory(directory)
        assert (directory / "translations.json").read_text(encoding="utf-8") == "{}"

    def test_existing_file_is_kept(self, watcher: TranslationWatcher, config: UserConfig) -> None:
        """An existing translations.json is never overwritten."""
        directory = config.project_root / "new.vocab"
        directory.mkdir()
        (directory / "translations.json").write_text('{"a": {"message": "A"}}', encoding="utf-8")

        assert not watcher.handle_new_directory(directory)
        assert "A" in (directory / "translations.json").read_text(encoding="utf-8")

    def test_seeded_once(self, watcher: TranslationWatcher, config: UserConfig) -> None:
        """Repeated events seed the file once."""
        directory = config.project_root / "new.vocab"
        directory.mkdir()

        assert watcher.handle_new_directory(directory)
        assert not watcher.handle_new_directory(directory)

    def test_plain_directory_ignored(
        self, watcher: TranslationWatcher, config: UserConfig
    ) -> None:
        """Directories without the suffix are left alone."""
        directory = config.project_root / "components"
        directory.mkdir()

        assert not watcher.handle_new_directory(directory)
        assert not (directory / "translations.json").exists()

    def test_ignored_translation_directory(
        self, watcher: TranslationWatcher, config: UserConfig
    ) -> None:
        """Translation directories inside dependencies are left alone."""
        directory = config.project_root / "node_modules" / "pkg" / "x.vocab"
        directory.mkdir(parents=True)

        assert not watcher.handle_new_directory(directory)

    def test_vanished_directory_is_logged(
        self,
        watcher: TranslationWatcher,
        config: UserConfig,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """A directory removed before seeding is logged, not raised."""
        with caplog.at_level(logging.ERROR, logger="typedmessages.compiler"):
            assert not watcher.handle_new_directory(config.project_root / "gone.vocab")

        assert "Failed to create" in caplog.text


# ============================================================================
# EVENT DISPATCH
# ============================================================================


class TestEventDispatch:
    """Test watchdog callbacks route to the handlers."""

    def test_file_modified(self, watcher: TranslationWatcher, write_translations) -> None:
        """A modified dev file regenerates its unit."""
        dev_file = write_translations("a.vocab", en={"hi": "Hi"})

        watcher.dispatch(FileModifiedEvent(str(dev_file)))

        assert _index(dev_file).exists()

    def test_file_created(self, watcher: TranslationWatcher, write_translations) -> None:
        """A created dev file regenerates its unit."""
        dev_file = write_translations("a.vocab", en={"hi": "Hi"})

        watcher.dispatch(FileCreatedEvent(str(dev_file)))

        assert _index(dev_file).exists()

    def test_file_moved_uses_destination(
        self, watcher: TranslationWatcher, write_translations
    ) -> None:
        """Editors that save via rename produce move events onto the real file."""
        dev_file = write_translations("a.vocab", en={"hi": "Hi"})

        watcher.dispatch(FileMovedEvent(str(dev_file) + ".tmp", str(dev_file)))

        assert _index(dev_file).exists()

    def test_directory_created(self, watcher: TranslationWatcher, config: UserConfig) -> None:
        """A created translation directory is seeded."""
        directory = config.project_root / "x.vocab"
        directory.mkdir()

        watcher.dispatch(DirCreatedEvent(str(directory)))

        assert (directory / "translations.json").exists()

    def test_directory_moved(self, watcher: TranslationWatcher, config: UserConfig) -> None:
        """A directory moved into translation shape is seeded."""
        directory = config.project_root / "x.vocab"
        directory.mkdir()

        watcher.dispatch(DirMovedEvent(str(config.project_root / "tmp"), str(directory)))

        assert (directory / "translations.json").exists()

    def test_directory_modified_is_ignored(
        self, watcher: TranslationWatcher, config: UserConfig
    ) -> None:
        """Directory modifications do not seed files."""
        directory = config.project_root / "x.vocab"
        directory.mkdir()

        watcher.dispatch(DirModifiedEvent(str(directory)))

        assert not (directory / "translations.json").exists()

    @pytest.mark.parametrize(
        ("relative", "is_directory", "watched"),
        [
            ("a.vocab/translations.json", False, True),
            ("src/a.vocab/fr.translations.json", False, True),
            ("src/a.vocab", True, True),
            ("a.vocab/index.ts", False, False),
            ("a.vocab/nested/translations.json", False, False),
            ("src/translations.json", False, False),
            ("src/a.vocab", False, False),
            ("a.vocab/translations.json", True, False),
            ("node_modules/pkg/a.vocab/translations.json", False, False),
            ("node_modules/pkg/a.vocab", True, False),
        ],
    )
    def test_watch_globs(
        self,
        watcher: TranslationWatcher,
        config: UserConfig,
        relative: str,
        is_directory: bool,
        watched: bool,
    ) -> None:
        """Only dev files, other-language files and translation directories pass."""
        path = str(config.project_root / relative)
        event = DirModifiedEvent(path) if is_directory else FileModifiedEvent(path)

        assert watcher.is_watched(event) is watched

    def test_move_matched_on_destination(
        self, watcher: TranslationWatcher, config: UserConfig
    ) -> None:
        """A move is watched when its destination matches."""
        root = config.project_root

        assert watcher.is_watched(
            FileMovedEvent(str(root / "a.vocab/x.tmp"), str(root / "a.vocab/translations.json"))
        )
        assert not watcher.is_watched(
            FileMovedEvent(str(root / "a.vocab/translations.json"), str(root / "a.vocab/x.tmp"))
        )

    def test_configured_ignore_filters_events(
        self, project_root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Events under configured ignore globs never reach the handlers."""
        config = UserConfig(
            project_root=project_root,
            dev_language="en",
            languages=(LanguageTarget("en"),),
            ignore=("build/**",),
        )
        watcher = TranslationWatcher(config)
        seen: list[Path] = []
        monkeypatch.setattr(watcher, "handle_translation_change", seen.append)

        watcher.dispatch(FileModifiedEvent(str(project_root / "build/a.vocab/translations.json")))
        watcher.dispatch(FileModifiedEvent(str(project_root / "src/a.vocab/translations.json")))

        assert seen == [project_root / "src/a.vocab/translations.json"]

    def test_unmatched_event_not_dispatched(
        self, watcher: TranslationWatcher, config: UserConfig, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Files outside the watch globs are filtered before the callbacks."""
        seen: list[Path] = []
        monkeypatch.setattr(watcher, "handle_translation_change", seen.append)

        watcher.dispatch(FileModifiedEvent(str(config.project_root / "a.vocab/index.ts")))
        watcher.dispatch(FileCreatedEvent(str(config.project_root / "notes.json")))

        assert seen == []


# ============================================================================
# LIFECYCLE
# ============================================================================


class TestObserverLifecycle:
    """Test start and close with a real observer."""

    def test_start_close_idempotent(self, watcher: TranslationWatcher) -> None:
        """start() and close() may be called repeatedly."""
        assert not watcher.is_running

        assert watcher.start() is watcher
        watcher.start()
        assert watcher.is_running

        watcher.close()
        watcher.close()
        assert not watcher.is_running

    def test_context_manager(self, config: UserConfig) -> None:
        """The watcher runs inside a with block only."""
        with TranslationWatcher(config) as watcher:
            assert watcher.is_running

        assert not watcher.is_running

    def test_close_before_start(self, watcher: TranslationWatcher) -> None:
        """close() on a watcher that never started does nothing."""
        watcher.close()

        assert not watcher.is_running

    def test_regenerates_on_real_change(self, config: UserConfig, write_translations) -> None:
        """Editing a file on disk regenerates its module."""
        dev_file = write_translations("a.vocab", en={"hi": "Hi"})

        with TranslationWatcher(config):
            dev_file.write_text('{"hi": {"message": "Hello"}}', encoding="utf-8")

            def regenerated() -> bool:
                index = _index(dev_file)
                return index.exists() and '"Hello"' in index.read_text(encoding="utf-8")

            assert _wait_for(regenerated)

    def test_seeds_real_directory(self, config: UserConfig) -> None:
        """Creating a translation directory on disk seeds it."""
        with TranslationWatcher(config):
            directory = config.project_root / "fresh.vocab"
            directory.mkdir()

            assert _wait_for((directory / "translations.json").exists)
