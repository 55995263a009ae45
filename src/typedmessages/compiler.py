"""Compile orchestration and change watching.

compile_translations() generates the module of every translation unit in the
project, one after another; the first failure aborts the run. With
``watch=True`` it then starts a TranslationWatcher and returns its ``close``.

The watcher reacts to filesystem events under the project root whose paths
match the watch globs and are not ignored:

    translations.json created/modified       -> regenerate that unit
    <language>.translations.json ...         -> regenerate the sibling unit
    <dir><suffix>/ created                   -> seed an empty translations.json

Regeneration failures inside the watcher are logged and never stop it.
Regenerations of the same unit are serialized; different units may run
concurrently. Events are not debounced.

Thread Safety:
    Events are handled on the watchdog observer thread. Each unit has its
    own lock, created on first use under a registry lock.

Python 3.13+.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Self

from watchdog.events import (
    EVENT_TYPE_MOVED,
    DirCreatedEvent,
    DirModifiedEvent,
    DirMovedEvent,
    FileCreatedEvent,
    FileModifiedEvent,
    FileMovedEvent,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from typedmessages.codegen.runtime import generate_runtime
from typedmessages.constants import DEV_TRANSLATION_FILE_NAME, EMPTY_TRANSLATION_FILE_CONTENT
from typedmessages.enums import FallbackMode, TranslationFileKind
from typedmessages.localization import (
    alt_translation_glob,
    classify_path,
    dev_translation_glob,
    get_dev_file_from_alt,
    is_ignored,
    is_translation_directory,
    load_all_translations,
    load_translation,
    relative_to_root,
    translation_directory_glob,
)

if TYPE_CHECKING:
    from types import TracebackType

    from watchdog.observers.api import BaseObserver

    from typedmessages.config import UserConfig

__all__ = [
    "TranslationWatcher",
    "compile_translations",
    "watch",
]

logger = logging.getLogger(__name__)


def _event_path(raw: bytes | str) -> Path:
    return Path(os.fsdecode(raw))


class TranslationWatcher(FileSystemEventHandler):
    """Regenerates translation modules as their files change.

    Usable as a context manager:

        >>> with TranslationWatcher(config):
        ...     input("Watching, press enter to stop")

    Attributes:
        config: Project configuration
    """

    def __init__(self, config: UserConfig) -> None:
        super().__init__()
        self.config = config
        self._observer: BaseObserver | None = None
        self._unit_locks: dict[Path, threading.Lock] = {}
        self._registry_lock = threading.Lock()
        suffix = config.translations_directory_suffix
        self._file_globs = (dev_translation_glob(suffix), alt_translation_glob(suffix))
        self._directory_globs = (translation_directory_glob(suffix),)

    @property
    def is_running(self) -> bool:
        """True between start() and close()."""
        return self._observer is not None

    def start(self) -> Self:
        """Start watching the project root. Calling it again while running is a no-op."""
        if self._observer is not None:
            return self
        observer = Observer()
        observer.schedule(self, str(self.config.project_root), recursive=True)
        observer.start()
        self._observer = observer
        logger.info("Watching %s for translation changes", self.config.project_root)
        return self

    def close(self) -> None:
        """Stop watching. Idempotent; an in-flight regeneration is not cancelled."""
        observer, self._observer = self._observer, None
        if observer is None:
            return
        observer.stop()
        if threading.current_thread() is not observer:
            observer.join()
        logger.info("Stopped watching %s", self.config.project_root)

    def __enter__(self) -> Self:
        return self.start()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    # watchdog callbacks

    def is_watched(self, event: FileSystemEvent) -> bool:
        """Check an event's path against the watch globs and the ignore rules.

        Moves are matched on their destination. Directory events are matched
        against the translation directory glob, file events against the dev
        and other-language file globs.
        """
        raw = event.dest_path if event.event_type == EVENT_TYPE_MOVED else event.src_path
        path = _event_path(raw)
        if is_ignored(path, self.config):
            return False
        relative = relative_to_root(path, self.config)
        globs = self._directory_globs if event.is_directory else self._file_globs
        return any(relative.full_match(pattern) for pattern in globs)

    def dispatch(self, event: FileSystemEvent) -> None:
        if self.is_watched(event):
            super().dispatch(event)

    def on_created(self, event: DirCreatedEvent | FileCreatedEvent) -> None:
        path = _event_path(event.src_path)
        if event.is_directory:
            self.handle_new_directory(path)
        else:
            self.handle_translation_change(path)

    def on_modified(self, event: DirModifiedEvent | FileModifiedEvent) -> None:
        if not event.is_directory:
            self.handle_translation_change(_event_path(event.src_path))

    def on_moved(self, event: DirMovedEvent | FileMovedEvent) -> None:
        path = _event_path(event.dest_path)
        if event.is_directory:
            self.handle_new_directory(path)
        else:
            self.handle_translation_change(path)

    # Event handling

    def _unit_lock(self, dev_file: Path) -> threading.Lock:
        with self._registry_lock:
            return self._unit_locks.setdefault(dev_file, threading.Lock())

    def handle_translation_change(self, path: Path) -> bool:
        """Regenerate the unit a changed file belongs to.

        Args:
            path: Changed file (absolute, or relative to the project root)

        Returns:
            True if a generated module was written
        """
        config = self.config
        path = config.project_root / path
        if is_ignored(path, config):
            return False
        relative = relative_to_root(path, config)

        match classify_path(path, config.translations_directory_suffix):
            case TranslationFileKind.DEV:
                dev_file = path
            case TranslationFileKind.ALT:
                dev_file = get_dev_file_from_alt(path)
            case TranslationFileKind.OTHER:
                return False

        logger.debug("Detected change for file %s", relative)
        try:
            with self._unit_lock(dev_file):
                loaded = load_translation(dev_file, config, fallbacks=FallbackMode.ALL)
                return generate_runtime(loaded, config)
        except Exception:
            logger.exception("Failed to generate types for %s", relative)
            return False

    def handle_new_directory(self, path: Path) -> bool:
        """Seed an empty dev language file into a new translation directory.

        Args:
            path: Created directory (absolute, or relative to the project root)

        Returns:
            True if a file was created
        """
        config = self.config
        path = config.project_root / path
        relative = relative_to_root(path, config)
        logger.debug("Detected new directory %s", relative)
        if is_ignored(path, config) or not is_translation_directory(
            path, config.translations_directory_suffix
        ):
            logger.debug("Ignoring non-translation directory: %s", relative)
            return False

        new_file = path / DEV_TRANSLATION_FILE_NAME
        try:
            with new_file.open("x", encoding="utf-8") as f:
                f.write(EMPTY_TRANSLATION_FILE_CONTENT)
        except FileExistsError:
            logger.debug("New directory already contains %s, skipping creation", new_file)
            return False
        except OSError:
            logger.exception("Failed to create %s", new_file)
            return False
        logger.debug("Created new empty translation file: %s", new_file)
        return True


def _start_watcher(config: UserConfig) -> Callable[[], None]:
    return TranslationWatcher(config).start().close


def watch(config: UserConfig) -> Callable[[], None]:
    """Start watching the project and return the function that stops it."""
    return _start_watcher(config)


def compile_translations(
    config: UserConfig, *, watch: bool = False
) -> Callable[[], None] | None:
    """Generate every translation module in the project.

    Args:
        config: Project configuration
        watch: Keep regenerating on changes after the initial pass

    Returns:
        The watcher's close function when watching, else None

    Raises:
        TypedMessagesError: If any unit fails to load, parse or format; the
            remaining units are not generated
    """
    units = load_all_translations(config, fallbacks=FallbackMode.ALL)
    written = sum(generate_runtime(unit, config) for unit in units)
    logger.info("Compiled %d translation units (%d updated)", len(units), written)

    if not watch:
        return None
    logger.debug("Listening for changes to files...")
    return _start_watcher(config)
