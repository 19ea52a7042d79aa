"""
Asset folder watcher.

Watches asset directories with watchdog and hands new or changed image
files to a callback, usually AssetPipeline.submit. Callbacks run on the
watchdog observer thread.
"""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from gridedit.assets.pipeline import IMAGE_EXTENSIONS

logger = logging.getLogger(__name__)


class ImageFileHandler(FileSystemEventHandler):
    """
    Filters watchdog events down to image files and debounces bursts
    of writes to the same file.
    """

    def __init__(
        self,
        callback: Callable[[Path], object],
        extensions: set[str] | None = None,
        debounce_seconds: float = 0.5,
    ):
        super().__init__()
        self.callback = callback
        self.extensions = extensions or IMAGE_EXTENSIONS
        self.debounce_seconds = debounce_seconds

        self._last_events: dict[str, float] = {}
        self._lock = threading.Lock()

    def _should_process(self, path: str) -> bool:
        p = Path(path)
        if p.suffix.lower() not in self.extensions:
            return False

        # Hidden and editor temp files
        name = p.name
        if name.startswith('.') or name.startswith('~') or name.endswith('~'):
            return False

        return True

    def _is_debounced(self, path: str) -> bool:
        with self._lock:
            now = time.monotonic()
            last = self._last_events.get(path)
            if last is not None and now - last < self.debounce_seconds:
                return True
            # Forget expired entries
            for stale in [p for p, t in self._last_events.items() if now - t >= self.debounce_seconds]:
                del self._last_events[stale]
            self._last_events[path] = now
            return False

    def _emit(self, path: str) -> None:
        if not self._should_process(path) or self._is_debounced(path):
            return
        try:
            self.callback(Path(path))
        except Exception:
            logger.exception(f"Error in asset watcher callback for {path}")

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._emit(event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._emit(event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._emit(event.dest_path)


class AssetWatcher:
    """
    Watches directories for image files.

    Usage:
        watcher = AssetWatcher(pipeline.submit)
        watcher.watch("assets")
        with watcher:
            ...
    """

    def __init__(self, callback: Callable[[Path], object], debounce_seconds: float = 0.5):
        self.callback = callback
        self._handler = ImageFileHandler(callback, debounce_seconds=debounce_seconds)
        self._watched_paths: list[Path] = []
        self._observer: Observer | None = None

    @property
    def is_running(self) -> bool:
        return self._observer is not None

    @property
    def watched_paths(self) -> list[Path]:
        return list(self._watched_paths)

    def watch(self, path: str | Path, recursive: bool = True) -> bool:
        """
        Add a directory to watch.

        Returns:
            True if the directory exists and was added
        """
        path = Path(path)
        if not path.is_dir():
            logger.warning(f"Cannot watch non-existent directory: {path}")
            return False

        if path in self._watched_paths:
            return True
        self._watched_paths.append(path)

        if self._observer is not None:
            self._observer.schedule(self._handler, str(path), recursive=recursive)
        return True

    def scan_existing(self) -> int:
        """
        Hand every image already in the watched folders to the callback.

        Returns:
            Number of files submitted
        """
        count = 0
        for root in self._watched_paths:
            for path in sorted(root.rglob('*')):
                if path.is_file() and self._handler._should_process(str(path)):
                    self.callback(path)
                    count += 1
        return count

    def start(self) -> bool:
        """
        Start the observer thread.

        Returns:
            True if watching
        """
        if self._observer is not None:
            return True

        if not self._watched_paths:
            logger.warning("No asset paths to watch")
            return False

        observer = Observer()
        for path in self._watched_paths:
            observer.schedule(self._handler, str(path), recursive=True)
        try:
            observer.start()
        except OSError as e:
            logger.error(f"Failed to start asset watcher: {e}")
            return False

        self._observer = observer
        logger.info(f"Asset watcher started (watching {len(self._watched_paths)} paths)")
        return True

    def stop(self) -> None:
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join(timeout=2.0)
        self._observer = None
        logger.info("Asset watcher stopped")

    def __enter__(self) -> AssetWatcher:
        self.start()
        return self

    def __exit__(self, *args) -> None:
        self.stop()
