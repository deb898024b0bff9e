"""Re-running a conversion whenever the source spreadsheet changes.

The spreadsheet's directory is observed with watchdog. Created, modified and
moved-into-place events for the spreadsheet itself trigger the callback;
events for other files in the directory are ignored. Spreadsheet editors
usually save in several steps, so events are coalesced: the callback runs
once ``debounce_seconds`` after the last event.
"""

from __future__ import annotations

import os
import threading
from collections.abc import Callable
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from excel_to_i18n.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.5


class SpreadsheetChangeHandler(FileSystemEventHandler):
    """Calls ``on_change`` when one specific file is added or changed."""

    def __init__(
        self,
        path: str | Path,
        on_change: Callable[[], object],
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        super().__init__()
        self.path = Path(path).resolve()
        self.on_change = on_change
        self.debounce_seconds = debounce_seconds
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    def matches(self, path: str | bytes) -> bool:
        return Path(os.fsdecode(path)).resolve() == self.path

    def on_created(self, event: FileSystemEvent) -> None:
        self._handle(event, event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        self._handle(event, event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        # Editors often write a temporary file and rename it over the original.
        self._handle(event, event.dest_path)

    def cancel(self) -> None:
        """Drop a pending, not yet started callback."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _handle(self, event: FileSystemEvent, path: str | bytes) -> None:
        if event.is_directory or not path or not self.matches(path):
            return
        logger.debug("Spreadsheet event", event=event.event_type, path=str(self.path))

        if self.debounce_seconds <= 0:
            self._run()
            return

        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.debounce_seconds, self._run)
            self._timer.daemon = True
            self._timer.start()

    def _run(self) -> None:
        with self._lock:
            self._timer = None
        logger.info("Spreadsheet changed, converting", path=str(self.path))
        self.on_change()


def watch_file(
    path: str | Path,
    on_change: Callable[[], object],
    debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    stop_event: threading.Event | None = None,
) -> None:
    """Block and call ``on_change`` each time ``path`` is added or changed.

    Watching ends on KeyboardInterrupt or when ``stop_event`` is set.

    Raises:
        FileNotFoundError: If the directory containing ``path`` does not exist.
    """
    handler = SpreadsheetChangeHandler(path, on_change, debounce_seconds)
    directory = handler.path.parent
    if not directory.is_dir():
        raise FileNotFoundError(f"Directory not found: {directory}")

    stop = stop_event or threading.Event()
    observer = Observer()
    observer.schedule(handler, str(directory), recursive=False)
    observer.start()
    logger.info("Watching spreadsheet", path=str(handler.path))
    try:
        while not stop.wait(timeout=1.0):
            pass
    except KeyboardInterrupt:
        logger.info("Stopped watching spreadsheet", path=str(handler.path))
    finally:
        handler.cancel()
        observer.stop()
        observer.join()
