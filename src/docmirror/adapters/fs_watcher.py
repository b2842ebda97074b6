"""Filesystem change source backed by a watchdog observer thread."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

from watchdog.events import (
    EVENT_TYPE_CLOSED,
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from docmirror.core.errors import WatchError
from docmirror.core.interfaces import ChangeSourcePort
from docmirror.core.models import ChangeBatch

logger = logging.getLogger(__name__)

# "opened" and "closed_no_write" are dropped: a rebuild reads every source file.
# "closed" is close-after-write and counts as a change.
MUTATION_EVENT_TYPES = frozenset(
    {
        EVENT_TYPE_CREATED,
        EVENT_TYPE_MODIFIED,
        EVENT_TYPE_DELETED,
        EVENT_TYPE_MOVED,
        EVENT_TYPE_CLOSED,
    }
)


class BatchForwardingHandler(FileSystemEventHandler):
    """Turns each watchdog event into one ChangeBatch for the callback."""

    def __init__(self, callback: Callable[[ChangeBatch], None]) -> None:
        super().__init__()
        self._callback = callback

    def on_any_event(self, event: FileSystemEvent) -> None:
        """Forward a mutation event; ignore everything else."""
        if event.event_type not in MUTATION_EVENT_TYPES:
            return

        paths = [Path(os.fsdecode(event.src_path))]
        dest_path = getattr(event, "dest_path", "")
        if dest_path:
            paths.append(Path(os.fsdecode(dest_path)))

        self._callback(ChangeBatch(paths=paths, event_type=event.event_type))


class WatchdogChangeSource(ChangeSourcePort):
    """Recursive change notifications via watchdog's native observer."""

    def __init__(self) -> None:
        self._observer: Observer | None = None

    @property
    def is_running(self) -> bool:
        """Check if the observer thread is active."""
        return self._observer is not None

    def start(self, root: Path, callback: Callable[[ChangeBatch], None]) -> None:
        """Schedule a recursive watch on ``root`` and start the observer."""
        if self._observer is not None:
            return

        root = Path(root)
        if not root.is_dir():
            raise WatchError(f"Cannot watch {root}: not a directory")

        observer = Observer()
        try:
            observer.schedule(BatchForwardingHandler(callback), str(root), recursive=True)
            observer.start()
        except Exception as e:
            raise WatchError(f"Error watching directory {root}: {e}") from e

        self._observer = observer
        logger.info("Started watching: %s", root)

    def stop(self) -> None:
        """Stop the observer thread and wait for it to exit."""
        if self._observer is None:
            return

        self._observer.stop()
        self._observer.join(timeout=5.0)
        self._observer = None
        logger.info("Stopped file watcher")
