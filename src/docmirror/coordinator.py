"""Rebuild coordinator: one full mirror pass per qualifying change batch."""

from __future__ import annotations

import logging
import queue
import signal
import threading
from pathlib import Path
from typing import Any

from docmirror.container import Container
from docmirror.core.errors import DocmirrorError
from docmirror.core.models import ChangeBatch, CoordinatorStatus, PassSummary

logger = logging.getLogger(__name__)

# How often the consumer loop wakes up to check for shutdown
_POLL_INTERVAL = 0.5


class RebuildCoordinator:
    """Serialized consumer of change batches from the watch subscription.

    The change source pushes batches from its observer thread into an
    unbounded queue; this loop takes them one at a time. A batch naming at
    least one existing file with the recognized extension causes exactly one
    full pass over the source root. Any other batch is dropped, including
    changes to files that are only copied. Batches arriving mid-rebuild wait
    in the queue.
    """

    def __init__(self, container: Container, poll_interval: float = _POLL_INTERVAL) -> None:
        self._container = container
        self._poll_interval = poll_interval
        self._status = CoordinatorStatus.STOPPED
        self._queue: queue.Queue[ChangeBatch] = queue.Queue()
        self._shutdown_event = threading.Event()
        self._rebuild_count = 0

    @property
    def status(self) -> CoordinatorStatus:
        """Current coordinator status."""
        return self._status

    @property
    def rebuild_count(self) -> int:
        """Number of rebuilds started since construction."""
        return self._rebuild_count

    def submit(self, batch: ChangeBatch) -> None:
        """Queue a change batch. Safe to call from any thread."""
        self._queue.put(batch)

    def run(self, handle_signals: bool = True) -> None:
        """Subscribe to the source tree and process batches until shutdown.

        Args:
            handle_signals: Install SIGINT/SIGTERM handlers that request a
                graceful shutdown. Only possible from the main thread.

        Raises:
            SetupError: If the site directory cannot be created.
            WatchError: If the change subscription cannot be established.
        """
        mirror = self._container.mirror
        change_source = self._container.change_source
        self._shutdown_event.clear()

        previous_handlers: dict[int, Any] = {}
        if handle_signals:
            for sig in (signal.SIGINT, signal.SIGTERM):
                previous_handlers[sig] = signal.signal(sig, self._on_signal)

        try:
            try:
                mirror.prepare()
                _warn_if_nested(mirror.source_root, mirror.output_root)
                change_source.start(mirror.source_root, self.submit)
            except Exception:
                self._status = CoordinatorStatus.ERROR
                logger.exception("Watch setup failed for %s", mirror.source_root)
                raise

            self._status = CoordinatorStatus.IDLE
            logger.info("Watching %s for changes...", mirror.source_root)

            while not self._shutdown_event.is_set():
                try:
                    batch = self._queue.get(timeout=self._poll_interval)
                except queue.Empty:
                    continue
                self.handle_batch(batch)
        finally:
            change_source.stop()
            for sig, handler in previous_handlers.items():
                signal.signal(sig, handler)
            if self._status != CoordinatorStatus.ERROR:
                self._status = CoordinatorStatus.STOPPED
            logger.info("Stopped watching %s", mirror.source_root)

    def handle_batch(self, batch: ChangeBatch) -> bool:
        """Rebuild once if the batch names a recognized file.

        Returns:
            True if a rebuild ran (whether or not it succeeded).
        """
        mirror = self._container.mirror
        trigger = next((p for p in batch.paths if mirror.is_trigger(p)), None)
        if trigger is None:
            logger.debug("Ignoring %s batch: %s", batch.event_type, batch.paths)
            return False

        self._status = CoordinatorStatus.REBUILDING
        self._rebuild_count += 1
        try:
            summary = mirror.run()
            logger.info("Processed changes triggered by: %s", trigger)
            logger.debug(
                "Rebuild wrote %d files (%d skipped)", summary.files_written, summary.skipped
            )
        except (DocmirrorError, OSError) as e:
            logger.error("Error processing %s: %s", trigger, e)
        finally:
            self._status = CoordinatorStatus.IDLE
        return True

    def request_shutdown(self) -> None:
        """Ask the consumer loop to exit after the current batch."""
        logger.info("Shutdown requested")
        self._shutdown_event.set()

    def _on_signal(self, signum: int, frame: object) -> None:
        self.request_shutdown()


def _warn_if_nested(source_root: Path, output_root: Path) -> None:
    """Warn when the site tree lives inside the watched tree."""
    source = source_root.resolve()
    output = output_root.resolve()
    if output == source or source in output.parents:
        logger.warning(
            "Site directory %s is inside the watched source %s; its files will be mirrored too",
            output_root,
            source_root,
        )


def run_once(container: Container) -> PassSummary:
    """One-shot mirror pass without watching."""
    mirror = container.mirror
    mirror.prepare()
    return mirror.run()
