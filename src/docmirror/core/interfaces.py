"""Port interfaces for docmirror (hexagonal architecture)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path

from docmirror.core.models import ChangeBatch, PassSummary


class MirrorPort(ABC):
    """Port for running one complete rebuild pass."""

    @property
    @abstractmethod
    def source_root(self) -> Path:
        """Root of the tree being mirrored."""

    @property
    @abstractmethod
    def output_root(self) -> Path:
        """Root of the mirrored site tree."""

    @abstractmethod
    def prepare(self) -> None:
        """Create the site root if it does not exist yet.

        Raises:
            SetupError: If the site root cannot be created.
        """

    @abstractmethod
    def run(self) -> PassSummary:
        """Mirror the whole source tree into the site tree.

        Returns:
            PassSummary with per-action counts.

        Raises:
            MirrorIOError: If a source file cannot be read or its mirrored
                copy cannot be written.
        """

    @abstractmethod
    def is_trigger(self, path: Path) -> bool:
        """Check whether a changed path should trigger a rebuild.

        Args:
            path: A path named by a change notification.

        Returns:
            True if the path is a regular file with the recognized extension.
        """


class ChangeSourcePort(ABC):
    """Port for recursive change notifications on a directory tree."""

    @abstractmethod
    def start(self, root: Path, callback: Callable[[ChangeBatch], None]) -> None:
        """Subscribe to changes under ``root``.

        Args:
            root: Directory to watch recursively.
            callback: Called once per notification batch, possibly from a
                background thread.

        Raises:
            WatchError: If the subscription cannot be established.
        """

    @abstractmethod
    def stop(self) -> None:
        """Release the subscription. Safe to call when not started."""
