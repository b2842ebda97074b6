"""Domain models for docmirror."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class MirrorAction(str, Enum):
    """What a pass did with a single source entry."""

    CONVERTED = "converted"
    COPIED = "copied"
    SKIPPED = "skipped"


class MirrorRecord(BaseModel):
    """Outcome for one source file within a pass."""

    source: Path = Field(description="Path of the source entry")
    destination: Path | None = Field(default=None, description="Written path, if any")
    action: MirrorAction = Field(description="Transform, copy or skip")
    reason: str | None = Field(default=None, description="Why the entry was skipped")


class PassSummary(BaseModel):
    """Counts for one complete walk of the source tree."""

    converted: int = Field(default=0, description="Files run through the link rewriter")
    copied: int = Field(default=0, description="Files duplicated byte-for-byte")
    skipped: int = Field(default=0, description="Entries skipped with a warning")
    directories: int = Field(default=0, description="Source directories visited")

    @property
    def files_written(self) -> int:
        """Number of destination files created or overwritten."""
        return self.converted + self.copied

    def record(self, record: MirrorRecord) -> None:
        """Count one per-file outcome."""
        if record.action == MirrorAction.CONVERTED:
            self.converted += 1
        elif record.action == MirrorAction.COPIED:
            self.copied += 1
        else:
            self.skipped += 1


class ChangeBatch(BaseModel):
    """One filesystem change notification and the paths it names."""

    paths: list[Path] = Field(default_factory=list, description="Affected paths")
    event_type: str = Field(default="modified", description="Kind of change")
    received_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the notification was queued",
    )


class CoordinatorStatus(str, Enum):
    """Current state of the rebuild coordinator."""

    STOPPED = "stopped"
    IDLE = "idle"
    REBUILDING = "rebuilding"
    ERROR = "error"
