"""Error hierarchy for docmirror."""

from __future__ import annotations

from pathlib import Path


class DocmirrorError(Exception):
    """Base exception for all docmirror errors."""

    pass


class ConfigError(DocmirrorError):
    """Configuration loading or validation error."""

    pass


class SetupError(DocmirrorError):
    """The site directory or the watch subscription could not be set up."""

    pass


class WatchError(SetupError):
    """Failed to subscribe to change notifications on the source tree."""

    pass


class MirrorIOError(DocmirrorError):
    """Reading a source file or writing its mirrored copy failed."""

    def __init__(self, message: str, path: Path | str) -> None:
        super().__init__(message)
        self.path = Path(path)


class PathEncodingError(DocmirrorError):
    """A file or directory name cannot be represented as text.

    Raised for names that only survive as surrogate escapes (undecodable
    bytes on disk). The walker recovers from it by skipping the entry.
    """

    def __init__(self, path: Path | str) -> None:
        super().__init__(f"Invalid path encoding for {path!r}")
        self.path = path


def ensure_representable(path: Path | str) -> str:
    """Return ``path`` as text, or raise PathEncodingError.

    Args:
        path: A name or path as yielded by the filesystem.

    Returns:
        The path as a ``str`` that encodes cleanly to UTF-8.

    Raises:
        PathEncodingError: If the path contains undecodable bytes.
    """
    text = str(path)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise PathEncodingError(path) from e
    return text
