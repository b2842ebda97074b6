"""Tree mirror walker: recreate the source tree under the site directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from docmirror.core.errors import (
    MirrorIOError,
    PathEncodingError,
    SetupError,
    ensure_representable,
)
from docmirror.core.interfaces import MirrorPort
from docmirror.core.models import MirrorAction, MirrorRecord, PassSummary
from docmirror.mirror.links import DEFAULT_OUTPUT_SUFFIX, DEFAULT_SOURCE_SUFFIX
from docmirror.mirror.transform import copy_file, transform_file

logger = logging.getLogger(__name__)


def mirror_tree(
    source: Path,
    dest: Path,
    source_suffix: str = DEFAULT_SOURCE_SUFFIX,
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX,
) -> PassSummary:
    """Mirror every entry under ``source`` into ``dest``.

    Files ending in ``source_suffix`` are converted, every other file is
    copied, and each subdirectory gets a matching destination directory
    before anything beneath it is written. Entries are processed in the
    order the filesystem yields them. When two source files map to the same
    destination name (``a.md`` and ``a.html``), whichever comes last wins.

    Pending directories are kept on an explicit stack, so nesting depth is
    not limited by the interpreter's recursion limit. A symlink leading back
    to one of its own ancestor directories is skipped; aliases of the same
    directory elsewhere in the tree are mirrored at each location.

    Args:
        source: Source directory.
        dest: Destination directory; must already exist.
        source_suffix: Suffix selecting the transform path.
        output_suffix: Suffix of converted files.

    Returns:
        PassSummary for the walk.

    Raises:
        MirrorIOError: If a directory cannot be listed or created, or a file
            cannot be converted or copied.
    """
    summary = PassSummary()
    # each pending directory carries the resolved paths of its ancestors
    pending: list[tuple[Path, Path, frozenset[Path]]] = [
        (Path(source), Path(dest), frozenset())
    ]

    while pending:
        src_dir, dst_dir, ancestors = pending.pop()

        real = src_dir.resolve()
        if real in ancestors:
            logger.warning("Skipping symlink cycle back to an ancestor: %s", src_dir)
            summary.skipped += 1
            continue
        lineage = ancestors | {real}
        summary.directories += 1

        try:
            with os.scandir(src_dir) as it:
                entries = list(it)
        except OSError as e:
            raise MirrorIOError(f"Cannot list {src_dir}: {e}", src_dir) from e

        for entry in entries:
            path = Path(entry.path)
            if entry.is_file():
                summary.record(_mirror_file(path, dst_dir, source_suffix, output_suffix))
            elif entry.is_dir():
                subdirs = _prepare_subdir(path, dst_dir)
                if subdirs is None:
                    summary.skipped += 1
                else:
                    pending.append((*subdirs, lineage))
            else:
                logger.debug("Ignoring %s: not a regular file or directory", path)

    return summary


def _mirror_file(
    path: Path, dst_dir: Path, source_suffix: str, output_suffix: str
) -> MirrorRecord:
    """Dispatch one regular file to the transformer or the copier."""
    if path.suffix == source_suffix:
        return transform_file(path, dst_dir, source_suffix, output_suffix)
    return copy_file(path, dst_dir)


def _prepare_subdir(path: Path, dst_dir: Path) -> tuple[Path, Path] | None:
    """Create the destination counterpart of a source subdirectory.

    Returns:
        The (source, destination) pair to descend into, or None if the
        subtree must be skipped because a path is not representable.
    """
    try:
        name = ensure_representable(path.name)
        ensure_representable(path)
        ensure_representable(dst_dir / name)
    except PathEncodingError as e:
        logger.warning("Skipping directory: %s", e)
        return None

    new_dst = dst_dir / name
    try:
        new_dst.mkdir(exist_ok=True)
    except OSError as e:
        raise MirrorIOError(f"Cannot create {new_dst}: {e}", new_dst) from e
    return path, new_dst


class TreeMirror(MirrorPort):
    """Full-pass mirror of one source root into one site root."""

    def __init__(
        self,
        source_root: Path | str,
        output_root: Path | str,
        source_suffix: str = DEFAULT_SOURCE_SUFFIX,
        output_suffix: str = DEFAULT_OUTPUT_SUFFIX,
    ) -> None:
        self._source_root = Path(source_root)
        self._output_root = Path(output_root)
        self._source_suffix = source_suffix
        self._output_suffix = output_suffix

    @property
    def source_root(self) -> Path:
        return self._source_root

    @property
    def output_root(self) -> Path:
        return self._output_root

    def prepare(self) -> None:
        """Create the site root if it does not exist yet.

        Raises:
            SetupError: If the directory cannot be created.
        """
        try:
            self._output_root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SetupError(f"Cannot create site directory {self._output_root}: {e}") from e

    def run(self) -> PassSummary:
        """Run one complete pass over the source root."""
        logger.debug("Mirroring %s -> %s", self._source_root, self._output_root)
        return mirror_tree(
            self._source_root,
            self._output_root,
            self._source_suffix,
            self._output_suffix,
        )

    def is_trigger(self, path: Path) -> bool:
        path = Path(path)
        if path.suffix != self._source_suffix:
            return False
        try:
            return path.is_file()
        except OSError as e:
            logger.debug("Cannot stat %s: %s", path, e)
            return False
