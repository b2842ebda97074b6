"""Per-file work: convert a markdown file to HTML, or copy a file verbatim."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from docmirror.core.errors import MirrorIOError, PathEncodingError, ensure_representable
from docmirror.core.models import MirrorAction, MirrorRecord
from docmirror.mirror.links import DEFAULT_OUTPUT_SUFFIX, DEFAULT_SOURCE_SUFFIX, rewrite_links

logger = logging.getLogger(__name__)


def render_document(
    content: str,
    source_suffix: str = DEFAULT_SOURCE_SUFFIX,
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX,
) -> str:
    """Wrap the link-rewritten body in a single preformatted block."""
    return f"<pre>{rewrite_links(content, source_suffix, output_suffix)}</pre>"


def output_name(path: Path, output_suffix: str = DEFAULT_OUTPUT_SUFFIX) -> str:
    """Mirrored file name for a recognized file: ``name.md`` -> ``name.html``.

    Raises:
        PathEncodingError: If the base name is not representable as text.
    """
    return ensure_representable(path.stem) + output_suffix


def transform_file(
    path: Path,
    dest_dir: Path,
    source_suffix: str = DEFAULT_SOURCE_SUFFIX,
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX,
) -> MirrorRecord:
    """Convert one recognized-extension file into ``dest_dir``.

    The whole body is decoded as UTF-8, passed through the link rewriter,
    wrapped in ``<pre>`` and written to ``dest_dir/<stem><output_suffix>``,
    replacing any existing file.

    Args:
        path: Source file.
        dest_dir: Existing destination directory.
        source_suffix: Recognized source suffix (for link retargeting).
        output_suffix: Suffix of the written file and of retargeted links.

    Returns:
        MirrorRecord with action CONVERTED, or SKIPPED if the file name
        cannot be represented.

    Raises:
        MirrorIOError: If the source cannot be read as text or the
            destination cannot be written.
    """
    try:
        output_path = dest_dir / output_name(path, output_suffix)
    except PathEncodingError as e:
        logger.warning("Skipping file: %s", e)
        return MirrorRecord(source=path, action=MirrorAction.SKIPPED, reason=str(e))

    try:
        content = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MirrorIOError(f"Cannot read {path}: {e}", path) from e

    html = render_document(content, source_suffix, output_suffix)

    try:
        output_path.write_bytes(html.encode("utf-8"))
    except OSError as e:
        raise MirrorIOError(f"Cannot write {output_path}: {e}", output_path) from e

    logger.info("Converted: %s -> %s", path, output_path)
    return MirrorRecord(source=path, destination=output_path, action=MirrorAction.CONVERTED)


def copy_file(path: Path, dest_dir: Path) -> MirrorRecord:
    """Copy one file byte-for-byte to ``dest_dir/<name>``.

    Permission bits are carried over along with the contents.

    Raises:
        MirrorIOError: If the copy fails.
    """
    try:
        name = ensure_representable(path.name)
    except PathEncodingError as e:
        logger.warning("Skipping file: %s", e)
        return MirrorRecord(source=path, action=MirrorAction.SKIPPED, reason=str(e))

    output_path = dest_dir / name
    try:
        shutil.copyfile(path, output_path)
        shutil.copymode(path, output_path)
    except OSError as e:
        raise MirrorIOError(f"Cannot copy {path} to {output_path}: {e}", path) from e

    logger.info("Copied: %s -> %s", path, output_path)
    return MirrorRecord(source=path, destination=output_path, action=MirrorAction.COPIED)
