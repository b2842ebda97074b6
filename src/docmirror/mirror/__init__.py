"""Tree mirroring: link rewriting, per-file transforms and the walker."""

from docmirror.mirror.links import rewrite_links
from docmirror.mirror.transform import copy_file, render_document, transform_file
from docmirror.mirror.walker import TreeMirror, mirror_tree

__all__ = [
    "TreeMirror",
    "copy_file",
    "mirror_tree",
    "render_document",
    "rewrite_links",
    "transform_file",
]
