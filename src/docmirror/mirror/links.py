"""Link rewriting: markdown links become anchors, .md targets become .html."""

from __future__ import annotations

import re

DEFAULT_SOURCE_SUFFIX = ".md"
DEFAULT_OUTPUT_SUFFIX = ".html"

# [text](url) or ![text](url); no nested ] in text or ) in url
_LINK_PATTERN = re.compile(r"!?\[([^\]]+)\]\(([^)]+)\)")


def retarget(
    url: str,
    source_suffix: str = DEFAULT_SOURCE_SUFFIX,
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX,
) -> str:
    """Swap a trailing source suffix for the output suffix.

    ``other.md`` becomes ``other.html``; anything not ending in the source
    suffix (``https://example.com``, ``image.png``, ``page.md#intro``) is
    returned unchanged.
    """
    if url.endswith(source_suffix):
        return url[: -len(source_suffix)] + output_suffix
    return url


def rewrite_links(
    content: str,
    source_suffix: str = DEFAULT_SOURCE_SUFFIX,
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX,
) -> str:
    """Replace every markdown link in ``content`` with an HTML anchor.

    Plain links and image links produce the same ``<a href="url">text</a>``
    form; the leading ``!`` is dropped. Matches are found left to right and
    never overlap. Text that only partially looks like a link is left as is.

    Args:
        content: Text body of a source file.
        source_suffix: Suffix of link targets to retarget (e.g. ".md").
        output_suffix: Suffix that replaces it (e.g. ".html").

    Returns:
        The body with links rewritten.
    """

    def _anchor(match: re.Match[str]) -> str:
        text, url = match.group(1), match.group(2)
        return f'<a href="{retarget(url, source_suffix, output_suffix)}">{text}</a>'

    return _LINK_PATTERN.sub(_anchor, content)
