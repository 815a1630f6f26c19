"""
Text mutator — pure string transformations over file content.

Each function takes the current file content and returns the new
content. Nothing here touches the filesystem; the ``text`` adapter
reads the file, applies one of these, and writes the result back.

Only ``append_if_absent`` (and trivially ``replace_whole``) can be
re-applied safely. ``replace_exact`` and ``insert_anchored`` assume a
single pass over freshly generated files, which is why their search
strings live in ``railseed.core.data.anchors`` with their preconditions.
"""

from __future__ import annotations

import logging

from railseed.core.errors import AnchorNotFoundError, NotFoundError

logger = logging.getLogger(__name__)


def replace_exact(content: str, before: str, after: str, *, path: str = "<content>") -> str:
    """Replace the first occurrence of *before* with *after*.

    Raises:
        NotFoundError: If *before* does not occur verbatim.
    """
    if before not in content:
        raise NotFoundError(path, before)
    return content.replace(before, after, 1)


def replace_whole(content: str, new_content: str) -> str:
    """Return *new_content*, discarding whatever was there."""
    return new_content


def insert_anchored(
    content: str,
    anchor: str,
    insertion: str,
    position: str = "after",
    *,
    path: str = "<content>",
) -> str:
    """Insert *insertion* immediately before or after the first *anchor*.

    Raises:
        AnchorNotFoundError: If *anchor* does not occur.
        ValueError: If *position* is not 'before' or 'after'.
    """
    if position not in ("before", "after"):
        raise ValueError(f"position must be 'before' or 'after', got {position!r}")

    index = content.find(anchor)
    if index < 0:
        raise AnchorNotFoundError(path, anchor)

    if position == "after":
        index += len(anchor)
    return content[:index] + insertion + content[index:]


def append_if_absent(content: str, block: str) -> str:
    """Append *block* unless its stripped text is already present.

    Applying this twice yields the same content as applying it once.
    """
    if block.strip() in content:
        logger.debug("Block already present, not appending")
        return content
    return content + block
