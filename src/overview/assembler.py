"""Assemble fetched files into the single document sent for generation.

Every file gets the same block layout, so the layout constants below are
part of the prompt the generation service sees.
"""

from __future__ import annotations

from typing import Sequence

from core.models import FetchedFile


HEADER_PREFIX = "// Path: "
SEPARATOR = "// " + "=" * 83


def format_block(file: FetchedFile) -> str:
    # header, separator, blank, content, blank, separator
    return "\n".join(
        [
            f"{HEADER_PREFIX}{file.path}",
            SEPARATOR,
            "",
            file.content,
            "",
            SEPARATOR,
        ]
    )


def assemble(files: Sequence[FetchedFile]) -> str:
    """Join the per-file blocks in input order, one blank line between blocks.

    Content is passed through verbatim, including text that happens to
    look like a header or separator.
    """
    return "\n\n".join(format_block(f) for f in files)
