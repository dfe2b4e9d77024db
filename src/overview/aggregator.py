"""Content aggregation: fetch the text of every readable file in a tree.

Reads are issued together (the source's client bounds concurrency) and
collected back in depth-first traversal order. Files that cannot be read
or that look binary are left out; a partial result is still a result.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from core.errors import OverviewError
from core.interfaces import FileSource
from core.models import FetchedFile, TreeNode
from core.tree import iter_file_nodes


logger = logging.getLogger(__name__)


def _looks_binary(text: str) -> bool:
    return "\x00" in text


async def _fetch_one(source: FileSource, path: str, max_chars: int) -> Optional[FetchedFile]:
    try:
        content = await source.read_file(path=path, max_chars=max_chars)
    except OverviewError as e:
        logger.debug("Skipping %s: %s", path, e)
        return None

    if _looks_binary(content):
        logger.debug("Skipping %s: binary content", path)
        return None
    return FetchedFile(path=path, content=content)


async def aggregate(source: FileSource, tree: TreeNode, *, max_chars: int) -> List[FetchedFile]:
    """Return one FetchedFile per readable file node, in traversal order.

    Directory nodes are descended into but never produce a result. A path
    seen twice is fetched once. An empty list is a valid outcome.
    """
    paths: List[str] = []
    seen = set()
    for node in iter_file_nodes(tree):
        if node.path in seen:
            continue
        seen.add(node.path)
        paths.append(node.path)

    if not paths:
        return []

    results = await asyncio.gather(*(_fetch_one(source, p, max_chars) for p in paths))
    files = [f for f in results if f is not None]

    skipped = len(paths) - len(files)
    if skipped:
        logger.warning("Skipped %d of %d files that could not be read as text", skipped, len(paths))
    logger.info("Aggregated %d files", len(files))
    return files
