"""Build and walk TreeNode snapshots.

Sources list flat POSIX file paths; build_tree folds them into the
hierarchical TreeNode shape the aggregator walks.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from core.models import TreeNode
from core.paths import matches_any, normalize_posix_relpath, split_posix


class _Dir:
    # Mutable builder node; frozen into a TreeNode once every path is placed
    def __init__(self, path: str) -> None:
        self.path = path
        self.entries: Dict[str, "_Dir | None"] = {}
        self.order: List[str] = []

    def freeze(self) -> TreeNode:
        children = []
        for name in self.order:
            sub = self.entries[name]
            child_path = f"{self.path}/{name}" if self.path else name
            if sub is None:
                children.append(TreeNode(path=child_path, kind="file"))
            else:
                children.append(sub.freeze())
        return TreeNode(path=self.path, kind="directory", children=tuple(children))


def build_tree(paths: Iterable[str], *, exclude: Optional[Sequence[str]] = None) -> TreeNode:
    """Fold file paths into a directory tree rooted at ''.

    Children appear in the order their first path was seen. Paths matching
    any `exclude` glob are dropped; duplicates are ignored.
    """
    root = _Dir("")
    patterns = list(exclude or ())

    for raw in paths:
        path = normalize_posix_relpath(raw)
        parts = split_posix(path)
        if not parts:
            continue
        if patterns and matches_any("/".join(parts), patterns):
            continue

        node = root
        for depth, name in enumerate(parts[:-1]):
            sub = node.entries.get(name)
            if name not in node.entries:
                sub = _Dir("/".join(parts[: depth + 1]))
                node.entries[name] = sub
                node.order.append(name)
            elif sub is None:
                # A file already occupies this name; keep the file.
                break
            node = sub
        else:
            leaf = parts[-1]
            if leaf not in node.entries:
                node.entries[leaf] = None
                node.order.append(leaf)

    return root.freeze()


def iter_file_nodes(tree: TreeNode) -> Iterator[TreeNode]:
    """Yield file nodes depth-first, in child order."""
    if tree.is_file:
        yield tree
        return
    for child in tree.children:
        yield from iter_file_nodes(child)
