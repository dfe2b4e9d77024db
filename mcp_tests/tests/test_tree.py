from core.models import TreeNode
from core.paths import glob_match, matches_any, normalize_posix_relpath
from core.tree import build_tree, iter_file_nodes


def test_normalize_posix_relpath():
    assert normalize_posix_relpath(" ./././src\\app.py ") == "src/app.py"
    assert normalize_posix_relpath("/a/b") == "a/b"
    assert normalize_posix_relpath("") == ""


def test_glob_match_double_star():
    assert glob_match("a/.git/HEAD", "**/.git/**")
    assert glob_match(".git", "**/.git/**")
    assert glob_match("yarn.lock", "**/*.lock")
    assert not glob_match("src/app.py", "**/*.lock")
    assert not glob_match("src/app.py", "")


def test_matches_any():
    assert matches_any("dist/x.js", ["**/node_modules/**", "**/dist/**"])
    assert not matches_any("src/x.js", ["**/node_modules/**", "**/dist/**"])
    assert not matches_any("src/x.js", [])


def test_build_tree_keeps_first_appearance_order():
    tree = build_tree(["b.txt", "a/z.py", "a.txt", "a/y.py"])
    assert [c.path for c in tree.children] == ["b.txt", "a", "a.txt"]
    assert [c.path for c in tree.children[1].children] == ["a/z.py", "a/y.py"]


def test_build_tree_ignores_duplicates_and_blank_paths():
    tree = build_tree(["x.py", "./x.py", "", "  "])
    assert tree == TreeNode(path="", kind="directory", children=(TreeNode(path="x.py", kind="file"),))


def test_build_tree_exclude():
    tree = build_tree(["keep.py", "build/out.js"], exclude=["**/build/**"])
    assert [n.path for n in iter_file_nodes(tree)] == ["keep.py"]


def test_iter_file_nodes_depth_first_skips_directories():
    tree = TreeNode(
        path="",
        kind="directory",
        children=(
            TreeNode(
                path="d",
                kind="directory",
                children=(
                    TreeNode(path="d/e", kind="directory", children=(TreeNode(path="d/e/f.txt", kind="file"),)),
                    TreeNode(path="d/g.txt", kind="file"),
                ),
            ),
            TreeNode(path="h.txt", kind="file"),
            TreeNode(path="empty", kind="directory"),
        ),
    )
    assert [n.path for n in iter_file_nodes(tree)] == ["d/e/f.txt", "d/g.txt", "h.txt"]


def test_iter_file_nodes_on_tree_without_files():
    tree = TreeNode(path="", kind="directory", children=(TreeNode(path="d", kind="directory"),))
    assert list(iter_file_nodes(tree)) == []
