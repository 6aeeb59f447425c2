"""Integration tests to verify the public prune_tree API works end to end."""

import pytest


def test_package_exports():
    """Test that the package exports are accessible."""
    import prune_tree
    from prune_tree import (
        InvalidArgumentError,
        Node,
        RenderConfig,
        Tree,
        TreeError,
        build_dot,
        build_forest,
        build_tree,
        node,
        render_ascii,
    )

    assert prune_tree.__version__ == "0.1.0"
    assert sorted(prune_tree.__all__) == prune_tree.__all__
    assert issubclass(InvalidArgumentError, TreeError)
    assert Tree.of("root").root.data == "root"
    assert isinstance(node(1), Node)
    assert RenderConfig().marker == "- "
    assert callable(build_dot) and callable(render_ascii)
    assert callable(build_forest) and callable(build_tree)


def test_rows_to_pruned_rendering():
    """Rebuild a tree from rows, reshape it and render it."""
    from prune_tree import Tree

    rows = [
        {"id": 3, "parent": 1, "name": "draft"},
        {"id": 0, "parent": None, "name": "docs"},
        {"id": 1, "parent": 0, "name": "guides"},
        {"id": 2, "parent": 0, "name": "api"},
        {"id": 4, "parent": 1, "name": "intro"},
    ]
    (tree,) = Tree.from_collection(rows, lambda p, c: p.data["id"] == c.data["parent"])

    names = tree.map(lambda row: row["name"])
    assert names.by_depth() == {0: ["docs"], 1: ["guides", "api"], 2: ["draft", "intro"]}

    names.prune(lambda name: name == "draft").sort()
    assert str(names) == (
        "docs\n"
        "   |\n"
        "   |- api\n"
        "   |\n"
        "   |- guides\n"
        "       |\n"
        "       |- intro"
    )
    # the source tree is untouched
    assert tree.cardinality() == 5


def test_missing_root_fails_fast():
    from prune_tree import InvalidArgumentError, Tree

    with pytest.raises(InvalidArgumentError):
        Tree(None)
