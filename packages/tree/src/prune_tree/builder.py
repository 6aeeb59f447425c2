"""Builders for nodes and for tree topology recovered from flat collections.

:func:`node` builds a node with children in one expression. The
:func:`build_forest` and :func:`build_tree` functions wrap each item of a
flat collection in a node and link the nodes using a parent/child predicate.

Linking runs in passes. In each pass, every node still lacking a parent is
matched, in collection order, against the other nodes, also in collection
order; the first node accepted as its parent adopts it at once. A node is
never offered its own descendants as parents, so rows that name each other
as parents stop at the first link of the cycle. Because adoption is
immediate, later matches in the same pass can already see the children a
parent has gathered. Passes repeat until one links nothing.

Typical usage example:

    ```python
    from prune_tree.builder import build_forest

    rows = [
        {"id": 0, "parent": None, "name": "Root"},
        {"id": 1, "parent": 0, "name": "Child1"},
        {"id": 2, "parent": 0, "name": "Child2"},
    ]
    forest = build_forest(rows, lambda p, c: p.data["id"] == c.data["parent"])
    print(len(forest))                                     # 1
    print([n.data["name"] for n in forest[0].root.children])  # ['Child1', 'Child2']
    ```

Note:
    The predicate must eventually stop accepting new links; a predicate that
    keeps re-linking nodes forever makes the build loop forever.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, List, TypeVar, Union

from prune_tree.exceptions import InvalidArgumentError
from prune_tree.node import Node
from prune_tree.tree import Tree

logger = logging.getLogger(__name__)

T = TypeVar("T")

ParentMatcher = Callable[[Node[Any], Node[Any]], bool]


def node(value: T, *children: Node[T]) -> Node[T]:
    """Create a node holding ``value`` with the given children attached.

    Args:
        value: The payload of the new node.
        *children: Nodes to attach, in order.

    Returns:
        The new node.

    Example:
        ```python
        root = node("root", node("a", node("a1")), node("b"))
        print(Tree(root).cardinality())  # 4
        ```
    """
    return Node(value).add_children_nodes(children)


def _run_pass(nodes: List[Node[Any]], is_parent_of: ParentMatcher) -> int:
    """Link parentless nodes to their first accepted parent.

    Returns:
        The number of links made.
    """
    linked = 0
    for child in nodes:
        if child.parent is not None:
            continue
        for candidate in nodes:
            # a node cannot adopt one of its own ancestors
            if child.is_ancestor(candidate, self_is_ancestor=True):
                continue
            if is_parent_of(candidate, child):
                candidate.add_child_node(child)
                linked += 1
                break
    return linked


def _link(nodes: List[Node[Any]], is_parent_of: ParentMatcher) -> None:
    passes = 0
    while True:
        passes += 1
        linked = _run_pass(nodes, is_parent_of)
        logger.debug(f"Topology pass {passes} linked {linked} of {len(nodes)} nodes")
        if not linked:
            break


def build_forest(items: Iterable[T], is_parent_of: ParentMatcher) -> List[Tree[T]]:
    """Build trees from a flat collection and a parent/child predicate.

    Args:
        items: The payloads, one node per item.
        is_parent_of: Called as ``is_parent_of(parent_node, child_node)``;
            returns True when the first node is the immediate parent of the
            second. Both arguments are nodes, so the predicate can inspect
            children gathered so far.

    Returns:
        One tree per node left without a parent, in collection order. The
        trees wrap the linked nodes directly.
    """
    nodes = [Node(item) for item in items]
    _link(nodes, is_parent_of)
    roots = [n for n in nodes if n.parent is None]
    logger.debug(f"Built {len(roots)} trees from {len(nodes)} items")
    return [Tree(root) for root in roots]


def build_tree(
    root: Union[Node[T], T], items: Iterable[T], is_parent_of: ParentMatcher
) -> Tree[T]:
    """Build the tree under an expected root from a flat collection.

    The root is placed ahead of the items and linking runs as in
    :func:`build_forest`. Nodes that end up outside the root's subtree are
    discarded.

    Args:
        root: The expected root, as a Node or as a payload to wrap.
        items: The remaining payloads, one node per item.
        is_parent_of: The parent/child predicate, as in :func:`build_forest`.

    Returns:
        An independent tree copied from the root's subtree; a single-node
        tree when nothing was linked beneath the root.

    Raises:
        InvalidArgumentError: If ``root`` is None.

    Example:
        ```python
        tree = build_tree(
            Row(0, -1, "Root"),
            [Row(1, 0, "Child1"), Row(2, 0, "Child2")],
            lambda p, c: p.data.id == c.data.parent_id,
        )
        ```
    """
    if root is None:
        raise InvalidArgumentError("build_tree requires an expected root")
    root_node = root if isinstance(root, Node) else Node(root)
    nodes = [root_node] + [Node(item) for item in items]
    _link(nodes, is_parent_of)
    return root_node.as_tree()


__all__ = [
    "build_forest",
    "build_tree",
    "node",
]
