"""Depth-first and breadth-first traversal engine.

Every function here returns a fresh generator, so each call has its own
cursor and nothing is shared between two traversals of the same tree. Nodes
are produced lazily: a consumer that stops early never causes the rest of
the tree to be visited.

A node's children are placed on the worklist at the moment the node itself
is produced. Mutations that a consumer makes to a node after receiving it
(as ``Tree.filter`` and ``Tree.prune`` do) therefore do not change which
nodes are already queued.

Typical usage example:

    ```python
    from prune_tree import node
    from prune_tree.traversal import breadth_first, depth_first

    root = node(1, node(2, node(4)), node(3))
    [n.data for n in depth_first(root)]    # [1, 2, 4, 3]
    [n.data for n in breadth_first(root)]  # [1, 2, 3, 4]
    ```
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from typing import TYPE_CHECKING, Deque, Tuple

from prune_tree.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from prune_tree.node import Node

TRAVERSALS = ("dfs", "bfs")


def check_traversal(traversal: str) -> str:
    """Validate a traversal name.

    Args:
        traversal: Either 'dfs' (depth-first) or 'bfs' (breadth-first).

    Returns:
        The validated traversal name.

    Raises:
        InvalidArgumentError: If the name is not a known traversal.
    """
    if traversal not in TRAVERSALS:
        raise InvalidArgumentError(
            f"Unknown traversal '{traversal}'",
            context={"traversal": traversal, "allowed": list(TRAVERSALS)},
        )
    return traversal


def depth_first(root: Node) -> Iterator[Node]:
    """Generate nodes in depth-first pre-order.

    A node always precedes all of its descendants, and siblings are produced
    in attachment order with each sibling's whole subtree produced before the
    next sibling.

    Args:
        root: The node to start from.

    Yields:
        Each node of the subtree rooted at ``root``.
    """
    queue: Deque[Node] = deque([root])
    while queue:
        item = queue.popleft()
        queue.extendleft(reversed(item.children))
        yield item


def breadth_first(root: Node) -> Iterator[Node]:
    """Generate nodes in breadth-first order.

    All nodes at depth d are produced before any node at depth d + 1. Within
    a depth, nodes follow the left-to-right order of their parents.

    Args:
        root: The node to start from.

    Yields:
        Each node of the subtree rooted at ``root``.
    """
    queue: Deque[Node] = deque([root])
    while queue:
        item = queue.popleft()
        queue.extend(item.children)
        yield item


def _walk_dfs(root: Node) -> Iterator[Tuple[Node, int]]:
    queue: Deque[Tuple[Node, int]] = deque([(root, 0)])
    while queue:
        item, depth = queue.popleft()
        queue.extendleft((child, depth + 1) for child in reversed(item.children))
        yield item, depth


def _walk_bfs(root: Node) -> Iterator[Tuple[Node, int]]:
    queue: Deque[Tuple[Node, int]] = deque([(root, 0)])
    while queue:
        item, depth = queue.popleft()
        queue.extend((child, depth + 1) for child in item.children)
        yield item, depth


def walk(root: Node, traversal: str = "dfs") -> Iterator[Tuple[Node, int]]:
    """Generate ``(node, depth)`` pairs in the requested order.

    Depth is counted from ``root`` (which is at depth 0) regardless of any
    parent ``root`` may actually have.

    Args:
        root: The node to start from.
        traversal: Either 'dfs' (depth-first) or 'bfs' (breadth-first).

    Returns:
        A generator of ``(node, depth)`` pairs.

    Raises:
        InvalidArgumentError: If ``traversal`` is unknown.
    """
    check_traversal(traversal)
    return _walk_dfs(root) if traversal == "dfs" else _walk_bfs(root)


def traverse(root: Node, traversal: str = "dfs") -> Iterator[Node]:
    """Generate nodes in the requested order.

    Args:
        root: The node to start from.
        traversal: Either 'dfs' (depth-first) or 'bfs' (breadth-first).

    Returns:
        A generator of nodes.

    Raises:
        InvalidArgumentError: If ``traversal`` is unknown.
    """
    check_traversal(traversal)
    return depth_first(root) if traversal == "dfs" else breadth_first(root)
