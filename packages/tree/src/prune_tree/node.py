"""Tree nodes with payloads, ordered children and parent back-references.

A Node holds arbitrary data, an ordered list of child nodes and a reference
to its parent (None for an unparented node). Children are owned by exactly
one parent at a time: attaching a node that already has a parent first
detaches it from that parent.

The position metrics on a Node (depth, local order, global order) are
measured against the node's topmost ancestor and are recomputed on every
access. To measure against a different root, wrap that root in a
:class:`~prune_tree.tree.Tree` and use its ``*_of`` methods.

Typical usage example:

    ```python
    from prune_tree.node import Node

    root = Node("root").add_child("a").add_child("b")
    a, b = root.children
    a.add_children(["a1", "a2"])

    print(a.children[1].depth)        # 2
    print(b.local_order)              # 1
    print(a.children[1].global_order) # 1
    print([s.data for s in b.siblings])  # ['a']
    ```
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any, Deque, Dict, Generic, List, Tuple, TypeVar

from prune_tree.exceptions import InvalidArgumentError
from prune_tree.traversal import walk

if TYPE_CHECKING:
    from prune_tree.tree import Tree

T = TypeVar("T")


class Node(Generic[T]):
    """A single tree element owning a payload and an ordered list of children.

    Nodes compare and hash by identity, so they can be located inside their
    parent's children and used as mapping keys while their payloads change.
    Structural (shape and payload) comparison is provided by
    :class:`~prune_tree.tree.Tree`.

    Attributes:
        data: The payload of this node (any type, mutable in place).
        children: Read-only ordered view of this node's children.
        parent: This node's parent, or None.
        depth: Number of hops from the topmost ancestor to this node.
        degree: Number of direct children.
    """

    def __init__(self, data: T = None):
        """Initialize an unparented node without children.

        Args:
            data: The payload to be held by this node.
        """
        self._data = data
        self._children: List[Node[T]] = []
        self._parent: Node[T] | None = None

    def __repr__(self) -> str:
        return f"Node({self._data!r})"

    def __str__(self) -> str:
        return str(self._data)

    @property
    def data(self) -> T:
        """The payload contained in this node."""
        return self._data

    @data.setter
    def data(self, data: T) -> None:
        self._data = data

    @property
    def children(self) -> Tuple[Node[T], ...]:
        """This node's children, in order, as a read-only tuple."""
        return tuple(self._children)

    @property
    def parent(self) -> Node[T] | None:
        """This node's parent, or None if it is unparented."""
        return self._parent

    @property
    def siblings(self) -> List[Node[T]]:
        """All other children of this node's parent.

        Returns:
            The parent's children except this node, in order; an empty list
            if this node has no parent.
        """
        if self._parent is None:
            return []
        return [node for node in self._parent._children if node is not self]

    @property
    def next_sibling(self) -> Node[T] | None:
        """The sibling immediately after this node, or None."""
        if self._parent is None:
            return None
        sibs = self._parent._children
        nextsib = sibs.index(self) + 1
        return sibs[nextsib] if nextsib < len(sibs) else None

    @property
    def prev_sibling(self) -> Node[T] | None:
        """The sibling immediately before this node, or None."""
        if self._parent is None:
            return None
        sibs = self._parent._children
        prevsib = sibs.index(self) - 1
        return sibs[prevsib] if prevsib >= 0 else None

    def has_children(self) -> bool:
        """Check if this node has any children."""
        return len(self._children) > 0

    def has_parent(self) -> bool:
        """Check if this node has a parent."""
        return self._parent is not None

    def is_leaf(self) -> bool:
        """Check if this node has no children."""
        return not self._children

    @property
    def degree(self) -> int:
        """Number of direct children of this node."""
        return len(self._children)

    @property
    def root(self) -> Node[T]:
        """The topmost ancestor of this node (itself if unparented)."""
        root = self
        while root._parent is not None:
            root = root._parent
        return root

    @property
    def ancestry(self) -> List[Node[T]]:
        """This node's ancestors, ordered from the topmost down to the parent."""
        path: Deque[Node[T]] = deque()
        node = self._parent
        while node is not None:
            path.appendleft(node)
            node = node._parent
        return list(path)

    def get_path(self) -> List[Node[T]]:
        """Get the path from the topmost ancestor to this node (inclusive)."""
        return self.ancestry + [self]

    @property
    def depth(self) -> int:
        """Depth of this node: 0 if unparented, else one more than its parent's.

        Example:
            ```python
            root = Node("root").add_child("child")
            child = root.children[0]
            child.add_child("grandchild")

            print(root.depth)                  # 0
            print(child.depth)                 # 1
            print(child.children[0].depth)     # 2
            ```
        """
        result = 0
        curp = self._parent
        while curp is not None:
            curp = curp._parent
            result += 1
        return result

    @property
    def local_order(self) -> int:
        """This node's index among its parent's children (0 if unparented)."""
        return self._parent._children.index(self) if self._parent is not None else 0

    @property
    def global_order(self) -> int:
        """This node's index among all nodes at its depth.

        Nodes at the same depth are enumerated left to right by a
        breadth-first traversal from the topmost ancestor. The value is
        recomputed on every access.
        """
        return global_order_in(self.root, self)

    def is_ancestor(self, other: Node[T], self_is_ancestor: bool = False) -> bool:
        """Check if this node is an ancestor of another node.

        Args:
            other: The potential descendant node to check.
            self_is_ancestor: If True, considers a node to be its own ancestor.

        Returns:
            True if this node is on the path from ``other`` up to its topmost
            ancestor.
        """
        parent = other if self_is_ancestor else other._parent
        while parent is not None:
            if parent is self:
                return True
            parent = parent._parent
        return False

    def find_deepest_common_ancestor(self, other: Node[T] | None) -> Node[T] | None:
        """Find the deepest node that is an ancestor of both nodes.

        A node counts as its own ancestor here, so a node and one of its
        descendants share the node itself.

        Args:
            other: The other node. Can be None.

        Returns:
            The deepest common ancestor, or None if ``other`` is None or the
            nodes do not share a topmost ancestor.
        """
        if other is None:
            return None
        if self is other:
            return self
        result: Node[T] | None = None
        for mynode, othernode in zip(self.get_path(), other.get_path()):
            if mynode is not othernode:
                break  # diverged
            result = mynode
        return result

    def add_child(self, data: T) -> Node[T]:
        """Append a new child node holding ``data``.

        Args:
            data: The payload for the new child.

        Returns:
            This node, to allow chaining.

        Example:
            ```python
            root = Node(1).add_child(2).add_child(3)
            print([c.data for c in root.children])  # [2, 3]
            ```
        """
        return self._attach(Node(data))

    def add_child_node(self, child: Node[T]) -> Node[T]:
        """Append an existing node as the last child of this node.

        If the child already has a parent it is detached from that parent
        first, so a node never appears in two children lists.

        Args:
            child: The node to attach.

        Returns:
            This node, to allow chaining.

        Raises:
            InvalidArgumentError: If ``child`` is not a Node, or if it is this
                node or one of its ancestors.
        """
        return self._attach(child)

    def add_children(self, data: Iterable[T]) -> Node[T]:
        """Append a new child for each payload, preserving iteration order.

        Returns:
            This node, to allow chaining.
        """
        for item in data:
            self._attach(Node(item))
        return self

    def add_children_nodes(self, children: Iterable[Node[T]]) -> Node[T]:
        """Append existing nodes as children, preserving iteration order.

        Returns:
            This node, to allow chaining.

        Raises:
            InvalidArgumentError: As for :meth:`add_child_node`.
        """
        for child in children:
            self._attach(child)
        return self

    def sort_children(self, key: Callable[[Node[T]], Any], reverse: bool = False) -> Node[T]:
        """Stable-sort this node's immediate children in place.

        Args:
            key: Function computing a sort key from a child node.
            reverse: If True, sorts in descending order.

        Returns:
            This node, to allow chaining.
        """
        self._children.sort(key=key, reverse=reverse)
        return self

    def _attach(self, child: Node[T]) -> Node[T]:
        if not isinstance(child, Node):
            raise InvalidArgumentError(
                "Only Node instances can be attached as child nodes",
                context={"parent": self._data, "child_type": type(child).__name__},
            )
        if child.is_ancestor(self, self_is_ancestor=True):
            raise InvalidArgumentError(
                "Cannot attach a node beneath itself or its own descendant",
                context={"parent": self._data, "child": child._data},
            )
        child.prune()
        self._children.append(child)
        child._parent = self
        return self

    def prune(self) -> Node[T] | None:
        """Remove this node, together with its subtree, from its parent.

        The subtree below this node stays intact; only the link between this
        node and its parent is cut.

        Returns:
            This node's former parent, or None if it had no parent.
        """
        result = self._parent
        if result is not None:
            result._children.remove(self)
            self._parent = None
        return result

    def splice(self) -> Node[T] | None:
        """Remove this node, promoting its children to its former parent.

        The children are appended after the parent's existing children as a
        contiguous block, keeping their relative order. An unparented node is
        left untouched.

        Returns:
            This node's former parent, or None if it had no parent.
        """
        parent = self._parent
        if parent is None:
            return None
        promoted, self._children = self._children, []
        parent._children.remove(self)
        self._parent = None
        for child in promoted:
            child._parent = parent
        parent._children.extend(promoted)
        return parent

    def as_tree(self) -> Tree[T]:
        """Build an independent tree with the shape and payloads of this subtree.

        Returns:
            A new Tree whose unparented root mirrors this node.
        """
        from prune_tree.tree import Tree

        return Tree.copy_of(self)


def global_order_in(root: Node[Any], target: Node[Any]) -> int:
    """Locate ``target`` among the nodes sharing its depth below ``root``.

    Depth is measured from ``root``. Nodes are compared by identity.

    Args:
        root: The node whose subtree is enumerated breadth-first.
        target: The node to locate.

    Returns:
        The 0-based index of ``target`` among same-depth nodes, or -1 if it
        is not in the subtree.
    """
    counts: Dict[int, int] = {}
    for item, depth in walk(root, "bfs"):
        if item is target:
            return counts.get(depth, 0)
        counts[depth] = counts.get(depth, 0) + 1
    return -1
