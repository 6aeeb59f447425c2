"""Tree handle with traversal, search, metrics and structural algorithms.

A Tree designates one :class:`~prune_tree.node.Node` as its root and scopes
every operation to the subtree below that node. Whatever parent the root may
actually have is ignored: the root is at depth 0 and has local order 0.

The Tree class supports:
- Lazy depth-first and breadth-first traversal
- Search and visiting with early exit
- Depth, local order and global order metrics and groupings
- Splice-filtering, subtree-pruning and sorting in place
- Cloning, mapping and flat-mapping into new, independent trees
- Structural equality and hashing
- ASCII and Graphviz debug renderings

Most query methods take an ``as_data`` flag. When True (the default for
payload-oriented queries) callbacks receive and results hold node payloads;
when False they receive and hold the nodes themselves.

Typical usage example:

    ```python
    from prune_tree import Tree, node

    tree = Tree(node(1, node(2, node(5), node(5)), node(6, node(4)), node(2, node(3))))

    tree.search(lambda x: x > 4)                   # 5
    tree.search(lambda x: x > 4, traversal="bfs")  # 6
    tree.by_depth()                                # {0: [1], 1: [2, 6, 2], 2: [5, 5, 4, 3]}

    tree.prune(lambda x: x == 6)
    print(tree)
    ```
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Deque, Dict, Generic, List, Set, Tuple, TypeVar, Union

from prune_tree.config import RenderConfig
from prune_tree.exceptions import InvalidArgumentError
from prune_tree.node import Node, global_order_in
from prune_tree.render import build_dot, render_ascii
from prune_tree.traversal import breadth_first, depth_first, traverse, walk

logger = logging.getLogger(__name__)

T = TypeVar("T")
S = TypeVar("S")


def _rebuild(source: Node[Any], make: Callable[[Node[Any]], Node[Any]]) -> Node[Any]:
    """Build a new graph mirroring the shape of the subtree under ``source``.

    ``make`` is called once per source node in depth-first order and must
    return a fresh, childless node. Links are made bottom-up so each parent
    is attached to children that are already complete.
    """
    order = list(depth_first(source))
    made: Dict[int, Node[Any]] = {}
    seen: Set[int] = set()
    for src in order:
        built = make(src)
        if id(built) in seen:
            raise InvalidArgumentError(
                "Each source node must be given its own replacement node",
                context={"source": src.data, "replacement": built.data},
            )
        seen.add(id(built))
        made[id(src)] = built
    for src in reversed(order):
        made[id(src)].add_children_nodes(made[id(child)] for child in src.children)
    return made[id(source)]


def nodes_equal(node1: Node[Any], node2: Node[Any]) -> bool:
    """Compare two subtrees by payload, child count and child order."""
    pending: List[Tuple[Node[Any], Node[Any]]] = [(node1, node2)]
    while pending:
        left, right = pending.pop()
        if left is right:
            continue
        if not left.data == right.data or left.degree != right.degree:
            return False
        pending.extend(zip(left.children, right.children))
    return True


def nodes_hash(node: Node[Any]) -> int:
    """Hash a subtree from its payloads and ordered shape."""
    hashes: Dict[int, int] = {}
    for item in reversed(list(depth_first(node))):
        hashes[id(item)] = hash(
            (hash(item.data),) + tuple(hashes[id(child)] for child in item.children)
        )
    return hashes[id(node)]


class Tree(Generic[T]):
    """A handle treating one node as the unparented root of a tree.

    ``Tree(node)`` wraps an existing node in place: the tree shares that
    node's children and every mutation through the tree is visible through
    the node. Use :meth:`copy_of` (or ``node.as_tree()``) for an independent
    copy instead.

    Two trees are equal when their roots hold equal payloads and their
    children are pairwise equal, position by position. Trees hash
    accordingly, so the hash changes when the tree is mutated.

    Attributes:
        root: The root node of this tree.

    Example:
        ```python
        root = Node("root").add_children(["a", "b"])
        tree = Tree(root)

        print(tree.cardinality())     # 3
        print(tree.leaves())          # ['a', 'b']
        print(tree == root.as_tree()) # True
        ```
    """

    def __init__(self, root: Node[T]):
        """Wrap an existing node as the root of a tree.

        Args:
            root: The node to treat as root.

        Raises:
            InvalidArgumentError: If ``root`` is None or not a Node.
        """
        if root is None:
            raise InvalidArgumentError("A tree requires a root node")
        if not isinstance(root, Node):
            raise InvalidArgumentError(
                "A tree root must be a Node",
                context={"root_type": type(root).__name__},
            )
        self._root = root

    @classmethod
    def of(cls, value: T) -> Tree[T]:
        """Create a tree of one node holding ``value``."""
        return cls(Node(value))

    @classmethod
    def empty(cls) -> Tree[Any]:
        """Create a tree of one node holding None."""
        return cls.of(None)

    @classmethod
    def copy_of(cls, root: Node[T]) -> Tree[T]:
        """Create an independent tree with the shape and payloads of a subtree.

        Args:
            root: The node whose subtree is copied.

        Returns:
            A new tree sharing no nodes with ``root``. Payload objects are
            shared, not copied.

        Raises:
            InvalidArgumentError: If ``root`` is None.
        """
        if root is None:
            raise InvalidArgumentError("A tree requires a root node")
        return cls(_rebuild(root, lambda n: Node(n.data)))

    @classmethod
    def from_collection(
        cls, items: Iterable[T], is_parent_of: Callable[[Node[T], Node[T]], bool]
    ) -> List[Tree[T]]:
        """Build a forest from a flat collection. See :func:`prune_tree.builder.build_forest`."""
        from prune_tree.builder import build_forest

        return build_forest(items, is_parent_of)

    @classmethod
    def from_collection_with_root(
        cls,
        root: Union[Node[T], T],
        items: Iterable[T],
        is_parent_of: Callable[[Node[T], Node[T]], bool],
    ) -> Tree[T]:
        """Build one tree under an expected root. See :func:`prune_tree.builder.build_tree`."""
        from prune_tree.builder import build_tree

        return build_tree(root, items, is_parent_of)

    @property
    def root(self) -> Node[T]:
        """The root node of this tree."""
        return self._root

    def __repr__(self) -> str:
        return f"Tree({self._root.data!r})"

    def __str__(self) -> str:
        return render_ascii(self._root)

    def render(self, config: RenderConfig | None = None) -> str:
        """Render this tree as ASCII text.

        Args:
            config: Rendering tokens. Defaults to :class:`RenderConfig` defaults.

        Returns:
            The rendering, one node per line with guide lines in between.
        """
        return render_ascii(self._root, config)

    def build_dot(
        self, node_name_fn: Callable[[Node[T]], str] | None = None, **kwargs: Any
    ) -> Any:
        """Build a graphviz.Digraph of this tree. See :func:`prune_tree.render.build_dot`."""
        return build_dot(self._root, node_name_fn, **kwargs)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Tree):
            return NotImplemented
        return nodes_equal(self._root, other._root)

    def __hash__(self) -> int:
        return nodes_hash(self._root)

    def __iter__(self) -> Iterator[Node[T]]:
        return depth_first(self._root)

    def __len__(self) -> int:
        return self.cardinality()

    def cardinality(self) -> int:
        """Count the nodes in this tree."""
        return sum(1 for _ in depth_first(self._root))

    # Traversal

    def depth_first(self, as_data: bool = False) -> Iterator[Any]:
        """Generate nodes (or payloads) in depth-first pre-order."""
        return self.traverse("dfs", as_data=as_data)

    def breadth_first(self, as_data: bool = False) -> Iterator[Any]:
        """Generate nodes (or payloads) in breadth-first order."""
        return self.traverse("bfs", as_data=as_data)

    def traverse(self, traversal: str = "dfs", as_data: bool = False) -> Iterator[Any]:
        """Generate nodes (or payloads) in the requested order.

        Each call returns an independent generator.

        Args:
            traversal: Either 'dfs' (depth-first) or 'bfs' (breadth-first).
            as_data: If True, yields payloads instead of nodes.

        Raises:
            InvalidArgumentError: If ``traversal`` is unknown.
        """
        nodes = traverse(self._root, traversal)
        return (node.data for node in nodes) if as_data else nodes

    def search(
        self,
        predicate: Callable[[Any], bool],
        traversal: str = "dfs",
        as_data: bool = True,
        default: Any = None,
    ) -> Any:
        """Find the first payload (or node) satisfying a predicate.

        Args:
            predicate: Function returning True for a match.
            traversal: Either 'dfs' (depth-first) or 'bfs' (breadth-first).
            as_data: If True, the predicate receives payloads and a payload is
                returned. If False, nodes are tested and returned.
            default: Value returned when nothing matches.

        Returns:
            The first match in traversal order, or ``default``.

        Example:
            ```python
            tree = Tree(node(1, node(2, node(5)), node(6)))
            tree.search(lambda x: x > 4)                   # 5
            tree.search(lambda x: x > 4, traversal="bfs")  # 6
            tree.search(lambda x: x > 10, default=-1)      # -1
            ```
        """
        for item in self.traverse(traversal, as_data=as_data):
            if predicate(item):
                return item
        return default

    def visit(
        self,
        visitor: Callable[[Any], Any],
        traversal: str = "dfs",
        as_data: bool = True,
    ) -> int:
        """Call ``visitor`` on each payload (or node) until it returns False.

        The traversal stops immediately when the visitor returns ``False``;
        any other return value, including None, continues.

        Args:
            visitor: Callback invoked once per node in traversal order.
            traversal: Either 'dfs' (depth-first) or 'bfs' (breadth-first).
            as_data: If True, the visitor receives payloads instead of nodes.

        Returns:
            The number of nodes handed to the visitor.
        """
        count = 0
        for item in self.traverse(traversal, as_data=as_data):
            count += 1
            if visitor(item) is False:
                break
        return count

    def leaves(self, traversal: str = "dfs", as_data: bool = True) -> List[Any]:
        """Collect the nodes (or payloads) that have no children."""
        return [
            node.data if as_data else node
            for node in traverse(self._root, traversal)
            if node.is_leaf()
        ]

    def at_depth(self, depth: int, as_data: bool = True) -> List[Any]:
        """Collect the nodes (or payloads) at a depth, in depth-first order."""
        return [node.data if as_data else node for node, d in walk(self._root) if d == depth]

    def strands(self, as_data: bool = True) -> List[List[Any]]:
        """Collect every root-to-leaf path, one per leaf, in depth-first order."""
        result = []
        for leaf in self.leaves(as_data=False):
            path: Deque[Node[T]] = deque([leaf])
            while path[0] is not self._root and path[0].parent is not None:
                path.appendleft(path[0].parent)
            result.append([node.data if as_data else node for node in path])
        return result

    def get_edges(self, traversal: str = "bfs", as_data: bool = True) -> List[Tuple[Any, Any]]:
        """Get every (parent, child) pair of this tree in traversal order.

        Args:
            traversal: Either 'dfs' (depth-first) or 'bfs' (breadth-first).
            as_data: If True, pairs hold payloads instead of nodes.
        """
        return [
            (node.parent.data, node.data) if as_data else (node.parent, node)
            for node in traverse(self._root, traversal)
            if node is not self._root
        ]

    # Metrics

    def depth_of(self, node: Node[T]) -> int:
        """Number of hops from this tree's root to ``node``.

        Returns:
            The depth, or -1 if ``node`` is not in this tree.
        """
        result = 0
        curr: Node[T] | None = node
        while curr is not None:
            if curr is self._root:
                return result
            curr = curr.parent
            result += 1
        return -1

    def local_order_of(self, node: Node[T]) -> int:
        """Index of ``node`` among its siblings (0 for this tree's root).

        Returns:
            The index, or -1 if ``node`` is not in this tree.
        """
        if node is self._root:
            return 0
        if not self._is_attached(node):
            return -1
        return node.local_order

    def global_order_of(self, node: Node[T]) -> int:
        """Index of ``node`` among all nodes of this tree at its depth.

        Returns:
            The index, or -1 if ``node`` is not in this tree.
        """
        return global_order_in(self._root, node)

    def _positions(self) -> Iterator[Tuple[Node[T], int, int, int]]:
        """Generate (node, depth, local order, global order) breadth-first."""
        queue: Deque[Tuple[Node[T], int, int]] = deque([(self._root, 0, 0)])
        counts: Dict[int, int] = {}
        while queue:
            item, depth, local = queue.popleft()
            glob = counts.get(depth, 0)
            counts[depth] = glob + 1
            queue.extend((child, depth + 1, idx) for idx, child in enumerate(item.children))
            yield item, depth, local, glob

    def _group(self, position: int, as_data: bool) -> Dict[int, List[Any]]:
        groups: Dict[int, List[Any]] = {}
        for entry in self._positions():
            node = entry[0]
            groups.setdefault(entry[position], []).append(node.data if as_data else node)
        return groups

    def by_depth(self, as_data: bool = True) -> Dict[int, List[Any]]:
        """Group nodes (or payloads) by depth, in breadth-first order."""
        return self._group(1, as_data)

    def by_local_order(self, as_data: bool = True) -> Dict[int, List[Any]]:
        """Group nodes (or payloads) by local order, in breadth-first order."""
        return self._group(2, as_data)

    def by_global_order(self, as_data: bool = True) -> Dict[int, List[Any]]:
        """Group nodes (or payloads) by global order, in breadth-first order."""
        return self._group(3, as_data)

    def max_depth(self) -> int:
        """The largest depth of any node in this tree."""
        return max(depth for _, depth, _, _ in self._positions())

    def max_local_order(self) -> int:
        """The largest local order of any node in this tree."""
        return max(local for _, _, local, _ in self._positions())

    def max_global_order(self) -> int:
        """The largest global order of any node in this tree."""
        return max(glob for _, _, _, glob in self._positions())

    # Mutation

    def _is_attached(self, node: Node[T]) -> bool:
        curr: Node[T] | None = node
        while curr is not None:
            if curr is self._root:
                return True
            curr = curr.parent
        return False

    def _cut(
        self,
        predicate: Callable[[Any], bool],
        as_data: bool,
        action: Callable[[Node[T]], Any],
    ) -> int:
        count = 0
        for node in depth_first(self._root):
            if node is self._root or not self._is_attached(node):
                continue
            if predicate(node.data if as_data else node):
                action(node)
                count += 1
        return count

    def filter(self, predicate: Callable[[Any], bool], as_data: bool = True) -> Tree[T]:
        """Splice out every non-root node matching a predicate.

        Nodes are tested depth-first. A matched node is removed and its
        children are appended, in order, to its former parent's children;
        they are then tested in turn. The root is never removed.

        Args:
            predicate: Function returning True for nodes to splice out.
            as_data: If True, the predicate receives payloads instead of nodes.

        Returns:
            This tree, to allow chaining.

        Example:
            ```python
            tree = Tree(node("root", node("child1", node("x")), node("child2", node("y"))))
            tree.filter(lambda s: s.startswith("child"))
            tree.root.children  # (Node('x'), Node('y'))
            ```
        """
        count = self._cut(predicate, as_data, Node.splice)
        logger.debug(f"Filter spliced {count} nodes from tree rooted at {self._root.data!r}")
        return self

    def prune(self, predicate: Callable[[Any], bool], as_data: bool = True) -> Tree[T]:
        """Remove every non-root node matching a predicate, with its subtree.

        Nodes are tested depth-first; nodes under an already removed subtree
        are not tested. The root is never removed.

        Args:
            predicate: Function returning True for subtrees to remove.
            as_data: If True, the predicate receives payloads instead of nodes.

        Returns:
            This tree, to allow chaining.
        """
        count = self._cut(predicate, as_data, Node.prune)
        logger.debug(f"Prune removed {count} subtrees from tree rooted at {self._root.data!r}")
        return self

    def sort(
        self,
        key: Callable[[Any], Any] | None = None,
        reverse: bool = False,
        as_data: bool = True,
    ) -> Tree[T]:
        """Sort the children of every node in place.

        Each node's immediate children are sorted independently; nodes never
        move between parents. The sort is stable.

        Args:
            key: Function computing a sort key. If None, payloads are compared
                directly.
            reverse: If True, sorts in descending order.
            as_data: If True, ``key`` receives payloads instead of nodes.

        Returns:
            This tree, to allow chaining.
        """
        if as_data:
            data_key = key if key is not None else (lambda data: data)

            def node_key(n):
                return data_key(n.data)
        elif key is None:
            raise InvalidArgumentError("Sorting nodes requires a key function")
        else:
            node_key = key
        for node in breadth_first(self._root):
            if node.has_children():
                node.sort_children(key=node_key, reverse=reverse)
        return self

    # Copying

    def shallow_clone(self) -> Tree[T]:
        """Copy this tree's shape into new nodes sharing the same payloads."""
        return Tree.copy_of(self._root)

    def deep_clone(self, clone_fn: Callable[[T], T]) -> Tree[T]:
        """Copy this tree's shape, copying each payload with ``clone_fn``.

        Example:
            ```python
            import copy
            dup = tree.deep_clone(copy.deepcopy)
            ```
        """
        return self.map(clone_fn)

    def map(self, fn: Callable[[Any], S], as_data: bool = True) -> Tree[S]:
        """Build a new tree of the same shape with transformed payloads.

        Args:
            fn: Function producing each new payload, called once per node.
            as_data: If True, ``fn`` receives payloads instead of nodes.

        Returns:
            A new, independent tree. This tree is not modified.
        """
        if as_data:
            return Tree(_rebuild(self._root, lambda n: Node(fn(n.data))))
        return Tree(_rebuild(self._root, lambda n: Node(fn(n))))

    def flat_map(self, fn: Callable[[Any], Node[S]], as_data: bool = True) -> Tree[S]:
        """Build a new tree of the same shape from replacement nodes.

        ``fn`` returns a replacement node for each source node. Any children
        the replacement already had are detached from it; its children in the
        result are the replacements of the source node's children.

        Args:
            fn: Function producing a fresh replacement Node per call.
            as_data: If True, ``fn`` receives payloads instead of nodes.

        Returns:
            A new tree rooted at the root's replacement.

        Raises:
            InvalidArgumentError: If ``fn`` returns something other than a
                Node, returns a node of this tree, or returns the same node
                for two source nodes.
        """
        members = {id(n) for n in depth_first(self._root)}

        def make(src: Node[T]) -> Node[S]:
            replacement = fn(src.data if as_data else src)
            if not isinstance(replacement, Node):
                raise InvalidArgumentError(
                    "flat_map functions must return a Node",
                    context={"source": src.data, "returned_type": type(replacement).__name__},
                )
            if id(replacement) in members:
                raise InvalidArgumentError(
                    "flat_map functions must not return nodes of the tree being mapped",
                    context={"source": src.data, "replacement": replacement.data},
                )
            for child in replacement.children:
                child.prune()
            replacement.prune()
            return replacement

        return Tree(_rebuild(self._root, make))


__all__ = [
    "Tree",
    "nodes_equal",
    "nodes_hash",
]
