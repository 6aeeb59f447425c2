"""Debug renderings of a tree: ASCII text and Graphviz digraphs.

Neither rendering is a serialization format; both exist to make a tree
readable in logs, test failures and notebooks.

The ASCII form draws one node per line, depth-first, with a guide line above
each non-root node:

    1
       |
       |- 2
       |   |
       |   |- 5
       |
       |- 6
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any, Dict, List, Tuple

import graphviz

from prune_tree.config import DEFAULT_RENDER_CONFIG, RenderConfig
from prune_tree.node import Node
from prune_tree.traversal import breadth_first

_LINE_BREAKS = re.compile(r"[\n\r]+")


def _node_text(node: Node[Any], config: RenderConfig) -> str:
    return _LINE_BREAKS.sub(config.newline_placeholder, str(node))


def render_ascii(root: Node[Any], config: RenderConfig | None = None) -> str:
    """Render the subtree under ``root`` as ASCII text.

    Args:
        root: The node drawn first, with no prefix.
        config: Rendering tokens. Defaults to :class:`RenderConfig` defaults.

    Returns:
        The rendering, without a trailing newline.

    Example:
        ```python
        from prune_tree import node

        print(render_ascii(node("root", node("a"), node("b"))))
        # root
        #    |
        #    |- a
        #    |
        #    |- b
        ```
    """
    if config is None:
        config = DEFAULT_RENDER_CONFIG
    parts: List[str] = [_node_text(root, config)]
    # (node, flags) where flags[i] tells whether the path node at level i + 1
    # still has later siblings
    stack: List[Tuple[Node[Any], Tuple[bool, ...]]] = []

    def push_children(node: Node[Any], more: Tuple[bool, ...]) -> None:
        kids = node.children
        last = len(kids) - 1
        stack.extend((kid, more + (idx < last,)) for idx, kid in reversed(list(enumerate(kids))))

    push_children(root, ())
    while stack:
        node, more = stack.pop()
        prefix = "".join(config.continuation if m else config.blank for m in more[:-1])
        prefix += config.continuation
        parts.append(f"\n{prefix}\n{prefix}{config.marker}{_node_text(node, config)}")
        push_children(node, more)
    return "".join(parts)


def build_dot(
    root: Node[Any], node_name_fn: Callable[[Node[Any]], str] | None = None, **kwargs: Any
) -> graphviz.Digraph:
    """Build a Graphviz Digraph for visualizing the subtree under ``root``.

    Args:
        root: The node to start from.
        node_name_fn: Optional function producing a node's label. If None,
            uses ``str(node.data)``.
        **kwargs: Additional keyword arguments passed to the
            ``graphviz.Digraph`` constructor (e.g., name, format, node_attr).

    Returns:
        A graphviz.Digraph with one vertex per node, numbered breadth-first,
        and one edge per parent/child link.

    Example:
        ```python
        dot = build_dot(tree.root, name="MyTree", format="png")
        print(dot.source)
        dot.render("/tmp/tree")  # requires the Graphviz binaries
        ```
    """
    if node_name_fn is None:
        def node_name_fn(n):
            return str(n.data)
    dot = graphviz.Digraph(**kwargs)
    ids: Dict[int, int] = {}  # ids[id(node)] -> vertex number
    for idx, node in enumerate(breadth_first(root)):
        ids[id(node)] = idx
        dot.node(f"N_{idx:03}", node_name_fn(node))
        if node is not root and node.parent is not None:
            dot.edge(f"N_{ids[id(node.parent)]:03}", f"N_{idx:03}")
    return dot
