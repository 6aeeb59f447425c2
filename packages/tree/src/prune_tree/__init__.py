"""Generic ordered trees with traversal, metrics and structural algorithms.

The prune-tree package provides an in-memory tree whose nodes hold an
arbitrary payload and an ordered list of children, together with the
algorithms commonly needed to work with such trees.

## Modules

### Node - The data model
A Node holds a payload, its ordered children and a back-reference to its
parent, and answers position queries:
- Depth, local order (index among siblings) and global order (index among
  all nodes at the same depth)
- Siblings, ancestry, paths and common ancestors
- Attachment, pruning and splicing

### Tree - A handle on one root
A Tree scopes every operation to the subtree below one node:
- Lazy depth-first and breadth-first traversal, search and early-exit visits
- Leaves, depth slices, strands and groupings by depth or order
- Splice-filtering, subtree-pruning and per-level sorting
- Cloning, mapping and flat-mapping into independent trees
- Structural equality and hashing

### Builders
- `node(value, *children)` builds nested nodes in one expression
- `build_forest` / `build_tree` recover tree topology from a flat
  collection and a parent/child predicate

### Rendering
- `render_ascii` draws a tree as text for logs and test failures
- `build_dot` produces a Graphviz digraph

## Quick Examples

```python
from prune_tree import Tree, node

tree = Tree(node(1, node(2, node(5), node(5)), node(6, node(4), node(4)), node(2, node(3))))

tree.search(lambda x: x > 4)                   # 5 (depth-first)
tree.search(lambda x: x > 4, traversal="bfs")  # 6 (breadth-first)

doubled = tree.map(lambda x: x * 2)
tree.prune(lambda x: x == 6)
print(tree)
# 1
#    |
#    |- 2
#    |   |
#    |   |- 5
#    |   |
#    |   |- 5
#    |
#    |- 2
#        |
#        |- 3
```

## Installation

```bash
pip install prune-tree
```

For more detailed documentation, see the individual class and function docstrings.
"""

from prune_tree.builder import build_forest, build_tree, node
from prune_tree.config import RenderConfig
from prune_tree.exceptions import InvalidArgumentError, TreeError
from prune_tree.node import Node
from prune_tree.render import build_dot, render_ascii
from prune_tree.traversal import breadth_first, depth_first, traverse, walk
from prune_tree.tree import Tree

__version__ = "0.1.0"

__all__ = [
    "InvalidArgumentError",
    "Node",
    "RenderConfig",
    "Tree",
    "TreeError",
    "breadth_first",
    "build_dot",
    "build_forest",
    "build_tree",
    "depth_first",
    "node",
    "render_ascii",
    "traverse",
    "walk",
]
