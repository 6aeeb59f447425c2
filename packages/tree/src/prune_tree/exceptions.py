"""Exception hierarchy for prune_tree.

The tree itself is an in-memory structure whose traversal, search and metric
operations never fail because of tree content. Errors are raised only for
invalid arguments at the call site, such as a missing root or an attachment
that would introduce a cycle.

Example:
    ```python
    from prune_tree.exceptions import InvalidArgumentError, TreeError

    try:
        tree.search(lambda x: x > 3, traversal="sideways")
    except InvalidArgumentError as e:
        print(e.context)  # {'traversal': 'sideways', 'allowed': ['dfs', 'bfs']}
    ```
"""

from typing import Any, Dict


class TreeError(Exception):
    """Base exception for all prune_tree errors.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context
        details: Alternative to context (takes precedence if both are given)

    Example:
        ```python
        error = TreeError("Operation failed", context={"operation": "splice"})
        str(error)
        # 'Operation failed'
        error.context
        # {'operation': 'splice'}
        ```
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.context = details or context or {}
        self.details = self.context


class InvalidArgumentError(TreeError):
    """Raised when an operation receives an argument it cannot accept.

    Common scenarios include:
    - A required root that is missing
    - An unknown traversal name
    - Attaching a node beneath itself or one of its descendants
    - Passing something other than a node where a node is required

    Example:
        ```python
        raise InvalidArgumentError(
            "Cannot attach a node beneath its own descendant",
            context={"parent": "b", "child": "a"}
        )
        ```
    """

    pass


__all__ = [
    "InvalidArgumentError",
    "TreeError",
]
