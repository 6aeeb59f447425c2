"""Rendering configuration for the ASCII tree renderer."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

from prune_tree.exceptions import InvalidArgumentError


@dataclass
class RenderConfig:
    """Tokens used to draw a tree as ASCII text.

    Each non-root node is drawn on two lines: a guide line and a marker line,
    both prefixed with one segment per ancestor level. A segment is
    ``indent + guide`` while that ancestor level still has siblings to come,
    and blank padding of the same width otherwise.

    Attributes:
        indent: Padding placed before each guide character.
        guide: Character drawn to continue a branch down the page.
        marker: Text drawn between the guide and a node's text.
        newline_placeholder: Replacement for runs of line breaks inside a
            node's text, keeping one tree line per node.

    Example:
        ```python
        config = RenderConfig.from_dict({"newline_placeholder": " / "})
        print(tree.render(config))
        ```
    """

    indent: str = "   "
    guide: str = "|"
    marker: str = "- "
    newline_placeholder: str = "<newline>"

    @property
    def continuation(self) -> str:
        """Segment drawn for an ancestor level with siblings still to come."""
        return self.indent + self.guide

    @property
    def blank(self) -> str:
        """Segment drawn for an ancestor level whose siblings are exhausted."""
        return " " * len(self.continuation)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RenderConfig:
        """Create from dictionary.

        Args:
            data: Mapping of attribute names to values. Missing keys keep
                their defaults.

        Returns:
            A new RenderConfig.

        Raises:
            InvalidArgumentError: If ``data`` holds keys that are not
                RenderConfig attributes.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidArgumentError(
                f"Unknown render settings: {', '.join(unknown)}",
                context={"unknown": unknown, "allowed": sorted(known)},
            )
        return cls(**data)


DEFAULT_RENDER_CONFIG = RenderConfig()
