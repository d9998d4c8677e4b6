"""Directory tree view."""

from nas_tools.view.tree import TreeOptions, render_tree

__all__ = ["TreeOptions", "render_tree"]
