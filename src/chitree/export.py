# -*- coding: utf-8 -*-
"""
chitree.export
==============

Human readable views of a tree: an indented text rendering, a helper that
writes it into a reporting sink, and an optional Graphviz export.

Leaves that received no training rows are left out of every view, together
with the branch line that would have led to them.
"""

from __future__ import annotations

from collections.abc import Callable

from .tree import DecisionTree, TreeNode

ReportSink = Callable[[str], None]


def _is_hidden(node: TreeNode) -> bool:
    return node.is_leaf and node.n_samples == 0


def _render_node(node: TreeNode, lines: list[str], level: int) -> None:
    pad = " " * level
    if node.is_leaf:
        lines.append(f"{pad}Leaf. Returning value: {node.predicted_label}")
        return
    for value, child in enumerate(node.children):
        if _is_hidden(child):
            continue
        lines.append(f"{pad}If attribute {node.split_attribute} = {value}")
        if not child.is_leaf:
            lines.append(f"{pad}Returning value: {child.predicted_label}")
        _render_node(child, lines, level + 1)


def render(tree: DecisionTree) -> str:
    """
    Indented text rendering of ``tree``.

    The first two lines are ``Root`` and the root's label.  Every branch of
    an internal node gets an ``If attribute <a> = <v>`` line (plus the
    child's label when the child is itself internal) and the child's lines
    one space deeper.  Leaves print ``Leaf. Returning value: <label>``.
    """
    lines = ["Root", f"Returning value: {tree.root.predicted_label}"]
    _render_node(tree.root, lines, 1)
    return "\n".join(lines)


def print_tree(tree: DecisionTree, sink: ReportSink = print) -> None:
    """Write :func:`render` output into ``sink`` one line at a time."""
    for line in render(tree).splitlines():
        sink(line)


# -----------------------------------------------------------------------------
# Graphviz
# -----------------------------------------------------------------------------
def _add_graph_nodes(dot, node: TreeNode, name: str) -> None:
    if node.is_leaf:
        n0, n1 = node.data.class_counts()
        dot.node(name, f"class={node.predicted_label}\n[{n0}, {n1}]",
                 shape="box", style="filled", color="lightgrey")
        return
    dot.node(name, f"X[{node.split_attribute}]\nclass={node.predicted_label}",
             shape="ellipse", style="filled", color="lightblue")
    for value, child in enumerate(node.children):
        if _is_hidden(child):
            continue
        child_name = f"{name}_{value}"
        _add_graph_nodes(dot, child, child_name)
        dot.edge(name, child_name, label=f"= {value}")


def export_graphviz(tree: DecisionTree, filename: str | None = None,
                    format: str = "dot") -> str:
    """
    Export the tree structure in Graphviz format.

    Parameters
    ----------
    tree : DecisionTree
        Tree to draw.
    filename : str or None, default=None
        Basename of the output file (the extension is determined by
        ``format``).  If None, the DOT source is returned and nothing is
        written.
    format : str, default="dot"
        Graphviz output format.  ``'dot'`` writes the DOT source directly and
        does not need the external ``dot`` binary.

    Returns
    -------
    str
        Path to the written file, or the DOT source if ``filename`` is None.
    """
    try:
        import graphviz
    except ImportError:
        raise RuntimeError("Graphviz is required for export_graphviz but not installed.")
    dot = graphviz.Digraph(format=format)
    _add_graph_nodes(dot, tree.root, "n")

    if filename is None:
        return dot.source
    if format.lower() == "dot":
        path = f"{filename}.dot"
        dot.save(path)
        return path
    try:
        dot.render(filename, cleanup=True)
        return f"{filename}.{format}"
    except graphviz.ExecutableNotFound:
        # no dot binary: keep the source
        fallback_path = f"{filename}.dot"
        dot.save(fallback_path)
        return fallback_path
