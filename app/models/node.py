"""
NodeData - Pure Python data model for electrical nodes.

An electrical node is a set of component terminals joined by wires (they
share the same voltage). Nodes are rebuilt from scratch on every solve and
are never persisted.
"""

from dataclasses import dataclass, field
from typing import Optional


def _generate_label(index: int) -> str:
    """
    Generate label like nodeA, ..., nodeZ, nodeAA, ..., nodeZZ, nodeAAA...

    Args:
        index: Zero-based index for the node.

    Returns:
        A string label like "nodeA", "nodeB", etc.
    """
    letters = ""
    index += 1
    while index > 0:
        index, rem = divmod(index - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return "node" + letters


@dataclass
class NodeData:
    """
    One equivalence class of terminals produced by the node indexer.
    """

    # Canonical union-find root for this class
    root: int

    # (component_id, terminal_index) tuples in this node, in discovery order
    terminals: list[tuple[str, int]] = field(default_factory=list)

    is_ground: bool = False

    # Row/column in the MNA matrix; None for ground
    matrix_index: Optional[int] = None

    def get_label(self) -> str:
        """Return "0" for ground, otherwise nodeA, nodeB, ... by matrix index."""
        if self.is_ground or self.matrix_index is None:
            return "0"
        return _generate_label(self.matrix_index)

    def add_terminal(self, component_id: str, terminal_index: int) -> None:
        """Add a terminal to this node."""
        key = (component_id, terminal_index)
        if key not in self.terminals:
            self.terminals.append(key)

    def __repr__(self) -> str:
        return f"NodeData({self.get_label()}, terminals={len(self.terminals)})"
