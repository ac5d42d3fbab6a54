"""
simulation/node_indexer.py

Turns terminal equivalence classes into matrix rows: selects the ground
node, numbers the remaining nodes densely and reserves one extra unknown
per active voltage source.
"""

from dataclasses import dataclass, field
from typing import Optional

from models.component import NEGATIVE_TERMINAL
from models.node import NodeData

GROUND_INDEX = -1


@dataclass
class NodeIndex:
    """Root-to-index mapping for one solve."""

    nodes: list[NodeData] = field(default_factory=list)
    root_to_index: dict[int, int] = field(default_factory=dict)
    ground_root: Optional[int] = None
    # component_id -> row of its branch-current unknown
    source_index: dict[str, int] = field(default_factory=dict)

    @property
    def node_count(self) -> int:
        """Number of free (non-ground) nodes."""
        return sum(1 for node in self.nodes if not node.is_ground)

    @property
    def source_count(self) -> int:
        return len(self.source_index)

    @property
    def size(self) -> int:
        """Dimension of the linear system."""
        return self.node_count + self.source_count

    def is_trivial(self) -> bool:
        """True when there is nothing to solve (empty graph or a single node)."""
        return self.node_count == 0

    def index_of(self, topology, component_id: str, terminal_index: int) -> int:
        """Matrix index of a terminal, GROUND_INDEX for ground."""
        return self.root_to_index[topology.find(component_id, terminal_index)]

    def terminal_indices(self, topology, component) -> tuple[int, int]:
        cid = component.component_id
        return self.index_of(topology, cid, 0), self.index_of(topology, cid, 1)


def select_ground_root(components, topology) -> Optional[int]:
    """
    Pick the reference node.

    The negative terminal of the first battery wins; without a battery the
    first root met in component order is used.
    """
    for comp in components:
        if comp.component_type == "battery":
            return topology.find(comp.component_id, NEGATIVE_TERMINAL)
    for comp in components:
        for comp_id, term in comp.get_terminals():
            return topology.find(comp_id, term)
    return None


def index_nodes(components, topology) -> NodeIndex:
    """
    Assign matrix indices to every node in first-encountered order.

    Args:
        components: Components in stored order.
        topology: The Topology built from the same components.
    """
    index = NodeIndex(ground_root=select_ground_root(components, topology))
    by_root: dict[int, NodeData] = {}
    next_index = 0

    for comp in components:
        for comp_id, term in comp.get_terminals():
            root = topology.find(comp_id, term)
            node = by_root.get(root)
            if node is None:
                if root == index.ground_root:
                    node = NodeData(root=root, is_ground=True)
                    index.root_to_index[root] = GROUND_INDEX
                else:
                    node = NodeData(root=root, matrix_index=next_index)
                    index.root_to_index[root] = next_index
                    next_index += 1
                by_root[root] = node
                index.nodes.append(node)
            node.add_terminal(comp_id, term)

    # Branch-current unknowns follow the node voltages
    for comp in components:
        if comp.component_type == "battery" and not comp.state.burnt:
            index.source_index[comp.component_id] = next_index + len(index.source_index)

    return index
