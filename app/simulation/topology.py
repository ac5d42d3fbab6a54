"""
simulation/topology.py

Discovers which terminals are electrically identical. Every terminal of
every component starts in its own set; each wire unions the two terminals
it joins. Path compression plus union by size keeps find() near constant.
"""

import logging

logger = logging.getLogger(__name__)

TerminalKey = tuple[str, int]


class DisjointSet:
    """Union-find over the integers 0..n-1."""

    def __init__(self):
        self.parent: list[int] = []
        self.size: list[int] = []

    def __len__(self) -> int:
        return len(self.parent)

    def make_set(self) -> int:
        element = len(self.parent)
        self.parent.append(element)
        self.size.append(1)
        return element

    def find(self, element: int) -> int:
        root = element
        while self.parent[root] != root:
            root = self.parent[root]
        # Path compression
        while self.parent[element] != root:
            self.parent[element], element = root, self.parent[element]
        return root

    def union(self, a: int, b: int) -> int:
        """Merge the sets holding a and b; return the surviving root."""
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return root_a
        if self.size[root_a] < self.size[root_b]:
            root_a, root_b = root_b, root_a
        self.parent[root_b] = root_a
        self.size[root_a] += self.size[root_b]
        return root_a


class Topology:
    """
    Terminal equivalence classes for one solve.

    Args:
        components: Components in stored order.
        wires: Wires to merge terminals along.
    """

    def __init__(self, components, wires):
        self._sets = DisjointSet()
        self._terminal_ids: dict[TerminalKey, int] = {}

        for comp in components:
            for key in comp.get_terminals():
                self._terminal_ids[key] = self._sets.make_set()

        self.skipped_wires: list = []
        for wire in wires:
            start_key, end_key = wire.get_terminals()
            start = self._terminal_ids.get(start_key)
            end = self._terminal_ids.get(end_key)
            if start is None or end is None:
                logger.debug("Skipping wire %r: endpoint is not a known terminal", wire)
                self.skipped_wires.append(wire)
                continue
            self._sets.union(start, end)

    def __contains__(self, key: TerminalKey) -> bool:
        return key in self._terminal_ids

    @property
    def terminal_count(self) -> int:
        return len(self._terminal_ids)

    def find(self, component_id: str, terminal_index: int) -> int:
        """
        Return the canonical root of a terminal.

        Raises:
            KeyError: If the terminal is not part of this topology.
        """
        return self._sets.find(self._terminal_ids[(component_id, terminal_index)])


def build_topology(components, wires) -> Topology:
    """Build the terminal equivalence classes for the given graph."""
    return Topology(components, wires)
