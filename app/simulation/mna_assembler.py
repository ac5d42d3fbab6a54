"""
simulation/mna_assembler.py

Builds the modified nodal analysis system for one solve.

Unknown vector x = [v_0 .. v_{k-1}, i_0 .. i_{m-1}]: voltages of the k free
nodes followed by the branch currents of the m active batteries. Ground has
no row or column; its terms are dropped.
"""

import logging
from dataclasses import dataclass

import numpy as np

from .device_models import build_device_models
from .node_indexer import GROUND_INDEX
from .settings import DEFAULT_SETTINGS

logger = logging.getLogger(__name__)


@dataclass
class MNASystem:
    """Square system matrix @ x = rhs."""

    matrix: np.ndarray
    rhs: np.ndarray
    node_count: int
    source_count: int

    @classmethod
    def zeros(cls, node_count: int, source_count: int) -> "MNASystem":
        size = node_count + source_count
        return cls(
            matrix=np.zeros((size, size)),
            rhs=np.zeros(size),
            node_count=node_count,
            source_count=source_count,
        )

    @property
    def size(self) -> int:
        return self.node_count + self.source_count

    def add_conductance(self, n1: int, n2: int, g: float) -> None:
        """Conductance g between nodes n1 and n2."""
        if n1 != GROUND_INDEX:
            self.matrix[n1, n1] += g
        if n2 != GROUND_INDEX:
            self.matrix[n2, n2] += g
        if n1 != GROUND_INDEX and n2 != GROUND_INDEX:
            self.matrix[n1, n2] -= g
            self.matrix[n2, n1] -= g

    def add_voltage_source(self, row: int, n_neg: int, n_pos: int, voltage: float, resistance: float) -> None:
        """
        Source with branch unknown at `row`.

        The branch current flows from n_neg to n_pos inside the source, so it
        leaves n_neg and enters n_pos. Constraint row:
        V(n_pos) - V(n_neg) + I * resistance = voltage.
        """
        if n_neg != GROUND_INDEX:
            self.matrix[row, n_neg] -= 1.0
            self.matrix[n_neg, row] += 1.0
        if n_pos != GROUND_INDEX:
            self.matrix[row, n_pos] += 1.0
            self.matrix[n_pos, row] -= 1.0
        self.matrix[row, row] += resistance
        self.rhs[row] = voltage

    def add_leakage(self, g: float) -> None:
        """Tie every free node to ground through conductance g."""
        for i in range(self.node_count):
            self.matrix[i, i] += g


def assemble_system(components, topology, node_index, device_models=None, settings=DEFAULT_SETTINGS) -> MNASystem:
    """
    Stamp every non-burnt component into a fresh system.

    Args:
        components: Components in stored order.
        topology: Terminal equivalence classes.
        node_index: Matrix numbering from the node indexer.
        device_models: type tag -> DeviceModel table.
        settings: Solver constants (leakage conductance).
    """
    if device_models is None:
        device_models = build_device_models(settings)

    system = MNASystem.zeros(node_index.node_count, node_index.source_count)

    for comp in components:
        if comp.state.burnt:
            continue
        model = device_models.get(comp.component_type)
        if model is None:
            logger.debug("No model for %s (%r); treated as open", comp.component_id, comp.component_type)
            continue
        n1, n2 = node_index.terminal_indices(topology, comp)
        model.stamp(system, comp, n1, n2, node_index.source_index.get(comp.component_id))

    system.add_leakage(settings.leakage_conductance)
    return system
