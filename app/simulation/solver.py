"""
simulation/solver.py

One synchronous solve of the whole circuit:

    topology -> node indexing -> MNA assembly -> linear solve -> state update

The solver mutates component state in place and never raises for
degenerate circuits; the returned SolveReport describes what happened.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .device_models import build_device_models
from .linear_solver import solve_linear_system
from .mna_assembler import assemble_system
from .node_indexer import index_nodes
from .settings import DEFAULT_SETTINGS, SolverSettings
from .state_updater import update_states, zero_states
from .topology import build_topology

logger = logging.getLogger(__name__)


@dataclass
class SolveReport:
    """Diagnostics from one solve."""

    node_count: int = 0
    source_count: int = 0
    trivial: bool = False
    singular_columns: list[int] = field(default_factory=list)
    skipped_wires: list = field(default_factory=list)
    newly_burnt: list[str] = field(default_factory=list)
    nodes: list = field(default_factory=list)
    # node label -> voltage; ground is "0"
    node_voltages: dict[str, float] = field(default_factory=dict)

    @property
    def size(self) -> int:
        return self.node_count + self.source_count


class CircuitSolver:
    """
    Runs the solve pipeline with a fixed set of numerical settings.

    Args:
        settings: Solver constants; defaults to DEFAULT_SETTINGS.
    """

    def __init__(self, settings: Optional[SolverSettings] = None):
        self.settings = settings or DEFAULT_SETTINGS
        self.device_models = build_device_models(self.settings)

    def solve(self, components, wires) -> SolveReport:
        """
        Solve the circuit formed by the given components and wires.

        Args:
            components: Components in stored order (ground selection and
                node numbering depend on it).
            wires: Wires joining component terminals.
        """
        components = list(components)
        report = SolveReport()
        if not components:
            return report

        topology = build_topology(components, wires)
        report.skipped_wires = list(topology.skipped_wires)

        node_index = index_nodes(components, topology)
        report.nodes = node_index.nodes
        report.node_count = node_index.node_count
        report.source_count = node_index.source_count

        if node_index.is_trivial():
            logger.debug("Single-node circuit; zeroing %d component state(s)", len(components))
            zero_states(components)
            report.trivial = True
            report.node_voltages = {"0": 0.0}
            return report

        system = assemble_system(components, topology, node_index, self.device_models, self.settings)
        solution, singular = solve_linear_system(system.matrix, system.rhs, self.settings.pivot_tolerance)
        report.singular_columns = singular

        report.newly_burnt = update_states(
            components, topology, node_index, solution, self.device_models, self.settings
        )

        for node in node_index.nodes:
            if node.is_ground:
                report.node_voltages[node.get_label()] = 0.0
            else:
                report.node_voltages[node.get_label()] = float(solution[node.matrix_index])

        return report

    def solve_model(self, model) -> SolveReport:
        """Solve a CircuitModel in place."""
        return self.solve(model.component_list(), model.wires)


def solve_circuit(model, settings: Optional[SolverSettings] = None) -> SolveReport:
    """Convenience wrapper: one solve of a CircuitModel."""
    return CircuitSolver(settings).solve_model(model)
