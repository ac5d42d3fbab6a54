"""
simulation/state_updater.py

Maps a solution vector back onto component state and applies the
overload transition.
"""

import logging

from .device_models import build_device_models
from .node_indexer import GROUND_INDEX
from .settings import DEFAULT_SETTINGS

logger = logging.getLogger(__name__)


def node_voltage(solution, index: int) -> float:
    """Voltage of a node; ground reads 0 V."""
    if index == GROUND_INDEX:
        return 0.0
    return float(solution[index])


def update_states(components, topology, node_index, solution, device_models=None, settings=DEFAULT_SETTINGS) -> list[str]:
    """
    Write current, voltage drop, power and node indices into every component.

    Burnt components keep their last voltage drop and carry no current.
    Types without a model only report the voltage across their terminals.

    Returns:
        Ids of components that burnt out in this update, in stored order.
    """
    if device_models is None:
        device_models = build_device_models(settings)

    newly_burnt = []
    for comp in components:
        state = comp.state
        if state.burnt:
            state.current = 0.0
            state.power = 0.0
            continue

        n1, n2 = node_index.terminal_indices(topology, comp)
        state.node_indices = (n1, n2)
        v1 = node_voltage(solution, n1)
        v2 = node_voltage(solution, n2)

        model = device_models.get(comp.component_type)
        if model is None:
            state.current = 0.0
            state.power = 0.0
            state.voltage_drop = v2 - v1
            continue

        branch = node_index.source_index.get(comp.component_id)
        branch_current = float(solution[branch]) if branch is not None else None
        if model.update(comp, v1, v2, branch_current):
            newly_burnt.append(comp.component_id)

    return newly_burnt


def zero_states(components) -> None:
    """Single-node circuit: nothing can flow."""
    for comp in components:
        state = comp.state
        state.current = 0.0
        state.voltage_drop = 0.0
        state.power = 0.0
        if not state.burnt:
            state.node_indices = (GROUND_INDEX, GROUND_INDEX)
