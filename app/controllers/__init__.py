"""
Controllers for the circuit lab.

This package contains UI-free controller classes that orchestrate
operations between models and views using an observer pattern.
"""

from .circuit_controller import CircuitController, counter_id_generator
from .simulation_controller import SimulationController, SimulationResult

__all__ = [
    "CircuitController",
    "SimulationController",
    "SimulationResult",
    "counter_id_generator",
]
