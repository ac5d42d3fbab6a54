"""
SimulationController - Orchestrates the simulation pipeline.

This module contains no UI dependencies. It runs one solve per external
tick, collects per-step diagnostics, and reports results to observers of
the circuit controller.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Optional

from models.circuit import CircuitModel
from models.format_utils import format_value
from simulation.settings import SolverSettings

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Result of one simulation step."""

    success: bool
    report: object = None
    newly_burnt: list[str] = field(default_factory=list)
    power: dict[str, float] = field(default_factory=dict)
    total_power: float = 0.0
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    error: str = ""


class SimulationController:
    """
    Controller for the simulation pipeline.

    Coordinates: solve -> power summary -> notify

    Args:
        model: The circuit to simulate; taken from circuit_ctrl if omitted.
        circuit_ctrl: Receives simulation events for its observers and
            provides the lock that serializes edits against solves.
        settings: Solver constants.
    """

    def __init__(self, model: Optional[CircuitModel] = None, circuit_ctrl=None,
                 settings: Optional[SolverSettings] = None):
        if model is None:
            model = circuit_ctrl.model if circuit_ctrl is not None else CircuitModel()
        self.model = model
        self.circuit_ctrl = circuit_ctrl
        self.lock = circuit_ctrl.lock if circuit_ctrl is not None else threading.RLock()
        self.step_count = 0
        self.last_result: Optional[SimulationResult] = None
        self._settings = settings
        self._solver = None

    @property
    def solver(self):
        """Lazy initialization of CircuitSolver."""
        if self._solver is None:
            from simulation import CircuitSolver

            self._solver = CircuitSolver(self._settings)
        return self._solver

    def _notify(self, event: str, data) -> None:
        if self.circuit_ctrl:
            self.circuit_ctrl._notify(event, data)

    def validate_circuit(self) -> SimulationResult:
        """
        Check the circuit for problems the solver will silently work around.

        Validation is advisory; step() runs regardless of the outcome.
        """
        from simulation import validate_circuit

        with self.lock:
            is_valid, errors, warnings = validate_circuit(
                self.model.components,
                list(self.model.wires),
            )
        return SimulationResult(
            success=is_valid,
            errors=errors,
            warnings=warnings,
            error="; ".join(errors) if errors else "",
        )

    def step(self) -> SimulationResult:
        """
        Run one solve under the lock and summarize it.

        Returns:
            SimulationResult with the solve report, the ids of components
            that burnt out in this step, and a per-component power summary.
        """
        from simulation import calculate_power, total_power

        self._notify("simulation_started", None)

        with self.lock:
            report = self.solver.solve_model(self.model)
            power = calculate_power(self.model.component_list())
            self.step_count += 1
            burnt_components = [self.model.components[cid] for cid in report.newly_burnt]

        result = SimulationResult(
            success=True,
            report=report,
            newly_burnt=list(report.newly_burnt),
            power=power,
            total_power=total_power(power),
        )
        self.last_result = result

        for component in burnt_components:
            self._notify("component_burnt", component)
        self._notify("simulation_completed", result)
        return result

    def run(self, steps: int, progress_callback=None) -> list[SimulationResult]:
        """
        Run several consecutive steps, as a render loop would.

        Args:
            steps: Number of ticks to run.
            progress_callback: optional callable(step_index, total_steps) -> bool.
                               Return False to stop early.

        Returns:
            The result of every step that ran, in order.
        """
        results = []
        for i in range(steps):
            if progress_callback and not progress_callback(i, steps):
                break
            results.append(self.step())
        return results

    def describe_results(self) -> str:
        """Human-readable summary of the current component states."""
        lines = []
        with self.lock:
            for comp in self.model.component_list():
                state = comp.state
                if state.burnt:
                    lines.append(f"{comp.component_id} ({comp.get_display_name()}): BURNT")
                    continue
                lines.append(
                    f"{comp.component_id} ({comp.get_display_name()}): "
                    f"{format_value(state.current, 'A')}, "
                    f"{format_value(state.voltage_drop, 'V')}, "
                    f"{format_value(state.power, 'W')}"
                )
        if self.last_result is not None:
            lines.append(f"Net power: {format_value(self.last_result.total_power, 'W')}")
        return "\n".join(lines)
