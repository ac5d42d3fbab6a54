from .circuit_validator import validate_circuit
from .power_calculator import calculate_power, source_power, total_power
from .settings import DEFAULT_SETTINGS, SolverSettings
from .solver import CircuitSolver, SolveReport, solve_circuit

__all__ = [
    'CircuitSolver',
    'SolveReport',
    'SolverSettings',
    'DEFAULT_SETTINGS',
    'solve_circuit',
    'validate_circuit',
    'calculate_power',
    'source_power',
    'total_power',
]
