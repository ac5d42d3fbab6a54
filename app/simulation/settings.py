"""
simulation/settings.py

Numerical constants used by the solver, grouped so callers can override them.
"""

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class SolverSettings:
    """Configuration for one solver instance."""

    # Added to every free node's diagonal so floating nodes stay solvable
    leakage_conductance: float = 1e-9
    # Pivots smaller than this mark the column as singular
    pivot_tolerance: float = 1e-10
    # Stiff-resistor stand-in for an open switch
    switch_open_resistance: float = 1e9
    diode_forward_resistance: float = 0.1
    diode_reverse_resistance: float = 1e7
    # Burn when power exceeds burn_factor * power rating
    burn_factor: float = 1.5
    # Lower bound applied to every passive resistance
    min_resistance: float = 1e-6

    @classmethod
    def from_dict(cls, data: dict) -> "SolverSettings":
        """
        Build settings from a mapping of overrides.

        Raises:
            ValueError: On unknown keys or non-positive values.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown solver settings: {', '.join(sorted(unknown))}")
        values = {key: float(value) for key, value in data.items()}
        for key, value in values.items():
            if not value > 0:
                raise ValueError(f"Solver setting '{key}' must be positive, got {value}")
        return cls(**values)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_SETTINGS = SolverSettings()
