"""
simulation/device_models.py

Per-type electrical models. Each model knows how to stamp its component
into an MNA system and how to turn a solution back into component state.
The assembler and the state updater look models up by type tag; a type
without a model contributes nothing.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from models.component import OVERLOADABLE_TYPES

from .settings import DEFAULT_SETTINGS, SolverSettings

logger = logging.getLogger(__name__)


class DeviceModel(ABC):
    """Stamp/update pair for one component type."""

    def __init__(self, settings: SolverSettings = DEFAULT_SETTINGS):
        self.settings = settings

    @abstractmethod
    def stamp(self, system, component, n1: int, n2: int, branch: Optional[int] = None) -> None:
        """Add this component's contribution to the system."""

    @abstractmethod
    def update(self, component, v1: float, v2: float, branch_current: Optional[float] = None) -> bool:
        """
        Write current, voltage drop and power from the solved node voltages.

        Returns:
            True if the component burnt out during this update.
        """


class BatteryModel(DeviceModel):
    """Ideal voltage source in series with its internal resistance."""

    def stamp(self, system, component, n1, n2, branch=None):
        if branch is None:
            return
        props = component.properties
        system.add_voltage_source(branch, n1, n2, props.voltage, props.internal_resistance)

    def update(self, component, v1, v2, branch_current=None):
        state = component.state
        current = float(branch_current or 0.0)
        state.current = current
        state.voltage_drop = v2 - v1
        # Internal dissipation only
        state.power = current * current * component.properties.internal_resistance
        return False


class PassiveModel(DeviceModel):
    """Two-terminal linear resistance; subclasses choose the resistance."""

    @abstractmethod
    def resistance(self, component) -> float:
        """Resistance used for both stamping and state update."""

    def effective_resistance(self, component) -> float:
        """Resistance clamped to the configured minimum."""
        r = self.resistance(component)
        if r < self.settings.min_resistance:
            return self.settings.min_resistance
        return r

    def stamp(self, system, component, n1, n2, branch=None):
        system.add_conductance(n1, n2, 1.0 / self.effective_resistance(component))

    def update(self, component, v1, v2, branch_current=None):
        state = component.state
        r = self.effective_resistance(component)
        v = v2 - v1
        current = v / r
        state.current = current
        state.voltage_drop = v
        state.power = current * current * r
        return False


class ResistiveLoadModel(PassiveModel):
    """Resistor, light or fan: fixed resistance with an overload limit."""

    def resistance(self, component):
        return component.properties.resistance

    def update(self, component, v1, v2, branch_current=None):
        super().update(component, v1, v2, branch_current)
        state = component.state
        limit = component.properties.power_rating * self.settings.burn_factor
        if state.power > limit:
            state.burnt = True
            logger.info(
                "%s burnt out: %.4g W exceeds %.4g W limit",
                component.component_id, state.power, limit,
            )
            return True
        return False


class SwitchModel(PassiveModel):
    """Ideal switch approximated by a stiff linear resistor."""

    def resistance(self, component):
        props = component.properties
        if props.closed:
            return props.resistance
        return self.settings.switch_open_resistance


class DiodeModel(PassiveModel):
    """
    Piecewise-linear diode driven by the previous solve.

    The conducting state is decided from the voltage drop stored by the last
    update, so the diode settles over successive frames rather than within
    one solve, and can oscillate near the threshold.
    """

    def resistance(self, component):
        if self.is_conducting(component):
            return self.settings.diode_forward_resistance
        return self.settings.diode_reverse_resistance

    def is_conducting(self, component) -> bool:
        return component.state.voltage_drop > component.properties.forward_voltage


def build_device_models(settings: SolverSettings = DEFAULT_SETTINGS) -> dict[str, DeviceModel]:
    """Return the type-tag -> model table for the given settings."""
    models = {
        "battery": BatteryModel(settings),
        "switch": SwitchModel(settings),
        "diode": DiodeModel(settings),
    }
    load = ResistiveLoadModel(settings)
    for component_type in OVERLOADABLE_TYPES:
        models[component_type] = load
    return models
