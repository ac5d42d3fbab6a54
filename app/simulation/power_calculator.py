"""
simulation/power_calculator.py

Calculates power for each component from solved component state.
"""

import logging

logger = logging.getLogger(__name__)

_PASSIVE_TYPES = ("resistor", "light", "fan", "switch", "diode")


def calculate_power(components):
    """Calculate power for each component.

    Args:
        components: iterable of ComponentData that have been solved

    Returns:
        dict mapping component_id to power in watts (float).
        Positive = dissipating, negative = supplying.
        Components of unknown type are omitted.
    """
    power = {}
    for comp in components:
        cid = comp.component_id
        ctype = comp.component_type

        if comp.state.burnt:
            power[cid] = 0.0
        elif ctype == "battery":
            # Net of internal loss and the EMF's output
            power[cid] = -source_power(comp)
        elif ctype in _PASSIVE_TYPES:
            power[cid] = comp.state.power
        else:
            logger.debug("No power model for %s (%r)", cid, ctype)

    return power


def source_power(battery):
    """Power a battery delivers to the external circuit (terminal voltage x current)."""
    if battery.state.burnt:
        return 0.0
    return battery.state.voltage_drop * battery.state.current


def total_power(power_dict):
    """Sum of all power values. Should net close to 0 for a solved circuit."""
    return sum(power_dict.values())
