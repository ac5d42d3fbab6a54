"""
Pure Python data models for the circuit lab.

This package contains UI-free data classes that represent circuit elements.
"""

from .circuit import CircuitModel, validate_circuit_data
from .component import (
    COMPONENT_SYMBOLS,
    COMPONENT_TYPES,
    DEFAULT_VALUES,
    NEGATIVE_TERMINAL,
    OVERLOADABLE_TYPES,
    POSITIVE_TERMINAL,
    BatteryProperties,
    ComponentData,
    ComponentState,
    DiodeProperties,
    LoadProperties,
    SwitchProperties,
)
from .node import NodeData
from .wire import WireData

__all__ = [
    "CircuitModel",
    "ComponentData",
    "ComponentState",
    "COMPONENT_TYPES",
    "COMPONENT_SYMBOLS",
    "DEFAULT_VALUES",
    "OVERLOADABLE_TYPES",
    "NEGATIVE_TERMINAL",
    "POSITIVE_TERMINAL",
    "BatteryProperties",
    "LoadProperties",
    "SwitchProperties",
    "DiodeProperties",
    "WireData",
    "NodeData",
    "validate_circuit_data",
]
