"""
ComponentData - Pure Python data model for circuit components.

This module contains no UI dependencies. Every component is a two-terminal
element identified by a type tag ('battery', 'resistor', 'light', 'switch',
'fan', 'diode') and carries a fixed, per-type property record plus the
mutable electrical state written by the solver.
"""

import logging
import math
from dataclasses import asdict, dataclass, field, fields
from typing import Optional, Union

from .format_utils import parse_value

logger = logging.getLogger(__name__)

# Component type tags (canonical, as used in the circuit data contract)
COMPONENT_TYPES = [
    "battery",
    "resistor",
    "light",
    "switch",
    "fan",
    "diode",
]

# Prefix used when generating component ids (B1, R1, L1, ...)
COMPONENT_SYMBOLS = {
    "battery": "B",
    "resistor": "R",
    "light": "L",
    "switch": "S",
    "fan": "F",
    "diode": "D",
}

DISPLAY_NAMES = {
    "battery": "Battery",
    "resistor": "Resistor",
    "light": "Light",
    "switch": "Switch",
    "fan": "Fan",
    "diode": "Diode",
}

# Types that can burn out when overloaded
OVERLOADABLE_TYPES = frozenset({"resistor", "light", "fan"})

TERMINAL_COUNT = 2

# Battery polarity is positional: terminal 0 is the negative pole,
# terminal 1 the positive pole.
NEGATIVE_TERMINAL = 0
POSITIVE_TERMINAL = 1

# Contract keys (camelCase) -> dataclass field names
_PROPERTY_KEYS = {
    "internalResistance": "internal_resistance",
    "powerRating": "power_rating",
    "forwardVoltage": "forward_voltage",
}
_FIELD_KEYS = {v: k for k, v in _PROPERTY_KEYS.items()}


@dataclass
class BatteryProperties:
    voltage: float = 9.0
    internal_resistance: float = 1.5


@dataclass
class LoadProperties:
    """Resistive load shared by resistors, lights and fans."""

    resistance: float = 100.0
    power_rating: float = 0.5


@dataclass
class SwitchProperties:
    closed: bool = False
    resistance: float = 0.01  # used when closed


@dataclass
class DiodeProperties:
    forward_voltage: float = 0.7


ComponentProperties = Union[BatteryProperties, LoadProperties, SwitchProperties, DiodeProperties]

PROPERTY_CLASSES = {
    "battery": BatteryProperties,
    "resistor": LoadProperties,
    "light": LoadProperties,
    "switch": SwitchProperties,
    "fan": LoadProperties,
    "diode": DiodeProperties,
}

# Per-type defaults that differ from the dataclass defaults
DEFAULT_VALUES = {
    "battery": {},
    "resistor": {"resistance": 100.0, "power_rating": 0.5},
    "light": {"resistance": 50.0, "power_rating": 1.0},
    "switch": {},
    "fan": {"resistance": 20.0, "power_rating": 2.0},
    "diode": {},
}


def property_field_name(key: str) -> str:
    """Map a contract property key (e.g. 'powerRating') to its field name."""
    return _PROPERTY_KEYS.get(key, key)


def coerce_property_value(properties, name: str, value):
    """
    Convert a raw property value to the type declared on the properties record.

    Numbers may be given as strings with SI prefixes ("1k", "10m").

    Raises:
        ValueError: If the property does not exist or the value cannot be converted.
    """
    declared = {f.name: f for f in fields(properties)}
    if name not in declared:
        raise ValueError(f"{type(properties).__name__} has no property '{name}'")

    if declared[name].type in (bool, "bool"):
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in ("true", "1", "closed", "on"):
                return True
            if lowered in ("false", "0", "open", "off"):
                return False
            raise ValueError(f"Invalid boolean value for '{name}': {value!r}")
        return bool(value)
    return parse_value(value)


def make_properties(component_type: str, values: Optional[dict] = None) -> Optional[ComponentProperties]:
    """
    Build the property record for a component type.

    Keys in ``values`` may use either contract (camelCase) or field names.
    Returns None for an unrecognized type; such components take part in the
    topology but contribute nothing electrically.
    """
    prop_cls = PROPERTY_CLASSES.get(component_type)
    if prop_cls is None:
        logger.warning("Unknown component type %r; it will be treated as an open circuit", component_type)
        return None

    properties = prop_cls(**DEFAULT_VALUES.get(component_type, {}))
    known = {f.name for f in fields(properties)}
    for key, value in (values or {}).items():
        name = property_field_name(key)
        if name not in known:
            # e.g. display-only keys such as maxLumens in older files
            logger.debug("Ignoring property %r for %s", key, component_type)
            continue
        setattr(properties, name, coerce_property_value(properties, name, value))
    return properties


@dataclass
class ComponentState:
    """Electrical state written by the solver on every step."""

    current: float = 0.0
    voltage_drop: float = 0.0
    power: float = 0.0
    burnt: bool = False
    # Matrix indices of terminal 0/1 from the last solve (-1 is ground)
    node_indices: tuple[Optional[int], Optional[int]] = (None, None)

    def to_dict(self) -> dict:
        return {
            "current": self.current,
            "voltageDrop": self.voltage_drop,
            "power": self.power,
            "burnt": self.burnt,
            "nodeIndices": list(self.node_indices),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ComponentState":
        node_indices = data.get("nodeIndices") or [None, None]
        return cls(
            current=float(data.get("current", 0.0)),
            voltage_drop=float(data.get("voltageDrop", 0.0)),
            power=float(data.get("power", 0.0)),
            burnt=bool(data.get("burnt", False)),
            node_indices=(node_indices[0], node_indices[1]),
        )


@dataclass
class ComponentData:
    """
    Pure Python data class representing a two-terminal circuit component.

    Position and rotation belong to the persisted representation only;
    the solver reads the id, type tag and properties.
    """

    component_id: str
    component_type: str
    properties: Optional[ComponentProperties] = None
    state: ComponentState = field(default_factory=ComponentState)
    position: tuple[float, float] = (0.0, 0.0)
    rotation: int = 0  # quarter turns: 0, 1, 2, 3

    def __post_init__(self):
        if self.properties is None and self.component_type in PROPERTY_CLASSES:
            self.properties = make_properties(self.component_type)
        elif isinstance(self.properties, dict):
            self.properties = make_properties(self.component_type, self.properties)

        self.check_invariants()

    def check_invariants(self) -> None:
        """
        Raise ValueError if the component violates its type's invariants.

        Only batteries carry invariants; other types accept any values.
        """
        if self.component_type == "battery":
            self._check_battery()

    def _check_battery(self) -> None:
        """Enforce the battery invariants relied on by ground selection and stamping."""
        props = self.properties
        if not isinstance(props, BatteryProperties):
            raise ValueError(f"Battery {self.component_id} requires BatteryProperties, got {type(props).__name__}")
        if not math.isfinite(props.voltage):
            raise ValueError(f"Battery {self.component_id} voltage must be finite")
        if not (props.internal_resistance >= 0):
            raise ValueError(f"Battery {self.component_id} internal resistance must be non-negative")

    def get_terminal_count(self) -> int:
        """Return number of terminals (always two)."""
        return TERMINAL_COUNT

    def get_terminals(self) -> list[tuple[str, int]]:
        """Return the (component_id, terminal_index) keys of both terminals."""
        return [(self.component_id, i) for i in range(self.get_terminal_count())]

    def get_display_name(self) -> str:
        return DISPLAY_NAMES.get(self.component_type, self.component_type)

    def repair(self) -> None:
        """Return a burnt component to service."""
        self.state.burnt = False
        self.state.power = 0.0

    def properties_to_dict(self) -> dict:
        if self.properties is None:
            return {}
        return {_FIELD_KEYS.get(k, k): v for k, v in asdict(self.properties).items()}

    def to_dict(self) -> dict:
        """Serialize component to the circuit data contract."""
        return {
            "id": self.component_id,
            "type": self.component_type,
            "pos": {"x": self.position[0], "y": self.position[1]},
            "rotation": self.rotation,
            "properties": self.properties_to_dict(),
            "state": self.state.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ComponentData":
        """
        Deserialize component from the circuit data contract.

        Accepts the legacy layout with top-level 'x'/'y' coordinates.
        """
        if "pos" in data:
            position = (data["pos"]["x"], data["pos"]["y"])
        else:
            position = (data.get("x", 0.0), data.get("y", 0.0))

        component_type = data["type"]
        component = cls(
            component_id=data["id"],
            component_type=component_type,
            properties=make_properties(component_type, data.get("properties")),
            position=position,
            rotation=data.get("rotation", 0),
        )
        if "state" in data:
            component.state = ComponentState.from_dict(data["state"])
        return component

    def __repr__(self) -> str:
        return (
            f"ComponentData(id={self.component_id!r}, type={self.component_type!r}, "
            f"props={self.properties!r}, burnt={self.state.burnt})"
        )
