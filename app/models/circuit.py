"""
CircuitModel - Central data store for circuit state.

This module contains no UI dependencies. It holds the component/wire graph
that the solver reads and mutates. The graph is an ordinary object passed to
whoever needs it; there is no process-wide instance.
"""

from dataclasses import dataclass, field

from .component import TERMINAL_COUNT, ComponentData
from .wire import WireData

_WIRE_KEY_SPELLINGS = (
    ("startComponentId", "startCompId"),
    ("startTerminal", "startTermId"),
    ("endComponentId", "endCompId"),
    ("endTerminal", "endTermId"),
)


def is_terminal_index(term) -> bool:
    """True for an int terminal index in range; strings and bools are rejected."""
    return isinstance(term, int) and not isinstance(term, bool) and 0 <= term < TERMINAL_COUNT


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_position(comp_id, comp) -> None:
    if "pos" in comp:
        pos = comp["pos"]
        if not isinstance(pos, dict):
            raise ValueError(f"Component '{comp_id}' has invalid position.")
        coords = [pos.get("x"), pos.get("y")]
    else:
        coords = [comp.get("x", 0.0), comp.get("y", 0.0)]
    if not all(_is_number(c) for c in coords):
        raise ValueError(f"Component '{comp_id}' has non-numeric x/y coordinates.")


def _validate_state(comp_id, state) -> None:
    if not isinstance(state, dict):
        raise ValueError(f"Component '{comp_id}' has invalid state.")
    indices = state.get("nodeIndices")
    if indices is None:
        return
    if not isinstance(indices, list) or len(indices) != TERMINAL_COUNT:
        raise ValueError(f"Component '{comp_id}' state nodeIndices must list {TERMINAL_COUNT} entries.")
    for idx in indices:
        if idx is not None and not (isinstance(idx, int) and not isinstance(idx, bool)):
            raise ValueError(f"Component '{comp_id}' state has invalid node index {idx!r}.")


def validate_circuit_data(data) -> None:
    """
    Validate the structure of circuit contract data before loading.

    Raises ValueError with a descriptive message if anything is wrong.
    """
    if not isinstance(data, dict):
        raise ValueError("Data does not contain a valid circuit object.")

    if "components" not in data or not isinstance(data["components"], list):
        raise ValueError("Missing or invalid 'components' list.")
    if "wires" not in data or not isinstance(data["wires"], list):
        raise ValueError("Missing or invalid 'wires' list.")

    comp_ids = set()
    for i, comp in enumerate(data["components"]):
        if not isinstance(comp, dict):
            raise ValueError(f"Component #{i + 1} is not an object.")
        for key in ("id", "type"):
            if key not in comp:
                raise ValueError(f"Component #{i + 1} is missing required field '{key}'.")
        if comp["id"] in comp_ids:
            raise ValueError(f"Duplicate component id '{comp['id']}'.")
        props = comp.get("properties", {})
        if not isinstance(props, dict):
            raise ValueError(f"Component '{comp['id']}' has invalid properties.")
        _validate_position(comp["id"], comp)
        if "state" in comp:
            _validate_state(comp["id"], comp["state"])
        comp_ids.add(comp["id"])

    for i, wire in enumerate(data["wires"]):
        if not isinstance(wire, dict):
            raise ValueError(f"Wire #{i + 1} is not an object.")
        values = []
        for key, legacy in _WIRE_KEY_SPELLINGS:
            if key not in wire and legacy not in wire:
                raise ValueError(f"Wire #{i + 1} is missing required field '{key}'.")
            values.append(wire.get(key, wire.get(legacy)))
        start_comp, start_term, end_comp, end_term = values
        for comp_id in (start_comp, end_comp):
            if comp_id not in comp_ids:
                raise ValueError(f"Wire #{i + 1} references unknown component '{comp_id}'.")
        for term in (start_term, end_term):
            if not is_terminal_index(term):
                raise ValueError(f"Wire #{i + 1} references invalid terminal {term!r}.")


@dataclass
class CircuitModel:
    """
    Central data store holding all circuit state.

    Components keep their insertion order; that order is the one the solver
    uses for ground selection and node numbering.
    """

    components: dict[str, ComponentData] = field(default_factory=dict)
    wires: list[WireData] = field(default_factory=list)
    component_counter: dict[str, int] = field(default_factory=dict)

    # --- Component operations ---

    def add_component(self, component: ComponentData) -> None:
        """Add a component to the circuit."""
        if component.component_id in self.components:
            raise ValueError(f"Component id '{component.component_id}' already exists")
        self.components[component.component_id] = component

    def remove_component(self, component_id: str) -> list[int]:
        """
        Remove a component and return indices of connected wires to remove.

        The caller is responsible for calling remove_wire() for each returned
        index (in reverse order to avoid index shifts).
        """
        if component_id not in self.components:
            return []

        wire_indices = [i for i, wire in enumerate(self.wires) if wire.connects_component(component_id)]

        del self.components[component_id]
        return wire_indices

    def get_component(self, component_id: str):
        return self.components.get(component_id)

    def component_list(self) -> list[ComponentData]:
        """Components in stored order."""
        return list(self.components.values())

    # --- Wire operations ---

    def add_wire(self, wire: WireData) -> None:
        """
        Add a wire between two existing terminals.

        Raises:
            ValueError: If either end references an unknown component or terminal.
        """
        for comp_id, term in wire.get_terminals():
            if comp_id not in self.components:
                raise ValueError(f"Wire references unknown component '{comp_id}'")
            if not is_terminal_index(term):
                raise ValueError(f"Wire references invalid terminal {term!r} on '{comp_id}'")
        self.wires.append(wire)

    def remove_wire(self, wire_index: int) -> None:
        """Remove a wire by index."""
        if 0 <= wire_index < len(self.wires):
            del self.wires[wire_index]

    # --- Circuit operations ---

    def clear(self) -> None:
        """Clear all circuit data."""
        self.components.clear()
        self.wires.clear()
        self.component_counter.clear()

    # --- Serialization ---

    def to_dict(self) -> dict:
        """Serialize circuit to the data contract."""
        return {
            "components": [c.to_dict() for c in self.components.values()],
            "wires": [w.to_dict() for w in self.wires],
            "counters": self.component_counter.copy(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CircuitModel":
        """
        Deserialize circuit from the data contract.

        Raises:
            ValueError: If the structure is invalid.
        """
        validate_circuit_data(data)

        model = cls()
        model.component_counter = dict(data.get("counters", {}))

        for comp_data in data["components"]:
            model.add_component(ComponentData.from_dict(comp_data))

        for wire_data in data["wires"]:
            model.add_wire(WireData.from_dict(wire_data))

        return model
