"""
CircuitController - Orchestrates component and wire CRUD operations.

This module contains no UI dependencies. It manages the CircuitModel
and notifies views of changes through an observer pattern.
"""

import logging
import threading
from typing import Any, Callable, Optional

from models.circuit import CircuitModel
from models.component import COMPONENT_SYMBOLS, ComponentData, coerce_property_value, property_field_name
from models.wire import WireData

logger = logging.getLogger(__name__)

IdGenerator = Callable[[str, CircuitModel], str]


def counter_id_generator(component_type: str, model: CircuitModel) -> str:
    """
    Next free id for a type: B1, R1, R2, ...

    The per-symbol counter lives on the model so it survives serialization.
    """
    symbol = COMPONENT_SYMBOLS.get(component_type, 'X')
    count = model.component_counter.get(symbol, 0)
    while True:
        count += 1
        component_id = f"{symbol}{count}"
        if component_id not in model.components:
            break
    model.component_counter[symbol] = count
    return component_id


class CircuitController:
    """
    Controller for circuit component and wire operations.

    Manages the CircuitModel and notifies registered observers when
    the model changes. Views register callbacks to stay in sync.

    Observer events:
        component_added (ComponentData) - A new component was added
        component_removed (str) - A component was removed (by ID)
        component_value_changed (ComponentData) - A property changed
        component_repaired (ComponentData) - A burnt component was repaired
        wire_added (WireData) - A new wire was added
        wire_removed (int) - A wire was removed (by index)
        circuit_cleared (None) - The entire circuit was cleared
        simulation_started (None) - A solve began
        simulation_completed (SimulationResult) - A solve finished
        component_burnt (ComponentData) - A component burnt out during a solve
    """

    def __init__(self, model: Optional[CircuitModel] = None, id_generator: Optional[IdGenerator] = None):
        self.model = model or CircuitModel()
        self._observers: list[Callable[[str, Any], None]] = []
        self._id_generator = id_generator or counter_id_generator
        # Shared with SimulationController so edits never interleave with a solve
        self.lock = threading.RLock()

    def add_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Register a callback for model change events."""
        if callback not in self._observers:
            self._observers.append(callback)

    def remove_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Unregister a previously registered callback."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, event: str, data: Any) -> None:
        """Notify all observers of a model change."""
        for observer in list(self._observers):
            try:
                observer(event, data)
            except (TypeError, AttributeError, RuntimeError, ValueError, KeyError) as e:
                logger.error("Error notifying observer of %s: %s", event, e)

    # --- Component operations ---

    def add_component(self, component_type: str,
                      position: tuple[float, float] = (0.0, 0.0),
                      properties: Optional[dict] = None) -> ComponentData:
        """
        Create and add a new component to the circuit.

        Args:
            component_type: Type tag, e.g. 'resistor'.
            position: Canvas position, persisted but unused by the solver.
            properties: Overrides for the type's default properties.

        Returns:
            The newly created ComponentData.

        Raises:
            ValueError: If a property value is invalid.
        """
        with self.lock:
            component = ComponentData(
                component_id=self._id_generator(component_type, self.model),
                component_type=component_type,
                properties=dict(properties or {}),
                position=position,
            )
            self.model.add_component(component)
        self._notify('component_added', component)
        return component

    def remove_component(self, component_id: str) -> None:
        """
        Remove a component and all connected wires.

        Wires are removed in reverse index order to preserve indices.
        """
        with self.lock:
            if component_id not in self.model.components:
                return
            wire_indices = sorted(self.model.remove_component(component_id), reverse=True)
            for idx in wire_indices:
                self.model.remove_wire(idx)
        for idx in wire_indices:
            self._notify('wire_removed', idx)
        self._notify('component_removed', component_id)

    def update_component_property(self, component_id: str, key: str, value) -> None:
        """
        Update one property of a component.

        Args:
            key: Contract key ('powerRating') or field name ('power_rating').
            value: Number, bool, or string with an SI prefix ("2.2k").

        Raises:
            ValueError: If the key does not exist for the component's type or
                the new value breaks the component's invariants.
        """
        with self.lock:
            component = self.model.components.get(component_id)
            if component is None or component.properties is None:
                return
            name = property_field_name(key)
            new_value = coerce_property_value(component.properties, name, value)
            old_value = getattr(component.properties, name)
            setattr(component.properties, name, new_value)
            try:
                component.check_invariants()
            except ValueError:
                setattr(component.properties, name, old_value)
                raise
        self._notify('component_value_changed', component)

    def toggle_switch(self, component_id: str) -> None:
        """Open a closed switch or close an open one."""
        with self.lock:
            component = self.model.components.get(component_id)
            if component is None or component.component_type != 'switch':
                return
            component.properties.closed = not component.properties.closed
        self._notify('component_value_changed', component)

    def repair_component(self, component_id: str) -> None:
        """Return a burnt component to service."""
        with self.lock:
            component = self.model.components.get(component_id)
            if component is None or not component.state.burnt:
                return
            component.repair()
            logger.info("%s repaired", component_id)
        self._notify('component_repaired', component)

    # --- Wire operations ---

    def add_wire(self, start_comp_id: str, start_term: int,
                 end_comp_id: str, end_term: int) -> WireData:
        """
        Create and add a new wire connection.

        Returns:
            The newly created WireData.

        Raises:
            ValueError: If either end is not an existing terminal.
        """
        wire = WireData(
            start_component_id=start_comp_id,
            start_terminal=start_term,
            end_component_id=end_comp_id,
            end_terminal=end_term,
        )
        with self.lock:
            self.model.add_wire(wire)
        self._notify('wire_added', wire)
        return wire

    def remove_wire(self, wire_index: int) -> None:
        """Remove a wire by index."""
        with self.lock:
            if not 0 <= wire_index < len(self.model.wires):
                return
            self.model.remove_wire(wire_index)
        self._notify('wire_removed', wire_index)

    # --- Circuit operations ---

    def clear_circuit(self) -> None:
        """Clear the entire circuit."""
        with self.lock:
            self.model.clear()
        self._notify('circuit_cleared', None)
