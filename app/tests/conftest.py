"""
Shared test fixtures for the circuit lab test suite.

All fixtures build pure-Python model objects (no UI dependencies).
"""

import sys
from pathlib import Path

# Ensure app/ is on sys.path so bare imports (models, simulation, controllers)
# work when running individual test files (e.g., python -m pytest app/tests/unit/test_foo.py).
_app_dir = str(Path(__file__).resolve().parent.parent)
if _app_dir not in sys.path:
    sys.path.insert(0, _app_dir)

import pytest
from models.circuit import CircuitModel
from models.component import ComponentData
from models.wire import WireData


def make_component(component_type, component_id, position=(0.0, 0.0), **properties):
    """Helper to create a ComponentData with minimal boilerplate."""
    return ComponentData(
        component_id=component_id,
        component_type=component_type,
        properties=properties,
        position=position,
    )


def make_wire(start_id, start_term, end_id, end_term):
    """Helper to create a WireData."""
    return WireData(
        start_component_id=start_id,
        start_terminal=start_term,
        end_component_id=end_id,
        end_terminal=end_term,
    )


def build_model(components, wires=()):
    """CircuitModel from a list of components and wires, in order."""
    model = CircuitModel()
    for comp in components:
        model.add_component(comp)
    for wire in wires:
        model.add_wire(wire)
    return model


def loop_wires(*component_ids):
    """
    Wires closing a series loop: terminal 1 of each component to terminal 0
    of the next, and the last back to the first.
    """
    wires = []
    for i, comp_id in enumerate(component_ids):
        nxt = component_ids[(i + 1) % len(component_ids)]
        wires.append(make_wire(comp_id, 1, nxt, 0))
    return wires


@pytest.fixture
def series_circuit():
    """
    B1 (9 V, 1.5 ohm) -- R1 (100 ohm) in a single loop.

    B1 terminal 1 (+) -> R1 terminal 0, R1 terminal 1 -> B1 terminal 0 (-)
    """
    components = [
        make_component("battery", "B1", voltage=9.0, internalResistance=1.5),
        make_component("resistor", "R1", resistance=100.0, powerRating=1.0),
    ]
    return build_model(components, loop_wires("B1", "R1"))


@pytest.fixture
def switched_circuit():
    """B1 -- S1 -- R1 in series; S1 starts open."""
    components = [
        make_component("battery", "B1", voltage=9.0, internalResistance=1.5),
        make_component("switch", "S1", closed=False),
        make_component("resistor", "R1", resistance=100.0, powerRating=1.0),
    ]
    return build_model(components, loop_wires("B1", "S1", "R1"))


@pytest.fixture
def events():
    """Fixture that returns a list and a callback that appends events to it."""
    recorded = []

    def callback(event, data):
        recorded.append((event, data))

    return recorded, callback
