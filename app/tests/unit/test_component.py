"""Tests for ComponentData, its property records and ComponentState."""

import math

import pytest
from models.component import (
    COMPONENT_TYPES,
    DEFAULT_VALUES,
    NEGATIVE_TERMINAL,
    POSITIVE_TERMINAL,
    BatteryProperties,
    ComponentData,
    ComponentState,
    DiodeProperties,
    LoadProperties,
    SwitchProperties,
    coerce_property_value,
    make_properties,
)


class TestDefaults:
    def test_battery_defaults(self):
        comp = ComponentData("B1", "battery")
        assert comp.properties == BatteryProperties(voltage=9.0, internal_resistance=1.5)

    @pytest.mark.parametrize(
        "comp_type, resistance, rating",
        [("resistor", 100.0, 0.5), ("light", 50.0, 1.0), ("fan", 20.0, 2.0)],
    )
    def test_load_defaults(self, comp_type, resistance, rating):
        comp = ComponentData("X1", comp_type)
        assert isinstance(comp.properties, LoadProperties)
        assert comp.properties.resistance == resistance
        assert comp.properties.power_rating == rating

    def test_switch_defaults_open(self):
        comp = ComponentData("S1", "switch")
        assert comp.properties == SwitchProperties(closed=False, resistance=0.01)

    def test_diode_default_forward_voltage(self):
        comp = ComponentData("D1", "diode")
        assert comp.properties == DiodeProperties(forward_voltage=0.7)

    def test_every_type_has_defaults(self):
        assert set(DEFAULT_VALUES) == set(COMPONENT_TYPES)

    def test_fresh_state(self):
        comp = ComponentData("R1", "resistor")
        assert comp.state == ComponentState()
        assert comp.state.burnt is False
        assert comp.state.node_indices == (None, None)


class TestProperties:
    def test_dict_properties_accept_contract_keys(self):
        comp = ComponentData("R1", "resistor", properties={"resistance": 220, "powerRating": 0.25})
        assert comp.properties.resistance == 220.0
        assert comp.properties.power_rating == 0.25

    def test_dict_properties_accept_si_strings(self):
        comp = ComponentData("R1", "resistor", properties={"resistance": "2.2k"})
        assert comp.properties.resistance == pytest.approx(2200.0)

    def test_partial_override_keeps_type_defaults(self):
        comp = ComponentData("L1", "light", properties={"resistance": 75})
        assert comp.properties.power_rating == 1.0

    def test_unknown_property_ignored(self):
        props = make_properties("light", {"maxLumens": 800, "resistance": 40})
        assert props.resistance == 40.0
        assert not hasattr(props, "maxLumens")

    @pytest.mark.parametrize("text, expected", [("closed", True), ("open", False), ("true", True), ("0", False)])
    def test_switch_closed_from_string(self, text, expected):
        props = make_properties("switch", {"closed": text})
        assert props.closed is expected

    def test_bad_boolean_string_raises(self):
        with pytest.raises(ValueError):
            make_properties("switch", {"closed": "maybe"})

    def test_coerce_unknown_field_raises(self):
        with pytest.raises(ValueError):
            coerce_property_value(LoadProperties(), "voltage", 5)

    def test_unknown_type_has_no_properties(self):
        comp = ComponentData("X1", "capacitor")
        assert comp.properties is None
        assert comp.get_display_name() == "capacitor"


class TestBatteryInvariants:
    def test_polarity_constants(self):
        assert NEGATIVE_TERMINAL == 0
        assert POSITIVE_TERMINAL == 1

    def test_infinite_voltage_rejected(self):
        with pytest.raises(ValueError):
            ComponentData("B1", "battery", properties={"voltage": math.inf})

    def test_negative_internal_resistance_rejected(self):
        with pytest.raises(ValueError):
            ComponentData("B1", "battery", properties={"internalResistance": -1})

    def test_wrong_property_record_rejected(self):
        with pytest.raises(ValueError):
            ComponentData("B1", "battery", properties=LoadProperties())

    def test_zero_internal_resistance_allowed(self):
        comp = ComponentData("B1", "battery", properties={"internalResistance": 0})
        assert comp.properties.internal_resistance == 0.0

    def test_check_invariants_after_mutation(self):
        comp = ComponentData("B1", "battery")
        comp.properties.voltage = math.nan
        with pytest.raises(ValueError):
            comp.check_invariants()


class TestTerminalsAndBurn:
    def test_two_terminals(self):
        comp = ComponentData("R1", "resistor")
        assert comp.get_terminal_count() == 2
        assert comp.get_terminals() == [("R1", 0), ("R1", 1)]

    def test_repair_clears_burnt_and_power(self):
        comp = ComponentData("R1", "resistor")
        comp.state.burnt = True
        comp.state.power = 3.0
        comp.state.voltage_drop = -4.0
        comp.repair()
        assert comp.state.burnt is False
        assert comp.state.power == 0.0
        assert comp.state.voltage_drop == -4.0


class TestSerialization:
    def test_to_dict_uses_contract_keys(self):
        comp = ComponentData("B1", "battery", position=(10.0, 20.0), rotation=1)
        data = comp.to_dict()
        assert data["id"] == "B1"
        assert data["type"] == "battery"
        assert data["pos"] == {"x": 10.0, "y": 20.0}
        assert data["rotation"] == 1
        assert data["properties"] == {"voltage": 9.0, "internalResistance": 1.5}
        assert set(data["state"]) == {"current", "voltageDrop", "power", "burnt", "nodeIndices"}

    def test_round_trip_keeps_state(self):
        comp = ComponentData("D1", "diode", properties={"forwardVoltage": 0.3})
        comp.state.voltage_drop = 0.9
        comp.state.burnt = False
        comp.state.node_indices = (0, -1)
        restored = ComponentData.from_dict(comp.to_dict())
        assert restored.properties.forward_voltage == 0.3
        assert restored.state.voltage_drop == 0.9
        assert restored.state.node_indices == (0, -1)

    def test_legacy_top_level_position(self):
        comp = ComponentData.from_dict({"id": "R1", "type": "resistor", "x": 5, "y": 7})
        assert comp.position == (5, 7)

    def test_state_from_partial_dict(self):
        state = ComponentState.from_dict({"burnt": True})
        assert state.burnt is True
        assert state.current == 0.0
        assert state.node_indices == (None, None)
