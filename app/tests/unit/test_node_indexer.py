"""Tests for simulation/node_indexer.py: ground selection and dense numbering."""

from simulation.node_indexer import GROUND_INDEX, index_nodes, select_ground_root
from simulation.topology import build_topology
from tests.conftest import loop_wires, make_component, make_wire


def _index(components, wires):
    topo = build_topology(components, wires)
    return topo, index_nodes(components, topo)


class TestGroundSelection:
    def test_first_battery_negative_terminal(self):
        components = [
            make_component("resistor", "R1"),
            make_component("battery", "B1"),
            make_component("battery", "B2"),
        ]
        topo = build_topology(components, [])
        assert select_ground_root(components, topo) == topo.find("B1", 0)

    def test_without_battery_first_terminal(self):
        components = [make_component("resistor", "R1"), make_component("light", "L1")]
        topo = build_topology(components, [])
        assert select_ground_root(components, topo) == topo.find("R1", 0)

    def test_empty(self):
        assert select_ground_root([], build_topology([], [])) is None

    def test_burnt_battery_still_sets_ground(self):
        battery = make_component("battery", "B1")
        battery.state.burnt = True
        components = [make_component("resistor", "R1"), battery]
        topo = build_topology(components, [])
        assert select_ground_root(components, topo) == topo.find("B1", 0)


class TestIndexNodes:
    def test_series_loop(self):
        components = [make_component("battery", "B1"), make_component("resistor", "R1")]
        topo, index = _index(components, loop_wires("B1", "R1"))
        assert index.node_count == 1
        assert index.source_count == 1
        assert index.size == 2
        assert index.index_of(topo, "B1", 0) == GROUND_INDEX
        assert index.index_of(topo, "R1", 1) == GROUND_INDEX
        assert index.index_of(topo, "B1", 1) == 0
        assert index.index_of(topo, "R1", 0) == 0
        assert index.source_index == {"B1": 1}

    def test_first_encountered_order(self):
        components = [make_component("resistor", "R1"), make_component("resistor", "R2")]
        topo, index = _index(components, [])
        # R1.0 is ground; R1.1, R2.0, R2.1 follow in order
        assert index.index_of(topo, "R1", 0) == GROUND_INDEX
        assert index.terminal_indices(topo, components[0]) == (GROUND_INDEX, 0)
        assert index.terminal_indices(topo, components[1]) == (1, 2)
        assert [n.get_label() for n in index.nodes] == ["0", "nodeA", "nodeB", "nodeC"]

    def test_sources_follow_nodes_in_stored_order(self):
        components = [
            make_component("battery", "B1"),
            make_component("resistor", "R1"),
            make_component("battery", "B2"),
        ]
        topo, index = _index(components, [])
        assert index.node_count == 5
        assert index.source_index == {"B1": 5, "B2": 6}

    def test_burnt_battery_has_no_slot(self):
        b1 = make_component("battery", "B1")
        b2 = make_component("battery", "B2")
        b1.state.burnt = True
        _, index = _index([b1, b2], [])
        assert index.source_index == {"B2": 3}

    def test_single_node_is_trivial(self):
        components = [make_component("resistor", "R1")]
        _, index = _index(components, [make_wire("R1", 0, "R1", 1)])
        assert index.node_count == 0
        assert index.is_trivial()
        assert len(index.nodes) == 1
        assert index.nodes[0].is_ground
        assert index.nodes[0].terminals == [("R1", 0), ("R1", 1)]

    def test_empty_graph_is_trivial(self):
        _, index = _index([], [])
        assert index.is_trivial()
        assert index.nodes == []
