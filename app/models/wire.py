"""
WireData - Pure Python data model for circuit wires.

A wire is an undirected, zero-resistance connection between two component
terminals. It refers to components by id and owns nothing.
"""

from dataclasses import dataclass


@dataclass
class WireData:
    """
    Pure Python data class representing a wire connection between two component terminals.
    """

    start_component_id: str
    start_terminal: int
    end_component_id: str
    end_terminal: int

    def get_terminals(self) -> list[tuple[str, int]]:
        """
        Get both terminal identifiers for this wire.

        Returns:
            List of two (component_id, terminal_index) tuples.
        """
        return [(self.start_component_id, self.start_terminal), (self.end_component_id, self.end_terminal)]

    def connects_component(self, component_id: str) -> bool:
        """Check if this wire connects to the given component."""
        return self.start_component_id == component_id or self.end_component_id == component_id

    def to_dict(self) -> dict:
        """Serialize wire to the circuit data contract."""
        return {
            "startComponentId": self.start_component_id,
            "startTerminal": self.start_terminal,
            "endComponentId": self.end_component_id,
            "endTerminal": self.end_terminal,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WireData":
        """
        Deserialize wire from dictionary.

        Also accepts the older startCompId/startTermId key spelling. Terminal
        values are taken as given; CircuitModel.add_wire rejects non-int ones.
        """
        return cls(
            start_component_id=data.get("startComponentId", data.get("startCompId")),
            start_terminal=data.get("startTerminal", data.get("startTermId")),
            end_component_id=data.get("endComponentId", data.get("endCompId")),
            end_terminal=data.get("endTerminal", data.get("endTermId")),
        )

    def __repr__(self) -> str:
        return (
            f"WireData({self.start_component_id}[{self.start_terminal}] -> "
            f"{self.end_component_id}[{self.end_terminal}])"
        )
