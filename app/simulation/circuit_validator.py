"""
simulation/circuit_validator.py

Advisory circuit checks. The solver copes with every circuit these checks
complain about; validation exists to explain surprising results.
"""

from models.component import COMPONENT_TYPES, TERMINAL_COUNT


def validate_circuit(components, wires):
    """
    Validate circuit before simulation.

    Args:
        components: Dict[str, ComponentData] keyed by component ID
        wires: List[WireData]

    Returns:
        (is_valid, errors, warnings) where:
            is_valid: bool, False if any errors found
            errors: list[str], wires the solver will have to skip
            warnings: list[str], non-blocking issues
    """
    errors = []
    warnings = []

    # 1. Circuit should have components
    if not components:
        warnings.append("Circuit has no components. Add at least one component to simulate.")
        return True, errors, warnings

    # 2. Every wire must land on a real terminal
    connected_terminals = set()
    for i, wire in enumerate(wires):
        for comp_id, term in wire.get_terminals():
            if comp_id not in components:
                errors.append(f"Wire #{i + 1} references unknown component '{comp_id}'.")
            elif term not in range(TERMINAL_COUNT):
                errors.append(f"Wire #{i + 1} references invalid terminal {term!r} on {comp_id}.")
            else:
                connected_terminals.add((comp_id, term))

    # 3. Check for unconnected terminals
    for comp in components.values():
        unconnected = [term for _, term in comp.get_terminals() if (comp.component_id, term) not in connected_terminals]
        if len(unconnected) == TERMINAL_COUNT:
            warnings.append(
                f"{comp.component_id} ({comp.component_type}) has no connections. "
                f"It will carry no current."
            )
        elif unconnected:
            warnings.append(
                f"{comp.component_id} ({comp.component_type}) has unconnected "
                f"terminal(s): {unconnected}."
            )

    # 4. Type and value checks
    for comp in components.values():
        if comp.component_type not in COMPONENT_TYPES:
            warnings.append(
                f"{comp.component_id} has unknown type {comp.component_type!r} and will be treated as open."
            )
            continue
        resistance = getattr(comp.properties, "resistance", None)
        if resistance is not None and resistance <= 0:
            warnings.append(
                f"{comp.component_id} has non-positive resistance ({resistance}); "
                f"it will be treated as a near-short."
            )

    if not any(c.component_type == "battery" for c in components.values()):
        warnings.append(
            "Circuit has no battery. "
            "The simulation will not produce any current."
        )

    is_valid = len(errors) == 0
    return is_valid, errors, warnings
