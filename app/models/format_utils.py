"""
models/format_utils.py

Parsing and formatting of electrical quantities with SI unit prefixes.
"""

import re

SI_PREFIX_MULTIPLIERS = {
    'f': 1e-15,
    'p': 1e-12,
    'n': 1e-9,
    'u': 1e-6,
    'µ': 1e-6,
    'm': 1e-3,
    'k': 1e3,
    'M': 1e6,
    'MEG': 1e6,  # SPICE spelling
    'G': 1e9,
    'T': 1e12,
}

# (multiplier, prefix), largest first
FORMATTING_PREFIXES = sorted(
    [(1e12, 'T'), (1e9, 'G'), (1e6, 'M'), (1e3, 'k'),
     (1, ''), (1e-3, 'm'), (1e-6, 'µ'), (1e-9, 'n'), (1e-12, 'p'), (1e-15, 'f')],
    key=lambda x: x[0], reverse=True
)

_NUMBER_RE = re.compile(r'^([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([a-zA-ZµΩ]*)$')


def parse_value(s) -> float:
    """
    Parse a number with an optional SI prefix and unit into a float.

    Examples: "10k" -> 10000.0, "25m" -> 0.025, "4.7MEG" -> 4.7e6, 9 -> 9.0

    Raises:
        ValueError: If the text is not a number.
    """
    if isinstance(s, bool):
        raise ValueError(f"Expected a number, got boolean {s!r}")
    if not isinstance(s, str):
        return float(s)

    match = _NUMBER_RE.match(s.strip())
    if not match:
        raise ValueError(f"Invalid number format: {s}")

    num_str, unit_str = match.groups()
    number = float(num_str)
    if not unit_str:
        return number

    if unit_str.upper().startswith('MEG'):
        return number * SI_PREFIX_MULTIPLIERS['MEG']

    # Only the leading character can be a prefix ("mA", "kΩ", "V")
    multiplier = SI_PREFIX_MULTIPLIERS.get(unit_str[0])
    if multiplier is None:
        return number
    return number * multiplier


def format_value(value: float, unit: str = "") -> str:
    """
    Format a float with the most appropriate SI prefix.

    Examples: 0.015 -> "15.00 m", 15000 -> "15 k"
    """
    if value == 0:
        return f"0 {unit}".rstrip()

    abs_val = abs(value)

    for mult, prefix in FORMATTING_PREFIXES:
        if abs_val >= mult:
            scaled_val = value / mult
            if scaled_val == int(scaled_val):
                return f"{int(scaled_val)} {prefix}{unit}".rstrip()
            return f"{scaled_val:.2f} {prefix}{unit}".rstrip()

    return f"{value:.2e} {unit}".rstrip()
