"""
MCP Tool Parameter Parsing
==========================

Utilities for parsing parameter values from various input formats.

MCP clients are not always strict about JSON types. Values may arrive as:
    - Integer: 100, or a whole float such as 100.0
    - String decimal: "100"
    - Boolean: true, or the strings "true"/"false", "yes"/"no", "1"/"0"

These utilities normalize values to Python types and raise ValueError
with the parameter name when the input cannot be interpreted.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from typing import Any, Iterable, Optional

TRUE_STRINGS = frozenset({"true", "yes", "1", "on"})
FALSE_STRINGS = frozenset({"false", "no", "0", "off"})


def parse_integer(
    value: Any,
    param_name: str,
    min_val: Optional[int] = None,
    max_val: Optional[int] = None,
) -> int:
    """
    Parse an integer value from various input formats.

    Accepts:
        - int: Used directly (bool is rejected)
        - float with no fractional part: 100.0
        - str decimal: "100", " 100 "

    Args:
        value: The input value to parse
        param_name: Name of the parameter (for error messages)
        min_val: Minimum allowed value (inclusive, optional)
        max_val: Maximum allowed value (inclusive, optional)

    Returns:
        The parsed integer value

    Raises:
        ValueError: If parsing fails or value is out of range

    Examples:
        >>> parse_integer(100, "lines")
        100
        >>> parse_integer("250", "lines")
        250
        >>> parse_integer(5.0, "lines")
        5
    """
    if isinstance(value, bool):
        raise ValueError(f"{param_name}: expected integer, got boolean")

    if isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{param_name}: expected integer, got {value}")
        parsed = int(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError(f"{param_name}: empty string")
        try:
            parsed = int(text, 10)
        except ValueError as e:
            raise ValueError(
                f"{param_name}: cannot parse '{value}' as integer"
            ) from e
    else:
        raise ValueError(
            f"{param_name}: expected integer, got {type(value).__name__}"
        )

    if min_val is not None and parsed < min_val:
        raise ValueError(f"{param_name}: value {parsed} is below the minimum of {min_val}")
    if max_val is not None and parsed > max_val:
        raise ValueError(f"{param_name}: value {parsed} is above the maximum of {max_val}")

    return parsed


def parse_boolean(value: Any, param_name: str) -> bool:
    """
    Parse a boolean value.

    Examples:
        >>> parse_boolean(True, "force")
        True
        >>> parse_boolean("false", "force")
        False
        >>> parse_boolean("yes", "force")
        True
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    raise ValueError(f"{param_name}: expected boolean (true or false), got {value!r}")


def parse_choice(value: Any, param_name: str, choices: Iterable[str]) -> str:
    """
    Match a string against allowed values, ignoring case.

    Returns the canonical spelling from `choices`.

    Examples:
        >>> parse_choice("list", "action", ["list", "install"])
        'list'
        >>> parse_choice("w", "level", ["V", "D", "I", "W", "E", "F"])
        'W'
    """
    if not isinstance(value, str):
        raise ValueError(f"{param_name}: expected string, got {type(value).__name__}")
    wanted = value.strip().casefold()
    for choice in choices:
        if choice.casefold() == wanted:
            return choice
    raise ValueError(f"{param_name}: unknown value '{value}'")
