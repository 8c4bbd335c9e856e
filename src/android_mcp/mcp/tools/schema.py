"""
MCP Tool Schemas
================

Static per-tool metadata and the argument extractor.

Each tool declares a ToolDescriptor: its name, description and a tuple of
ParameterSpec entries. The descriptor renders the JSON Schema advertised
through tools/list, and extract() validates an incoming argument bag
against the same declarations, producing typed, defaulted parameters or
raising ValidationError naming the offending field.

Example:
    ANDROID_SHELL = ToolDescriptor(
        name="android-shell",
        description="Execute a shell command on a connected Android device",
        parameters=(
            ParameterSpec("command", ParamType.STRING, "Shell command", required=True),
            DEVICE_SERIAL,
        ),
    )
    params = ANDROID_SHELL.extract({"command": "ls"})
    # {"command": "ls", "deviceSerial": None}

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple

from android_mcp.errors import ValidationError
from .parsing import parse_boolean, parse_choice, parse_integer

logger = logging.getLogger(__name__)


class ParamType(Enum):
    """Parameter types supported in tool input contracts."""
    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    ENUM = "enum"


@dataclass(frozen=True)
class ParameterSpec:
    """
    Declaration of a single tool parameter.

    Attributes:
        key: Argument name as sent by the host
        type: Expected type
        description: Human-readable description for the schema
        required: Whether the argument must be supplied
        default: Value used when the argument is omitted
        allowed_values: Choices for ENUM parameters
        minimum: Lower bound for INTEGER parameters
    """
    key: str
    type: ParamType
    description: str
    required: bool = False
    default: Any = None
    allowed_values: Tuple[str, ...] = ()
    minimum: Optional[int] = None

    def to_schema(self) -> Dict[str, Any]:
        """Render this parameter as a JSON Schema property."""
        if self.type is ParamType.ENUM:
            schema: Dict[str, Any] = {
                "type": "string",
                "description": self.description,
                "enum": list(self.allowed_values),
            }
        else:
            schema = {"type": self.type.value, "description": self.description}
        if self.default is not None:
            schema["default"] = self.default
        if self.minimum is not None:
            schema["minimum"] = self.minimum
        return schema

    def coerce(self, value: Any) -> Any:
        """
        Convert a supplied (non-None) value to this parameter's type.

        Raises:
            ValidationError: If the value is malformed
        """
        try:
            if self.type is ParamType.STRING:
                if not isinstance(value, str):
                    raise ValueError(f"{self.key}: expected string")
                return value
            if self.type is ParamType.BOOLEAN:
                return parse_boolean(value, self.key)
            if self.type is ParamType.INTEGER:
                return parse_integer(value, self.key, min_val=self.minimum)
            return parse_choice(value, self.key, self.allowed_values)
        except ValueError as e:
            raise ValidationError(self.key, self._reason(value), message=self._message(value, e)) from None

    def _reason(self, value: Any) -> str:
        if self.type is ParamType.ENUM:
            return f"has unknown value '{value}'"
        if self.type is ParamType.INTEGER and self.minimum is not None:
            return f"must be an integer >= {self.minimum}"
        article = "an" if self.type is ParamType.INTEGER else "a"
        return f"must be {article} {self.type.value}"

    def _message(self, value: Any, error: ValueError) -> str:
        if self.type is ParamType.ENUM:
            allowed = ", ".join(self.allowed_values)
            return f"Error: Unknown {self.key} '{value}'. Use one of: {allowed}"
        return f"Error: '{self.key}' {self._reason(value)} ({error})"


@dataclass(frozen=True)
class ToolDescriptor:
    """
    Immutable description of one tool.

    Attributes:
        name: Unique tool name (e.g. "android-shell")
        description: Human-readable description
        parameters: Input contract
    """
    name: str
    description: str
    parameters: Tuple[ParameterSpec, ...] = field(default_factory=tuple)

    @property
    def required(self) -> Tuple[str, ...]:
        return tuple(p.key for p in self.parameters if p.required)

    @property
    def input_schema(self) -> Dict[str, Any]:
        """JSON Schema object for tools/list."""
        return {
            "type": "object",
            "properties": {p.key: p.to_schema() for p in self.parameters},
            "required": list(self.required),
        }

    def extract(
        self,
        args: Optional[Dict[str, Any]],
        only: Optional[Iterable[str]] = None,
    ) -> Dict[str, Any]:
        """
        Validate an argument bag and return typed, defaulted parameters.

        Rules:
            - A missing (or null) required argument is an error.
            - A required string that is empty or whitespace is an error.
            - An optional string that is empty is treated as omitted.
            - Unknown keys are ignored.

        Args:
            args: Raw arguments from the host (None is treated as {})
            only: Restrict extraction to these keys

        Returns:
            Dictionary with one entry per declared (or selected) parameter

        Raises:
            ValidationError: Naming the first offending field
        """
        if args is None:
            args = {}
        if not isinstance(args, dict):
            raise ValidationError("arguments", "must be an object")

        selected = set(only) if only is not None else None
        params: Dict[str, Any] = {}
        for spec in self.parameters:
            if selected is not None and spec.key not in selected:
                continue

            value = args.get(spec.key)
            if isinstance(value, str) and spec.type is ParamType.STRING and not value.strip():
                if spec.required:
                    raise ValidationError(spec.key, "cannot be empty")
                value = None

            if value is None:
                if spec.required:
                    raise ValidationError(spec.key, "parameter is required")
                params[spec.key] = spec.default
                continue

            params[spec.key] = spec.coerce(value)

        unknown = set(args) - {p.key for p in self.parameters}
        if unknown:
            logger.debug("%s: ignoring unknown arguments %s", self.name, sorted(unknown))
        return params


# =============================================================================
# Shared Parameters
# =============================================================================

DEVICE_SERIAL = ParameterSpec(
    "deviceSerial",
    ParamType.STRING,
    "Device serial number (optional, uses first available device if not specified)",
)
