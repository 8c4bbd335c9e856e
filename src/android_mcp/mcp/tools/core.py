"""
Core MCP Tool Utilities
=======================

Base types and result helper functions for MCP tools.

Every tool returns exactly one text block. Expected failures are raised as
AndroidMcpError inside the tool and turned into a result here, so the
message text is produced in one place.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from typing import Any, Dict, List

from android_mcp.errors import AndroidMcpError
from ..server import ToolResult


def text_content(text: str) -> List[Dict[str, Any]]:
    """Create text content for tool result."""
    return [{"type": "text", "text": text}]


def error_result(message: str) -> ToolResult:
    """Create error tool result."""
    return ToolResult(content=text_content(message), is_error=True)


def success_result(text: str) -> ToolResult:
    """Create success tool result."""
    return ToolResult(content=text_content(text), is_error=False)


def result_from_error(error: AndroidMcpError) -> ToolResult:
    """
    Convert a layer error into a tool result.

    Informational outcomes (no devices connected) keep is_error False.
    """
    return ToolResult(content=text_content(str(error)), is_error=error.is_error)
