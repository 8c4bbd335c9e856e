"""
MCP Miscellaneous Tools
=======================

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from datetime import date
from typing import Any, Dict

from ..server import DeviceContext, ToolResult
from .core import success_result
from .decorators import mcp_tool
from .schema import ToolDescriptor


GET_DATE = ToolDescriptor(
    name="get-date",
    description="Get the current date",
)


@mcp_tool(GET_DATE, "Error getting date")
async def get_date(
    context: DeviceContext,
    params: Dict[str, Any]
) -> ToolResult:
    """Report today's local date as YYYY-MM-DD."""
    return success_result(f"Today's date is {date.today().isoformat()}")
