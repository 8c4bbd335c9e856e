"""
Android MCP Command-Line Interface
==================================

This package provides the `android-mcp` command:

- **serve**: Run the MCP server on stdio
- **tools**: List the available tools
- **call**: Invoke one tool locally and print its result

The CLI is a Click application with help and unified error reporting.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

__all__ = ["main", "errors"]
