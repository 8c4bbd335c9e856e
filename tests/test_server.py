"""
MCP Server Unit Tests
=====================

Tests for JSON-RPC routing, tool dispatch and cancellation.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import asyncio
import json

import pytest

from android_mcp.mcp.server import MCPServer


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def server(context):
    """Create an MCP server over the scripted executor."""
    return MCPServer(context)


def request(method, params=None, request_id=1):
    message = {"jsonrpc": "2.0", "method": method}
    if params is not None:
        message["params"] = params
    if request_id is not None:
        message["id"] = request_id
    return message


def sent(capsys):
    """JSON-RPC messages written to stdout so far."""
    out = capsys.readouterr().out
    return [json.loads(line) for line in out.splitlines() if line.strip()]


# =============================================================================
# Protocol
# =============================================================================

class TestMCPServer:
    """Test MCP protocol handling."""

    @pytest.mark.asyncio
    async def test_initialize(self, server):
        response = await server.process_request(
            request("initialize", {"clientInfo": {"name": "test", "version": "1"}})
        )
        result = response["result"]
        assert result["protocolVersion"] == "2024-11-05"
        assert "tools" in result["capabilities"]
        assert result["serverInfo"]["name"] == "android-dev-mcp"

    @pytest.mark.asyncio
    async def test_initialized_notification(self, server):
        assert await server.process_request(request("notifications/initialized", request_id=None)) is None

    @pytest.mark.asyncio
    async def test_ping(self, server):
        response = await server.process_request(request("ping"))
        assert response["result"] == {}

    @pytest.mark.asyncio
    async def test_list_tools(self, server):
        response = await server.process_request(request("tools/list"))
        tools = response["result"]["tools"]
        assert len(tools) == 16
        shell = next(t for t in tools if t["name"] == "android-shell")
        assert shell["inputSchema"]["required"] == ["command"]
        assert "deviceSerial" in shell["inputSchema"]["properties"]

    @pytest.mark.asyncio
    async def test_call_tool(self, server, two_devices):
        response = await server.process_request(
            request("tools/call", {"name": "android-devices", "arguments": {}})
        )
        result = response["result"]
        assert result["isError"] is False
        assert len(result["content"]) == 1
        assert result["content"][0]["text"].startswith("Found 2 Android device(s):")

    @pytest.mark.asyncio
    async def test_call_tool_without_arguments(self, server):
        response = await server.process_request(request("tools/call", {"name": "get-date"}))
        assert response["result"]["content"][0]["text"].startswith("Today's date is ")

    @pytest.mark.asyncio
    async def test_call_tool_error_is_data(self, server):
        response = await server.process_request(
            request("tools/call", {"name": "android-shell", "arguments": {"command": ""}})
        )
        assert "error" not in response
        assert response["result"]["isError"] is True
        assert "cannot be empty" in response["result"]["content"][0]["text"]

    @pytest.mark.asyncio
    async def test_unknown_tool(self, server):
        response = await server.process_request(
            request("tools/call", {"name": "nonexistent_tool", "arguments": {}})
        )
        assert response["result"]["isError"] is True
        assert "Unknown tool" in response["result"]["content"][0]["text"]

    @pytest.mark.asyncio
    async def test_unknown_method(self, server):
        response = await server.process_request(request("resources/list"))
        assert response["error"]["code"] == -32601

    def test_tool_names(self, server):
        assert "android-sdk-manager" in server.tool_names


# =============================================================================
# Line handling and concurrency
# =============================================================================

class TestLineHandling:
    """Test stdio framing, concurrent calls and cancellation."""

    @pytest.mark.asyncio
    async def test_parse_error(self, server, capsys):
        await server.handle_line("{not json")
        [response] = sent(capsys)
        assert response["error"]["code"] == -32700

    @pytest.mark.asyncio
    async def test_blank_line_ignored(self, server, capsys):
        await server.handle_line("   \n")
        assert sent(capsys) == []

    @pytest.mark.asyncio
    async def test_call_response_is_sent(self, server, capsys):
        await server.handle_line(json.dumps(request("tools/call", {"name": "get-date"}, request_id=5)))
        await asyncio.gather(*server._in_flight.values())
        [response] = sent(capsys)
        assert response["id"] == 5
        assert not server._in_flight

    @pytest.mark.asyncio
    async def test_slow_call_does_not_block(self, server, executor, capsys):
        executor.on("devices", "-l", delay=30)
        await server.handle_line(
            json.dumps(request("tools/call", {"name": "android-devices"}, request_id=7))
        )
        await server.handle_line(json.dumps(request("ping", request_id=8)))
        [response] = sent(capsys)
        assert response["id"] == 8
        server._in_flight[7].cancel()
        await asyncio.gather(*server._in_flight.values(), return_exceptions=True)

    @pytest.mark.asyncio
    async def test_cancellation(self, server, executor, capsys):
        executor.on("devices", "-l", delay=30)
        await server.handle_line(
            json.dumps(request("tools/call", {"name": "android-devices"}, request_id=9))
        )
        task = server._in_flight[9]
        await asyncio.sleep(0.01)

        await server.handle_line(json.dumps(request(
            "notifications/cancelled",
            {"requestId": 9, "reason": "user abort"},
            request_id=None,
        )))
        await asyncio.gather(task, return_exceptions=True)

        assert task.done()
        assert 9 not in server._in_flight
        assert sent(capsys) == []

    @pytest.mark.asyncio
    async def test_call_without_id_finishes_on_drain(self, server, executor, capsys):
        finished = []
        executor.on("devices", "-l", delay=0.05, effect=finished.append)
        await server.handle_line(
            json.dumps(request("tools/call", {"name": "android-devices"}, request_id=None))
        )
        assert not server._in_flight

        await server.drain()

        assert len(finished) == 1
        assert not server._anonymous
        assert sent(capsys) == []

    @pytest.mark.asyncio
    async def test_reused_id_keeps_newer_call(self, server, executor, capsys):
        executor.on("devices", "-l", delay=30)
        await server.handle_line(json.dumps(request("tools/call", {"name": "get-date"}, request_id=3)))
        await server.handle_line(
            json.dumps(request("tools/call", {"name": "android-devices"}, request_id=3))
        )
        slow = server._in_flight[3]
        await asyncio.sleep(0.01)

        # The finished get-date call must not evict the slower one.
        assert server._in_flight.get(3) is slow
        [response] = sent(capsys)
        assert "Today's date is" in response["result"]["content"][0]["text"]

        await server.handle_line(json.dumps(request(
            "notifications/cancelled", {"requestId": 3}, request_id=None,
        )))
        await asyncio.gather(slow, return_exceptions=True)
        assert slow.done()
        assert 3 not in server._in_flight
        assert sent(capsys) == []
