"""Tests for MCP server"""

import asyncio
import json
from pathlib import Path

from mcp_server.server import app, call_tool, converter_handler, list_tools


class TestServerInitialization:
    """Tests for server initialization"""

    def test_server_name(self) -> None:
        """Test that server is initialized with correct name"""
        assert app.name == "drizzle-typeorm-converter"

    def test_handler_initialized(self) -> None:
        """Test that converter handler is initialized"""
        assert converter_handler is not None

    def test_list_tools(self) -> None:
        """Test that every converter tool is advertised"""
        tools = asyncio.run(list_tools())
        assert [tool.name for tool in tools] == [
            "convert_schemas",
            "convert_local_schemas",
            "fetch_and_convert_schemas",
            "inspect_schemas",
        ]
        assert all(tool.inputSchema["required"] for tool in tools)


class TestCallTool:
    """Tests for tool dispatch (not MCP protocol)"""

    def test_inspect_schemas(self, schema_dir: Path) -> None:
        """Test that a tool call returns the handler's JSON"""
        contents = asyncio.run(call_tool("inspect_schemas", {"path": str(schema_dir.resolve())}))

        assert len(contents) == 1
        assert json.loads(contents[0].text)["count"] == 2

    def test_convert_schemas(self) -> None:
        """Test inline conversion through the dispatcher"""
        files = [{"file_name": "tags.ts", "content": 'export const tags = pgTable("tags", { id: integer("id") });'}]
        contents = asyncio.run(call_tool("convert_schemas", {"files": files}))
        assert "tags.js" in json.loads(contents[0].text)["outputs"]

    def test_unknown_tool(self) -> None:
        """Test that unknown tools are reported"""
        contents = asyncio.run(call_tool("generate_contract", {}))
        assert contents[0].text == "Error: Unknown tool: generate_contract"

    def test_missing_arguments(self) -> None:
        """Test that missing arguments are reported"""
        contents = asyncio.run(call_tool("inspect_schemas", {}))
        assert contents[0].text.startswith("Error: Invalid arguments for tool 'inspect_schemas'")
