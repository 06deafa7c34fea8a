"""
MCP Server for the Drizzle to TypeORM converter
Provides tools for converting schema files
"""

import asyncio
import sys
import traceback
from collections.abc import Callable
from pathlib import Path

# Add parent directory to path for imports when running as script
sys.path.insert(0, str(Path(__file__).parent.parent))

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from mcp_server.config import SERVER_NAME
from mcp_server.handlers import ConverterHandler

app: Server = Server(SERVER_NAME)

# Stateless; shared by every tool call
converter_handler = ConverterHandler()

TOOL_HANDLERS: dict[str, Callable[..., str]] = {
    "convert_schemas": converter_handler.convert_schemas,
    "convert_local_schemas": converter_handler.convert_local_schemas,
    "fetch_and_convert_schemas": converter_handler.fetch_and_convert_schemas,
    "inspect_schemas": converter_handler.inspect_schemas,
}

OUTPUT_EXTENSION_PROPERTY = {
    "type": "string",
    "description": "Extension of the generated modules (default: '.js')",
}


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List available MCP tools"""
    return [
        Tool(
            name="convert_schemas",
            description=(
                "Convert Drizzle ORM schema sources (pgTable and relations declarations) into "
                "TypeORM EntitySchema modules. Sources are passed inline; returns the generated "
                "module text keyed by output file name as JSON."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "files": {
                        "type": "array",
                        "description": "Schema sources in processing order",
                        "items": {
                            "type": "object",
                            "properties": {
                                "file_name": {"type": "string", "description": "File name, e.g. 'users.ts'"},
                                "content": {"type": "string", "description": "TypeScript source text"},
                            },
                            "required": ["file_name", "content"],
                        },
                    },
                    "output_extension": OUTPUT_EXTENSION_PROPERTY,
                },
                "required": ["files"],
            },
        ),
        Tool(
            name="convert_local_schemas",
            description=(
                "Convert every schema file of a local directory and write the generated modules "
                "into an output directory. Input files are left untouched. Returns a summary as JSON."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "input_dir": {
                        "type": "string",
                        "description": "Absolute path of the directory holding .ts schema files",
                    },
                    "output_dir": {
                        "type": "string",
                        "description": "Absolute path of the directory receiving generated modules",
                    },
                    "output_extension": OUTPUT_EXTENSION_PROPERTY,
                },
                "required": ["input_dir", "output_dir"],
            },
        ),
        Tool(
            name="fetch_and_convert_schemas",
            description=(
                "Sparse-checkout a schema folder from a Git repository into an output directory, "
                "convert it in place and delete the fetched schema sources. Returns a summary as JSON."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "repo_url": {
                        "type": "string",
                        "description": "SSH or HTTPS repository URL",
                    },
                    "subfolder": {
                        "type": "string",
                        "description": "Folder inside the repository holding the schema files (e.g. 'src/db/schema')",
                    },
                    "output_dir": {
                        "type": "string",
                        "description": "Absolute path of the output directory (replaced by the fetch)",
                    },
                    "output_extension": OUTPUT_EXTENSION_PROPERTY,
                },
                "required": ["repo_url", "subfolder", "output_dir"],
            },
        ),
        Tool(
            name="inspect_schemas",
            description=(
                "Extract the entity model (columns, relations, indices) from a schema file or "
                "directory without generating code. Returns the entities as JSON."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Absolute path of a schema file or directory",
                    }
                },
                "required": ["path"],
            },
        ),
    ]


@app.call_tool()
async def call_tool(name: str, arguments: dict[str, object]) -> list[TextContent]:
    """Dispatch a tool call to the converter handler"""
    handler = TOOL_HANDLERS.get(name)
    if handler is None:
        return [TextContent(type="text", text=f"Error: Unknown tool: {name}")]

    try:
        # Argument names and arity are checked by the handler signature
        text = handler(**arguments)
    except TypeError as e:
        return [TextContent(type="text", text=f"Error: Invalid arguments for tool '{name}': {e!s}")]
    except (ValueError, OSError, RuntimeError) as e:
        return [TextContent(type="text", text=f"Error: {e!s}\n\n{traceback.format_exc()}")]
    return [TextContent(type="text", text=text)]


async def main() -> None:
    """Run the MCP server"""
    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())


def run() -> None:
    """Console entry point"""
    asyncio.run(main())


if __name__ == "__main__":
    run()
