"""MCP Server for the Drizzle to TypeORM converter

This package provides MCP tools for converting schema files.
"""

from mcp_server.config import SERVER_NAME
from mcp_server.handlers import ConverterHandler

__all__ = [
    "SERVER_NAME",
    "ConverterHandler",
]
