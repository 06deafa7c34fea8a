"""Server configuration for MCP server"""

SERVER_NAME = "drizzle-typeorm-converter"

# Extension of the generated modules when a tool call does not name one
DEFAULT_OUTPUT_EXTENSION = ".js"
