"""Static assets manifest generation for .NET web projects, with an MCP server."""

__version__ = "0.1.0"
