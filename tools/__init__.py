# tools package for MCP server tools
# Modules in this package expose `get_tools() -> dict[str, dict]` mapping a tool name to
# {"func": callable, "title": str, "description": str}.
# The server imports every module in this directory and registers the returned callables as MCP tools.
__all__ = []
