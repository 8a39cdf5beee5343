"""Main entry point for the Gong MCP server.

Run with: python -m gong_mcp
or: gong-mcp
"""

from gong_mcp.server import main

if __name__ == "__main__":
    main()
