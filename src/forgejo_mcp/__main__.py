"""Entry point for running the Forgejo MCP server."""

from forgejo_mcp import main

if __name__ == "__main__":
    main()
