"""Work Activity MCP Server: Jira and GitHub activity tools for MCP hosts."""

__version__ = "0.1.0"
