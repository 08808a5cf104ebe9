"""MCP tools for Jira and GitHub activity."""

from work_activity_mcp.src.tools.definition import ToolDefinition, as_tool_error
from work_activity_mcp.src.tools.middleware import RegistryMiddleware
from work_activity_mcp.src.tools.registry import ToolRegistry

__all__ = ["RegistryMiddleware", "ToolRegistry", "ToolDefinition", "as_tool_error"]
