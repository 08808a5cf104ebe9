"""Work Activity MCP Server implementation.

This module contains the server class that exposes the Jira and GitHub
activity tools to MCP clients through FastMCP.
"""

from typing import Optional

from fastmcp import FastMCP

from work_activity_mcp.src.metrics import track_tool_usage
from work_activity_mcp.src.settings import settings
from work_activity_mcp.src.tools import RegistryMiddleware, ToolRegistry, as_tool_error
from work_activity_mcp.utils.pylogger import (
    force_reconfigure_all_loggers,
    get_python_logger,
)

logger = get_python_logger()


class WorkActivityMCPServer:
    """MCP server exposing the tools of a `ToolRegistry` under their stable names."""

    def __init__(self, registry: Optional[ToolRegistry] = None):
        """Initialize FastMCP, logging and the tool registry."""
        try:
            self.mcp = FastMCP("work-activity-mcp")

            # FastMCP installs its own handlers; restore ours
            force_reconfigure_all_loggers(settings.PYTHON_LOG_LEVEL)

            self.registry = registry if registry is not None else ToolRegistry.from_settings(settings)
            self._register_mcp_tools()
            self.mcp.add_middleware(
                RegistryMiddleware(self.registry, timeout=settings.TOOL_TIMEOUT_SECONDS)
            )

            logger.info("Work Activity MCP Server initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize Work Activity MCP Server: {e}")
            raise

    def _register_mcp_tools(self) -> None:
        """Register every tool of the registry with the FastMCP server.

        Currently includes:
        - getRecentJiraActivity, getTodaysJiraActivity, getJiraActivityForDate
        - getAllUserEvents, getUserPushEvents, getUserCommitDetails
        - getRepositoryOwnerCommits, searchUserCommits
        """
        for tool in self.registry:
            handler = as_tool_error(track_tool_usage(tool.name)(tool.handler))
            self.mcp.tool(name=tool.name, description=tool.description)(handler)
            logger.debug(f"Registered tool {tool.name}")

    async def aclose(self) -> None:
        """Close the upstream HTTP clients."""
        await self.registry.aclose()
