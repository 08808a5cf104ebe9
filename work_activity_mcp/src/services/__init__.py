"""Provider adapters behind the MCP tools."""

from work_activity_mcp.src.services.github import WorkCommitService
from work_activity_mcp.src.services.jira import JiraActivityService

__all__ = ["JiraActivityService", "WorkCommitService"]
