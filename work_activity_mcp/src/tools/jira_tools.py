"""Jira activity tools."""

from typing import Annotated, Any, Dict, List, Optional

from pydantic import Field

from work_activity_mcp.src.services.jira import JiraActivityService
from work_activity_mcp.src.tools.definition import ToolDefinition, tool_definition

Username = Annotated[
    Optional[str],
    Field(description="Jira username or email, defaults to the configured account"),
]


def build_jira_tools(service: JiraActivityService) -> List[ToolDefinition]:
    """Create the Jira tool definitions bound to `service`."""

    async def get_recent_jira_activity(
        days: Annotated[int, Field(description="Number of days to look back")],
        username: Username = None,
    ) -> Dict[str, Any]:
        """
        Args:
            days: Number of days to look back (at least 1)
            username: Jira username or email (default: configured JIRA_EMAIL)

        Returns:
            User activity with the matching issues and total seconds logged
        """
        activity = await service.get_recent_jira_activity(days, username)
        return activity.to_dict()

    async def get_todays_jira_activity(username: Username = None) -> Dict[str, Any]:
        """
        Args:
            username: Jira username or email (default: configured JIRA_EMAIL)

        Returns:
            User activity for today, dateRange is today's date (YYYY-MM-DD)
        """
        activity = await service.get_todays_jira_activity(username)
        return activity.to_dict()

    async def get_jira_activity_for_date(
        date: Annotated[str, Field(description="Date to check activity for (YYYY-MM-DD)")],
        username: Username = None,
    ) -> Dict[str, Any]:
        """
        Args:
            date: Calendar date (YYYY-MM-DD) the work was logged on
            username: Jira username or email (default: configured JIRA_EMAIL)

        Returns:
            User activity for that date
        """
        activity = await service.get_jira_activity_for_date(date, username)
        return activity.to_dict()

    return [
        tool_definition(
            "getRecentJiraActivity",
            "Get recent Jira activity for a user",
            get_recent_jira_activity,
        ),
        tool_definition(
            "getTodaysJiraActivity",
            "Get todays Jira activity",
            get_todays_jira_activity,
        ),
        tool_definition(
            "getJiraActivityForDate",
            "Get Jira user activity for a specific date",
            get_jira_activity_for_date,
        ),
    ]
