"""GitHub event and commit tools.

Argument names are camelCase because they are part of the tool contract
advertised to MCP hosts.
"""

from typing import Annotated, Any, Dict, List, Optional

from pydantic import Field

from work_activity_mcp.src.services.github import WorkCommitService
from work_activity_mcp.src.tools.definition import ToolDefinition, tool_definition

GitHubUser = Annotated[str, Field(description="GitHub user")]
DaysOffsetStart = Annotated[
    Optional[int], Field(description="Number of days to look back from")
]
DaysOffsetEnd = Annotated[
    Optional[int],
    Field(
        description="Number of days to look back until, should be zero if today should be included"
    ),
]


def build_github_tools(service: WorkCommitService) -> List[ToolDefinition]:
    """Create the GitHub tool definitions bound to `service`."""

    async def get_all_user_events(
        user: GitHubUser,
        daysOffsetStart: DaysOffsetStart = None,  # noqa: N803
        daysOffsetEnd: DaysOffsetEnd = None,  # noqa: N803
    ) -> List[Dict[str, Any]]:
        """
        Args:
            user: GitHub login
            daysOffsetStart: Window start in days before today (default: no filtering)
            daysOffsetEnd: Window end in days before today (default: today)

        Returns:
            Events newest first, as returned by GitHub
        """
        events = await service.get_all_user_events(user, daysOffsetStart, daysOffsetEnd)
        return [event.to_dict() for event in events]

    async def get_user_push_events(
        user: GitHubUser,
        daysOffsetStart: DaysOffsetStart = None,  # noqa: N803
        daysOffsetEnd: DaysOffsetEnd = None,  # noqa: N803
    ) -> List[Dict[str, Any]]:
        events = await service.get_user_push_events(user, daysOffsetStart, daysOffsetEnd)
        return [event.to_dict() for event in events]

    async def get_user_commit_details(
        user: GitHubUser,
        daysOffsetStart: DaysOffsetStart = None,  # noqa: N803
        daysOffsetEnd: DaysOffsetEnd = None,  # noqa: N803
    ) -> List[Dict[str, Any]]:
        commits = await service.get_user_commit_details(user, daysOffsetStart, daysOffsetEnd)
        return [commit.to_dict() for commit in commits]

    async def get_repository_owner_commits(
        repo: Annotated[str, Field(description="Name of the GitHub repository")],
        owner: Annotated[str, Field(description="Owner of the repository")],
    ) -> List[Dict[str, Any]]:
        """
        Args:
            repo: Repository name without the owner
            owner: Login of the repository owner

        Returns:
            Commits of the repository, newest first
        """
        commits = await service.get_repository_owner_commits(repo, owner)
        return [commit.to_dict() for commit in commits]

    async def search_user_commits(
        author: Annotated[str, Field(description="GitHub username or email")],
        searchTerm: Annotated[  # noqa: N803
            str, Field(description="Search term to search commits for")
        ],
    ) -> Dict[str, Any]:
        result = await service.search_user_commits(author, searchTerm)
        return result.to_dict()

    return [
        tool_definition(
            "getAllUserEvents",
            "Get all events for a specific user",
            get_all_user_events,
        ),
        tool_definition(
            "getUserPushEvents",
            "Get only push events (containing commits) for a specific user",
            get_user_push_events,
        ),
        tool_definition(
            "getUserCommitDetails",
            "Get all commits for a specific user (extracted from push events)",
            get_user_commit_details,
        ),
        tool_definition(
            "getRepositoryOwnerCommits",
            "Get commits for a specific repository of which the user is the owner",
            get_repository_owner_commits,
        ),
        tool_definition(
            "searchUserCommits",
            "Search for all commits by a specific author across all repositories",
            search_user_commits,
        ),
    ]
