"""Domain records returned by the activity tools."""

from work_activity_mcp.src.models.github import (
    CommitAuthor,
    CommitDetail,
    CommitEvent,
    CommitEventDetail,
    CommitInfo,
    CommitSearchResult,
    CommitUser,
    EventPayload,
    Repository,
)
from work_activity_mcp.src.models.jira import (
    Author,
    Comment,
    ContentBlock,
    Fields,
    Issue,
    SearchResponse,
    Status,
    StatusCategory,
    TimeTracking,
    UserActivity,
    Worklog,
    WorklogEntry,
)

__all__ = [
    "Author",
    "Comment",
    "CommitAuthor",
    "CommitDetail",
    "CommitEvent",
    "CommitEventDetail",
    "CommitInfo",
    "CommitSearchResult",
    "CommitUser",
    "ContentBlock",
    "EventPayload",
    "Fields",
    "Issue",
    "Repository",
    "SearchResponse",
    "Status",
    "StatusCategory",
    "TimeTracking",
    "UserActivity",
    "Worklog",
    "WorklogEntry",
]
