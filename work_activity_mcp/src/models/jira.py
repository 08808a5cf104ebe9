"""Jira Cloud search response records and the activity summary built from them."""

from typing import Annotated, Iterable, Iterator, List, Optional

from pydantic import AliasChoices, Field, computed_field

from work_activity_mcp.src.models.base import ActivityModel, EmptyIfNone, ZeroIfNone


class ContentBlock(ActivityModel):
    """One node of an Atlassian Document Format tree."""

    type: Optional[str] = None
    text: Optional[str] = None
    content: Annotated[List["ContentBlock"], EmptyIfNone] = Field(default_factory=list)

    def iter_text(self) -> Iterator[str]:
        if self.text is not None:
            yield self.text
        for child in self.content:
            yield from child.iter_text()


class Comment(ActivityModel):
    type: Optional[str] = None
    content: Annotated[List[ContentBlock], EmptyIfNone] = Field(default_factory=list)

    @property
    def plain_text(self) -> str:
        """Every text leaf in document order, joined by single spaces."""
        return " ".join(text for block in self.content for text in block.iter_text())


class Author(ActivityModel):
    account_id: Optional[str] = None
    email: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("emailAddress", "email"),
        serialization_alias="email",
    )
    display_name: Optional[str] = None


class StatusCategory(ActivityModel):
    name: Optional[str] = None


class Status(ActivityModel):
    name: Optional[str] = None
    description: Optional[str] = None
    status_category: Optional[StatusCategory] = None


class TimeTracking(ActivityModel):
    original_estimate_seconds: Annotated[int, ZeroIfNone] = 0
    remaining_estimate_seconds: Annotated[int, ZeroIfNone] = 0
    time_spent_seconds: Annotated[int, ZeroIfNone] = 0


class WorklogEntry(ActivityModel):
    id: Optional[str] = None
    url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("self", "url"),
        serialization_alias="url",
    )
    author: Optional[Author] = None
    time_spent_seconds: Annotated[int, ZeroIfNone] = 0
    started: Optional[str] = None
    updated: Optional[str] = None
    comment: Optional[Comment] = None

    @computed_field(alias="commentText")
    @property
    def comment_text(self) -> str:
        return self.comment.plain_text if self.comment is not None else ""


class Worklog(ActivityModel):
    total: Annotated[int, ZeroIfNone] = 0
    worklogs: Annotated[List[WorklogEntry], EmptyIfNone] = Field(default_factory=list)


class Fields(ActivityModel):
    summary: Optional[str] = None
    timetracking: Optional[TimeTracking] = None
    worklog: Optional[Worklog] = None
    status: Optional[Status] = None
    status_category: Optional[StatusCategory] = None
    labels: Annotated[List[str], EmptyIfNone] = Field(default_factory=list)
    subtasks: Annotated[List["Issue"], EmptyIfNone] = Field(default_factory=list)


class Issue(ActivityModel):
    id: Optional[str] = None
    key: Optional[str] = None
    url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("self", "url"),
        serialization_alias="url",
    )
    fields: Optional[Fields] = None

    @property
    def time_spent_seconds(self) -> int:
        """Seconds logged on the issue, 0 when fields or timetracking are absent."""
        if self.fields is None or self.fields.timetracking is None:
            return 0
        return self.fields.timetracking.time_spent_seconds


class SearchResponse(ActivityModel):
    """Body of `GET /rest/api/3/search`. `issues` is the only required key."""

    total: Annotated[int, ZeroIfNone] = 0
    issues: List[Issue]


class UserActivity(ActivityModel):
    user: str
    date_range: str
    issues: List[Issue] = Field(default_factory=list)
    total_time_spent_seconds: int = 0

    @classmethod
    def from_issues(cls, user: str, date_range: str, issues: List[Issue]) -> "UserActivity":
        return cls(
            user=user,
            date_range=date_range,
            issues=issues,
            total_time_spent_seconds=total_time_spent(issues),
        )


def total_time_spent(issues: Iterable[Issue]) -> int:
    return sum(issue.time_spent_seconds for issue in issues)


ContentBlock.model_rebuild()
Fields.model_rebuild()
