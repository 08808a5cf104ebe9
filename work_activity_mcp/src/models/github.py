"""GitHub event and commit records."""

from typing import Annotated, List, Optional

from pydantic import AliasChoices, Field

from work_activity_mcp.src.models.base import ActivityModel, EmptyIfNone


def _provider_field(provider_name: str, domain_name: str):
    """Read `provider_name` from GitHub JSON, serialize as `domain_name`."""
    return Field(
        default=None,
        validation_alias=AliasChoices(provider_name, domain_name),
        serialization_alias=domain_name,
    )


class CommitUser(ActivityModel):
    username: Optional[str] = _provider_field("login", "username")
    id: Optional[int] = None
    avatar_url: Optional[str] = _provider_field("avatar_url", "avatarUrl")


class CommitAuthor(ActivityModel):
    name: Optional[str] = None
    email: Optional[str] = None
    date: Optional[str] = None


class Repository(ActivityModel):
    id: Optional[int] = None
    name: Optional[str] = None
    url: Optional[str] = None


class CommitEventDetail(ActivityModel):
    sha: Optional[str] = None
    message: Optional[str] = None
    distinct: bool = False
    url: Optional[str] = None
    author: Optional[CommitUser] = None


class EventPayload(ActivityModel):
    push_id: Optional[int] = _provider_field("push_id", "pushId")
    size: Optional[int] = None
    distinct_size: Optional[int] = _provider_field("distinct_size", "distinctSize")
    ref: Optional[str] = None
    head: Optional[str] = None
    before: Optional[str] = None
    commits: Annotated[List[CommitEventDetail], EmptyIfNone] = Field(default_factory=list)


class CommitEvent(ActivityModel):
    id: Optional[str] = None
    type: Optional[str] = None
    actor: Optional[CommitUser] = None
    repo: Optional[Repository] = None
    created_at: Optional[str] = _provider_field("created_at", "createdAt")
    payload: Optional[EventPayload] = None


class CommitDetail(ActivityModel):
    message: Optional[str] = None
    author: Optional[CommitAuthor] = None
    committer: Optional[CommitAuthor] = None


class CommitInfo(ActivityModel):
    sha: Optional[str] = None
    commit_detail: Optional[CommitDetail] = _provider_field("commit", "commitDetail")
    url: Optional[str] = _provider_field("html_url", "url")
    author: Optional[CommitUser] = None


class CommitSearchResult(ActivityModel):
    """Body of `GET /search/commits`."""

    total_count: Optional[int] = _provider_field("total_count", "totalCount")
    incomplete_results: Optional[bool] = _provider_field("incomplete_results", "incompleteResults")
    items: Annotated[List[CommitInfo], EmptyIfNone] = Field(default_factory=list)
