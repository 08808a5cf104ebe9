"""GitHub events adapter: public event stream, repository commits and commit search."""

from datetime import date, datetime, time, timedelta
from typing import Any, Callable, Iterable, List, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from work_activity_mcp.src.errors import ArgumentError, ConfigError, UpstreamParseError
from work_activity_mcp.src.http_client import UpstreamClient
from work_activity_mcp.src.models.github import (
    CommitEvent,
    CommitEventDetail,
    CommitInfo,
    CommitSearchResult,
)
from work_activity_mcp.src.settings import Settings
from work_activity_mcp.utils.pylogger import get_python_logger

logger = get_python_logger()

GITHUB_ACCEPT = "application/vnd.github+json"
COMMIT_SEARCH_ACCEPT = "application/vnd.github.cloak-preview+json"
PUSH_EVENT = "PushEvent"

T = TypeVar("T")


def validate_offset(name: str, value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ArgumentError(f"{name} must be an integer, got {value!r}")
    return value


def path_segment(name: str, value: Any) -> str:
    """Percent-encode a user, owner or repository name for use in a URL path."""
    if not isinstance(value, str) or not value.strip():
        raise ArgumentError(f"{name} must be a non-empty string")
    if "/" in value:
        raise ArgumentError(f"{name} must not contain '/', got {value!r}")
    return quote(value, safe="")


def window_cutoff(
    today: date,
    days_offset_start: Optional[int],
    days_offset_end: Optional[int] = None,
) -> Optional[datetime]:
    """Lower bound (exclusive) of the event window, or None for no filtering.

    The window ends at the last instant of `today - days_offset_end` (or of
    today) and spans `days_offset_start - days_offset_end` days (or
    `days_offset_start` days when no end offset is given).
    """
    if days_offset_start is None or days_offset_start <= 0:
        return None

    if days_offset_end is not None:
        end = datetime.combine(today - timedelta(days=days_offset_end), time.max)
        interval = days_offset_start - days_offset_end
    else:
        end = datetime.combine(today, time.max)
        interval = days_offset_start

    return end - timedelta(days=interval)


def parse_event_time(value: Optional[str]) -> datetime:
    """Parse a GitHub `created_at` timestamp as naive wall-clock time."""
    if not value:
        raise UpstreamParseError("GitHub event is missing created_at")
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise UpstreamParseError(f"Invalid GitHub event timestamp {value!r}") from e
    return parsed.replace(tzinfo=None)


def events_after(events: Iterable[CommitEvent], cutoff: datetime) -> List[CommitEvent]:
    """Events created strictly after `cutoff`, in their original order.

    Events without a usable `created_at` cannot be placed in the window and
    are left out.
    """
    kept = []
    for event in events:
        try:
            created = parse_event_time(event.created_at)
        except UpstreamParseError as e:
            logger.warning(f"Skipping GitHub event {event.id}: {e}")
            continue
        if created > cutoff:
            kept.append(event)
    return kept


class WorkCommitService:
    """GitHub activity tools bound to one configuration and HTTP client."""

    provider = "GitHub"

    def __init__(
        self,
        config: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.token = config.GITHUB_TOKEN
        self._clock = clock

        headers = {"Accept": GITHUB_ACCEPT}
        if self.token:
            headers["Authorization"] = f"token {self.token}"

        self.client = UpstreamClient(
            self.provider,
            config.GITHUB_BASE_URL,
            headers,
            timeout=config.HTTP_TIMEOUT_SECONDS,
            max_connections=config.MAX_HTTP_CONNECTIONS,
            transport=transport,
        )
        logger.info(f"WorkCommitService created for {config.GITHUB_BASE_URL}")

    async def get_all_user_events(
        self,
        user: str,
        days_offset_start: Optional[int] = None,
        days_offset_end: Optional[int] = None,
    ) -> List[CommitEvent]:
        """Public events of `user`, optionally clipped to a day window."""
        days_offset_start = validate_offset("daysOffsetStart", days_offset_start)
        days_offset_end = validate_offset("daysOffsetEnd", days_offset_end)
        url = f"/users/{path_segment('user', user)}/events"

        logger.info(
            f"Fetching GitHub events for user {user} "
            f"(daysOffsetStart={days_offset_start}, daysOffsetEnd={days_offset_end})"
        )

        events = await self._get_list(url, CommitEvent)

        cutoff = window_cutoff(self._clock().date(), days_offset_start, days_offset_end)
        if cutoff is not None:
            events = events_after(events, cutoff)

        logger.info(f"Found {len(events)} GitHub events for user {user}")
        return events

    async def get_user_push_events(
        self,
        user: str,
        days_offset_start: Optional[int] = None,
        days_offset_end: Optional[int] = None,
    ) -> List[CommitEvent]:
        """Only the push events (the ones carrying commits) of `user`."""
        events = await self.get_all_user_events(user, days_offset_start, days_offset_end)
        return [event for event in events if event.type == PUSH_EVENT]

    async def get_user_commit_details(
        self,
        user: str,
        days_offset_start: Optional[int] = None,
        days_offset_end: Optional[int] = None,
    ) -> List[CommitEventDetail]:
        """Commits pushed by `user`, flattened out of their push events."""
        events = await self.get_user_push_events(user, days_offset_start, days_offset_end)
        return [
            commit
            for event in events
            if event.payload is not None
            for commit in event.payload.commits
        ]

    async def get_repository_owner_commits(self, repo: str, owner: str) -> List[CommitInfo]:
        """Commits of `owner/repo`, as listed by GitHub."""
        url = f"/repos/{path_segment('owner', owner)}/{path_segment('repo', repo)}/commits"

        logger.info(f"Fetching commits for repository {owner}/{repo}")

        commits = await self._get_list(url, CommitInfo)

        logger.info(f"Found {len(commits)} commits in repository {owner}/{repo}")
        return commits

    async def search_user_commits(self, author: str, search_term: str) -> CommitSearchResult:
        """Commits by `author` across repositories whose message matches `search_term`."""
        if not isinstance(author, str) or not author.strip():
            raise ArgumentError("author must be a non-empty string")
        if not isinstance(search_term, str):
            raise ArgumentError("searchTerm must be a string")

        query = f"{search_term} author:{author}".strip()
        logger.info(f"Searching GitHub commits with query {query!r}")

        payload = await self._get(
            "/search/commits",
            params={"q": query},
            headers={"Accept": COMMIT_SEARCH_ACCEPT},
        )
        try:
            result = CommitSearchResult.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Error parsing GitHub commit search response: {e}")
            raise UpstreamParseError("Failed to parse GitHub commit search response") from e

        logger.info(f"Commit search for {author} matched {result.total_count} commits")
        return result

    async def _get(self, url: str, **kwargs) -> Any:
        if not self.token:
            raise ConfigError("GITHUB_TOKEN is not configured")
        return await self.client.get_json(url, **kwargs)

    async def _get_list(self, url: str, model: Type[T]) -> List[T]:
        payload = await self._get(url)
        try:
            return TypeAdapter(List[model]).validate_python(payload)
        except ValidationError as e:
            logger.error(f"Error parsing GitHub response from {url}: {e}")
            raise UpstreamParseError(f"Failed to parse GitHub response from {url}") from e

    async def close(self) -> None:
        await self.client.close()
