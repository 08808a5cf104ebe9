"""Jira activity adapter.

Builds JQL for "issues the user worked on", runs it against the Jira Cloud
search endpoint and projects the result into a `UserActivity` with the total
time spent across the returned issues.
"""

from datetime import date, datetime
from typing import Any, Callable, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from work_activity_mcp.src.errors import ArgumentError, ConfigError, UpstreamParseError
from work_activity_mcp.src.http_client import UpstreamClient
from work_activity_mcp.src.models.jira import SearchResponse, UserActivity
from work_activity_mcp.src.settings import Settings
from work_activity_mcp.utils.pylogger import get_python_logger

logger = get_python_logger()

JIRA_SEARCH_PATH = "/rest/api/3/search"

# Exact field lists of the documented search URLs. `status` is not requested;
# Fields still projects it alongside statusCategory when a response carries it.
RECENT_ACTIVITY_FIELDS = "summary,worklog,statusCategory,labels,timetracking"
TODAYS_ACTIVITY_FIELDS = "summary,worklog,statusCategory,labels,subtasks,timetracking"

# Kept literal in the encoded jql parameter; everything else is percent-encoded
JQL_SAFE_CHARS = "'()"


def quote_jql_string(value: str) -> str:
    """Wrap a value in single quotes for use as a JQL string literal.

    Raises:
        ArgumentError: If the value itself contains a single quote.
    """
    if "'" in value:
        raise ArgumentError(f"Invalid Jira user {value!r}: single quotes are not allowed")
    return f"'{value}'"


def validate_days(days: Any) -> int:
    # bool is an int subclass
    if isinstance(days, bool) or not isinstance(days, int):
        raise ArgumentError(f"days must be an integer, got {days!r}")
    if days < 1:
        raise ArgumentError(f"days must be at least 1, got {days}")
    return days


def parse_activity_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as e:
        raise ArgumentError(f"date must be formatted as YYYY-MM-DD, got {value!r}") from e


def build_recent_activity_jql(user: str, days: int) -> str:
    window = f"'-{days}d'"
    return (
        f"worklogAuthor = {quote_jql_string(user)} "
        f"AND (worklogDate >= {window} OR updated >= {window})"
    )


def build_todays_activity_jql(user: str) -> str:
    return (
        f"worklogAuthor = {quote_jql_string(user)} "
        "AND updated >= startOfDay() AND updated < endOfDay()"
    )


def build_date_activity_jql(user: str, activity_date: date) -> str:
    return (
        f"worklogAuthor = {quote_jql_string(user)} "
        f"AND worklogDate = '{activity_date.isoformat()}'"
    )


def build_search_url(jql: str, fields: str) -> str:
    """Search path with the jql and fields query parameters already encoded."""
    return f"{JIRA_SEARCH_PATH}?jql={quote(jql, safe=JQL_SAFE_CHARS)}&fields={fields}"


class JiraActivityService:
    """Jira Cloud activity tools bound to one configuration and HTTP client."""

    provider = "Jira"

    def __init__(
        self,
        config: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.api_key = config.JIRA_API_KEY
        self.default_user = config.JIRA_EMAIL
        self._clock = clock

        # The key is already base64("email:token")
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Basic {self.api_key}"

        self.client = UpstreamClient(
            self.provider,
            config.JIRA_BASE_URL,
            headers,
            timeout=config.HTTP_TIMEOUT_SECONDS,
            max_connections=config.MAX_HTTP_CONNECTIONS,
            transport=transport,
        )
        logger.info(f"JiraActivityService created for user: {self.default_user}")

    def resolve_user(self, username: Optional[str]) -> str:
        """Return `username`, or the configured default identity when it is empty."""
        if username:
            return username
        if not self.default_user:
            raise ConfigError("No Jira username given and JIRA_EMAIL is not configured")
        return self.default_user

    async def get_recent_jira_activity(
        self, days: int, username: Optional[str] = None
    ) -> UserActivity:
        """Issues the user logged work on or updated in the past `days` days."""
        days = validate_days(days)
        user = self.resolve_user(username)
        jql = build_recent_activity_jql(user, days)

        logger.info(f"Fetching recent Jira activity for user {user} in the last {days} days")

        response = await self._search(jql, RECENT_ACTIVITY_FIELDS)
        activity = UserActivity.from_issues(user, f"for the past {days} days.", response.issues)

        logger.info(
            f"Found {len(activity.issues)} issues with activity for user {user} "
            f"in the last {days} days"
        )
        return activity

    async def get_todays_jira_activity(self, username: Optional[str] = None) -> UserActivity:
        """Issues of the user updated today, by the Jira server's clock."""
        user = self.resolve_user(username)
        today = self._clock().date()
        jql = build_todays_activity_jql(user)

        logger.info(f"Fetching Jira activity for user {user} for today {today} with query {jql}")

        response = await self._search(jql, TODAYS_ACTIVITY_FIELDS)
        activity = UserActivity.from_issues(user, today.isoformat(), response.issues)

        logger.info(
            f"Found {len(activity.issues)} issues with activity for user {user} for today {today}"
        )
        return activity

    async def get_jira_activity_for_date(
        self, activity_date: Any, username: Optional[str] = None
    ) -> UserActivity:
        """Issues the user logged work on for a single calendar date."""
        day = parse_activity_date(activity_date)
        user = self.resolve_user(username)
        jql = build_date_activity_jql(user, day)

        logger.info(f"Fetching Jira activity for user {user} on date {day}")

        response = await self._search(jql, RECENT_ACTIVITY_FIELDS)
        activity = UserActivity.from_issues(user, day.isoformat(), response.issues)

        logger.info(
            f"Found {len(activity.issues)} issues with activity for user {user} on date {day}"
        )
        return activity

    async def _search(self, jql: str, fields: str) -> SearchResponse:
        if not self.api_key:
            raise ConfigError("JIRA_API_KEY is not configured")

        payload = await self.client.get_json(build_search_url(jql, fields))

        try:
            response = SearchResponse.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Error parsing Jira search response: {e}")
            raise UpstreamParseError(
                f"Failed to parse Jira response: {e.error_count()} validation error(s)"
            ) from e

        logger.debug(f"Jira search returned total={response.total} issues={len(response.issues)}")
        return response

    async def close(self) -> None:
        await self.client.close()
