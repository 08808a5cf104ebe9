"""Shared fixtures for the Work Activity MCP tests."""

from datetime import datetime
from typing import Callable, List

import httpx
import pytest

from work_activity_mcp.src.services.github import WorkCommitService
from work_activity_mcp.src.services.jira import JiraActivityService
from work_activity_mcp.src.settings import Settings

JIRA_BASE_URL = "https://jira.example.test/"
GITHUB_BASE_URL = "https://api.github.test"
FIXED_NOW = datetime(2024, 6, 15, 10, 30, 0)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it answered."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request):
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


def json_transport(payload, status_code: int = 200) -> RecordingTransport:
    return RecordingTransport(lambda request: httpx.Response(status_code, json=payload))


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        JIRA_API_KEY="YWxpY2VAZXhhbXBsZS5jb206dG9rZW4=",
        JIRA_EMAIL="alice@example.com",
        JIRA_BASE_URL=JIRA_BASE_URL,
        GITHUB_TOKEN="ghp_test_token",
        GITHUB_BASE_URL=GITHUB_BASE_URL,
        HTTP_TIMEOUT_SECONDS=5,
    )


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def make_jira_service(test_settings, fixed_clock):
    def factory(transport: httpx.MockTransport, **overrides) -> JiraActivityService:
        config = test_settings.model_copy(update=overrides) if overrides else test_settings
        return JiraActivityService(config, transport=transport, clock=fixed_clock)

    return factory


@pytest.fixture
def make_github_service(test_settings, fixed_clock):
    def factory(transport: httpx.MockTransport, **overrides) -> WorkCommitService:
        config = test_settings.model_copy(update=overrides) if overrides else test_settings
        return WorkCommitService(config, transport=transport, clock=fixed_clock)

    return factory


def jira_issue(key: str, time_spent=None, **fields) -> dict:
    """Issue JSON as returned by the Jira search endpoint."""
    issue_fields = {"summary": f"Work on {key}", "labels": ["backend"], **fields}
    if time_spent is not None:
        issue_fields["timetracking"] = {
            "originalEstimate": "1d",
            "originalEstimateSeconds": 28800,
            "remainingEstimateSeconds": 0,
            "timeSpent": "1h",
            "timeSpentSeconds": time_spent,
        }
    return {
        "expand": "operations,versionedRepresentations",
        "id": key.split("-")[-1],
        "key": key,
        "self": f"{JIRA_BASE_URL}rest/api/3/issue/{key.split('-')[-1]}",
        "fields": issue_fields,
    }


def github_event(event_id: str, created_at: str, event_type: str = "PushEvent", commits=None) -> dict:
    """Event JSON as returned by `GET /users/{user}/events`."""
    return {
        "id": event_id,
        "type": event_type,
        "actor": {
            "id": 583231,
            "login": "octocat",
            "display_login": "octocat",
            "avatar_url": "https://avatars.githubusercontent.com/u/583231?",
        },
        "repo": {
            "id": 1296269,
            "name": "octocat/Hello-World",
            "url": "https://api.github.com/repos/octocat/Hello-World",
        },
        "payload": {
            "repository_id": 1296269,
            "push_id": 10115855396,
            "size": len(commits or []),
            "distinct_size": len(commits or []),
            "ref": "refs/heads/main",
            "head": "7a8f3ac",
            "before": "883efe0",
            "commits": commits or [],
        },
        "public": True,
        "created_at": created_at,
    }
