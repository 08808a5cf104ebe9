"""Tests for tool calls made by an MCP client against the FastMCP server."""

import asyncio
import json
from unittest.mock import patch

import httpx
import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from conftest import RecordingTransport, jira_issue, json_transport
from work_activity_mcp.src.mcp import WorkActivityMCPServer
from work_activity_mcp.src.settings import settings
from work_activity_mcp.src.tools import ToolRegistry


@pytest.fixture
def make_server(make_jira_service, make_github_service):
    def factory(jira_transport=None, github_transport=None) -> WorkActivityMCPServer:
        registry = ToolRegistry(
            make_jira_service(jira_transport or json_transport({"total": 0, "issues": []})),
            make_github_service(github_transport or json_transport([])),
        )
        return WorkActivityMCPServer(registry=registry)

    return factory


class TestToolCallsThroughClient:
    """Test cases for the host-facing tool call path"""

    @pytest.mark.asyncio
    async def test_result_is_camel_case_json(self, make_server):
        """Test that a successful call returns the activity summary"""
        server = make_server(jira_transport=json_transport({
            "total": 1,
            "issues": [jira_issue("PROJ-1", time_spent=3600)],
        }))

        async with Client(server.mcp) as client:
            result = await client.call_tool("getTodaysJiraActivity", {"username": "bob"})

        data = json.loads(result.content[0].text)
        assert data["user"] == "bob"
        assert data["dateRange"] == "2024-06-15"
        assert data["totalTimeSpentSeconds"] == 3600

    @pytest.mark.asyncio
    async def test_non_integer_offset_is_argument_error(self, make_server):
        """Test that a mistyped offset is reported under the tool name"""
        transport = json_transport([])
        server = make_server(github_transport=transport)

        async with Client(server.mcp) as client:
            with pytest.raises(ToolError, match="ArgumentError: Invalid arguments for getAllUserEvents"):
                await client.call_tool(
                    "getAllUserEvents", {"user": "octocat", "daysOffsetStart": "abc"}
                )

        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_unknown_argument_is_argument_error(self, make_server):
        """Test that arguments outside the tool schema are refused"""
        async with Client(make_server().mcp) as client:
            with pytest.raises(ToolError, match="ArgumentError: Invalid arguments for getRecentJiraActivity"):
                await client.call_tool("getRecentJiraActivity", {"days": 7, "project": "PROJ"})

    @pytest.mark.asyncio
    async def test_domain_error_kind(self, make_server):
        """Test that adapter errors keep their kind"""
        async with Client(make_server().mcp) as client:
            with pytest.raises(ToolError, match="ArgumentError: days must be at least 1, got 0"):
                await client.call_tool("getRecentJiraActivity", {"days": 0})

    @pytest.mark.asyncio
    async def test_upstream_status_kind(self, make_server):
        """Test that provider failures reach the client with their status"""
        server = make_server(github_transport=json_transport({"message": "Not Found"}, status_code=404))

        async with Client(server.mcp) as client:
            with pytest.raises(ToolError, match="UpstreamHttpError: GitHub returned HTTP 404"):
                await client.call_tool("getAllUserEvents", {"user": "nobody"})

    @pytest.mark.asyncio
    async def test_deadline_is_cancelled_kind(self, make_server):
        """Test that the tool deadline applies to client calls"""
        async def stall(request):
            await asyncio.sleep(10)
            return httpx.Response(200, json={"total": 0, "issues": []})

        with patch.object(settings, "TOOL_TIMEOUT_SECONDS", 0.05):
            server = make_server(jira_transport=RecordingTransport(stall))

        async with Client(server.mcp) as client:
            with pytest.raises(ToolError, match="Cancelled: getTodaysJiraActivity did not finish"):
                await client.call_tool("getTodaysJiraActivity", {})
