"""Registry owning the provider adapters and dispatching tools by name."""

import asyncio
from typing import Any, Awaitable, Dict, Iterator, List, Mapping, Optional

from pydantic import BaseModel, ValidationError

from work_activity_mcp.src.errors import ArgumentError, RequestCancelledError
from work_activity_mcp.src.services import JiraActivityService, WorkCommitService
from work_activity_mcp.src.settings import Settings
from work_activity_mcp.src.tools.definition import ToolDefinition, describe_validation_error
from work_activity_mcp.src.tools.github_tools import build_github_tools
from work_activity_mcp.src.tools.jira_tools import build_jira_tools
from work_activity_mcp.utils.pylogger import get_python_logger

logger = get_python_logger()


class ToolRegistry:
    """Tool table keyed by the stable tool names advertised to MCP hosts."""

    def __init__(self, jira_service: JiraActivityService, github_service: WorkCommitService):
        self.jira_service = jira_service
        self.github_service = github_service
        self._tools: Dict[str, ToolDefinition] = {
            tool.name: tool
            for tool in build_jira_tools(jira_service) + build_github_tools(github_service)
        }

    @classmethod
    def from_settings(cls, config: Settings) -> "ToolRegistry":
        return cls(JiraActivityService(config), WorkCommitService(config))

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    def names(self) -> List[str]:
        return list(self._tools)

    def get(self, name: str) -> ToolDefinition:
        try:
            return self._tools[name]
        except KeyError:
            raise ArgumentError(f"Unknown tool {name!r}") from None

    async def invoke(
        self,
        name: str,
        arguments: Optional[Mapping[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Validate `arguments` and run the named tool.

        Args:
            name: Tool name, e.g. "getRecentJiraActivity".
            arguments: Argument map as sent by the host.
            timeout: Deadline in seconds for the whole invocation.

        Returns:
            JSON-serializable tool result.

        Raises:
            ArgumentError: Unknown tool or invalid arguments.
            RequestCancelledError: `timeout` elapsed before the tool finished.
        """
        parsed = self.validate_arguments(name, arguments)
        call = self.get(name).handler(**parsed.model_dump())
        return await self.run_with_deadline(name, call, timeout)

    def validate_arguments(
        self, name: str, arguments: Optional[Mapping[str, Any]] = None
    ) -> BaseModel:
        """Check `arguments` against the argument model of the named tool.

        Raises:
            ArgumentError: Unknown tool, missing, extra or mistyped arguments.
        """
        tool = self.get(name)
        try:
            return tool.arguments.model_validate(dict(arguments or {}))
        except ValidationError as e:
            raise ArgumentError(
                f"Invalid arguments for {name}: {describe_validation_error(e)}"
            ) from e

    async def run_with_deadline(
        self, name: str, call: Awaitable[Any], timeout: Optional[float] = None
    ) -> Any:
        if timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"Tool {name} did not finish within {timeout}s")
            raise RequestCancelledError(f"{name} did not finish within {timeout}s") from e

    async def aclose(self) -> None:
        await self.jira_service.close()
        await self.github_service.close()
