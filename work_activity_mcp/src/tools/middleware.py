"""FastMCP middleware routing tool calls through the `ToolRegistry`."""

from typing import Optional

from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import Middleware, MiddlewareContext

from work_activity_mcp.src.errors import WorkActivityError
from work_activity_mcp.src.tools.registry import ToolRegistry
from work_activity_mcp.utils.pylogger import get_python_logger

logger = get_python_logger()


class RegistryMiddleware(Middleware):
    """Validate tool arguments with the registry and apply the call deadline.

    Runs before FastMCP's own argument handling, so invalid arguments reach
    the host as `ArgumentError` under the tool's advertised name.
    """

    def __init__(self, registry: ToolRegistry, timeout: Optional[float] = None):
        self.registry = registry
        self.timeout = timeout

    async def on_call_tool(self, context: MiddlewareContext, call_next):
        name = context.message.name
        try:
            self.registry.validate_arguments(name, context.message.arguments)
            return await self.registry.run_with_deadline(name, call_next(context), self.timeout)
        except WorkActivityError as e:
            logger.error(f"Tool {name} failed: {e.describe()}")
            raise ToolError(e.describe()) from e
