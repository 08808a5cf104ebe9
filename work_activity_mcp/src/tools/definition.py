"""Tool definitions: name, description, argument model and handler."""

import inspect
from dataclasses import dataclass
from functools import wraps
from typing import Any, Awaitable, Callable, Dict, Type

from fastmcp.exceptions import ToolError
from pydantic import BaseModel, ConfigDict, ValidationError, create_model

from work_activity_mcp.src.errors import WorkActivityError
from work_activity_mcp.utils.pylogger import get_python_logger

logger = get_python_logger()

Handler = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    arguments: Type[BaseModel]
    handler: Handler

    @property
    def input_schema(self) -> Dict[str, Any]:
        return self.arguments.model_json_schema()


def arguments_model(name: str, handler: Handler) -> Type[BaseModel]:
    """Build the argument model of a tool from its handler's signature."""
    fields = {}
    for param in inspect.signature(handler).parameters.values():
        default = ... if param.default is inspect.Parameter.empty else param.default
        fields[param.name] = (param.annotation, default)
    return create_model(
        f"{name[0].upper()}{name[1:]}Arguments",
        __config__=ConfigDict(extra="forbid"),
        **fields,
    )


def tool_definition(name: str, description: str, handler: Handler) -> ToolDefinition:
    return ToolDefinition(name, description, arguments_model(name, handler), handler)


def describe_validation_error(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        problems.append(f"{location}: {item['msg']}")
    return "; ".join(problems)


def as_tool_error(func: Handler) -> Handler:
    """Re-raise domain errors as MCP tool errors carrying kind and message."""
    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except WorkActivityError as e:
            logger.error(f"Tool {func.__name__} failed: {e.describe()}")
            raise ToolError(e.describe()) from e
    return wrapper
