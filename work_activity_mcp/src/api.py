"""FastAPI application for the Work Activity MCP server.

Serves a health check and mounts the MCP HTTP app.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from work_activity_mcp import __version__
from work_activity_mcp.src.mcp import WorkActivityMCPServer
from work_activity_mcp.src.settings import settings
from work_activity_mcp.utils.pylogger import get_python_logger

logger = get_python_logger(settings.PYTHON_LOG_LEVEL)

server = WorkActivityMCPServer()

# Create the MCP HTTP app
mcp_app = server.mcp.http_app(path="/mcp")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan handler for the FastAPI application."""
    logger.info("Starting Work Activity MCP server")

    async with mcp_app.lifespan(app):
        logger.info("Server is ready to accept connections")
        yield

    await server.aclose()
    logger.info("Shutting down Work Activity MCP server")


app = FastAPI(lifespan=lifespan, title="Work Activity MCP Server")


@app.get("/health")
async def health_check():
    """Health check endpoint for the MCP server."""
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "service": "work-activity-mcp",
            "transport_protocol": settings.MCP_TRANSPORT,
            "tools": server.registry.names(),
            "version": __version__,
        },
    )


# Mount the MCP app
app.mount("/", mcp_app)
