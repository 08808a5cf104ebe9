"""Main entry point for the Work Activity MCP Server."""

import asyncio
import sys

from work_activity_mcp.src.mcp import WorkActivityMCPServer
from work_activity_mcp.src.settings import settings, validate_config
from work_activity_mcp.utils.pylogger import get_python_logger

# Initialize logger
logger = get_python_logger()


def main() -> None:
    """Main entry point for the MCP server.

    Validates configuration and runs the server with the configured transport.
    """
    server = None
    try:
        validate_config(settings)
        logger.info("Configuration validation passed")

        server = WorkActivityMCPServer()

        logger.info(f"Starting Work Activity MCP server with {settings.MCP_TRANSPORT} transport")

        if settings.ENABLE_METRICS:
            from work_activity_mcp.src.metrics import start_metrics_thread
            start_metrics_thread()

        if settings.MCP_TRANSPORT == "stdio":
            server.mcp.run(transport="stdio")
        else:
            server.mcp.run(
                transport=settings.MCP_TRANSPORT,
                host=settings.FASTMCP_HOST,
                port=settings.FASTMCP_PORT
            )

    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down")
    except Exception as e:
        logger.error(f"Error running MCP server: {e}", exc_info=True)
        sys.exit(1)
    finally:
        if server is not None:
            try:
                asyncio.run(server.aclose())
            except Exception as e:
                logger.error(f"Error during cleanup: {e}")
        logger.info("Work Activity MCP server shutting down")


if __name__ == "__main__":
    main()
