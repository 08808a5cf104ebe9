"""Prometheus metrics for tool calls and upstream requests."""

import http.server
import socketserver
import threading
import time
from functools import wraps
from typing import Any, Callable

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Histogram,
    generate_latest,
)

from work_activity_mcp.src.settings import settings
from work_activity_mcp.utils.pylogger import get_python_logger

logger = get_python_logger()

tool_calls_total = Counter(
    'mcp_tool_calls_total',
    'Total number of MCP tool calls',
    ['tool_name', 'status']
)

tool_call_duration_seconds = Histogram(
    'mcp_tool_call_duration_seconds',
    'Duration of MCP tool calls in seconds',
    ['tool_name']
)

upstream_requests_total = Counter(
    'mcp_upstream_requests_total',
    'Total number of requests sent to Jira or GitHub',
    ['provider', 'status']
)

upstream_request_duration_seconds = Histogram(
    'mcp_upstream_request_duration_seconds',
    'Duration of upstream requests in seconds',
    ['provider']
)


def metrics_enabled() -> bool:
    return settings.ENABLE_METRICS


def track_tool_usage(tool_name: str):
    """Decorator to track tool usage metrics"""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            if not metrics_enabled():
                return await func(*args, **kwargs)

            start_time = time.time()
            try:
                result = await func(*args, **kwargs)
                tool_calls_total.labels(tool_name=tool_name, status='success').inc()
                return result
            except Exception:
                tool_calls_total.labels(tool_name=tool_name, status='error').inc()
                raise
            finally:
                duration = time.time() - start_time
                tool_call_duration_seconds.labels(tool_name=tool_name).observe(duration)
        return wrapper
    return decorator


def track_upstream_request(provider: str, start_time: float, success: bool) -> None:
    """Track a single upstream request"""
    if metrics_enabled():
        status = 'success' if success else 'error'
        upstream_requests_total.labels(provider=provider, status=status).inc()
        upstream_request_duration_seconds.labels(provider=provider).observe(
            time.time() - start_time
        )


class MetricsHandler(http.server.BaseHTTPRequestHandler):
    """HTTP handler for Prometheus metrics endpoint"""

    def do_GET(self):
        if self.path == '/metrics':
            try:
                metrics_data = generate_latest()
                self.send_response(200)
                self.send_header('Content-Type', CONTENT_TYPE_LATEST)
                self.send_header('Content-Length', str(len(metrics_data)))
                self.end_headers()
                self.wfile.write(metrics_data)
            except Exception as e:
                logger.error(f"Error generating metrics: {e}")
                self.send_error(500, f"Internal Server Error: {e}")
        elif self.path == '/health':
            self.send_response(200)
            self.send_header('Content-Type', 'application/json')
            self.end_headers()
            self.wfile.write(b'{"status": "healthy"}')
        else:
            self.send_error(404, "Not Found")

    def log_message(self, format, *args):
        # Default access log would write to stderr on every scrape
        pass


def start_metrics_server() -> None:
    """Start the metrics HTTP server, blocking the calling thread"""
    if not metrics_enabled():
        return

    try:
        httpd = socketserver.TCPServer(("", settings.METRICS_PORT), MetricsHandler)
        httpd.allow_reuse_address = True
        logger.info(f"Metrics available at http://localhost:{settings.METRICS_PORT}/metrics")
        httpd.serve_forever()
    except Exception as e:
        logger.error(f"Failed to start metrics server: {e}")


def start_metrics_thread() -> None:
    """Start metrics server in a background thread"""
    if metrics_enabled():
        logger.info("Starting metrics server")
        metrics_thread = threading.Thread(target=start_metrics_server, daemon=True)
        metrics_thread.start()
    else:
        logger.info("Metrics server not started")
