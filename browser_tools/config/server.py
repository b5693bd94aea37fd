"""HTTP server and identity configuration."""

from __future__ import annotations

ENV_HOST = "BROWSER_TOOLS_HOST"
ENV_PORT = "BROWSER_TOOLS_PORT"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3025

# The CLI historically starts on 3026 so it can run next to a plain server.
CLI_DEFAULT_PORT = 3026
CLI_DEFAULT_HOST = "localhost"

IDENTITY_SIGNATURE = "mcp-browser-connector-24x7"
IDENTITY_NAME = "Optimized Browser Tools Server"
IDENTITY_FEATURES = ["auto-screenshot", "real-time-logs", "ai-control"]

CORS_ALLOW_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_ALLOW_HEADERS = ["Content-Type", "Authorization"]

ENDPOINTS = [
    "GET /.identity",
    "POST /api/screenshot",
    "GET /api/data",
    "GET /api/logs?limit=100&type=console-log",
    "GET /api/screenshots",
    "GET /api/debug",
    "POST /extension-log",
    "POST /screenshot",
    "POST /current-url",
]

__all__ = [
    "ENV_HOST",
    "ENV_PORT",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "CLI_DEFAULT_PORT",
    "CLI_DEFAULT_HOST",
    "IDENTITY_SIGNATURE",
    "IDENTITY_NAME",
    "IDENTITY_FEATURES",
    "CORS_ALLOW_METHODS",
    "CORS_ALLOW_HEADERS",
    "ENDPOINTS",
]
