"""Command-line front end: start the server or talk to a running one."""

from __future__ import annotations

import sys
import logging
import argparse
from typing import Any
from pathlib import Path

import httpx
import uvicorn

from browser_tools import __version__
from browser_tools.server import create_app
from browser_tools.storage.encoding import timestamp_slug
from browser_tools.runtime.logging import configure_logging
from browser_tools.runtime.settings import load_settings
from browser_tools.state.settings import AppSettings, ServerSettings
from browser_tools.config.server import CLI_DEFAULT_HOST, CLI_DEFAULT_PORT

logger = logging.getLogger(__name__)

COMMANDS = ("start", "test", "screenshot", "logs", "debug", "help")

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

HELP_EPILOG = """\
commands:
  start [port]     start the server (default port: 3026)
  test             capture a screenshot and verify the saved file
  screenshot       capture a screenshot now
  logs             show the latest extension logs
  debug            show server debug information
  help             show this help

endpoints:
  POST /api/screenshot   AI screenshot
  GET  /api/logs         extension logs
  GET  /api/screenshots  saved screenshots
  GET  /api/debug        server debug information
"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="browser-tools",
        description=f"Browser Tools v{__version__} - screenshots and logs from a live browser for AI assistants",
        epilog=HELP_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("command", nargs="?", default="start", choices=COMMANDS)
    p.add_argument("port_arg", nargs="?", type=int, metavar="port", help="port for 'start'")
    p.add_argument("--port", "-p", type=int, default=CLI_DEFAULT_PORT, help="server port")
    p.add_argument("--host", default=CLI_DEFAULT_HOST, help="server host")
    p.add_argument("--quiet", "-q", action="store_true", help="reduce output")
    p.add_argument("--timeout", type=float, default=30.0, help="HTTP timeout in seconds")
    return p


def _base_url(args: argparse.Namespace) -> str:
    return f"http://{args.host}:{args.port}"


def _request(args: argparse.Namespace, method: str, path: str, **kwargs: Any) -> dict[str, Any] | None:
    try:
        response = httpx.request(method, f"{_base_url(args)}{path}", timeout=args.timeout, **kwargs)
    except httpx.HTTPError as exc:
        print(f"request failed: {exc}")
        print("hint: make sure the server is running: browser-tools start")
        return None
    try:
        return response.json()
    except ValueError as exc:
        print(f"could not parse response ({response.status_code}): {exc}")
        return None


def cmd_start(args: argparse.Namespace) -> int:
    port = args.port_arg or args.port
    base = load_settings()
    settings = AppSettings(
        server=ServerSettings(host=base.server.host, port=port),
        capture=base.capture,
        logs=base.logs,
        websocket=base.websocket,
    )
    if not args.quiet:
        print(f"Starting Browser Tools server on http://localhost:{port}")
        print(f"  POST http://localhost:{port}/api/screenshot  - AI screenshot")
        print(f"  GET  http://localhost:{port}/api/logs        - logs")
        print(f"  GET  http://localhost:{port}/api/debug       - debug info")
        print(f"  GET  http://localhost:{port}/api/screenshots - screenshot list")
        print("Press Ctrl+C to stop")
    uvicorn.run(create_app(settings), host=settings.server.host, port=port, log_level="warning" if args.quiet else "info")
    return 0


def _take_screenshot(args: argparse.Namespace, prefix: str) -> dict[str, Any] | None:
    body = {"filename": f"{prefix}-{timestamp_slug()}.png"}
    return _request(args, "POST", "/api/screenshot", json=body)


def cmd_screenshot(args: argparse.Namespace) -> int:
    response = _take_screenshot(args, "cli-screenshot")
    if response is None:
        return 1
    if not response.get("success"):
        print(f"screenshot failed: {response.get('error')}")
        return 2
    print("screenshot saved")
    print(f"  path: {response.get('path')}")
    return 0


def cmd_test(args: argparse.Namespace) -> int:
    print("testing AI screenshot...")
    response = _take_screenshot(args, "cli-test")
    if response is None:
        return 1
    if not response.get("success"):
        print(f"test failed: {response.get('error')}")
        return 2

    path = Path(str(response.get("path")))
    if not path.is_file():
        print(f"test failed: {path} does not exist on this machine")
        return 2
    with path.open("rb") as fh:
        header = fh.read(len(PNG_SIGNATURE))
    if header != PNG_SIGNATURE:
        print(f"test failed: {path} is not a PNG file")
        return 2
    print(f"test passed: {path} ({path.stat().st_size} bytes)")
    return 0


def cmd_logs(args: argparse.Namespace) -> int:
    response = _request(args, "GET", "/api/logs", params={"limit": 10})
    if response is None:
        return 1
    if not response.get("success"):
        print(f"could not fetch logs: {response.get('error')}")
        return 2
    logs = response.get("logs") or []
    print(f"{response.get('total', 0)} log(s), showing the latest {len(logs)}:")
    for index, record in enumerate(logs, start=1):
        message = str(record.get("message", ""))
        print(f"{index}. [{record.get('level') or 'info'}] {message[:100]}")
    return 0


def cmd_debug(args: argparse.Namespace) -> int:
    response = _request(args, "GET", "/api/debug")
    if response is None:
        return 1
    if not response.get("success"):
        print(f"could not fetch debug info: {response.get('error')}")
        return 2
    debug = response.get("debug") or {}
    print("server debug info:")
    print(f"  port: {debug.get('serverPort')}")
    print(f"  connected extensions: {debug.get('connectedClients')}")
    print(f"  pending requests: {debug.get('pendingRequests')}")
    print(f"  logs: {debug.get('logsCount')}")
    print(f"  network requests: {debug.get('networkRequestsCount')}")
    print(f"  current url: {debug.get('currentUrl') or 'unknown'}")
    print(f"  uptime: {int(debug.get('uptime') or 0)}s")
    return 0


HANDLERS = {
    "start": cmd_start,
    "test": cmd_test,
    "screenshot": cmd_screenshot,
    "logs": cmd_logs,
    "debug": cmd_debug,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "help":
        parser.print_help()
        return 0
    configure_logging(logging.WARNING if args.quiet else None)
    return HANDLERS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())


__all__ = ["build_parser", "main"]
