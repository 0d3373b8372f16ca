"""Server management commands."""

import subprocess
import sys

import click

from bookshelf.cli.utils import error, info, success, warning
from bookshelf.core.settings import get_app_settings

APP_PATH = "bookshelf.app.main:app"


def _uvicorn_command(host: str, port: int, *extra: str) -> list[str]:
    return [sys.executable, "-m", "uvicorn", APP_PATH, "--host", host, "--port", str(port), *extra]


@click.group(name="server")
def server() -> None:
    """Server management commands."""


@server.command()
@click.option("--host", default=None, help="Host to bind (default: APP_HOST)")
@click.option("--port", default=None, type=int, help="Port to bind (default: APP_PORT)")
@click.option("--reload/--no-reload", default=True, help="Enable auto-reload on code changes")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["critical", "error", "warning", "info", "debug", "trace"]),
    help="Log level",
)
def dev(host: str | None, port: int | None, reload: bool, log_level: str) -> None:
    """Run development server with auto-reload."""
    settings = get_app_settings()
    host = host or settings.host
    port = port or settings.port

    info(f"Server will run at: http://{host}:{port}")
    info(f"Environment: {settings.environment}")
    info(f"Auto-reload: {'enabled' if reload else 'disabled'}")

    cmd = _uvicorn_command(host, port, "--log-level", log_level)
    if reload:
        cmd.append("--reload")

    try:
        success("Starting uvicorn...")
        subprocess.run(cmd, check=False)
    except KeyboardInterrupt:
        info("Shutting down server...")
    except OSError as e:
        error(f"Failed to start server: {e}")
        sys.exit(1)


@server.command()
@click.option("--host", default=None, help="Host to bind (default: APP_HOST)")
@click.option("--port", default=None, type=int, help="Port to bind (default: APP_PORT)")
@click.option("--workers", default=4, type=int, help="Number of worker processes")
@click.option("--access-log/--no-access-log", default=True, help="Enable access logging")
def prod(host: str | None, port: int | None, workers: int, access_log: bool) -> None:
    """Run production server (no auto-reload, multiple workers)."""
    settings = get_app_settings()
    host = host or settings.host
    port = port or settings.port

    if not settings.is_production:
        warning(f"APP_ENVIRONMENT is {settings.environment!r}, not 'production'")

    info(f"Server will run at: http://{host}:{port}")
    info(f"Workers: {workers}")

    cmd = _uvicorn_command(host, port, "--workers", str(workers), "--log-level", "info")
    if not access_log:
        cmd.append("--no-access-log")

    try:
        success("Starting uvicorn in production mode...")
        subprocess.run(cmd, check=False)
    except KeyboardInterrupt:
        info("Shutting down server...")
    except OSError as e:
        error(f"Failed to start server: {e}")
        sys.exit(1)
