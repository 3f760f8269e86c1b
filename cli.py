"""CLI entry point for backend-passthrough."""

import sys
from datetime import datetime

from rich.console import Console

from app import create_app
from backend_check import check_backend
from core.config import CONFIG_FILE, load_config
from ui.dashboard import Dashboard
from ui.log_utils import CLI_LOG_FILE, clear_logs, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    config = load_config()

    # Handle CLI arguments
    if len(sys.argv) > 1:
        arg = sys.argv[1]

        if arg == "--check":
            if not check_backend(config):
                sys.exit(1)
            return

        if arg == "--config":
            console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
            console.print(f"[bold]Log:[/bold] {CLI_LOG_FILE}")
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

        console.print(f"[red][ERROR][/red] Unknown argument: {arg}")
        _print_help()
        sys.exit(2)

    # Clear previous logs and start dashboard
    clear_logs()
    dashboard = Dashboard(config)

    import uvicorn

    app = create_app(config, dashboard)

    # Relayed responses carry the backend's own Server and Date headers
    uvicorn_config = uvicorn.Config(
        app,
        host=config.proxy.host,
        port=config.proxy.port,
        log_level="warning",
        timeout_keep_alive=config.limits.keep_alive_timeout,
        server_header=False,
        date_header=False,
    )
    server = uvicorn.Server(uvicorn_config)

    dashboard.start()
    start_time = datetime.now()
    write_cli_log(
        "STARTUP",
        "Proxy started",
        port=config.proxy.port,
        backend=config.backend.origin,
    )
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Proxy stopped", duration=str(duration))
        dashboard.stop()


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]Backend Passthrough[/bold cyan]

Forwards /api/* to the backend verbatim and serves /login with the backend's redirect.

[bold]Usage:[/bold]
    backend-passthrough              Start with live dashboard
    backend-passthrough --check      Probe the backend login endpoint
    backend-passthrough --config     Show config and log locations
    backend-passthrough --help       Show this help

[bold]Configuration:[/bold]
    Edit backend.origin in the config file to point at the backend service.
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
