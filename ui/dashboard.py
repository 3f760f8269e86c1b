"""Real-time CLI dashboard for proxy monitoring."""

from datetime import datetime
from threading import Lock

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import write_cli_log

console = Console()


class RequestInfo:
    """Info about a single forwarded request."""

    def __init__(self, method: str, target_url: str, timestamp: datetime):
        self.method = method
        self.target = target_url[:80] + "..." if len(target_url) > 80 else target_url
        self.target_url = target_url
        self.status: int | None = None
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing forwarded requests and login redirects."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._requests: list[RequestInfo] = []
        self._max_requests = 10
        self._counts = {"forwarded": 0, "redirects": 0, "errors": 0}
        self._last_redirect: str | None = None
        self._errors: list[str] = []
        self._live: Live | None = None

    def start(self) -> "Dashboard":
        """Start the live dashboard."""
        self._live = Live(
            self._build_layout(),
            console=console,
            refresh_per_second=4,
            screen=False,
        )
        self._live.start()
        return self

    def stop(self) -> None:
        """Stop the live dashboard."""
        if self._live:
            self._live.stop()

    def log_forward(self, method: str, target_url: str) -> None:
        """Log a request about to be forwarded to the backend."""
        with self._lock:
            self._counts["forwarded"] += 1
            self._requests.insert(0, RequestInfo(method, target_url, datetime.now()))
            self._requests = self._requests[: self._max_requests]
            write_cli_log("FORWARD", f"Proxying request to {target_url}", method=method)
            self._refresh()

    def log_response(self, method: str, target_url: str, status: int) -> None:
        """Record the backend status for a forwarded request."""
        with self._lock:
            for info in self._requests:
                if info.status is None and info.method == method and info.target_url == target_url:
                    info.status = status
                    break
            write_cli_log("RESPONSE", target_url, method=method, status=status)
            self._refresh()

    def log_redirect(self, location: str) -> None:
        """Log a login redirect issued to the caller."""
        with self._lock:
            self._counts["redirects"] += 1
            self._last_redirect = location
            write_cli_log("REDIRECT", location, status=303)
            self._refresh()

    def log_error(self, route: str, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            self._counts["errors"] += 1
            truncated = message[:50] + "..." if len(message) > 50 else message
            self._errors.insert(0, f"{route} {status}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
            write_cli_log("ERROR", message[:200], route=route, status=status)

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=5),
        )

        layout["header"].update(self._build_header())
        layout["body"].update(self._build_requests_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("Backend Passthrough", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Forwarded: {self._counts['forwarded']}", style="blue")
        stats.append("  |  ")
        stats.append(f"Redirects: {self._counts['redirects']}", style="magenta")
        stats.append("  |  ")
        stats.append(f"Errors: {self._counts['errors']}", style="red")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")
        stats.append("  ->  ")
        stats.append(self.config.backend.origin, style="dim")

        return Panel(stats, style="cyan")

    def _build_requests_panel(self) -> Panel:
        """Build recent requests panel."""
        if self._requests:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Method", width=7)
            table.add_column("Target", ratio=3)
            table.add_column("Status", width=6)

            for req in self._requests:
                if req.status is None:
                    status = Text("...", style="dim")
                else:
                    status = Text(str(req.status), style=_status_style(req.status))
                table.add_row(
                    req.timestamp.strftime("%H:%M:%S"),
                    req.method,
                    req.target,
                    status,
                )

            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[blue]Forwarded Requests[/blue]", border_style="blue")

    def _build_footer(self) -> Panel:
        """Build footer with errors and help."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        elif self._last_redirect:
            content = Text(f"Last login redirect: {self._last_redirect}", style="magenta")
        else:
            content = Text(
                f"Serving /api/* and /login on http://{self.config.proxy.host}:{self.config.proxy.port}",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")


def _status_style(status: int) -> str:
    if status >= 500:
        return "red"
    if status >= 400:
        return "yellow"
    if status >= 300:
        return "magenta"
    return "green"
