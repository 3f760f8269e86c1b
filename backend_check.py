"""Backend reachability check for the --check flag."""

import httpx
from rich.console import Console

from core.config import Config, load_config

console = Console()


def probe_backend(config: Config) -> httpx.Response | None:
    """GET the backend login endpoint without following redirects."""
    url = f"{config.backend.origin}{config.backend.login_path}"
    try:
        return httpx.get(url, follow_redirects=False, timeout=10.0)
    except httpx.RequestError as e:
        console.print(f"[red]Backend unreachable:[/red] {url} ({e})")
    return None


def check_backend(config: Config) -> bool:
    """Check if the backend answers on its login endpoint."""
    response = probe_backend(config)
    if response is None:
        console.print("\n[dim]Make sure the backend is running at:[/dim]")
        console.print(f"  {config.backend.origin}")
        return False

    console.print(f"[green]Backend reachable[/green] ({config.backend.origin})")
    console.print(f"[bold]GET {config.backend.login_path}:[/bold] {response.status_code}")
    if response.status_code == 303:
        location = response.headers.get("location") or str(response.url)
        console.print(f"[bold]Login redirect:[/bold] {location}")
    else:
        console.print("[yellow]Login endpoint did not redirect[/yellow] (page renders without redirect)")
    return True


def print_backend_status() -> None:
    """CLI entry point for backend check."""
    check_backend(load_config())


if __name__ == "__main__":
    print_backend_status()
