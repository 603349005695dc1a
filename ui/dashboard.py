"""
Rich-based terminal output for speedtest results.

All formatting helpers live in ``librespeed.stats`` -- this module only
does presentation via the ``rich`` library.
"""
from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from librespeed.client import Result
from librespeed.errors import Stage
from librespeed.stats import format_latency, format_speed

console = Console()

STAGE_LABELS = {
    Stage.IDENTITY: "Fetching client info...",
    Stage.PING: "Testing latency...",
    Stage.DOWNLOAD: "Testing download speed...",
    Stage.UPLOAD: "Testing upload speed...",
}


def print_header(server_url: str) -> None:
    console.print()
    console.print(
        Panel.fit(
            "[bold cyan]LibreSpeed CLI[/bold cyan]\n"
            f"[dim]Server: {server_url}[/dim]",
            border_style="cyan",
        )
    )
    console.print()


def print_client_info(ip: str, isp: str) -> None:
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column(style="dim")
    table.add_column(style="bold")
    table.add_row("IP Address:", ip)
    table.add_row("ISP:", isp)
    console.print(Panel(table, title="[bold]Client Info[/bold]", border_style="blue"))


def print_final_results(result: Result) -> None:
    print_client_info(result.ip, result.isp)
    console.print(
        Panel.fit(
            f"[bold white]   Ping:[/bold white]  [bold yellow]{format_latency(result.ping_ms)}[/bold yellow]  "
            f"[dim](jitter: {result.jitter_ms:.2f} ms)[/dim]\n"
            f"[bold white]   Download:[/bold white]  [bold green]{format_speed(result.download_speed_mbps)}[/bold green]\n"
            f"[bold white]   Upload:[/bold white]  [bold blue]{format_speed(result.upload_speed_mbps)}[/bold blue]",
            title="[bold]Results[/bold]",
            border_style="cyan",
        )
    )
    console.print()


def print_error(message: str) -> None:
    console.print(f"\n{message}", style="red", markup=False, highlight=False)
