"""CLI: lumina dashboard"""

import asyncio

import click
from rich.console import Console
from rich.table import Table

console = Console()


def _get_client():
    from lumina_console.cli.main import _get_client
    return _get_client()


def _run(coro):
    from lumina_console.cli.main import _run
    return _run(coro)


def _signed(value: float, unit: str = "%") -> str:
    color = "green" if value >= 0 else "red"
    return f"[{color}]{value:+.1f}{unit}[/{color}]"


@click.command("dashboard")
def dashboard_cmd():
    """Gateway overview and provider ranking."""

    async def _dashboard():
        client = _get_client()
        try:
            with console.status("Loading dashboard..."):
                overview, providers, usage = await asyncio.gather(
                    client.dashboard.overview(),
                    client.dashboard.provider_stats(),
                    client.dashboard.model_token_usage(),
                )
        finally:
            await client.close()

        summary = Table.grid(padding=(0, 3))
        summary.add_column(style="dim")
        summary.add_column(justify="right")
        summary.add_column()
        summary.add_row("Requests", f"{overview.total_requests:,}", _signed(overview.request_growth_rate))
        summary.add_row("Cost", f"${overview.total_cost:,.4f}", _signed(overview.cost_growth_rate))
        summary.add_row("Avg latency", f"{overview.avg_latency:.0f}ms", _signed(overview.latency_change, "ms"))
        summary.add_row("Success rate", f"{overview.success_rate:.1f}%", _signed(overview.success_rate_change))
        console.print(summary)

        table = Table(title="Providers")
        table.add_column("#", justify="right")
        table.add_column("Provider", style="bold")
        table.add_column("Calls", justify="right")
        table.add_column("Cost", justify="right")
        table.add_column("Latency", justify="right")
        table.add_column("Success", justify="right")
        for p in providers:
            table.add_row(str(p.rank), p.provider_name, f"{p.call_count:,}", f"${p.estimated_cost:.4f}",
                          f"{p.avg_latency:.0f}ms", f"{p.success_rate:.1f}%")
        console.print(table)

        models = Table(title="Token usage by model")
        models.add_column("Model", style="bold")
        models.add_column("Requests", justify="right")
        models.add_column("Input", justify="right")
        models.add_column("Output", justify="right")
        models.add_column("Share", justify="right")
        for m in usage:
            models.add_row(m.model_name, f"{m.request_count:,}", f"{m.input_tokens:,}",
                           f"{m.output_tokens:,}", f"{m.percentage:.1f}%")
        console.print(models)

    _run(_dashboard())
