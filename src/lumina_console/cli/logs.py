"""CLI: lumina logs list|show|watch"""

import asyncio
import json

import click
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from lumina_console.auto_refresh import DEFAULT_INTERVAL_MS, REFRESH_INTERVALS_MS
from lumina_console.cli.render import notification_line, print_notifications
from lumina_console.detail import DetailPhase
from lumina_console.models.fetch import FetchOutcome
from lumina_console.models.log import RequestLogDetail
from lumina_console.refresh import DEFAULT_PAGE_SIZE, PAGE_SIZE_OPTIONS, PageState
from lumina_console.view import LogsView

console = Console()

SIZE_CHOICES = [str(s) for s in PAGE_SIZE_OPTIONS]
INTERVAL_CHOICES = [str(ms // 1000) for ms in REFRESH_INTERVALS_MS]


def _get_client():
    from lumina_console.cli.main import _get_client
    return _get_client()


def _run(coro):
    from lumina_console.cli.main import _run
    return _run(coro)


def _log_table(state: PageState, loading: bool = False) -> Table:
    title = f"Request logs — page {state.current_page}/{max(state.total_pages, 1)} ({state.total_records} total)"
    if loading:
        title += " …"
    table = Table(title=title)
    table.add_column("ID", style="bold")
    table.add_column("Status")
    table.add_column("Time")
    table.add_column("Model")
    table.add_column("Provider")
    table.add_column("Latency", justify="right")
    table.add_column("Tokens", justify="right")
    table.add_column("Cost", justify="right")
    for log in state.records:
        status = "[green]SUCCESS[/green]" if log.succeeded else f"[red]{log.status or 'FAIL'}[/red]"
        model = log.request_model_name or "Unknown"
        if log.actual_model_name and log.actual_model_name != log.request_model_name:
            model += f" → {log.actual_model_name}"
        table.add_row(
            log.id,
            status,
            log.requested_at.strftime("%Y-%m-%d %H:%M:%S"),
            model,
            log.provider_name or "-",
            f"{log.first_token_ms or 0}ms",
            str(log.total_tokens),
            f"${log.cost:.5f}" if log.cost else "-",
        )
    if not state.records:
        table.caption = "No logs found"
    return table


def _detail_panel(detail: RequestLogDetail) -> Group:
    meta = Table.grid(padding=(0, 2))
    meta.add_column(style="dim")
    meta.add_column()
    meta.add_row("Request ID", detail.request_id or "-")
    meta.add_row("Status", detail.status)
    meta.add_row("Time", detail.requested_at.strftime("%Y-%m-%d %H:%M:%S"))
    meta.add_row("Model", f"{detail.request_model_name or '-'} → {detail.actual_model_name or '-'}")
    meta.add_row("Provider", f"{detail.provider_name or '-'} (#{detail.provider_id})")
    meta.add_row("Stream", "yes" if detail.is_stream else "no")
    meta.add_row("Tokens", f"{detail.input_tokens or 0} in / {detail.output_tokens or 0} out")
    meta.add_row("Latency", f"first token {detail.first_token_ms or 0}ms, total {detail.total_time_ms or 0}ms")
    meta.add_row("Retries", str(detail.retry_count or 0))
    meta.add_row("Cost", f"${detail.cost or 0:.5f}")
    parts = [Panel(meta, title=f"Log {detail.id}"),
             Panel(Syntax(detail.pretty_request, "json", word_wrap=True), title="Request")]
    if detail.response_content:
        parts.append(Panel(Syntax(detail.pretty_response, "json", word_wrap=True), title="Response"))
    if detail.error_message:
        parts.append(Panel(Text(detail.error_message, style="red"), title="Error"))
    return Group(*parts)


@click.group()
def logs():
    """Request log inspection."""


@logs.command("list")
@click.option("--page", default=1, type=int)
@click.option("--size", default=str(DEFAULT_PAGE_SIZE), type=click.Choice(SIZE_CHOICES))
@click.option("--json-output", "--json", is_flag=True)
def logs_list(page, size, json_output):
    """List request logs."""

    async def _list():
        client = _get_client()
        view = client.logs_view(page_size=int(size))
        try:
            outcome = await view.change_page_size(int(size))
            if outcome is FetchOutcome.APPLIED and page != 1:
                if await view.change_page(page) is FetchOutcome.SKIPPED:
                    client.notifications.warning(
                        f"Page {page} is out of range (1-{max(view.pages.state.total_pages, 1)}), "
                        f"showing page {view.pages.state.current_page}."
                    )
            state = view.pages.state
            if json_output:
                click.echo(json.dumps({
                    "current": state.current_page,
                    "size": state.page_size,
                    "total": state.total_records,
                    "pages": state.total_pages,
                    "records": [r.model_dump(by_alias=True) for r in state.records],
                }, indent=2))
            elif outcome is not FetchOutcome.FAILED:
                console.print(_log_table(state))
            print_notifications(console, client.notifications)
        finally:
            view.unmount()
            await client.close()
        if outcome is FetchOutcome.FAILED:
            raise SystemExit(1)

    _run(_list())


@logs.command("show")
@click.argument("log_id")
@click.option("--json-output", "--json", is_flag=True)
def logs_show(log_id, json_output):
    """Show the full detail of one request log."""

    async def _show():
        client = _get_client()
        view = client.logs_view()
        try:
            with console.status("Loading details..."):
                await view.detail.open(log_id)
            detail = view.detail
            if detail.phase is DetailPhase.FAILED:
                console.print(f"[red]{detail.error}[/red]")
                raise SystemExit(1)
            if json_output:
                click.echo(json.dumps(detail.result.model_dump(by_alias=True), indent=2))
            else:
                console.print(_detail_panel(detail.result))
        finally:
            view.unmount()
            await client.close()

    _run(_show())


def _watch_screen(view: LogsView, notifier) -> Group:
    footer = Text(f"auto-refresh every {view.auto_refresh.interval_ms // 1000}s — Ctrl+C to quit", style="dim")
    parts = [_log_table(view.pages.state, loading=view.pages.loading), footer]
    parts.extend(notification_line(n) for n in notifier.active)
    return Group(*parts)


@logs.command("watch")
@click.option("--page", default=1, type=int)
@click.option("--size", default=str(DEFAULT_PAGE_SIZE), type=click.Choice(SIZE_CHOICES))
@click.option("--interval", default=str(DEFAULT_INTERVAL_MS // 1000), type=click.Choice(INTERVAL_CHOICES),
              help="Seconds between refreshes")
def logs_watch(page, size, interval):
    """Live request log table with auto-refresh."""

    async def _watch():
        client = _get_client()
        view = client.logs_view(page_size=int(size), refresh_interval_ms=int(interval) * 1000)
        try:
            with Live(console=console, refresh_per_second=4,
                      get_renderable=lambda: _watch_screen(view, client.notifications)):
                await view.mount()
                if page != 1 and await view.change_page(page) is FetchOutcome.SKIPPED:
                    client.notifications.warning(f"Page {page} is out of range, staying on page 1.")
                view.auto_refresh.set_enabled(True)
                await asyncio.Event().wait()
        finally:
            view.unmount()
            await client.close()

    _run(_watch())
