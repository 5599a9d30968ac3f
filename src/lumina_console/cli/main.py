"""
Lumina console CLI — `lumina` command.

Commands:
  lumina auth login|status|logout   Session management
  lumina logs list|show|watch       Request log inspection
  lumina profile update             Change username / password
  lumina dashboard                  Gateway overview
"""

import asyncio
import logging
from typing import Any, Optional

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install lumina-console[cli]")

from lumina_console import __version__
from lumina_console.client import AsyncLumina

console = Console()


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=verbose)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.INFO if verbose else logging.WARNING)


def _base_url() -> Optional[str]:
    ctx = click.get_current_context(silent=True)
    obj = ctx.find_root().obj if ctx else None
    return obj.get("base_url") if obj else None


def _get_client(require_login: bool = True) -> AsyncLumina:
    client = AsyncLumina(base_url=_base_url())
    if require_login and not client.is_authenticated:
        console.print("[red]Not logged in. Run `lumina auth login` first.[/red]")
        raise SystemExit(1)
    return client


def _run(coro: Any) -> Any:
    try:
        return asyncio.run(coro)
    except KeyboardInterrupt:
        console.print("[dim]Interrupted.[/dim]")


@click.group()
@click.version_option(__version__)
@click.option("--base-url", default=None, help="Lumina gateway URL (default: saved value or http://localhost:8080)")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
@click.pass_context
def main(ctx: click.Context, base_url: Optional[str], verbose: bool):
    """Lumina console — inspect and administer your LLM gateway."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["base_url"] = base_url


# Register subcommands from separate modules
from lumina_console.cli.auth import auth
from lumina_console.cli.dashboard import dashboard_cmd
from lumina_console.cli.logs import logs
from lumina_console.cli.profile import profile

main.add_command(auth)
main.add_command(dashboard_cmd)
main.add_command(logs)
main.add_command(profile)


if __name__ == "__main__":
    main()
