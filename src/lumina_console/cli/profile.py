"""CLI: lumina profile update"""

import click
from rich.console import Console

from lumina_console.errors import LuminaError

console = Console()


def _get_client():
    from lumina_console.cli.main import _get_client
    return _get_client()


def _run(coro):
    from lumina_console.cli.main import _run
    return _run(coro)


@click.group()
def profile():
    """Profile management."""


@profile.command("update")
@click.option("-u", "--username", required=True, help="New (or current) username")
@click.option("--change-password", is_flag=True, help="Prompt for a new password")
def profile_update(username, change_password):
    """Update username and/or password."""
    original_password = password = None
    if change_password:
        original_password = click.prompt("Current password", hide_input=True)
        password = click.prompt("New password", hide_input=True, confirmation_prompt=True)

    async def _update():
        client = _get_client()
        try:
            with console.status("Updating profile..."):
                await client.profile.update(username, password=password, original_password=original_password)
        except LuminaError as e:
            console.print(f"[red]{e.message}[/red]")
            raise SystemExit(1)
        finally:
            await client.close()
        console.print("[green]Profile updated.[/green] Log in again if your credentials changed.")

    _run(_update())
