"""CLI: lumina auth login|status|logout"""

import click
from rich.console import Console

from lumina_console.errors import AuthError
from lumina_console.storage import BASE_URL_KEY

console = Console()


def _get_client(require_login: bool = True):
    from lumina_console.cli.main import _get_client
    return _get_client(require_login)


def _run(coro):
    from lumina_console.cli.main import _run
    return _run(coro)


@click.group()
def auth():
    """Authentication commands."""


@auth.command("login")
@click.option("-u", "--username", default=None)
def auth_login(username):
    """Log in with username and password."""
    username = username or click.prompt("Username")
    password = click.prompt("Password", hide_input=True)

    async def _login():
        client = _get_client(require_login=False)
        try:
            with console.status("Logging in..."):
                session = await client.session.login(username, password)
        except AuthError as e:
            console.print(f"[red]Login failed: {e.message}[/red]")
            raise SystemExit(1)
        finally:
            await client.close()
        client.storage.save({**client.storage.load(), BASE_URL_KEY: client.http.base_url})
        console.print(f"[green]Logged in as {session.principal}[/green]")
        console.print(f"[dim]Credential saved to {client.storage.path}[/dim]")

    _run(_login())


@auth.command("status")
def auth_status():
    """Show current auth status."""

    async def _status():
        client = _get_client(require_login=False)
        try:
            session = client.session.session
            if session.is_authenticated:
                console.print(f"[green]Logged in[/green] as {session.principal} ({client.http.base_url})")
            else:
                console.print("[yellow]Not logged in. Run `lumina auth login`.[/yellow]")
        finally:
            await client.close()

    _run(_status())


@auth.command("logout")
def auth_logout():
    """Invalidate the session and clear saved credentials."""

    async def _logout():
        client = _get_client(require_login=False)
        try:
            with console.status("Logging out..."):
                await client.session.logout()
        finally:
            await client.close()
        console.print("[green]Logged out.[/green]")

    _run(_logout())
