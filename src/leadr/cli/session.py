"""CLI: leadr session start|status|clear"""

import click
from rich.console import Console

console = Console()


def _get_client():
    from leadr.cli.main import _get_client
    return _get_client()


def _fail(error):
    from leadr.cli.main import _fail
    _fail(error)


def _run(coro):
    from leadr.cli.main import _run
    return _run(coro)


@click.group()
def session():
    """Device session management."""


@session.command("start")
def session_start():
    """Start a new session for this device."""

    async def _start():
        async with _get_client() as client:
            with console.status("Starting session..."):
                result = await client.start_session()
            if not result.is_success:
                _fail(result.error)
            s = result.data
            console.print(f"[green]Session started[/green] (device {s.device_id}, account {s.account_id})")
            console.print(f"[dim]Expires in {s.expires_in}s[/dim]")

    _run(_start())


@session.command("status")
def session_status():
    """Show the stored session state."""

    async def _status():
        async with _get_client() as client:
            expires_at = client.storage.get_expires_at()
            console.print(f"State: [bold]{client.auth_state.value}[/bold]")
            if expires_at:
                console.print(f"Token expires at {expires_at.isoformat()}")
            console.print(f"[dim]Fingerprint: {client.storage.get_or_create_fingerprint()}[/dim]")

    _run(_status())


@session.command("clear")
def session_clear():
    """Forget stored tokens (the device fingerprint is kept)."""

    async def _clear():
        async with _get_client() as client:
            client.sign_out()
        console.print("[green]Tokens cleared.[/green]")

    _run(_clear())
