"""CLI: leadr scores list|get|submit"""

import json
from typing import Any, Optional

import click
from rich.console import Console
from rich.table import Table

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


def _parse_metadata(pairs: tuple[str, ...]) -> Optional[dict[str, Any]]:
    if not pairs:
        return None
    metadata: dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {pair!r}", param_hint="--meta")
        try:
            metadata[key] = json.loads(value)
        except json.JSONDecodeError:
            metadata[key] = value
    return metadata


@click.group()
def scores():
    """Scores on a board."""


@scores.command("list")
@click.argument("board_id")
@click.option("--limit", default=20, type=int)
@click.option("--sort", default=None, help="Server sort order, e.g. asc or desc")
@click.option("--cursor", default=None)
@click.option("--around-id", default=None, help="Centre the page on this score id")
@click.option("--around-value", default=None, type=float, help="Centre the page on this score value")
@click.option("--json-output", "--json", is_flag=True)
def scores_list(board_id, limit, sort, cursor, around_id, around_value, json_output):
    """List scores on a board."""

    async def _list():
        async with _get_client() as client:
            result = await client.scores.list(
                board_id, limit=limit, sort=sort, cursor=cursor,
                around_score_id=around_id, around_score_value=around_value,
            )
        if not result.is_success:
            _fail(result.error)
        page = result.data
        if json_output:
            click.echo(json.dumps({
                "data": [s.model_dump(mode="json") for s in page.items],
                "count": page.count,
                "next_cursor": page.next_cursor,
                "prev_cursor": page.prev_cursor,
            }, indent=2))
            return
        table = Table(title=f"Scores ({page.count} total)")
        table.add_column("Player", style="bold")
        table.add_column("Score", justify="right")
        table.add_column("ID")
        table.add_column("Submitted")
        for s in page.items:
            table.add_row(s.player_name, s.display_value, s.id, s.created_at.isoformat())
        console.print(table)
        if page.has_next:
            console.print(f"[dim]next: --cursor {page.next_cursor}[/dim]")
        if page.has_prev:
            console.print(f"[dim]prev: --cursor {page.prev_cursor}[/dim]")

    _run(_list())


@scores.command("get")
@click.argument("score_id")
def scores_get(score_id):
    """Show a single score."""

    async def _get():
        async with _get_client() as client:
            result = await client.scores.get(score_id)
        if not result.is_success:
            _fail(result.error)
        click.echo(json.dumps(result.data.model_dump(mode="json"), indent=2))

    _run(_get())


@scores.command("submit")
@click.argument("board_id")
@click.argument("value", type=float)
@click.option("--player", "player_name", required=True, help="Player name shown on the board")
@click.option("--display", "value_display", default=None, help="Formatted value, e.g. 1:23.45")
@click.option("--meta", multiple=True, help="Metadata entry key=value (repeatable; JSON values allowed)")
def scores_submit(board_id, value, player_name, value_display, meta):
    """Submit a score to a board."""
    metadata = _parse_metadata(meta)
    if value.is_integer():
        value = int(value)

    async def _submit():
        async with _get_client() as client:
            with console.status("Submitting..."):
                result = await client.scores.submit(
                    board_id, value, player_name, value_display=value_display, metadata=metadata,
                )
        if not result.is_success:
            _fail(result.error)
        s = result.data
        console.print(f"[green]Score {s.display_value} submitted for {s.player_name} ({s.id})[/green]")

    _run(_submit())
