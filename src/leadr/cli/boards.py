"""CLI: leadr boards list|get"""

import json

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


@click.group()
def boards():
    """Leaderboards for the configured game."""


@boards.command("list")
@click.option("--limit", default=20, type=int)
@click.option("--all", "all_pages", is_flag=True, help="Follow next-page cursors to the end.")
@click.option("--json-output", "--json", is_flag=True)
def boards_list(limit, all_pages, json_output):
    """List boards."""

    async def _list():
        async with _get_client() as client:
            result = await client.boards.list(limit=limit)
            if not result.is_success:
                _fail(result.error)
            page = result.data
            items = list(page.items)
            while all_pages and page.has_next:
                result = await page.next_page()
                if not result.is_success:
                    _fail(result.error)
                page = result.data
                items.extend(page.items)

        if json_output:
            click.echo(json.dumps([b.model_dump(mode="json") for b in items], indent=2))
            return
        table = Table(title=f"Boards ({len(items)} shown)")
        table.add_column("ID", style="bold")
        table.add_column("Slug")
        table.add_column("Name")
        table.add_column("Sort")
        table.add_column("Keep")
        for b in items:
            table.add_row(b.id, b.slug, b.name, b.sort_direction or "", b.keep_strategy or "")
        console.print(table)

    _run(_list())


@boards.command("get")
@click.argument("key")
@click.option("--id", "by_id", is_flag=True, help="Look the board up by id instead of slug.")
@click.option("--json-output", "--json", is_flag=True)
def boards_get(key, by_id, json_output):
    """Show a board by slug (or by id with --id)."""

    async def _get():
        async with _get_client() as client:
            if by_id:
                result = await client.boards.get_by_id(key)
            else:
                result = await client.boards.get(key)
        if not result.is_success:
            _fail(result.error)
        board = result.data
        if json_output:
            click.echo(json.dumps(board.model_dump(mode="json"), indent=2))
            return
        console.print(f"[bold]{board.name}[/bold] ({board.slug}) — {board.id}")
        if board.description:
            console.print(board.description)
        console.print(f"[dim]sort={board.sort_direction} keep={board.keep_strategy} unit={board.unit}[/dim]")

    _run(_get())
