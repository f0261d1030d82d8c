"""
LEADR CLI — `leadr` command.

Commands:
  leadr init               Save game id / base URL
  leadr session <cmd>      Start, inspect or clear the device session
  leadr boards <cmd>       List boards, look one up by slug
  leadr scores <cmd>       List, get and submit scores
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

try:
    import click
    from pydantic import ValidationError
    from rich.console import Console
    from rich.markup import escape
except ImportError:
    raise SystemExit("CLI requires extras: pip install leadr-sdk[cli]")

from leadr.client import AsyncLeadr
from leadr.config import LeadrSettings
from leadr.errors import LeadrError
from leadr.logging_config import configure_logging

console = Console()
CONFIG_FILE = Path.home() / ".leadr" / "config.json"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _get_client() -> AsyncLeadr:
    cfg = _load_config()
    ctx = click.get_current_context(silent=True)
    debug = bool(ctx and ctx.find_root().params.get("debug"))
    overrides: dict[str, Any] = {k: cfg[k] for k in ("game_id", "base_url") if cfg.get(k)}
    if debug:
        overrides["debug_logging"] = True
    try:
        settings = LeadrSettings(**overrides)
    except ValidationError:
        console.print("[red]No game id configured. Run `leadr init --game-id <id>` first.[/red]")
        raise SystemExit(1)
    return AsyncLeadr.from_settings(settings)


def _fail(error: Optional[LeadrError]) -> None:
    console.print(f"[red]{escape(str(error))}[/red]")
    raise SystemExit(1)


def _run(coro):
    return asyncio.run(coro)


@click.group()
@click.version_option("0.1.0")
@click.option("--debug", is_flag=True, help="Log HTTP requests and auth events (tokens are redacted).")
def main(debug: bool):
    """LEADR CLI — leaderboards from the terminal."""
    if debug:
        configure_logging("DEBUG")


@main.command("init")
@click.option("--game-id", required=True, help="LEADR game id")
@click.option("--base-url", default=None, help="API base URL (self-hosted instances)")
def init_cmd(game_id: str, base_url: Optional[str]):
    """Save the game id (and optional base URL) to ~/.leadr/config.json."""
    cfg = _load_config()
    cfg["game_id"] = game_id
    if base_url:
        cfg["base_url"] = base_url
    _save_config(cfg)
    console.print(f"[green]Configured game {game_id}[/green]")


# Register subcommands from separate modules
from leadr.cli.session import session
from leadr.cli.boards import boards
from leadr.cli.scores import scores

main.add_command(session)
main.add_command(boards)
main.add_command(scores)


if __name__ == "__main__":
    main()
