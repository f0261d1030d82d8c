"""CLI commands driven through click's CliRunner."""

import json

import httpx
import pytest
from click.testing import CliRunner

from leadr import AsyncLeadr, MemoryStore, TokenStorage
from leadr.cli import main as cli_main

from conftest import BASE_URL, GAME_ID, FakeLeadrServer, board_json, page_json, score_json


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setattr(cli_main, "CONFIG_FILE", path)
    monkeypatch.delenv("LEADR_GAME_ID", raising=False)
    return path


@pytest.fixture
def fake_server(monkeypatch):
    server = FakeLeadrServer()
    server.clients = []
    storage = TokenStorage(MemoryStore())

    def _get_client():
        client = AsyncLeadr(
            game_id=GAME_ID, base_url=BASE_URL, storage=storage, transport=httpx.MockTransport(server),
        )
        server.clients.append(client)
        return client

    monkeypatch.setattr(cli_main, "_get_client", _get_client)
    return server


def test_init_saves_config(config_file):
    result = CliRunner().invoke(cli_main.main, ["init", "--game-id", "gam_1", "--base-url", "https://x.test"])
    assert result.exit_code == 0, result.output
    assert json.loads(config_file.read_text()) == {"game_id": "gam_1", "base_url": "https://x.test"}


def test_commands_require_a_game_id(config_file):
    result = CliRunner().invoke(cli_main.main, ["session", "status"])
    assert result.exit_code == 1
    assert "leadr init" in result.output


def test_boards_list_json(fake_server):
    fake_server.on("GET", "/v1/client/boards", httpx.Response(200, json=page_json([board_json("brd_1", "weekly")])))
    result = CliRunner().invoke(cli_main.main, ["boards", "list", "--json"])
    assert result.exit_code == 0, result.output
    assert [b["slug"] for b in json.loads(result.output)] == ["weekly"]


def test_boards_list_all_follows_cursors(fake_server):
    fake_server.on(
        "GET", "/v1/client/boards",
        httpx.Response(200, json=page_json([board_json("brd_1")], has_next=True, next_cursor="c1")),
        httpx.Response(200, json=page_json([board_json("brd_2", "monthly")])),
    )
    result = CliRunner().invoke(cli_main.main, ["boards", "list", "--all", "--json"])
    assert result.exit_code == 0, result.output
    assert [b["id"] for b in json.loads(result.output)] == ["brd_1", "brd_2"]


def test_boards_get_not_found_exits_nonzero(fake_server):
    fake_server.on("GET", "/v1/client/boards/", httpx.Response(200, json=page_json([])))
    result = CliRunner().invoke(cli_main.main, ["boards", "get", "nope"])
    assert result.exit_code == 1
    assert "not_found" in result.output


def test_boards_get_by_id(fake_server):
    fake_server.on("GET", "/v1/client/boards/brd_4", httpx.Response(200, json=board_json("brd_4", "monthly")))
    result = CliRunner().invoke(cli_main.main, ["boards", "get", "--id", "brd_4", "--json"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["slug"] == "monthly"


@pytest.mark.parametrize("command", ["status", "clear"])
def test_session_commands_close_the_client(fake_server, command):
    result = CliRunner().invoke(cli_main.main, ["session", command])
    assert result.exit_code == 0, result.output
    assert len(fake_server.clients) == 1
    assert fake_server.clients[0].http._client.is_closed


def test_scores_submit_parses_metadata(fake_server):
    fake_server.on("POST", "/v1/client/scores", httpx.Response(201, json=score_json("scr_3", 77, "Ada")))
    result = CliRunner().invoke(
        cli_main.main,
        ["scores", "submit", "brd_1", "77", "--player", "Ada", "--meta", "level=3", "--meta", "mode=hard"],
    )
    assert result.exit_code == 0, result.output
    body = json.loads(fake_server.last("POST", "/v1/client/scores").content)
    assert body == {"board_id": "brd_1", "value": 77, "player_name": "Ada", "metadata": {"level": 3, "mode": "hard"}}


def test_scores_submit_rejects_malformed_metadata(fake_server):
    result = CliRunner().invoke(cli_main.main, ["scores", "submit", "brd_1", "1", "--player", "A", "--meta", "oops"])
    assert result.exit_code == 2
    assert fake_server.requests == []
