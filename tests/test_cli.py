"""CLI tests — the full flow through click, against a SQLite file.

Learn: Uses click's CliRunner with a Settings object passed as ctx.obj,
so nothing is read from the environment. Each command opens its own
engine and session, just like a real invocation.
"""

import json

import pytest
from click.testing import CliRunner

from boardkeep.cli.main import main
from boardkeep.config import Settings


@pytest.fixture()
def cli_settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}",
        jwt_secret="cli-test-secret",
        bcrypt_rounds=4,
    )


@pytest.fixture()
def invoke(cli_settings):
    runner = CliRunner()

    def _invoke(*args):
        return runner.invoke(main, list(args), obj=cli_settings)

    assert _invoke("init-db").exit_code == 0
    return _invoke


def _token(invoke, username="alice", password="alicepass1"):
    assert invoke("signup", username, "--password", password).exit_code == 0
    r = invoke("signin", username, "--password", password)
    assert r.exit_code == 0
    return r.output.strip().splitlines()[-1]


# ═══════════════════════════════════════════════════════════
# Accounts
# ═══════════════════════════════════════════════════════════


def test_signup_and_signin(invoke):
    token = _token(invoke)
    assert token.count(".") == 2


def test_signin_json(invoke):
    _token(invoke)
    r = invoke("signin", "alice", "--password", "alicepass1", "--json")
    assert r.exit_code == 0
    body = json.loads(r.output)
    assert body["token_type"] == "bearer"
    assert body["access_token"]


def test_signup_duplicate_exit_code(invoke):
    _token(invoke)
    r = invoke("signup", "alice", "--password", "otherpass1")
    assert r.exit_code == 3


def test_signin_wrong_password_exit_code(invoke):
    _token(invoke)
    r = invoke("signin", "alice", "--password", "wrongpass1")
    assert r.exit_code == 4


def test_signup_invalid_input(invoke):
    r = invoke("signup", "al", "--password", "bad pass!")
    assert r.exit_code == 2


# ═══════════════════════════════════════════════════════════
# Boards
# ═══════════════════════════════════════════════════════════


def test_board_lifecycle(invoke):
    token = _token(invoke)

    r = invoke("boards", "--token", token, "create", "--title", "Hi", "--description", "first")
    assert r.exit_code == 0
    board = json.loads(r.output)
    assert board["status"] == "PUBLIC"
    board_id = str(board["id"])

    r = invoke("boards", "--token", token, "list", "--json")
    assert r.exit_code == 0
    assert [b["id"] for b in json.loads(r.output)] == [board["id"]]

    r = invoke("boards", "--token", token, "status", board_id, "PRIVATE")
    assert r.exit_code == 0
    assert json.loads(r.output)["status"] == "PRIVATE"

    r = invoke("boards", "--token", token, "get", board_id)
    assert r.exit_code == 0
    assert json.loads(r.output)["status"] == "PRIVATE"

    r = invoke("boards", "--token", token, "delete", board_id)
    assert r.exit_code == 0

    r = invoke("boards", "--token", token, "delete", board_id)
    assert r.exit_code == 5


def test_list_table_output(invoke):
    token = _token(invoke)
    invoke("boards", "--token", token, "create", "--title", "Table row", "--description", "x")

    r = invoke("boards", "--token", token, "list")
    assert r.exit_code == 0
    assert "Table row" in r.output


def test_cannot_delete_someone_elses_board(invoke):
    alice = _token(invoke)
    bob = _token(invoke, "bobby", "bobbypass1")

    r = invoke("boards", "--token", alice, "create", "--title", "Mine", "--description", "x")
    board_id = str(json.loads(r.output)["id"])

    r = invoke("boards", "--token", bob, "delete", board_id)
    assert r.exit_code == 5

    r = invoke("boards", "--token", bob, "list", "--json")
    assert json.loads(r.output) == []

    r = invoke("boards", "--token", alice, "list", "--json")
    assert len(json.loads(r.output)) == 1


def test_invalid_status_rejected(invoke):
    token = _token(invoke)
    r = invoke("boards", "--token", token, "create", "--title", "T", "--description", "d")
    board_id = str(json.loads(r.output)["id"])

    r = invoke("boards", "--token", token, "status", board_id, "DRAFT")
    assert r.exit_code == 2


def test_bad_token_rejected(invoke):
    r = invoke("boards", "--token", "not-a-token", "list")
    assert r.exit_code == 4


def test_token_required(invoke, monkeypatch):
    monkeypatch.delenv("BOARDKEEP_TOKEN", raising=False)
    r = invoke("boards", "list")
    assert r.exit_code == 2


def test_non_owner_can_get_and_restatus(invoke):
    alice = _token(invoke)
    bob = _token(invoke, "bobby", "bobbypass1")

    r = invoke("boards", "--token", alice, "create", "--title", "Mine", "--description", "x")
    created = json.loads(r.output)
    board_id = str(created["id"])

    r = invoke("boards", "--token", bob, "get", board_id)
    assert r.exit_code == 0
    assert json.loads(r.output)["owner_id"] == created["owner_id"]

    r = invoke("boards", "--token", bob, "status", board_id, "PRIVATE")
    assert r.exit_code == 0
    body = json.loads(r.output)
    assert body["status"] == "PRIVATE"
    assert body["owner_id"] == created["owner_id"]


def test_unreachable_database_exit_code():
    settings = Settings(
        database_url="postgresql+asyncpg://u:p@127.0.0.1:1/x",
        jwt_secret="cli-test-secret",
        bcrypt_rounds=4,
    )
    r = CliRunner().invoke(main, ["signin", "alice", "--password", "alicepass1"], obj=settings)
    assert r.exit_code == 6
