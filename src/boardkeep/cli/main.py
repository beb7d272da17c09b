"""boardkeep CLI — sign up, sign in, and manage your board posts.

Usage:
    boardkeep init-db                                  # Create tables
    boardkeep signup alice --password s3cret           # Register
    boardkeep signin alice --password s3cret           # Print an access token
    export BOARDKEEP_TOKEN=$(boardkeep signin alice --password s3cret)
    boardkeep boards create --title Hi --description "first post"
    boardkeep boards list                              # Your boards
    boardkeep boards get 7                             # One board by id
    boardkeep boards status 7 PRIVATE                  # Change visibility
    boardkeep boards delete 7                          # Remove one of yours

The CLI is a caller of the core, nothing more: it builds Settings once,
wires the services for one session per command, and turns typed errors
into exit codes.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import json
import logging
import sys
from typing import Awaitable, Callable, TypeVar

import click
import structlog
from pydantic import BaseModel, ValidationError

from boardkeep import __version__
from boardkeep.config import Settings
from boardkeep.container import Services, build_services
from boardkeep.db.engine import create_engine, create_session_factory, init_models
from boardkeep.errors import BoardkeepError
from boardkeep.schemas.auth import AuthCredentials, TokenResponse
from boardkeep.schemas.board import BoardCreate, BoardRead, BoardStatusUpdate

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from synchronous Click handler.

    Handles nested event loops (e.g. when invoked via Click CliRunner
    inside an existing async context like tests) by offloading to a thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        # No running loop — normal CLI invocation
        return asyncio.run(coro)
    else:
        # Already inside an event loop (e.g. test runner) — run in a thread
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


async def _with_services(
    settings: Settings, fn: Callable[[Services], Awaitable[T]]
) -> T:
    """Open one session, wire the services on it, run fn, tear down."""
    engine = create_engine(settings)
    try:
        async with create_session_factory(engine)() as db:
            return await fn(build_services(settings, db))
    finally:
        await engine.dispose()


def _call(ctx: click.Context, fn: Callable[[Services], Awaitable[T]]) -> T:
    try:
        return _run(_with_services(ctx.obj, fn))
    except BoardkeepError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        ctx.exit(e.exit_code)


def _validate(ctx: click.Context, model: type[M], **data) -> M:
    try:
        return model(**data)
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            click.secho(f"Invalid {field}: {err['msg']}", fg="red", err=True)
        ctx.exit(2)


def _pretty_json(data: dict | list) -> str:
    return json.dumps(data, indent=2, default=str)


def _board_dict(board) -> dict:
    return BoardRead.model_validate(board).model_dump(mode="json")


def _print_table(rows: list[dict], columns: list[tuple[str, str, int]]):
    """Print a simple ASCII table.

    columns: list of (header, dict_key, width)
    """
    header = "  ".join(h.ljust(w) for h, _, w in columns)
    click.secho(header, bold=True)
    click.echo("-" * len(header))
    for row in rows:
        line = "  ".join(str(row.get(k, "—"))[:w].ljust(w) for _, k, w in columns)
        click.echo(line)


def _status_color(status: str) -> str:
    return {"PUBLIC": "green", "PRIVATE": "yellow"}.get(status, "white")


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="boardkeep")
@click.option("--verbose", "-v", is_flag=True, help="Log info-level events to stderr")
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """boardkeep — owner-scoped board posts."""
    # stdout carries tokens and JSON; logs go to stderr.
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.INFO if verbose else logging.WARNING
        ),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )
    if ctx.obj is None:
        ctx.obj = Settings()


@main.command("init-db")
@click.pass_context
def init_db(ctx: click.Context):
    """Create the users and boards tables (use Alembic in production)."""

    async def _impl():
        engine = create_engine(ctx.obj)
        try:
            await init_models(engine)
        finally:
            await engine.dispose()

    _run(_impl())
    click.secho("Tables created.", fg="green")


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------


@main.command()
@click.argument("username")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.pass_context
def signup(ctx: click.Context, username: str, password: str):
    """Register USERNAME."""
    creds = _validate(ctx, AuthCredentials, username=username, password=password)
    _call(ctx, lambda svc: svc.auth.sign_up(creds.username, creds.password))
    click.secho(f"User {creds.username} created.", fg="green")


@main.command()
@click.argument("username")
@click.option("--password", prompt=True, hide_input=True)
@click.option("--json", "as_json", is_flag=True, help="Print the full token response")
@click.pass_context
def signin(ctx: click.Context, username: str, password: str, as_json: bool):
    """Sign in as USERNAME and print an access token."""
    creds = _validate(ctx, AuthCredentials, username=username, password=password)
    token = _call(ctx, lambda svc: svc.auth.sign_in(creds.username, creds.password))
    if as_json:
        click.echo(_pretty_json(TokenResponse(access_token=token).model_dump()))
    else:
        click.echo(token)


# ---------------------------------------------------------------------------
# Boards
# ---------------------------------------------------------------------------


@main.group()
@click.option(
    "--token",
    envvar="BOARDKEEP_TOKEN",
    required=True,
    help="Access token from `boardkeep signin` (or set BOARDKEEP_TOKEN)",
)
@click.pass_context
def boards(ctx: click.Context, token: str):
    """Manage board posts. Every command needs a valid token."""
    ctx.meta["boardkeep.token"] = token


def _token(ctx: click.Context) -> str:
    return ctx.meta["boardkeep.token"]


@boards.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def list_boards(ctx: click.Context, as_json: bool):
    """List your boards, oldest first."""
    token = _token(ctx)

    async def _impl(svc: Services):
        owner = await svc.auth.authenticate(token)
        return [_board_dict(b) for b in await svc.boards.list_mine(owner)]

    rows = _call(ctx, _impl)
    if as_json:
        click.echo(_pretty_json(rows))
        return
    if not rows:
        click.echo("No boards yet.")
        return
    for row in rows:
        row["status"] = click.style(row["status"], fg=_status_color(row["status"]))
    _print_table(rows, [
        ("ID", "id", 6),
        ("Status", "status", 18),
        ("Title", "title", 50),
    ])


@boards.command("create")
@click.option("--title", required=True)
@click.option("--description", required=True)
@click.pass_context
def create_board(ctx: click.Context, title: str, description: str):
    """Create a PUBLIC board owned by you."""
    token = _token(ctx)
    fields = _validate(ctx, BoardCreate, title=title, description=description)

    async def _impl(svc: Services):
        owner = await svc.auth.authenticate(token)
        return _board_dict(await svc.boards.create(fields, owner))

    click.echo(_pretty_json(_call(ctx, _impl)))


@boards.command("get")
@click.argument("board_id", type=int)
@click.pass_context
def get_board(ctx: click.Context, board_id: int):
    """Show one board by id."""
    token = _token(ctx)

    async def _impl(svc: Services):
        await svc.auth.authenticate(token)
        return _board_dict(await svc.boards.get_by_id(board_id))

    click.echo(_pretty_json(_call(ctx, _impl)))


@boards.command("delete")
@click.argument("board_id", type=int)
@click.pass_context
def delete_board(ctx: click.Context, board_id: int):
    """Delete one of your boards."""
    token = _token(ctx)

    async def _impl(svc: Services):
        owner = await svc.auth.authenticate(token)
        await svc.boards.delete(board_id, owner)

    _call(ctx, _impl)
    click.secho(f"Board #{board_id} deleted.", fg="green")


@boards.command("status")
@click.argument("board_id", type=int)
@click.argument("status")
@click.pass_context
def set_board_status(ctx: click.Context, board_id: int, status: str):
    """Set a board's STATUS (PUBLIC or PRIVATE)."""
    token = _token(ctx)
    update = _validate(ctx, BoardStatusUpdate, status=status)

    async def _impl(svc: Services):
        await svc.auth.authenticate(token)
        return _board_dict(await svc.boards.set_status(board_id, update.status))

    click.echo(_pretty_json(_call(ctx, _impl)))


if __name__ == "__main__":
    main()
