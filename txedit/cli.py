"""CLI for the ``txedit`` package.

Thin Typer wrappers around the validators and steppers, handy for checking a
value from a shell or scripting field corrections. Environment variables
(notably ``DATABASE_URL`` and ``TXEDIT_LOG_LEVEL``) are loaded from a local
``.env`` with ``python-dotenv`` before any command runs.

The method/tag store comes from repeatable ``--method``/``--tag`` options when
given, otherwise from the database at ``--database-url`` / ``DATABASE_URL``.
"""

from __future__ import annotations

import os
from pathlib import Path

import typer
from dotenv import load_dotenv

from .buffer import FieldBuffer
from .fuzzy import autofill_tag
from .logging_setup import configure_logging, get_logger
from .models import FieldKind, StepDirection
from .steppers import FieldStepper
from .store import FieldStore, SqlFieldStore, StaticFieldStore, StoreError
from .validators import FieldValidator

_logger = get_logger("cli")


def _resolve_store(
    methods: list[str] | None, tags: list[str] | None, database_url: str | None
) -> FieldStore:
    """Prefer an explicit in-memory snapshot; fall back to the database."""

    if methods or tags:
        return StaticFieldStore(methods or (), tags or ())
    if database_url or os.getenv("DATABASE_URL"):
        return SqlFieldStore(database_url=database_url)
    _logger.debug("no store configured; using an empty snapshot")
    return StaticFieldStore()


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Validate and step transaction fields (date, amount, tx_method, tx_type, tags). "
        "Loads DATABASE_URL from a local .env before running."
    ),
)

METHOD_HELP = "Known transaction method (repeatable). Overrides the database store."
TAG_HELP = "Known tag (repeatable). Overrides the database store."
DB_HELP = "Override DATABASE_URL (falls back to env var)."


@app.command("verify")
def verify_cmd(
    kind: FieldKind = typer.Argument(..., help="Field kind to validate."),
    text: str = typer.Argument(..., help="Raw field text."),
    *,
    method: list[str] | None = typer.Option(None, "--method", "-m", help=METHOD_HELP),
    tag: list[str] | None = typer.Option(None, "--tag", "-t", help=TAG_HELP),
    database_url: str | None = typer.Option(None, help=DB_HELP),
    plain: bool = typer.Option(
        False, help="For tags: only trim and dedupe, without checking the store."
    ),
) -> None:
    """Print the corrected text; exit 1 when the value is rejected."""

    buf = FieldBuffer(text)
    validator = FieldValidator()

    if kind is FieldKind.TAGS and plain:
        validator.verify_tags(buf)
        typer.echo(buf.text)
        return

    store = _resolve_store(method, tag, database_url)
    try:
        outcome = validator.verify(kind, buf, store)
    except StoreError as e:
        raise _fail(str(e)) from e

    typer.echo(buf.text)
    if outcome.is_rejected:
        raise _fail(outcome.message or "rejected")


@app.command("step")
def step_cmd(
    kind: FieldKind = typer.Argument(..., help="Field kind to step."),
    text: str = typer.Argument("", help="Current field text (may be empty)."),
    *,
    down: bool = typer.Option(False, "--down", help="Step to the previous value."),
    autofill: str | None = typer.Option(
        None, help="For tags: replacement for an unknown trailing tag (default: best match)."
    ),
    method: list[str] | None = typer.Option(None, "--method", "-m", help=METHOD_HELP),
    tag: list[str] | None = typer.Option(None, "--tag", "-t", help=TAG_HELP),
    database_url: str | None = typer.Option(None, help=DB_HELP),
) -> None:
    """Print the next (or previous) value; exit 1 when stepping fails."""

    buf = FieldBuffer(text)
    direction = StepDirection.DECREASE if down else StepDirection.INCREASE
    store = _resolve_store(method, tag, database_url)

    try:
        if kind is FieldKind.TAGS and autofill is None:
            autofill = autofill_tag(text, store.list_known_tags())
        failure = FieldStepper().step(kind, buf, direction, store, autofill=autofill or "")
    except StoreError as e:
        raise _fail(str(e)) from e

    typer.echo(buf.text)
    if failure is not None:
        raise _fail(failure.message)


@app.command("prompt")
def prompt_cmd(
    kind: FieldKind = typer.Argument(..., help="Field kind to edit."),
    *,
    default: str = typer.Option("", help="Initial text."),
    method: list[str] | None = typer.Option(None, "--method", "-m", help=METHOD_HELP),
    tag: list[str] | None = typer.Option(None, "--tag", "-t", help=TAG_HELP),
    database_url: str | None = typer.Option(None, help=DB_HELP),
) -> None:
    """Edit one field interactively (Up/Down to step, Enter to accept)."""

    from .term_ui import prompt_field  # defer prompt_toolkit for non-interactive use

    store = _resolve_store(method, tag, database_url)
    try:
        result = prompt_field(kind, store=store, default=default)
    except StoreError as e:
        raise _fail(str(e)) from e

    if result is None:
        raise _fail("canceled")
    typer.echo(result)


@app.callback()
def _root() -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding
    already-set variables) and configures logging for all subcommands.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    app()
