"""Main CLI entry point for slash-activity."""

import json
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.table import Table
from rich.text import Text

from slash_activity.config.messages import (
    ERROR_MESSAGES,
    INFO_MESSAGES,
    PROJECT_TAGLINE,
    SUCCESS_MESSAGES,
)
from slash_activity.config.settings import LoggingSettings, StoreSettings
from slash_activity.constants import (
    JSON_INDENT,
    OUTPUT_FORMAT_JSON,
    OUTPUT_FORMAT_TEXT,
    OUTPUT_FORMATS,
    VERSION,
)
from slash_activity.exceptions import ActivityLogError
from slash_activity.models import (
    PAYLOAD_MODELS,
    Activity,
    ActivityLevel,
    ActivityType,
    FindActivity,
)
from slash_activity.store import ActivityStore, OperationContext
from slash_activity.utils import (
    configure_logging,
    console,
    print_error,
    print_info,
    print_success,
)

# Load .env file from current directory if it exists
load_dotenv(Path.cwd() / ".env", verbose=False)

app = typer.Typer(
    name="slash-activity",
    help=PROJECT_TAGLINE,
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"slash-activity {VERSION}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    db: Path | None = typer.Option(
        None,
        "--db",
        help="SQLite database file (default: SLASH_ACTIVITY_DB_PATH or .slash/activity.db)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Record and inspect shortcut activity."""
    log_settings = LoggingSettings()
    configure_logging(
        "DEBUG" if verbose else log_settings.level,
        log_settings.file,
        log_settings,
    )
    ctx.obj = StoreSettings(db_path=db) if db is not None else StoreSettings()


@contextmanager
def _open_store(ctx: typer.Context) -> Iterator[ActivityStore]:
    """Open the configured store, turning store failures into exit code 1."""
    settings: StoreSettings = ctx.obj
    store: ActivityStore | None = None
    try:
        store = ActivityStore.from_settings(settings)
        yield store
    except ActivityLogError as e:
        print_error(ERROR_MESSAGES["store_failed"].format(error=e))
        raise typer.Exit(code=1) from e
    finally:
        if store is not None:
            store.close()


def _operation_context(timeout: float | None) -> OperationContext | None:
    return OperationContext(timeout=timeout) if timeout is not None else None


def _check_format(format_output: str) -> None:
    if format_output not in OUTPUT_FORMATS:
        print_error(
            ERROR_MESSAGES["invalid_format"].format(
                value=format_output, choices=", ".join(OUTPUT_FORMATS)
            )
        )
        raise typer.Exit(code=1)


def _format_ts(created_ts: int) -> str:
    return datetime.fromtimestamp(created_ts, tz=UTC).strftime("%Y-%m-%d %H:%M:%S")


def _print_table(items: list[Activity]) -> None:
    table = Table(title="Activities")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Created (UTC)")
    table.add_column("Creator", justify="right")
    table.add_column("Type", style="green", no_wrap=True)
    table.add_column("Level", no_wrap=True)
    table.add_column("Payload", overflow="fold")

    level_styles = {
        ActivityLevel.INFO: "blue",
        ActivityLevel.WARN: "yellow",
        ActivityLevel.ERROR: "red",
    }
    for item in items:
        style = level_styles[item.level]
        table.add_row(
            str(item.id),
            _format_ts(item.created_ts),
            str(item.creator_id),
            item.type.value,
            f"[{style}]{item.level.value}[/{style}]",
            Text(item.payload),
        )
    console.print(table)


def _echo_json(data: object) -> None:
    typer.echo(json.dumps(data, indent=JSON_INDENT))


@app.command("init")
def init(ctx: typer.Context) -> None:
    """Create the activity database and table if missing."""
    with _open_store(ctx) as store:
        print_success(SUCCESS_MESSAGES["initialized"].format(path=store.db_path))


@app.command("create")
def create(
    ctx: typer.Context,
    creator: int = typer.Option(..., "--creator", "-c", help="ID of the acting user"),
    activity_type: ActivityType = typer.Option(..., "--type", "-t", help="Activity type"),
    level: ActivityLevel = typer.Option(ActivityLevel.INFO, "--level", "-l", help="Severity"),
    payload: str | None = typer.Option(None, "--payload", "-p", help="Raw payload text"),
    shortcut_id: int | None = typer.Option(
        None,
        "--shortcut-id",
        "-s",
        help="Build the typed JSON payload for this shortcut",
    ),
    timeout: float | None = typer.Option(None, "--timeout", help="Deadline in seconds"),
    format_output: str = typer.Option(
        OUTPUT_FORMAT_TEXT, "--format", "-f", help="Output format: 'json' or 'text'"
    ),
) -> None:
    """Record a new activity.

    Examples:
        slash-activity create -c 1 -t shortcut.create -s 42
        slash-activity create -c 1 -t shortcut.view -l WARN -p '{"shortcutId": 42}'
    """
    _check_format(format_output)
    if payload is not None and shortcut_id is not None:
        print_error(ERROR_MESSAGES["payload_conflict"])
        raise typer.Exit(code=1)
    if shortcut_id is not None:
        payload = PAYLOAD_MODELS[activity_type](shortcut_id=shortcut_id).to_json()

    with _open_store(ctx) as store:
        activity = store.create_activity(
            creator,
            activity_type,
            level,
            payload if payload is not None else "",
            ctx=_operation_context(timeout),
        )

    if format_output == OUTPUT_FORMAT_JSON:
        _echo_json(activity.to_dict())
    else:
        print_success(
            SUCCESS_MESSAGES["created"].format(
                id=activity.id, type=activity.type.value, level=activity.level.value
            )
        )


@app.command("list")
def list_command(
    ctx: typer.Context,
    activity_type: ActivityType | None = typer.Option(None, "--type", "-t", help="Filter by type"),
    level: ActivityLevel | None = typer.Option(None, "--level", "-l", help="Filter by level"),
    timeout: float | None = typer.Option(None, "--timeout", help="Deadline in seconds"),
    format_output: str = typer.Option(
        OUTPUT_FORMAT_TEXT, "--format", "-f", help="Output format: 'json' or 'text'"
    ),
) -> None:
    """List activities matching all given filters."""
    _check_format(format_output)
    find = FindActivity(type=activity_type, level=level)
    with _open_store(ctx) as store:
        items = store.list_activities(find, ctx=_operation_context(timeout))

    if format_output == OUTPUT_FORMAT_JSON:
        _echo_json([item.to_dict() for item in items])
        return
    if not items:
        print_info(INFO_MESSAGES["no_match"])
        return
    _print_table(items)
    print_info(
        INFO_MESSAGES["list_summary"].format(
            count=len(items), suffix="y" if len(items) == 1 else "ies"
        )
    )


@app.command("get")
def get(
    ctx: typer.Context,
    activity_type: ActivityType | None = typer.Option(None, "--type", "-t", help="Filter by type"),
    level: ActivityLevel | None = typer.Option(None, "--level", "-l", help="Filter by level"),
    timeout: float | None = typer.Option(None, "--timeout", help="Deadline in seconds"),
    format_output: str = typer.Option(
        OUTPUT_FORMAT_TEXT, "--format", "-f", help="Output format: 'json' or 'text'"
    ),
) -> None:
    """Show the most recent activity matching all given filters."""
    _check_format(format_output)
    find = FindActivity(type=activity_type, level=level)
    with _open_store(ctx) as store:
        activity = store.get_activity(find, ctx=_operation_context(timeout))

    if format_output == OUTPUT_FORMAT_JSON:
        _echo_json(activity.to_dict() if activity else None)
        return
    if activity is None:
        print_info(INFO_MESSAGES["no_match"])
        return
    _print_table([activity])


if __name__ == "__main__":
    app()
