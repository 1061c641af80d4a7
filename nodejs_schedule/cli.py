"""Command-line interface for nodejs-schedule.

Options fall back to environment variables (see nodejs_schedule.config),
and explicit options take precedence over them.
"""

import asyncio
import json
import os
import sys
from typing import NoReturn, Optional

import click
import sentry_sdk

from . import __version__
from .config import ScheduleConfig, load_config, parse_timeout
from .console import print_entry_details, print_error, print_schedule_table
from .exceptions import ConfigurationError, NodeScheduleError, UnknownVersion
from .logging_config import logger, setup_logging
from .store import ScheduleStore

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def evaluate_boolean(value: str) -> bool:
    """
    Evaluate string values as boolean.

    Args:
        value: String value to evaluate

    Returns:
        Boolean result
    """
    return value.lower() in ["true", "yes", "yeah", "1"]


def _sentry_before_send(event, hint):
    """
    Filter events before sending to Sentry.
    Don't send user input errors - bad configuration or unknown versions are expected.
    """
    if "exc_info" in hint:
        exc_type, exc_value, tb = hint["exc_info"]
        if isinstance(exc_value, (ConfigurationError, UnknownVersion)):
            return None
    return event


def initialize_sentry() -> bool:
    """
    Initialize Sentry for error tracking.

    Telemetry is opt-in: it requires TELEMETRY to be true and SENTRY_DSN to be set.

    Returns:
        Whether Sentry was initialized
    """
    sentry_dsn = os.getenv("SENTRY_DSN")
    if not evaluate_boolean(os.getenv("TELEMETRY", "false")) or not sentry_dsn:
        return False

    sentry_sdk.init(
        dsn=sentry_dsn,
        send_default_pii=False,
        traces_sample_rate=0.0,
        before_send=_sentry_before_send,
    )
    return True


def build_config(url: Optional[str], timeout: Optional[str], log_level: Optional[str]) -> ScheduleConfig:
    """
    Build configuration from CLI options, falling back to environment variables.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    config = load_config()
    if url:
        config.url = url
    if timeout:
        config.timeout = parse_timeout(timeout)
    if log_level:
        config.log_level = log_level
    config.validate()
    return config


def _run_preload(store: ScheduleStore) -> None:
    asyncio.run(store.preload())


def _load_store(ctx: click.Context) -> ScheduleStore:
    """Resolve configuration for a command that needs the schedule."""
    options = ctx.find_object(dict) or {}
    try:
        config = build_config(options.get("url"), options.get("timeout"), options.get("log_level"))
    except ConfigurationError as e:
        print_error(f"Configuration error: {e}")
        ctx.exit(2)

    setup_logging(config.log_level)
    initialize_sentry()
    logger.debug(f"Using schedule document: {config.url}")
    return ScheduleStore.from_config(config)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option("--url", help="Location of the schedule document [env: NODEJS_SCHEDULE_URL]")
@click.option("--timeout", help="HTTP timeout in seconds [env: NODEJS_SCHEDULE_TIMEOUT]")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity [env: LOG_LEVEL]",
)
@click.version_option(__version__, prog_name="nodejs-schedule")
@click.pass_context
def cli(ctx: click.Context, url: Optional[str], timeout: Optional[str], log_level: Optional[str]) -> None:
    """Query the Node.js release schedule (start, LTS, maintenance and end-of-life dates)."""
    # Validated when a command runs, so --help works with a broken environment
    ctx.ensure_object(dict).update(url=url, timeout=timeout, log_level=log_level)


@cli.command("versions")
@click.option("--json", "as_json", is_flag=True, help="Print the schedule as JSON")
@click.pass_context
def versions_command(ctx: click.Context, as_json: bool) -> None:
    """List all release lines, oldest first."""
    store = _load_store(ctx)
    try:
        _run_preload(store)
        schedule = store.get_schedule()
    except NodeScheduleError as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps([entry.to_dict() for entry in schedule], indent=2))
    else:
        print_schedule_table(schedule)


@cli.command("show")
@click.argument("version")
@click.option("--json", "as_json", is_flag=True, help="Print the release line as JSON")
@click.pass_context
def show_command(ctx: click.Context, version: str, as_json: bool) -> None:
    """Show the schedule of one release line, e.g. "18" or "0.12"."""
    store = _load_store(ctx)
    try:
        _run_preload(store)
        entry = store.get_information(version.removeprefix("v"))
    except NodeScheduleError as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps(entry.to_dict(), indent=2))
    else:
        print_entry_details(entry)


def _fail(error: NodeScheduleError) -> NoReturn:
    message = str(error)
    if error.__cause__ is not None:
        message = f"{message} ({error.__cause__})"
    if not isinstance(error, UnknownVersion):
        sentry_sdk.capture_exception(error)
    print_error(message)
    sys.exit(1)


def main() -> None:
    """Entry point for the nodejs-schedule console script."""
    cli()


if __name__ == "__main__":
    main()
