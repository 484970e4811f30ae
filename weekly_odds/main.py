"""CLI entry point for the weekly NFL odds report."""
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from rich.logging import RichHandler

from .calculations import summary_line
from .config import FILES_DIR, REPORT_NAME, NFL_ODDS_API_KEY, Settings
from .errors import ConfigurationError, WeeklyOddsError
from .models import OddsResponse
from .odds_api import OddsAPIClient
from .pipeline import resolve_window, fetch_games, compute_results, persist_results
from .timing import Stopwatch
from .weeks import WeekWindow

console = Console()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    handlers=[RichHandler(console=console, rich_tracebacks=True)]
)
logger = logging.getLogger(__name__)

DATE_PROMPT = "What is a date of one of the games during the week you want stats for? (leave blank for this week)"


def section(title: str) -> None:
    console.print(f"\n[bold bright_yellow]{title}[/bold bright_yellow]")


def fail(error: WeeklyOddsError) -> None:
    """Report an error and exit with its code."""
    console.print(f"[red]Error: {error}[/red]")
    logger.debug("Error details", exc_info=error)
    sys.exit(error.exit_code)


def print_week(window: WeekWindow) -> None:
    table = Table(title="Week")
    for column in window.as_dict():
        table.add_column(column, style="cyan")
    table.add_row(*window.as_dict().values())
    console.print(table)


def print_quota(response: OddsResponse) -> None:
    table = Table(title="Quota Info")
    table.add_column("Quota Remaining", justify="right")
    table.add_column("Quota Used", justify="right")
    if response.source == "fixture":
        table.add_row("Testing", "Testing")
    else:
        table.add_row(str(response.quota.quota_remaining), str(response.quota.quota_used))
    console.print(table)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def cli(debug):
    """Weekly NFL odds report CLI."""
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command("weekly-results")
@click.option("--date", "-d", "date_", default=None, help="Any date in the week to report on (default: prompt)")
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Skip the confirmation prompt")
@click.option("--fixture", "-f", type=click.Path(dir_okay=False, path_type=Path),
              help="Read odds from a saved API payload instead of the API")
@click.option("--output-dir", "-o", type=click.Path(file_okay=False, path_type=Path), default=FILES_DIR,
              show_default=True, help="Directory for the report file")
@click.option("--name", "-n", "report_name", default=REPORT_NAME, show_default=True, help="Report file name prefix")
def weekly_results(date_, assume_yes, fixture, output_dir, report_name):
    """Rank this week's games by the gap in implied win probability."""
    settings = Settings(
        api_key=NFL_ODDS_API_KEY,
        date=date_,
        assume_yes=assume_yes,
        fixture_path=fixture,
        output_dir=output_dir,
        report_name=report_name,
    )
    stopwatch = Stopwatch().start()

    try:
        settings.validate()

        if settings.date is None:
            settings.date = click.prompt(DATE_PROMPT, default="", show_default=False)
        window = resolve_window(settings)
        print_week(window)
        if not settings.assume_yes:
            click.confirm("Does this information look correct?", abort=True)
        stopwatch.start()

        section("Fetching NFL game odds...")
        response = fetch_games(settings, window)
        stopwatch.lap("fetch game odds")

        section("Calculating weekly results...")
        results = compute_results(response.games)
        stopwatch.lap("calculate weekly results")

        section("Ranked Games")
        for game in results:
            console.print(summary_line(game), markup=False, highlight=False, soft_wrap=True)

        path = persist_results(results, settings)
        console.print(f"[green]Success:[/green] File saved: {path} with {len(results)} records")
        stopwatch.lap("save results")
    except WeeklyOddsError as e:
        fail(e)

    section("Quota Info")
    print_quota(response)


@cli.command("list-sports")
@click.option("--all", "show_all", is_flag=True, help="Include sports that are out of season")
def list_sports(show_all):
    """List sports offered by The Odds API."""
    if not NFL_ODDS_API_KEY:
        fail(ConfigurationError("NFL_ODDS_API_KEY not set. Please set it in your .env file."))

    client = OddsAPIClient(api_key=NFL_ODDS_API_KEY)
    try:
        sports = client.get_sports()
    except WeeklyOddsError as e:
        fail(e)

    table = Table(title="Available Sports")
    table.add_column("Key", style="cyan")
    table.add_column("Group")
    table.add_column("Title")
    table.add_column("Active", justify="center")

    for sport in sports:
        if not show_all and not sport.get("active"):
            continue
        table.add_row(
            sport["key"],
            sport.get("group", "-"),
            sport.get("title", "-"),
            "[green]yes[/green]" if sport.get("active") else "[dim]no[/dim]",
        )

    console.print(table)


@cli.command("quota")
def check_quota():
    """Check API quota remaining."""
    if not NFL_ODDS_API_KEY:
        fail(ConfigurationError("NFL_ODDS_API_KEY not set."))

    client = OddsAPIClient(api_key=NFL_ODDS_API_KEY)
    # Make a free request to get quota info
    try:
        client.get_sports()
    except WeeklyOddsError as e:
        fail(e)

    console.print("[bold]API Quota Status[/bold]")
    console.print(f"  Requests used: {client.requests_used}")
    console.print(f"  Requests remaining: {client.requests_remaining}")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
