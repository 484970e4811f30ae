"""Stages of a weekly results run.

Each stage returns its result or raises a WeeklyOddsError; deciding how to
report the error and which exit code to use is left to the CLI.
"""
import logging
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional

from .calculations import aggregate_game, rank_games, annotate_games
from .config import Settings, SIGNIFICANCE_THRESHOLD
from .errors import DataIntegrityError, NoGamesError
from .files import load_fixture, save_report
from .models import AggregatedGame, Game, OddsResponse
from .odds_api import OddsAPIClient
from .weeks import WeekWindow, resolve_week

logger = logging.getLogger(__name__)


def resolve_window(settings: Settings, today: Optional[date] = None) -> WeekWindow:
    """Work out the football week to report on from the requested date."""
    return resolve_week(settings.date, today)


def fetch_games(settings: Settings, window: WeekWindow, client: OddsAPIClient = None) -> OddsResponse:
    """
    Get the odds for every game in the window.

    Reads the fixture file instead of calling the API when one is configured.

    Raises:
        NoGamesError: nothing came back, whether because the week is empty
            or because the request failed.
    """
    if settings.offline:
        response = OddsResponse(games=load_fixture(settings.fixture_path), source="fixture")
    else:
        if client is None:
            client = OddsAPIClient(api_key=settings.api_key)
        response = client.fetch_game_odds(window.start_date, window.end_date)

    if not response.games:
        raise NoGamesError(
            f"No game odds could be found for the NFL between "
            f"{window.start_date_formatted} and {window.end_date_formatted}"
        )
    return response


def compute_results(games: List[Game], threshold: int = SIGNIFICANCE_THRESHOLD) -> List[AggregatedGame]:
    """Aggregate, rank and annotate games.

    A game whose odds cannot be attributed to its teams is reported and left
    out of the results.
    """
    aggregated = []
    for game in games:
        try:
            aggregated.append(aggregate_game(game))
        except DataIntegrityError as e:
            logger.error(f"Skipping {game.home_team} vs {game.away_team}: {e}")

    if not aggregated:
        raise NoGamesError(f"None of the {len(games)} games had usable odds")

    return annotate_games(rank_games(aggregated), threshold)


def persist_results(results: List[AggregatedGame], settings: Settings, now: Optional[datetime] = None) -> Path:
    """Record the ranked results in a timestamped report file."""
    return save_report(settings.report_name, [game.to_dict() for game in results], settings.output_dir, now)
