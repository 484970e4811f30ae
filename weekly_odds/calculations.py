"""Implied probability calculations and ranking for a week of games."""
import logging
import math
from decimal import Decimal, ROUND_HALF_UP, ROUND_FLOOR
from typing import Iterable, List

from .config import SIGNIFICANCE_THRESHOLD
from .errors import DataIntegrityError
from .models import AggregatedGame, Game, Outcome
from .weeks import format_long_date

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
NOT_SIGNIFICANT_MESSAGE = "This game does not have a significant enough difference to make a prediction"


def implied_percentage(decimal_odds: float) -> float:
    """Convert decimal odds to an implied win percentage.

    H2H odds imply a probability of 1 / (decimal odds) for each team, which is
    scaled to a percentage here. No rounding is applied.
    """
    if isinstance(decimal_odds, bool):
        raise DataIntegrityError(f"Decimal odds must be a number, got {decimal_odds!r}")
    try:
        decimal_odds = float(decimal_odds)
    except (TypeError, ValueError) as e:
        raise DataIntegrityError(f"Decimal odds must be a number, got {decimal_odds!r}") from e
    if not math.isfinite(decimal_odds) or decimal_odds <= 0:
        raise DataIntegrityError(f"Decimal odds must be positive, got {decimal_odds!r}")
    return (1 / decimal_odds) * 100


def round_percentage(value: float) -> Decimal:
    """Round to two places, half up, on the exact binary value of ``value``."""
    return Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def _match_outcomes(game: Game, outcomes: List[Outcome], bookmaker: str):
    """Return the (home, away) outcomes of a two-way market."""
    if len(outcomes) != 2:
        raise DataIntegrityError(
            f"{bookmaker} quotes {len(outcomes)} outcomes for {game.home_team} vs {game.away_team}, expected 2"
        )

    home = away = None
    for outcome in outcomes:
        if outcome.name == game.home_team and home is None:
            home = outcome
        elif outcome.name == game.away_team and away is None:
            away = outcome
        else:
            raise DataIntegrityError(
                f"{bookmaker} outcome {outcome.name!r} does not match "
                f"{game.home_team!r} or {game.away_team!r}"
            )
    return home, away


def aggregate_game(game: Game) -> AggregatedGame:
    """Average each team's implied percentage across every bookmaker quoting the game.

    Only the first market of each bookmaker is used. The averages are rounded
    to two places before the difference is taken, and the difference is the
    floor of their absolute gap.
    """
    if not game.bookmakers:
        raise DataIntegrityError(f"No bookmakers quote {game.home_team} vs {game.away_team}")

    home_percentages, away_percentages = [], []
    for bookmaker in game.bookmakers:
        if not bookmaker.markets:
            raise DataIntegrityError(f"{bookmaker.title} has no markets for {game.home_team} vs {game.away_team}")

        home, away = _match_outcomes(game, bookmaker.markets[0].outcomes, bookmaker.title)
        home_percentage = implied_percentage(home.price)
        away_percentage = implied_percentage(away.price)

        home_percentages.append(home_percentage)
        away_percentages.append(away_percentage)
        logger.info(
            f"{bookmaker.title} - {game.home_team}: {round_percentage(home_percentage)}% - "
            f"{game.away_team}: {round_percentage(away_percentage)}%"
        )

    average_home = round_percentage(sum(home_percentages) / len(home_percentages))
    average_away = round_percentage(sum(away_percentages) / len(away_percentages))
    difference = int(abs(average_home - average_away).to_integral_value(rounding=ROUND_FLOOR))

    return AggregatedGame(
        home_team=game.home_team,
        away_team=game.away_team,
        home_team_percentage=float(average_home),
        away_team_percentage=float(average_away),
        difference=difference,
        raw_data=game,
    )


def rank_games(games: Iterable[AggregatedGame]) -> List[AggregatedGame]:
    """Order games by difference, largest first. Ties keep their input order."""
    return sorted(games, key=lambda game: game.difference, reverse=True)


def favored_team(game: AggregatedGame) -> str:
    """The home team only when its percentage is strictly higher; otherwise the away team."""
    if game.home_team_percentage > game.away_team_percentage:
        return game.home_team
    return game.away_team


def build_message(game: AggregatedGame, threshold: int = SIGNIFICANCE_THRESHOLD) -> str:
    if game.difference > threshold:
        return (
            f"The {favored_team(game)} are favored to win by {game.difference}% "
            f"({game.home_team_percentage:.2f}% vs {game.away_team_percentage:.2f}%)"
        )
    return NOT_SIGNIFICANT_MESSAGE


def annotate_games(games: List[AggregatedGame], threshold: int = SIGNIFICANCE_THRESHOLD) -> List[AggregatedGame]:
    """Attach the prediction message to each game in place and return the list."""
    for game in games:
        game.message = build_message(game, threshold)
    return games


def summary_line(game: AggregatedGame) -> str:
    """One line of the ranked report for a game."""
    kickoff = format_long_date(game.raw_data.commence_time.astimezone())
    message = game.message if game.message is not None else build_message(game)
    return f"{game.home_team} (Home) vs {game.away_team} (Away) - {kickoff} || {message}"
