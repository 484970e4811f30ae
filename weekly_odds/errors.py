"""Error types raised by the weekly odds pipeline."""


class WeeklyOddsError(Exception):
    """Base error. Each subclass maps to its own process exit code."""
    exit_code = 1


class ConfigurationError(WeeklyOddsError):
    """Missing or invalid settings, e.g. no API key."""
    exit_code = 2


class InvalidDateError(WeeklyOddsError):
    """The date supplied by the user could not be parsed."""
    exit_code = 3


class UpstreamFetchError(WeeklyOddsError):
    """The odds provider could not be reached or returned an error."""
    exit_code = 4


class NoGamesError(WeeklyOddsError):
    """No games were available for the requested week."""
    exit_code = 5


class DataIntegrityError(WeeklyOddsError):
    """Odds data that cannot be attributed to the game's two teams."""
    exit_code = 6
