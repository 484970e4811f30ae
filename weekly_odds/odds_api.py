"""Client for The Odds API."""
import logging
from typing import Any, Dict, List, Optional

import requests

from .config import (
    NFL_ODDS_API_KEY,
    ODDS_API_BASE_URL,
    SPORT_KEY,
    DEFAULT_REGIONS,
    DEFAULT_MARKETS,
    ODDS_FORMAT,
    REQUEST_TIMEOUT,
)
from .errors import ConfigurationError, DataIntegrityError, UpstreamFetchError
from .models import OddsResponse, QuotaInfo, parse_games

logger = logging.getLogger(__name__)


class OddsAPIClient:
    """Client for The Odds API."""

    def __init__(
        self,
        api_key: str = NFL_ODDS_API_KEY,
        sport_key: str = SPORT_KEY,
        regions: List[str] = None,
        markets: List[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = ODDS_API_BASE_URL
        self.sport_key = sport_key
        self.regions = regions or DEFAULT_REGIONS
        self.markets = markets or DEFAULT_MARKETS
        self.session = session or requests.Session()
        self.quota = QuotaInfo()

    @property
    def requests_remaining(self) -> int:
        """Get the number of remaining API requests this month (-1 if unknown)."""
        return self.quota.quota_remaining

    @property
    def requests_used(self) -> int:
        """Get the number of API requests used this month (-1 if unknown)."""
        return self.quota.quota_used

    def _make_request(self, endpoint: str, params: Dict[str, Any] = None) -> Any:
        """Make a request to the API and record the quota headers."""
        if not self.api_key:
            raise ConfigurationError("NFL_ODDS_API_KEY not set. Please set it in your .env file.")

        url = f"{self.base_url}/{endpoint}"
        request_params = {"apiKey": self.api_key}
        if params:
            request_params.update(params)

        logger.debug(f"Making request to {url}")
        try:
            response = self.session.get(url, params=request_params, timeout=REQUEST_TIMEOUT)
            self.quota = QuotaInfo.from_headers(response.headers)
            logger.debug(f"API quota: {self.quota.quota_remaining} remaining, {self.quota.quota_used} used")
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise UpstreamFetchError(f"Request to {endpoint} failed: {e}") from e

    def get_sports(self) -> List[Dict[str, Any]]:
        """Get all available sports. This endpoint is free (no quota cost)."""
        sports = self._make_request("sports")
        logger.info(f"Fetched all sports ({len(sports)})")
        return sports

    def get_game_odds(self, start_date: Optional[str] = None, end_date: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Fetch head-to-head odds for upcoming games of the configured sport.

        Args:
            start_date: ISO 8601 lower bound on kickoff (e.g. '2024-09-05T00:00:00Z')
            end_date: ISO 8601 upper bound on kickoff

        Returns:
            Raw list of game objects with odds from various bookmakers
        """
        params = {
            "regions": ",".join(self.regions),
            "markets": ",".join(self.markets),
            "oddsFormat": ODDS_FORMAT,
        }
        if start_date:
            params["commenceTimeFrom"] = start_date
        if end_date:
            params["commenceTimeTo"] = end_date
        return self._make_request(f"sports/{self.sport_key}/odds", params)

    def fetch_game_odds(self, start_date: Optional[str] = None, end_date: Optional[str] = None) -> OddsResponse:
        """
        Fetch and parse game odds, degrading to an empty response on failure.

        Upstream errors are logged rather than raised; callers detect the
        failure through the empty game list.
        """
        try:
            data = self.get_game_odds(start_date, end_date)
            if not isinstance(data, list):
                raise DataIntegrityError(f"Expected a list of games, got {type(data).__name__}")
            games = parse_games(data)
        except (UpstreamFetchError, DataIntegrityError) as e:
            logger.error(f"Error fetching {self.sport_key} game odds: {e}")
            logger.debug("Fetch failure details", exc_info=True)
            return OddsResponse(games=[], quota=QuotaInfo())

        logger.info(f"Fetched {self.sport_key} game odds: {len(games)} games")
        return OddsResponse(games=games, quota=self.quota)
