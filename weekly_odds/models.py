"""Data models for the weekly odds report."""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .errors import DataIntegrityError

logger = logging.getLogger(__name__)


def parse_commence_time(value: str) -> datetime:
    """Parse an Odds API timestamp such as '2024-09-06T00:20:00Z'."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass
class Outcome:
    """A bookmaker's decimal price for one team."""
    name: str
    price: float


@dataclass
class Market:
    """A head-to-head market: one outcome per team."""
    key: str
    outcomes: List[Outcome]


@dataclass
class BookmakerQuote:
    """Markets quoted by a single bookmaker for a game."""
    key: Optional[str]
    title: str
    markets: List[Market]


@dataclass
class Game:
    """Represents an NFL game as returned by The Odds API."""
    home_team: str
    away_team: str
    commence_time: datetime
    bookmakers: List[BookmakerQuote] = field(default_factory=list)
    external_id: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_api(cls, event: Dict[str, Any]) -> "Game":
        """Build a Game from one element of the odds endpoint's JSON array."""
        try:
            bookmakers = [
                BookmakerQuote(
                    key=bookmaker.get("key"),
                    title=bookmaker["title"],
                    markets=[
                        Market(
                            key=market.get("key", "h2h"),
                            outcomes=[Outcome(name=o["name"], price=o["price"]) for o in market["outcomes"]],
                        )
                        for market in bookmaker.get("markets", [])
                    ],
                )
                for bookmaker in event.get("bookmakers", [])
            ]
            return cls(
                home_team=event["home_team"],
                away_team=event["away_team"],
                commence_time=parse_commence_time(event["commence_time"]),
                bookmakers=bookmakers,
                external_id=event.get("id"),
                raw=event,
            )
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise DataIntegrityError(f"Malformed game payload ({e!r}): {event!r}") from e


@dataclass
class AggregatedGame:
    """Averaged implied percentages for a game across all of its bookmakers."""
    home_team: str
    away_team: str
    home_team_percentage: float
    away_team_percentage: float
    difference: int
    raw_data: Game
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        record = {
            "home_team": self.home_team,
            "away_team": self.away_team,
            "home_team_percentage": self.home_team_percentage,
            "away_team_percentage": self.away_team_percentage,
            "difference": self.difference,
            "raw_data": self.raw_data.raw,
        }
        if self.message is not None:
            record["message"] = self.message
        return record

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "AggregatedGame":
        return cls(
            home_team=record["home_team"],
            away_team=record["away_team"],
            home_team_percentage=float(record["home_team_percentage"]),
            away_team_percentage=float(record["away_team_percentage"]),
            difference=int(record["difference"]),
            raw_data=Game.from_api(record["raw_data"]),
            message=record.get("message"),
        )


@dataclass
class QuotaInfo:
    """Request quota reported by the odds provider (-1 when unknown)."""
    quota_remaining: int = -1
    quota_used: int = -1

    @classmethod
    def from_headers(cls, headers) -> "QuotaInfo":
        def _to_int(value) -> int:
            try:
                return int(float(value))
            except (TypeError, ValueError):
                return -1

        return cls(
            quota_remaining=_to_int(headers.get("x-requests-remaining")),
            quota_used=_to_int(headers.get("x-requests-used")),
        )


@dataclass
class OddsResponse:
    """Games returned by one odds request together with the quota it reported."""
    games: List[Game]
    quota: QuotaInfo = field(default_factory=QuotaInfo)
    source: str = "odds_api"  # 'odds_api' or 'fixture'


def parse_games(events: List[Dict[str, Any]]) -> List[Game]:
    """Parse every game in an odds payload, skipping the ones that are malformed."""
    games = []
    for event in events:
        try:
            games.append(Game.from_api(event))
        except DataIntegrityError as e:
            logger.error(f"Skipping game: {e}")
    return games
