import json
from pathlib import Path

import pytest

from weekly_odds.models import Game

FIXTURE_PATH = Path(__file__).parent / "fixtures" / "h2h_odds.json"


def make_event(home, away, quotes, commence_time="2024-09-08T17:00:00Z"):
    """Build an odds endpoint game object from (title, home_price, away_price) tuples."""
    return {
        "id": f"{home}-{away}",
        "sport_key": "americanfootball_nfl",
        "commence_time": commence_time,
        "home_team": home,
        "away_team": away,
        "bookmakers": [
            {
                "key": title.lower(),
                "title": title,
                "markets": [
                    {
                        "key": "h2h",
                        "outcomes": [
                            {"name": home, "price": home_price},
                            {"name": away, "price": away_price},
                        ],
                    }
                ],
            }
            for title, home_price, away_price in quotes
        ],
    }


def make_game(home, away, quotes, commence_time="2024-09-08T17:00:00Z"):
    return Game.from_api(make_event(home, away, quotes, commence_time))


@pytest.fixture
def fixture_path():
    return FIXTURE_PATH


@pytest.fixture
def fixture_events():
    with open(FIXTURE_PATH, "r", encoding="utf-8") as f:
        return json.load(f)
