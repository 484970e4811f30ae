from datetime import datetime, timezone

import pytest

from conftest import make_game
from weekly_odds.errors import DataIntegrityError
from weekly_odds.models import AggregatedGame, Game, QuotaInfo


def test_game_from_api(fixture_events):
    game = Game.from_api(fixture_events[0])

    assert game.home_team == "Kansas City Chiefs"
    assert game.away_team == "Baltimore Ravens"
    assert game.commence_time == datetime(2024, 9, 6, 0, 20, tzinfo=timezone.utc)
    assert game.external_id == "a512a48a58c4329048174217b2cc7ce0"
    assert [b.title for b in game.bookmakers] == ["DraftKings", "FanDuel"]
    assert game.bookmakers[0].markets[0].outcomes[0].name == "Baltimore Ravens"
    assert game.bookmakers[0].markets[0].outcomes[0].price == 2.25
    assert game.raw is fixture_events[0]


def test_game_without_bookmakers_key():
    event = {"home_team": "A", "away_team": "B", "commence_time": "2024-09-08T17:00:00Z"}

    assert Game.from_api(event).bookmakers == []


@pytest.mark.parametrize("event", [
    {"away_team": "B", "commence_time": "2024-09-08T17:00:00Z"},
    {"home_team": "A", "away_team": "B", "commence_time": "yesterday"},
    {"home_team": "A", "away_team": "B", "commence_time": "2024-09-08T17:00:00Z",
     "bookmakers": [{"title": "Book", "markets": [{"key": "h2h"}]}]},
    "not a game",
])
def test_malformed_game_payload(event):
    with pytest.raises(DataIntegrityError):
        Game.from_api(event)


def test_aggregated_game_to_dict_includes_raw_payload():
    game = make_game("Home Team", "Away Team", [("Book", 1.91, 2.1)])
    result = AggregatedGame("Home Team", "Away Team", 52.36, 47.62, 4, raw_data=game)

    record = result.to_dict()

    assert record == {
        "home_team": "Home Team",
        "away_team": "Away Team",
        "home_team_percentage": 52.36,
        "away_team_percentage": 47.62,
        "difference": 4,
        "raw_data": game.raw,
    }

    result.message = "This game does not have a significant enough difference to make a prediction"
    assert result.to_dict()["message"] == result.message


def test_quota_from_headers():
    quota = QuotaInfo.from_headers({"x-requests-remaining": "498", "x-requests-used": "2"})

    assert quota == QuotaInfo(quota_remaining=498, quota_used=2)


def test_quota_from_missing_headers():
    assert QuotaInfo.from_headers({}) == QuotaInfo(-1, -1)
