import json

import pytest
from click.testing import CliRunner

from weekly_odds import main as cli_module
from weekly_odds.files import load_fixture
from weekly_odds.models import OddsResponse, QuotaInfo


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setattr(cli_module, "NFL_ODDS_API_KEY", "test-key")


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.setattr(cli_module, "NFL_ODDS_API_KEY", "")


@pytest.fixture
def client_cls(mocker):
    return mocker.patch("weekly_odds.pipeline.OddsAPIClient")


def weekly_results(runner, *args, input=None):
    return runner.invoke(cli_module.cli, ["weekly-results", *args], input=input)


def test_weekly_results_from_fixture(runner, no_api_key, fixture_path, tmp_path):
    result = weekly_results(runner, "--fixture", str(fixture_path), "--date", "2024-09-07", "--yes",
                            "--output-dir", str(tmp_path))

    assert result.exit_code == 0, result.output
    assert "Ranked Games" in result.output
    assert "Atlanta Falcons (Home) vs Pittsburgh Steelers (Away)" in result.output
    assert "Testing" in result.output

    files = list(tmp_path.glob("weekly_results_*.json"))
    assert len(files) == 1
    records = json.loads(files[0].read_text(encoding="utf-8"))
    assert [r["home_team"] for r in records] == ["Atlanta Falcons", "Kansas City Chiefs", "Philadelphia Eagles"]


def test_weekly_results_from_api(runner, api_key, client_cls, fixture_path, tmp_path):
    client_cls.return_value.fetch_game_odds.return_value = OddsResponse(
        games=load_fixture(fixture_path), quota=QuotaInfo(quota_remaining=480, quota_used=20)
    )

    result = weekly_results(runner, "--date", "2024-09-07", "--yes", "--output-dir", str(tmp_path),
                            "--name", "week_one")

    assert result.exit_code == 0, result.output
    client_cls.assert_called_once_with(api_key="test-key")
    client_cls.return_value.fetch_game_odds.assert_called_once_with("2024-09-05T00:00:00Z", "2024-09-11T23:59:59Z")
    assert "480" in result.output
    assert len(list(tmp_path.glob("week_one_*.json"))) == 1


def test_weekly_results_prompts_for_date_and_confirmation(runner, no_api_key, fixture_path, tmp_path):
    result = weekly_results(runner, "--fixture", str(fixture_path), "--output-dir", str(tmp_path),
                            input="2024-09-07\ny\n")

    assert result.exit_code == 0, result.output
    assert "What is a date" in result.output
    assert len(list(tmp_path.iterdir())) == 1


def test_declining_confirmation_stops_the_run(runner, api_key, client_cls, tmp_path):
    result = weekly_results(runner, "--date", "2024-09-07", "--output-dir", str(tmp_path), input="n\n")

    assert result.exit_code == 1
    client_cls.assert_not_called()
    assert not tmp_path.exists() or not list(tmp_path.iterdir())


def test_missing_api_key_exits_with_configuration_code(runner, no_api_key, client_cls, tmp_path):
    result = weekly_results(runner, "--date", "2024-09-07", "--yes", "--output-dir", str(tmp_path))

    assert result.exit_code == 2
    assert "NFL_ODDS_API_KEY" in result.output
    client_cls.assert_not_called()


def test_invalid_date_exits_without_fetching(runner, api_key, client_cls, tmp_path):
    result = weekly_results(runner, "--date", "the thirty-second of never", "--yes", "--output-dir", str(tmp_path))

    assert result.exit_code == 3
    client_cls.assert_not_called()


def test_empty_week_exits_without_writing(runner, api_key, client_cls, tmp_path):
    client_cls.return_value.fetch_game_odds.return_value = OddsResponse(games=[])

    result = weekly_results(runner, "--date", "2024-09-07", "--yes", "--output-dir", str(tmp_path))

    assert result.exit_code == 5
    assert "No game odds could be found" in result.output
    assert not list(tmp_path.iterdir())


def test_list_sports(runner, api_key, mocker):
    client = mocker.patch("weekly_odds.main.OddsAPIClient").return_value
    client.get_sports.return_value = [
        {"key": "americanfootball_nfl", "group": "American Football", "title": "NFL", "active": True},
        {"key": "baseball_mlb", "group": "Baseball", "title": "MLB", "active": False},
    ]

    result = runner.invoke(cli_module.cli, ["list-sports"])

    assert result.exit_code == 0, result.output
    assert "americanfootball_nfl" in result.output
    assert "baseball_mlb" not in result.output


def test_quota(runner, api_key, mocker):
    client = mocker.patch("weekly_odds.main.OddsAPIClient").return_value
    client.requests_used = 20
    client.requests_remaining = 480

    result = runner.invoke(cli_module.cli, ["quota"])

    assert result.exit_code == 0, result.output
    assert "Requests remaining: 480" in result.output


def test_quota_without_api_key(runner, no_api_key):
    result = runner.invoke(cli_module.cli, ["quota"])

    assert result.exit_code == 2
