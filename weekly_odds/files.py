"""Reading and writing report files."""
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .errors import DataIntegrityError
from .models import AggregatedGame, Game, parse_games

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


def report_path(name: str, directory: Path, now: Optional[datetime] = None) -> Path:
    """Path of a report named after the run time, e.g. weekly_results_2024-09-07_11-21-49.json."""
    timestamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    return Path(directory) / f"{name}_{timestamp}.json"


def save_report(name: str, records: Sequence[Dict[str, Any]], directory: Path, now: Optional[datetime] = None) -> Path:
    """Write records as an indented JSON array and return the file path."""
    path = report_path(name, directory, now)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(list(records), f, indent=2)

    logger.debug(f"File saved: {path} with {len(records)} records")
    return path


def _read_json(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise DataIntegrityError(f"{path} is not valid JSON: {e}") from e


def load_fixture(path: Path) -> List[Game]:
    """Load a saved odds payload (the raw JSON array returned by the odds endpoint)."""
    data = _read_json(path)
    if not isinstance(data, list):
        raise DataIntegrityError(f"{path} does not contain a list of games")
    games = parse_games(data)
    logger.debug(f"Loaded {len(games)} games from {path}")
    return games


def load_report(path: Path) -> List[AggregatedGame]:
    """Parse a saved report back into aggregated games."""
    data = _read_json(path)
    if not isinstance(data, list):
        raise DataIntegrityError(f"{path} does not contain a list of results")
    try:
        return [AggregatedGame.from_dict(record) for record in data]
    except (KeyError, TypeError, ValueError) as e:
        raise DataIntegrityError(f"{path} has a malformed result record: {e!r}") from e
