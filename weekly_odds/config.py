"""Configuration and settings for the weekly odds report."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

# Load environment variables from .env file
load_dotenv()

# Base paths
BASE_DIR = Path(__file__).parent.parent
FILES_DIR = Path(os.getenv("WEEKLY_ODDS_FILES_DIR", BASE_DIR / "files"))

# API Configuration
NFL_ODDS_API_KEY = os.getenv("NFL_ODDS_API_KEY", "")
ODDS_API_BASE_URL = "https://api.the-odds-api.com/v4"
ODDS_API_SIGNUP_URL = "https://the-odds-api.com"
REQUEST_TIMEOUT = (5, 20)  # (connect, read) seconds

# Only the NFL is reported on
SPORT_KEY = "americanfootball_nfl"
DEFAULT_REGIONS = ["us"]
DEFAULT_MARKETS = ["h2h"]
ODDS_FORMAT = "decimal"

# Report settings
REPORT_NAME = "weekly_results"
SIGNIFICANCE_THRESHOLD = 10  # percentage points


@dataclass
class Settings:
    """Options recognised by a weekly-results run."""
    api_key: str = NFL_ODDS_API_KEY
    date: Optional[str] = None
    assume_yes: bool = False
    fixture_path: Optional[Path] = None
    output_dir: Path = FILES_DIR
    report_name: str = REPORT_NAME

    @property
    def offline(self) -> bool:
        """True when odds come from a saved payload instead of the API."""
        return self.fixture_path is not None

    def validate(self) -> "Settings":
        """Check the options before anything touches the network or disk."""
        if not self.offline and not self.api_key:
            raise ConfigurationError(
                "No NFL_ODDS_API_KEY found in your environment variables. "
                f"Add the API key to your environment or get a new one from {ODDS_API_SIGNUP_URL}"
            )
        if self.offline and not Path(self.fixture_path).is_file():
            raise ConfigurationError(f"Fixture file not found: {self.fixture_path}")
        if not self.report_name or any(sep in self.report_name for sep in ("/", "\\")):
            raise ConfigurationError(f"Invalid report name: {self.report_name!r}")
        return self
