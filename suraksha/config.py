"""
Runtime configuration for Suraksha.

Values are read from the environment (a .env file in the working directory
is loaded first). Per-quiz settings such as sample size and time limit live
in the content catalog, not here.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


PROJECT_ROOT = Path(__file__).parent.parent
DEFAULT_CATALOG_PATH = PROJECT_ROOT / "data" / "catalog.yaml"
DEFAULT_PROGRESS_DIR = Path.home() / ".suraksha"
DEFAULT_PROGRESS_DB = DEFAULT_PROGRESS_DIR / "progress.db"
DEFAULT_QUIZ_ID = "disaster-management-quiz"

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Settings:
    catalog_path: Path
    progress_db: Path
    default_quiz_id: str
    history_limit: int
    log_level: str


def get_settings() -> Settings:
    """Build settings from environment variables, falling back to defaults."""
    return Settings(
        catalog_path=Path(os.getenv("SURAKSHA_CATALOG_PATH", str(DEFAULT_CATALOG_PATH))),
        progress_db=Path(os.getenv("SURAKSHA_PROGRESS_DB", str(DEFAULT_PROGRESS_DB))),
        default_quiz_id=os.getenv("SURAKSHA_DEFAULT_QUIZ", DEFAULT_QUIZ_ID),
        history_limit=int(os.getenv("SURAKSHA_HISTORY_LIMIT", "5")),
        log_level=os.getenv("SURAKSHA_LOG_LEVEL", "INFO").upper(),
    )
