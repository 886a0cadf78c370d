"""Configuration management for the kitchen engine."""
import os
from typing import Final, List
from pathlib import Path

# Load environment variables from .env file if it exists
from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)


def _csv_env(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [part.strip().lower() for part in raw.split(',') if part.strip()]


# Application Settings
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# Meal prep defaults (used when the caller passes no preferences)
DEFAULT_PREP_DAYS: Final[List[str]] = _csv_env('DEFAULT_PREP_DAYS', 'sunday')
DEFAULT_MAX_PREP_TIME: Final[int] = int(os.getenv('DEFAULT_MAX_PREP_TIME', '180'))
DEFAULT_SKILL_LEVEL: Final[str] = os.getenv('DEFAULT_SKILL_LEVEL', 'beginner')
DEFAULT_PLANNED_SERVINGS: Final[int] = int(os.getenv('DEFAULT_PLANNED_SERVINGS', '4'))

# Heuristics
BATCH_USAGE_THRESHOLD: Final[int] = int(os.getenv('BATCH_USAGE_THRESHOLD', '2'))
TIME_SAVED_RATIO: Final[float] = float(os.getenv('TIME_SAVED_RATIO', '0.4'))
DEFAULT_RECIPE_SERVINGS: Final[int] = int(os.getenv('DEFAULT_RECIPE_SERVINGS', '1'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = BASE_DIR / 'data'
PREP_KNOWLEDGE_FILE: Final[Path] = Path(os.getenv('PREP_KNOWLEDGE_FILE', str(DATA_DIR / 'prep_knowledge.json')))
