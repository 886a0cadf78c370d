from pathlib import Path

from kitchen.utilities.config import PREP_KNOWLEDGE_FILE

# Centralized paths for packaged data files (single source of truth)
DATA_DIR = (Path(__file__).parent.parent / 'data').resolve()
DEFAULT_KNOWLEDGE_FILE = DATA_DIR / 'prep_knowledge.json'
KNOWLEDGE_FILE = Path(PREP_KNOWLEDGE_FILE)

__all__ = ['DATA_DIR', 'DEFAULT_KNOWLEDGE_FILE', 'KNOWLEDGE_FILE']
