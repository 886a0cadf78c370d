import json
import logging
from pathlib import Path
from typing import Optional, Union

from kitchen.infra.paths import KNOWLEDGE_FILE
from kitchen.logic.prep.knowledge import PrepKnowledgeBase
from kitchen.utilities.errors import KnowledgeBaseError

logger = logging.getLogger(__name__)


def reading_prep_knowledge(path: Optional[Union[str, Path]] = None) -> PrepKnowledgeBase:
    """Read the prep knowledge base JSON. A missing or malformed file is a configuration error and raises."""
    path = Path(path) if path is not None else KNOWLEDGE_FILE
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError as e:
        logger.error(f"Prep knowledge file not found: {path}")
        raise KnowledgeBaseError(f"Knowledge base file not found: {path}") from e
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in prep knowledge file: {e}")
        raise KnowledgeBaseError(f"Invalid JSON in knowledge base file {path}: {e}") from e

    knowledge = PrepKnowledgeBase.from_dict(data)
    logger.info(f"Loaded prep knowledge v{knowledge.version} ({len(knowledge)} entries) from {path}")
    return knowledge


def writing_prep_knowledge(knowledge: PrepKnowledgeBase, path: Union[str, Path]) -> Path:
    path = Path(path)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(knowledge.to_dict(), f, indent=2, ensure_ascii=False)
    logger.info(f"Saved prep knowledge v{knowledge.version} to {path}")
    return path
