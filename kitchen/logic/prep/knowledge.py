"""Prep knowledge base: per-ingredient batch-cooking and prep characteristics.

Entries are authored under three domains (proteins, vegetables, grains) and
looked up by their prep-normalized name, so an authored "ground beef" is
found under "beef" exactly as an analyzed ingredient would be.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple

from kitchen.logic.parsing.names import prep_key
from kitchen.utilities.errors import KnowledgeBaseError

logger = logging.getLogger(__name__)

PROTEINS = "proteins"
VEGETABLES = "vegetables"
GRAINS = "grains"
DOMAINS: Tuple[str, ...] = (PROTEINS, VEGETABLES, GRAINS)


@dataclass(frozen=True)
class PrepKnowledgeEntry:
    name: str
    domain: str
    methods: Tuple[str, ...] = ()
    prep_methods: Tuple[str, ...] = ()
    max_batch_size: str = ""
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    shelf_life: str = ""
    storage_instructions: str = ""  # proteins/grains
    storage_method: str = ""  # vegetables
    reheating_methods: Tuple[str, ...] = ()
    tips: Tuple[str, ...] = field(default=())

    @staticmethod
    def from_dict(name: str, domain: str, data: Dict[str, Any]) -> "PrepKnowledgeEntry":
        if not isinstance(data, dict):
            raise KnowledgeBaseError(f"Knowledge entry {name!r} in {domain} must be an object")

        def _strings(key):
            value = data.get(key) or []
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise KnowledgeBaseError(f"Knowledge entry {name!r}: {key} must be a list of strings")
            return tuple(value)

        def _minutes(key):
            value = data.get(key)
            if value is None:
                return None
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
                raise KnowledgeBaseError(f"Knowledge entry {name!r}: {key} must be a non-negative number")
            return value

        # older documents called the grain methods "batchMethods"
        methods = _strings('methods') or _strings('batchMethods')
        return PrepKnowledgeEntry(
            name=name,
            domain=domain,
            methods=methods,
            prep_methods=_strings('prepMethods'),
            max_batch_size=data.get('maxBatchSize') or "",
            prep_time=_minutes('prepTime'),
            cook_time=_minutes('cookTime'),
            shelf_life=data.get('shelfLife') or "",
            storage_instructions=data.get('storageInstructions') or "",
            storage_method=data.get('storageMethod') or "",
            reheating_methods=_strings('reheatingMethods'),
            tips=_strings('tips'),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.methods:
            data['methods'] = list(self.methods)
        if self.prep_methods:
            data['prepMethods'] = list(self.prep_methods)
        if self.max_batch_size:
            data['maxBatchSize'] = self.max_batch_size
        if self.prep_time is not None:
            data['prepTime'] = self.prep_time
        if self.cook_time is not None:
            data['cookTime'] = self.cook_time
        if self.shelf_life:
            data['shelfLife'] = self.shelf_life
        if self.storage_instructions:
            data['storageInstructions'] = self.storage_instructions
        if self.storage_method:
            data['storageMethod'] = self.storage_method
        if self.reheating_methods:
            data['reheatingMethods'] = list(self.reheating_methods)
        if self.tips:
            data['tips'] = list(self.tips)
        return data


class PrepKnowledgeBase:
    """Immutable, versioned lookup table of PrepKnowledgeEntry by normalized name."""

    def __init__(self, entries=(), version: str = "1"):
        self._version = str(version)
        index: Dict[str, PrepKnowledgeEntry] = {}
        for entry in entries:
            key = prep_key(entry.name)
            if key in index:
                logger.warning(f"Duplicate knowledge entry for {key!r}; keeping the first one")
                continue
            index[key] = entry
        self._entries = index

    @property
    def version(self) -> str:
        return self._version

    def lookup(self, normalized_name: str) -> Optional[PrepKnowledgeEntry]:
        """Entry for an already prep-normalized name, None when unknown."""
        return self._entries.get(normalized_name)

    def domain_of(self, normalized_name: str) -> Optional[str]:
        entry = self.lookup(normalized_name)
        return entry.domain if entry else None

    def __iter__(self) -> Iterator[PrepKnowledgeEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, normalized_name) -> bool:
        return normalized_name in self._entries

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "PrepKnowledgeBase":
        if not isinstance(data, dict):
            raise KnowledgeBaseError("Knowledge base document must be an object")
        entries = []
        for domain in DOMAINS:
            section = data.get(domain)
            if section is None:
                section = {}
            if not isinstance(section, dict):
                raise KnowledgeBaseError(f"Knowledge base section {domain!r} must be an object")
            for name, raw in section.items():
                entries.append(PrepKnowledgeEntry.from_dict(name, domain, raw))
        unknown = [k for k in data if k not in DOMAINS and k != 'version']
        if unknown:
            logger.debug(f"Ignoring unknown knowledge base sections: {unknown}")
        return PrepKnowledgeBase(entries, version=data.get('version', '1'))

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'version': self._version}
        for domain in DOMAINS:
            data[domain] = {e.name: e.to_dict() for e in self._entries.values() if e.domain == domain}
        return data


_default: Optional[PrepKnowledgeBase] = None


def load_default() -> PrepKnowledgeBase:
    """The packaged knowledge base (or PREP_KNOWLEDGE_FILE), loaded once."""
    from kitchen.infra.Knowledge_Repository import reading_prep_knowledge

    global _default
    if _default is None:
        _default = reading_prep_knowledge()
    return _default


__all__ = ['PrepKnowledgeEntry', 'PrepKnowledgeBase', 'load_default', 'DOMAINS', 'PROTEINS', 'VEGETABLES', 'GRAINS']
