"""Exception types raised inside the engine.

Only KnowledgeBaseError is expected to reach callers; the others are raised
and handled inside the shopping/prep pipelines.
"""


class KitchenError(Exception):
    pass


class AggregationError(KitchenError, ValueError):
    """A single ingredient could not be merged (skipped or rescued by the caller)."""


class MissingRelationError(KitchenError, LookupError):
    """A meal plan or its recipes could not be resolved."""


class KnowledgeBaseError(KitchenError, ValueError):
    """Prep knowledge configuration is malformed."""


__all__ = ['KitchenError', 'AggregationError', 'MissingRelationError', 'KnowledgeBaseError']
