"""Ingredient name normalization.

Two keys are in use and they are deliberately different:

- aggregation_key: lowercase + trim. Used to merge ingredients on a
  shopping list, so "Diced Tomatoes" and "tomatoes" stay separate lines.
- prep_key: lowercase, punctuation stripped, whitespace collapsed and
  descriptor words ("fresh", "minced", ...) removed. Used by the meal-prep
  analysis to look ingredients up in the prep knowledge base.
"""
import re
from typing import Any

from kitchen.utilities.constants import DESCRIPTOR_WORDS

__all__ = ["aggregation_key", "prep_key", "slugify"]

_PUNCT_RE = re.compile(r'[^\w\s]')
_SPACE_RE = re.compile(r'\s+')
_DESCRIPTOR_RE = re.compile(r'\b(' + '|'.join(DESCRIPTOR_WORDS) + r')\b')
_SLUG_RE = re.compile(r'[^a-z0-9]+')


def aggregation_key(name: Any) -> str:
    return name.lower().strip() if isinstance(name, str) else ''


def prep_key(name: Any) -> str:
    if not isinstance(name, str):
        return ''
    n = _SPACE_RE.sub(' ', _PUNCT_RE.sub(' ', name.lower())).strip()
    n = _DESCRIPTOR_RE.sub('', n)
    return _SPACE_RE.sub(' ', n).strip()


def slugify(name: Any) -> str:
    """'Chicken Breast (boneless)' -> 'chicken-breast-boneless'."""
    text = str(name or '').lower()
    return _SLUG_RE.sub('-', text).strip('-') or 'item'
