# File: /docview/engine/collation.py | Version: 2.0 | Title: Locale-aware string collation keys
"""
Unicode collation for locale-aware string sorts.

With PyICU installed (``pip install 'docview[icu]'``) every locale tag gets an ICU
collator carrying that language's CLDR tailoring, so Swedish puts "ä" after "z"
while German files it with "a". Without PyICU, keys come from pyuca's root DUCET
table, which orders all languages alike.

Collators are expensive to build; they are cached per tag for the process.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional, Tuple, Union

from pyuca import Collator

log = logging.getLogger(__name__)

CollationKey = Union[bytes, Tuple[int, ...]]


@lru_cache(maxsize=1)
def _root_collator() -> Collator:
    log.debug("Loading Unicode collation table")
    return Collator()


@lru_cache(maxsize=1)
def _icu_module():
    try:
        import icu
    except ImportError:
        log.warning("PyICU is not installed; locale tags use root collation. pip install 'docview[icu]'")
        return None
    return icu


@lru_cache(maxsize=64)
def _locale_collator(tag: str):
    icu = _icu_module()
    if icu is None:
        return None
    locale = icu.Locale.forLanguageTag(tag.replace("_", "-"))
    log.debug("Built ICU collator for %s", tag)
    return icu.Collator.createInstance(locale)


def tailoring_available() -> bool:
    return _icu_module() is not None


def collation_key(text: str, locale: Optional[str] = None) -> CollationKey:
    """Sort key for ``text``; keys are only comparable for the same ``locale``."""
    if locale:
        collator = _locale_collator(locale)
        if collator is not None:
            return collator.getSortKey(text)
    return tuple(_root_collator().sort_key(text))
