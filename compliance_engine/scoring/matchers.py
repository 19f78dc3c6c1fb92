"""
Alert text matchers — Predicates used by pattern-based checks.

The evaluator only depends on ``TextMatcher.matches``; swap the factory to
change how patterns are interpreted without touching aggregation.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Callable, Optional, Protocol


class TextMatcher(Protocol):
    def matches(self, text: str) -> bool: ...


class RegexMatcher:
    """Case-insensitive regular-expression search."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        self._regex = _compile(pattern)

    def matches(self, text: str) -> bool:
        return self._regex.search(text) is not None

    def __repr__(self) -> str:
        return f"RegexMatcher({self.pattern!r})"


class MatchAll:
    """Matches any text; used when a check declares no pattern."""

    def matches(self, text: str) -> bool:
        return True


MatcherFactory = Callable[[Optional[str]], TextMatcher]


def regex_matcher(pattern: Optional[str]) -> TextMatcher:
    if pattern is None:
        return MatchAll()
    return RegexMatcher(pattern)


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)
