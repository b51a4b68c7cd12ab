"""Name-based rules.

Select fields by name with a Matcher: any callable str -> bool, or a
compiled regular expression (searched, not anchored; anchor the pattern
with ^...$ for whole-name matches).
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from structfilter.domain.model.tag import Tag
from structfilter.infrastructure.filters.composite import compose

if TYPE_CHECKING:
    from structfilter.domain.model.field import Field
    from structfilter.infrastructure.filters.types import FilterFunc, Matcher


def as_matcher(matcher: Matcher | re.Pattern[str] | None) -> Matcher | None:
    """Normalize a matcher.

    Args:
        matcher: Callable, compiled pattern, or None.

    Returns:
        Callable matcher, or None if matcher is None.

    Raises:
        TypeError: If matcher is neither callable nor a pattern.
    """
    if matcher is None:
        return None
    if isinstance(matcher, re.Pattern):
        pattern = matcher

        def _search(name: str) -> bool:
            return pattern.search(name) is not None

        return _search
    if not callable(matcher):
        raise TypeError(f"matcher must be callable or re.Pattern, got {type(matcher).__name__}")
    return matcher


def remove_fields(matcher: Matcher | re.Pattern[str] | None) -> FilterFunc:
    """Create rule removing fields whose name matches.

    Args:
        matcher: Name matcher. None = rule does nothing.

    Returns:
        Rule calling remove() for matching fields.
    """
    match = as_matcher(matcher)
    if match is None:
        return compose()

    def _filter(field: Field) -> None:
        if match(field.name):
            field.remove()

    return _filter


def keep_fields(matcher: Matcher | re.Pattern[str] | None) -> FilterFunc:
    """Create rule keeping fields whose name matches.

    Countermands remove() calls of earlier rules in the chain.

    Args:
        matcher: Name matcher. None = rule does nothing.

    Returns:
        Rule calling keep() for matching fields.
    """
    match = as_matcher(matcher)
    if match is None:
        return compose()

    def _filter(field: Field) -> None:
        if match(field.name):
            field.keep()

    return _filter


def insert_tag(matcher: Matcher | re.Pattern[str] | None, entry: str) -> FilterFunc:
    """Create rule prepending a tag entry to matching fields.

    The entry is only inserted if the field's tag has no entry with the
    same key yet; existing entries are never overwritten.

    Args:
        matcher: Name matcher. None = rule does nothing.
        entry: Exactly one key:"value" entry, e.g. 'json:"-"'.

    Returns:
        Rule inserting entry into matching fields' tags.

    Raises:
        ValueError: If entry is not a single well-formed key:"value" entry.
    """
    # FAIL-FIRST: a malformed entry is a programming error
    key, _ = Tag.entry(entry)
    match = as_matcher(matcher)
    if match is None:
        return compose()

    def _filter(field: Field) -> None:
        if not match(field.name) or field.tag.has(key):
            return
        field.tag = f"{entry} {field.tag}" if field.tag else entry

    return _filter
