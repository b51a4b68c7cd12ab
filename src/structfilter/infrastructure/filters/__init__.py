"""Infrastructure layer: filter functions (rules).

Rules are plain callables: FilterFunc = Callable[[Field], None]
A rule edits the field in place (keep/remove/tag) and reports failure
by raising.

Usage:
    from structfilter.infrastructure.filters import compose, remove_fields

    # Single rule
    rule = remove_fields(re.compile("^Password"))

    # Composed rules, applied in order, last keep()/remove() wins
    rule = compose(remove_fields(re.compile("^Secret")), keep_fields(is_public))
"""

from structfilter.infrastructure.filters.composite import compose
from structfilter.infrastructure.filters.name import (
    as_matcher,
    insert_tag,
    keep_fields,
    remove_fields,
)
from structfilter.infrastructure.filters.types import FilterFunc, Matcher

__all__ = [
    "FilterFunc",
    "Matcher",
    "as_matcher",
    "compose",
    "insert_tag",
    "keep_fields",
    "remove_fields",
]
