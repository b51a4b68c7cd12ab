"""Rule and matcher type aliases.

Type aliases declared with typing.TypeAlias.
FilterFunc: edits one Field in place, raises on failure.
Matcher: name predicate used by the name-based rules.
"""

from collections.abc import Callable
from typing import TypeAlias

from structfilter.domain.model.field import Field

FilterFunc: TypeAlias = Callable[[Field], None]

Matcher: TypeAlias = Callable[[str], bool]
