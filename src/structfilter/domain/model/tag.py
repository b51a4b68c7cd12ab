"""Field tag value object.

A tag is an ordered set of key:"value" entries separated by spaces,
e.g. json:"name,omitempty" db:"user_name". Values use JSON string
escapes. Parsing stops at the first malformed entry; everything before
it stays visible.
"""

from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

_ENTRY = re.compile(r'([^\s:"\x00-\x1f\x7f]+):"((?:[^"\\]|\\.)*)"')


def _unquote(raw: str) -> str | None:
    try:
        value = json.loads(f'"{raw}"')
    except json.JSONDecodeError:
        return None
    return value if isinstance(value, str) else None


class Tag(str):
    """Field metadata string with key:"value" lookup.

    Immutable like str. Rules replace a field's tag instead of editing it.

    Example:
        tag = Tag('json:"name" db:"user_name"')
        tag.get("db")       # "user_name"
        tag.lookup("yaml")  # ("", False)
    """

    __slots__ = ()

    def entries(self) -> Iterator[tuple[str, str]]:
        """Iterate (key, value) pairs in order of appearance."""
        text = str(self)
        pos = 0
        while True:
            while pos < len(text) and text[pos] == " ":
                pos += 1
            if pos == len(text):
                return
            match = _ENTRY.match(text, pos)
            if match is None:
                return
            value = _unquote(match.group(2))
            if value is None:
                return
            yield match.group(1), value
            pos = match.end()

    def lookup(self, key: str) -> tuple[str, bool]:
        """Value for key and whether the key is present at all.

        Distinguishes an empty value from a missing entry.
        """
        for entry_key, value in self.entries():
            if entry_key == key:
                return value, True
        return "", False

    def get(self, key: str) -> str:
        """Value for key, empty string if absent."""
        return self.lookup(key)[0]

    def has(self, key: str) -> bool:
        """Check if an entry for key is present."""
        return self.lookup(key)[1]

    @staticmethod
    def entry(text: str) -> tuple[str, str]:
        """Parse text as exactly one key:"value" entry.

        Args:
            text: Candidate entry.

        Returns:
            (key, value) pair.

        Raises:
            ValueError: If text is not a single well-formed entry.
        """
        match = _ENTRY.fullmatch(text)
        value = _unquote(match.group(2)) if match is not None else None
        if match is None or value is None:
            raise ValueError(f"malformed tag entry: {text!r}")
        return match.group(1), value
