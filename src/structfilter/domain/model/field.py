"""Field descriptor: mutable editing context for one candidate field."""

from __future__ import annotations

from structfilter.domain.model.tag import Tag


class Field:
    """One field of a record while its filtered record is being derived.

    Created fresh per original field and derivation pass, handed to every
    rule in the chain, then discarded.

    Contract:
      - name is copied from the original field and cannot change
      - tag starts as the original field's tag, any rule may replace it
      - kept starts True; the last keep()/remove() call wins
    """

    __slots__ = ("_kept", "_name", "_tag")

    def __init__(self, name: str, tag: str = "") -> None:
        """Initialize descriptor.

        Args:
            name: Original field name. Must not be empty.
            tag: Original field tag.

        Raises:
            ValueError: If name is empty.
        """
        # FAIL-FIRST: validate name immediately
        if not name:
            raise ValueError("name must not be empty")

        self._name = name
        self._tag = Tag(tag)
        self._kept = True

    @property
    def name(self) -> str:
        """Name of the field."""
        return self._name

    @property
    def tag(self) -> Tag:
        """Tag the filtered field will carry."""
        return self._tag

    @tag.setter
    def tag(self, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"tag must be str, got {type(value).__name__}")
        self._tag = Tag(value)

    @property
    def kept(self) -> bool:
        """Whether the field will be part of the filtered record."""
        return self._kept

    def keep(self) -> None:
        """Include the field, countermanding an earlier remove()."""
        self._kept = True

    def remove(self) -> None:
        """Exclude the field. A later rule may still call keep()."""
        self._kept = False

    def __repr__(self) -> str:
        return f"Field(name={self._name!r}, tag={str(self._tag)!r}, kept={self._kept})"
