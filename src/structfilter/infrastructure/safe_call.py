"""RuleBoundary: the single point where rules are invoked.

Rules are caller code. Whatever a rule raises (a deliberate failure or an
unexpected fault such as AttributeError) is caught here, and only here,
and reported as RuleError naming the field. Derivation code above this
point only ever sees RuleError.

KeyboardInterrupt and SystemExit are not Exception subclasses and pass
through unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from structfilter.domain.exceptions import RuleError

if TYPE_CHECKING:
    from structfilter.domain.model.field import Field
    from structfilter.infrastructure.filters.types import FilterFunc


class RuleBoundary:
    """Exception-converting wrapper around a (composed) rule.

    Contract:
      - apply() returns normally iff the rule returned normally
      - any Exception from the rule becomes RuleError(field.name, exc)
      - the original exception is kept as __cause__ and RuleError.cause
    """

    __slots__ = ("_rule",)

    def __init__(self, rule: FilterFunc) -> None:
        """Initialize with rule.

        Args:
            rule: Called once per candidate field.

        Raises:
            TypeError: If rule is not callable.
        """
        # FAIL-FIRST: validate rule immediately
        if not callable(rule):
            raise TypeError(f"rule must be callable, got {type(rule).__name__}")

        self._rule = rule

    def apply(self, field: Field) -> None:
        """Run the rule on field.

        Raises:
            RuleError: If the rule raised.
        """
        try:
            self._rule(field)
        # BLE001: rules are arbitrary caller code; every failure must surface as RuleError
        except Exception as exc:  # noqa: BLE001
            raise RuleError(field.name, exc) from exc
