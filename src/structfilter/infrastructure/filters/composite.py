"""Composite rule: sequential application of several rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from structfilter.domain.exceptions import FilterChainError

if TYPE_CHECKING:
    from structfilter.domain.model.field import Field
    from structfilter.infrastructure.filters.types import FilterFunc


def _nop(field: Field) -> None:
    del field


def compose(*filters: FilterFunc) -> FilterFunc:
    """Create rule applying all rules in order to the same field.

    Later rules see the edits of earlier ones; a later keep()/remove()
    overrides an earlier decision.

    Args:
        *filters: Rules to compose.

    Returns:
        Composed rule. Empty filters = no-op, single filter = that filter.
        With several filters, the first failure stops the chain and is
        raised as FilterChainError carrying the failing index.
    """
    if not filters:
        return _nop
    if len(filters) == 1:
        return filters[0]

    def _filter(field: Field) -> None:
        for index, flt in enumerate(filters):
            try:
                flt(field)
            except Exception as exc:
                raise FilterChainError(index, exc) from exc

    return _filter
