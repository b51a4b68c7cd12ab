"""Console reporter: RecordPlan → rich formatted string."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from structfilter.domain.model.plan import RecordPlan


def format_shape(shape: object) -> str:
    """Format an annotation compactly: classes by name, aliases by repr."""
    if shape is Any:
        return "Any"
    if isinstance(shape, type):
        return shape.__qualname__
    return repr(shape).replace("typing.", "")


@dataclass(frozen=True, slots=True)
class ReporterConfig:
    """Configuration for shape reporter.

    Attributes:
        show_removed: List fields removed by rules.
        show_hidden: List hidden fields.
        width: Console width in characters (> 0).
        color: Emit ANSI styles.
    """

    show_removed: bool = True
    show_hidden: bool = False
    width: int = 120
    color: bool = True

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.width <= 0:
            raise ValueError(f"width must be > 0, got {self.width}")


class ShapeReporter:
    """Console reporter: outputs rich formatted text.

    Output is str, not print(). Caller decides destination.
    """

    def __init__(self, config: ReporterConfig | None = None) -> None:
        """Initialize reporter.

        Args:
            config: Reporter configuration. Uses defaults if None.
        """
        self._config = config or ReporterConfig()

    def report(self, plan: RecordPlan) -> str:
        """Format a record plan.

        Args:
            plan: Result of StructFilter.explain().

        Returns:
            Header, table of surviving fields, removed/hidden sections.
        """
        output = StringIO()
        console = Console(
            file=output,
            force_terminal=self._config.color,
            no_color=not self._config.color,
            width=self._config.width,
        )

        console.rule(f"[bold]{escape(plan.original.__qualname__)}[/bold]")
        console.print(
            f"[bold]Fields:[/bold] {len(plan.fields)} kept, "
            f"{len(plan.removed)} removed, {len(plan.hidden)} hidden"
        )
        console.print(self._fields_table(plan))

        if self._config.show_removed and plan.removed:
            console.print(f"[bold red]REMOVED[/bold red] {escape(', '.join(plan.removed))}")
        if self._config.show_hidden and plan.hidden:
            console.print(f"[dim]HIDDEN[/dim] {escape(', '.join(plan.hidden))}")

        return output.getvalue()

    def _fields_table(self, plan: RecordPlan) -> Table:
        table = Table(show_header=True, header_style="bold", box=None)
        table.add_column("Field", style="cyan")
        table.add_column("Type")
        table.add_column("Tag", style="dim")

        for field in plan.fields:
            shape = format_shape(field.filtered)
            if field.placeholder:
                shape = f"[yellow]{escape(shape)}[/yellow] (cycle)"
            else:
                shape = escape(shape)
            table.add_row(escape(field.name), shape, escape(field.tag))
        return table
