"""Rich terminal renderer for assembled pipeline plans.

Turns an ``AssembledPipeline`` into Rich renderables: one table per stage
and a summary panel.  Failed assemblies are printed with the error code and
the group/segment that caused them.

Color scheme
------------
- cyan      : SOURCE
- blue      : BUILD
- green     : DEPLOY
- yellow    : APPROVAL
"""

from __future__ import annotations

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pipeforge.models.actions import Action, ActionCategory
from pipeforge.models.pipeline import AssembledPipeline, AssembledStage, AssemblyResult


# ---------------------------------------------------------------------------
# Category -> Rich style mapping
# ---------------------------------------------------------------------------

_CATEGORY_STYLES: dict[ActionCategory, str] = {
    ActionCategory.SOURCE: "cyan",
    ActionCategory.BUILD: "blue",
    ActionCategory.DEPLOY: "green",
    ActionCategory.APPROVAL: "yellow",
}


class PlanRenderer:
    """Renders assembled pipelines as Rich terminal output.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    # ------------------------------------------------------------------
    # Renderables
    # ------------------------------------------------------------------

    def render_stage(self, index: int, stage: AssembledStage) -> Table:
        """Build a table of one stage's actions in run order."""
        table = Table(
            title=f"[bold]{index}. {stage.stage_name}[/bold]",
            title_justify="left",
            show_header=True,
            header_style="bold cyan",
            expand=True,
        )
        table.add_column("Run", style="dim", width=5, justify="right")
        table.add_column("Action", min_width=20)
        table.add_column("Category", min_width=10)
        table.add_column("Provider", min_width=12)
        table.add_column("Inputs")
        table.add_column("Outputs")

        for action in stage.actions:
            table.add_row(
                str(action.run_order),
                action.action_name,
                self._category_cell(action),
                action.provider,
                ", ".join(action.input_artifacts) or "[dim]-[/dim]",
                ", ".join(action.output_artifacts) or "[dim]-[/dim]",
            )
        return table

    def render_plan(self, pipeline: AssembledPipeline) -> Panel:
        """Render the whole plan as a Panel of stage tables plus a summary line."""
        tables = [self.render_stage(i, stage) for i, stage in enumerate(pipeline.stages)]
        summary = "  |  ".join(
            [
                f"[bold]Stages:[/bold] {len(pipeline.stages)}",
                f"[bold]Actions:[/bold] {pipeline.action_count}",
                f"[bold]Fingerprint:[/bold] {pipeline.fingerprint()[:19]}...",
            ]
        )
        return Panel(
            Group(*tables, Text(""), Text.from_markup(summary)),
            title=f"[bold]Pipeline {pipeline.pipeline_name}[/bold]",
            border_style="blue",
            padding=(1, 2),
        )

    @staticmethod
    def _category_cell(action: Action) -> str:
        style = _CATEGORY_STYLES.get(action.category, "")
        return f"[{style}]{action.category.value}[/{style}]"

    # ------------------------------------------------------------------
    # Standalone print
    # ------------------------------------------------------------------

    def print_plan(self, pipeline: AssembledPipeline) -> None:
        """Print a single plan to the console."""
        self.console.print(self.render_plan(pipeline))

    def print_error(self, result: AssemblyResult) -> None:
        """Print why an assembly failed."""
        error = result.error
        if error is None:
            return
        location: list[str] = []
        if error.group_index is not None:
            location.append(f"group {error.group_index}")
        if error.segment_name is not None:
            location.append(f"segment {error.segment_name!r}")
        where = f" [dim]({', '.join(location)})[/dim]" if location else ""
        self.console.print(
            f"[bold red]Invalid pipeline:[/bold red] [red]{error.code}[/red]{where}"
        )
        self.console.print(f"  {error.message}", markup=False, highlight=False)
