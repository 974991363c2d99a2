"""``pipeforge validate`` — check a pipeline definition without printing it."""

from __future__ import annotations

import typer
from rich.console import Console

from pipeforge.cli.target import load_definition
from pipeforge.render.renderer import PlanRenderer

console = Console()


def validate_cmd(
    target: str = typer.Argument(
        ...,
        help="Pipeline definition as 'module:attribute' (a definition or a factory).",
    ),
) -> None:
    """Validate a pipeline definition; exit 1 if it is invalid."""
    definition = load_definition(target)
    result = definition.assemble()

    if not result.ok:
        PlanRenderer(console=console).print_error(result)
        raise typer.Exit(code=1)

    pipeline = result.unwrap()
    console.print(
        f"[bold green]Pipeline {pipeline.pipeline_name} is valid[/bold green] "
        f"[dim]({len(pipeline.stages)} stages, {pipeline.action_count} actions)[/dim]"
    )
