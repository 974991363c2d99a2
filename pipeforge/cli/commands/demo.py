"""``pipeforge demo`` — assemble and render the bundled example pipeline.

One CodeStar source, the self-update segment and two stacks, assembled
with the current settings and printed stage by stage.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel

from pipeforge.config import AssemblySettings
from pipeforge.demo import build_example_pipeline
from pipeforge.render.renderer import PlanRenderer

console = Console()


def demo_cmd(
    account: str = typer.Option(
        None,
        "--account",
        help="Account to deploy the example stacks to.",
    ),
    region: str = typer.Option(
        None,
        "--region",
        help="Region to deploy the example stacks to.",
    ),
) -> None:
    """Assemble the example pipeline and show its plan."""
    settings = AssemblySettings()
    definition = build_example_pipeline(account=account, region=region, settings=settings)

    console.print()
    console.print(
        Panel(
            "[bold]Pipeforge Demo Pipeline[/bold]\n\n"
            "CodeStar source -> self-update -> TestStack1 + TestStack2\n"
            f"[dim]environment: {settings.environment}[/dim]",
            border_style="cyan",
            padding=(1, 2),
        )
    )
    console.print()

    result = definition.assemble()
    renderer = PlanRenderer(console=console)
    if not result.ok:
        renderer.print_error(result)
        raise typer.Exit(code=1)

    renderer.print_plan(result.unwrap())
