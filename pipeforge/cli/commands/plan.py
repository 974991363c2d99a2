"""``pipeforge plan`` — assemble a pipeline definition and show the plan.

Prints one table per stage by default; ``--json`` emits the assembled
pipeline as JSON and ``--fingerprint`` only its content address.
"""

from __future__ import annotations

import typer
from rich.console import Console

from pipeforge.cli.target import load_definition
from pipeforge.render.renderer import PlanRenderer

console = Console()


def plan_cmd(
    target: str = typer.Argument(
        ...,
        help="Pipeline definition as 'module:attribute' (a definition or a factory).",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the assembled pipeline as JSON.",
    ),
    fingerprint: bool = typer.Option(
        False,
        "--fingerprint",
        help="Print only the plan fingerprint.",
    ),
) -> None:
    """Assemble a pipeline definition and print the resulting plan."""
    definition = load_definition(target)
    result = definition.assemble()
    renderer = PlanRenderer(console=console)

    if not result.ok:
        renderer.print_error(result)
        raise typer.Exit(code=1)

    pipeline = result.unwrap()
    if fingerprint:
        typer.echo(pipeline.fingerprint())
    elif as_json:
        typer.echo(pipeline.model_dump_json(indent=2))
    else:
        renderer.print_plan(pipeline)
