"""Main Typer application — imports and registers all CLI commands.

Entry point: ``pipeforge`` (configured via pyproject.toml project.scripts).

Commands: plan, validate, demo.
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from pipeforge.cli.commands.demo import demo_cmd
from pipeforge.cli.commands.plan import plan_cmd
from pipeforge.cli.commands.validate import validate_cmd
from pipeforge.config import AssemblySettings

app = typer.Typer(
    name="pipeforge",
    help="Pipeforge: deterministic assembly of self-updating deployment pipelines.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def configure(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log at DEBUG level."
    ),
) -> None:
    """Configure logging once for every subcommand."""
    settings = AssemblySettings()
    level = "DEBUG" if verbose or settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# Register subcommands
app.command(name="plan", help="Assemble a pipeline definition and print the plan.")(plan_cmd)
app.command(name="validate", help="Validate a pipeline definition.")(validate_cmd)
app.command(name="demo", help="Assemble and render the bundled example pipeline.")(demo_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
