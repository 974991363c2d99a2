"""Pipeforge CLI — Typer-based command-line interface.

Provides the ``pipeforge`` command with subcommands for planning and
validating pipeline definitions and for rendering the bundled example.

All output uses Rich for formatted terminal display.
"""
