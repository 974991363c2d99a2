"""Resolve ``module:attribute`` targets into pipeline definitions."""

from __future__ import annotations

import importlib

import typer

from pipeforge.core.pipeline import PipelineDefinition


def load_definition(target: str) -> PipelineDefinition:
    """Import *target* and return the ``PipelineDefinition`` it names.

    The attribute may be a definition or a zero-argument callable that
    returns one (a factory keeps each CLI run on a fresh artifact graph).
    """
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise typer.BadParameter(
            f"Expected 'module:attribute', got {target!r}", param_hint="TARGET"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise typer.BadParameter(
            f"Cannot import module {module_name!r}: {exc}", param_hint="TARGET"
        ) from exc

    obj = module
    for part in attribute.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise typer.BadParameter(
                f"Module {module_name!r} has no attribute {attribute!r}",
                param_hint="TARGET",
            ) from None

    if callable(obj) and not isinstance(obj, PipelineDefinition):
        obj = obj()
    if not isinstance(obj, PipelineDefinition):
        raise typer.BadParameter(
            f"{target!r} is a {type(obj).__name__}, not a PipelineDefinition",
            param_hint="TARGET",
        )
    return obj
