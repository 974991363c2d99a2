"""Tests for the PlanRenderer — stage tables, summary panel, error output."""

from __future__ import annotations

import pytest
from rich.console import Console

from pipeforge.core.assembler import PipelineAssembler
from pipeforge.models.pipeline import AssemblyResult
from pipeforge.render import PlanRenderer


@pytest.fixture
def console() -> Console:
    return Console(record=True, width=160, color_system=None)


@pytest.fixture
def renderer(console: Console) -> PlanRenderer:
    return PlanRenderer(console=console)


class TestPlanRenderer:
    def test_plan_lists_every_stage_and_action(self, renderer, console, context, wired):
        pipeline = PipelineAssembler(context).assemble(wired["groups"]).unwrap()
        renderer.print_plan(pipeline)
        text = console.export_text()
        assert "Pipeline TestPipeline" in text
        for stage in pipeline.stages:
            assert stage.stage_name in text
            for action in stage.actions:
                assert action.action_name in text
        assert "Stages: 3" in text
        assert "Actions: 6" in text

    def test_stage_table_rows(self, renderer, context, wired):
        pipeline = PipelineAssembler(context).assemble(wired["groups"]).unwrap()
        table = renderer.render_stage(2, pipeline.stages[2])
        assert table.row_count == 4
        assert len(table.columns) == 6

    def test_print_error(self, renderer, console, context):
        result = PipelineAssembler(context).assemble([])
        renderer.print_error(result)
        text = console.export_text()
        assert "Invalid pipeline" in text
        assert "misplaced_source" in text

    def test_print_error_ignores_success(self, renderer, console, context, wired):
        result = PipelineAssembler(context).assemble(wired["groups"])
        renderer.print_error(result)
        assert console.export_text() == ""

    def test_error_location(self, renderer, console, context, graph, wired, make_stack):
        broken = make_stack(graph.artifact("Orphan"), "Broken")
        result: AssemblyResult = PipelineAssembler(context).assemble(
            [wired["source"], wired["self_update"], broken]
        )
        renderer.print_error(result)
        text = console.export_text()
        assert "group 2" in text
        assert "'Broken'" in text
