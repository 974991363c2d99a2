"""Rich rendering of assembled pipelines."""

from pipeforge.render.renderer import PlanRenderer

__all__ = ["PlanRenderer"]
