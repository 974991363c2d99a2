"""Smoke test — assembles the example pipeline twice and compares plans.

Usage:
    python demo_prod.py
"""

from __future__ import annotations

from pipeforge import __version__
from pipeforge.config import settings
from pipeforge.demo import build_example_pipeline


def main() -> None:
    """Assemble the example pipeline and print a short summary."""
    print(f"Pipeforge v{__version__}")
    print(f"Environment: {settings.environment} | Build dir: {settings.root_dir}/{settings.cdk_outdir}")
    print()

    first = build_example_pipeline().assemble().unwrap()
    second = build_example_pipeline().assemble().unwrap()

    for stage in first.stages:
        actions = ", ".join(f"{a.action_name}@{a.run_order}" for a in stage.actions)
        print(f"  [{stage.stage_name}] {actions}")

    print()
    print(f"Fingerprint: {first.fingerprint()}")
    print(f"Deterministic: {first.fingerprint() == second.fingerprint()}")


if __name__ == "__main__":
    main()
