"""
Launch scenario suites through pytest.

Usage:
    reqres-suite --suite all
    reqres-suite --suite update-user --env qa
    reqres-suite --suite all -- -x -q
"""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING

import pytest
from rich.console import Console

from reqres_automation.config import get_settings
from reqres_automation.logging import get_logger, get_named_logger, setup_logging
from reqres_automation.profiles import ENV_VAR_NAME

if TYPE_CHECKING:
    from collections.abc import Sequence

console = Console()


@dataclass(frozen=True)
class Suite:
    """A named set of scenarios, addressed by a path relative to the project root."""

    name: str
    path: str
    flows: str


SUITES: dict[str, Suite] = {
    "all": Suite(name="all", path="tests/scenarios", flows="test parallel"),
    "update-user": Suite(
        name="update-user",
        path="tests/scenarios/test_update_user.py",
        flows="Update User",
    ),
}


def build_pytest_args(suite: Suite, extra_args: Sequence[str]) -> list[str]:
    """Assemble the pytest command line for a suite."""
    return [suite.path, "-m", "scenario", *extra_args]


def run_suite(suite: Suite, extra_args: Sequence[str]) -> int:
    """
    Run a suite and return the pytest exit code.

    Args:
        suite: Suite to run
        extra_args: Additional pytest arguments

    Returns:
        pytest exit code (0 when every scenario passed)
    """
    logger = get_named_logger("runner")
    args = build_pytest_args(suite, extra_args)
    logger.info(
        "Running suite",
        extra={"suite": suite.name, "flows": suite.flows, "pytest_args": args},
    )

    exit_code = int(pytest.main(args))

    logger.info(
        "Suite finished",
        extra={"suite": suite.name, "flows": suite.flows, "exit_code": exit_code},
    )
    return exit_code


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Run reqres.in API scenario suites")
    parser.add_argument(
        "--suite",
        choices=sorted(SUITES),
        required=True,
        help="Suite to run",
    )
    parser.add_argument(
        "--env",
        type=str,
        default=None,
        help=f"Environment profile to use (sets {ENV_VAR_NAME})",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level for the runner (defaults to log_level from the settings file)",
    )
    parser.add_argument(
        "pytest_args",
        nargs=argparse.REMAINDER,
        help="Arguments forwarded to pytest (after --)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    args = parse_args(argv)

    log_level = args.log_level
    if log_level is None:
        log_level = get_settings().log_level
    setup_logging(log_level)

    if args.env is not None:
        os.environ[ENV_VAR_NAME] = args.env
        get_logger().info("Environment selected", extra={"env": args.env})

    extra_args = list(args.pytest_args)
    if extra_args and extra_args[0] == "--":
        extra_args.pop(0)

    suite = SUITES[args.suite]
    console.print(f"[bold]Suite:[/bold] {suite.flows} ({suite.path})")

    exit_code = run_suite(suite, extra_args)

    if exit_code == 0:
        console.print("[green]All scenarios passed[/green]")
    else:
        console.print(f"[red]Scenarios failed (exit code {exit_code})[/red]")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
