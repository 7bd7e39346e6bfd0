"""Command line helpers for RewardForge."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import timedelta
from pathlib import Path
from random import Random

from rich.console import Console
from rich.table import Table

from .app import RewardApp
from .config import RewardForgeConfig
from .diagnostics.economy_simulator import EconomySimulator
from .loaders import validate_catalog_file
from .validators import validate_app

console = Console()


def run_simulator(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="RewardForge economy simulator")
    parser.add_argument("--actions", type=int, default=1000, help="Number of study actions to simulate")
    parser.add_argument("--base-xp", type=int, default=50, help="Base XP per action")
    parser.add_argument("--gap-minutes", type=float, default=5.0, help="Minutes between actions")
    parser.add_argument("--seed", type=int, default=None, help="Seed for crit rolls")
    parser.add_argument("--catalog", help="Path to catalog JSON file")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    config = RewardForgeConfig.from_env()
    if args.catalog:
        config.catalog_path = args.catalog
    app = RewardApp(config)

    simulator = EconomySimulator(app, rng=Random(args.seed))
    result = simulator.simulate(
        actions=args.actions,
        base_xp=args.base_xp,
        gap=timedelta(minutes=args.gap_minutes),
    )

    table = Table(title=f"Simulated {result.actions} actions")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Experience", str(result.experience))
    table.add_row("Gold", str(result.gold))
    table.add_row("Shards", str(result.shards))
    table.add_row("Crit rate", f"{result.crit_rate:.2%}")
    table.add_row("Dailies completed", str(result.dailies))
    table.add_row("Best combo", str(result.best_combo))
    console.print(table)


def run_validate(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="RewardForge validator")
    parser.add_argument("--catalog", help="Path to catalog JSON file for validation")
    args = parser.parse_args(argv)

    if args.catalog:
        errors = validate_catalog_file(Path(args.catalog))
        if errors:
            console.print("[bold red]Catalog errors:[/bold red]")
            for err in errors:
                console.print(f"- {err}")
            sys.exit(1)

    config = RewardForgeConfig.from_env()
    if args.catalog:
        config.catalog_path = args.catalog
    issues = validate_app(RewardApp(config))
    if issues:
        console.print("[bold red]Configuration errors:[/bold red]")
        for issue in issues:
            console.print(f"- {issue}")
        sys.exit(1)
    console.print("[bold green]Configuration is valid[/bold green]")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
