#!/usr/bin/env python3
"""
Terminal UI
===========
Rich-based tables for the CLI.

Usage:
    from namegen.ui import names_table, print_table

    print_table(names_table(names, show_seed=True))
"""

from typing import Dict, Iterable, Optional

from rich.console import Console
from rich.table import Table
from rich import box
from rich.markup import escape

from .settings import get_int_setting


def make_console(stderr: bool = False) -> Console:
    return Console(stderr=stderr, highlight=False)


def print_table(table: Table, console: Optional[Console] = None) -> None:
    (console or make_console()).print(table)


def names_table(names: Iterable, show_seed: bool = False) -> Table:
    """Table of generated names with outcome and retry counts."""
    table = Table(box=box.SIMPLE_HEAVY, show_edge=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="bold")
    if show_seed:
        table.add_column("Seed", style="cyan")
    table.add_column("Attempts", justify="right")
    table.add_column("Outcome")

    for i, item in enumerate(names, 1):
        outcome = item.outcome.name.lower()
        if item.truncated:
            outcome = f"[yellow]{outcome}[/yellow]"
        row = [str(i), escape(item.name)]
        if show_seed:
            row.append(f"0x{item.seed:08x}")
        row.extend([str(item.attempts), outcome])
        table.add_row(*row)
    return table


def classes_table(fragments, sample_size: int = None) -> Table:
    """Table of substitution classes with a few sample fragments each."""
    if sample_size is None:
        sample_size = get_int_setting('cli.sample_size', 5)

    table = Table(box=box.SIMPLE_HEAVY, show_edge=False)
    table.add_column("Marker", justify="center", style="bold cyan")
    table.add_column("Count", justify="right")
    table.add_column("Description")
    table.add_column("Samples", style="dim")

    for cls in fragments.classes:
        samples = ", ".join(cls.fragments[:sample_size])
        if len(cls.fragments) > sample_size:
            samples += ", ..."
        table.add_row(cls.marker, str(len(cls)), cls.description, samples)
    return table


def presets_table(presets: Dict[str, Dict]) -> Table:
    """Table of named presets."""
    table = Table(box=box.SIMPLE_HEAVY, show_edge=False)
    table.add_column("Preset", style="bold")
    table.add_column("Pattern", style="cyan")
    table.add_column("Description")

    for name, data in presets.items():
        table.add_row(name, escape(data["pattern"]), data["description"])
    return table
