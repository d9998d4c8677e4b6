"""Subcommands of the nas-tools CLI, one module per command."""

from __future__ import annotations

import importlib
import pkgutil
from collections.abc import Iterator

import click


def discover_commands() -> Iterator[click.Command]:
    """Yield the click command exported as ``cli`` by each public submodule."""
    for module_info in pkgutil.iter_modules(__path__):
        if module_info.name.startswith("_"):
            continue
        module = importlib.import_module(f"{__name__}.{module_info.name}")
        cmd = getattr(module, "cli", None)
        if isinstance(cmd, click.Command):
            yield cmd
