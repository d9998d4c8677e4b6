"""Check availability of external tool dependencies."""

from __future__ import annotations

import shutil

import click

from nas_tools.cli import Context, pass_context
from nas_tools.utils.output import console, create_table, error, info, success

# Each entry: (name, required, purpose, used_by)
_TOOL_REGISTRY: list[tuple[str, bool, str, list[str]]] = [
    ("cuebreakpoints", True, "Track boundaries from cue sheets (cuetools)", ["fix-unsplit-cue"]),
    ("shnsplit", True, "Audio image splitting (shntool)", ["fix-unsplit-cue"]),
    ("flac", True, "FLAC encoding for split tracks", ["fix-unsplit-cue"]),
    ("cuetag", False, "Tagging split tracks from cue sheets", ["fix-unsplit-cue"]),
]


@click.command("check-deps")
@pass_context
def cli(ctx: Context) -> None:
    """Check availability of external tool dependencies.

    Prints a table of the external tools nas-tools runs, whether they
    are found on PATH, and which commands need them.

    Exits with code 1 if any required tools are missing.
    """
    table = create_table(title="External Dependencies", show_lines=False)
    table.add_column("Tool", style="bold")
    table.add_column("Status")
    table.add_column("Required")
    table.add_column("Path")
    table.add_column("Purpose")
    table.add_column("Used By")

    missing_required: list[str] = []

    for name, required, purpose, used_by in _TOOL_REGISTRY:
        path = shutil.which(name)

        if path is not None:
            status = "[green]found[/green]"
        elif required:
            status = "[red]MISSING[/red]"
            missing_required.append(name)
        else:
            status = "[yellow]not found[/yellow]"

        req_str = "yes" if required else "no"
        table.add_row(name, status, req_str, path or "", purpose, ", ".join(used_by))

    console.print(table)
    console.print()

    if missing_required:
        error(
            f"Missing {len(missing_required)} required tool(s): "
            f"{', '.join(missing_required)}"
        )
        info("Install cuetools, shntool and flac via your package manager.")
        raise SystemExit(1)
    success("All required tools are available.")
