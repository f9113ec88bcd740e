"""Flags command: show or export a build flag profile."""

from pathlib import Path

import typer

from ...features import probe_build_flags
from ..app import app, console, get_json_mode
from ..utils import Output
from .features import resolve_flags


@app.command("flags")
def flags_command(
    flags_file: Path | None = typer.Option(
        None, "--flags", "-f", help="Read a flag profile (YAML) instead of probing"
    ),
    full: bool = typer.Option(
        False, "--full", help="Show the fully featured profile"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the profile to a YAML file"
    ),
):
    """Show which algorithm families the backend makes available.

    Without options the installed cryptography library is probed.

    Examples:
        cryptoplug flags
        cryptoplug flags -o profile.yaml
        cryptoplug features --flags profile.yaml
    """
    out = Output(console=console, json_mode=get_json_mode())

    flags = resolve_flags(out, flags_file, full)
    if out.has_errors:
        raise typer.Exit(out.finish())
    if flags is None:
        flags = probe_build_flags()

    out.set_data("flags", flags.model_dump())
    out.table(
        "Build flags",
        ["Flag", "Available"],
        [
            [name, "yes" if value else "no"]
            for name, value in flags.model_dump().items()
        ],
        data_key="build_flags",
    )

    if output is not None:
        flags.to_yaml(output)
        out.success(f"Wrote flag profile to {output}", output=str(output))

    raise typer.Exit(out.finish())
