"""Features command: show the table a plugin publishes."""

from pathlib import Path

import typer
from pydantic import ValidationError

from ...config import get_config, plugin_setting
from ...core.models import Family
from ...features import BuildFlags
from ...plugins import BUILTIN_PLUGINS, create_plugin
from ..app import app, console, get_json_mode
from ..utils import ExitCode, Output


def resolve_flags(
    out: Output, flags_file: Path | None, full: bool
) -> BuildFlags | None:
    """Flag profile from --flags / --full, or None to probe the library.

    Reports through ``out`` and returns None with an error exit code set when
    the profile cannot be read; callers check ``out`` before continuing.
    """
    if flags_file is not None:
        if not flags_file.exists():
            out.error(
                f"Flag profile not found: {flags_file}",
                exit_code=ExitCode.FILE_NOT_FOUND,
            )
            return None
        try:
            return BuildFlags.from_yaml(flags_file)
        except (ValidationError, ValueError) as exc:
            out.error(f"Invalid flag profile {flags_file}: {exc}")
            return None
    if full:
        return BuildFlags()
    return None


@app.command("features")
def features_command(
    plugin_name: str = typer.Argument(
        "cryptography", help=f"Plugin name ({', '.join(BUILTIN_PLUGINS)})"
    ),
    flags_file: Path | None = typer.Option(
        None, "--flags", "-f", help="Build flag profile (YAML) instead of probing"
    ),
    full: bool = typer.Option(
        False, "--full", help="Assume every build flag is available"
    ),
    family: Family | None = typer.Option(
        None, "--family", help="Only list entries of this family"
    ),
    no_rng: bool = typer.Option(
        False, "--no-rng", help="Set use_rng=no for this run"
    ),
    include_pubkey: bool = typer.Option(
        False,
        "--include-generic-pubkey",
        help="Also assemble the generic public key loader sub-table",
    ),
):
    """Build and print a plugin's feature table.

    Examples:
        cryptoplug features
        cryptoplug features --full --no-rng
        cryptoplug --json features --family aead
    """
    out = Output(console=console, json_mode=get_json_mode())

    flags = resolve_flags(out, flags_file, full)
    if out.has_errors:
        raise typer.Exit(out.finish())

    if no_rng:
        get_config().set(plugin_setting(plugin_name, "use_rng"), False)

    try:
        plugin = create_plugin(
            plugin_name, flags=flags, include_generic_pubkey=include_pubkey
        )
    except ValueError as exc:
        out.error(str(exc))
        raise typer.Exit(out.finish())

    entries, count = plugin.get_features()
    table = plugin.publisher.table()

    out.success(
        f"{plugin.get_name()}: {count} features (capacity {table.capacity})",
        plugin=plugin.get_name(),
        count=count,
        capacity=table.capacity,
    )
    out.table(
        "Segments",
        ["Sub-table", "Offset", "Entries"],
        [[seg.name, str(seg.offset), str(seg.length)] for seg in table.segments],
    )

    rows = []
    for index, entry in enumerate(entries):
        if family is not None and entry.family != family:
            continue
        rows.append(
            [
                str(index),
                entry.kind.value,
                entry.family.value,
                entry.algorithm_id.value if entry.algorithm_id is not None else "",
                str(entry.key_size) if entry.key_size is not None else "",
                entry.constructor.path if entry.is_register else "",
                "yes" if entry.exclusive else "",
            ]
        )
    out.table(
        "Features",
        ["#", "Kind", "Family", "Algorithm", "Key size", "Constructor", "Exclusive"],
        rows,
    )

    plugin.destroy()
    raise typer.Exit(out.finish())
