"""Validate command for map data files and default attribute files."""

from pathlib import Path

import typer

from ...exceptions import DefaultAttributesError, MapDataError
from ...resolving import load_default_attributes
from ...services import check_map_data, load_map_data
from ..app import app, console, is_json_output
from ..utils import ExitCode, Output


@app.command("validate")
def validate_command(
    spec_file: Path = typer.Argument(..., help="Map data or default attributes YAML file"),
    defaults: bool = typer.Option(
        False,
        "--defaults",
        help="Validate as a complete default attribute set instead of map data",
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Treat warnings as errors (map data only)"
    ),
):
    """
    Validate a map data file or a default attribute set.

    EXIT CODES:
        0 = Success
        1 = Validation error
        3 = File not found

    EXAMPLES:
        mapattrs validate map.yaml
        mapattrs validate defaults.yaml --defaults
    """
    out = Output(console=console, json_mode=is_json_output())

    if not spec_file.exists():
        out.error(
            f"File not found: {spec_file}",
            exit_code=ExitCode.FILE_NOT_FOUND,
            suggestion=f"Check the file path: {spec_file.absolute()}",
        )
        raise typer.Exit(out.finish())

    if defaults:
        raise typer.Exit(_validate_defaults(spec_file, out))
    raise typer.Exit(_validate_map_data(spec_file, out, strict))


def _validate_defaults(spec_file: Path, out: Output) -> int:
    try:
        load_default_attributes(spec_file)
    except DefaultAttributesError as e:
        out.set_data("missing", e.missing)
        out.error(
            f"Default attribute set is incomplete ({len(e.missing)} missing)",
            suggestion="Missing: " + ", ".join(e.missing),
        )
        return out.finish()
    except MapDataError as e:
        out.error(str(e))
        return out.finish()

    out.success(f"{spec_file} is a complete default attribute set", file=str(spec_file))
    return out.finish()


def _validate_map_data(spec_file: Path, out: Output, strict: bool) -> int:
    try:
        spec = load_map_data(spec_file)
    except MapDataError as e:
        out.error(str(e))
        return out.finish()

    warnings = check_map_data(spec)
    for warning in warnings:
        out.warning(warning)

    if strict and warnings:
        out.error(f"{len(warnings)} warning(s) treated as errors (--strict)")
        return out.finish()

    out.success(
        f"{spec_file}: provider '{spec.provider_id}' with "
        f"{len(spec.categories)} categories, {len(spec.features)} features, "
        f"{len(spec.overrides)} overrides",
        provider_id=spec.provider_id,
        categories=len(spec.categories),
        features=len(spec.features),
        overrides=len(spec.overrides),
    )
    return out.finish()
