"""Resolve and explain commands for map features."""

from pathlib import Path

import typer

from ...config import get_config
from ...exceptions import DefaultAttributesError, MapDataError
from ...resolving import AttributeResolver
from ...services import MapDataRegistry
from ..app import app, console, is_json_output
from ..utils import ExitCode, Output, flatten_resolved, format_value


def _build_resolver(data_files: list[Path] | None, out: Output) -> tuple[MapDataRegistry, AttributeResolver]:
    """Load data files into a registry and build a resolver.

    Exits with the matching exit code if anything fails to load.
    """
    config = get_config()
    paths = list(data_files or [])
    if not paths and config.data.path:
        paths = [Path(config.data.path)]
    if not paths:
        out.error(
            "No map data file given",
            suggestion="Pass --data FILE or run `mapattrs config set data.path FILE`",
        )
        raise typer.Exit(out.finish())

    registry = MapDataRegistry()
    for path in paths:
        if not path.exists():
            out.error(
                f"File not found: {path}",
                exit_code=ExitCode.FILE_NOT_FOUND,
                suggestion=f"Check the file path: {path.absolute()}",
            )
            raise typer.Exit(out.finish())
        try:
            registry.register_file(path)
        except MapDataError as e:
            out.error(str(e))
            raise typer.Exit(out.finish())

    try:
        defaults = config.resolve_default_attributes()
    except (DefaultAttributesError, MapDataError) as e:
        out.error(f"Invalid default attributes: {e}")
        raise typer.Exit(out.finish())

    return registry, AttributeResolver(registry.snapshot(), defaults)


@app.command("resolve")
def resolve_command(
    feature_ids: list[str] | None = typer.Argument(
        None, help="Feature ids to resolve (default: every feature)"
    ),
    data: list[Path] | None = typer.Option(
        None, "--data", "-d", help="Map data YAML file (repeatable)"
    ),
):
    """
    Resolve the full attribute record of one or more features.

    EXIT CODES:
        0 = Success
        1 = Invalid data or default attributes
        3 = File not found
        4 = Unknown feature id

    EXAMPLES:
        mapattrs resolve -d map.yaml capital
        mapattrs --json resolve -d base.yaml -d overrides.yaml
    """
    out = Output(console=console, json_mode=is_json_output())
    registry, resolver = _build_resolver(data, out)

    if feature_ids:
        features = []
        for feature_id in feature_ids:
            feature = registry.get_feature(feature_id)
            if feature is None:
                out.error(
                    f"Unknown feature: {feature_id}",
                    exit_code=ExitCode.UNKNOWN_FEATURE,
                )
                raise typer.Exit(out.finish())
            features.append(feature)
    else:
        features = list(registry.iter_features())

    results = {}
    for feature in features:
        resolved = resolver.resolve(feature)
        results[feature.feature_id] = resolved.model_dump(mode="json")
        if not out.json_mode:
            out.table(
                feature.feature_id,
                ["Field", "Value"],
                [
                    [path, format_value(value)]
                    for path, value in flatten_resolved(resolved).items()
                ],
            )

    out.set_data("features", results)
    if not features:
        out.warning("No features found in map data")
    raise typer.Exit(out.finish())


@app.command("explain")
def explain_command(
    feature_id: str = typer.Argument(..., help="Feature id to explain"),
    data: list[Path] | None = typer.Option(
        None, "--data", "-d", help="Map data YAML file (repeatable)"
    ),
):
    """
    Show where each resolved attribute of a feature comes from.

    Origins are one of: override, feature, category:<id>, default.

    EXAMPLES:
        mapattrs explain -d map.yaml capital
    """
    out = Output(console=console, json_mode=is_json_output())
    registry, resolver = _build_resolver(data, out)

    feature = registry.get_feature(feature_id)
    if feature is None:
        out.error(f"Unknown feature: {feature_id}", exit_code=ExitCode.UNKNOWN_FEATURE)
        raise typer.Exit(out.finish())

    resolved, origins = resolver.explain(feature)
    flat = flatten_resolved(resolved)

    out.set_data("feature_id", feature_id)
    out.set_data(
        "fields",
        {path: {"value": value, "origin": str(origins[path])} for path, value in flat.items()},
    )
    if not out.json_mode:
        out.table(
            f"{feature_id} ({feature.category_id or 'no category'})",
            ["Field", "Value", "Origin"],
            [
                [path, format_value(value), str(origins[path])]
                for path, value in flat.items()
            ],
        )
    raise typer.Exit(out.finish())
