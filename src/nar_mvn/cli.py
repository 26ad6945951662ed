"""Typer CLI entry point for nar-mvn."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from nar_mvn.config import BundlingMode, PackagingConfiguration
from nar_mvn.exceptions import NarMvnError
from nar_mvn.exporter import ExportAction, plan_export
from nar_mvn.packaging import stage_dependencies
from nar_mvn.resolver import DEFAULT_LOCAL_REPOSITORY, load_resolved_artifacts

app = typer.Typer(add_completion=False, help="Stage NAR dependencies as mvn: URIs instead of bundled jars.")
console = Console()

_DependencyList = Annotated[
    Path,
    typer.Argument(help="Output of `mvn dependency:list -DoutputFile=...` for the NAR module."),
]
_LocalRepo = Annotated[
    Path,
    typer.Option("--local-repo", help="Local Maven repository holding the resolved artifacts."),
]
_IncludeSnapshot = Annotated[
    Optional[bool],
    typer.Option(
        "--include-snapshot/--exclude-snapshot",
        help="List snapshot jars in dependencies.mvn (they are exported either way).",
    ),
]


@app.callback()
def _configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _packaging_config(
    output_dir: Path | None,
    repository: Path | None,
    include_snapshot: bool | None,
    append: bool | None,
    mode: BundlingMode | None,
) -> PackagingConfiguration:
    """Environment configuration with the command-line overrides applied."""
    config = PackagingConfiguration.from_env()
    export = config.export
    if repository is not None:
        export = replace(export, output_repository_location=repository)
    if include_snapshot is not None:
        export = replace(export, include_snapshot_in_file=include_snapshot)
    if append is not None:
        export = replace(export, file_append=append)

    config = replace(config, export=export)
    if output_dir is not None:
        config = replace(config, dependencies_directory=output_dir)
    if mode is not None:
        config = replace(config, bundling_mode=mode)
    return config


@app.command()
def export(
    dependency_list: _DependencyList,
    local_repo: _LocalRepo = DEFAULT_LOCAL_REPOSITORY,
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", help="Directory receiving dependencies.mvn (the bundled-dependencies folder)."),
    ] = None,
    repository: Annotated[
        Optional[Path],
        typer.Option("--repository", "-r", help="Export artifacts and poms into this repository-layout folder."),
    ] = None,
    include_snapshot: _IncludeSnapshot = None,
    append: Annotated[
        Optional[bool],
        typer.Option("--append/--overwrite", help="Append to an existing dependencies.mvn."),
    ] = None,
    mode: Annotated[
        Optional[BundlingMode],
        typer.Option("--mode", help="embed: bundle jars; manifest-only: write dependencies.mvn."),
    ] = None,
) -> None:
    """Write dependencies.mvn and export the resolved runtime dependencies."""
    try:
        config = _packaging_config(output_dir, repository, include_snapshot, append, mode)
        artifacts = load_resolved_artifacts(
            dependency_list,
            local_repo,
            fail_on_missing_classifier_artifact=config.fail_on_missing_classifier_artifact,
        )
        result = stage_dependencies(artifacts, config)
    except NarMvnError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1) from None

    if result.export is None:
        console.print(
            f"[green]Bundled[/green] {len(result.bundled)} dependencies into "
            f"[bold]{config.dependencies_directory}[/bold]."
        )
        return

    console.print(
        f"[green]Wrote[/green] {len(result.export.uris)} mvn: URI(s) to [bold]{result.export.manifest_path}[/bold]."
    )
    repo = config.export.output_repository_location
    if repo is not None:
        console.print(f"[green]Exported[/green] {len(result.export.copied)} file(s) to [bold]{repo}[/bold].")
    else:
        console.print("[dim]No output repository configured, nothing exported.[/dim]")


@app.command()
def plan(
    dependency_list: _DependencyList,
    local_repo: _LocalRepo = DEFAULT_LOCAL_REPOSITORY,
    include_snapshot: _IncludeSnapshot = None,
) -> None:
    """Show which dependencies would be listed in dependencies.mvn, without writing anything."""
    try:
        config = _packaging_config(None, None, include_snapshot, None, None)
        artifacts = load_resolved_artifacts(
            dependency_list,
            local_repo,
            fail_on_missing_classifier_artifact=config.fail_on_missing_classifier_artifact,
        )
    except NarMvnError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1) from None

    steps = plan_export(artifacts, config.export)
    table = Table(title="dependencies.mvn plan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Artifact")
    table.add_column("Action")
    table.add_column("Manifest line")

    if not steps:
        console.print(table)
        console.print("[dim]No runtime dependencies found.[/dim]")
        return

    for i, step in enumerate(steps, start=1):
        style = "green" if step.action is ExportAction.WRITE_AND_EXPORT else "yellow"
        table.add_row(str(i), step.artifact.compact(), f"[{style}]{step.action.value}[/{style}]", step.uri or "-")
    console.print(table)


def main() -> None:
    """Console-script entry point."""
    app()
