"""Dependency staging step of NAR packaging."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from nar_mvn.config import BundlingMode, PackagingConfiguration
from nar_mvn.exceptions import DirectoryCreationError
from nar_mvn.exporter import ExportResult, PomResolver, copy_file, export_dependencies
from nar_mvn.layout import formatted_file_name
from nar_mvn.models import ArtifactDescriptor, sort_artifacts
from nar_mvn.parser import resolve_companion_pom

logger = logging.getLogger(__name__)


@dataclass
class StageResult:
    mode: BundlingMode
    bundled: list[Path] = field(default_factory=list)
    export: ExportResult | None = None


def embed_dependencies(artifacts: Iterable[ArtifactDescriptor], dependencies_directory: Path) -> list[Path]:
    """Copy artifact binaries into the archive staging directory."""
    try:
        dependencies_directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreationError(f"Failed to create directory {dependencies_directory}") from exc

    bundled: list[Path] = []
    for artifact in sort_artifacts(artifacts):
        dest = dependencies_directory / formatted_file_name(artifact)
        copy_file(artifact.file, dest)
        bundled.append(dest)
    logger.info("Bundled %d dependencies into %s", len(bundled), dependencies_directory)
    return bundled


def stage_dependencies(
    artifacts: Iterable[ArtifactDescriptor],
    config: PackagingConfiguration,
    *,
    pom_resolver: PomResolver = resolve_companion_pom,
) -> StageResult:
    """Stage runtime dependencies according to the configured bundling mode.

    ``embed`` copies the binaries into the dependencies directory.
    ``manifest-only`` writes ``dependencies.mvn`` there instead and leaves
    the binaries to the optional repository export.
    """
    config.validate()
    if config.bundling_mode is BundlingMode.EMBED:
        return StageResult(
            mode=config.bundling_mode,
            bundled=embed_dependencies(artifacts, config.dependencies_directory),
        )

    result = export_dependencies(
        artifacts,
        config.export,
        config.dependencies_directory,
        pom_resolver=pom_resolver,
    )
    return StageResult(mode=config.bundling_mode, export=result)
