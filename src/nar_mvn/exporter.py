"""Generate the ``dependencies.mvn`` manifest and export artifacts to a repository layout.

Instead of bundling dependency jars into META-INF/bundled-dependencies, each
runtime jar is listed as a ``mvn:`` URI and, when an output repository is
configured, copied with its pom into a flat Maven repository layout.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from nar_mvn.config import ExportConfiguration
from nar_mvn.exceptions import (
    ConfigError,
    CopyError,
    DirectoryCreationError,
    ExportError,
    FileIOError,
    NarMvnError,
)
from nar_mvn.layout import repository_path
from nar_mvn.models import DEFAULT_TYPE, ArtifactDescriptor, sort_artifacts
from nar_mvn.parser import resolve_companion_pom

logger = logging.getLogger(__name__)

PomResolver = Callable[[ArtifactDescriptor], ArtifactDescriptor]


class ExportAction(str, Enum):
    """What happens to one artifact during export."""

    WRITE_AND_EXPORT = "write-and-export"
    COPY_ONLY = "copy-only"


@dataclass(frozen=True)
class ExportStep:
    artifact: ArtifactDescriptor
    action: ExportAction

    @property
    def uri(self) -> str | None:
        if self.action is ExportAction.WRITE_AND_EXPORT:
            return self.artifact.mvn_uri()
        return None


@dataclass
class ExportResult:
    """Outcome of one export call."""

    manifest_path: Path
    uris: list[str] = field(default_factory=list)
    copied: list[Path] = field(default_factory=list)
    unlisted: list[ArtifactDescriptor] = field(default_factory=list)


def plan_export(artifacts: Iterable[ArtifactDescriptor], config: ExportConfiguration) -> list[ExportStep]:
    """Decide, in natural artifact order, which artifacts go into the manifest.

    Non-jar artifacts (zip, tar, nar, ...) are never listed, only copied.
    Snapshot jars are listed only when ``include_snapshot_in_file`` is set.
    """
    steps: list[ExportStep] = []
    for artifact in sort_artifacts(artifacts):
        if artifact.type.lower() != DEFAULT_TYPE:
            action = ExportAction.COPY_ONLY
        elif artifact.is_snapshot and not config.include_snapshot_in_file:
            action = ExportAction.COPY_ONLY
        else:
            action = ExportAction.WRITE_AND_EXPORT
        steps.append(ExportStep(artifact=artifact, action=action))
    return steps


def copy_file(src: Path, dst: Path) -> None:
    """Copy src to dst, creating parent directories and overwriting dst.

    Raises:
        CopyError: If the copy fails.
    """
    logger.debug("Copying %s to %s", src, dst)
    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(src, dst)
    except shutil.SameFileError:
        logger.debug("Skipping copy, %s is already in place", dst)
    except OSError as exc:
        raise CopyError(f"Failed to copy {src} to {dst}") from exc


class ManifestExporter:
    """Writes the dependencies manifest and exports artifacts for one build."""

    def __init__(self, config: ExportConfiguration, pom_resolver: PomResolver = resolve_companion_pom) -> None:
        self.config = config
        self.pom_resolver = pom_resolver

    def export(self, artifacts: Iterable[ArtifactDescriptor], manifest_directory: Path) -> ExportResult:
        """Generate the manifest in manifest_directory and export the artifacts.

        Output already written to the manifest is kept when a later step fails.

        Raises:
            ExportError: If the configuration is invalid.
            DirectoryCreationError: If manifest_directory cannot be created.
            FileIOError: If the manifest cannot be opened or written.
            CopyError: If an artifact or its pom cannot be exported.
        """
        try:
            self.config.validate()
        except ConfigError as exc:
            raise ExportError(f"Invalid export configuration: {exc}") from exc
        manifest_directory = Path(manifest_directory)
        manifest_path = manifest_directory / self.config.manifest_file_name
        try:
            manifest_directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreationError(f"Failed to create directory {manifest_directory}") from exc

        steps = plan_export(artifacts, self.config)
        result = ExportResult(manifest_path=manifest_path)
        mode = "a" if self.config.file_append else "w"
        logger.info("Generating %s (%s)", manifest_path, "append" if self.config.file_append else "overwrite")
        try:
            with manifest_path.open(mode, encoding="utf-8", newline="\n") as writer:
                for step in steps:
                    if step.uri is not None:
                        writer.write(step.uri + "\n")
                        result.uris.append(step.uri)
                        self._export_with_pom(step.artifact, result)
                    else:
                        result.unlisted.append(step.artifact)
                        self._export(step.artifact, result)
        except ExportError:
            raise
        except OSError as exc:
            raise FileIOError(f"Generate the dependencies file failure: {manifest_path}") from exc

        logger.info(
            "Listed %d dependencies in %s, %d copy-only, %d file(s) exported",
            len(result.uris),
            manifest_path,
            len(result.unlisted),
            len(result.copied),
        )
        return result

    def export_artifact(self, artifact: ArtifactDescriptor) -> Path | None:
        """Copy one artifact into the output repository; no-op when none is configured."""
        repo = self.config.output_repository_location
        if repo is None:
            return None
        dest = repository_path(repo, artifact)
        copy_file(artifact.file, dest)
        return dest

    def _export(self, artifact: ArtifactDescriptor, result: ExportResult) -> None:
        # Binary only; copy-only artifacts (non-jar, unlisted snapshots) never export their pom.
        dest = self.export_artifact(artifact)
        if dest is not None:
            result.copied.append(dest)

    def _export_with_pom(self, artifact: ArtifactDescriptor, result: ExportResult) -> None:
        self._export(artifact, result)
        if self.config.output_repository_location is None:
            return
        try:
            pom = self.pom_resolver(artifact)
        except ExportError:
            raise
        except NarMvnError as exc:
            raise CopyError(f"Failed to resolve the pom of {artifact}") from exc
        self._export(pom, result)


def export_dependencies(
    artifacts: Iterable[ArtifactDescriptor],
    config: ExportConfiguration,
    manifest_directory: Path,
    *,
    pom_resolver: PomResolver = resolve_companion_pom,
) -> ExportResult:
    """Write ``dependencies.mvn`` into manifest_directory and export the artifacts."""
    return ManifestExporter(config, pom_resolver=pom_resolver).export(artifacts, manifest_directory)
