"""Load an already-resolved dependency set from ``mvn dependency:list`` output.

Resolution itself stays with Maven; this module only reads the resolved
coordinates and locates their files in a local repository.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, Field

from nar_mvn.exceptions import ArtifactNotFoundError
from nar_mvn.layout import repository_path
from nar_mvn.models import DEFAULT_TYPE, ArtifactDescriptor, base_version_of

logger = logging.getLogger(__name__)

RUNTIME_SCOPES: frozenset[str] = frozenset({"compile", "runtime"})
DEFAULT_LOCAL_REPOSITORY = Path("~/.m2/repository")

_LOG_PREFIX_RE = re.compile(r"^\s*\[[A-Z]+\]")
_COORD_RE = re.compile(r"^[\w.\-]+(:[\w.\-]+){4,5}$")


class ResolvedCoordinate(BaseModel):
    """One entry of a dependency list, before its file is located."""

    group_id: str = Field(..., min_length=1)
    artifact_id: str = Field(..., min_length=1)
    type: str = DEFAULT_TYPE
    classifier: str | None = None
    version: str = Field(..., min_length=1)
    scope: str | None = None

    @property
    def base_version(self) -> str:
        return base_version_of(self.version)

    def key(self) -> tuple[str, str, str, str, str]:
        return (self.group_id, self.artifact_id, self.type, self.classifier or "", self.version)

    def compact(self) -> str:
        parts = [self.group_id, self.artifact_id, self.type]
        if self.classifier:
            parts.append(self.classifier)
        parts += [self.version, self.scope or ""]
        return ":".join(parts).rstrip(":")


def _parse_line(line: str) -> ResolvedCoordinate | None:
    text = _LOG_PREFIX_RE.sub("", line).strip()
    if not text:
        return None
    # Maven 3.9 appends " -- module name [auto]"
    token = text.split()[0]
    if not _COORD_RE.match(token):
        return None
    parts = token.split(":")
    if len(parts) == 5:
        group_id, artifact_id, type_, version, scope = parts
        classifier = None
    else:
        group_id, artifact_id, type_, classifier, version, scope = parts
    return ResolvedCoordinate(
        group_id=group_id,
        artifact_id=artifact_id,
        type=type_ or DEFAULT_TYPE,
        classifier=classifier or None,
        version=version,
        scope=scope,
    )


def parse_dependency_list(text: str) -> list[ResolvedCoordinate]:
    """Parse ``groupId:artifactId:type[:classifier]:version:scope`` lines.

    Headers, blank lines and ``none`` markers are ignored.
    """
    coords: list[ResolvedCoordinate] = []
    for line in text.splitlines():
        coord = _parse_line(line)
        if coord is not None:
            coords.append(coord)
    return coords


def _read_source(source: str | Path) -> str:
    if isinstance(source, Path):
        try:
            return source.read_text(encoding="utf-8")
        except OSError as exc:
            raise ArtifactNotFoundError(f"Cannot read dependency list: {source}") from exc
    return source


def load_resolved_artifacts(
    source: str | Path,
    local_repository: Path,
    *,
    scopes: Iterable[str] = RUNTIME_SCOPES,
    fail_on_missing_classifier_artifact: bool = True,
) -> list[ArtifactDescriptor]:
    """Turn a dependency list into descriptors whose files exist in local_repository.

    Args:
        source: Path to a ``dependency:list`` output file, or its text.
        local_repository: Root of the local Maven repository.
        scopes: Scopes to keep; defaults to the runtime resolution scope.
        fail_on_missing_classifier_artifact: When False, classified artifacts
            without a file are skipped with a warning.

    Raises:
        ArtifactNotFoundError: If the list cannot be read or an artifact file is missing.

    Returns:
        Deduplicated descriptors, in list order.
    """
    wanted = set(scopes)
    repo = local_repository.expanduser()
    seen: set[tuple[str, str, str, str, str]] = set()
    artifacts: list[ArtifactDescriptor] = []

    for coord in parse_dependency_list(_read_source(source)):
        if coord.scope not in wanted or coord.key() in seen:
            continue
        seen.add(coord.key())

        path = repository_path(repo, coord)
        if not path.is_file():
            if coord.classifier and not fail_on_missing_classifier_artifact:
                logger.warning("Skipping %s, no file at %s", coord.compact(), path)
                continue
            raise ArtifactNotFoundError(f"Artifact {coord.compact()} not found at {path}")

        artifacts.append(
            ArtifactDescriptor(
                group_id=coord.group_id,
                artifact_id=coord.artifact_id,
                version=coord.version,
                type=coord.type,
                classifier=coord.classifier,
                file=path.resolve(),
                scope=coord.scope,
            )
        )
    return artifacts
