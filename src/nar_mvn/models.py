"""Pydantic models for resolved Maven artifacts."""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nar_mvn.versions import VersionKey, version_key


DEFAULT_TYPE = "jar"
POM_TYPE = "pom"
SNAPSHOT_VERSION = "SNAPSHOT"

_SNAPSHOT_TIMESTAMP_RE = re.compile(r"^(.*-)?(\d{8}\.\d{6}-\d+)$")


def is_snapshot_version(version: str) -> bool:
    """True for ``-SNAPSHOT`` and timestamped snapshot versions."""
    return version.endswith(SNAPSHOT_VERSION) or bool(_SNAPSHOT_TIMESTAMP_RE.match(version))


def base_version_of(version: str) -> str:
    """Replace a snapshot timestamp (``1.0-20240101.120000-3``) with ``SNAPSHOT``."""
    m = _SNAPSHOT_TIMESTAMP_RE.match(version)
    if m is None:
        return version
    return f"{m.group(1) or ''}{SNAPSHOT_VERSION}"


class ArtifactDescriptor(BaseModel):
    """A resolved dependency with its file on local disk.

    Descriptors are supplied whole by the resolver and never mutated.
    """

    model_config = ConfigDict(frozen=True)

    group_id: str = Field(..., min_length=1)
    artifact_id: str = Field(..., min_length=1)
    version: str = Field(..., min_length=1)
    type: str = DEFAULT_TYPE
    classifier: str | None = None
    snapshot: bool | None = None
    file: Path
    scope: str | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _default_type(cls, value: str | None) -> str:
        if value is None or not str(value).strip():
            return DEFAULT_TYPE
        return str(value).strip()

    @field_validator("classifier", mode="before")
    @classmethod
    def _blank_classifier(cls, value: str | None) -> str | None:
        if value is None or not str(value).strip():
            return None
        return str(value).strip()

    @property
    def is_snapshot(self) -> bool:
        """True for ``-SNAPSHOT`` and timestamped snapshot versions, unless set explicitly."""
        if self.snapshot is not None:
            return self.snapshot
        return is_snapshot_version(self.version)

    @property
    def base_version(self) -> str:
        return base_version_of(self.version)

    def compact(self) -> str:
        """Return ``groupId:artifactId:type[:classifier]:version``."""
        parts = [self.group_id, self.artifact_id, self.type]
        if self.classifier:
            parts.append(self.classifier)
        parts.append(self.version)
        return ":".join(parts)

    def mvn_uri(self) -> str:
        """Return the manifest URI, e.g. ``mvn:org.apache.commons/commons-compress/1.8.1/jar``.

        The classifier is not part of the URI.
        """
        return f"mvn:{self.group_id}/{self.artifact_id}/{self.version}/{self.type or DEFAULT_TYPE}"

    def sort_key(self) -> tuple[str, str, VersionKey, str, str, str]:
        """Natural order: groupId, artifactId, version, classifier (none first), type.

        Equivalent version spellings (``1`` and ``1.0``) are ordered by their raw text.
        """
        return (
            self.group_id,
            self.artifact_id,
            version_key(self.version),
            self.classifier or "",
            self.type,
            self.version,
        )

    def pom(self) -> "ArtifactDescriptor":
        """Return the companion pom descriptor, located next to the binary."""
        return ArtifactDescriptor(
            group_id=self.group_id,
            artifact_id=self.artifact_id,
            version=self.version,
            type=POM_TYPE,
            snapshot=self.snapshot,
            file=self.file.with_name(f"{self.artifact_id}-{self.version}.{POM_TYPE}"),
            scope=self.scope,
        )

    def __str__(self) -> str:
        return self.compact()


class GAV(BaseModel):
    """Maven coordinates (GroupId, ArtifactId, Version)."""

    group_id: str = Field(..., min_length=1)
    artifact_id: str = Field(..., min_length=1)
    version: str = Field(..., min_length=1)

    def compact(self) -> str:
        """Return a string like ``groupId:artifactId:version``."""
        return f"{self.group_id}:{self.artifact_id}:{self.version}"


def sort_artifacts(artifacts) -> list[ArtifactDescriptor]:
    """Return artifacts in natural order, independent of input iteration order."""
    return sorted(artifacts, key=ArtifactDescriptor.sort_key)
