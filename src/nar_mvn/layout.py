"""Standard Maven repository layout paths."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


# Artifact types whose files do not use the type as extension.
_TYPE_EXTENSIONS: dict[str, str] = {
    "test-jar": "jar",
    "maven-plugin": "jar",
    "ejb": "jar",
    "ejb-client": "jar",
    "java-source": "jar",
    "javadoc": "jar",
}


class Coordinates(Protocol):
    group_id: str
    artifact_id: str
    version: str
    type: str
    classifier: str | None

    @property
    def base_version(self) -> str: ...


def extension_for(artifact_type: str) -> str:
    """Map an artifact type to its file extension."""
    return _TYPE_EXTENSIONS.get(artifact_type, artifact_type)


def formatted_file_name(artifact: Coordinates) -> str:
    """Return ``artifactId-version[-classifier].extension``."""
    name = f"{artifact.artifact_id}-{artifact.version}"
    if artifact.classifier:
        name = f"{name}-{artifact.classifier}"
    return f"{name}.{extension_for(artifact.type)}"


def repository_directory(root: Path, artifact: Coordinates) -> Path:
    """Return ``root/group/path/artifactId/baseVersion``."""
    return root.joinpath(*artifact.group_id.split("."), artifact.artifact_id, artifact.base_version)


def repository_path(root: Path, artifact: Coordinates) -> Path:
    """Return the full repository-layout path of the artifact's file under root."""
    return repository_directory(root, artifact) / formatted_file_name(artifact)
