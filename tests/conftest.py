"""Pytest configuration and fixtures for nar-mvn tests."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

import pytest

from nar_mvn.layout import repository_path
from nar_mvn.models import ArtifactDescriptor

POM_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <modelVersion>4.0.0</modelVersion>
  <groupId>{group_id}</groupId>
  <artifactId>{artifact_id}</artifactId>
  <version>{version}</version>
  <packaging>{packaging}</packaging>
</project>
"""

MakeArtifact = Callable[..., ArtifactDescriptor]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests independent of NAR_* variables set in the caller's shell."""
    for name in list(os.environ):
        if name.startswith("NAR_"):
            monkeypatch.delenv(name)


@pytest.fixture
def local_repo(tmp_path: Path) -> Path:
    return tmp_path / "m2" / "repository"


@pytest.fixture
def make_artifact(local_repo: Path) -> MakeArtifact:
    """Create an artifact (and by default its pom) inside the local repository."""

    def _make(
        group_id: str = "org.apache.commons",
        artifact_id: str = "commons-compress",
        version: str = "1.8.1",
        type: str = "jar",
        classifier: str | None = None,
        snapshot: bool | None = None,
        with_pom: bool = True,
    ) -> ArtifactDescriptor:
        artifact = ArtifactDescriptor(
            group_id=group_id,
            artifact_id=artifact_id,
            version=version,
            type=type,
            classifier=classifier,
            snapshot=snapshot,
            file=Path("unresolved"),
        )
        path = repository_path(local_repo, artifact)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(f"binary {artifact.compact()}".encode())
        artifact = artifact.model_copy(update={"file": path})
        if with_pom:
            artifact.pom().file.write_text(
                POM_TEMPLATE.format(
                    group_id=group_id, artifact_id=artifact_id, version=version, packaging=type
                ),
                encoding="utf-8",
            )
        return artifact

    return _make
