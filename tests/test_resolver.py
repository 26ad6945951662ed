from __future__ import annotations

from pathlib import Path

import pytest

from nar_mvn.exceptions import ArtifactNotFoundError
from nar_mvn.resolver import load_resolved_artifacts, parse_dependency_list

DEPENDENCY_LIST = """
The following files have been resolved:
   org.apache.commons:commons-compress:jar:1.8.1:compile -- module org.apache.commons.compress [auto]
   io.netty:netty-epoll:jar:linux-x86_64:4.1.100.Final:runtime
   junit:junit:jar:4.13.2:test
   com.acme:native-libs:zip:2.0:compile
   org.apache.commons:commons-compress:jar:1.8.1:compile
"""


def test_parse_dependency_list() -> None:
    coords = parse_dependency_list(DEPENDENCY_LIST)

    assert [c.compact() for c in coords] == [
        "org.apache.commons:commons-compress:jar:1.8.1:compile",
        "io.netty:netty-epoll:jar:linux-x86_64:4.1.100.Final:runtime",
        "junit:junit:jar:4.13.2:test",
        "com.acme:native-libs:zip:2.0:compile",
        "org.apache.commons:commons-compress:jar:1.8.1:compile",
    ]
    assert coords[1].classifier == "linux-x86_64"


def test_parse_maven_log_output() -> None:
    text = """[INFO] --- maven-dependency-plugin:3.6.1:list (default-cli) @ demo ---
[INFO]
[INFO] The following files have been resolved:
[INFO]    org.slf4j:slf4j-api:jar:2.0.12:compile
[INFO]    none
"""
    coords = parse_dependency_list(text)
    assert [c.compact() for c in coords] == ["org.slf4j:slf4j-api:jar:2.0.12:compile"]


def test_load_keeps_runtime_scope_and_deduplicates(make_artifact, local_repo: Path) -> None:
    make_artifact()
    make_artifact("io.netty", "netty-epoll", "4.1.100.Final", classifier="linux-x86_64")
    make_artifact("com.acme", "native-libs", "2.0", type="zip")

    artifacts = load_resolved_artifacts(DEPENDENCY_LIST, local_repo)

    assert [a.compact() for a in artifacts] == [
        "org.apache.commons:commons-compress:jar:1.8.1",
        "io.netty:netty-epoll:jar:linux-x86_64:4.1.100.Final",
        "com.acme:native-libs:zip:2.0",
    ]
    assert all(a.file.is_file() for a in artifacts)
    assert artifacts[1].scope == "runtime"


def test_load_from_file(tmp_path: Path, make_artifact, local_repo: Path) -> None:
    make_artifact()
    listing = tmp_path / "deps.txt"
    listing.write_text("   org.apache.commons:commons-compress:jar:1.8.1:compile\n", encoding="utf-8")

    artifacts = load_resolved_artifacts(listing, local_repo)

    assert len(artifacts) == 1


def test_missing_list_file(tmp_path: Path, local_repo: Path) -> None:
    with pytest.raises(ArtifactNotFoundError):
        load_resolved_artifacts(tmp_path / "missing.txt", local_repo)


def test_missing_artifact_fails(local_repo: Path) -> None:
    with pytest.raises(ArtifactNotFoundError):
        load_resolved_artifacts("org.slf4j:slf4j-api:jar:2.0.12:compile", local_repo)


def test_missing_classifier_artifact_can_be_skipped(make_artifact, local_repo: Path) -> None:
    make_artifact()
    text = (
        "org.apache.commons:commons-compress:jar:1.8.1:compile\n"
        "io.netty:netty-epoll:jar:linux-x86_64:4.1.100.Final:runtime\n"
    )

    artifacts = load_resolved_artifacts(text, local_repo, fail_on_missing_classifier_artifact=False)
    assert [a.artifact_id for a in artifacts] == ["commons-compress"]

    with pytest.raises(ArtifactNotFoundError):
        load_resolved_artifacts(text, local_repo, fail_on_missing_classifier_artifact=True)
