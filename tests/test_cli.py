from __future__ import annotations

from pathlib import Path

import pytest
from rich.console import Console
from typer.testing import CliRunner

from nar_mvn import cli

runner = CliRunner()


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "console", Console(width=200))


@pytest.fixture
def dependency_list(tmp_path: Path, make_artifact) -> Path:
    make_artifact()
    make_artifact("com.acme", "core", "1.1-SNAPSHOT")
    path = tmp_path / "deps.txt"
    path.write_text(
        "The following files have been resolved:\n"
        "   org.apache.commons:commons-compress:jar:1.8.1:compile\n"
        "   com.acme:core:jar:1.1-SNAPSHOT:runtime\n",
        encoding="utf-8",
    )
    return path


def test_export_writes_manifest_and_repository(tmp_path: Path, dependency_list: Path, local_repo: Path) -> None:
    out = tmp_path / "bundled-dependencies"
    repo = tmp_path / "repo"

    res = runner.invoke(
        cli.app,
        [
            "export",
            str(dependency_list),
            "--local-repo",
            str(local_repo),
            "--output-dir",
            str(out),
            "--repository",
            str(repo),
            "--exclude-snapshot",
        ],
    )

    assert res.exit_code == 0, res.output
    assert (out / "dependencies.mvn").read_text(encoding="utf-8") == (
        "mvn:org.apache.commons/commons-compress/1.8.1/jar\n"
    )
    assert (repo / "com" / "acme" / "core" / "1.1-SNAPSHOT" / "core-1.1-SNAPSHOT.jar").is_file()
    assert "Wrote" in res.output


def test_export_uses_environment(
    tmp_path: Path, dependency_list: Path, local_repo: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    out = tmp_path / "from-env"
    monkeypatch.setenv("NAR_DEPENDENCIES_DIRECTORY", str(out))

    res = runner.invoke(cli.app, ["export", str(dependency_list), "--local-repo", str(local_repo)])

    assert res.exit_code == 0, res.output
    assert (out / "dependencies.mvn").read_text(encoding="utf-8").splitlines() == [
        "mvn:com.acme/core/1.1-SNAPSHOT/jar",
        "mvn:org.apache.commons/commons-compress/1.8.1/jar",
    ]
    assert "nothing exported" in res.output


def test_export_embed_mode(tmp_path: Path, dependency_list: Path, local_repo: Path) -> None:
    out = tmp_path / "bundled-dependencies"

    res = runner.invoke(
        cli.app,
        ["export", str(dependency_list), "--local-repo", str(local_repo), "--output-dir", str(out), "--mode", "embed"],
    )

    assert res.exit_code == 0, res.output
    assert sorted(p.name for p in out.iterdir()) == ["commons-compress-1.8.1.jar", "core-1.1-SNAPSHOT.jar"]


def test_export_missing_artifact_exits_with_error(tmp_path: Path, local_repo: Path) -> None:
    listing = tmp_path / "deps.txt"
    listing.write_text("org.slf4j:slf4j-api:jar:2.0.12:compile\n", encoding="utf-8")

    res = runner.invoke(cli.app, ["export", str(listing), "--local-repo", str(local_repo)])

    assert res.exit_code == 1
    assert "Error:" in res.output


def test_plan_shows_actions(dependency_list: Path, local_repo: Path) -> None:
    res = runner.invoke(
        cli.app,
        ["plan", str(dependency_list), "--local-repo", str(local_repo), "--exclude-snapshot"],
    )

    assert res.exit_code == 0, res.output
    assert "mvn:org.apache.commons/commons-compress/1.8.1/jar" in res.output
    assert "copy-only" in res.output
    assert "write-and-export" in res.output
