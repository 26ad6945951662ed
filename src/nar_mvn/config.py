"""Export and packaging configuration.

Configuration is read from environment variables named after the Maven
properties the NAR plugin binds (``nar.maven.fileAppend`` becomes
``NAR_MAVEN_FILE_APPEND``) and resolved once, before an export begins.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from nar_mvn.exceptions import ConfigError


MVN_URI_FILENAME = "dependencies.mvn"
DEFAULT_DEPENDENCIES_DIRECTORY = Path("target/classes/META-INF/bundled-dependencies")

_TRUE = {"true", "yes", "1", "on"}
_FALSE = {"false", "no", "0", "off"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    v = raw.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def _env_path(name: str) -> Path | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return Path(raw.strip()).expanduser()


class BundlingMode(str, Enum):
    """How the packaging step treats runtime dependencies."""

    EMBED = "embed"
    MANIFEST_ONLY = "manifest-only"


@dataclass
class ExportConfiguration:
    """Options of the manifest export.

    Attributes:
        output_repository_location: Root of the flat repository-layout export; None disables copies.
        include_snapshot_in_file: List snapshot jars in the manifest (they are copied either way).
        file_append: Append to an existing manifest instead of truncating it.
        manifest_file_name: Name of the manifest file inside the manifest directory.
    """

    output_repository_location: Path | None = None
    include_snapshot_in_file: bool = True
    file_append: bool = False
    manifest_file_name: str = MVN_URI_FILENAME

    @classmethod
    def from_env(cls) -> "ExportConfiguration":
        """Create configuration from environment variables.

        Environment variables:
            NAR_MAVEN_OUTPUT_REPOSITORY_LOCATION: Export repository folder (default: unset)
            NAR_MAVEN_INCLUDE_SNAPSHOT_IN_FILE: "true" or "false" (default: "true")
            NAR_MAVEN_FILE_APPEND: "true" or "false" (default: "false")
        """
        return cls(
            output_repository_location=_env_path("NAR_MAVEN_OUTPUT_REPOSITORY_LOCATION"),
            include_snapshot_in_file=_env_bool("NAR_MAVEN_INCLUDE_SNAPSHOT_IN_FILE", True),
            file_append=_env_bool("NAR_MAVEN_FILE_APPEND", False),
        )

    def validate(self) -> None:
        """Validate the configuration.

        Raises:
            ConfigError: If the repository location is not a directory or the
                manifest file name is not a plain file name.
        """
        repo = self.output_repository_location
        if repo is not None and repo.exists() and not repo.is_dir():
            raise ConfigError(f"Output repository location is not a directory: {repo}")
        name = self.manifest_file_name
        if not name or "/" in name or "\\" in name:
            raise ConfigError(f"Invalid manifest file name: {name!r}")


@dataclass
class PackagingConfiguration:
    """Settings of the dependency staging step of NAR packaging.

    Attributes:
        dependencies_directory: Staging directory that ends up as META-INF/bundled-dependencies.
        fail_on_missing_classifier_artifact: Fail instead of skipping classified artifacts without a file.
        bundling_mode: Embed binaries in the archive, or write a manifest only.
        export: Options of the manifest export.
    """

    dependencies_directory: Path = DEFAULT_DEPENDENCIES_DIRECTORY
    fail_on_missing_classifier_artifact: bool = True
    bundling_mode: BundlingMode = BundlingMode.MANIFEST_ONLY
    export: ExportConfiguration = field(default_factory=ExportConfiguration)

    @classmethod
    def from_env(cls) -> "PackagingConfiguration":
        """Create configuration from environment variables.

        Environment variables:
            NAR_DEPENDENCIES_DIRECTORY: Staging directory (default: target/classes/META-INF/bundled-dependencies)
            NAR_FAIL_ON_MISSING_CLASSIFIER_ARTIFACT: "true" or "false" (default: "true")
            NAR_BUNDLING_MODE: "embed" or "manifest-only" (default: "manifest-only")
            NAR_MAVEN_*: see ExportConfiguration.from_env
        """
        raw_mode = os.getenv("NAR_BUNDLING_MODE", BundlingMode.MANIFEST_ONLY.value).strip().lower()
        try:
            mode = BundlingMode(raw_mode)
        except ValueError:
            raise ConfigError(f"Unsupported bundling mode: {raw_mode}") from None

        return cls(
            dependencies_directory=_env_path("NAR_DEPENDENCIES_DIRECTORY") or DEFAULT_DEPENDENCIES_DIRECTORY,
            fail_on_missing_classifier_artifact=_env_bool("NAR_FAIL_ON_MISSING_CLASSIFIER_ARTIFACT", True),
            bundling_mode=mode,
            export=ExportConfiguration.from_env(),
        )

    def validate(self) -> None:
        """Validate the configuration.

        Raises:
            ConfigError: If the staging directory exists as a file or the export options are invalid.
        """
        if self.dependencies_directory.exists() and not self.dependencies_directory.is_dir():
            raise ConfigError(f"Dependencies directory is not a directory: {self.dependencies_directory}")
        self.export.validate()
