"""Custom exceptions for nar-mvn."""


class NarMvnError(Exception):
    """Base exception for nar-mvn."""


class ConfigError(NarMvnError):
    """Raised when the export or packaging configuration is invalid."""


class ArtifactNotFoundError(NarMvnError):
    """Raised when a resolved artifact has no file in the local repository."""


class PomNotFoundError(NarMvnError):
    """Raised when a companion pom file cannot be found."""


class PomParseError(NarMvnError):
    """Raised when a pom file cannot be parsed."""


class PomModelError(NarMvnError):
    """Raised when required Maven model fields are missing or do not match."""


class ExportError(NarMvnError):
    """Raised when generating the dependencies file or exporting artifacts fails."""


class DirectoryCreationError(ExportError):
    """Raised when the manifest output directory cannot be created."""


class FileIOError(ExportError):
    """Raised when the manifest file cannot be opened, written or flushed."""


class CopyError(ExportError):
    """Raised when an artifact or its pom cannot be copied to the repository layout."""
