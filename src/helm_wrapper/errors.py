"""Error taxonomy for a wrapper run."""

from __future__ import annotations


class HelmWrapperError(Exception):
    """Base class for every failure the wrapper reports."""


class ConfigLoadError(HelmWrapperError):
    """The input record is unreadable or malformed."""


class UnsupportedConfigShape(HelmWrapperError):
    """The record's kind or operation has no command mapping."""


class UnknownConfigKind(UnsupportedConfigShape):
    def __init__(self, kind: str):
        super().__init__(f"unknown config type: {kind!r}")
        self.kind = kind


class UnknownOperation(UnsupportedConfigShape):
    def __init__(self, operation: str):
        super().__init__(f"unknown command: {operation!r}")
        self.operation = operation


class ExtractionFailed(HelmWrapperError):
    """The chart archive could not be unpacked."""


class DependencyRepositoryRegistrationFailed(HelmWrapperError):
    """``helm repo add`` failed for a repository discovered in Chart.yaml."""

    def __init__(self, name: str, url: str, exit_code: int):
        super().__init__(f"failed to add repository {name} ({url}): exit code {exit_code}")
        self.name = name
        self.url = url
        self.exit_code = exit_code


class DependencyBuildFailed(HelmWrapperError):
    """Fetching or packaging chart dependencies failed."""


class PrimaryCommandFailed(HelmWrapperError):
    """Helm ran and returned a non-zero status."""

    def __init__(self, exit_code: int):
        super().__init__(f"helm exited with code {exit_code}")
        self.exit_code = exit_code


class ProcessStartFailed(HelmWrapperError):
    """The external binary could not be launched at all."""

    def __init__(self, binary: str, reason: str, exit_code: int):
        super().__init__(f"failed to start {binary}: {reason}")
        self.binary = binary
        self.reason = reason
        self.exit_code = exit_code


class InvalidHelmVersion(HelmWrapperError):
    """A requested Helm toolchain version is not a semantic version."""


class ToolchainConflict(HelmWrapperError):
    """The same toolchain name was requested with different versions."""
