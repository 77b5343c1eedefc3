"""Runtime defaults, merged once at startup."""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass, field


def _default_helm_binary() -> str:
    """Return the helm binary to run when none is given on the command line.

    Checks HELM_BINARY first, then looks helm up on PATH. Falls back to the
    bare name so a missing binary surfaces as a launch failure later.
    """
    explicit = os.environ.get("HELM_BINARY", "")
    if explicit:
        return explicit
    return shutil.which("helm") or "helm"


def _default_tar_binary() -> str:
    explicit = os.environ.get("TAR_BINARY", "")
    if explicit:
        return explicit
    return shutil.which("tar") or "tar"


def _requested_helm_versions(helm_version: str | None) -> tuple[str, ...]:
    # Both sources are kept; the toolchain merge decides whether they agree.
    requested = (os.environ.get("HELM_VERSION", ""), helm_version or "")
    return tuple(v for v in requested if v)


@dataclass(frozen=True)
class Settings:
    helm_binary: str = "helm"
    tar_binary: str = "tar"
    helm_versions: tuple[str, ...] = field(default_factory=tuple)
    chart_placeholder: str = "__CHART_PATH__"
    manifest_name: str = "Chart.yaml"
    charts_dir: str = "charts"
    strict_dependency_repositories: bool = False
    verbose: bool = False

    @classmethod
    def from_env(
        cls,
        helm_binary: str | None = None,
        tar_binary: str | None = None,
        helm_version: str | None = None,
        strict_dependency_repositories: bool = False,
        verbose: bool = False,
    ) -> Settings:
        """Merge explicit overrides over environment and PATH defaults."""
        return cls(
            helm_binary=helm_binary or _default_helm_binary(),
            tar_binary=tar_binary or _default_tar_binary(),
            helm_versions=_requested_helm_versions(helm_version),
            strict_dependency_repositories=strict_dependency_repositories,
            verbose=verbose,
        )
