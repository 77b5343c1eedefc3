"""Inspect local charts for dependencies that must be fetched first."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from helm_wrapper.core.command_builder import build_invocation
from helm_wrapper.core.executor import Executor
from helm_wrapper.core.repo_names import resolve_repository_name
from helm_wrapper.errors import DependencyRepositoryRegistrationFailed
from helm_wrapper.models.chart import ChartManifest
from helm_wrapper.models.config import RepositoryConfig

logger = logging.getLogger(__name__)

# Prefer the C-accelerated YAML loader when available.
_YamlLoader = getattr(yaml, "CSafeLoader", yaml.SafeLoader)

MANIFEST_NAME = "Chart.yaml"
CHARTS_DIR = "charts"
_DEPENDENCIES_MARKER = "dependencies:"


class RepositoryRegistry:
    """Repository URL -> registration name for one run.

    Each URL is kept once, in first-seen order.
    """

    def __init__(self) -> None:
        self._names: dict[str, str] = {}

    def add(self, url: str, name: str) -> bool:
        """Record ``url``; return False if it was already known."""
        if url in self._names:
            return False
        self._names[url] = name
        return True

    def items(self) -> list[tuple[str, str]]:
        return list(self._names.items())

    def __contains__(self, url: object) -> bool:
        return url in self._names

    def __len__(self) -> int:
        return len(self._names)


def _read_manifest_text(chart_dir: Path, manifest_name: str) -> str | None:
    manifest_path = chart_dir / manifest_name
    try:
        return manifest_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        logger.debug("Could not read %s", manifest_path, exc_info=True)
        return None


def read_manifest(chart_dir: str | Path, manifest_name: str = MANIFEST_NAME) -> ChartManifest | None:
    """Parse a chart's manifest, or None if it is missing or malformed."""
    text = _read_manifest_text(Path(chart_dir), manifest_name)
    if text is None:
        return None
    try:
        data = yaml.load(text, Loader=_YamlLoader)
    except yaml.YAMLError:
        logger.debug("Failed to parse %s in %s", manifest_name, chart_dir, exc_info=True)
        return None
    if data is not None and not isinstance(data, dict):
        logger.debug("%s in %s is not a mapping", manifest_name, chart_dir)
        return None
    return ChartManifest.from_dict(data)


def _declares_dependencies(chart_dir: Path, manifest_name: str) -> bool:
    text = _read_manifest_text(chart_dir, manifest_name)
    if text is None:
        return False
    try:
        data = yaml.load(text, Loader=_YamlLoader)
    except yaml.YAMLError:
        # Unparseable manifest: fall back to looking for the section header.
        logger.debug("Falling back to text scan of %s", manifest_name, exc_info=True)
        return _DEPENDENCIES_MARKER in text
    if not isinstance(data, dict):
        return False
    return bool(ChartManifest.from_dict(data).dependencies)


def _has_packaged_dependencies(charts_dir: Path) -> bool:
    try:
        entries = list(charts_dir.iterdir())
    except OSError:
        return False
    return any(entry.is_file() and entry.name.endswith(".tgz") for entry in entries)


def needs_dependency_build(
    chart_dir: str | Path,
    manifest_name: str = MANIFEST_NAME,
    charts_dir: str = CHARTS_DIR,
) -> bool:
    """True when the chart declares dependencies but has no packaged ones."""
    chart_path = Path(chart_dir)
    if not _declares_dependencies(chart_path, manifest_name):
        return False
    return not _has_packaged_dependencies(chart_path / charts_dir)


def dependency_repositories(manifest: ChartManifest) -> RepositoryRegistry:
    """Collect the HTTP(S) repositories a chart's dependencies come from."""
    registry = RepositoryRegistry()
    for dep in manifest.dependencies:
        if not dep.has_http_repository:
            continue
        name = resolve_repository_name(dep.repository)
        if not name:
            continue
        if registry.add(dep.repository, name):
            logger.debug("Dependency %s uses repository %s (%s)", dep.name, name, dep.repository)
    return registry


def register_dependency_repositories(
    registry: RepositoryRegistry,
    helm_binary: str,
    executor: Executor,
    strict: bool = False,
) -> list[DependencyRepositoryRegistrationFailed]:
    """Run ``helm repo add`` once per discovered repository.

    Failures are returned rather than raised, since the repository usually
    exists already; with ``strict`` the first failure is raised instead.
    """
    failures: list[DependencyRepositoryRegistrationFailed] = []
    for url, name in registry.items():
        logger.info("Adding repository %s (%s)", name, url)
        invocation = build_invocation(helm_binary, RepositoryConfig(name=name, url=url))
        code = executor.run(invocation, forward_stdin=False)
        if code == 0:
            continue
        failure = DependencyRepositoryRegistrationFailed(name, url, code)
        if strict:
            raise failure
        logger.warning("%s (it may already exist)", failure)
        failures.append(failure)
    return failures
