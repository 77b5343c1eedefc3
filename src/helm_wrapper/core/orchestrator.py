"""Single-shot pipeline from configuration record to helm invocation.

Stages run in a fixed order and are never re-entered:

    load -> register-repository -> extract-archive -> build-dependencies
         -> build-command -> execute

Any wrapper error stops the run at the stage that raised it. The run's
exit code is the child's own code when the primary command fails, and
EXIT_ENGINE_FAILURE for anything that goes wrong before it.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
from contextlib import ExitStack
from dataclasses import dataclass, field
from pathlib import Path

from helm_wrapper.config.settings import Settings
from helm_wrapper.config.toolchains import DEFAULT_TOOLCHAIN_NAME, HelmToolchain, merge_toolchains
from helm_wrapper.core.archive import extract_chart_archive, is_chart_archive
from helm_wrapper.core.chart_inspector import (
    RepositoryRegistry,
    dependency_repositories,
    needs_dependency_build,
    read_manifest,
    register_dependency_repositories,
)
from helm_wrapper.core.command_builder import (
    build_invocation,
    dependency_build_invocation,
    repo_update_invocation,
)
from helm_wrapper.core.config_loader import load_config
from helm_wrapper.core.executor import Executor
from helm_wrapper.core.repo_names import resolve_repository_name
from helm_wrapper.errors import (
    ConfigLoadError,
    DependencyBuildFailed,
    HelmWrapperError,
    PrimaryCommandFailed,
    ProcessStartFailed,
)
from helm_wrapper.models.config import Config, ReleaseConfig, RepositoryConfig

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ENGINE_FAILURE = 125


class Stage(enum.Enum):
    LOAD = "load"
    REGISTER_REPOSITORY = "register-repository"
    EXTRACT_ARCHIVE = "extract-archive"
    BUILD_DEPENDENCIES = "build-dependencies"
    BUILD_COMMAND = "build-command"
    EXECUTE = "execute"


@dataclass(frozen=True)
class RunRequest:
    config_path: Path
    repo_config_path: Path | None = None
    values_file: str | None = None
    chart_path: str | None = None
    extra_args: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RunResult:
    stage: Stage
    exit_code: int = EXIT_SUCCESS
    error: HelmWrapperError | None = None
    toolchain: HelmToolchain | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _wants_local_chart(config: Config) -> bool:
    if not isinstance(config, ReleaseConfig):
        return False
    operation = config.operation
    return operation is not None and operation.uses_chart and config.is_local_chart


class Orchestrator:
    """Runs one request through every stage."""

    def __init__(self, settings: Settings, executor: Executor | None = None):
        self.settings = settings
        self.executor = executor or Executor()
        self._stage = Stage.LOAD
        self.toolchain: HelmToolchain | None = None

    def _enter(self, stage: Stage) -> None:
        logger.debug("Stage: %s", stage.value)
        self._stage = stage

    def run(self, request: RunRequest) -> RunResult:
        """Run the pipeline and report where and how it ended."""
        self._stage = Stage.LOAD
        self.toolchain = None
        try:
            with ExitStack() as scratch:
                self._run(request, scratch)
        except PrimaryCommandFailed as exc:
            return self._result(exc.exit_code, exc)
        except ProcessStartFailed as exc:
            code = exc.exit_code if self._stage is Stage.EXECUTE else EXIT_ENGINE_FAILURE
            return self._result(code, exc)
        except HelmWrapperError as exc:
            return self._result(EXIT_ENGINE_FAILURE, exc)
        return self._result(EXIT_SUCCESS)

    def _result(self, exit_code: int, error: HelmWrapperError | None = None) -> RunResult:
        return RunResult(stage=self._stage, exit_code=exit_code, error=error, toolchain=self.toolchain)

    def _run(self, request: RunRequest, scratch: ExitStack) -> None:
        self._enter(Stage.LOAD)
        self.toolchain = self._resolve_toolchain()
        config = self._load(request)
        repository = self._load_repository(request)

        self._enter(Stage.REGISTER_REPOSITORY)
        if repository is not None:
            config = self._register_referenced_repository(config, repository)

        self._enter(Stage.EXTRACT_ARCHIVE)
        if _wants_local_chart(config) and is_chart_archive(config.chart):
            chart_dir = scratch.enter_context(
                extract_chart_archive(
                    config.chart,
                    tar_binary=self.settings.tar_binary,
                    executor=self.executor,
                    manifest_name=self.settings.manifest_name,
                )
            )
            config = config.replace(chart=str(chart_dir))

        self._enter(Stage.BUILD_DEPENDENCIES)
        if _wants_local_chart(config):
            self._build_dependencies(config.chart)

        self._enter(Stage.BUILD_COMMAND)
        invocation = build_invocation(
            self.settings.helm_binary,
            config,
            extra_args=request.extra_args,
            debug=self.settings.verbose,
        )

        self._enter(Stage.EXECUTE)
        code = self.executor.run(invocation)
        if code != 0:
            raise PrimaryCommandFailed(code)

    def _resolve_toolchain(self) -> HelmToolchain:
        merged = merge_toolchains(HelmToolchain(version=v) for v in self.settings.helm_versions)
        toolchain = merged[DEFAULT_TOOLCHAIN_NAME]
        logger.debug("Using Helm toolchain %s %s", toolchain.name, toolchain.version)
        return toolchain

    def _load(self, request: RunRequest) -> Config:
        config = load_config(request.config_path)
        if not isinstance(config, ReleaseConfig):
            return config
        if request.values_file:
            config = config.replace(values_file=request.values_file)
        if request.chart_path and config.chart in ("", self.settings.chart_placeholder):
            config = config.replace(chart=request.chart_path)
        return config

    def _load_repository(self, request: RunRequest) -> RepositoryConfig | None:
        if request.repo_config_path is None:
            return None
        repository = load_config(request.repo_config_path)
        if not isinstance(repository, RepositoryConfig):
            raise ConfigLoadError(
                f"repository config {request.repo_config_path} must have type 'repository'"
            )
        return repository

    def _register_referenced_repository(self, config: Config, repository: RepositoryConfig) -> Config:
        name = repository.name or resolve_repository_name(repository.url)
        if not name:
            logger.warning("Repository %s has no registrable name, not adding it", repository.url)
            return config
        if name != repository.name:
            repository = dataclasses.replace(repository, name=name)

        logger.info("Adding repository %s from %s", name, repository.url)
        invocation = build_invocation(self.settings.helm_binary, repository, debug=self.settings.verbose)
        code = self.executor.run(invocation, forward_stdin=False)
        if code != 0:
            logger.warning("Failed to add repository %s (may already exist): exit code %d", name, code)

        if isinstance(config, ReleaseConfig):
            return config.replace(repository=name, repo_url="")
        return config

    def _build_dependencies(self, chart_dir: str) -> None:
        if not needs_dependency_build(
            chart_dir,
            manifest_name=self.settings.manifest_name,
            charts_dir=self.settings.charts_dir,
        ):
            logger.debug("No dependency build needed for %s", chart_dir)
            return

        logger.info("Building chart dependencies for %s", chart_dir)
        manifest = read_manifest(chart_dir, manifest_name=self.settings.manifest_name)
        registry = dependency_repositories(manifest) if manifest else RepositoryRegistry()
        register_dependency_repositories(
            registry,
            self.settings.helm_binary,
            self.executor,
            strict=self.settings.strict_dependency_repositories,
        )

        if len(registry):
            logger.info("Updating repository index")
            code = self.executor.run(repo_update_invocation(self.settings.helm_binary), forward_stdin=False)
            if code != 0:
                raise DependencyBuildFailed(f"failed to update repositories: exit code {code}")

        code = self.executor.run(
            dependency_build_invocation(self.settings.helm_binary, chart_dir),
            forward_stdin=False,
        )
        if code != 0:
            raise DependencyBuildFailed(f"failed to build chart dependencies for {chart_dir}: exit code {code}")
