"""Translate configuration records into helm argument vectors.

Everything here is pure: no filesystem access, no processes. The
orchestrator decides *when* a command runs; this module only decides
*what* it looks like.
"""

from __future__ import annotations

from typing import Sequence

from helm_wrapper.errors import UnknownConfigKind, UnknownOperation
from helm_wrapper.models import Operation
from helm_wrapper.models.config import (
    DEFAULT_NAMESPACE,
    Config,
    ReleaseConfig,
    RepositoryConfig,
    UnrecognizedConfig,
)
from helm_wrapper.models.invocation import CommandInvocation


def build_arguments(config: Config) -> list[str]:
    """Return the helm arguments (without the binary) for a config."""
    if isinstance(config, RepositoryConfig):
        return _repository_arguments(config)
    if isinstance(config, ReleaseConfig):
        return _release_arguments(config)
    if isinstance(config, UnrecognizedConfig):
        raise UnknownConfigKind(config.kind)
    raise UnknownConfigKind(type(config).__name__)


def build_invocation(
    binary: str,
    config: Config,
    extra_args: Sequence[str] = (),
    debug: bool = False,
) -> CommandInvocation:
    """Build the full invocation, with ``--debug`` and passthrough args last."""
    args = build_arguments(config)
    if debug:
        args.append("--debug")
    args.extend(extra_args)
    return CommandInvocation(binary=binary, args=tuple(args))


def dependency_build_invocation(binary: str, chart_dir: str) -> CommandInvocation:
    return CommandInvocation(binary=binary, args=("dependency", "build", chart_dir))


def repo_update_invocation(binary: str) -> CommandInvocation:
    return CommandInvocation(binary=binary, args=("repo", "update"))


def _repository_arguments(config: RepositoryConfig) -> list[str]:
    args = ["repo", "add", config.name, config.url]
    if config.ca_file:
        args += ["--ca-file", config.ca_file]
    if config.cert_file:
        args += ["--cert-file", config.cert_file]
    if config.username:
        args += ["--username", config.username]
    if config.password:
        args += ["--password", config.password]
    if config.force_update:
        args.append("--force-update")
    if config.insecure_skip_tls_verify:
        args.append("--insecure-skip-tls-verify")
    if config.no_update:
        args.append("--no-update")
    return args


def _chart_reference(config: ReleaseConfig) -> list[str]:
    if config.repository:
        return [f"{config.repository}/{config.chart}"]
    if config.repo_url:
        return [config.chart, "--repo", config.repo_url]
    return [config.chart]


def _namespace_arguments(config: ReleaseConfig) -> list[str]:
    if config.namespace and config.namespace != DEFAULT_NAMESPACE:
        return ["--namespace", config.namespace]
    return []


def _release_arguments(config: ReleaseConfig) -> list[str]:
    operation = config.operation
    if operation is None:
        raise UnknownOperation(config.command)

    if operation is Operation.INSTALL:
        # upgrade --install keeps re-running install idempotent
        args = ["upgrade", "--install", config.release_name, *_chart_reference(config)]
    elif operation is Operation.UPGRADE:
        args = ["upgrade", config.release_name, *_chart_reference(config)]
    elif operation is Operation.GET_VALUES:
        args = ["get", "values", config.release_name]
    else:
        args = [operation.value, config.release_name]

    args += _namespace_arguments(config)
    if operation.uses_chart:
        if config.version:
            args += ["--version", config.version]
        if config.values_file:
            args += ["--values", config.values_file]
        if config.timeout:
            args += ["--timeout", config.timeout]

    args.extend(config.flags)
    return args
