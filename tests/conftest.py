"""Shared fixtures: fake executor and on-disk chart builders."""

from __future__ import annotations

import json
import tarfile
from pathlib import Path

import pytest
import yaml

from helm_wrapper.models.invocation import CommandInvocation


def _untar(invocation: CommandInvocation) -> int:
    archive, dest = invocation.args[1], invocation.args[3]
    with tarfile.open(archive, "r:gz") as tf:
        tf.extractall(dest, filter="data")
    return 0


class FakeExecutor:
    """Records invocations instead of running them.

    ``results`` maps a leading-argument prefix to an exit code, an exception
    to raise, or a callable taking the invocation. First match wins;
    unmatched invocations succeed.
    """

    def __init__(self, results: dict | None = None):
        self.results = dict(results or {})
        self.results.setdefault(("-xzf",), _untar)
        self.calls: list[CommandInvocation] = []
        self.stdin_flags: list[bool] = []

    def run(self, invocation: CommandInvocation, forward_stdin: bool = True) -> int:
        self.calls.append(invocation)
        self.stdin_flags.append(forward_stdin)
        for prefix, outcome in self.results.items():
            if tuple(invocation.args[: len(prefix)]) != tuple(prefix):
                continue
            if isinstance(outcome, BaseException):
                raise outcome
            if callable(outcome):
                return outcome(invocation)
            return outcome
        return 0

    @property
    def arg_lists(self) -> list[list[str]]:
        return [list(c.args) for c in self.calls]


@pytest.fixture
def fake_executor():
    return FakeExecutor()


def make_chart(
    root: Path,
    name: str = "mychart",
    dependencies: list[dict] | None = None,
    packaged: list[str] | None = None,
) -> Path:
    chart_dir = root / name
    chart_dir.mkdir(parents=True)
    manifest = {"apiVersion": "v2", "name": name, "version": "0.1.0"}
    if dependencies is not None:
        manifest["dependencies"] = dependencies
    (chart_dir / "Chart.yaml").write_text(yaml.safe_dump(manifest), encoding="utf-8")
    if packaged is not None:
        charts = chart_dir / "charts"
        charts.mkdir()
        for filename in packaged:
            (charts / filename).write_bytes(b"")
    return chart_dir


def make_archive(chart_dir: Path, dest: Path, suffix: str = ".tgz") -> Path:
    archive = dest / f"{chart_dir.name}-0.1.0{suffix}"
    with tarfile.open(archive, "w:gz") as tf:
        tf.add(chart_dir, arcname=chart_dir.name)
    return archive


def write_record(path: Path, record: dict) -> Path:
    path.write_text(json.dumps(record), encoding="utf-8")
    return path


REDIS_DEPENDENCY = {
    "name": "redis",
    "version": "18.1.0",
    "repository": "https://charts.bitnami.com/bitnami",
}
POSTGRES_DEPENDENCY = {
    "name": "postgresql",
    "version": "13.2.0",
    "repository": "https://charts.bitnami.com/bitnami",
}
PROMETHEUS_DEPENDENCY = {
    "name": "prometheus",
    "version": "25.0.0",
    "repository": "https://prometheus-community.github.io/helm-charts",
}
