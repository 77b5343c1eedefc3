"""Root Typer application: helm-wrapper --config <record> [-- helm args...]."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from helm_wrapper.cli.options import (
    ChartOption,
    ConfigOption,
    HelmOption,
    HelmVersionOption,
    RepoConfigOption,
    StrictReposOption,
    ValuesOption,
    VerboseOption,
)
from helm_wrapper.config.settings import Settings
from helm_wrapper.core.executor import Executor
from helm_wrapper.core.orchestrator import Orchestrator, RunRequest
from helm_wrapper.logging import configure_logging
from helm_wrapper.output.formatters import report_failure

app = typer.Typer(
    name="helm-wrapper",
    help="Run helm from a declarative release or repository record.",
    no_args_is_help=True,
    add_completion=False,
)


@app.command()
def run(
    passthrough: Optional[List[str]] = typer.Argument(None, help="Extra arguments passed to helm (after --)"),
    config: Path = ConfigOption,
    helm: Optional[str] = HelmOption,
    helm_version: Optional[str] = HelmVersionOption,
    repo_config: Optional[Path] = RepoConfigOption,
    values: Optional[str] = ValuesOption,
    chart: Optional[str] = ChartOption,
    verbose: bool = VerboseOption,
    strict_repos: bool = StrictReposOption,
) -> None:
    """Install, upgrade or inspect a release, or register a repository."""
    configure_logging(verbose)
    settings = Settings.from_env(
        helm_binary=helm,
        helm_version=helm_version,
        strict_dependency_repositories=strict_repos,
        verbose=verbose,
    )
    request = RunRequest(
        config_path=config,
        repo_config_path=repo_config,
        values_file=values,
        chart_path=chart,
        extra_args=tuple(passthrough or ()),
    )
    result = Orchestrator(settings, executor=Executor()).run(request)
    if not result.ok:
        report_failure(result)
    raise typer.Exit(code=result.exit_code)


def main() -> None:
    app()
