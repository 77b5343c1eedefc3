"""Shared CLI options."""

from __future__ import annotations

import typer

ConfigOption = typer.Option(..., "--config", help="Path to configuration JSON file")
HelmOption = typer.Option(
    None, "--helm", help="Path to helm binary (default: $HELM_BINARY or helm on PATH)",
)
RepoConfigOption = typer.Option(
    None, "--repo-config",
    help="Path to repository configuration JSON (for releases using a registered repository)",
)
ValuesOption = typer.Option(None, "--values", help="Path to values file (overrides config)")
ChartOption = typer.Option(None, "--chart", help="Path to chart (replaces the __CHART_PATH__ placeholder)")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Enable verbose output")
StrictReposOption = typer.Option(
    False, "--strict-repos", help="Fail when a dependency repository cannot be added",
)
HelmVersionOption = typer.Option(
    None, "--helm-version",
    help="Helm version the run expects (default: $HELM_VERSION, else v3.13.3)",
)
