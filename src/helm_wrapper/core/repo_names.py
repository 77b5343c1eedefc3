"""Derive Helm repository names from repository URLs."""

from __future__ import annotations

_GITHUB_PAGES_MARKER = ".github.io"


def resolve_repository_name(url: str) -> str:
    """Map a repository URL to the name it is registered under.

    https://prometheus-community.github.io/helm-charts -> prometheus-community
    https://charts.jetstack.io -> charts-jetstack-io

    OCI registries are referenced by URL and never registered, so they
    (and the empty URL) map to the empty name.
    """
    if not url or url.startswith("oci://"):
        return ""

    for prefix in ("https://", "http://"):
        if url.startswith(prefix):
            url = url[len(prefix):]
            break

    idx = url.find(_GITHUB_PAGES_MARKER)
    if idx > 0:
        return url[:idx]
    idx = url.find("/")
    if idx > 0:
        return url[:idx].replace(".", "-")
    return url.replace(".", "-")
