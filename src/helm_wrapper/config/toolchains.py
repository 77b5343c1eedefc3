"""Startup merge of requested Helm toolchains."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from helm_wrapper.errors import InvalidHelmVersion, ToolchainConflict
from helm_wrapper.utils.version_compare import is_semantic_version

logger = logging.getLogger(__name__)

DEFAULT_HELM_VERSION = "v3.13.3"
DEFAULT_TOOLCHAIN_NAME = "helm"


@dataclass(frozen=True)
class HelmToolchain:
    name: str = DEFAULT_TOOLCHAIN_NAME
    version: str = DEFAULT_HELM_VERSION
    sha256: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> HelmToolchain:
        return cls(
            name=d.get("name") or DEFAULT_TOOLCHAIN_NAME,
            version=d.get("version") or DEFAULT_HELM_VERSION,
            sha256=d.get("sha256") or "",
        )


def merge_toolchains(requests: Iterable[HelmToolchain]) -> dict[str, HelmToolchain]:
    """Collapse toolchain requests into one toolchain per name.

    Identical requests for a name are merged; the same name with two
    versions is a conflict. With no requests the default toolchain is used.
    """
    merged: dict[str, HelmToolchain] = {}
    for request in requests:
        version = request.version or DEFAULT_HELM_VERSION
        if not is_semantic_version(version):
            raise InvalidHelmVersion(
                f"toolchain '{request.name}' specified invalid Helm version '{version}'"
            )
        name = request.name or DEFAULT_TOOLCHAIN_NAME
        seen = merged.get(name)
        if seen is None:
            merged[name] = HelmToolchain(name=name, version=version, sha256=request.sha256)
            continue
        if seen.version != version:
            raise ToolchainConflict(
                f"conflicting Helm versions for '{name}': {seen.version} vs {version}"
            )
        logger.debug("Ignoring duplicate toolchain request for %s", name)

    if not merged:
        merged[DEFAULT_TOOLCHAIN_NAME] = HelmToolchain()
    return merged
