"""Configuration record models.

A record is either a repository registration or a release; the two shapes
never share meaningful fields, so each gets its own frozen dataclass.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Union

from helm_wrapper.models import Operation

DEFAULT_NAMESPACE = "default"


@dataclass(frozen=True)
class RepositoryConfig:
    name: str = ""
    url: str = ""
    ca_file: str = ""
    cert_file: str = ""
    username: str = ""
    password: str = ""
    force_update: bool = False
    insecure_skip_tls_verify: bool = False
    no_update: bool = False

    @classmethod
    def from_dict(cls, d: dict) -> RepositoryConfig:
        return cls(
            name=d.get("repo_name") or "",
            url=d.get("url") or "",
            ca_file=d.get("ca_file") or "",
            cert_file=d.get("cert_file") or "",
            username=d.get("username") or "",
            password=d.get("password") or "",
            force_update=bool(d.get("force_update", False)),
            insecure_skip_tls_verify=bool(d.get("insecure_skip_tls_verify", False)),
            no_update=bool(d.get("no_update", False)),
        )


@dataclass(frozen=True)
class ReleaseConfig:
    command: str = ""
    release_name: str = ""
    chart: str = ""
    repository: str = ""
    repo_url: str = ""
    version: str = ""
    namespace: str = DEFAULT_NAMESPACE
    values_file: str = ""
    timeout: str = ""
    flags: tuple[str, ...] = field(default_factory=tuple)

    @property
    def operation(self) -> Operation | None:
        return Operation.from_str(self.command)

    @property
    def is_local_chart(self) -> bool:
        return not self.repository and not self.repo_url and not self.chart.startswith("oci://")

    def replace(self, **changes) -> ReleaseConfig:
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_dict(cls, d: dict) -> ReleaseConfig:
        return cls(
            command=d.get("command") or "",
            release_name=d.get("release_name") or "",
            chart=d.get("chart") or "",
            repository=d.get("repository") or "",
            repo_url=d.get("repo_url") or "",
            version=d.get("version") or "",
            namespace=d.get("namespace") or DEFAULT_NAMESPACE,
            values_file=d.get("values_file") or "",
            timeout=d.get("timeout") or "",
            flags=tuple(d.get("flags") or ()),
        )


@dataclass(frozen=True)
class UnrecognizedConfig:
    """A record whose ``type`` names no known shape.

    Kept as a value so the failure is reported when a command is built.
    """

    kind: str = ""


Config = Union[RepositoryConfig, ReleaseConfig, UnrecognizedConfig]
