"""Chart manifest models."""

from __future__ import annotations

from dataclasses import dataclass, field


def _text(d: dict, key: str) -> str:
    # YAML happily yields ints, floats and dates for unquoted scalars
    value = d.get(key)
    return "" if value is None else str(value)


@dataclass(frozen=True)
class ChartDependency:
    name: str = ""
    version: str = ""
    repository: str = ""
    condition: str = ""
    alias: str = ""

    @property
    def has_http_repository(self) -> bool:
        return self.repository.startswith(("http://", "https://"))

    @classmethod
    def from_dict(cls, d: dict) -> ChartDependency:
        return cls(
            name=_text(d, "name"),
            version=_text(d, "version"),
            repository=_text(d, "repository"),
            condition=_text(d, "condition"),
            alias=_text(d, "alias"),
        )


@dataclass(frozen=True)
class ChartManifest:
    name: str = ""
    version: str = ""
    dependencies: tuple[ChartDependency, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, d: dict | None) -> ChartManifest:
        if not d:
            return cls()
        deps = d.get("dependencies")
        if not isinstance(deps, list):
            deps = []
        return cls(
            name=_text(d, "name"),
            version=_text(d, "version"),
            dependencies=tuple(ChartDependency.from_dict(dep) for dep in deps if isinstance(dep, dict)),
        )
