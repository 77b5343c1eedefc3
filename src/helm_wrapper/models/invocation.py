"""External command invocation model."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field


@dataclass(frozen=True)
class CommandInvocation:
    binary: str
    args: tuple[str, ...] = field(default_factory=tuple)

    @property
    def argv(self) -> list[str]:
        return [self.binary, *self.args]

    def display(self) -> str:
        return " ".join(shlex.quote(part) for part in self.argv)
