"""Data models for the Helm wrapper."""

from __future__ import annotations

import enum


class ConfigKind(enum.Enum):
    REPOSITORY = "repository"
    RELEASE = "release"


class Operation(enum.Enum):
    INSTALL = "install"
    UPGRADE = "upgrade"
    UNINSTALL = "uninstall"
    STATUS = "status"
    GET_VALUES = "get-values"

    @classmethod
    def from_str(cls, s: str) -> Operation | None:
        # Persisted records spell get-values as plain "get"
        if s == "get":
            return cls.GET_VALUES
        for member in cls:
            if member.value == s:
                return member
        return None

    @property
    def uses_chart(self) -> bool:
        return self in (Operation.INSTALL, Operation.UPGRADE)
