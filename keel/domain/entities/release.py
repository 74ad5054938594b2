"""
Release Module

Architectural Intent:
- Release is one named, versioned record of a deployed configuration
- Records are immutable; status transitions return new instances so the
  store decides when a transition becomes durable
- Only the transitions a rollback needs are modelled as domain methods:
  supersede (DEPLOYED -> SUPERSEDED), deploy and fail

Invariants:
- version is a positive integer assigned by the coordinator, never by callers
- chart, config, manifest and hooks are copied verbatim between versions
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from datetime import datetime, UTC
from enum import Enum
from typing import Any

from keel.domain.entities.hook import Hook


class StatusCode(Enum):
    UNKNOWN = "UNKNOWN"
    DEPLOYED = "DEPLOYED"
    DELETED = "DELETED"
    SUPERSEDED = "SUPERSEDED"
    FAILED = "FAILED"
    DELETING = "DELETING"
    PENDING_INSTALL = "PENDING_INSTALL"
    PENDING_UPGRADE = "PENDING_UPGRADE"
    PENDING_ROLLBACK = "PENDING_ROLLBACK"


@dataclass(frozen=True)
class Chart:
    name: str
    version: str
    app_version: str = ""

    def __str__(self) -> str:
        return f"{self.name}-{self.version}"


@dataclass(frozen=True)
class Status:
    code: StatusCode = StatusCode.UNKNOWN
    notes: str = ""


@dataclass(frozen=True)
class Info:
    status: Status = field(default_factory=Status)
    first_deployed: datetime = field(default_factory=lambda: datetime.now(UTC))
    last_deployed: datetime = field(default_factory=lambda: datetime.now(UTC))
    description: str = ""


@dataclass(frozen=True)
class Release:
    name: str
    version: int
    namespace: str
    chart: Chart
    config: str = ""
    manifest: str = ""
    hooks: tuple[Hook, ...] = ()
    info: Info = field(default_factory=Info)

    def __post_init__(self) -> None:
        if self.version < 1:
            raise ValueError(f"Release version must be positive, got {self.version}")

    @property
    def status(self) -> StatusCode:
        return self.info.status.code

    def with_status(self, code: StatusCode) -> "Release":
        status = replace(self.info.status, code=code)
        return replace(self, info=replace(self.info, status=status))

    def with_description(self, description: str) -> "Release":
        return replace(self, info=replace(self.info, description=description))

    def with_hooks(self, hooks: tuple[Hook, ...]) -> "Release":
        return replace(self, hooks=tuple(hooks))

    def supersede(self) -> "Release":
        return self.with_status(StatusCode.SUPERSEDED)

    def deploy(self) -> "Release":
        return self.with_status(StatusCode.DEPLOYED)

    def fail(self, description: str) -> "Release":
        return self.with_status(StatusCode.FAILED).with_description(description)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "namespace": self.namespace,
            "chart": {
                "name": self.chart.name,
                "version": self.chart.version,
                "app_version": self.chart.app_version,
            },
            "config": self.config,
            "manifest": self.manifest,
            "hooks": [h.to_dict() for h in self.hooks],
            "info": {
                "status": {
                    "code": self.info.status.code.value,
                    "notes": self.info.status.notes,
                },
                "first_deployed": self.info.first_deployed.isoformat(),
                "last_deployed": self.info.last_deployed.isoformat(),
                "description": self.info.description,
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Release":
        info = data.get("info", {})
        status = info.get("status", {})
        return cls(
            name=data["name"],
            version=int(data["version"]),
            namespace=data.get("namespace", "default"),
            chart=Chart(**data["chart"]),
            config=data.get("config", ""),
            manifest=data.get("manifest", ""),
            hooks=tuple(Hook.from_dict(h) for h in data.get("hooks", [])),
            info=Info(
                status=Status(
                    code=StatusCode(status.get("code", "UNKNOWN")),
                    notes=status.get("notes", ""),
                ),
                first_deployed=datetime.fromisoformat(info["first_deployed"]),
                last_deployed=datetime.fromisoformat(info["last_deployed"]),
                description=info.get("description", ""),
            ),
        )

    def __repr__(self) -> str:
        return (
            f"Release(name={self.name}, version={self.version}, "
            f"namespace={self.namespace}, chart={self.chart}, "
            f"status={self.status.value})"
        )
