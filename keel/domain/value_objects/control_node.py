"""
Control Node Value Object

Architectural Intent:
- Immutable SSH address of the host that holds the cluster credentials
- Kept in Fabric's 'user@host:port' shorthand; Fabric splits it on connect
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ControlNode:
    address: str

    def __post_init__(self) -> None:
        user, at, host = self.address.rpartition("@")
        if (
            not host
            or host.startswith(":")
            or (at and not user)
            or any(c.isspace() for c in self.address)
        ):
            raise ValueError(f"Invalid control node address: {self.address!r}")

    def __str__(self) -> str:
        return self.address
