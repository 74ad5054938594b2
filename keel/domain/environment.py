"""
Environment

Architectural Intent:
- Collaborators handed to the release module alongside the releases it applies
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from keel.domain.ports.kube_client_port import KubeClientPort
    from keel.domain.ports.release_store_port import ReleaseStorePort


@dataclass
class Environment:
    releases: ReleaseStorePort
    kube_client: KubeClientPort
