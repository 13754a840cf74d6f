"""
Cluster member records as reported by the gossip membership layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from ipaddress import IPv4Address, IPv6Address
from types import MappingProxyType
from typing import Mapping

IPAddress = IPv4Address | IPv6Address


class MemberStatus(str, Enum):
    """Liveness of a member as seen by the gossip layer."""
    NONE = "none"
    ALIVE = "alive"
    LEAVING = "leaving"
    LEFT = "left"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class Member:
    """
    A single cluster member and its gossip tags.

    Tags are copied on construction and exposed read-only, so code that
    receives a Member can inspect them but never alter the record.
    """

    name: str
    addr: IPAddress
    status: MemberStatus = MemberStatus.ALIVE
    tags: Mapping[str, str] = field(default_factory=dict)
    port: int = 0

    def __post_init__(self):
        object.__setattr__(self, "tags", MappingProxyType(dict(self.tags)))

    def __str__(self) -> str:
        return f"{self.name} ({self.addr}) [{self.status.value}]"
