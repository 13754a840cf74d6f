from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from ipaddress import IPv6Address

from kronos.cluster.membership import IPAddress, MemberStatus

from .build_version import UNKNOWN_BUILD_VERSION, BuildVersion


@dataclass(slots=True, frozen=True)
class TCPAddress:
    """A host and port pair. IPv6 hosts render in brackets."""

    host: IPAddress
    port: int

    def to_tuple(self) -> tuple[str, int]:
        return (str(self.host), self.port)

    def __str__(self) -> str:
        if isinstance(self.host, IPv6Address):
            return f"[{self.host}]:{self.port}"

        return f"{self.host}:{self.port}"


@dataclass(slots=True, frozen=True)
class ServerParts:
    """
    A cluster member confirmed to be acting as a scheduler server.

    Built by the classifier from a member's tags and never modified
    afterwards. A newer classification of the same member replaces it.
    """

    name: str
    id: str
    region: str
    datacenter: str
    port: int
    bootstrap: bool
    expect: int
    addr: TCPAddress
    rpc_addr: TCPAddress
    status: MemberStatus
    build_version: BuildVersion = UNKNOWN_BUILD_VERSION

    def copy(self) -> ServerParts:
        return dataclasses.replace(self)

    def __str__(self) -> str:
        return f"{self.name} (Addr: {self.addr}) (DC: {self.datacenter})"
