"""
Classification of cluster members into scheduler servers.

A member is a server when its `role` tag is "dkron" and its `server` tag
is "true". Server members must also carry a decimal `port` tag and, if
present, a decimal `expect` tag, otherwise they are treated as
malformed. `is_server` reports malformed members exactly like ordinary
peers; `classify_member` keeps the distinction for diagnostics.

Tag handling:
- region, dc: copied verbatim, empty when missing
- bootstrap: key presence only, the value is ignored
- expect: an expect of 1 always implies bootstrap
- rpc_addr: falls back to the member's advertised address
- version: falls back to UNKNOWN_BUILD_VERSION
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from kronos.cluster.membership import Member

from .server_parts import ServerParts, TCPAddress
from .tag_parsing import (
    parse_build_version,
    parse_decimal,
    resolve_rpc_host,
    unmap_ip,
)

SERVER_ROLE = "dkron"


class ClassificationOutcome(str, Enum):
    SERVER = "server"
    NOT_SERVER = "not_server"
    MALFORMED = "malformed"


@dataclass(slots=True, frozen=True)
class Classification:
    """Result of classifying one member."""

    member: Member
    outcome: ClassificationOutcome
    server: ServerParts | None = None
    reason: str = ""

    @property
    def is_server(self) -> bool:
        return self.outcome == ClassificationOutcome.SERVER


def _not_server(member: Member, reason: str) -> Classification:
    return Classification(
        member=member,
        outcome=ClassificationOutcome.NOT_SERVER,
        reason=reason,
    )


def _malformed(member: Member, reason: str) -> Classification:
    return Classification(
        member=member,
        outcome=ClassificationOutcome.MALFORMED,
        reason=reason,
    )


def classify_member(member: Member) -> Classification:
    tags = member.tags

    if tags.get("role") != SERVER_ROLE:
        return _not_server(member, f"role tag is not {SERVER_ROLE!r}")

    if tags.get("server") != "true":
        return _not_server(member, "server tag is not 'true'")

    region = tags.get("region", "")
    datacenter = tags.get("dc", "")
    bootstrap = "bootstrap" in tags

    expect = 0
    if "expect" in tags:
        expect = parse_decimal(tags["expect"])
        if expect is None:
            return _malformed(member, f"invalid expect tag {tags['expect']!r}")

    if expect == 1:
        bootstrap = True

    advertised_host = unmap_ip(member.addr)
    rpc_host = resolve_rpc_host(tags.get("rpc_addr"), advertised_host)

    port = parse_decimal(tags.get("port"))
    if port is None:
        return _malformed(member, f"invalid port tag {tags.get('port')!r}")

    build_version = parse_build_version(tags.get("version"))

    return Classification(
        member=member,
        outcome=ClassificationOutcome.SERVER,
        server=ServerParts(
            name=member.name,
            id=member.name,
            region=region,
            datacenter=datacenter,
            port=port,
            bootstrap=bootstrap,
            expect=expect,
            build_version=build_version,
            addr=TCPAddress(host=advertised_host, port=port),
            rpc_addr=TCPAddress(host=rpc_host, port=port),
            status=member.status,
        ),
    )


def is_server(member: Member) -> tuple[bool, ServerParts | None]:
    """
    Returns whether a member is a scheduler server, and its parts if so.
    Malformed server members return (False, None) like any other peer.
    """
    classification = classify_member(member)
    return classification.is_server, classification.server
