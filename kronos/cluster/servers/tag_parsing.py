"""
Parsers for member tag values.

The strict parsers return None on failure and leave the decision to the
caller. The tolerant ones substitute a default and never fail.
"""

import re
from ipaddress import IPv6Address, ip_address

from kronos.cluster.membership import IPAddress
from kronos.utils.int64_array import INT64_MAX, INT64_MIN

from .build_version import UNKNOWN_BUILD_VERSION, BuildVersion

_DECIMAL_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_decimal(value: str | None) -> int | None:
    """
    Parse a base-10 integer: optional sign, ASCII digits, no whitespace
    or underscores, within the signed 64-bit range.
    """
    if value is None or _DECIMAL_PATTERN.fullmatch(value) is None:
        return None

    parsed = int(value)
    if not INT64_MIN <= parsed <= INT64_MAX:
        return None

    return parsed


def parse_ip(value: str | None) -> IPAddress | None:
    """
    Parse an IPv4 or IPv6 literal. Zone suffixes are rejected and
    IPv4-mapped IPv6 addresses collapse to their IPv4 form.
    """
    if not value or "%" in value:
        return None

    try:
        address = ip_address(value)

    except ValueError:
        return None

    return unmap_ip(address)


def unmap_ip(address: IPAddress) -> IPAddress:
    """Collapse an IPv4-mapped IPv6 address to its IPv4 form."""
    if isinstance(address, IPv6Address) and address.ipv4_mapped is not None:
        return address.ipv4_mapped

    return address


def resolve_rpc_host(rpc_addr: str | None, advertised: IPAddress) -> IPAddress:
    """Use the rpc_addr tag if it is an IP literal, else the advertised host."""
    rpc_host = parse_ip(rpc_addr)
    if rpc_host is None:
        return unmap_ip(advertised)

    return rpc_host


def parse_build_version(value: str | None) -> BuildVersion:
    """Parse the version tag, or return the unknown sentinel."""
    if value is None:
        return UNKNOWN_BUILD_VERSION

    try:
        return BuildVersion.parse(value)

    except ValueError:
        return UNKNOWN_BUILD_VERSION
