from ipaddress import ip_address
from typing import Callable
from unittest.mock import AsyncMock

import pytest

from kronos.cluster.membership import Member, MemberStatus
from kronos.logging import Logger


@pytest.fixture
def server_tags() -> dict[str, str]:
    return {
        "role": "dkron",
        "server": "true",
        "region": "us-east",
        "dc": "dc1",
        "port": "6868",
        "version": "3.2.7",
    }


@pytest.fixture
def member_factory() -> Callable[..., Member]:
    def create_member(
        name: str = "node-1",
        addr: str = "10.0.0.1",
        tags: dict[str, str] | None = None,
        status: MemberStatus = MemberStatus.ALIVE,
    ) -> Member:
        return Member(
            name=name,
            addr=ip_address(addr),
            status=status,
            tags=tags or {},
            port=8946,
        )

    return create_member


@pytest.fixture
def server_member(member_factory, server_tags) -> Member:
    return member_factory(tags=server_tags)


@pytest.fixture
def mock_logger() -> AsyncMock:
    return AsyncMock(spec=Logger)
