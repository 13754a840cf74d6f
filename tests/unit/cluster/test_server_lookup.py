"""
Tests for ServerLookup event handling.

Covers:
- join/update events adding and replacing servers
- leave/failed/reap events removing servers
- non-server and malformed members being ignored, with malformed
  members logged as warnings
- address and region queries
"""

import asyncio
from ipaddress import ip_address

import pytest

from kronos.cluster.membership import MemberEvent, MemberEventType, MemberStatus
from kronos.cluster.servers import (
    ClassificationOutcome,
    ServerLookup,
    TCPAddress,
    is_server,
)
from kronos.cluster.servers.logging_models import (
    ServerLookupInfo,
    ServerLookupWarning,
)


def logged_entries(mock_logger, entry_type):
    return [
        call.args[0]
        for call in mock_logger.log.await_args_list
        if isinstance(call.args[0], entry_type)
    ]


class TestServerLookupEvents:

    @pytest.mark.asyncio
    async def test_join_adds_servers_only(self, mock_logger, member_factory, server_tags):
        lookup = ServerLookup(region="us-east", datacenter="dc1", logger=mock_logger)
        event = MemberEvent(
            MemberEventType.JOIN,
            [
                member_factory(name="server-1", addr="10.0.0.1", tags=server_tags),
                member_factory(name="agent-1", addr="10.0.0.2", tags={"role": "dkron"}),
            ],
        )

        classifications = await lookup.handle_event(event)

        assert [c.outcome for c in classifications] == [
            ClassificationOutcome.SERVER,
            ClassificationOutcome.NOT_SERVER,
        ]
        assert len(lookup) == 1
        assert "server-1" in lookup
        assert "agent-1" not in lookup

        infos = logged_entries(mock_logger, ServerLookupInfo)
        assert len(infos) == 1
        assert infos[0].region == "us-east"
        assert infos[0].server_count == 1

    @pytest.mark.asyncio
    async def test_malformed_member_is_logged_and_ignored(
        self, mock_logger, member_factory, server_tags
    ):
        lookup = ServerLookup(logger=mock_logger)
        member = member_factory(name="server-1", tags={**server_tags, "port": "http"})

        classifications = await lookup.handle_event(
            MemberEvent(MemberEventType.JOIN, [member])
        )

        assert classifications[0].outcome == ClassificationOutcome.MALFORMED
        assert len(lookup) == 0

        warnings = logged_entries(mock_logger, ServerLookupWarning)
        assert len(warnings) == 1
        assert "server-1" in warnings[0].message
        assert "port" in warnings[0].message

    @pytest.mark.parametrize(
        "event_type",
        [MemberEventType.LEAVE, MemberEventType.FAILED, MemberEventType.REAP],
    )
    @pytest.mark.asyncio
    async def test_departure_removes_server(
        self, mock_logger, member_factory, server_tags, event_type
    ):
        lookup = ServerLookup(logger=mock_logger)
        member = member_factory(name="server-1", tags=server_tags)
        await lookup.handle_event(MemberEvent(MemberEventType.JOIN, [member]))

        departed = member_factory(
            name="server-1",
            tags=server_tags,
            status=MemberStatus.FAILED,
        )
        await lookup.handle_event(MemberEvent(event_type, [departed]))

        assert len(lookup) == 0
        assert lookup.server_addr("server-1") is None

    @pytest.mark.asyncio
    async def test_update_replaces_server(self, mock_logger, member_factory, server_tags):
        lookup = ServerLookup(logger=mock_logger)
        await lookup.handle_event(
            MemberEvent(
                MemberEventType.JOIN,
                [member_factory(name="server-1", tags=server_tags)],
            )
        )

        updated = member_factory(
            name="server-1",
            tags={**server_tags, "rpc_addr": "10.5.5.5", "version": "3.3.0"},
        )
        await lookup.handle_event(MemberEvent(MemberEventType.UPDATE, [updated]))

        new_addr = TCPAddress(host=ip_address("10.5.5.5"), port=6868)
        old_addr = TCPAddress(host=ip_address("10.0.0.1"), port=6868)

        assert len(lookup) == 1
        assert lookup.server_addr("server-1") == new_addr
        assert lookup.server_id_for(new_addr) == "server-1"
        assert lookup.server_id_for(old_addr) is None
        assert str(lookup.get_server("server-1").build_version) == "3.3.0"

    @pytest.mark.asyncio
    async def test_update_drops_member_that_stops_being_server(
        self, mock_logger, member_factory, server_tags
    ):
        lookup = ServerLookup(logger=mock_logger)
        await lookup.handle_event(
            MemberEvent(
                MemberEventType.JOIN,
                [member_factory(name="server-1", tags=server_tags)],
            )
        )

        demoted = member_factory(name="server-1", tags={**server_tags, "server": "false"})
        await lookup.handle_event(MemberEvent(MemberEventType.UPDATE, [demoted]))

        assert "server-1" not in lookup


class TestServerLookupQueries:

    @pytest.mark.asyncio
    async def test_servers_sorted_and_filtered_by_region(
        self, mock_logger, member_factory, server_tags
    ):
        lookup = ServerLookup(logger=mock_logger)
        await lookup.handle_event(
            MemberEvent(
                MemberEventType.JOIN,
                [
                    member_factory(name="c", addr="10.0.0.3", tags=server_tags),
                    member_factory(
                        name="a",
                        addr="10.0.0.1",
                        tags={**server_tags, "region": "eu-west"},
                    ),
                    member_factory(name="b", addr="10.0.0.2", tags=server_tags),
                ],
            )
        )

        assert [server.name for server in lookup.servers()] == ["a", "b", "c"]
        assert [server.name for server in lookup.servers(region="us-east")] == ["b", "c"]
        assert lookup.servers(region="ap-south") == []

    @pytest.mark.asyncio
    async def test_remove_unknown_server(self, mock_logger):
        lookup = ServerLookup(logger=mock_logger)

        assert await lookup.remove_server("missing") is False
        mock_logger.log.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_remove_by_parts(self, mock_logger, server_member):
        lookup = ServerLookup(logger=mock_logger)
        _, parts = is_server(server_member)
        await lookup.add_server(parts)

        assert await lookup.remove_server(parts) is True
        assert len(lookup) == 0

    @pytest.mark.asyncio
    async def test_get_server_returns_copy(self, mock_logger, server_member):
        lookup = ServerLookup(logger=mock_logger)
        _, parts = is_server(server_member)
        await lookup.add_server(parts)

        fetched = lookup.get_server(parts.id)

        assert fetched == parts
        assert fetched is not parts
        assert lookup.get_server("missing") is None

    @pytest.mark.asyncio
    async def test_concurrent_adds_keep_indexes_consistent(
        self, mock_logger, member_factory, server_tags
    ):
        lookup = ServerLookup(logger=mock_logger)
        parts = [
            is_server(
                member_factory(name=f"server-{idx}", addr=f"10.0.1.{idx}", tags=server_tags)
            )[1]
            for idx in range(1, 21)
        ]

        await asyncio.gather(*[lookup.add_server(server) for server in parts])

        assert len(lookup) == 20
        for server in parts:
            assert lookup.server_id_for(server.rpc_addr) == server.id
