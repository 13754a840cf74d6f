"""
Server Lookup - the set of scheduler servers currently known to this node.

Membership events are classified member by member and applied in the
order they arrive:
- member-join / member-update: servers are added or replaced, members
  that no longer classify as servers are dropped
- member-leave / member-failed / member-reap: members are dropped

Servers are indexed by id and by RPC address.
"""

import asyncio

from kronos.cluster.membership import MemberEvent
from kronos.logging import Logger

from .classifier import (
    Classification,
    ClassificationOutcome,
    classify_member,
)
from .logging_models import (
    ServerLookupDebug,
    ServerLookupInfo,
    ServerLookupWarning,
)
from .server_parts import ServerParts, TCPAddress


class ServerLookup:
    def __init__(
        self,
        region: str = "",
        datacenter: str = "",
        logger: Logger | None = None,
    ):
        """
        Args:
            region: Local region, for log context
            datacenter: Local datacenter, for log context
            logger: Logger to use, a new Logger if not given
        """
        self._region = region
        self._datacenter = datacenter
        self._logger = logger if logger is not None else Logger()

        # server id -> parts
        self._servers: dict[str, ServerParts] = {}

        # rpc address -> server id
        self._addr_to_server: dict[TCPAddress, str] = {}

        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._servers)

    def __contains__(self, server_id: str) -> bool:
        return server_id in self._servers

    async def add_server(self, server: ServerParts) -> None:
        async with self._lock:
            if previous := self._servers.get(server.id):
                self._addr_to_server.pop(previous.rpc_addr, None)

            self._servers[server.id] = server
            self._addr_to_server[server.rpc_addr] = server.id

        await self._log_info(f"Added server {server}")

    async def remove_server(self, server: ServerParts | str) -> bool:
        """Remove a server by parts or id. Returns False if it was unknown."""
        server_id = server.id if isinstance(server, ServerParts) else server

        async with self._lock:
            removed = self._servers.pop(server_id, None)
            if removed is None:
                return False

            if self._addr_to_server.get(removed.rpc_addr) == server_id:
                del self._addr_to_server[removed.rpc_addr]

        await self._log_info(f"Removed server {removed}")
        return True

    def get_server(self, server_id: str) -> ServerParts | None:
        if server := self._servers.get(server_id):
            return server.copy()

        return None

    def server_addr(self, server_id: str) -> TCPAddress | None:
        """RPC address of a server, or None if it is unknown."""
        if server := self._servers.get(server_id):
            return server.rpc_addr

        return None

    def server_id_for(self, addr: TCPAddress) -> str | None:
        return self._addr_to_server.get(addr)

    def servers(self, region: str | None = None) -> list[ServerParts]:
        """Known servers sorted by name, optionally limited to one region."""
        return [
            server.copy()
            for server in sorted(self._servers.values(), key=lambda parts: parts.name)
            if region is None or server.region == region
        ]

    async def handle_event(self, event: MemberEvent) -> list[Classification]:
        classifications = [classify_member(member) for member in event.members]

        for classification in classifications:
            member = classification.member

            if classification.outcome == ClassificationOutcome.MALFORMED:
                await self._log_warning(
                    f"Member {member} is tagged as a server but was ignored: {classification.reason}"
                )

            if event.event_type.is_departure:
                await self.remove_server(member.name)

            elif classification.is_server:
                await self.add_server(classification.server)

            elif member.name in self._servers:
                await self.remove_server(member.name)

            else:
                await self._log_debug(
                    f"Ignoring {event} for non-server member {member}"
                )

        return classifications

    def _get_log_context(self) -> dict:
        return {
            "region": self._region,
            "datacenter": self._datacenter,
            "server_count": len(self._servers),
        }

    async def _log_debug(self, message: str) -> None:
        await self._logger.log(ServerLookupDebug(message=message, **self._get_log_context()))

    async def _log_info(self, message: str) -> None:
        await self._logger.log(ServerLookupInfo(message=message, **self._get_log_context()))

    async def _log_warning(self, message: str) -> None:
        await self._logger.log(ServerLookupWarning(message=message, **self._get_log_context()))
