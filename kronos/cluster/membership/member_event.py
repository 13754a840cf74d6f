from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .member import Member


class MemberEventType(str, Enum):
    """Membership change kinds emitted by the gossip layer."""
    JOIN = "member-join"
    LEAVE = "member-leave"
    FAILED = "member-failed"
    UPDATE = "member-update"
    REAP = "member-reap"

    @property
    def is_departure(self) -> bool:
        return self in (
            MemberEventType.LEAVE,
            MemberEventType.FAILED,
            MemberEventType.REAP,
        )


@dataclass(slots=True, frozen=True)
class MemberEvent:
    event_type: MemberEventType
    members: tuple[Member, ...]

    def __post_init__(self):
        object.__setattr__(self, "members", tuple(self.members))

    def __str__(self) -> str:
        return self.event_type.value
