from .member import (
    IPAddress as IPAddress,
    Member as Member,
    MemberStatus as MemberStatus,
)
from .member_event import (
    MemberEvent as MemberEvent,
    MemberEventType as MemberEventType,
)
