from .build_version import (
    BuildVersion as BuildVersion,
    UNKNOWN_BUILD_VERSION as UNKNOWN_BUILD_VERSION,
)
from .classifier import (
    Classification as Classification,
    ClassificationOutcome as ClassificationOutcome,
    SERVER_ROLE as SERVER_ROLE,
    classify_member as classify_member,
    is_server as is_server,
)
from .server_lookup import ServerLookup as ServerLookup
from .server_parts import (
    ServerParts as ServerParts,
    TCPAddress as TCPAddress,
)
from .tag_parsing import (
    parse_build_version as parse_build_version,
    parse_decimal as parse_decimal,
    parse_ip as parse_ip,
    resolve_rpc_host as resolve_rpc_host,
    unmap_ip as unmap_ip,
)
