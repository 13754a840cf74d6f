"""
Logging models for server tracking.

Each model carries the local region/datacenter plus the size of the
known server set at the time of the log.
"""

from kronos.logging.models import Entry, LogLevel


class ServerLookupDebug(Entry, kw_only=True):
    """Debug-level logging for ServerLookup operations."""
    region: str
    datacenter: str
    server_count: int
    level: LogLevel = LogLevel.DEBUG


class ServerLookupInfo(Entry, kw_only=True):
    """Info-level logging for ServerLookup operations."""
    region: str
    datacenter: str
    server_count: int
    level: LogLevel = LogLevel.INFO


class ServerLookupWarning(Entry, kw_only=True):
    """Warning-level logging for ServerLookup operations."""
    region: str
    datacenter: str
    server_count: int
    level: LogLevel = LogLevel.WARN
