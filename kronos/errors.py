class KronosError(Exception):
    """Base class for errors raised by kronos."""


class ConfigurationError(KronosError):
    """Raised when node configuration cannot be loaded."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Configuration error in {source}: {message}")
