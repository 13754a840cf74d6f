from __future__ import annotations

from typing import Callable, Dict, Literal, Union

from pydantic import BaseModel, StrictStr

from kronos.logging.config.logging_config import LogOutput
from kronos.utils.slug import generate_slug

PrimaryType = Union[str, int, float, bytes, bool]


class Env(BaseModel):
    KRONOS_NODE_NAME: StrictStr | None = None
    KRONOS_REGION: StrictStr = "global"
    KRONOS_DATACENTER: StrictStr = "dc1"

    # Logging Settings
    KRONOS_LOG_LEVEL: StrictStr = "info"
    KRONOS_LOG_OUTPUT: Literal["stdout", "stderr"] = "stdout"
    KRONOS_LOGS_DIRECTORY: StrictStr | None = None

    @classmethod
    def types_map(cls) -> Dict[str, Callable[[str], PrimaryType]]:
        return {
            "KRONOS_NODE_NAME": str,
            "KRONOS_REGION": str,
            "KRONOS_DATACENTER": str,
            "KRONOS_LOG_LEVEL": str,
            "KRONOS_LOG_OUTPUT": str,
            "KRONOS_LOGS_DIRECTORY": str,
        }

    @property
    def node_slug(self) -> str | None:
        """Node name normalized for use in log and file names."""
        if self.KRONOS_NODE_NAME is None:
            return None

        return generate_slug(self.KRONOS_NODE_NAME)

    def get_logging_config(self) -> dict:
        """Get LoggingConfig.update() kwargs from environment settings."""
        log_output: LogOutput = self.KRONOS_LOG_OUTPUT

        return {
            'log_level': self.KRONOS_LOG_LEVEL,
            'log_output': log_output,
            'log_directory': self.KRONOS_LOGS_DIRECTORY,
        }
