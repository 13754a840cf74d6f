import pytest

from kronos.logging import LoggingConfig
from kronos.logging.streams.logger_stream import LoggerStream


@pytest.fixture(autouse=True)
def configure_log_level():
    config = LoggingConfig()
    config.update(log_level="debug", log_output="stdout")
    yield
    config.update(log_level="info", log_output="stdout")


@pytest.fixture
async def json_logger_stream(temp_log_directory: str):
    stream = LoggerStream(
        name="test_json",
        filename="test.json",
        directory=temp_log_directory,
    )
    await stream.initialize()
    await stream.open_file(
        "test.json",
        directory=temp_log_directory,
        is_default=True,
    )

    yield stream

    await stream.close()
