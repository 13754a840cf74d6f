from .logger_stream import LoggerStream


class LoggerContext:
    """
    Owns one named LoggerStream. Entering opens the stream and its
    default log file, if one is set. Leaving closes the stream unless
    the context is nested inside a longer-lived Logger.
    """

    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
        filename: str | None = None,
        directory: str | None = None,
        nested: bool = False,
    ) -> None:
        self.name = name
        self.filename = filename
        self.directory = directory
        self.nested = nested
        self.stream = LoggerStream(
            name=name,
            template=template,
            filename=filename,
            directory=directory,
        )

    async def __aenter__(self) -> LoggerStream:
        await self.stream.initialize()

        if self.filename:
            await self.stream.open_file(
                self.filename,
                directory=self.directory,
                is_default=True,
            )

        return self.stream

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if not self.nested:
            await self.stream.close()
