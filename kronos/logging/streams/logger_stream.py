import asyncio
import datetime
import io
import os
import pathlib
import sys
import threading
from collections import defaultdict
from typing import (
    AsyncIterator,
    Callable,
    Dict,
    TypeVar,
)

import msgspec

from kronos.logging.config.logging_config import LoggingConfig
from kronos.logging.config.stream_type import StreamType
from kronos.logging.models import Entry, Log

T = TypeVar('T', bound=Entry)


DEFAULT_TEMPLATE = "{timestamp} - {level} - {thread_id} - {filename}:{function_name}.{line_number} - {message}"
ERROR_TEMPLATE = "{timestamp} - {level} - {thread_id}.{filename}:{function_name}.{line_number} - {error}"


class LoggerStream:
    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
        filename: str | None = None,
        directory: str | None = None,
    ) -> None:
        if name is None:
            name = "default"

        self._name = name
        self._default_template = template
        self._default_logfile = filename
        self._default_log_directory = directory

        self._init_lock = asyncio.Lock()

        self._files: Dict[str, io.BufferedRandom] = {}
        self._file_locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        self._cwd: str | None = None
        self._default_logfile_path: str | None = None

        self._config = LoggingConfig()
        self._initialized: bool = False

    @property
    def initialized(self):
        return self._initialized

    async def initialize(self):
        async with self._init_lock:

            if self._initialized:
                return

            if self._cwd is None:
                self._cwd = await asyncio.get_running_loop().run_in_executor(
                    None,
                    os.getcwd,
                )

            self._initialized = True

    async def open_file(
        self,
        filename: str,
        directory: str | None = None,
        is_default: bool = False,
    ):
        if self._initialized is False:
            await self.initialize()

        logfile_path = self._to_logfile_path(filename, directory=directory)

        async with self._file_locks[logfile_path]:
            await asyncio.get_running_loop().run_in_executor(
                None,
                self._open_file,
                logfile_path,
            )

        if is_default:
            self._default_logfile_path = logfile_path

        return logfile_path

    def _open_file(
        self,
        logfile_path: str,
    ):
        resolved_path = pathlib.Path(logfile_path).absolute().resolve()
        resolved_path.parent.mkdir(parents=True, exist_ok=True)

        if (
            logfile := self._files.get(logfile_path)
        ) and logfile.closed is False:
            return

        self._files[logfile_path] = open(resolved_path, "ab+")

    async def close(self):
        await asyncio.gather(
            *[self._close_file(logfile_path) for logfile_path in list(self._files)]
        )

        self._initialized = False

    async def _close_file(self, logfile_path: str):
        async with self._file_locks[logfile_path]:
            if (
                logfile := self._files.get(logfile_path)
            ) and logfile.closed is False:
                await asyncio.get_running_loop().run_in_executor(
                    None,
                    logfile.close,
                )

    def _to_logfile_path(
        self,
        filename: str,
        directory: str | None = None,
    ):
        filename_path = pathlib.Path(filename)

        if filename_path.suffix != ".json":
            raise ValueError("Err. - file must be JSON file for logs.")

        if self._config.directory:
            directory = self._config.directory

        elif directory is None:
            directory = self._cwd

        return os.path.join(directory, filename_path)

    async def log(
        self,
        entry: T | Log,
        template: str | None = None,
        path: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        filename: str | None = None
        directory: str | None = None

        if path:
            logfile_path = pathlib.Path(path)
            is_logfile = len(logfile_path.suffix) > 0

            filename = logfile_path.name if is_logfile else None
            directory = str(logfile_path.parent.absolute()) if is_logfile else str(logfile_path.absolute())

        if template is None:
            template = self._default_template

        if filename is None:
            filename = self._default_logfile

        if directory is None:
            directory = self._default_log_directory

        if filename or directory:
            await self._log_to_file(
                entry,
                filename=filename,
                directory=directory,
                filter=filter,
            )

        else:
            await self._log(
                entry,
                template=template,
                filter=filter,
            )

    def _to_log(self, entry_or_log: T | Log) -> Log:
        if isinstance(entry_or_log, Log):
            return entry_or_log

        log_file, line_number, function_name = self._find_caller()

        return Log(
            entry=entry_or_log,
            filename=log_file,
            function_name=function_name,
            line_number=line_number,
        )

    async def _log(
        self,
        entry_or_log: T | Log,
        template: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        entry: Entry = (
            entry_or_log.entry if isinstance(entry_or_log, Log) else entry_or_log
        )

        if self._config.enabled(self._name, entry.level) is False:
            return

        if filter and filter(entry) is False:
            return

        if self._initialized is False:
            await self.initialize()

        if template is None:
            template = DEFAULT_TEMPLATE

        log = self._to_log(entry_or_log)

        stream = sys.stdout if self._config.output == StreamType.STDOUT else sys.stderr

        try:
            await asyncio.get_running_loop().run_in_executor(
                None,
                self._write_to_stream,
                stream,
                entry.to_template(
                    template,
                    context={
                        "filename": log.filename,
                        "function_name": log.function_name,
                        "line_number": log.line_number,
                        "thread_id": log.thread_id,
                        "timestamp": log.timestamp,
                    },
                ),
            )

        except (OSError, KeyError, ValueError) as err:
            await self._report_error(log, err)

    async def _log_to_file(
        self,
        entry_or_log: T | Log,
        filename: str | None = None,
        directory: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        entry: Entry = (
            entry_or_log.entry if isinstance(entry_or_log, Log) else entry_or_log
        )

        if self._config.enabled(self._name, entry.level) is False:
            return

        if filter and filter(entry) is False:
            return

        if self._initialized is False:
            await self.initialize()

        if filename is None and self._default_logfile_path is None:
            filename = "logs.json"

            if directory is None:
                directory = os.path.join(self._cwd, "logs")

        if filename:
            logfile_path = self._to_logfile_path(
                filename,
                directory=directory,
            )

        else:
            logfile_path = self._default_logfile_path

        if self._files.get(logfile_path) is None or self._files[logfile_path].closed:
            await self.open_file(
                pathlib.Path(logfile_path).name,
                directory=str(pathlib.Path(logfile_path).parent),
            )

        log = self._to_log(entry_or_log)

        try:
            async with self._file_locks[logfile_path]:
                await asyncio.get_running_loop().run_in_executor(
                    None,
                    self._write_to_file,
                    log,
                    logfile_path,
                )

        except OSError as err:
            await self._report_error(log, err)

    def _write_to_stream(
        self,
        stream: io.TextIOBase,
        line: str,
    ):
        stream.write(line + "\n")
        stream.flush()

    def _write_to_file(
        self,
        log: Log,
        logfile_path: str,
    ):
        if (
            logfile := self._files.get(logfile_path)
        ) and (
            logfile.closed is False
        ):
            logfile.write(msgspec.json.encode(log) + b"\n")
            logfile.flush()

    async def _report_error(self, log: Log, err: Exception):
        await asyncio.get_running_loop().run_in_executor(
            None,
            self._write_to_stream,
            sys.stderr,
            log.entry.to_template(
                ERROR_TEMPLATE,
                context={
                    "filename": log.filename,
                    "function_name": log.function_name,
                    "line_number": log.line_number,
                    "error": str(err),
                    "thread_id": threading.get_native_id(),
                    "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
                },
            ),
        )

    def _find_caller(self):
        """
        Find the stack frame of the caller so that we can note the source
        file name, line number and function name.
        """
        frame = sys._getframe(0)
        for _ in range(4):
            if frame.f_back is None:
                break

            frame = frame.f_back

        code = frame.f_code

        return (
            code.co_filename,
            frame.f_lineno,
            code.co_name,
        )

    async def read_entries(
        self,
        logfile_path: str,
        from_offset: int = 0,
    ) -> AsyncIterator[tuple[int, Log]]:
        if self._initialized is False:
            await self.initialize()

        decoder = msgspec.json.Decoder(Log)
        lines = await asyncio.get_running_loop().run_in_executor(
            None,
            self._read_lines,
            logfile_path,
            from_offset,
        )

        for offset, line in lines:
            yield offset, decoder.decode(line)

    def _read_lines(
        self,
        logfile_path: str,
        from_offset: int,
    ) -> list[tuple[int, bytes]]:
        lines: list[tuple[int, bytes]] = []

        with open(logfile_path, "rb") as logfile:
            logfile.seek(from_offset)
            offset = from_offset

            for line in logfile:
                if line.strip():
                    lines.append((offset, line))

                offset += len(line)

        return lines
