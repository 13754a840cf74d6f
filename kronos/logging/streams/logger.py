from __future__ import annotations

import asyncio
import sys
import threading
from typing import Callable, Dict, TypeVar

from kronos.logging.models import Entry, Log

from .logger_context import LoggerContext

T = TypeVar('T', bound=Entry)


class Logger:
    """
    Entry point for structured logging. Each name maps to one
    LoggerContext, created on first use and kept open until close().
    """

    def __init__(self) -> None:
        self._contexts: Dict[str, LoggerContext] = {}

    def __getitem__(self, name: str) -> LoggerContext:
        return self.context(name=name)

    def context(
        self,
        name: str | None = None,
        nested: bool = True,
    ) -> LoggerContext:
        if name is None:
            name = 'default'

        if (context := self._contexts.get(name)) is None:
            context = LoggerContext(name=name, nested=nested)
            self._contexts[name] = context

        return context

    async def log(
        self,
        entry: T,
        name: str | None = None,
        template: str | None = None,
        path: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        # Caller info is captured here, since the stream only sees this frame.
        frame = sys._getframe(1)
        code = frame.f_code

        async with self.context(name=name) as stream:
            await stream.log(
                Log(
                    entry=entry,
                    filename=code.co_filename,
                    function_name=code.co_name,
                    line_number=frame.f_lineno,
                    thread_id=threading.get_native_id(),
                ),
                template=template,
                path=path,
                filter=filter,
            )

    async def close(self):
        if self._contexts:
            await asyncio.gather(*[
                context.stream.close() for context in self._contexts.values()
            ])
