from __future__ import annotations

"""Interaction channels: the prompt/response primitive used by the quiz flows."""

import asyncio
import sys
import threading
from typing import Optional, Protocol

try:
    import readline  # type: ignore
except ImportError:  # pragma: no cover - not available on every platform
    readline = None  # type: ignore

from ..errors import ChannelClosed
from ..util.out import colorize, errorlog, log


class Channel(Protocol):
    async def ask(self, prompt: str) -> str: ...

    def notify(self, text: str) -> None: ...


class ConsoleChannel:
    """Channel over stdin/stdout.

    ``input()`` blocks, so each read runs on its own daemon thread and the
    caller only suspends on a future. The thread is never joined: Ctrl-C
    while a read is pending ends the process without waiting for a line.
    End of input raises ChannelClosed.
    """

    def __init__(self, question_color: str | None = "red") -> None:
        self.question_color = question_color

    async def _input(self, prompt: str, prefill: Optional[str] = None) -> str:
        loop = asyncio.get_running_loop()
        use_prefill = bool(prefill) and readline is not None and sys.stdin.isatty()
        if use_prefill:
            readline.set_startup_hook(lambda: readline.insert_text(prefill))
        try:
            return await _read_line(loop, prompt)
        except (EOFError, OSError) as e:
            raise ChannelClosed("Input closed") from e
        finally:
            if use_prefill:
                readline.set_startup_hook()

    async def ask(self, prompt: str, prefill: Optional[str] = None) -> str:
        return await self._input(colorize(f" {prompt} ", self.question_color), prefill)

    async def readline(self, prompt: str) -> str:
        return await self._input(prompt)

    def notify(self, text: str, color: str | None = None) -> None:
        log(text, color)

    def error(self, text: str) -> None:
        errorlog(text)


def _read_line(loop: asyncio.AbstractEventLoop, prompt: str) -> "asyncio.Future[str]":
    future: asyncio.Future[str] = loop.create_future()

    def _settle(value: str | None, exc: BaseException | None) -> None:
        if future.done():
            return
        if exc is not None:
            future.set_exception(exc)
        else:
            future.set_result(value)

    def _worker() -> None:
        value, exc = None, None
        try:
            value = input(prompt)
        except Exception as e:  # EOFError, OSError on a closed stdin
            exc = e
        try:
            loop.call_soon_threadsafe(_settle, value, exc)
        except RuntimeError:
            # loop already closed (session cancelled while reading)
            pass

    threading.Thread(target=_worker, name="corequiz-input", daemon=True).start()
    return future
