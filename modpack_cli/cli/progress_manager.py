"""
Plain-line progress output for an install session.

Every line goes to the stderr console. Concurrent downloads do not print
directly: each one posts its completion to a queue drained by a single
counter task, so the "(i/N)" numbering is produced in one place.
"""

import asyncio

from rich.console import Console


class DownloadCounter:
    """Aggregates completion events from concurrent tasks into numbered lines."""

    def __init__(self, reporter: "ProgressReporter", total: int):
        self.reporter = reporter
        self.total = total
        self.completed = 0
        self._queue: asyncio.Queue[str | None] = asyncio.Queue()
        self._consumer: asyncio.Task | None = None

    async def __aenter__(self) -> "DownloadCounter":
        self._consumer = asyncio.create_task(self._consume())
        return self

    async def __aexit__(self, *exc_info) -> None:
        # Drain whatever was reported before shutting the consumer down.
        self._queue.put_nowait(None)
        await self._consumer

    def report(self, name: str) -> None:
        self._queue.put_nowait(name)

    async def _consume(self) -> None:
        while (name := await self._queue.get()) is not None:
            self.completed += 1
            self.reporter.message(f"({self.completed}/{self.total}) {name}")


class ProgressReporter:
    """Writes human-readable progress lines for the install steps."""

    def __init__(self, console: Console):
        self.console = console

    def message(self, text: str, end: str = "\n") -> None:
        self.console.print(text, end=end, markup=False, highlight=False)

    def counter(self, total: int) -> DownloadCounter:
        return DownloadCounter(self, total)
