"""Polling watcher for the webhook config file."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

FileListener = Callable[[Path], None]


class ConfigWatcher:
    """Notifies subscribers when the watched file's mtime or size changes.

    Observation only starts if the file exists when ``start()`` is called.
    """

    def __init__(self, path: str | Path, interval: float = 1.0) -> None:
        self._path = Path(path)
        self._interval = interval
        self._listeners: list[FileListener] = []
        self._signature: tuple[int, int] | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def subscribe(self, listener: FileListener) -> None:
        self._listeners.append(listener)

    def start(self) -> bool:
        """Begin polling. Returns False when the file does not exist."""
        self.stop()
        signature = self._stat()
        if signature is None:
            logger.info("Webhook config %s not found, not watching", self._path)
            return False
        self._signature = signature
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info("Webhook config file watcher started for %s", self._path)
        return True

    def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        self._task = None
        logger.info("Webhook config file watcher stopped for %s", self._path)

    async def aclose(self) -> None:
        """Stop and wait for the polling task to finish."""
        task = self._task
        self.stop()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    def check(self) -> bool:
        """Compare the file against the last seen state, notifying on change."""
        signature = self._stat()
        # A vanished file keeps the old signature so its return is noticed
        if signature is None or signature == self._signature:
            return False
        self._signature = signature
        for listener in list(self._listeners):
            try:
                listener(self._path)
            except Exception:
                logger.exception("Webhook config listener failed for %s", self._path)
        return True

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            self.check()

    def _stat(self) -> tuple[int, int] | None:
        try:
            st = self._path.stat()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Cannot stat webhook config %s: %s", self._path, e)
            return None
        return st.st_mtime_ns, st.st_size
