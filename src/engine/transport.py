"""
Line based transports to a UCI engine.

A transport only moves text lines: `send` one command, `readline` one response (or None on timeout).
"""

import logging
import queue
import subprocess
import threading
from typing import Optional, Protocol

from src.core.exceptions import EngineUnavailableError
from src.engine.server import UCIEngine

logger = logging.getLogger(__name__)

# Marks the end of the engine's output stream in the line queue
_EOF = object()


class Transport(Protocol):
    def send(self, line: str) -> None: ...
    def readline(self, timeout: Optional[float] = None) -> Optional[str]: ...
    def close(self) -> None: ...


class SubprocessTransport:
    """
    Talk to an engine executable over its stdin/stdout.

    A daemon thread reads stdout into a queue, so reads can time out instead of blocking forever.
    """

    def __init__(self, command: list[str]) -> None:
        try:
            self.process = subprocess.Popen(
                command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                bufsize=1,
            )
        except OSError as e:
            raise EngineUnavailableError(f"Cannot start engine {command!r}: {e}") from e

        self._lines: queue.Queue[object] = queue.Queue()
        self._closed = False
        self._reader = threading.Thread(target=self._read_stdout, daemon=True)
        self._reader.start()
        logger.info("Started engine process %r (pid %d)", command, self.process.pid)

    def _read_stdout(self) -> None:
        assert self.process.stdout is not None
        for line in self.process.stdout:
            self._lines.put(line.rstrip("\n"))
        self._lines.put(_EOF)

    def send(self, line: str) -> None:
        if self._closed or self.process.poll() is not None:
            raise EngineUnavailableError("Engine process is not running")
        assert self.process.stdin is not None
        try:
            self.process.stdin.write(line + "\n")
            self.process.stdin.flush()
        except (BrokenPipeError, OSError) as e:
            raise EngineUnavailableError(f"Lost connection to engine: {e}") from e

    def readline(self, timeout: Optional[float] = None) -> Optional[str]:
        try:
            item = self._lines.get(timeout=timeout)
        except queue.Empty:
            return None
        if item is _EOF:
            # keep the marker around for any later reader
            self._lines.put(_EOF)
            raise EngineUnavailableError("Engine process closed its output")
        return str(item)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self.process.stdin is not None:
            try:
                self.process.stdin.close()
            except OSError:
                logger.debug("stdin of engine process already closed")
        try:
            self.process.wait(timeout=2)
        except subprocess.TimeoutExpired:
            logger.warning("Engine process did not exit, killing it")
            self.process.kill()


class InProcessTransport:
    """Serve the built-in UCIEngine through the same interface as an external process."""

    def __init__(self, engine: Optional[UCIEngine] = None) -> None:
        self.engine = engine or UCIEngine()
        self._lines: queue.Queue[str] = queue.Queue()
        self._closed = False

    def send(self, line: str) -> None:
        if self._closed or not self.engine.running:
            raise EngineUnavailableError("Engine has been shut down")
        for response in self.engine.handle(line):
            self._lines.put(response)

    def readline(self, timeout: Optional[float] = None) -> Optional[str]:
        try:
            return self._lines.get(timeout=timeout)
        except queue.Empty:
            return None

    def close(self) -> None:
        self._closed = True
