"""
Client for an external UCI engine.

Requests go through a single worker thread, so exactly one search is in flight at a time and
later requests queue up behind it. Every request carries an id that comes back on its response.

Before each search the client synchronises with `isready`/`readyok` and throws away anything the engine said earlier
(e.g. the late `bestmove` of a search that timed out), so a response can never be handed to the wrong request.
"""

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Optional, Self
from uuid import UUID, uuid4

from src.core.exceptions import EngineError, EngineTimeoutError
from src.engine import uci
from src.engine.transport import Transport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineRequest:
    fen: str
    depth: Optional[int] = None
    movetime_ms: Optional[int] = None
    request_id: UUID = field(default_factory=uuid4)


@dataclass(frozen=True)
class EngineResponse:
    request_id: UUID
    move: Optional[str]
    ponder: Optional[str] = None


class UCIEngineClient:
    def __init__(self, transport: Transport, timeout_s: float = 10.0) -> None:
        self.transport = transport
        self.timeout_s = timeout_s
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="uci-client")
        self._initialized = False
        self._closed = False

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # --- PUBLIC API (thread-safe: everything is funnelled through the worker thread) ---
    def start(self) -> None:
        """Run the `uci` / `isready` handshake now instead of on the first request."""
        self._executor.submit(self._ensure_initialized).result()

    def set_skill_level(self, level: int) -> Future[None]:
        return self._executor.submit(self._send_option, uci.skill_level_command(level))

    def new_game(self) -> Future[None]:
        return self._executor.submit(self._new_game)

    def request_best_move(
        self,
        fen: str,
        depth: Optional[int] = None,
        movetime_ms: Optional[int] = None,
    ) -> Future[EngineResponse]:
        """Queue a search. The future fails with an EngineError subclass when the engine does not deliver."""
        # validate now, so the caller gets the error instead of the future
        uci.go_command(depth=depth, movetime_ms=movetime_ms)
        request = EngineRequest(fen=fen, depth=depth, movetime_ms=movetime_ms)
        logger.debug("Queued request %s", request.request_id)
        return self._executor.submit(self._run_request, request)

    def best_move(
        self,
        fen: str,
        depth: Optional[int] = None,
        movetime_ms: Optional[int] = None,
    ) -> EngineResponse:
        """Blocking convenience wrapper around `request_best_move`"""
        return self.request_best_move(fen, depth, movetime_ms).result()

    def close(self) -> None:
        """Ask the engine to quit, wait for queued requests, release the transport."""
        if self._closed:
            return
        self._closed = True
        self._executor.submit(self._quit)
        self._executor.shutdown(wait=True)
        self.transport.close()

    # --- WORKER THREAD ---
    def _ensure_initialized(self) -> None:
        if self._initialized:
            return
        self.transport.send(uci.UCI)
        self._read_until(lambda line: line == uci.UCI_OK, "uciok")
        self._synchronize()
        self._initialized = True
        logger.info("Engine initialized")

    def _synchronize(self) -> None:
        """isready -> readyok. Lines received before `readyok` belong to earlier commands and are dropped."""
        self.transport.send(uci.IS_READY)
        self._read_until(lambda line: line == uci.READY_OK, "readyok")

    def _send_option(self, command: str) -> None:
        self._ensure_initialized()
        self.transport.send(command)

    def _new_game(self) -> None:
        self._ensure_initialized()
        self.transport.send(uci.NEW_GAME)
        self._synchronize()

    def _run_request(self, request: EngineRequest) -> EngineResponse:
        try:
            self._ensure_initialized()
            self._synchronize()
            self.transport.send(uci.position_command(request.fen))
            self.transport.send(
                uci.go_command(depth=request.depth, movetime_ms=request.movetime_ms)
            )
            line = self._read_until(uci.is_bestmove, "bestmove")
        except EngineTimeoutError:
            # make the engine give up; its late bestmove is dropped by the next `_synchronize`
            self.transport.send(uci.STOP)
            logger.error("Request %s timed out after %.1fs", request.request_id, self.timeout_s)
            raise
        except EngineError:
            logger.error("Request %s failed", request.request_id, exc_info=True)
            raise

        best = uci.parse_bestmove(line)
        assert best is not None  # `is_bestmove` matched
        logger.debug("Request %s answered with %s", request.request_id, best.move)
        return EngineResponse(request_id=request.request_id, move=best.move, ponder=best.ponder)

    def _quit(self) -> None:
        try:
            self.transport.send(uci.QUIT)
        except EngineError:
            logger.debug("Engine already gone when sending quit")

    def _read_until(self, is_expected: Callable[[str], bool], description: str) -> str:
        """Read lines until one satisfies `is_expected`, within the client timeout."""
        deadline = time.monotonic() + self.timeout_s
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise EngineTimeoutError(f"No {description} from engine within {self.timeout_s}s")
            line = self.transport.readline(timeout=remaining)
            if line is None:
                continue
            line = line.strip()
            if is_expected(line):
                return line
            if uci.is_bestmove(line):
                logger.debug("Dropping stale response: %s", line)
