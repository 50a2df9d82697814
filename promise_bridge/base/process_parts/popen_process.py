"""Subprocess-backed external process handle.

Purpose
    Give the polling waiter a live process to wait on. A daemon reader thread
    moves output lines into a queue; ``wait_for_output`` takes them out with a
    bound so the waiter keeps control of its own deadlines.

External Dependencies
    * Child processes launched via :mod:`subprocess` with ``shell=False``.

Scheduling
    Non-exclusive waits pump the attached ``Dispatcher`` between short queue
    reads, so callbacks of other operations run while this one waits.
    Exclusive waits only read this process's queue.

Liveness
    ``is_live`` stays true after the child exits until the reader thread has
    finished and all captured lines were handed out, so output printed right
    before exit is never lost to a liveness check.

Failure Semantics
    Launch errors (missing executable, permissions) propagate from the
    constructor. Writing to a process that already exited raises
    ``BridgeError`` with ``ErrorCode.UNAVAILABLE``.
"""

from __future__ import annotations

import logging
import queue
import subprocess  # nosec B404 - argv is supplied by the caller, never a shell string
import threading
import time
from typing import IO, List, Mapping, Optional, Sequence

from ..dispatch import Dispatcher
from ..errors import BridgeError, ErrorCode
from ..logging import LogContext, get_logger, log_event

# granularity of dispatcher pumping inside a non-exclusive wait
_PUMP_SLICE_SECONDS = 0.05
_EOF = object()

_logger = get_logger("promise_bridge.process")


class PopenProcess:
    """Line-oriented handle around :class:`subprocess.Popen`."""

    def __init__(
        self,
        argv: Sequence[str],
        *,
        cwd: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
        dispatcher: Optional[Dispatcher] = None,
        merge_stderr: bool = True,
    ) -> None:
        self.argv = list(argv)
        self._dispatcher = dispatcher
        self._queue: "queue.Queue[object]" = queue.Queue()
        # lines queued by the reader and not yet handed to a caller
        self._unread = 0
        self._unread_lock = threading.Lock()
        self._proc = subprocess.Popen(  # nosec B603 - fixed argv list; shell=False
            self.argv,
            cwd=cwd,
            env=dict(env) if env is not None else None,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT if merge_stderr else subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            bufsize=1,
        )
        self._ctx = LogContext(operation="process", label=self.argv[0], pid=self._proc.pid)
        self._reader = threading.Thread(
            target=self._pump_stdout,
            args=(self._proc.stdout,),
            name=f"popen-reader-{self._proc.pid}",
            daemon=True,
        )
        self._reader.start()
        log_event(_logger, "process.start", self._ctx, level=logging.DEBUG, argv=self.argv)

    # properties ----------------------------------------------------------------
    @property
    def pid(self) -> int:
        return self._proc.pid

    @property
    def returncode(self) -> Optional[int]:
        return self._proc.poll()

    # ExternalProcess -----------------------------------------------------------
    def is_live(self) -> bool:
        """Whether more output can still arrive.

        A process that already exited stays live until the reader thread has
        finished and every line it captured has been returned.
        """
        if self._proc.poll() is None or self._reader.is_alive():
            return True
        with self._unread_lock:
            return self._unread > 0

    def wait_for_output(self, bound: float, exclusive: bool = False) -> Optional[str]:
        """Return output that arrives within ``bound`` seconds, else ``None``.

        Once the first line arrives, every line already queued is returned
        with it.
        """
        deadline = time.monotonic() + max(0.0, bound)
        first = self._take_first(deadline, exclusive)
        if first is None:
            return None
        return first + self.read_pending()

    def _take_first(self, deadline: float, exclusive: bool) -> Optional[str]:
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return self._take_nowait()
            if exclusive or self._dispatcher is None:
                slice_ = remaining
            else:
                self._dispatcher.run_pending(0.0)
                slice_ = min(_PUMP_SLICE_SECONDS, remaining)
            try:
                item = self._queue.get(timeout=slice_)
            except queue.Empty:
                continue
            return self._claim(item)

    def _take_nowait(self) -> Optional[str]:
        try:
            item = self._queue.get_nowait()
        except queue.Empty:
            return None
        return self._claim(item)

    def _claim(self, item: object) -> Optional[str]:
        if item is _EOF:
            return None
        with self._unread_lock:
            self._unread -= 1
        return item  # type: ignore[return-value]

    # extras ------------------------------------------------------------------
    def read_pending(self) -> str:
        """Drain and return output already received, without blocking."""
        chunks: List[str] = []
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                break
            line = self._claim(item)
            if line is not None:
                chunks.append(line)
        return "".join(chunks)

    def send(self, text: str) -> None:
        """Write ``text`` to the process's stdin and flush it."""
        stdin = self._proc.stdin
        if stdin is None or self._proc.poll() is not None:
            raise BridgeError(
                code=ErrorCode.UNAVAILABLE,
                message=f"process {self.pid} is not accepting input",
                operation="process.send",
            )
        try:
            stdin.write(text)
            stdin.flush()
        except (BrokenPipeError, ValueError) as exc:
            raise BridgeError(
                code=ErrorCode.UNAVAILABLE,
                message=f"process {self.pid} closed its input",
                operation="process.send",
                raw=exc,
            ) from exc

    def terminate(self, grace: float = 2.0) -> Optional[int]:
        """Terminate the process, killing it after ``grace`` seconds.

        Output captured before exit stays readable.
        """
        if self._proc.poll() is None:
            self._proc.terminate()
            try:
                self._proc.wait(timeout=grace)
            except subprocess.TimeoutExpired:
                self._proc.kill()
                self._proc.wait()
        self._reader.join(timeout=grace)
        if self._proc.stdin is not None and not self._proc.stdin.closed:
            try:
                self._proc.stdin.close()
            except BrokenPipeError:
                pass  # child already gone; nothing left to flush
        log_event(_logger, "process.exit", self._ctx, level=logging.DEBUG, returncode=self._proc.returncode)
        return self._proc.returncode

    def _pump_stdout(self, stream: Optional[IO[str]]) -> None:
        if stream is None:
            self._queue.put(_EOF)
            return
        try:
            for line in iter(stream.readline, ""):
                with self._unread_lock:
                    self._unread += 1
                self._queue.put(line)
        finally:
            self._queue.put(_EOF)
            stream.close()

    def __enter__(self) -> "PopenProcess":
        return self

    def __exit__(self, *exc_info) -> None:
        self.terminate()


__all__ = ["PopenProcess"]
