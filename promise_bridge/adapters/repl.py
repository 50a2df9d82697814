"""Interactive process session driven by the polling waiter.

``ReplSession`` keeps a line-oriented child process alive, writes requests to
its stdin and waits for the reply with :class:`WaitSession`, so a reply wait
honours the caller's governing cancellation flag, its deadline and a user
interrupt.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from ..base.dispatch import Dispatcher
from ..base.process import PopenProcess
from ..base.waiter import Governing, WaitReport, WaitSession


class ReplSession:
    """Request/reply conversation with a long-running process."""

    def __init__(
        self,
        argv: Sequence[str],
        *,
        cwd: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
        dispatcher: Optional[Dispatcher] = None,
    ) -> None:
        self.process = PopenProcess(argv, cwd=cwd, env=env, dispatcher=dispatcher)

    def send(self, text: str) -> None:
        self.process.send(text if text.endswith("\n") else text + "\n")

    def read_reply(
        self,
        *,
        governing: Governing,
        timeout: Optional[float] = None,
        exclusive: bool = True,
        poll_interval: Optional[float] = None,
    ) -> WaitReport:
        session = WaitSession(
            self.process,
            governing=governing,
            timeout=timeout,
            exclusive=exclusive,
            poll_interval=poll_interval,
            label="repl",
        )
        return session.run()

    def ask(self, text: str, *, governing: Governing, timeout: Optional[float] = None) -> Optional[str]:
        """Send ``text`` and return the reply, or ``None`` without one."""
        self.send(text)
        return self.read_reply(governing=governing, timeout=timeout).data

    def close(self) -> Optional[int]:
        return self.process.terminate()

    def __enter__(self) -> "ReplSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


__all__ = ["ReplSession"]
