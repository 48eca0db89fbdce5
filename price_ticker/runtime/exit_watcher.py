"""
Shutdown producers: an OS signal handler and a stdin listener thread.

Both only ever call into the shared CancellationToken; whichever fires first
determines the shutdown time, and a second request is a no-op.
"""

import os
import select
import signal
import sys
import threading
from typing import IO, Any, Optional, Sequence

from ..logging.config import get_shutdown_logger
from .cancellation import CancellationToken

logger = get_shutdown_logger(__name__)


class ExitWatcher:
    """
    Owns the two cancellation producers for one engine run.

    On POSIX the stdin listener waits on the file descriptor with select() and
    reads raw bytes, so it notices a cancellation requested elsewhere within
    poll_interval and never holds the buffered stdin lock. Streams without a
    file descriptor (and Windows consoles) fall back to a blocking readline()
    that only observes cancellation once another line arrives; stop() joins
    with a timeout and leaves such a thread behind as a daemon. The signal
    path is the one that always responds within a tick.
    """

    def __init__(
        self,
        token: CancellationToken,
        stdin: Optional[IO[str]] = None,
        quit_command: str = "q",
        signals: Sequence[str] = ("SIGINT", "SIGTERM"),
        keyboard_enabled: bool = True,
        poll_interval: float = 0.25
    ) -> None:
        self.token = token
        self.stdin = stdin
        self.quit_command = quit_command.strip().lower()
        self.signal_names = tuple(signals)
        self.keyboard_enabled = keyboard_enabled
        self.poll_interval = poll_interval

        self._previous_handlers: dict[int, Any] = {}
        self._listener: Optional[threading.Thread] = None

    def start(self) -> None:
        """Install signal handlers and start the stdin listener."""
        self.install_signal_handlers()
        if self.keyboard_enabled and self.stdin is not None:
            self.start_keyboard_listener()

    def stop(self, join_timeout: float = 1.0) -> None:
        """Restore signal handlers and join the listener for at most join_timeout seconds."""
        self.restore_signal_handlers()

        if self._listener is not None:
            self._listener.join(timeout=join_timeout)
            if self._listener.is_alive():
                logger.debug(
                    "Keyboard listener still blocked on input, leaving daemon thread",
                    join_timeout=join_timeout
                )

    def install_signal_handlers(self) -> None:
        """Route the configured signals to the cancellation token."""
        if threading.current_thread() is not threading.main_thread():
            logger.warning("Signal handlers can only be installed from the main thread, skipping")
            return

        for name in self.signal_names:
            signum = getattr(signal, name, None)
            if signum is None:
                logger.warning("Signal not available on this platform", signal=name)
                continue
            self._previous_handlers[signum] = signal.signal(signum, self._handle_signal)

    def restore_signal_handlers(self) -> None:
        for signum, handler in self._previous_handlers.items():
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)
        self._previous_handlers.clear()

    def _handle_signal(self, signum: int, frame: Any) -> None:
        # Runs between bytecodes of the main thread: flag write only.
        self.token.request_from_signal()

    def start_keyboard_listener(self) -> threading.Thread:
        """Start the daemon thread reading quit commands from stdin."""
        self._listener = threading.Thread(
            target=self._listen,
            name="KeyboardExitListener",
            daemon=True
        )
        self._listener.start()
        return self._listener

    @property
    def listener_alive(self) -> bool:
        return self._listener is not None and self._listener.is_alive()

    def _listen(self) -> None:
        fd = self._pollable_fd()
        if fd is None:
            self._listen_blocking()
        else:
            self._listen_fd(fd)

    def _pollable_fd(self) -> Optional[int]:
        if sys.platform == "win32":
            return None
        try:
            return self.stdin.fileno()
        except (OSError, ValueError, AttributeError):
            return None

    def _listen_fd(self, fd: int) -> None:
        """Poll the descriptor so cancellation from elsewhere ends the thread promptly."""
        pending = b""
        while not self.token.is_requested():
            try:
                ready, _, _ = select.select([fd], [], [], self.poll_interval)
                if not ready:
                    continue
                chunk = os.read(fd, 1024)
            except (OSError, ValueError) as e:
                # Closed or unreadable stdin; the signal path remains.
                logger.debug("Keyboard listener stopped, stdin unreadable", error=str(e))
                return

            if not chunk:
                if pending:
                    self._handle_line(pending.decode("utf-8", errors="replace"))
                logger.debug("Keyboard listener stopped, stdin closed")
                return

            *lines, pending = (pending + chunk).split(b"\n")
            for raw in lines:
                if self._handle_line(raw.decode("utf-8", errors="replace")):
                    return

    def _listen_blocking(self) -> None:
        """Read lines until a quit command, EOF, a read error or cancellation."""
        while not self.token.is_requested():
            try:
                line = self.stdin.readline()
            except (OSError, ValueError) as e:
                logger.debug("Keyboard listener stopped, stdin unreadable", error=str(e))
                return

            if not line:
                logger.debug("Keyboard listener stopped, stdin closed")
                return

            if self._handle_line(line):
                return

    def _handle_line(self, line: str) -> bool:
        """Request cancellation if line is the quit command; True when it was."""
        if line.strip().lower() != self.quit_command:
            return False
        logger.info("Quit command received", command=line.strip())
        self.token.request()
        return True
