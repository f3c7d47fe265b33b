"""Signal handling utilities for clipcat CLI.

This module provides signal handlers for managing interruptions. A SIGINT does not
kill the process outright: it sets an event that the traversal and rendering
loops check, so a long operation stops at the next directory or file and nothing
is written.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Optional

# SIGPIPE does not exist on Windows
_SIGPIPE = getattr(signal, "SIGPIPE", None)


class SignalHandler:
    """Handles system signals for graceful interruption management.

    Attributes:
        sigpipe_received: Event that is set when a SIGPIPE signal is received.
        sigint_received: Event that is set when a SIGINT signal is received. It
            doubles as the cancel event of the running operation.
        original_sigpipe_handler: Original SIGPIPE signal handler, if the platform has one.
        original_sigint_handler: Original SIGINT signal handler.
    """

    def __init__(self) -> None:
        self.sigpipe_received = Event()
        self.sigint_received = Event()
        self.original_sigpipe_handler = signal.getsignal(_SIGPIPE) if _SIGPIPE is not None else None
        self.original_sigint_handler = signal.getsignal(signal.SIGINT)

    @property
    def cancel_event(self) -> Event:
        return self.sigint_received

    def handle_sigpipe(self, signum: int, frame: Optional[FrameType]) -> None:
        """Handle SIGPIPE signal.

        Args:
            signum: The signal number.
            frame: The current stack frame.
        """
        self.sigpipe_received.set()
        if _SIGPIPE is not None:
            signal.signal(_SIGPIPE, self.original_sigpipe_handler)

    def handle_sigint(self, signum: int, frame: Optional[FrameType]) -> None:
        """Handle SIGINT signal.

        The original handler is restored, so a second Ctrl+C interrupts immediately.

        Args:
            signum: The signal number.
            frame: The current stack frame.
        """
        self.sigint_received.set()
        signal.signal(signal.SIGINT, self.original_sigint_handler)


# Create a singleton instance for the application
signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Configure signal handlers for SIGPIPE and SIGINT."""
    if _SIGPIPE is not None:
        signal.signal(_SIGPIPE, signal_handler.handle_sigpipe)
    signal.signal(signal.SIGINT, signal_handler.handle_sigint)


def cleanup() -> None:
    """Cleanup function registered with atexit.

    Redirects stdout to the null device if we received SIGPIPE to prevent additional
    error messages during shutdown.
    """
    if signal_handler.sigpipe_received.is_set():
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


# Register the cleanup function
atexit.register(cleanup)
