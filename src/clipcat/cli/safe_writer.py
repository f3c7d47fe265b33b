"""Safe output writing utilities for clipcat CLI.

This module provides a writer for file and stdout output that turns a closed
pipe into a BrokenPipeError the CLI can report with the conventional exit code.
"""

import errno
import os
import types
from pathlib import Path
from typing import Optional, Type, Union

from clipcat.cli.signal_handler import signal_handler


class SafeWriter:
    """Signal-aware writer for a file path or an already open file descriptor.

    Attributes:
        file: Either a file path or file descriptor for output.
        fd: The file descriptor being written to.

    Example:
        >>> import sys
        >>> with SafeWriter(sys.stdout.fileno()) as writer:  # doctest: +SKIP
        ...     writer.write("// File: a.ts\\nhello")
    """

    def __init__(self, file: Union[int, str, Path], encoding: str = "utf-8"):
        """Initialize the safe writer.

        Args:
            file: Either a file descriptor (int) or a path to create or truncate.
            encoding: Encoding used for the written text. Defaults to "utf-8".

        Raises:
            TypeError: If file is neither an int nor a path.
        """
        self.file = file
        self.encoding = encoding
        self._closed = False
        self._owned_fd = False

        if isinstance(file, int):
            self.fd = file
        elif isinstance(file, (str, os.PathLike)):
            self.fd = os.open(Path(file), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
            self._owned_fd = True
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(file).__name__}")

    def write(self, data: str) -> None:
        """Write all of ``data``, handling partial writes.

        Raises:
            BrokenPipeError: If SIGPIPE was received or the pipe is broken.
            OSError: If an I/O error occurs during writing.
            ValueError: If the writer is closed.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")

        if signal_handler.sigpipe_received.is_set():
            raise BrokenPipeError()

        payload = memoryview(data.encode(self.encoding))
        try:
            while payload:
                written = os.write(self.fd, payload)
                payload = payload[written:]
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError() from e
            raise

    def close(self) -> None:
        """Close the file descriptor if this writer opened it."""
        if self._closed:
            return
        self._closed = True
        if self._owned_fd:
            try:
                os.close(self.fd)
            except OSError as e:
                if e.errno != errno.EPIPE:
                    raise

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        try:
            self.close()
        except OSError:
            # An exception from the with block takes priority
            if exc_type is None:
                raise
