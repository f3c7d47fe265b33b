from typing import Optional

from clipcat.types import PathType


class ClipcatError(Exception):
    """Base class for all errors raised while building a clipboard document.

    Every error is surfaced to the user as a single human-readable message, so
    subclasses only need to provide a meaningful ``str()``.
    """


class EmptySelectionError(ClipcatError):
    """
    Exception raised when no files or folders were selected.

    Example:
        >>> str(EmptySelectionError())
        'No files or folders selected.'
    """

    def __init__(self, message: str = "No files or folders selected.") -> None:
        super().__init__(message)


class NoFilesAfterFilteringError(ClipcatError):
    """
    Exception raised when the selection resolves to no files at all.

    This happens when every candidate was excluded or the selected folders were
    empty.

    Example:
        >>> str(NoFilesAfterFilteringError())
        'No files found in the selected directories.'
    """

    def __init__(self, message: str = "No files found in the selected directories.") -> None:
        super().__init__(message)


class StatFailureError(ClipcatError):
    """
    Exception raised when a selected entry cannot be inspected.

    The entry may be missing, or access to it may have been denied. The whole
    operation is aborted rather than silently skipping the entry.

    Attributes:
        path (str): Path of the entry that could not be inspected.
        reason (Optional[str]): Description of the underlying OS error, if any.

    Example:
        >>> error = StatFailureError("/missing/file.txt", "No such file or directory")
        >>> str(error)
        'Cannot access /missing/file.txt: No such file or directory'
        >>> error.path
        '/missing/file.txt'
    """

    def __init__(self, path: PathType, reason: Optional[str] = None) -> None:
        """
        Initialize the exception with the offending path.

        Args:
            path: Path of the entry that could not be inspected.
            reason: Optional description of the underlying failure.
        """
        self.path = str(path)
        self.reason = reason
        message = f"Cannot access {self.path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ReadFailureError(ClipcatError):
    """
    Exception raised when a file cannot be read as text.

    Causes include permission errors, invalid encodings and files deleted while
    the document was being assembled.

    Attributes:
        path (str): Path of the file that could not be read.
        reason (Optional[str]): Description of the underlying failure, if any.

    Example:
        >>> str(ReadFailureError("/data/notes.txt", "invalid utf-8"))
        'Failed to read /data/notes.txt: invalid utf-8'
    """

    def __init__(self, path: PathType, reason: Optional[str] = None) -> None:
        self.path = str(path)
        self.reason = reason
        message = f"Failed to read {self.path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ConfigError(ClipcatError):
    """
    Exception raised when a configuration file cannot be read or is malformed.

    Attributes:
        path (str): Path of the offending configuration file.

    Example:
        >>> str(ConfigError("clipcat.toml", "'exclude' must be a list of strings"))
        "Invalid configuration in clipcat.toml: 'exclude' must be a list of strings"
    """

    def __init__(self, path: PathType, reason: str) -> None:
        self.path = str(path)
        super().__init__(f"Invalid configuration in {self.path}: {reason}")


class ClipboardError(ClipcatError):
    """Exception raised when the clipboard backend is unavailable or fails."""


class OperationCancelledError(ClipcatError):
    """
    Exception raised when a running operation is cancelled by the user.

    No output is committed before the whole document is assembled, so
    cancelling simply discards the work in flight.

    Example:
        >>> str(OperationCancelledError())
        'Operation cancelled.'
    """

    def __init__(self, message: str = "Operation cancelled.") -> None:
        super().__init__(message)


class TokenizerNotAvailableError(ClipcatError):
    """
    Exception raised when attempting to use token counting functionality without the required tokenizer package.

    This exception is raised when the `tiktoken` package is not installed but token counting
    functionality is requested. The tiktoken package is an optional dependency that must be
    explicitly installed using the 'token_counting' extra.

    Attributes:
        message (str): Detailed error message including installation instructions.

    Example:
        >>> error = TokenizerNotAvailableError()
        >>> str(error).startswith('Tokenizer (tiktoken) is not installed')
        True
    """

    def __init__(self, message: str = "Tokenizer (tiktoken) is not installed.") -> None:
        self.message = (
            f"{message} To enable token counting, install clipcat with the 'token_counting' "
            "extra: 'pip install clipcat[token_counting]'."
        )
        super().__init__(self.message)


class TokenizationError(ClipcatError):
    """
    Exception raised when token counting fails during execution.

    Example:
        >>> error = TokenizationError("Failed to tokenize: invalid input")
        >>> str(error)
        'Failed to tokenize: invalid input'
    """

    pass
