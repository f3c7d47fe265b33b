"""Clipboard output for rendered documents."""

import pyperclip

from clipcat.exceptions import ClipboardError


class ClipboardSink:
    """Places a finished document on the system clipboard.

    The document is handed over in a single call once it is complete; nothing is
    written while the selection is still being processed.

    Example:
        >>> ClipboardSink().write("// File: a.ts\\nhello")  # doctest: +SKIP
    """

    def write(self, document: str) -> None:
        """Copy the document to the clipboard.

        Args:
            document: The text to copy.

        Raises:
            ClipboardError: If no clipboard mechanism is available or copying fails.
        """
        try:
            pyperclip.copy(document)
        except pyperclip.PyperclipException as e:
            raise ClipboardError(f"Failed to copy content to clipboard: {e}") from e
