"""Rendering of resolved files into a single text document.

Each file becomes a labeled block: the full text for text files, or a one-line
placeholder for binary files. Blocks are joined with a blank line between them, in
the order the files were resolved.
"""

import os
import stat
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from clipcat.exceptions import OperationCancelledError, ReadFailureError
from clipcat.file_tree.binary_detector import is_binary_file
from clipcat.types import PathType

COMMENT_MARKER = "//"
BLOCK_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class RenderedBlock:
    """The rendered form of one file.

    Attributes:
        label: Workspace-relative or absolute path shown in the block header.
        content: The file's text, or None for a binary placeholder.

    Example:
        >>> RenderedBlock("a.ts", "hello").to_text()
        '// File: a.ts\\nhello'
        >>> RenderedBlock("/d/logo.png", None).to_text()
        '// Binary file: /d/logo.png'
    """

    label: str
    content: Optional[str] = None

    @property
    def is_binary(self) -> bool:
        return self.content is None

    def to_text(self, comment_marker: str = COMMENT_MARKER) -> str:
        if self.content is None:
            return f"{comment_marker} Binary file: {self.label}"
        return f"{comment_marker} File: {self.label}\n{self.content}"


class ContentRenderer:
    """Renders files into labeled text blocks and joins them into one document.

    Labels are computed against the configured workspace roots: a file under a
    workspace root is labeled with its path relative to the deepest such root, any
    other file with its absolute path. Labels use the native path separator.

    Text files are decoded strictly. A file that cannot be read or decoded aborts
    rendering with a ReadFailureError naming the file, since a partial document
    would silently drop part of the user's selection.

    Attributes:
        workspace_roots (List[Path]): Absolute workspace roots used for labeling.
        encoding (str): Encoding used to read text files.
        comment_marker (str): Token that starts every block header.
        cancel_event (Optional[threading.Event]): When set, rendering stops with
            OperationCancelledError.

    Example:
        >>> renderer = ContentRenderer(workspace_roots=["/proj"])
        >>> renderer.label_for("/proj/src/a.ts") == os.path.join("src", "a.ts")
        True
        >>> renderer.label_for("/elsewhere/b.ts") == os.path.abspath("/elsewhere/b.ts")
        True
    """

    def __init__(
        self,
        workspace_roots: Iterable[PathType] = (),
        encoding: str = "utf-8",
        comment_marker: str = COMMENT_MARKER,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        """Initialize the ContentRenderer.

        Args:
            workspace_roots: Directories labels are made relative to. Defaults to none.
            encoding: The encoding to use when reading files. Defaults to "utf-8".
            comment_marker: Token that starts every block header. Defaults to "//".
            cancel_event: Event checked before every file is read. Defaults to None.

        Raises:
            LookupError: If the specified encoding is not available.
        """
        # Validate encoding early to fail fast
        try:
            "test".encode(encoding).decode(encoding)
        except LookupError as e:
            raise LookupError(f"Encoding '{encoding}' is not available") from e

        # Deepest root first so nested workspaces win
        self.workspace_roots = sorted(
            {Path(os.path.abspath(root)) for root in workspace_roots}, key=lambda p: len(p.parts), reverse=True
        )
        self.encoding = encoding
        self.comment_marker = comment_marker
        self.cancel_event = cancel_event

    def label_for(self, file_path: PathType) -> str:
        """Compute the label shown for a file.

        Args:
            file_path: Path to the file.

        Returns:
            The path relative to the deepest workspace root containing it, without a
            leading separator, or the absolute path if no workspace root contains it.
        """
        path = Path(os.path.abspath(file_path))
        for root in self.workspace_roots:
            try:
                relative = path.relative_to(root)
            except ValueError:
                continue
            if relative.parts:
                return str(relative)
        return str(path)

    def render_block(self, file_path: PathType) -> RenderedBlock:
        """Render a single file.

        Args:
            file_path: Path to the file.

        Returns:
            A placeholder block for binary files, or a block holding the full text.

        Raises:
            ReadFailureError: If the file cannot be read or decoded.
        """
        label = self.label_for(file_path)
        if is_binary_file(file_path):
            return RenderedBlock(label)

        try:
            if not stat.S_ISREG(os.stat(file_path).st_mode):
                raise ReadFailureError(file_path, "not a regular file")
            with open(file_path, "r", encoding=self.encoding, errors="strict", newline="") as file:
                content = file.read()
        except UnicodeDecodeError as e:
            raise ReadFailureError(file_path, f"cannot decode as {self.encoding}: {e.reason}") from e
        except OSError as e:
            raise ReadFailureError(file_path, e.strerror or str(e)) from e

        return RenderedBlock(label, content)

    def render_blocks(self, file_paths: Sequence[PathType]) -> List[RenderedBlock]:
        """Render every file, preserving order.

        Raises:
            ReadFailureError: If any file cannot be read or decoded.
            OperationCancelledError: If the cancel event is set during rendering.
        """
        blocks = []
        for file_path in file_paths:
            if self.cancel_event is not None and self.cancel_event.is_set():
                raise OperationCancelledError()
            blocks.append(self.render_block(file_path))
        return blocks

    def render(self, file_paths: Sequence[PathType]) -> str:
        """Render files into one document.

        Args:
            file_paths: Files to render, in output order.

        Returns:
            The blocks' text joined with exactly one blank line between blocks.

        Raises:
            ReadFailureError: If any file cannot be read or decoded.
            OperationCancelledError: If the cancel event is set during rendering.
        """
        blocks = self.render_blocks(file_paths)
        return BLOCK_SEPARATOR.join(block.to_text(self.comment_marker) for block in blocks)


def render_document(file_paths: Sequence[PathType], workspace_roots: Iterable[PathType] = ()) -> str:
    """Render files into one document with the default settings.

    Example:
        >>> render_document(["/d/logo.png"])
        '// Binary file: /d/logo.png'
    """
    return ContentRenderer(workspace_roots).render(file_paths)
