"""Selection to document conversion.

This module ties the pipeline together: the selection is resolved into files, the
files are rendered into one document, and the document is returned together with
the number of files it contains. Placing the document on the clipboard (or
anywhere else) is left to the caller.
"""

import threading
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from clipcat.config import Settings
from clipcat.content_renderer import ContentRenderer
from clipcat.exceptions import NoFilesAfterFilteringError
from clipcat.file_tree.selection_tree import SelectionTree
from clipcat.selection_resolver import ResolvedFile, resolve_selection
from clipcat.types import PathType


@dataclass(frozen=True)
class CopyResult:
    """The finished document and what went into it.

    Attributes:
        document: The rendered text.
        files: The resolved files, in document order.
    """

    document: str
    files: List[ResolvedFile] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        return len(self.files)


def resolve_files(
    selection: Sequence[PathType], settings: Settings, cancel_event: Optional[threading.Event] = None
) -> List[ResolvedFile]:
    """Resolve a selection, refusing selections that produce no files.

    Raises:
        EmptySelectionError: If nothing was selected.
        NoFilesAfterFilteringError: If every candidate was excluded or the selected
            folders were empty.
        StatFailureError: If a selected entry cannot be inspected.
        OperationCancelledError: If ``cancel_event`` is set during traversal.
    """
    files = resolve_selection(selection, settings.exclude_patterns, cancel_event=cancel_event)
    if not files:
        raise NoFilesAfterFilteringError()
    return files


def build_document(
    selection: Sequence[PathType],
    settings: Optional[Settings] = None,
    cancel_event: Optional[threading.Event] = None,
) -> CopyResult:
    """Build the document for a selection of files and folders.

    The operation is all-or-nothing: any failure aborts it and no partial document
    is returned.

    Args:
        selection: Selected files and directories, in user order.
        settings: Invocation settings. Defaults to Settings() (no user patterns, no
            workspace roots).
        cancel_event: Event that cancels the operation when set.

    Returns:
        CopyResult holding the document and the files it contains.

    Raises:
        EmptySelectionError: If nothing was selected.
        NoFilesAfterFilteringError: If the selection resolves to no files.
        StatFailureError: If a selected entry cannot be inspected.
        ReadFailureError: If a file cannot be read as text.
        OperationCancelledError: If ``cancel_event`` is set before completion.

    Example:
        >>> result = build_document(["/proj/src"], Settings(workspace_roots=(Path("/proj"),)))  # doctest: +SKIP
        >>> result.document  # doctest: +SKIP
        '// File: src/a.ts\\nhello'
    """
    if settings is None:
        settings = Settings()

    files = resolve_files(selection, settings, cancel_event)
    renderer = ContentRenderer(settings.workspace_roots, encoding=settings.encoding, cancel_event=cancel_event)
    document = renderer.render([resolved.path for resolved in files])
    return CopyResult(document=document, files=files)


def preview_selection(
    selection: Sequence[PathType], settings: Optional[Settings] = None, cancel_event: Optional[threading.Event] = None
) -> SelectionTree:
    """Resolve a selection and return a tree of the files that would be copied.

    Raises:
        The same resolution errors as build_document.
    """
    return SelectionTree(resolve_files(selection, settings or Settings(), cancel_event))
