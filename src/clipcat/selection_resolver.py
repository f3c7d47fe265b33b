"""Resolution of a mixed file/folder selection into a flat file list.

Each selected entry is resolved against its own root: a selected directory is its
own root and a selected file's root is its parent directory. Directories are
expanded through the TreeExpander, files are checked against the exclusion rules
directly, and the combined result is deduplicated by absolute path.
"""

import os
import stat
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from clipcat.exceptions import EmptySelectionError, StatFailureError
from clipcat.exclusion_rules.pattern_rules import build_exclusion_rules, is_excluded
from clipcat.file_tree.tree_expander import TreeExpander
from clipcat.types import EntryType, PathType


@dataclass(frozen=True)
class ResolvedFile:
    """A file selected for copying, together with the root it was resolved from.

    Attributes:
        path: Absolute path to the file.
        root: Directory exclusion matching was anchored at.

    Example:
        >>> from pathlib import Path
        >>> resolved = ResolvedFile(Path("/proj/src/app/main.py"), Path("/proj/src"))
        >>> resolved.relative_path.as_posix()
        'app/main.py'
    """

    path: Path
    root: Path

    @property
    def relative_path(self) -> Path:
        return self.path.relative_to(self.root)


def _absolute(path: PathType) -> Path:
    # Normalizes "..", without resolving symlinks
    return Path(os.path.abspath(path))


def _entry_type(path: Path) -> EntryType:
    """Inspect a selected entry.

    Raises:
        StatFailureError: If the entry does not exist or cannot be accessed.
    """
    try:
        stat_info = os.stat(path)
    except OSError as e:
        raise StatFailureError(path, e.strerror or str(e)) from e
    if stat.S_ISDIR(stat_info.st_mode):
        return EntryType.DIRECTORY
    if stat.S_ISREG(stat_info.st_mode):
        return EntryType.FILE
    return EntryType.SPECIAL


def resolve_selection(
    selection: Sequence[PathType],
    configured_excludes: Optional[Iterable[str]] = None,
    cancel_event: Optional[threading.Event] = None,
) -> List[ResolvedFile]:
    """Resolve a selection of files and folders into a deduplicated file list.

    Entries are processed in input order. The result keeps the first occurrence of
    every absolute path, so a file selected both directly and through its folder
    appears once, at the position it was first reached.

    Args:
        selection: Selected files and directories, in user order.
        configured_excludes: User-configured exclusion patterns. The built-in
            patterns always apply in addition.
        cancel_event: Event that cancels a long traversal when set.

    Returns:
        The resolved files. Empty if everything was excluded.

    Raises:
        EmptySelectionError: If the selection is empty.
        StatFailureError: If a selected entry (or a directory beneath one) cannot be
            inspected, or a selected entry is neither a regular file nor a directory.
        OperationCancelledError: If ``cancel_event`` is set during traversal.
    """
    if not selection:
        raise EmptySelectionError()

    rules = build_exclusion_rules(configured_excludes)
    expander = TreeExpander(rules, cancel_event=cancel_event)

    resolved: Dict[Path, ResolvedFile] = {}
    for entry in selection:
        path = _absolute(entry)

        entry_type = _entry_type(path)
        if entry_type is EntryType.SPECIAL:
            raise StatFailureError(path, "not a regular file or directory")
        if entry_type is EntryType.DIRECTORY:
            for file_path in expander.expand(path, root=path):
                resolved.setdefault(file_path, ResolvedFile(file_path, path))
        else:
            root = path.parent
            if not is_excluded(path, rules, root):
                resolved.setdefault(path, ResolvedFile(path, root))

    return list(resolved.values())


def resolve(selection: Sequence[PathType], configured_excludes: Optional[Iterable[str]] = None) -> List[Path]:
    """Resolve a selection into a deduplicated list of absolute file paths.

    Example:
        >>> resolve(["/proj/src"], ["**/dist/**"])  # doctest: +SKIP
        [PosixPath('/proj/src/a.ts')]
    """
    return [resolved.path for resolved in resolve_selection(selection, configured_excludes)]
