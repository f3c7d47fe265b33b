"""Directory expansion with exclusion-rule pruning.

This module provides the TreeExpander class, which walks a directory and collects
the paths of every file that survives the configured exclusion rules. Excluded
directories are pruned before they are listed, so their contents are never read.
"""

import os
import threading
from pathlib import Path
from typing import List, Optional, Set, Tuple

from clipcat.exceptions import OperationCancelledError, StatFailureError
from clipcat.exclusion_rules.base_rules import BaseExclusionRules
from clipcat.exclusion_rules.pattern_rules import is_excluded
from clipcat.types import PathType

DEFAULT_MAX_DEPTH = 256


class TreeExpander:
    """Expands directories into the list of eligible files beneath them.

    Traversal uses an explicit work-list instead of recursion, so stack depth stays
    bounded on deep trees. Entries are visited depth first in sorted name order,
    which makes the output deterministic for a given filesystem state.

    Symbolic Link Behavior:
        Symbolic links to directories are not followed and are skipped. Symbolic
        links to files are returned like regular files. A directory reached twice
        (same device and inode) is only walked once.

    Special Files:
        FIFOs, sockets and device files are skipped, since opening them can block.

    Attributes:
        exclusion_rules (Optional[BaseExclusionRules]): Rules for pruning entries.
        cancel_event (Optional[threading.Event]): When set, traversal stops with
            OperationCancelledError.
        max_depth (int): Maximum nesting below the start directory. A deeper
            directory aborts the expansion with StatFailureError.
        listdir_calls (int): Number of directory listings performed so far.

    Example:
        >>> from clipcat.exclusion_rules import build_exclusion_rules
        >>> expander = TreeExpander(build_exclusion_rules())  # doctest: +SKIP
        >>> expander.expand("src", root="src")  # doctest: +SKIP
        [PosixPath('src/main.py'), PosixPath('src/utils/helpers.py')]
    """

    def __init__(
        self,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        cancel_event: Optional[threading.Event] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        """Initialize a TreeExpander.

        Args:
            exclusion_rules: Rules for excluding files and directories. Defaults to None.
            cancel_event: Event checked before every directory listing. Defaults to None.
            max_depth: Maximum directory nesting allowed. Defaults to 256.

        Raises:
            ValueError: If max_depth is negative.
        """
        if max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {max_depth}")

        self.exclusion_rules = exclusion_rules
        self.cancel_event = cancel_event
        self.max_depth = max_depth
        self.listdir_calls = 0

    def expand(self, directory: PathType, root: Optional[PathType] = None) -> List[Path]:
        """Collect every non-excluded file under a directory.

        Args:
            directory: Directory to walk.
            root: Directory exclusion matching is anchored at. Defaults to ``directory``.

        Returns:
            Paths of the eligible files, in depth-first sorted order.

        Raises:
            StatFailureError: If a directory cannot be listed, or lies deeper than
                ``max_depth``.
            OperationCancelledError: If the cancel event is set during traversal.
        """
        start = Path(directory)
        root_path = Path(root) if root is not None else start

        files: List[Path] = []
        visited: Set[Tuple[int, int]] = set()
        # (path, depth, is_dir), popped in the order a recursive walk would visit them
        stack: List[Tuple[Path, int, bool]] = [(start, 0, True)]

        while stack:
            path, depth, is_dir = stack.pop()
            if not is_dir:
                files.append(path)
                continue

            if depth > self.max_depth:
                raise StatFailureError(path, f"maximum directory depth of {self.max_depth} exceeded")

            identity = self._directory_identity(path)
            if identity in visited:
                continue
            visited.add(identity)

            children = self._list_directory(path, root_path)
            for child_path, child_is_dir in reversed(children):
                stack.append((child_path, depth + 1, child_is_dir))

        return files

    def _directory_identity(self, path: Path) -> Tuple[int, int]:
        try:
            stat_info = os.stat(path)
        except OSError as e:
            raise StatFailureError(path, e.strerror or str(e)) from e
        return (stat_info.st_dev, stat_info.st_ino)

    def _list_directory(self, directory: Path, root: Path) -> List[Tuple[Path, bool]]:
        """List one directory, dropping excluded entries and directory symlinks.

        Args:
            directory: Directory to list.
            root: Directory exclusion matching is anchored at.

        Returns:
            Pairs of (path, is_dir) for the surviving entries, sorted by name.
        """
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise OperationCancelledError()

        self.listdir_calls += 1
        entries: List[Tuple[Path, bool]] = []
        try:
            with os.scandir(directory) as it:
                for entry in it:
                    is_dir = entry.is_dir(follow_symlinks=False)
                    # Directory symlinks, FIFOs, sockets, devices and dangling links fall through here
                    if not is_dir and not entry.is_file():
                        continue
                    entry_path = directory / entry.name
                    if self.exclusion_rules is not None and is_excluded(
                        entry_path, self.exclusion_rules, root, is_dir=is_dir
                    ):
                        continue
                    entries.append((entry_path, is_dir))
        except OSError as e:
            raise StatFailureError(directory, e.strerror or str(e)) from e

        entries.sort(key=lambda item: item[0].name)
        return entries


def expand_directory(
    directory: PathType, rules: Optional[BaseExclusionRules] = None, root: Optional[PathType] = None
) -> List[Path]:
    """Collect every non-excluded file under a directory.

    Convenience wrapper around TreeExpander for one-off expansions.

    Args:
        directory: Directory to walk.
        rules: Exclusion rules. Defaults to None (nothing excluded).
        root: Directory exclusion matching is anchored at. Defaults to ``directory``.

    Returns:
        Paths of the eligible files, in depth-first sorted order.
    """
    return TreeExpander(rules).expand(directory, root)
