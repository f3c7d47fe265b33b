"""Tree view of resolved selections.

This module renders the files a selection resolved to as one tree per root, in the
style of the Unix ``tree`` command. It is used to preview what would be copied.
"""

from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence

from anytree import Node

from clipcat.selection_resolver import ResolvedFile


class SelectionNode(Node):  # type: ignore
    """Node class representing a file or directory in a selection tree.

    Extends anytree.Node with a flag telling directories apart from files.

    Attributes:
        name (str): The name of the file or directory (just the basename).
        parent (Optional[SelectionNode]): The parent node in the tree.
        is_dir (bool): True if this node represents a directory, False for files.

    Example:
        >>> root = SelectionNode("src", is_dir=True)
        >>> child = SelectionNode("main.py", parent=root)
        >>> child.is_dir
        False
        >>> [node.name for node in root.children]
        ['main.py']
    """

    def __init__(
        self, name: str, parent: Optional["SelectionNode"] = None, is_dir: bool = False, **kwargs: Any
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.is_dir = is_dir


class SelectionTree:
    """A tree representation of resolved files, grouped by their roots.

    The trees are built lazily on first access. Roots appear in the order they were
    first seen among the resolved files.

    Attributes:
        resolved_files (List[ResolvedFile]): The files to represent.

    Example:
        >>> from pathlib import Path
        >>> files = [
        ...     ResolvedFile(Path("/proj/src/main.py"), Path("/proj/src")),
        ...     ResolvedFile(Path("/proj/src/utils/helpers.py"), Path("/proj/src")),
        ... ]
        >>> print(SelectionTree(files).get_tree_representation())
        /proj/src/
        ├── utils/
        │   └── helpers.py
        └── main.py
    """

    def __init__(self, resolved_files: Sequence[ResolvedFile]) -> None:
        self.resolved_files = list(resolved_files)
        self._trees: Optional[List[SelectionNode]] = None

    def get_trees(self) -> List[SelectionNode]:
        """Get the root node of each tree, building the trees if needed."""
        if self._trees is None:
            self._build_trees()
        assert self._trees is not None
        return self._trees

    def _build_trees(self) -> None:
        roots: Dict[Path, SelectionNode] = {}
        directories: Dict[Path, SelectionNode] = {}

        for resolved in self.resolved_files:
            root_node = roots.get(resolved.root)
            if root_node is None:
                root_node = SelectionNode(str(resolved.root), is_dir=True)
                roots[resolved.root] = root_node
                directories[resolved.root] = root_node

            parent_node = root_node
            current = resolved.root
            for part in resolved.relative_path.parent.parts:
                current = current / part
                node = directories.get(current)
                if node is None:
                    node = SelectionNode(part, parent=parent_node, is_dir=True)
                    directories[current] = node
                parent_node = node

            SelectionNode(resolved.path.name, parent=parent_node)

        self._trees = list(roots.values())

    def get_file_count(self) -> int:
        return len(self.resolved_files)

    def stream_tree_representation(self) -> Iterator[str]:
        """Generate the tree representation one line at a time.

        Yields:
            Lines of the tree representation, including the connecting lines.
        """

        def write_node(
            node: SelectionNode, prefix: str = "", is_last: bool = True, is_root: bool = False
        ) -> Iterator[str]:
            if is_root:
                yield f"{node.name.rstrip('/')}/"
            else:
                connector = "└── " if is_last else "├── "
                suffix = "/" if node.is_dir else ""
                yield f"{prefix}{connector}{node.name}{suffix}"

            if node.is_dir:
                # Directories first, then files, both alphabetically
                sorted_children = sorted(node.children, key=lambda n: (not n.is_dir, n.name.lower()))
                for i, child in enumerate(sorted_children):
                    is_last_child = i == len(sorted_children) - 1
                    if is_root:
                        new_prefix = ""
                    else:
                        new_prefix = prefix + ("    " if is_last else "│   ")
                    yield from write_node(child, new_prefix, is_last_child)

        for tree in self.get_trees():
            yield from write_node(tree, is_root=True)

    def get_tree_representation(self) -> str:
        """Get the complete tree representation as a string."""
        return "\n".join(self.stream_tree_representation())
