from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class EntryType(Enum):
    """Enumeration of selection entry types.

    A selected entry is a regular file, a directory, or something else (FIFO,
    socket, device file). Symbolic links are classified by their target.

    Attributes:
        FILE: Regular file
        DIRECTORY: Directory
        SPECIAL: Any other kind of entry, which cannot be copied
    """

    FILE = "file"
    DIRECTORY = "directory"
    SPECIAL = "special"
