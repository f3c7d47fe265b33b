"""Binary file detection utilities."""

from pathlib import PurePath

from clipcat.types import PathType

# Closed list of file extensions whose content is never copied
BINARY_EXTENSIONS = frozenset(
    {
        # Images
        ".png",
        ".jpg",
        ".jpeg",
        ".gif",
        ".svg",
        ".ico",
        ".webp",
        ".bmp",
        ".tiff",
        ".tif",
        # Videos
        ".mp4",
        ".avi",
        ".mov",
        ".wmv",
        ".flv",
        ".webm",
        ".mkv",
        ".m4v",
        # Audio
        ".mp3",
        ".wav",
        ".flac",
        ".aac",
        ".ogg",
        ".wma",
        ".m4a",
        # Archives
        ".zip",
        ".rar",
        ".7z",
        ".tar",
        ".gz",
        ".bz2",
        ".xz",
        # Executables
        ".exe",
        ".dll",
        ".so",
        ".dylib",
        ".bin",
        # Binary documents
        ".pdf",
        ".doc",
        ".docx",
        ".xls",
        ".xlsx",
        ".ppt",
        ".pptx",
        # Database, design and disk images
        ".db",
        ".sqlite",
        ".sqlite3",
        ".mdb",
        ".accdb",
        ".psd",
        ".ai",
        ".sketch",
        ".fig",
        ".iso",
        ".img",
        ".dmg",
        ".pkg",
        ".deb",
        ".rpm",
    }
)


def is_binary_file(file_path: PathType) -> bool:
    """Detect if a file is binary from its extension alone.

    The decision is a pure function of the file name: the file is never opened, so
    a ``.png`` is binary whatever it contains and a ``.txt`` is text whatever it
    contains. Binary files with unlisted extensions are treated as text.

    Args:
        file_path: Path to the file. Can be any path-like object and need not exist.

    Returns:
        True if the extension is in BINARY_EXTENSIONS (case-insensitive).

    Example:
        >>> is_binary_file("assets/Logo.PNG")
        True
        >>> is_binary_file("notes.txt")
        False
        >>> is_binary_file("Makefile")
        False
    """
    return PurePath(file_path).suffix.lower() in BINARY_EXTENSIONS
