"""Selection to clipboard text conversion utilities.

This package turns a selection of files and folders into a single text document
suitable for pasting into Large Language Model (LLM) chat prompts.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("clipcat")
except PackageNotFoundError:
    __version__ = "unknown"
