"""Command-line argument parsing for clipcat.

This module defines the command-line interface for clipcat,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path

from clipcat import __version__


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with clipcat's options.
    """
    description = """
    clipcat: Copy a selection of files and folders to the clipboard as one text document.

    Folders are expanded recursively. Every file becomes a block headed by a comment
    line naming it, and blocks are separated by a blank line, ready to paste into a
    chat prompt. Binary files (images, archives, executables, ...) are listed by
    name only.

    Exclusion patterns:
    Two pattern shapes are supported, matched case-insensitively against paths
    relative to each selected folder (or a selected file's parent):
      **/<name>/**   anything inside a directory named <name>, at any depth
      **/*.<ext>     anything ending in .<ext>
    Other strings are accepted but never match. Directories named __pycache__ and
    node_modules are always excluded.

    Configuration:
    Patterns and workspace roots can also be set in .clipcat.toml, clipcat.toml or
    the [tool.clipcat] table of pyproject.toml, found by walking up from the current
    directory:
      exclude = ["**/dist/**", "**/*.map"]
      workspace = ["."]
    """

    epilog = """
    Examples:
      # Copy a folder and a file to the clipboard
      clipcat src/ README.md

      # Exclude build output and source maps
      clipcat -x "**/dist/**" -x "**/*.map" src/

      # Label files relative to another directory
      clipcat -w ~/projects/app ~/projects/app/src

      # Write the document to a file or to stdout instead of the clipboard
      clipcat -o context.txt src/
      clipcat --stdout src/ | less

      # Show what would be copied
      clipcat --tree src/

      # Print counts, including tokens for a model, to stderr
      clipcat -s stderr -t gpt-4 src/

      # Display version information and exit
      clipcat -V
    """

    parser = argparse.ArgumentParser(
        prog="clipcat",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"clipcat {__version__}", help="Show the version and exit"
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        metavar="PATH",
        help="Files and folders to copy, in the order they should appear.",
    )
    parser.add_argument(
        "-x",
        "--exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Exclusion pattern, '**/<name>/**' or '**/*.<ext>' (can be specified multiple times).",
    )
    parser.add_argument(
        "-w",
        "--workspace",
        action="append",
        default=[],
        type=Path,
        metavar="DIR",
        help=(
            "Workspace root that file labels are made relative to (can be specified multiple times). "
            "Defaults to the configured roots, or the current directory."
        ),
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Write the document to FILE instead of the clipboard.",
    )
    output.add_argument(
        "--stdout",
        action="store_true",
        help="Write the document to stdout instead of the clipboard.",
    )
    output.add_argument(
        "--tree",
        action="store_true",
        help="Print a tree of the files that would be copied and exit without copying.",
    )
    config = parser.add_mutually_exclusive_group()
    config.add_argument(
        "-c",
        "--config",
        type=Path,
        metavar="FILE",
        help="Read settings from FILE instead of searching for a config file.",
    )
    config.add_argument(
        "--no-config",
        action="store_true",
        help="Ignore config files.",
    )
    parser.add_argument(
        "-s",
        "--summary",
        metavar="DEST",
        choices=["stderr", "stdout"],
        help="Print a summary of files, lines, characters (and tokens). Valid destinations: stderr, stdout",
    )
    parser.add_argument(
        "-t",
        "--tokenizer",
        metavar="MODEL",
        help="Tokenizer model to use for counting tokens in the summary (e.g., gpt-4).",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not report success on stderr.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.summary == "stdout" and args.stdout:
        raise ValueError("--summary=stdout cannot be combined with --stdout")
    if args.tokenizer and not args.summary:
        raise ValueError("-t/--tokenizer requires -s/--summary to be specified")
    if args.tree and args.summary:
        raise ValueError("-s/--summary cannot be combined with --tree")
