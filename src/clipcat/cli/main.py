"""Command-line interface for clipcat.

This module provides the command-line interface for clipcat, the host side of the
selection-to-clipboard pipeline: it reads settings, runs the pipeline, hands the
finished document to the clipboard (or a file, or stdout) and reports the outcome.

Exit Codes:
    0: Successful completion
    1: Nothing to copy, or runtime error during execution
    2: Command-line syntax error
    126: Permission denied
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # Copy a folder to the clipboard
    $ clipcat src/

    # Display version information
    $ clipcat --version
"""

import argparse
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Optional, Sequence

from clipcat.cli.argparser import create_parser, validate_args
from clipcat.cli.safe_writer import SafeWriter
from clipcat.cli.signal_handler import setup_signal_handling, signal_handler
from clipcat.clipboard import ClipboardSink
from clipcat.clipcat import build_document, preview_selection
from clipcat.config import ClipcatConfig, Settings, find_config_file, load_config, merge_settings
from clipcat.exceptions import (
    EmptySelectionError,
    NoFilesAfterFilteringError,
    OperationCancelledError,
    ReadFailureError,
    StatFailureError,
)
from clipcat.token_counter import TokenCounter


def format_counts(counts: Mapping[str, Optional[int]]) -> str:
    """Format the counts into a human-readable string.

    Args:
        counts: Mapping containing various count metrics.

    Returns:
        A formatted string showing all counts with appropriate labels.

    Example:
        >>> print(format_counts({"files": 2, "lines": 10, "characters": 120, "tokens": None}))
        Files: 2
        Lines: 10
        Characters: 120
    """
    result = [
        f"Files: {counts['files']}",
        f"Lines: {counts['lines']}",
        f"Characters: {counts['characters']}",
    ]

    if counts["tokens"] is not None:
        result.insert(2, f"Tokens: {counts['tokens']}")

    return "\n".join(result)


def load_settings(args: argparse.Namespace, cwd: Optional[Path] = None) -> Settings:
    """Read the config file (unless disabled) and merge it with the CLI options."""
    base_dir = cwd if cwd is not None else Path.cwd()

    config: Optional[ClipcatConfig] = None
    if args.config is not None:
        config = load_config(args.config)
    elif not args.no_config:
        config_path = find_config_file(base_dir)
        if config_path is not None:
            config = load_config(config_path)

    return merge_settings(config, args.exclude, args.workspace, cwd=base_dir)


def run(args: argparse.Namespace) -> int:
    """Run one invocation and return its exit code.

    Raises:
        ClipcatError: For every failure the user should be told about.
    """
    # Fail on a missing tokenizer before doing any work
    counter = TokenCounter(args.tokenizer) if args.summary else None

    settings = load_settings(args)
    cancel_event = signal_handler.cancel_event

    if args.tree:
        tree = preview_selection(args.paths, settings, cancel_event)
        with SafeWriter(sys.stdout.fileno()) as writer:
            for line in tree.stream_tree_representation():
                writer.write(line + "\n")
        return 0

    result = build_document(args.paths, settings, cancel_event)

    if args.output:
        with SafeWriter(args.output, encoding=settings.encoding) as writer:
            writer.write(result.document)
        message = f"Wrote {result.file_count} file(s) to {args.output}."
    elif args.stdout:
        with SafeWriter(sys.stdout.fileno()) as writer:
            writer.write(result.document)
        message = f"Wrote {result.file_count} file(s) to stdout."
    else:
        ClipboardSink().write(result.document)
        message = f"Copied {result.file_count} file(s) to clipboard."

    if not args.quiet:
        print(message, file=sys.stderr)

    if counter is not None:
        counts = counter.count(result.document)
        summary = format_counts(
            {
                "files": result.file_count,
                "lines": counts.lines,
                "tokens": counts.tokens,
                "characters": counts.characters,
            }
        )
        if args.summary == "stdout":
            print(summary)
        else:
            print(summary, file=sys.stderr)

    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the clipcat command-line interface.

    Exit codes:
        0: Successful completion
        1: Nothing to copy, or runtime error during execution
        2: Command-line syntax error
        126: Permission denied
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    setup_signal_handling()

    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        validate_args(args)
    except ValueError as e:
        parser.error(str(e))

    exit_code = 0
    try:
        exit_code = run(args)
    except (EmptySelectionError, NoFilesAfterFilteringError) as e:
        print(f"Warning: {str(e)}", file=sys.stderr)
        exit_code = 1
    except OperationCancelledError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        exit_code = 130
    except (StatFailureError, ReadFailureError) as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        exit_code = 126 if isinstance(e.__cause__, PermissionError) else 1
    except BrokenPipeError:
        exit_code = 141
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        exit_code = 1

    # Only SIGPIPE overrides a completed run
    if exit_code == 0 and signal_handler.sigpipe_received.is_set():
        exit_code = 141

    if exit_code != 0:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
