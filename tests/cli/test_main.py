"""Unit tests for the CLI main module."""

import os
from unittest.mock import MagicMock, patch

import pytest

from clipcat.cli.argparser import create_parser
from clipcat.cli.main import format_counts, load_settings, main
from clipcat.cli.signal_handler import SignalHandler
from clipcat.exceptions import ClipboardError, ReadFailureError


@pytest.fixture
def handler():
    """Isolate each run from the process-wide signal state."""
    fresh = SignalHandler()
    with patch("clipcat.cli.main.setup_signal_handling"), patch("clipcat.cli.main.signal_handler", fresh):
        yield fresh


@pytest.fixture
def clipboard():
    with patch("clipcat.cli.main.ClipboardSink") as mock_sink:
        yield mock_sink.return_value


@pytest.fixture
def in_project(project_dir, monkeypatch):
    monkeypatch.chdir(project_dir)
    return project_dir


def run_main(argv):
    """Run main and return its exit code."""
    try:
        main(argv)
    except SystemExit as e:
        return e.code
    return 0


def test_copies_selection_to_clipboard(handler, clipboard, in_project, capsys):
    assert run_main(["--no-config", "src/a.ts", "README.md"]) == 0

    clipboard.write.assert_called_once_with(
        f"// File: {os.path.join('src', 'a.ts')}\nhello\n\n// File: README.md\n# Project\n"
    )
    assert "Copied 2 file(s) to clipboard." in capsys.readouterr().err


def test_quiet_suppresses_success_message(handler, clipboard, in_project, capsys):
    assert run_main(["--no-config", "-q", "src"]) == 0
    assert capsys.readouterr().err == ""


def test_exclude_option(handler, clipboard, in_project):
    assert run_main(["--no-config", "-x", "**/*.map", "-x", "**/*.png", "src"]) == 0

    document = clipboard.write.call_args.args[0]
    assert "helpers.ts.map" not in document
    assert "logo.png" not in document
    assert "x.js" not in document


def test_workspace_option(handler, clipboard, in_project):
    assert run_main(["--no-config", "-w", "src", "src/a.ts"]) == 0
    clipboard.write.assert_called_once_with("// File: a.ts\nhello")


def test_config_file(handler, clipboard, in_project):
    config = in_project / "settings.toml"
    config.write_text('exclude = ["**/*.png", "**/utils/**"]\nworkspace = ["src"]\n')

    assert run_main(["-c", str(config), "src"]) == 0
    clipboard.write.assert_called_once_with("// File: a.ts\nhello")


def test_config_file_is_discovered(handler, clipboard, in_project):
    (in_project / ".clipcat.toml").write_text('exclude = ["**/*.ts", "**/*.map"]\n')

    assert run_main(["src"]) == 0
    clipboard.write.assert_called_once_with(f"// Binary file: {os.path.join('src', 'logo.png')}")


def test_invalid_config(handler, clipboard, in_project, capsys):
    (in_project / ".clipcat.toml").write_text("exclude = 3\n")

    assert run_main(["src"]) == 1
    assert "Error: Invalid configuration" in capsys.readouterr().err
    clipboard.write.assert_not_called()


def test_empty_selection_warns(handler, clipboard, in_project, capsys):
    assert run_main(["--no-config"]) == 1
    assert "Warning: No files or folders selected." in capsys.readouterr().err
    clipboard.write.assert_not_called()


def test_nothing_left_after_filtering_warns(handler, clipboard, in_project, capsys):
    assert run_main(["--no-config", "-x", "**/*.ts", "-x", "**/*.png", "-x", "**/*.map", "src"]) == 1
    assert "Warning: No files found in the selected directories." in capsys.readouterr().err
    clipboard.write.assert_not_called()


def test_missing_path_is_an_error(handler, clipboard, in_project, capsys):
    assert run_main(["--no-config", "src", "missing.txt"]) == 1
    assert "Error: Cannot access" in capsys.readouterr().err
    clipboard.write.assert_not_called()


def test_unreadable_file_aborts(handler, clipboard, in_project, capsys):
    (in_project / "src" / "bad.txt").write_bytes(b"\xff\xfe\xfa")

    assert run_main(["--no-config", "src"]) == 1
    assert "Error: Failed to read" in capsys.readouterr().err
    clipboard.write.assert_not_called()


def test_permission_denied_exit_code(handler, clipboard, in_project):
    error = ReadFailureError("secret.txt", "Permission denied")
    error.__cause__ = PermissionError()

    with patch("clipcat.cli.main.build_document", side_effect=error):
        assert run_main(["--no-config", "src"]) == 126


def test_clipboard_failure(handler, clipboard, in_project, capsys):
    clipboard.write.side_effect = ClipboardError("Failed to copy content to clipboard: no mechanism")

    assert run_main(["--no-config", "src"]) == 1
    assert "Error: Failed to copy content to clipboard" in capsys.readouterr().err


def test_interrupt_cancels_without_copying(handler, clipboard, in_project, capsys):
    handler.sigint_received.set()

    assert run_main(["--no-config", "src"]) == 130
    assert "Error: Operation cancelled." in capsys.readouterr().err
    clipboard.write.assert_not_called()


def test_output_file(handler, clipboard, in_project, capsys):
    target = in_project / "context.txt"

    assert run_main(["--no-config", "-o", str(target), "src/a.ts"]) == 0
    assert target.read_text() == f"// File: {os.path.join('src', 'a.ts')}\nhello"
    assert f"Wrote 1 file(s) to {target}." in capsys.readouterr().err
    clipboard.write.assert_not_called()


def test_stdout(handler, clipboard, in_project, capfd):
    assert run_main(["--no-config", "-w", "src", "src/a.ts"]) == 0

    clipboard.write.assert_called_once()
    clipboard.reset_mock()

    assert run_main(["--no-config", "--stdout", "-w", "src", "src/a.ts"]) == 0
    captured = capfd.readouterr()
    assert captured.out.endswith("// File: a.ts\nhello")
    assert "Wrote 1 file(s) to stdout." in captured.err
    clipboard.write.assert_not_called()


def test_broken_pipe_exit_code(handler, clipboard, in_project):
    mock_writer = MagicMock()
    mock_writer.__enter__.return_value.write.side_effect = BrokenPipeError()
    mock_writer.__exit__.return_value = False

    with patch("clipcat.cli.main.SafeWriter", return_value=mock_writer):
        assert run_main(["--no-config", "--stdout", "src"]) == 141


def test_tree_preview(handler, clipboard, in_project, capfd):
    assert run_main(["--no-config", "--tree", "src"]) == 0

    out = capfd.readouterr().out
    assert "helpers.ts" in out
    assert "node_modules" not in out
    clipboard.write.assert_not_called()


def test_summary_to_stderr(handler, clipboard, in_project, capsys):
    assert run_main(["--no-config", "-q", "-s", "stderr", "-w", "src", "src/a.ts"]) == 0

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "Files: 1\nLines: 1\nCharacters: 19\n"


def test_summary_to_stdout(handler, clipboard, in_project, capsys):
    assert run_main(["--no-config", "-q", "-s", "stdout", "-w", "src", "src/a.ts"]) == 0
    assert capsys.readouterr().out == "Files: 1\nLines: 1\nCharacters: 19\n"


def test_token_counting_without_tiktoken(handler, clipboard, in_project, capsys):
    with patch("importlib.util.find_spec", return_value=None):
        assert run_main(["--no-config", "-s", "stderr", "-t", "gpt-4", "src"]) == 1

    stderr = capsys.readouterr().err
    assert "Error: Token counting was requested with -t/--tokenizer" in stderr
    assert stderr.count("pip install clipcat[token_counting]") == 1
    clipboard.write.assert_not_called()


def test_tokenizer_requires_summary(handler, clipboard, capsys):
    assert run_main(["-t", "gpt-4", "src"]) == 2
    assert "requires -s/--summary" in capsys.readouterr().err


def test_load_settings_defaults_to_cwd(tmp_path):
    args = create_parser().parse_args(["--no-config", "src"])
    settings = load_settings(args, cwd=tmp_path)
    assert settings.workspace_roots == (tmp_path,)
    assert settings.exclude_patterns == ()


def test_format_counts_with_tokens():
    assert format_counts({"files": 3, "lines": 10, "tokens": 42, "characters": 200}) == (
        "Files: 3\nLines: 10\nTokens: 42\nCharacters: 200"
    )


def test_interrupt_after_copy_keeps_success(handler, clipboard, in_project, capsys):
    clipboard.write.side_effect = lambda document: handler.sigint_received.set()

    assert run_main(["--no-config", "src/a.ts"]) == 0
    assert "Copied 1 file(s) to clipboard." in capsys.readouterr().err


def test_summary_with_tree_is_rejected(handler, clipboard, capsys):
    assert run_main(["--tree", "-s", "stderr", "src"]) == 2
    assert "cannot be combined with --tree" in capsys.readouterr().err
