"""Unit tests for the signal handler module in clipcat CLI."""

import os
import signal
import sys
from unittest.mock import MagicMock, patch

import pytest

from clipcat.cli.signal_handler import SignalHandler, cleanup, setup_signal_handling, signal_handler

requires_sigpipe = pytest.mark.skipif(not hasattr(signal, "SIGPIPE"), reason="SIGPIPE is not available")


@pytest.fixture
def mock_signal():
    """Create a mock for the signal module."""
    with patch("signal.signal", autospec=True) as mock:
        yield mock


@pytest.fixture
def mock_os():
    """Create a mock for os module functions used in signal handling."""
    with patch("clipcat.cli.signal_handler.os", autospec=True) as mock:
        mock.open.return_value = 123
        mock.dup2 = MagicMock()
        mock.devnull = "/dev/null"
        mock.O_WRONLY = os.O_WRONLY
        yield mock


@pytest.fixture
def fresh_signal_handler():
    """Create a fresh SignalHandler instance for tests.

    This avoids interference with the singleton instance.
    """
    return SignalHandler()


@pytest.fixture
def clean_singleton():
    """Clear the singleton's events around a test."""
    signal_handler.sigpipe_received.clear()
    signal_handler.sigint_received.clear()
    yield signal_handler
    signal_handler.sigpipe_received.clear()
    signal_handler.sigint_received.clear()


def test_signal_handler_initialization(fresh_signal_handler):
    assert not fresh_signal_handler.sigpipe_received.is_set()
    assert not fresh_signal_handler.sigint_received.is_set()
    assert fresh_signal_handler.original_sigint_handler is not None


def test_cancel_event_is_sigint_event(fresh_signal_handler):
    assert fresh_signal_handler.cancel_event is fresh_signal_handler.sigint_received


@requires_sigpipe
def test_handle_sigpipe(fresh_signal_handler, mock_signal):
    """Test the SIGPIPE handler function."""
    fresh_signal_handler.handle_sigpipe(signal.SIGPIPE, MagicMock())

    assert fresh_signal_handler.sigpipe_received.is_set()
    mock_signal.assert_called_once_with(signal.SIGPIPE, fresh_signal_handler.original_sigpipe_handler)


def test_handle_sigint(fresh_signal_handler, mock_signal):
    """Test the SIGINT handler sets the cancel event and restores the original handler."""
    fresh_signal_handler.handle_sigint(signal.SIGINT, MagicMock())

    assert fresh_signal_handler.cancel_event.is_set()
    mock_signal.assert_called_once_with(signal.SIGINT, fresh_signal_handler.original_sigint_handler)


@requires_sigpipe
def test_setup_signal_handling(mock_signal):
    """Test signal handler setup function."""
    setup_signal_handling()

    assert mock_signal.call_count == 2
    mock_signal.assert_any_call(signal.SIGPIPE, signal_handler.handle_sigpipe)
    mock_signal.assert_any_call(signal.SIGINT, signal_handler.handle_sigint)


def test_cleanup_with_no_signals(mock_os, clean_singleton):
    cleanup()

    mock_os.open.assert_not_called()
    mock_os.dup2.assert_not_called()


def test_cleanup_with_sigint_only(mock_os, clean_singleton):
    """An interrupt alone leaves stdout alone."""
    clean_singleton.sigint_received.set()
    cleanup()

    mock_os.dup2.assert_not_called()


def test_cleanup_with_sigpipe(mock_os, clean_singleton):
    """Test cleanup function when SIGPIPE was received."""
    clean_singleton.sigpipe_received.set()

    with patch.object(sys, "stdout") as mock_stdout:
        mock_stdout.fileno.return_value = 1
        cleanup()

    mock_os.open.assert_called_once_with("/dev/null", os.O_WRONLY)
    mock_os.dup2.assert_called_once_with(123, 1)


def test_singleton_instance():
    assert isinstance(signal_handler, SignalHandler)
    assert hasattr(signal_handler, "original_sigpipe_handler")
    assert hasattr(signal_handler, "original_sigint_handler")


def test_atexit_registration():
    """Test that the cleanup function is registered with atexit."""
    with patch("atexit.register") as mock_register:
        from importlib import reload

        from clipcat.cli import signal_handler as test_module

        reload(test_module)
        mock_register.assert_called_once_with(test_module.cleanup)
