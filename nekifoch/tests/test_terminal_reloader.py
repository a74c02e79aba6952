"""
Tests for TerminalReloader with a mocked process table.
"""

import os
import signal
from unittest.mock import MagicMock, patch

import psutil
import pytest

from nekifoch.src.infrastructure.process.terminal_reloader import TerminalReloader

PROCESS_ITER = "nekifoch.src.infrastructure.process.terminal_reloader.psutil.process_iter"

pytestmark = pytest.mark.skipif(not hasattr(signal, "SIGUSR1"), reason="SIGUSR1 not available")


def make_proc(pid: int, name: str) -> MagicMock:
    proc = MagicMock()
    proc.info = {'pid': pid, 'name': name}
    return proc


def test_signals_every_matching_process():
    kitty_a, kitty_b, shell = make_proc(100, "kitty"), make_proc(101, "kitty"), make_proc(102, "zsh")
    with patch(PROCESS_ITER, return_value=[kitty_a, shell, kitty_b]):
        assert TerminalReloader().reload() == 2
    kitty_a.send_signal.assert_called_once_with(signal.SIGUSR1)
    kitty_b.send_signal.assert_called_once_with(signal.SIGUSR1)
    shell.send_signal.assert_not_called()


def test_no_running_terminal():
    with patch(PROCESS_ITER, return_value=[make_proc(5, "bash")]):
        assert TerminalReloader().reload() == 0


def test_skips_own_process():
    me = make_proc(os.getpid(), "kitty")
    with patch(PROCESS_ITER, return_value=[me]):
        assert TerminalReloader().reload() == 0
    me.send_signal.assert_not_called()


def test_vanished_and_protected_processes_are_skipped():
    gone = make_proc(200, "kitty")
    gone.send_signal.side_effect = psutil.NoSuchProcess(200)
    denied = make_proc(201, "kitty")
    denied.send_signal.side_effect = psutil.AccessDenied(201)
    alive = make_proc(202, "kitty")
    with patch(PROCESS_ITER, return_value=[gone, denied, alive]):
        assert TerminalReloader().reload() == 1
    alive.send_signal.assert_called_once()


def test_custom_process_name_and_signal():
    proc = make_proc(300, "kitty-dev")
    with patch(PROCESS_ITER, return_value=[proc]):
        assert TerminalReloader(process_name="kitty-dev", signal_name="SIGUSR2").reload() == 1
    proc.send_signal.assert_called_once_with(signal.SIGUSR2)


@pytest.mark.parametrize("signal_name", ["SIGNOPE", "SIG_DFL", "SIG_IGN", "signal", "sigusr1"])
def test_unknown_signal_sends_nothing(signal_name):
    proc = make_proc(400, "kitty")
    with patch(PROCESS_ITER, return_value=[proc]) as process_iter:
        assert TerminalReloader(signal_name=signal_name).reload() == 0
    process_iter.assert_not_called()
    proc.send_signal.assert_not_called()


def test_process_scan_failure_is_not_raised():
    with patch(PROCESS_ITER, side_effect=psutil.AccessDenied()):
        assert TerminalReloader().reload() == 0
