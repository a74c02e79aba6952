"""
Terminal reload signal for Nekifoch.

kitty re-reads kitty.conf when it receives SIGUSR1. Signalling is best
effort: no running terminal, a platform without the signal or a process
that disappears mid-scan are logged and never raised.
"""

import os
import signal
import logging
from typing import Optional

import psutil

logger = logging.getLogger("nekifoch.terminal_reloader")


class TerminalReloader:
    """Sends the reload signal to every running terminal process."""

    def __init__(self, process_name: str = "kitty", signal_name: str = "SIGUSR1"):
        self.process_name = process_name
        self.signal_name = signal_name

    def _resolve_signal(self) -> Optional[signal.Signals]:
        sig = signal.Signals.__members__.get(self.signal_name)
        if sig is None:
            logger.warning(f"Signal {self.signal_name} is not a signal on this platform")
        return sig

    def reload(self) -> int:
        """
        Signal all processes named `process_name`.

        Returns:
            Number of processes signalled
        """
        sig = self._resolve_signal()
        if sig is None:
            return 0

        current_pid = os.getpid()
        signalled = 0
        try:
            for proc in psutil.process_iter(['pid', 'name']):
                try:
                    if proc.info['pid'] == current_pid or proc.info['name'] != self.process_name:
                        continue
                    proc.send_signal(sig)
                    signalled += 1
                    logger.debug(f"Sent {self.signal_name} to {self.process_name} (pid {proc.info['pid']})")
                except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
                    logger.debug(f"Skipping process during reload: {e}")
                    continue
        except psutil.Error as e:
            logger.warning(f"Could not scan processes for reload: {e}")
            return signalled

        if signalled:
            logger.info(f"Reloaded {signalled} {self.process_name} process(es)")
        else:
            logger.info(f"No running {self.process_name} process to reload")
        return signalled
