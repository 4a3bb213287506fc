"""Process-wide Ctrl+C flag, polled once per frame.

The SIGINT handler only records that the signal arrived; the frame loop
reads and clears the flag at its own pace and shuts down cleanly, so the
task file is still saved.
"""

from __future__ import annotations

import logging
import signal
from typing import Any

logger = logging.getLogger(__name__)

_interrupted: bool = False
_prev_handler: Any = None
_installed: bool = False


def _on_sigint(signum: int, frame: object) -> None:
    global _interrupted
    _interrupted = True


def install() -> None:
    """Route SIGINT to the flag. Calling it twice is harmless."""
    global _prev_handler, _installed
    if _installed:
        return
    _prev_handler = signal.getsignal(signal.SIGINT)
    signal.signal(signal.SIGINT, _on_sigint)
    _installed = True
    logger.debug("SIGINT handler installed")


def uninstall() -> None:
    """Put back the SIGINT handler that was active before :func:`install`."""
    global _prev_handler, _installed
    if not _installed:
        return
    # getsignal() returns None for handlers not installed from Python
    signal.signal(signal.SIGINT, _prev_handler if _prev_handler is not None else signal.SIG_DFL)
    _prev_handler = None
    _installed = False


def poll() -> bool:
    """Return whether SIGINT arrived since the last call, and reset the flag."""
    global _interrupted
    interrupted, _interrupted = _interrupted, False
    return interrupted


def trigger() -> None:
    """Set the flag as if SIGINT had arrived."""
    global _interrupted
    _interrupted = True
