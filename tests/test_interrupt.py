"""Tests for todo.interrupt -- the SIGINT flag."""

from __future__ import annotations

import os
import signal
import time

from todo import interrupt


class TestInterruptFlag:
    def test_initially_clear(self):
        assert interrupt.poll() is False

    def test_poll_resets_flag(self):
        interrupt.trigger()
        assert interrupt.poll() is True
        assert interrupt.poll() is False

    def test_repeated_triggers_collapse(self):
        interrupt.trigger()
        interrupt.trigger()
        assert interrupt.poll() is True
        assert interrupt.poll() is False


class TestInstall:
    def test_install_replaces_and_uninstall_restores(self):
        before = signal.getsignal(signal.SIGINT)
        interrupt.install()
        assert signal.getsignal(signal.SIGINT) is interrupt._on_sigint
        interrupt.uninstall()
        assert signal.getsignal(signal.SIGINT) == before

    def test_install_is_idempotent(self):
        before = signal.getsignal(signal.SIGINT)
        interrupt.install()
        interrupt.install()
        interrupt.uninstall()
        assert signal.getsignal(signal.SIGINT) == before

    def test_uninstall_without_install(self):
        before = signal.getsignal(signal.SIGINT)
        interrupt.uninstall()
        assert signal.getsignal(signal.SIGINT) == before

    def test_sigint_sets_flag(self):
        interrupt.install()
        try:
            os.kill(os.getpid(), signal.SIGINT)
            # The handler runs between bytecodes; give it a moment
            deadline = time.monotonic() + 1.0
            while not interrupt.poll():
                assert time.monotonic() < deadline
                time.sleep(0.001)
        finally:
            interrupt.uninstall()
