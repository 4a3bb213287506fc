import pytest

from todo import interrupt
from todo.keybindings import KeybindingsManager, set_keybindings


@pytest.fixture(autouse=True)
def reset_globals():
    """Give every test default keybindings and a clear interrupt flag."""
    set_keybindings(KeybindingsManager())
    interrupt.poll()
    yield
    set_keybindings(KeybindingsManager())
    interrupt.uninstall()
    interrupt.poll()
