"""Tests for the ``todo`` command line entry point."""

from __future__ import annotations

import pytest
from click.testing import CliRunner
from virtual_terminal import VirtualTerminal

from todo import cli
from todo.keybindings import get_keybindings


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("TODO_CONFIG_DIR", str(config_dir))
    monkeypatch.delenv("TODO_LOG_FILE", raising=False)
    return config_dir


@pytest.fixture
def terminal(monkeypatch):
    term = VirtualTerminal()
    monkeypatch.setattr(cli, "ProcessTerminal", lambda: term)
    return term


def test_missing_argument():
    result = CliRunner().invoke(cli.main, [])
    assert result.exit_code == 2


def test_malformed_file_exits_with_error(tmp_path):
    path = tmp_path / "todo.txt"
    path.write_text("TODO: a\nwhat is this\n")
    result = CliRunner().invoke(cli.main, [str(path)])
    assert result.exit_code == 1
    assert f"{path}:2: ERROR: ill-formed item line" in result.output
    # The file is left as it was
    assert path.read_text() == "TODO: a\nwhat is this\n"


def test_undecodable_file_exits_with_error(tmp_path):
    path = tmp_path / "todo.txt"
    path.write_bytes(b"TODO: caf\xe9\n")
    result = CliRunner().invoke(cli.main, [str(path)])
    assert result.exit_code == 1
    assert "ERROR: not valid UTF-8 at byte 9" in result.output
    assert path.read_bytes() == b"TODO: caf\xe9\n"


def test_unreadable_path_exits_with_error(tmp_path):
    path = tmp_path / "todo.txt"
    path.mkdir()
    result = CliRunner().invoke(cli.main, [str(path)])
    assert result.exit_code != 0


def test_session_saves_state(tmp_path, terminal):
    path = tmp_path / "todo.txt"
    path.write_text("TODO: Buy milk\nDONE: Start stream\n")
    terminal.feed("\r", "q")

    result = CliRunner().invoke(cli.main, [str(path)])

    assert result.exit_code == 0, result.output
    assert f"Saved state to {path}" in result.output
    assert path.read_text() == "DONE: Start stream\nDONE: Buy milk\n"
    assert "Loaded file" not in result.output


def test_new_file_is_created(tmp_path, terminal):
    path = tmp_path / "new.txt"
    terminal.feed("q")

    result = CliRunner().invoke(cli.main, [str(path)])

    assert result.exit_code == 0, result.output
    assert path.exists()
    assert path.read_text() == ""
    assert f"New file {path}" in terminal.output


def test_config_keybindings_are_applied(tmp_path, terminal, isolated_config):
    (isolated_config / "config.json").write_text('{"keybindings": {"quit": "x"}}')
    path = tmp_path / "todo.txt"
    path.write_text("TODO: a\n")
    terminal.feed("q", "x")

    result = CliRunner().invoke(cli.main, [str(path)])

    assert result.exit_code == 0, result.output
    assert terminal.pending_keys == 0
    assert get_keybindings().get_keys("quit") == ["x"]
