"""Tests for the now-playing command line utilities."""

import sys
from pathlib import Path

import bcrypt
import pytest
from loguru import logger

from nowplaying import cli
from nowplaying.core.config import Config, LoggingConfig
from nowplaying.core.output import setup_loguru


@pytest.fixture
def cli_config(tmp_path: Path, monkeypatch) -> Config:
    config = Config()
    config.storage.songs_file = str(tmp_path / "songs.md")
    monkeypatch.setattr(cli, "load_config", lambda: config)
    return config


def test_hash_password_argument(capsys):
    assert cli.run_hash_password("s3cret") == 0

    hashed = capsys.readouterr().out.strip()
    assert bcrypt.checkpw(b"s3cret", hashed.encode())


def test_hash_password_prompt_mismatch(monkeypatch, capsys):
    answers = iter(["one", "two"])
    monkeypatch.setattr(cli.getpass, "getpass", lambda prompt: next(answers))

    assert cli.run_hash_password(None) == 1
    assert "Passwords do not match" in capsys.readouterr().err


def test_hash_password_rejects_empty(capsys):
    assert cli.run_hash_password("") == 1


def test_show_queue_empty(cli_config, capsys):
    assert cli.run_show_queue() == 0
    assert "No songs in queue" in capsys.readouterr().out


def test_show_queue_lists_songs(cli_config, capsys):
    Path(cli_config.storage.songs_file).write_text(
        "# Songs Queue\n\n"
        "## 1\n- **Title:** Opening\n- **Artist:** ANA\n- **Status:** playing\n",
        encoding="utf-8",
    )

    assert cli.run_show_queue() == 0

    out = capsys.readouterr().out
    assert "Opening" in out
    assert "playing" in out


def test_show_queue_unreadable(cli_config, capsys):
    Path(cli_config.storage.songs_file).write_bytes(b"\xff\xfe\x00")

    assert cli.run_show_queue() == 1
    assert "Could not read queue" in capsys.readouterr().out


def test_main_without_subcommand_exits(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["now-playing"])

    with pytest.raises(SystemExit) as excinfo:
        cli.main()

    assert excinfo.value.code == 1


def test_setup_loguru_writes_file(tmp_path: Path):
    log_file = tmp_path / "logs" / "now-playing.log"

    try:
        assert setup_loguru(LoggingConfig(level="DEBUG"), log_file) == log_file
        logger.debug("queue loaded")
    finally:
        logger.remove()

    contents = log_file.read_text(encoding="utf-8")
    assert "Loguru initialized" in contents
    assert "queue loaded" in contents
