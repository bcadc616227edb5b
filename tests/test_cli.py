# tests/test_cli.py
import pytest
import typer
from typer.testing import CliRunner

from config.settings import settings
from order_miner.cli import app as cli_app
from order_miner.core import CursorStore, ErrorPolicy, SyncResult
from order_miner.exceptions import MailboxError


@pytest.fixture
def cursor_file(tmp_path, monkeypatch):
    path = tmp_path / "last_update.txt"
    path.write_text("2021-Feb-01\n")
    monkeypatch.setattr(cli_app, "CursorStore", lambda: CursorStore(path, default="2021-Jan-01"))
    return path


def install_sync(monkeypatch, outcome):
    class StubSync:
        def __init__(self, **kwargs):
            pass

        def sync(self, cursor, policy=ErrorPolicy.SKIP):
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

    monkeypatch.setattr(cli_app, "OrderSync", StubSync)


def test_failed_sync_keeps_old_cursor(repository, cursor_file, monkeypatch):
    install_sync(monkeypatch, MailboxError("Gmail unreachable"))

    with pytest.raises(typer.Exit):
        cli_app._sync(repository, ErrorPolicy.SKIP)

    assert cursor_file.read_text() == "2021-Feb-01\n"


def test_successful_sync_saves_new_cursor(repository, cursor_file, monkeypatch):
    install_sync(monkeypatch, SyncResult(cursor="2021-Mar-07"))

    cli_app._sync(repository, ErrorPolicy.SKIP)

    assert cursor_file.read_text().strip() == "2021-Mar-07"


def test_version_option():
    result = CliRunner().invoke(cli_app.app, ["--version"])

    assert result.exit_code == 0
    assert f"{settings.app.name} {settings.app.version}" in result.output
