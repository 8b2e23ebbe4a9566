from __future__ import annotations

import pytest

from qrgen import __version__, cli
from qrgen.errors import UpdateError
from qrgen.history import HistoryEntry, HistoryStore
from qrgen.updater import UpdateResult


def add_entry(output_path: str, content: str = "https://example.com") -> HistoryEntry:
    return HistoryStore().add(
        HistoryEntry(
            content=content,
            format="png",
            size=128,
            fg_color="#000000",
            bg_color="#FFFFFF",
            output_path=output_path,
        )
    )


class FakeUpdateManager:
    result = UpdateResult("1.1.0", "1.2.0", True)
    error = None

    def __init__(self, config=None):
        self.config = config

    def check_for_update(self, current_version):
        if self.error is not None:
            raise self.error
        return self.result

    def self_update(self, current_version):
        if self.error is not None:
            raise self.error
        return self.result.latest_version


@pytest.mark.parametrize("flag", ["--version", "-v"])
def test_version_flag(cli_runner, flag):
    result = cli_runner.invoke(cli.app, [flag])

    assert result.exit_code == 0
    assert f"qrgen {__version__}" in result.output


def test_help_lists_commands(cli_runner):
    result = cli_runner.invoke(cli.app, ["--help"])

    assert result.exit_code == 0
    for command in ("run", "history", "regen", "update", "check-update"):
        assert command in result.output


def test_history_empty(cli_runner, config_home):
    result = cli_runner.invoke(cli.app, ["history"])

    assert result.exit_code == 0
    assert "No QR codes generated yet." in result.output


def test_history_plain_and_clear(cli_runner, config_home, tmp_path):
    add_entry(str(tmp_path / "a.png"), content="first entry")

    listed = cli_runner.invoke(cli.app, ["history", "--plain"])
    assert listed.exit_code == 0
    assert "first entry" in listed.output

    cleared = cli_runner.invoke(cli.app, ["history", "--clear"])
    assert cleared.exit_code == 0
    assert HistoryStore().list() == []


def test_history_table(cli_runner, config_home, tmp_path):
    add_entry(str(tmp_path / "a.png"))

    result = cli_runner.invoke(cli.app, ["history"])

    assert result.exit_code == 0
    assert "History" in result.output
    assert "PNG" in result.output


@pytest.mark.parametrize("argument", ["abc", "1.5"])
def test_regen_rejects_invalid_id(cli_runner, config_home, argument):
    result = cli_runner.invoke(cli.app, ["regen", argument])

    assert result.exit_code == 1
    assert "Invalid ID" in result.output


def test_regen_requires_an_id(cli_runner, config_home):
    result = cli_runner.invoke(cli.app, ["regen"])

    assert result.exit_code != 0


def test_regen_unknown_entry(cli_runner, config_home):
    result = cli_runner.invoke(cli.app, ["regen", "3"])

    assert result.exit_code == 1
    assert "entry #3 not found" in result.output


def test_regen_rewrites_file(cli_runner, config_home, tmp_path):
    pytest.importorskip("segno")
    Image = pytest.importorskip("PIL.Image")
    output = tmp_path / "out" / "again.png"
    entry = add_entry(str(output))

    result = cli_runner.invoke(cli.app, ["regen", str(entry.id)])

    assert result.exit_code == 0, result.output
    assert "Re-generated" in result.output
    with Image.open(output) as image:
        assert image.size == (128, 128)


def test_check_update_reports_new_version(cli_runner, monkeypatch):
    monkeypatch.setattr(cli, "UpdateManager", FakeUpdateManager)

    result = cli_runner.invoke(cli.app, ["check-update"])

    assert result.exit_code == 0
    assert "Update available" in result.output
    assert "1.2.0" in result.output


def test_check_update_up_to_date(cli_runner, monkeypatch):
    monkeypatch.setattr(FakeUpdateManager, "result", UpdateResult("1.1.0", "1.1.0", False))
    monkeypatch.setattr(cli, "UpdateManager", FakeUpdateManager)

    result = cli_runner.invoke(cli.app, ["check-update"])

    assert result.exit_code == 0
    assert "up to date" in result.output


def test_update_success(cli_runner, monkeypatch):
    monkeypatch.setattr(cli, "UpdateManager", FakeUpdateManager)

    result = cli_runner.invoke(cli.app, ["update"])

    assert result.exit_code == 0
    assert "Successfully updated to v1.2.0" in result.output


@pytest.mark.parametrize("command", ["update", "check-update"])
def test_update_errors_exit_with_one(cli_runner, monkeypatch, command):
    monkeypatch.setattr(FakeUpdateManager, "error", UpdateError("GitHub API returned status 500"))
    monkeypatch.setattr(cli, "UpdateManager", FakeUpdateManager)

    result = cli_runner.invoke(cli.app, [command])

    assert result.exit_code == 1
    assert "status 500" in result.output


def test_run_command_passes_flags_to_wizard(cli_runner, monkeypatch):
    seen = []

    def fake_launch(config):
        seen.append(config)

    monkeypatch.setattr(cli, "_launch_wizard", fake_launch)

    result = cli_runner.invoke(cli.app, ["run", "--no-history", "--no-preview"])

    assert result.exit_code == 0
    assert seen[0].record_history is False
    assert seen[0].show_preview is False


def test_no_subcommand_launches_wizard(cli_runner, monkeypatch):
    seen = []
    monkeypatch.setattr(cli, "_launch_wizard", seen.append)

    result = cli_runner.invoke(cli.app, [])

    assert result.exit_code == 0
    assert len(seen) == 1
