"""Tests for the keymap CLI commands."""

import json
import re
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from playmap.main import app
from playmap.models import AppInfo, KeymapRecord
from playmap.services.keymap_repository import KeymapRepository
from playmap.storage.codec import decode_keymap, encode_keymap


BUNDLE_ID = "com.example.racer"

runner = CliRunner()


def _out(result) -> str:
    """Strip ANSI escape sequences from CliRunner output for assertions."""
    return re.sub(r"\x1b\[[0-9;]*m", "", result.stdout)


def invoke(*args, **kwargs):
    return runner.invoke(app, ["--app", BUNDLE_ID, *args], **kwargs)


@pytest.fixture(autouse=True)
def quiet_logging(keymap_root, monkeypatch):
    monkeypatch.delenv("PLAYMAP_APP", raising=False)
    with patch("playmap.main.setup_cli_logging"):
        yield


@pytest.fixture
def repo(keymap_root) -> KeymapRepository:
    return KeymapRepository(AppInfo(BUNDLE_ID), root=keymap_root)


class TestAppSelection:
    def test_missing_app_exits(self):
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 1
        assert "no application given" in _out(result)

    def test_app_from_environment(self, repo, monkeypatch):
        monkeypatch.setenv("PLAYMAP_APP", BUNDLE_ID)
        result = runner.invoke(app, ["list", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["keymaps"] == ["default"]

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "playmap version" in _out(result)

    def test_env_flags_invalid_values(self, monkeypatch):
        monkeypatch.setenv("PLAYMAP_LOG_LEVEL", "LOUD")
        result = runner.invoke(app, ["env"])
        assert result.exit_code == 0
        assert "invalid" in _out(result)


class TestList:
    def test_fresh_app_has_default(self):
        result = invoke("list")
        assert result.exit_code == 0
        out = _out(result)
        assert BUNDLE_ID in out
        assert "default" in out

    def test_json_output(self, repo):
        repo.create_empty("racing")
        result = invoke("list", "--json")
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"default": "default", "keymaps": ["default", "racing"]}


class TestShow:
    def test_show_controls(self, repo, sample_record):
        repo.save("racing", sample_record)
        result = invoke("show", "racing")
        assert result.exit_code == 0
        out = _out(result)
        assert "Spc" in out
        assert "Fire" in out
        assert "joystick" in out

    def test_show_json(self, repo, sample_record):
        repo.save("racing", sample_record)
        result = invoke("show", "racing", "--json")
        assert result.exit_code == 0
        assert json.loads(result.stdout)["bundleIdentifier"] == BUNDLE_ID

    def test_show_empty(self):
        result = invoke("show", "default")
        assert result.exit_code == 0
        assert "No controls" in _out(result)

    def test_show_unknown(self):
        result = invoke("show", "nope")
        assert result.exit_code == 1
        assert "not found" in _out(result)


class TestCreate:
    def test_create(self, repo):
        result = invoke("create", "racing")
        assert result.exit_code == 0
        assert "Created keymap 'racing'" in _out(result)
        assert repo.list() == ["default", "racing"]

    def test_duplicate_rejected_without_force(self, repo, sample_record):
        repo.save("racing", sample_record)
        result = invoke("create", "racing")
        assert result.exit_code == 1
        assert "already exists" in _out(result)
        assert repo.get("racing") == sample_record

    def test_force_overwrites(self, repo, sample_record):
        repo.save("racing", sample_record)
        result = invoke("create", "racing", "--force")
        assert result.exit_code == 0
        assert repo.get("racing").is_empty

    def test_malformed_name_rejected(self, repo):
        result = invoke("create", "a/b")
        assert result.exit_code == 1
        assert "not allowed" in _out(result)
        assert repo.list() == ["default"]


class TestRenameDelete:
    def test_rename(self, repo):
        repo.create_empty("racing")
        result = invoke("rename", "racing", "fast")
        assert result.exit_code == 0
        assert "Renamed 'racing' to 'fast'" in _out(result)
        assert repo.list() == ["default", "fast"]

    def test_rename_to_existing_rejected(self, repo):
        repo.create_empty("racing")
        result = invoke("rename", "racing", "default")
        assert result.exit_code == 1
        assert repo.list() == ["default", "racing"]

    def test_delete_moves_to_trash(self, repo):
        repo.create_empty("racing")
        result = invoke("delete", "racing")
        assert result.exit_code == 0
        assert "Moved 'racing' to the trash" in _out(result)
        assert repo.list() == ["default"]
        assert [entry.name for entry in repo.trash.list_entries()] == ["racing"]

    def test_delete_unknown(self):
        result = invoke("delete", "nope")
        assert result.exit_code == 1


class TestResetAndDefault:
    def test_reset_with_confirmation(self, repo, sample_record):
        repo.save("racing", sample_record)
        result = invoke("reset", "racing", input="y\n")
        assert result.exit_code == 0
        assert "Reset keymap 'racing'" in _out(result)
        assert repo.get("racing").is_empty

    def test_reset_cancelled(self, repo, sample_record):
        repo.save("racing", sample_record)
        result = invoke("reset", "racing", input="n\n")
        assert result.exit_code == 0
        assert "cancelled" in _out(result).lower()
        assert repo.get("racing") == sample_record

    def test_set_default(self, repo):
        repo.create_empty("racing")
        result = invoke("set-default", "racing")
        assert result.exit_code == 0
        assert repo.default_keymap == "racing"


class TestReorderRefresh:
    def test_reorder(self, repo):
        repo.create_empty("a")
        repo.create_empty("b")
        result = invoke("reorder", "b", "a", "default")
        assert result.exit_code == 0
        assert repo.list() == ["b", "a", "default"]

    def test_partial_reorder_appends_rest(self, repo):
        repo.create_empty("a")
        result = invoke("reorder", "a")
        assert result.exit_code == 0
        assert "Order: a, default" in _out(result)

    def test_reorder_rejects_unknown_and_duplicates(self, repo):
        assert invoke("reorder", "ghost").exit_code == 1
        assert invoke("reorder", "default", "default").exit_code == 1
        assert repo.list() == ["default"]

    def test_refresh_tracks_new_files(self, repo):
        repo.paths.keymap_path("dropped").write_bytes(encode_keymap(KeymapRecord.empty(BUNDLE_ID)))
        result = invoke("refresh")
        assert result.exit_code == 0
        assert "2 keymap(s) tracked" in _out(result)
        assert repo.has_keymap("dropped")


class TestImportExport:
    def test_export_then_import(self, repo, sample_record, tmp_path):
        repo.save("racing", sample_record)
        target = tmp_path / "shared.playmap"

        result = invoke("export", "racing", str(target))
        assert result.exit_code == 0
        assert "Exported 'racing'" in _out(result)
        assert decode_keymap(target.read_bytes()) == sample_record

        result = invoke("import", str(target), "copy")
        assert result.exit_code == 0
        assert "as 'copy'" in _out(result)
        assert repo.get("copy") == sample_record

    def test_export_default_file_name(self, repo, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["--app", BUNDLE_ID, "--name", "Racer", "export", "default"])
        assert result.exit_code == 0
        assert (tmp_path / "Racer.playmap").exists()

    def test_import_foreign_needs_confirmation(self, repo, tmp_path):
        source = tmp_path / "foreign.playmap"
        source.write_bytes(encode_keymap(KeymapRecord.empty("com.example.other")))

        result = invoke("import", str(source), "foreign", input="n\n")
        assert result.exit_code == 1
        assert not repo.has_keymap("foreign")

        result = invoke("import", str(source), "foreign", "--yes")
        assert result.exit_code == 0
        assert repo.get("foreign").bundle_identifier == "com.example.other"

    def test_import_existing_name_needs_force(self, repo, sample_record, tmp_path):
        source = tmp_path / "in.playmap"
        source.write_bytes(encode_keymap(sample_record))

        assert invoke("import", str(source), "default").exit_code == 1
        assert repo.get("default").is_empty

        assert invoke("import", str(source), "default", "--force").exit_code == 0
        assert repo.get("default") == sample_record

    def test_import_garbage(self, tmp_path):
        source = tmp_path / "junk.playmap"
        source.write_bytes(b"junk")
        result = invoke("import", str(source), "junk")
        assert result.exit_code == 1
        assert "could not import" in _out(result)
