"""Tests for reconciling the sidecar with keymap files on disk."""

from pathlib import Path

import pytest

from playmap.models import ConfigRecord, KeymapRecord
from playmap.storage.codec import decode_keymap, encode_keymap
from playmap.storage.config_store import ConfigStore
from playmap.storage.paths import PathResolver
from playmap.storage.reconcile import reconcile

BUNDLE_ID = "com.example.racer"


@pytest.fixture
def resolver(tmp_path: Path) -> PathResolver:
    return PathResolver(tmp_path, BUNDLE_ID)


@pytest.fixture
def store(resolver: PathResolver) -> ConfigStore:
    return ConfigStore(resolver)


def write_keymap(resolver: PathResolver, name: str, record: KeymapRecord = None) -> None:
    resolver.ensure_directory()
    record = record or KeymapRecord.empty(BUNDLE_ID)
    resolver.keymap_path(name).write_bytes(encode_keymap(record))


class TestBootstrap:
    def test_empty_directory_gets_default_keymap(self, resolver, store):
        config = reconcile(resolver, store)

        assert config == ConfigRecord.bootstrap("default")
        assert [p.name for p in resolver.list_record_files()] == ["default.plist"]
        assert decode_keymap(resolver.keymap_path("default").read_bytes()) == KeymapRecord.empty(BUNDLE_ID)

    def test_creates_missing_directory(self, resolver, store):
        assert not resolver.directory.exists()
        reconcile(resolver, store)
        assert resolver.directory.is_dir()

    def test_stale_sidecar_with_no_files(self, resolver, store):
        resolver.ensure_directory()
        store.save(ConfigRecord("gone", ["gone"]))

        config = reconcile(resolver, store)

        assert config.keymap_order == ["gone", "default"]
        assert config.default_keymap == "gone"
        assert resolver.keymap_path("gone").exists()
        assert resolver.keymap_path("default").exists()


class TestConvergence:
    def test_untracked_files_appended_and_missing_recreated(self, resolver, store, sample_record):
        for name in ("a", "b", "c"):
            write_keymap(resolver, name)
        write_keymap(resolver, "b", sample_record)
        store.save(ConfigRecord("b", ["b", "d"]))
        listed = [p.stem for p in resolver.list_record_files() if p.stem in {"a", "c"}]

        config = reconcile(resolver, store)

        # untracked files follow the tracked ones in directory listing order
        assert config.keymap_order == ["b", "d", *listed]
        assert decode_keymap(resolver.keymap_path("d").read_bytes()).is_empty
        # existing content is untouched
        assert decode_keymap(resolver.keymap_path("b").read_bytes()) == sample_record
        assert store.load() == config

    def test_unusable_references_dropped(self, resolver, store):
        write_keymap(resolver, "a")
        store.save(ConfigRecord("a", ["a", ".config", ".hidden"]))

        config = reconcile(resolver, store)

        assert config.keymap_order == ["a"]
        assert not (resolver.directory / ".hidden.plist").exists()
        assert store.load() == config

    def test_duplicate_references_dropped(self, resolver, store):
        write_keymap(resolver, "a")
        write_keymap(resolver, "b")
        store.save(ConfigRecord("a", ["a", "b", "a", "b"]))

        assert reconcile(resolver, store).keymap_order == ["a", "b"]

    def test_hidden_and_foreign_files_ignored(self, resolver, store):
        write_keymap(resolver, "a")
        (resolver.directory / "notes.txt").write_text("hello")
        (resolver.directory / ".hidden.plist").write_bytes(b"")
        (resolver.directory / "folder.plist").mkdir()

        config = reconcile(resolver, store)

        assert "notes" not in config.keymap_order
        assert ".hidden" not in config.keymap_order
        assert "folder" not in config.keymap_order
        assert ".config" not in config.keymap_order

    def test_idempotent(self, resolver, store):
        for name in ("x", "y", "z"):
            write_keymap(resolver, name)
        store.save(ConfigRecord("y", ["y", "missing"]))

        first = reconcile(resolver, store)
        sidecar = resolver.config_path.read_bytes()
        second = reconcile(resolver, store)

        assert first == second
        assert resolver.config_path.read_bytes() == sidecar

    def test_corrupted_sidecar_rebuilt_from_files(self, resolver, store):
        write_keymap(resolver, "racing")
        resolver.config_path.write_bytes(b"garbage")

        config = reconcile(resolver, store)

        assert config.default_keymap == "default"
        assert set(config.keymap_order) == {"default", "racing"}
        assert resolver.keymap_path("default").exists()
