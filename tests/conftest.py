"""Shared pytest fixtures for playmap tests."""

from pathlib import Path

import pytest

from playmap.models import AppInfo, ButtonBinding, JoystickBinding, KeymapRecord, MouseAreaBinding, Transform
from playmap.services.keymap_repository import KeymapRepository

BUNDLE_ID = "com.example.racer"


@pytest.fixture
def keymap_root(tmp_path: Path, monkeypatch) -> Path:
    """Keymapping root inside tmp_path; also exported for get_keymap_root()."""
    root = tmp_path / "Keymapping"
    monkeypatch.setenv("PLAYMAP_KEYMAP_DIR", str(root))
    return root


@pytest.fixture
def app_info() -> AppInfo:
    return AppInfo(BUNDLE_ID, "Racer")


@pytest.fixture
def repository(app_info: AppInfo, keymap_root: Path) -> KeymapRepository:
    """Repository bootstrapped in an empty keymap directory."""
    return KeymapRepository(app_info, root=keymap_root)


@pytest.fixture
def sample_record() -> KeymapRecord:
    """A keymap with one control of every kind."""
    return KeymapRecord(
        bundle_identifier=BUNDLE_ID,
        buttons=[ButtonBinding(44, "", Transform(1.0, 0.25, 0.75))],
        draggable_buttons=[ButtonBinding(-1, "Fire", Transform(1.5, 0.5, 0.5))],
        joysticks=[JoystickBinding(26, 7, 22, 4, "", Transform(2.0, 0.1, 0.8))],
        mouse_areas=[MouseAreaBinding("", Transform(1.0, 0.6, 0.4))],
    )
