"""Tests for keymap data models and their per-field defaults."""

import pytest

from playmap.models import (
    AppInfo,
    ButtonBinding,
    ConfigRecord,
    JoystickBinding,
    JoystickMode,
    KeymapRecord,
    MouseAreaBinding,
    Transform,
)
from playmap.models.keycodes import key_name_for

TRANSFORM = {"size": 1.0, "xCoord": 0.5, "yCoord": 0.25}


class TestKeyNames:
    def test_letters_digits_and_function_keys(self):
        assert key_name_for(4) == "A"
        assert key_name_for(29) == "Z"
        assert key_name_for(30) == "1"
        assert key_name_for(39) == "0"
        assert key_name_for(58) == "F1"
        assert key_name_for(69) == "F12"

    def test_mouse_buttons(self):
        assert key_name_for(-1) == "LMB"
        assert key_name_for(-2) == "RMB"

    def test_unknown_code_falls_back(self):
        assert key_name_for(9999) == "Btn"


class TestButtonBinding:
    def test_empty_label_derived_from_key_code(self):
        assert ButtonBinding(44, "", Transform(1, 0, 0)).key_name == "Spc"

    def test_explicit_label_kept(self):
        assert ButtonBinding(44, "Jump", Transform(1, 0, 0)).key_name == "Jump"

    def test_from_dict_without_key_name(self):
        button = ButtonBinding.from_dict({"keyCode": 4, "transform": TRANSFORM})
        assert button.key_name == "A"
        assert button.transform == Transform(1.0, 0.5, 0.25)

    def test_from_dict_requires_key_code(self):
        with pytest.raises(KeyError):
            ButtonBinding.from_dict({"transform": TRANSFORM})

    def test_is_immutable(self):
        button = ButtonBinding(4, "", Transform(1, 0, 0))
        with pytest.raises(AttributeError):
            button.key_code = 5


class TestJoystickBinding:
    def test_defaults_when_fields_missing(self):
        joystick = JoystickBinding.from_dict(
            {
                "upKeyCode": 26,
                "rightKeyCode": 7,
                "downKeyCode": 22,
                "leftKeyCode": 4,
                "transform": TRANSFORM,
            }
        )
        assert joystick.key_name == "Keyboard"
        assert joystick.mode is JoystickMode.FIXED

    def test_floating_mode_decoded(self):
        joystick = JoystickBinding.from_dict(
            {
                "upKeyCode": 26,
                "rightKeyCode": 7,
                "downKeyCode": 22,
                "leftKeyCode": 4,
                "keyName": "WASD",
                "transform": TRANSFORM,
                "mode": 1,
            }
        )
        assert joystick.mode is JoystickMode.FLOATING
        assert joystick.key_name == "WASD"
        assert joystick.to_dict()["mode"] == 1

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValueError):
            JoystickBinding.from_dict(
                {
                    "upKeyCode": 1,
                    "rightKeyCode": 2,
                    "downKeyCode": 3,
                    "leftKeyCode": 4,
                    "transform": TRANSFORM,
                    "mode": 7,
                }
            )


class TestMouseAreaBinding:
    def test_default_label(self):
        assert MouseAreaBinding.from_dict({"transform": TRANSFORM}).key_name == "Mouse"
        assert MouseAreaBinding("", Transform(1, 0, 0)).key_name == "Mouse"


class TestKeymapRecord:
    def test_minimal_dict_uses_defaults(self):
        record = KeymapRecord.from_dict({"bundleIdentifier": "com.example.app"})
        assert record == KeymapRecord.empty("com.example.app")
        assert record.version == "2.0.0"
        assert record.is_empty

    def test_requires_bundle_identifier(self):
        with pytest.raises(KeyError):
            KeymapRecord.from_dict({"buttonModels": []})

    def test_rejects_non_array_collections(self):
        with pytest.raises(TypeError):
            KeymapRecord.from_dict({"bundleIdentifier": "x", "buttonModels": {"a": 1}})

    def test_to_dict_field_names(self, sample_record):
        data = sample_record.to_dict()
        assert set(data) == {
            "buttonModels",
            "draggableButtonModels",
            "joystickModel",
            "mouseAreaModel",
            "bundleIdentifier",
            "version",
        }
        assert data["buttonModels"][0]["transform"] == {"size": 1.0, "xCoord": 0.25, "yCoord": 0.75}

    def test_control_count(self, sample_record):
        assert sample_record.control_count == 4
        assert not sample_record.is_empty


class TestConfigRecord:
    def test_bootstrap(self):
        config = ConfigRecord.bootstrap("default")
        assert config.default_keymap == "default"
        assert config.keymap_order == ["default"]
        assert config.contains("default")


class TestAppInfo:
    def test_display_name_defaults_to_last_component(self):
        assert AppInfo("com.example.racer").display_name == "racer"

    def test_empty_identifier_rejected(self):
        with pytest.raises(ValueError):
            AppInfo("")
