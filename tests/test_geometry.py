import json
import sys
from pathlib import Path

import pytest

from gridview.geometry import (
    DEFAULT_WINDOW_GEOMETRY,
    Dimensions,
    GeometryError,
    Maximized,
    Windowed,
    load_last_window_settings,
    neovim_std_datapath,
    parse_window_geometry,
    save_window_geometry,
    settings_path,
)
from gridview.window_settings import WindowSettings


@pytest.fixture
def settings_file(tmp_path):
    return tmp_path / "data" / "neovide-settings.json"


def test_default_geometry_matches_source():
    assert DEFAULT_WINDOW_GEOMETRY == Dimensions(width=100, height=50)


def test_save_and_load_windowed_round_trip(settings_file):
    size = Dimensions(width=120, height=40)
    save_window_geometry(False, size, (15, 25), WindowSettings(), settings_file)
    assert load_last_window_settings(settings_file) == Windowed(position=(15, 25), size=size)


def test_save_maximized_round_trip(settings_file):
    save_window_geometry(True, Dimensions(80, 30), (1, 2), WindowSettings(), settings_file)
    assert load_last_window_settings(settings_file) == Maximized()
    assert json.loads(settings_file.read_text()) == {"window": "Maximized"}


def test_maximized_not_remembered_without_remember_size(settings_file):
    options = WindowSettings(remember_window_size=False)
    save_window_geometry(True, Dimensions(80, 30), (7, 9), options, settings_file)
    loaded = load_last_window_settings(settings_file)
    assert loaded == Windowed(position=(7, 9), size=DEFAULT_WINDOW_GEOMETRY)


def test_position_not_remembered(settings_file):
    options = WindowSettings(remember_window_position=False)
    size = Dimensions(90, 33)
    save_window_geometry(False, size, (7, 9), options, settings_file)
    assert load_last_window_settings(settings_file) == Windowed(position=(0, 0), size=size)


def test_missing_grid_size_uses_default(settings_file):
    save_window_geometry(False, None, None, WindowSettings(), settings_file)
    assert load_last_window_settings(settings_file) == Windowed(
        position=(0, 0), size=DEFAULT_WINDOW_GEOMETRY
    )


def test_saved_file_uses_tagged_layout(settings_file):
    save_window_geometry(False, Dimensions(81, 27), (3, 4), WindowSettings(), settings_file)
    data = json.loads(settings_file.read_text())
    assert data["window"]["Windowed"]["size"] == {"width": 81, "height": 27}
    assert data["window"]["Windowed"]["position"] == {"x": 3, "y": 4}


def test_zero_size_replaced_by_default(settings_file):
    settings_file.parent.mkdir(parents=True)
    settings_file.write_text(
        json.dumps({"window": {"Windowed": {"position": {"x": 5, "y": 6},
                                            "size": {"width": 0, "height": 20}}}})
    )
    assert load_last_window_settings(settings_file) == Windowed(
        position=(5, 6), size=DEFAULT_WINDOW_GEOMETRY
    )


def test_missing_fields_use_defaults(settings_file):
    settings_file.parent.mkdir(parents=True)
    settings_file.write_text(json.dumps({"window": {"Windowed": {}}}))
    assert load_last_window_settings(settings_file) == Windowed()


def test_load_missing_file_raises(settings_file):
    with pytest.raises(GeometryError):
        load_last_window_settings(settings_file)


def test_load_invalid_json_raises(settings_file):
    settings_file.parent.mkdir(parents=True)
    settings_file.write_text("not json")
    with pytest.raises(GeometryError):
        load_last_window_settings(settings_file)


def test_load_unknown_variant_raises(settings_file):
    settings_file.parent.mkdir(parents=True)
    settings_file.write_text(json.dumps({"window": "Minimized"}))
    with pytest.raises(GeometryError):
        load_last_window_settings(settings_file)


def test_parse_geometry_valid(settings_file):
    assert parse_window_geometry("120x40", settings_file) == Dimensions(120, 40)


def test_parse_geometry_none_uses_default_without_file(settings_file):
    assert parse_window_geometry(None, settings_file) == DEFAULT_WINDOW_GEOMETRY


def test_parse_geometry_none_uses_saved_size(settings_file):
    size = Dimensions(77, 22)
    save_window_geometry(False, size, (0, 0), WindowSettings(), settings_file)
    assert parse_window_geometry(None, settings_file) == size


def test_parse_geometry_none_after_maximized_uses_default(settings_file):
    save_window_geometry(True, Dimensions(77, 22), None, WindowSettings(), settings_file)
    assert parse_window_geometry(None, settings_file) == DEFAULT_WINDOW_GEOMETRY


def test_parse_geometry_zero_dimension(settings_file):
    with pytest.raises(GeometryError) as error:
        parse_window_geometry("0x5", settings_file)
    assert str(error.value) == "Invalid geometry: Window dimensions should be greater than 0."


@pytest.mark.parametrize("text", ["abc", "10x", "1x2x3", "", "10", "-5x5", "5.5x5"])
def test_parse_geometry_invalid(text, settings_file):
    with pytest.raises(GeometryError) as error:
        parse_window_geometry(text, settings_file)
    assert str(error.value) == f"Invalid geometry: {text}\nValid format: <width>x<height>"


def test_unix_datapath_uses_xdg_data_home(monkeypatch, tmp_path):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    assert neovim_std_datapath() == tmp_path / "nvim"
    assert settings_path() == tmp_path / "nvim" / "neovide-settings.json"


def test_windows_datapath_under_home(monkeypatch, tmp_path):
    monkeypatch.setattr(sys, "platform", "win32")
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
    assert neovim_std_datapath() == tmp_path / "AppData" / "local" / "nvim-data"