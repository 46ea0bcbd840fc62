"""Window geometry: persisting the last window state and parsing sizes."""

from __future__ import annotations

import json
import logging
import os
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from gridview.settings import SETTINGS
from gridview.window_settings import WindowSettings

logger = logging.getLogger(__name__)

SETTINGS_FILE = "neovide-settings.json"

_U64_MAX = 2**64 - 1
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")


class GeometryError(Exception):
    """Raised when window geometry cannot be loaded or parsed."""


@dataclass(frozen=True)
class Dimensions:
    """A size in grid cells."""

    width: int
    height: int


DEFAULT_WINDOW_GEOMETRY = Dimensions(width=100, height=50)


@dataclass(frozen=True)
class Maximized:
    """The window was last maximized."""


@dataclass(frozen=True)
class Windowed:
    """The window was last a normal window with this position and grid size."""

    position: tuple[int, int] = (0, 0)
    size: Dimensions = DEFAULT_WINDOW_GEOMETRY


PersistentWindowSettings = Union[Maximized, Windowed]


def neovim_std_datapath() -> Path:
    """The editor's standard data directory for this platform."""
    if sys.platform == "win32":
        return Path.home() / "AppData" / "local" / "nvim-data"
    data_home = os.environ.get("XDG_DATA_HOME", "")
    base = Path(data_home) if data_home and Path(data_home).is_absolute() else (
        Path.home() / ".local" / "share"
    )
    return base / "nvim"


def settings_path() -> Path:
    """Path of the file holding the persisted window settings."""
    return neovim_std_datapath() / SETTINGS_FILE


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _decode_size(data: Any) -> Dimensions:
    if not isinstance(data, dict):
        raise GeometryError(f"invalid size: {data!r}")
    try:
        width, height = data["width"], data["height"]
    except KeyError as missing:
        raise GeometryError(f"missing field {missing.args[0]}") from None
    for value in (width, height):
        if not _is_int(value) or not 0 <= value <= _U64_MAX:
            raise GeometryError(f"invalid dimension: {value!r}")
    return Dimensions(width, height)


def _decode_position(data: Any) -> tuple[int, int]:
    if not isinstance(data, dict):
        raise GeometryError(f"invalid position: {data!r}")
    try:
        x, y = data["x"], data["y"]
    except KeyError as missing:
        raise GeometryError(f"missing field {missing.args[0]}") from None
    for value in (x, y):
        if not _is_int(value) or not _I32_MIN <= value <= _I32_MAX:
            raise GeometryError(f"invalid coordinate: {value!r}")
    return (x, y)


def _decode_window(data: Any) -> PersistentWindowSettings:
    if data == "Maximized":
        return Maximized()
    if isinstance(data, dict) and len(data) == 1:
        ((variant, body),) = data.items()
        if variant == "Maximized" and body is None:
            return Maximized()
        if variant == "Windowed" and isinstance(body, dict):
            position = (
                _decode_position(body["position"]) if "position" in body else (0, 0)
            )
            size = _decode_size(body["size"]) if "size" in body else DEFAULT_WINDOW_GEOMETRY
            return Windowed(position=position, size=size)
    raise GeometryError(f"unknown window settings: {data!r}")


def _encode_window(window: PersistentWindowSettings) -> Any:
    if isinstance(window, Maximized):
        return "Maximized"
    x, y = window.position
    return {
        "Windowed": {
            "position": {"x": x, "y": y},
            "size": {"width": window.size.width, "height": window.size.height},
        }
    }


def load_last_window_settings(path: Path | str | None = None) -> PersistentWindowSettings:
    """Load the persisted window state, replacing an empty size with the default."""
    file_path = Path(path) if path is not None else settings_path()
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as error:
        raise GeometryError(str(error)) from error
    try:
        data = json.loads(text)
    except json.JSONDecodeError as error:
        raise GeometryError(str(error)) from error
    if not isinstance(data, dict) or "window" not in data:
        raise GeometryError("missing field window")

    window = _decode_window(data["window"])
    logger.debug("Loaded window settings: %r", window)

    if isinstance(window, Windowed) and (window.size.width == 0 or window.size.height == 0):
        window = Windowed(position=window.position, size=DEFAULT_WINDOW_GEOMETRY)
    return window


def _current_window_settings() -> WindowSettings:
    try:
        return SETTINGS.get(WindowSettings)
    except KeyError:
        return WindowSettings()


def save_window_geometry(
    maximized: bool,
    grid_size: Dimensions | None,
    position: tuple[int, int] | None,
    window_settings: WindowSettings | None = None,
    path: Path | str | None = None,
) -> None:
    """Persist the window state, honouring the remember-size/position options."""
    if window_settings is None:
        window_settings = _current_window_settings()

    if maximized and window_settings.remember_window_size:
        window: PersistentWindowSettings = Maximized()
    else:
        size = (
            grid_size
            if window_settings.remember_window_size and grid_size is not None
            else DEFAULT_WINDOW_GEOMETRY
        )
        pos = (
            position
            if window_settings.remember_window_position and position is not None
            else (0, 0)
        )
        window = Windowed(position=tuple(pos), size=size)

    file_path = Path(path) if path is not None else settings_path()
    file_path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps({"window": _encode_window(window)}, separators=(",", ":"))
    logger.debug("Saved Window Settings: %s", text)
    file_path.write_text(text, encoding="utf-8")


def _saved_window_size(path: Path | str | None) -> Dimensions:
    try:
        window = load_last_window_settings(path)
    except GeometryError:
        return DEFAULT_WINDOW_GEOMETRY
    if isinstance(window, Windowed):
        return window.size
    return DEFAULT_WINDOW_GEOMETRY


def parse_window_geometry(
    geometry: str | None, path: Path | str | None = None
) -> Dimensions:
    """Parse ``<width>x<height>``, or fall back to the saved or default size."""
    if geometry is None:
        return _saved_window_size(path)

    invalid = f"Invalid geometry: {geometry}\nValid format: <width>x<height>"
    dimensions = []
    for part in geometry.split("x"):
        if not _UNSIGNED.fullmatch(part) or int(part) > _U64_MAX:
            raise GeometryError(invalid)
        value = int(part)
        if value == 0:
            raise GeometryError(
                "Invalid geometry: Window dimensions should be greater than 0."
            )
        dimensions.append(value)

    if len(dimensions) != 2:
        raise GeometryError(invalid)
    width, height = dimensions
    return Dimensions(width=width, height=height)