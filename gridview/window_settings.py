"""Setting groups for the main window and keyboard input."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class WindowSettings:
    """Options controlling the window's behaviour and appearance."""

    refresh_rate: int = 60
    no_idle: bool = False
    transparency: float = 1.0
    fullscreen: bool = False
    iso_layout: bool = False
    remember_window_size: bool = True
    remember_window_position: bool = True
    hide_mouse_when_typing: bool = False
    touch_deadzone: float = 6.0
    touch_drag_timeout: float = 0.17


@dataclass
class KeyboardSettings:
    """Options controlling keyboard input."""

    use_logo: bool = False