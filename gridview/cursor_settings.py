"""Setting group controlling cursor animation and effects."""

from __future__ import annotations

from dataclasses import dataclass

from gridview.cursor_vfx import VfxMode

SETTING_PREFIX = "cursor"


@dataclass
class CursorSettings:
    """Options for cursor animation and visual effects.

    ``unfocused_outline_width`` is in ems; at zero or below the unfocused
    block cursor is invisible.
    """

    antialiasing: bool = True
    animation_length: float = 0.06
    distance_length_adjust: bool = True
    animate_in_insert_mode: bool = True
    animate_command_line: bool = True
    trail_size: float = 0.7
    unfocused_outline_width: float = 1.0 / 8.0
    vfx_mode: VfxMode = VfxMode.DISABLED
    vfx_opacity: float = 200.0
    vfx_particle_lifetime: float = 1.2
    vfx_particle_density: float = 7.0
    vfx_particle_speed: float = 10.0
    vfx_particle_phase: float = 1.5
    vfx_particle_curl: float = 1.0