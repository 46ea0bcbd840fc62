"""Cursor geometry and animation: shaped corners easing towards the grid cell."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field, replace
from typing import Mapping

from gridview.animation import F32_EPSILON, Point, ease_out_expo, ease_point, lerp
from gridview.cursor_settings import CursorSettings
from gridview.cursor_vfx import CursorVfx, VfxMode, new_cursor_vfx
from gridview.geometry import Dimensions

DEFAULT_CELL_PERCENTAGE = 1.0 / 8.0

STANDARD_CORNERS: tuple[tuple[float, float], ...] = (
    (-0.5, -0.5),
    (0.5, -0.5),
    (0.5, 0.5),
    (-0.5, 0.5),
)


class CursorShape(enum.Enum):
    """The shape the editor asks the cursor to take."""

    BLOCK = "block"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass
class Corner:
    """One corner of the cursor, animated independently of the others.

    ``relative_position`` is in cell units relative to the cell centre.
    """

    start_position: Point = field(default_factory=Point)
    current_position: Point = field(default_factory=Point)
    relative_position: Point = field(default_factory=Point)
    previous_destination: Point = field(default_factory=lambda: Point(-1000.0, -1000.0))
    length_multiplier: float = 1.0
    t: float = 0.0

    def update(
        self,
        settings: CursorSettings,
        font_dimensions: Point,
        destination: Point,
        dt: float,
        immediate_movement: bool,
    ) -> bool:
        """Move towards ``destination`` (the cell centre); return True while moving."""
        if destination != self.previous_destination:
            self.t = 0.0
            self.start_position = self.current_position
            self.previous_destination = destination
            if settings.distance_length_adjust:
                distance = (destination - self.current_position).length()
                self.length_multiplier = (
                    max(math.log10(distance), 0.0) if distance > 0.0 else 0.0
                )
            else:
                self.length_multiplier = 1.0

        if abs(self.t - 1.0) < F32_EPSILON:
            return False

        scaled_relative = Point(
            self.relative_position.x * font_dimensions.x,
            self.relative_position.y * font_dimensions.y,
        )
        corner_destination = destination + scaled_relative

        if immediate_movement:
            self.t = 1.0
            self.current_position = corner_destination
            return True

        # Corners leading the motion move faster than the ones trailing behind.
        travel_direction = (destination - self.current_position).normalized()
        corner_direction = self.relative_position.normalized()
        alignment = travel_direction.dot(corner_direction)

        trail = min(max(1.0 - settings.trail_size, 0.0), 1.0)
        corner_dt = dt * lerp(1.0, trail, -alignment)
        duration = settings.animation_length * self.length_multiplier
        if duration == 0.0:
            step = -math.inf if corner_dt < 0.0 else math.inf
        else:
            step = corner_dt / duration
        self.t = min(self.t + step, 1.0)

        self.current_position = ease_point(
            ease_out_expo, self.start_position, corner_destination, self.t
        )
        return True


@dataclass(frozen=True)
class WindowPlacement:
    """Where a grid window currently sits and how far it has scrolled."""

    grid_position: Point
    grid_size: Dimensions
    current_scroll: float = 0.0
    top_line: int = 0


class CursorAnimator:
    """Keeps the four cursor corners and the optional visual effect in motion."""

    def __init__(self) -> None:
        self.corners: list[Corner] = [Corner() for _ in STANDARD_CORNERS]
        self.destination = Point(0.0, 0.0)
        self.vfx: CursorVfx | None = None
        self._previous_vfx_mode = VfxMode.DISABLED
        self._vfx_restart_pending = False
        self.set_cursor_shape(CursorShape.BLOCK, DEFAULT_CELL_PERCENTAGE)

    def set_cursor_shape(self, shape: CursorShape, cell_percentage: float) -> None:
        """Reshape the corners; the move is animated from where they are now."""
        reshaped = []
        for corner, (x, y) in zip(self.corners, STANDARD_CORNERS):
            if shape is CursorShape.BLOCK:
                relative = Point(x, y)
            elif shape is CursorShape.VERTICAL:
                # Pull the right edge in to the bar width, keeping the left edge.
                relative = Point((x + 0.5) * cell_percentage - 0.5, y)
            else:
                # Same as vertical but on y, anchored to the bottom of the cell.
                relative = Point(x, -((-y + 0.5) * cell_percentage - 0.5))
            reshaped.append(
                replace(
                    corner,
                    relative_position=relative,
                    t=0.0,
                    start_position=corner.current_position,
                )
            )
        self.corners = reshaped
        self._vfx_restart_pending = True

    def update_cursor_destination(
        self,
        font_dimensions: tuple[int, int],
        grid_position: tuple[int, int],
        parent_window_id: int,
        windows: Mapping[int, WindowPlacement],
    ) -> Point:
        """Compute the cursor's top-left pixel position and store it as the destination."""
        font_width, font_height = font_dimensions
        cursor_x, cursor_y = grid_position

        window = windows.get(parent_window_id)
        if window is not None:
            origin = window.grid_position
            grid_x = cursor_x + origin.x
            grid_y = cursor_y + origin.y - (window.current_scroll - window.top_line)
            # Scrolling only moves content vertically, so only y needs clamping.
            grid_y = min(
                max(grid_y, origin.y), origin.y + window.grid_size.height - 1.0
            )
            self.destination = Point(grid_x * font_width, grid_y * font_height)
        else:
            self.destination = Point(
                float(cursor_x * font_width), float(cursor_y * font_height)
            )
        return self.destination

    def animate(
        self,
        settings: CursorSettings,
        cursor_dimensions: Point,
        dt: float,
        immediate_movement: bool,
    ) -> bool:
        """Advance corners and effect by ``dt``; return True while anything moves."""
        if settings.vfx_mode != self._previous_vfx_mode:
            self.vfx = new_cursor_vfx(settings.vfx_mode)
            self._previous_vfx_mode = settings.vfx_mode

        center = self.destination + cursor_dimensions * 0.5

        if self._vfx_restart_pending:
            if self.vfx is not None:
                self.vfx.restart(center)
            self._vfx_restart_pending = False

        animating = False
        if not center.is_zero():
            for corner in self.corners:
                animating |= corner.update(
                    settings, cursor_dimensions, center, dt, immediate_movement
                )
            if self.vfx is not None:
                animating |= self.vfx.update(settings, center, cursor_dimensions, dt)
        return animating