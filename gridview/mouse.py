"""Translation of pointer, wheel and touch input into editor mouse commands."""

from __future__ import annotations

import enum
import math
import time
from dataclasses import dataclass, field
from typing import Callable, Hashable, Sequence, Union

from gridview.animation import Point
from gridview.settings import SETTINGS
from gridview.window_settings import WindowSettings

GridPosition = tuple[int, int]
FontDimensions = tuple[int, int]


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle in pixels."""

    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_wh(cls, width: float, height: float) -> Rect:
        """A rectangle of the given size anchored at the origin."""
        return cls(0.0, 0.0, float(width), float(height))

    def contains(self, point: Point) -> bool:
        """True if the point lies inside, counting the left and top edges only."""
        return self.left <= point.x < self.right and self.top <= point.y < self.bottom


@dataclass(frozen=True)
class WindowRegion:
    """Where an editor grid was drawn, in pixels."""

    id: int
    region: Rect
    floating_order: int | None = None


@dataclass(frozen=True)
class PointerContext:
    """What the mouse manager needs to know about the window being drawn.

    ``window_regions`` are in draw order: later entries are drawn on top.
    """

    window_size: tuple[int, int]
    font_dimensions: FontDimensions
    window_regions: Sequence[WindowRegion] = ()
    modifier_string: str = ""


class TouchPhase(enum.Enum):
    """Stage of a touch gesture."""

    STARTED = "started"
    MOVED = "moved"
    ENDED = "ended"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class DragCommand:
    button: str
    grid_id: int
    position: GridPosition
    modifier_string: str


@dataclass(frozen=True)
class MouseButtonCommand:
    button: str
    action: str
    grid_id: int
    position: GridPosition
    modifier_string: str


@dataclass(frozen=True)
class ScrollCommand:
    direction: str
    grid_id: int
    position: GridPosition
    modifier_string: str


MouseCommand = Union[DragCommand, MouseButtonCommand, ScrollCommand]


def clamp_position(position: Point, region: Rect, font_dimensions: FontDimensions) -> Point:
    """Keep a pixel position inside a region, leaving room for one whole cell."""
    font_width, font_height = font_dimensions
    return Point(
        max(min(position.x, region.right - font_width), region.left),
        max(min(position.y, region.bottom - font_height), region.top),
    )


def _saturating_int(value: float) -> int:
    if math.isnan(value) or value <= 0:
        return 0
    return int(value)


def to_grid_coords(position: Point, font_dimensions: FontDimensions) -> GridPosition:
    """Convert a pixel position to grid cell coordinates; negatives become 0."""
    font_width, font_height = font_dimensions
    return (
        _saturating_int(position.x) // font_width,
        _saturating_int(position.y) // font_height,
    )


_BUTTON_TEXT = {"left": "left", "right": "right", "middle": "middle"}


def mouse_button_to_button_text(button: str) -> str | None:
    """The editor's name for a mouse button, or None for buttons it ignores."""
    return _BUTTON_TEXT.get(button.lower())


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass
class _TouchTrace:
    start_time: float
    start: Point
    last: Point
    left_deadzone_once: bool


class MouseManager:
    """Tracks pointer state and produces the editor's mouse commands.

    Each handler returns the commands it produced and also passes each one to
    ``send`` when that callback is given.
    """

    def __init__(
        self,
        send: Callable[[MouseCommand], None] | None = None,
        settings: WindowSettings | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._send = send
        self._settings = settings
        self._clock = clock
        self.dragging: str | None = None
        self.drag_position: GridPosition = (0, 0)
        self.has_moved = False
        self.position: GridPosition = (0, 0)
        self.relative_position: GridPosition = (0, 0)
        self._scroll_x = 0.0
        self._scroll_y = 0.0
        self._touches: dict[Hashable, _TouchTrace] = {}
        self.window_details_under_mouse: WindowRegion | None = None
        self.enabled = True

    def _window_settings(self) -> WindowSettings:
        if self._settings is not None:
            return self._settings
        try:
            return SETTINGS.get(WindowSettings)
        except KeyError:
            return WindowSettings()

    def _emit(self, command: MouseCommand) -> MouseCommand:
        if self._send is not None:
            self._send(command)
        return command

    def handle_pointer_motion(self, x: int, y: int, context: PointerContext) -> list[MouseCommand]:
        """Move the pointer to pixel ``(x, y)``, sending a drag when dragging."""
        width, height = context.window_size
        if x < 0 or x >= width or y < 0 or y >= height:
            return []

        position = Point(float(x), float(y))
        font_dimensions = context.font_dimensions

        # While dragging, commands go to the window the drag started on; otherwise
        # to the topmost window under the pointer.
        if self.dragging is not None:
            under = self.window_details_under_mouse
            relevant = (
                next((d for d in context.window_regions if d.id == under.id), None)
                if under is not None
                else None
            )
        else:
            relevant = None
            for details in context.window_regions:
                if details.region.contains(position):
                    relevant = details

        bounds = relevant.region if relevant is not None else Rect.from_wh(width, height)
        clamped = clamp_position(position, bounds, font_dimensions)
        self.position = to_grid_coords(clamped, font_dimensions)

        commands: list[MouseCommand] = []
        if relevant is not None:
            relative = Point(clamped.x - relevant.region.left, clamped.y - relevant.region.top)
            self.relative_position = to_grid_coords(relative, font_dimensions)

            previous = self.drag_position
            self.drag_position = self.relative_position
            moved = self.drag_position != previous

            if self.dragging is not None and moved:
                commands.append(
                    self._emit(
                        DragCommand(
                            button=self.dragging,
                            grid_id=relevant.id,
                            position=self.drag_position,
                            modifier_string=context.modifier_string,
                        )
                    )
                )
            else:
                self.window_details_under_mouse = relevant

            self.has_moved = self.dragging is not None and (self.has_moved or moved)
        return commands

    def handle_pointer_transition(
        self, button: str, down: bool, context: PointerContext
    ) -> list[MouseCommand]:
        """Press or release a mouse button."""
        if not self.enabled:
            return []
        button_text = mouse_button_to_button_text(button)
        if button_text is None:
            return []

        commands: list[MouseCommand] = []
        details = self.window_details_under_mouse
        if details is not None:
            position = (
                self.drag_position if not down and self.has_moved else self.relative_position
            )
            commands.append(
                self._emit(
                    MouseButtonCommand(
                        button=button_text,
                        action="press" if down else "release",
                        grid_id=details.id,
                        position=position,
                        modifier_string=context.modifier_string,
                    )
                )
            )

        self.dragging = button_text if down else None
        if self.dragging is None:
            self.has_moved = False
        return commands

    def _scroll_commands(
        self, count: int, direction: str, context: PointerContext
    ) -> list[MouseCommand]:
        details = self.window_details_under_mouse
        command = ScrollCommand(
            direction=direction,
            grid_id=details.id if details is not None else 0,
            position=self.drag_position,
            modifier_string=context.modifier_string,
        )
        return [self._emit(command) for _ in range(count)]

    def handle_line_scroll(self, x: float, y: float, context: PointerContext) -> list[MouseCommand]:
        """Scroll by a number of lines; fractions accumulate across calls."""
        if not self.enabled:
            return []

        commands: list[MouseCommand] = []

        previous_y = int(self._scroll_y)
        self._scroll_y += y
        new_y = int(self._scroll_y)
        if new_y != previous_y:
            direction = "up" if new_y > previous_y else "down"
            commands += self._scroll_commands(abs(new_y - previous_y), direction, context)

        previous_x = int(self._scroll_x)
        self._scroll_x += x
        new_x = int(self._scroll_x)
        if new_x != previous_x:
            direction = "right" if new_x > previous_x else "left"
            commands += self._scroll_commands(abs(new_x - previous_x), direction, context)

        return commands

    def handle_pixel_scroll(
        self, pixel_x: float, pixel_y: float, context: PointerContext
    ) -> list[MouseCommand]:
        """Scroll by a pixel distance, converted to lines using the font size."""
        font_width, font_height = context.font_dimensions
        return self.handle_line_scroll(pixel_x / font_width, pixel_y / font_height, context)

    def handle_touch(
        self,
        finger_id: Hashable,
        location: Point,
        phase: TouchPhase,
        context: PointerContext,
    ) -> list[MouseCommand]:
        """Handle one stage of a touch: taps click, swipes scroll, long presses drag."""
        commands: list[MouseCommand] = []

        if phase is TouchPhase.STARTED:
            settings = self._window_settings()
            self._touches[finger_id] = _TouchTrace(
                start_time=self._clock(),
                start=location,
                last=location,
                left_deadzone_once=not settings.touch_deadzone >= 0.0,
            )

        elif phase is TouchPhase.MOVED:
            dragging_just_now = False
            trace = self._touches.get(finger_id)
            if trace is not None:
                if not trace.left_deadzone_once:
                    settings = self._window_settings()
                    distance = (trace.start - location).length()
                    if distance >= settings.touch_deadzone:
                        trace.left_deadzone_once = True
                    timeout = max(0.0, settings.touch_drag_timeout)
                    if (
                        self.dragging is None
                        and self._clock() - trace.start_time >= timeout
                    ):
                        dragging_just_now = True

                if self.dragging is not None or dragging_just_now:
                    commands += self.handle_pointer_motion(
                        _round_half_away(location.x), _round_half_away(location.y), context
                    )
                elif trace.left_deadzone_once:
                    delta_x = trace.last.x - location.x
                    delta_y = location.y - trace.last.y
                    # Scroll relative to the last position, not the start of the swipe.
                    trace.last = location
                    commands += self.handle_pixel_scroll(delta_x, delta_y, context)

            if dragging_just_now:
                commands += self.handle_pointer_motion(
                    _round_half_away(location.x), _round_half_away(location.y), context
                )
                commands += self.handle_pointer_transition("left", True, context)

        else:
            trace = self._touches.pop(finger_id, None)
            if trace is not None:
                if self.dragging is not None:
                    commands += self.handle_pointer_transition("left", False, context)
                if not trace.left_deadzone_once:
                    commands += self.handle_pointer_motion(
                        _round_half_away(trace.start.x),
                        _round_half_away(trace.start.y),
                        context,
                    )
                    commands += self.handle_pointer_transition("left", True, context)
                    commands += self.handle_pointer_transition("left", False, context)

        return commands