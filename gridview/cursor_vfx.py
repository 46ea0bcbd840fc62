"""Cursor visual effects: expanding highlights and particle trails."""

from __future__ import annotations

import enum
import logging
import math
import struct
from dataclasses import dataclass
from typing import Any, Union

from gridview.animation import Point

logger = logging.getLogger(__name__)

_U64_MASK = (1 << 64) - 1
_U32_MASK = (1 << 32) - 1


class VfxMode(enum.Enum):
    """The cursor effect to draw; the value is the setting's string form."""

    SONIC_BOOM = "sonicboom"
    RIPPLE = "ripple"
    WIREFRAME = "wireframe"
    RAILGUN = "railgun"
    TORPEDO = "torpedo"
    PIXIE_DUST = "pixiedust"
    DISABLED = ""

    def is_highlight(self) -> bool:
        """True for the effects that flash around the cursor's new position."""
        return self in _HIGHLIGHT_MODES

    def is_trail(self) -> bool:
        """True for the effects that leave particles along the cursor's path."""
        return self in _TRAIL_MODES


_HIGHLIGHT_MODES = frozenset({VfxMode.SONIC_BOOM, VfxMode.RIPPLE, VfxMode.WIREFRAME})
_TRAIL_MODES = frozenset({VfxMode.RAILGUN, VfxMode.TORPEDO, VfxMode.PIXIE_DUST})


def parse_vfx_mode(current: VfxMode, value: Any) -> VfxMode:
    """Parse a setting value naming an effect; keep ``current`` if it is invalid."""
    if not isinstance(value, str):
        logger.error("Expected a VfxMode string, but received %r", value)
        return current
    try:
        return VfxMode(value)
    except ValueError:
        logger.error("Expected a VfxMode name, but received %r", value)
        return current


def rotate_vec(v: Point, rot: float) -> Point:
    """Rotate a vector by ``rot`` radians."""
    sin = math.sin(rot)
    cos = math.cos(rot)
    return Point(v.x * cos - v.y * sin, v.x * sin + v.y * cos)


def _to_f32(number: float) -> float:
    return struct.unpack("<f", struct.pack("<f", number))[0]


class PcgRng:
    """A small deterministic PCG random number generator (XSH RR, 64/32)."""

    _MULTIPLIER = 6_364_136_223_846_793_005
    _ROTATE = 59
    _XSHIFT = 18
    _SPARE = 27

    def __init__(self) -> None:
        self.state = 0x853C_49E6_748F_EA9B
        self.inc = ((0xDA3E_39CB_94B9_5BDB << 1) | 1) & _U64_MASK

    def next_u32(self) -> int:
        """The next 32-bit output."""
        old_state = self.state
        self.state = (old_state * self._MULTIPLIER + self.inc) & _U64_MASK

        rot = old_state >> self._ROTATE
        xsh = (((old_state >> self._XSHIFT) ^ old_state) >> self._SPARE) & _U32_MASK
        return ((xsh >> rot) | (xsh << ((32 - rot) & 31))) & _U32_MASK

    def next_f32(self) -> float:
        """The next output scaled into [0, 1), at single precision."""
        return _to_f32(math.ldexp(float(self.next_u32()), -32))

    def rand_dir(self) -> Point:
        """A random, unnormalised vector with both coordinates in [-1, 1)."""
        x = self.next_f32()
        y = self.next_f32()
        return Point(x * 2.0 - 1.0, y * 2.0 - 1.0)

    def rand_dir_normalized(self) -> Point:
        """A random unit vector (zero in the degenerate case)."""
        return self.rand_dir().normalized()


@dataclass
class Particle:
    """One particle of a cursor trail."""

    pos: Point
    speed: Point
    rotation_speed: float
    lifetime: float


class PointHighlight:
    """An expanding shape drawn around the cursor when it changes shape."""

    def __init__(self, mode: VfxMode) -> None:
        if not mode.is_highlight():
            raise ValueError(f"{mode!r} is not a highlight mode")
        self.t = 0.0
        self.center_position = Point(0.0, 0.0)
        self.mode = mode

    def update(
        self, settings: Any, destination: Point, cursor_dimensions: Point, dt: float
    ) -> bool:
        """Advance the animation; return True while it is still running."""
        self.t = min(self.t + dt * 5.0, 1.0)
        return self.t < 1.0

    def restart(self, position: Point) -> None:
        """Start the animation again, centred on ``position``."""
        self.t = 0.0
        self.center_position = position


class ParticleTrail:
    """Particles spawned along the path the cursor travels."""

    def __init__(self, mode: VfxMode) -> None:
        if not mode.is_trail():
            raise ValueError(f"{mode!r} is not a trail mode")
        self.particles: list[Particle] = []
        self.previous_cursor_dest = Point(0.0, 0.0)
        self.trail_mode = mode
        self.rng = PcgRng()

    def _remove_dead(self, dt: float) -> None:
        # Swap-remove: order is not preserved, matching the spawn/update cycle.
        i = 0
        while i < len(self.particles):
            particle = self.particles[i]
            particle.lifetime -= dt
            if particle.lifetime <= 0.0:
                self.particles[i] = self.particles[-1]
                self.particles.pop()
            else:
                i += 1

    def _particle_count(
        self, travel_distance: float, cursor_dimensions: Point, settings: Any
    ) -> int:
        count = (
            (travel_distance / cursor_dimensions.y) ** 1.5
            * settings.vfx_particle_density
            * 0.01
            if cursor_dimensions.y
            else math.inf
        )
        if not math.isfinite(count) or count <= 0:
            return 0
        return int(count)

    def _spawn(
        self, settings: Any, destination: Point, cursor_dimensions: Point
    ) -> None:
        travel = destination - self.previous_cursor_dest
        travel_distance = travel.length()
        particle_count = self._particle_count(travel_distance, cursor_dimensions, settings)
        prev_p = self.previous_cursor_dest
        mode = self.trail_mode

        for i in range(particle_count):
            t = i / particle_count

            if mode is VfxMode.RAILGUN:
                phase = (
                    t
                    / math.pi
                    * settings.vfx_particle_phase
                    * (travel_distance / cursor_dimensions.y)
                )
                speed = Point(math.sin(phase), math.cos(phase)) * (
                    2.0 * settings.vfx_particle_speed
                )
            elif mode is VfxMode.TORPEDO:
                travel_dir = travel.normalized()
                particle_dir = (self.rng.rand_dir_normalized() - travel_dir * 1.5).normalized()
                speed = particle_dir * settings.vfx_particle_speed
            else:
                base_dir = self.rng.rand_dir_normalized()
                direction = Point(base_dir.x * 0.5, 0.4 + abs(base_dir.y))
                speed = direction * (3.0 * settings.vfx_particle_speed)

            if mode is VfxMode.RAILGUN:
                pos = prev_p + travel * t
                rotation_speed = math.pi * settings.vfx_particle_curl
            else:
                pos = (
                    prev_p
                    + travel * self.rng.next_f32()
                    + Point(0.0, cursor_dimensions.y * 0.5)
                )
                rotation_speed = (
                    (self.rng.next_f32() - 0.5)
                    * (math.pi / 2.0)
                    * settings.vfx_particle_curl
                )

            self.particles.append(
                Particle(pos, speed, rotation_speed, t * settings.vfx_particle_lifetime)
            )

    def update(
        self, settings: Any, destination: Point, cursor_dimensions: Point, dt: float
    ) -> bool:
        """Age, move and spawn particles; return True while any are alive."""
        self._remove_dead(dt)

        for particle in self.particles:
            particle.pos = particle.pos + particle.speed * dt
            particle.speed = rotate_vec(particle.speed, dt * particle.rotation_speed)

        if destination != self.previous_cursor_dest:
            self._spawn(settings, destination, cursor_dimensions)
            self.previous_cursor_dest = destination

        return bool(self.particles)

    def restart(self, position: Point) -> None:
        """Trails do not restart; particles simply keep fading out."""


CursorVfx = Union[PointHighlight, ParticleTrail]


def new_cursor_vfx(mode: VfxMode) -> CursorVfx | None:
    """Create the effect for ``mode``, or None when effects are disabled."""
    if mode.is_highlight():
        return PointHighlight(mode)
    if mode.is_trail():
        return ParticleTrail(mode)
    return None