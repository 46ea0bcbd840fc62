import math

import pytest

from gridview.animation import Point
from gridview.cursor_settings import CursorSettings
from gridview.cursor_vfx import (
    ParticleTrail,
    PcgRng,
    PointHighlight,
    VfxMode,
    new_cursor_vfx,
    parse_vfx_mode,
    rotate_vec,
)

NAMES = ["sonicboom", "ripple", "wireframe", "railgun", "torpedo", "pixiedust", ""]


@pytest.mark.parametrize("name", NAMES)
def test_parse_round_trip(name):
    mode = parse_vfx_mode(VfxMode.DISABLED, name)
    assert mode.value == name


def test_parse_known_names():
    assert parse_vfx_mode(VfxMode.DISABLED, "railgun") is VfxMode.RAILGUN
    assert parse_vfx_mode(VfxMode.RAILGUN, "") is VfxMode.DISABLED


def test_parse_unknown_name_keeps_current():
    assert parse_vfx_mode(VfxMode.TORPEDO, "fireworks") is VfxMode.TORPEDO


def test_parse_non_string_keeps_current():
    assert parse_vfx_mode(VfxMode.RIPPLE, 3) is VfxMode.RIPPLE


def test_mode_families():
    assert VfxMode.SONIC_BOOM.is_highlight()
    assert not VfxMode.SONIC_BOOM.is_trail()
    assert VfxMode.PIXIE_DUST.is_trail()
    assert not VfxMode.DISABLED.is_highlight()
    assert not VfxMode.DISABLED.is_trail()


def test_new_cursor_vfx():
    assert isinstance(new_cursor_vfx(VfxMode.WIREFRAME), PointHighlight)
    assert isinstance(new_cursor_vfx(VfxMode.TORPEDO), ParticleTrail)
    assert new_cursor_vfx(VfxMode.DISABLED) is None


def test_wrong_mode_for_effect_rejected():
    with pytest.raises(ValueError):
        PointHighlight(VfxMode.RAILGUN)
    with pytest.raises(ValueError):
        ParticleTrail(VfxMode.RIPPLE)


def test_rotate_preserves_length():
    v = Point(3.0, -4.0)
    for rot in (0.3, 1.0, -2.5):
        assert rotate_vec(v, rot).length() == pytest.approx(v.length())


def test_rotate_by_zero_is_identity():
    v = Point(1.5, 2.5)
    assert rotate_vec(v, 0.0) == v


def test_rotate_full_turn_returns():
    v = Point(1.5, 2.5)
    rotated = rotate_vec(v, 2 * math.pi)
    assert rotated.x == pytest.approx(v.x)
    assert rotated.y == pytest.approx(v.y)


def test_rng_is_deterministic():
    a, b = PcgRng(), PcgRng()
    assert [a.next_u32() for _ in range(20)] == [b.next_u32() for _ in range(20)]


def test_rng_outputs_in_range():
    rng = PcgRng()
    for _ in range(500):
        value = rng.next_u32()
        assert 0 <= value < 2**32
    for _ in range(500):
        assert 0.0 <= rng.next_f32() <= 1.0


def test_rng_rand_dir_in_range():
    rng = PcgRng()
    for _ in range(200):
        d = rng.rand_dir()
        assert -1.0 <= d.x <= 1.0
        assert -1.0 <= d.y <= 1.0


def test_rng_normalized_is_unit():
    rng = PcgRng()
    for _ in range(100):
        assert rng.rand_dir_normalized().length() == pytest.approx(1.0)


def test_highlight_update_and_restart():
    settings = CursorSettings()
    highlight = PointHighlight(VfxMode.SONIC_BOOM)
    assert highlight.update(settings, Point(), Point(10, 20), 0.1) is True
    assert highlight.update(settings, Point(), Point(10, 20), 1.0) is False
    assert highlight.t == 1.0
    highlight.restart(Point(5.0, 6.0))
    assert highlight.t == 0.0
    assert highlight.center_position == Point(5.0, 6.0)


def test_trail_without_movement_spawns_nothing():
    trail = ParticleTrail(VfxMode.PIXIE_DUST)
    assert trail.update(CursorSettings(), Point(0.0, 0.0), Point(10, 20), 0.01) is False
    assert trail.particles == []


def test_railgun_particles_lie_on_path():
    settings = CursorSettings()
    trail = ParticleTrail(VfxMode.RAILGUN)
    destination = Point(1000.0, 0.0)
    assert trail.update(settings, destination, Point(10, 20), 0.01) is True
    assert trail.particles
    assert trail.previous_cursor_dest == destination
    assert trail.particles[0].pos == Point(0.0, 0.0)
    for particle in trail.particles:
        assert particle.pos.y == 0.0
        assert 0.0 <= particle.pos.x < destination.x
        assert 0.0 <= particle.lifetime < settings.vfx_particle_lifetime


@pytest.mark.parametrize("mode", [VfxMode.TORPEDO, VfxMode.PIXIE_DUST])
def test_random_trails_spawn_within_travel(mode):
    settings = CursorSettings()
    trail = ParticleTrail(mode)
    trail.update(settings, Point(1000.0, 0.0), Point(10, 20), 0.01)
    assert trail.particles
    for particle in trail.particles:
        assert particle.pos.y == pytest.approx(10.0)
        assert 0.0 <= particle.pos.x <= 1000.0


def test_trail_particles_die_out():
    settings = CursorSettings()
    trail = ParticleTrail(VfxMode.RAILGUN)
    destination = Point(1000.0, 0.0)
    trail.update(settings, destination, Point(10, 20), 0.01)
    alive = trail.update(
        settings, destination, Point(10, 20), settings.vfx_particle_lifetime + 1.0
    )
    assert alive is False
    assert trail.particles == []


def test_trail_restart_keeps_particles():
    trail = ParticleTrail(VfxMode.RAILGUN)
    trail.update(CursorSettings(), Point(1000.0, 0.0), Point(10, 20), 0.01)
    count = len(trail.particles)
    trail.restart(Point(3.0, 3.0))
    assert len(trail.particles) == count