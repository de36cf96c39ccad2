#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Simulation Module Tests
================================================================================

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 18, 2026
License:        MIT License
================================================================================
"""

import time

import numpy as np
import pytest
from seekerfield.config import ConfigurationError, DecayPolicy, SimulationConfig
from seekerfield.forces import GravityMode
from seekerfield.projectile import Projectile
from seekerfield.simulation import (
    FrameSnapshot,
    SeekerSimulation,
    TickInput,
    create_simulation,
)
from seekerfield.vector import Vector2


def seeded(config=None, positions=((400, 400),)):
    """Simulation with seekers at the given positions."""
    sim = SeekerSimulation(config or SimulationConfig())
    for x, y in positions:
        sim.spawn_seeker(Vector2(x, y))
    return sim


class TestSpawning:
    """Tests for adding and removing seekers."""

    def test_spawn(self):
        """Spawning adds a seeker facing up."""
        sim = SeekerSimulation()
        seeker = sim.spawn_seeker(Vector2(100, 100))
        assert sim.seeker_count == 1
        assert seeker.heading == 0.0

    def test_duplicate_position_rejected(self):
        """A spawn on top of the newest seeker is ignored."""
        sim = SeekerSimulation()
        sim.spawn_seeker(Vector2(100, 100))
        assert sim.spawn_seeker(Vector2(100, 100)) is None
        assert sim.seeker_count == 1
        sim.spawn_seeker(Vector2(101, 100))
        assert sim.seeker_count == 2

    def test_seeker_cap_evicts_oldest(self):
        """Spawning over the cap evicts the oldest seeker."""
        sim = seeded(SimulationConfig(seeker_cap=3),
                     [(100, 100), (200, 100), (300, 100), (400, 100), (500, 100)])
        assert sim.seeker_count == 3
        assert [s.position.x for s in sim.seekers] == [300, 400, 500]

    def test_zero_cap(self):
        """With a seeker cap of zero spawns are dropped immediately."""
        sim = SeekerSimulation(SimulationConfig(seeker_cap=0))
        assert sim.spawn_seeker(Vector2(100, 100)) is None
        assert sim.seeker_count == 0

    def test_remove_oldest(self):
        """Removing takes the oldest seeker, and is a no-op when empty."""
        sim = SeekerSimulation()
        assert sim.remove_oldest_seeker() is None
        first = sim.spawn_seeker(Vector2(100, 100))
        sim.spawn_seeker(Vector2(200, 100))
        assert sim.remove_oldest_seeker() is first
        assert sim.seeker_count == 1


class TestFiring:
    """Tests for firing projectiles."""

    def test_fire_from_seeker(self):
        """Projectiles leave the muzzle along the seeker heading."""
        sim = seeded()
        p = sim.fire_projectile(sim.seekers[0])
        assert p.position.x == pytest.approx(400.0)
        assert p.position.y == pytest.approx(360.0)
        assert p.velocity.y == pytest.approx(-10.0)
        assert sim.projectile_count == 1

    def test_projectile_cap(self):
        """Firing at the projectile cap is rejected."""
        sim = seeded(SimulationConfig(projectile_cap=2))
        seeker = sim.seekers[0]
        assert sim.fire_projectile(seeker) is not None
        assert sim.fire_projectile(seeker) is not None
        assert sim.fire_projectile(seeker) is None
        assert sim.projectile_count == 2

    def test_fire_from_all_respects_cap(self):
        """Firing from every seeker stops at the cap."""
        sim = seeded(SimulationConfig(projectile_cap=2),
                     [(100, 400), (200, 400), (300, 400)])
        assert sim.fire_from_all() == 2
        assert [len(s.projectiles) for s in sim.seekers] == [1, 1, 0]

    def test_clear_all_idempotent(self):
        """Clearing twice leaves an empty simulation."""
        sim = seeded(positions=[(100, 400), (200, 400)])
        sim.fire_from_all()
        sim.clear_all()
        sim.clear_all()
        snapshot = sim.snapshot()
        assert snapshot.seeker_count == 0
        assert snapshot.projectile_count == 0

    def test_clear_projectiles_keeps_seekers(self):
        """Clearing projectiles leaves the seekers in place."""
        sim = seeded(positions=[(100, 400), (200, 400)])
        sim.fire_from_all()
        sim.clear_all_projectiles()
        assert sim.seeker_count == 2
        assert sim.projectile_count == 0


class TestTick:
    """Tests for the frame loop."""

    def test_bounce_scenario(self):
        """A projectile leaving an 800x600 world with margin 10 bounces back."""
        config = SimulationConfig(
            world_width=800, world_height=600, border_margin=10, bounce_enabled=True
        )
        sim = seeded(config)
        sim.seekers[0].projectiles.add(Projectile(Vector2(5, 300), Vector2(-3, 0)))
        sim.tick(target=Vector2(400, 100))
        p = sim.seekers[0].projectiles[0]
        assert p.position.x == 18.0
        assert p.velocity.x == 3.0

    def test_departed_projectiles_compacted(self):
        """Projectiles that fly off the world are removed; seekers stay."""
        sim = seeded(positions=[(800, 400)])
        sim.fire_projectile(sim.seekers[0])
        sim.run(60, target=Vector2(800, 100))
        assert sim.projectile_count == 0
        assert sim.seeker_count == 1

    def test_compaction_preserves_order(self):
        """Survivors keep their relative order after compaction."""
        sim = seeded(SimulationConfig(bounce_enabled=True))
        seeker = sim.seekers[0]
        for x in (100, 200, 300):
            seeker.projectiles.add(Projectile(Vector2(x, 400), Vector2()))
        seeker.projectiles.mark(1)
        sim.tick(target=Vector2(400, 100))
        assert len(seeker.projectiles) == 2
        assert [p.position.x for p in seeker.projectiles] == [100, 300]

    def test_frame_index_advances(self):
        """Each tick advances the frame index by one."""
        sim = SeekerSimulation()
        snapshot = sim.run(5)
        assert isinstance(snapshot, FrameSnapshot)
        assert snapshot.frame_index == 5

    def test_radial_capped_through_simulation(self):
        """Projectiles feel the placed field source."""
        sim = seeded(SimulationConfig(gravity_mode=GravityMode.RADIAL_CAPPED))
        sim.set_field_source(0, Vector2(100, 100))
        sim.seekers[0].projectiles.add(Projectile(Vector2(100, 200), Vector2(0, 0)))
        sim.tick(target=Vector2(400, 100))
        p = sim.seekers[0].projectiles[0]
        assert p.acceleration.y == pytest.approx(-1.0)
        assert p.velocity.y == pytest.approx(-0.99)
        assert p.position.y == pytest.approx(199.01)

    def test_implicit_field_point(self):
        """Without placed sources the world centre attracts."""
        sim = seeded(SimulationConfig(gravity_mode=GravityMode.RADIAL_TRUE))
        sim.seekers[0].projectiles.add(Projectile(Vector2(800, 600), Vector2(0, 0)))
        sim.tick(target=Vector2(400, 100))
        p = sim.seekers[0].projectiles[0]
        assert p.acceleration.x == pytest.approx(0.0, abs=1e-12)
        assert p.acceleration.y == pytest.approx(-1.0)

    def test_pointer_gravity(self):
        """Pointer gravity makes UNIFORM pull toward the target point."""
        config = SimulationConfig(gravity_mode=GravityMode.UNIFORM, pointer_gravity=True)
        sim = seeded(config, positions=[(200, 700)])
        sim.add_field_source(Vector2(100, 400))
        sim.seekers[0].projectiles.add(Projectile(Vector2(400, 400), Vector2(0, 0)))
        sim.tick(target=Vector2(400, 100))
        p = sim.seekers[0].projectiles[0]
        assert p.acceleration.x == pytest.approx(0.0, abs=1e-12)
        assert p.acceleration.y == pytest.approx(-1.0)

    def test_bounce_toggle_reaches_flight(self):
        """Toggling bounce applies to projectiles already in flight."""
        sim = seeded()
        sim.seekers[0].projectiles.add(Projectile(Vector2(25, 300), Vector2(-40, 0)))
        assert sim.toggle_bounce()
        sim.tick(target=Vector2(400, 100))
        p = sim.seekers[0].projectiles[0]
        assert p.position.x == 20.0
        assert p.velocity.x == 40.0
        assert not p.marked_for_removal

    def test_throughput_many_projectiles(self):
        """A full multi-point field over ten thousand projectiles ticks quickly."""
        config = SimulationConfig(
            gravity_mode=GravityMode.MULTI_POINT, bounce_enabled=True,
            seeker_cap=100, projectile_cap=10000,
        )
        positions = [(100 + 14 * (i % 10), 100 + 60 * (i // 10)) for i in range(100)]
        sim = seeded(config, positions)
        for point in [(200, 200), (600, 200), (1000, 400), (1400, 600), (800, 700)]:
            sim.add_field_source(Vector2(*point))
        for _ in range(100):
            sim.fire_from_all()
        assert sim.projectile_count == 10000

        sim.tick(target=Vector2(800, 400))
        start = time.perf_counter()
        for _ in range(5):
            sim.tick(target=Vector2(800, 400))
        elapsed = (time.perf_counter() - start) / 5

        assert sim.projectile_count == 10000
        assert elapsed < 0.05

    def test_population_caps_hold(self):
        """Caps hold after every tick under random input."""
        rng = np.random.default_rng(7)
        sim = SeekerSimulation(SimulationConfig(seeker_cap=5, projectile_cap=20, dynamic=True))
        for _ in range(300):
            held = rng.random(3) < 0.5
            inputs = TickInput(
                spawn_held=bool(held[0]), fire_held=bool(held[1]), approach=bool(held[2])
            )
            target = Vector2(*rng.uniform(50, 750, size=2))
            snapshot = sim.tick(inputs, target)
            assert snapshot.seeker_count <= 5
            assert snapshot.projectile_count <= 20


class TestTriggers:
    """Tests for held spawn, remove and fire triggers."""

    def test_static_spawn_on_press(self):
        """In static mode a held spawn trigger fires once per press."""
        sim = SeekerSimulation()
        for i in range(3):
            sim.tick(TickInput(spawn_held=True), Vector2(100 + 10 * i, 100))
        assert sim.seeker_count == 1
        sim.tick(TickInput(), Vector2(300, 300))
        sim.tick(TickInput(spawn_held=True), Vector2(400, 300))
        assert sim.seeker_count == 2
        assert sim.seekers[-1].position == Vector2(400, 300)

    def test_dynamic_spawn_repeats(self):
        """In dynamic mode a held trigger repeats every trigger_interval frames."""
        sim = SeekerSimulation(SimulationConfig(dynamic=True, trigger_interval=4))
        for i in range(8):
            sim.tick(TickInput(spawn_held=True), Vector2(100 + 10 * i, 100))
        assert sim.seeker_count == 2

    def test_dynamic_fire_repeats(self):
        """Held fire repeats in dynamic mode."""
        sim = seeded(SimulationConfig(dynamic=True, trigger_interval=4))
        for _ in range(8):
            sim.tick(TickInput(fire_held=True), Vector2(400, 100))
        assert sim.projectile_count == 2

    def test_static_remove(self):
        """A held remove trigger removes one seeker per press."""
        sim = seeded(positions=[(100, 400), (200, 400)])
        sim.tick(TickInput(remove_held=True), Vector2(400, 100))
        sim.tick(TickInput(remove_held=True), Vector2(400, 100))
        assert sim.seeker_count == 1
        assert sim.seekers[0].position.x == 200


class TestMutators:
    """Tests for configuration mutators."""

    def test_invalid_decay_keeps_config(self):
        """A rejected mutation leaves the config object untouched."""
        sim = SeekerSimulation()
        before = sim.config
        with pytest.raises(ConfigurationError):
            sim.set_decay(0.0)
        with pytest.raises(ConfigurationError):
            sim.set_world_bounds(10, 10)
        assert sim.config is before

    def test_non_finite_and_non_numeric_rejected(self):
        """NaN bounds and string decay raise ConfigurationError and keep the config."""
        sim = SeekerSimulation()
        before = sim.config
        with pytest.raises(ConfigurationError):
            sim.set_world_bounds(float("nan"), 600)
        with pytest.raises(ConfigurationError):
            sim.set_decay("0.5")
        assert sim.config is before

    def test_gravity_mode_cycle(self):
        """Modes can be set by name and cycled."""
        sim = SeekerSimulation()
        sim.set_gravity_mode("multi_point")
        assert sim.config.gravity_mode is GravityMode.MULTI_POINT
        assert sim.cycle_gravity_mode() is GravityMode.OFF
        assert sim.cycle_gravity_mode() is GravityMode.UNIFORM

    def test_lowering_caps_evicts(self):
        """Lowering caps evicts the oldest seekers and then the oldest projectiles."""
        sim = seeded(positions=[(100, 400), (200, 400), (300, 400), (400, 400)])
        for _ in range(3):
            sim.fire_from_all()
        third = sim.seekers[2]
        sim.set_caps(seeker_cap=2, projectile_cap=4)
        assert sim.seeker_count == 2
        assert sim.seekers[0] is third
        assert sim.projectile_count == 4
        assert [len(s.projectiles) for s in sim.seekers] == [1, 3]

    def test_toggle_dynamic(self):
        """Dynamic mode toggles on and off."""
        sim = SeekerSimulation()
        assert sim.toggle_dynamic()
        assert not sim.toggle_dynamic()


class TestFieldSources:
    """Tests for host placement of field sources."""

    def test_place_replaces_primary(self):
        """Outside MULTI_POINT, placing moves the single source."""
        sim = SeekerSimulation()
        sim.place_field_source(Vector2(1, 1))
        sim.place_field_source(Vector2(2, 2))
        assert list(sim.field_sources) == [Vector2(2, 2)]

    def test_place_appends_in_multi_point(self):
        """In MULTI_POINT, placing adds another source."""
        sim = SeekerSimulation(SimulationConfig(gravity_mode=GravityMode.MULTI_POINT))
        sim.place_field_source(Vector2(1, 1))
        sim.place_field_source(Vector2(2, 2))
        assert len(sim.field_sources) == 2

    def test_set_out_of_range(self):
        """Setting a source past the end raises IndexError."""
        sim = SeekerSimulation()
        with pytest.raises(IndexError):
            sim.set_field_source(3, Vector2(1, 1))

    def test_reset(self):
        """Resetting removes every placed source."""
        sim = SeekerSimulation(field_sources=[Vector2(1, 1)])
        sim.reset_field_sources()
        assert len(sim.field_sources) == 0


class TestSnapshot:
    """Tests for frame snapshots."""

    def test_decay_reported_only_when_active(self):
        """Decay is None while no drag is applied."""
        sim = SeekerSimulation()
        assert sim.snapshot().decay is None
        sim.set_gravity_mode(GravityMode.RADIAL_CAPPED)
        assert sim.snapshot().decay == 0.99

    def test_unit_decay_reported(self):
        """A decay of exactly 1.0 is still reported while the policy is active."""
        sim = SeekerSimulation(SimulationConfig(decay=1.0, gravity_mode=GravityMode.RADIAL_CAPPED))
        assert sim.snapshot().decay == 1.0
        sim.set_gravity_mode(GravityMode.OFF)
        assert sim.snapshot().decay is None
        sim.update_config(decay_policy=DecayPolicy.ALWAYS)
        assert sim.snapshot().decay == 1.0

    def test_seeker_views(self):
        """Seeker views expose per-projectile positions, headings and speeds."""
        sim = seeded()
        sim.fire_projectile(sim.seekers[0])
        view = sim.snapshot().seekers[0]
        assert view.projectile_count == 1
        (p,) = view.projectiles
        assert p.position.y == pytest.approx(360.0)
        assert p.heading == pytest.approx(0.0, abs=1e-12)
        assert p.speed == pytest.approx(10.0)

    def test_arrays(self):
        """Snapshot arrays cover every seeker and projectile."""
        sim = seeded(positions=[(100, 400), (200, 400)])
        sim.fire_from_all()
        snapshot = sim.snapshot()
        assert snapshot.seeker_positions().shape == (2, 2)
        assert snapshot.projectile_positions().shape == (2, 2)
        np.testing.assert_allclose(snapshot.projectile_speeds(), [10.0, 10.0])
        np.testing.assert_allclose(snapshot.projectile_headings(), [0.0, 0.0], atol=1e-12)

    def test_empty_arrays(self):
        """An empty snapshot still yields Nx2 arrays."""
        snapshot = SeekerSimulation().snapshot()
        assert snapshot.projectile_positions().shape == (0, 2)
        assert snapshot.seeker_positions().shape == (0, 2)


class TestCreateSimulation:
    """Tests for the convenience constructor."""

    def test_create(self):
        """Plain parameters build a populated simulation."""
        sim = create_simulation(
            {"gravity_mode": "multi_point", "bounce_enabled": True},
            seeker_positions=[(100, 100), (200, 200)],
            field_sources=[(300, 300)],
        )
        assert sim.config.gravity_mode is GravityMode.MULTI_POINT
        assert sim.config.bounce_enabled
        assert sim.seeker_count == 2
        assert list(sim.field_sources) == [Vector2(300.0, 300.0)]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
