#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Seeker Simulation Engine
================================================================================

Project:        Seeker Field
Module:         simulation.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 18, 2026
Last Updated:   October 18, 2026

License:        MIT License
================================================================================

Entity lifecycle manager and the interface a rendering/input host drives
once per frame.

A tick:
1. Advance every projectile of every seeker in one compiled kernel call
2. Advance every seeker toward/around the target point
3. Compact each seeker's projectile list, dropping marked projectiles
4. Enforce the seeker and projectile caps, oldest first
5. Service held triggers (spawn, remove, fire)
6. Return a FrameSnapshot for rendering
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .config import SimulationConfig, coerce_gravity_mode
from .forces import FieldSources, GravityMode, resolve_source_array
from .projectile import Projectile, advance_batches
from .seeker import MotionCommand, Seeker, advance_seeker
from .vector import Vector2, heading_angles


@dataclass(frozen=True)
class TickInput:
    """Input state decoded by the host for one frame."""
    approach: bool = False
    retreat: bool = False
    orbit_cw: bool = False
    orbit_ccw: bool = False
    fire_held: bool = False
    spawn_held: bool = False
    remove_held: bool = False

    def held_commands(self) -> FrozenSet[MotionCommand]:
        held = set()
        if self.approach:
            held.add(MotionCommand.APPROACH)
        if self.retreat:
            held.add(MotionCommand.RETREAT)
        if self.orbit_cw:
            held.add(MotionCommand.ORBIT_CW)
        if self.orbit_ccw:
            held.add(MotionCommand.ORBIT_CCW)
        return frozenset(held)


@dataclass(frozen=True)
class ProjectileView:
    position: Vector2
    heading: float
    speed: float


def _empty_rows() -> np.ndarray:
    return np.empty((0, 2), dtype=np.float64)


@dataclass(frozen=True, eq=False)
class SeekerView:
    """A seeker and copies of its projectile arrays."""
    position: Vector2
    heading: float
    projectile_positions: np.ndarray = field(default_factory=_empty_rows)
    projectile_velocities: np.ndarray = field(default_factory=_empty_rows)

    @property
    def projectile_count(self) -> int:
        return self.projectile_positions.shape[0]

    @property
    def projectiles(self) -> Tuple[ProjectileView, ...]:
        """Per-projectile views, built on demand."""
        headings = heading_angles(self.projectile_velocities)
        speeds = np.hypot(self.projectile_velocities[:, 0], self.projectile_velocities[:, 1])
        return tuple(
            ProjectileView(Vector2(float(p[0]), float(p[1])), float(h), float(s))
            for p, h, s in zip(self.projectile_positions, headings, speeds)
        )


@dataclass
class FrameSnapshot:
    """Read-only view of the simulation after a tick."""
    frame_index: int
    target: Vector2
    seekers: List[SeekerView] = field(default_factory=list)
    gravity_mode: GravityMode = GravityMode.OFF
    bounce_enabled: bool = False
    decay: Optional[float] = None  # None when no drag is applied
    field_sources: Tuple[Vector2, ...] = ()

    @property
    def seeker_count(self) -> int:
        return len(self.seekers)

    @property
    def projectile_count(self) -> int:
        return sum(s.projectile_count for s in self.seekers)

    def seeker_positions(self) -> np.ndarray:
        return np.array([s.position.as_tuple() for s in self.seekers], dtype=np.float64).reshape(-1, 2)

    def seeker_headings(self) -> np.ndarray:
        return np.array([s.heading for s in self.seekers], dtype=np.float64)

    def projectile_positions(self) -> np.ndarray:
        """Nx2 array of every projectile position, seeker by seeker."""
        return self._stack('projectile_positions')

    def projectile_velocities(self) -> np.ndarray:
        return self._stack('projectile_velocities')

    def projectile_headings(self) -> np.ndarray:
        return heading_angles(self.projectile_velocities())

    def projectile_speeds(self) -> np.ndarray:
        velocities = self.projectile_velocities()
        return np.hypot(velocities[:, 0], velocities[:, 1])

    def _stack(self, name: str) -> np.ndarray:
        if not self.seekers:
            return _empty_rows()
        return np.concatenate([getattr(s, name) for s in self.seekers])


class SeekerSimulation:
    """
    Owns every seeker and projectile and advances them once per tick.

    Configuration is held as a frozen SimulationConfig. Mutators replace it
    wholesale after validation, and each tick binds the config once at entry.
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        field_sources: Optional[Sequence[Vector2]] = None
    ):
        self.config = (config or SimulationConfig()).validate()
        self.seekers: List[Seeker] = []
        self.field_sources = FieldSources(field_sources)
        self.frame_index = 0
        self.target = self.config.default_field_point
        self._previous_input = TickInput()

        # Performance tracking
        self.ticks_per_second = 0.0
        self._last_time = time.time()
        self._tick_count = 0

        logging.info(
            f"SeekerSimulation initialized: world {self.config.world_width:g}x"
            f"{self.config.world_height:g}, caps {self.config.seeker_cap} seekers / "
            f"{self.config.projectile_cap} projectiles."
        )

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    @property
    def seeker_count(self) -> int:
        return len(self.seekers)

    @property
    def projectile_count(self) -> int:
        return sum(len(s.projectiles) for s in self.seekers)

    def spawn_seeker(self, position: Vector2) -> Optional[Seeker]:
        """
        Add a seeker at `position`.

        A spawn at the exact position of the newest seeker is ignored, so a
        trigger held over a stationary pointer does not stack seekers. If the
        cap is exceeded afterwards the oldest seeker is evicted.

        Returns:
            The new seeker, or None if the spawn was rejected
        """
        if self.seekers and self.seekers[-1].position == position:
            logging.debug(f"Spawn at {position.as_tuple()} rejected: duplicate position.")
            return None

        seeker = Seeker.spawn(position, self.config.seeker_speed)
        self.seekers.append(seeker)

        if len(self.seekers) > self.config.seeker_cap:
            self.seekers.pop(0)
            logging.debug("Seeker cap reached, evicted the oldest seeker.")

        return seeker if self.seekers and self.seekers[-1] is seeker else None

    def remove_oldest_seeker(self) -> Optional[Seeker]:
        if not self.seekers:
            return None
        return self.seekers.pop(0)

    def fire_projectile(self, seeker: Seeker) -> Optional[Projectile]:
        """
        Fire one projectile from `seeker` along its heading.

        Returns:
            The projectile, or None if the global projectile cap is met
        """
        return self._fire(seeker, self.projectile_count)

    def fire_from_all(self) -> int:
        """
        Fire from every seeker, oldest first, until the cap is met.

        Returns:
            Number of projectiles fired
        """
        total = self.projectile_count
        fired = 0
        for seeker in self.seekers:
            if self._fire(seeker, total + fired) is None:
                break
            fired += 1
        return fired

    def _fire(self, seeker: Seeker, current_total: int) -> Optional[Projectile]:
        if current_total >= self.config.projectile_cap:
            logging.debug("Projectile cap reached, fire rejected.")
            return None
        projectile = Projectile.launch(seeker.position, seeker.heading, self.config)
        seeker.projectiles.add(projectile)
        return projectile

    def clear_all(self) -> None:
        """Remove every seeker and, with them, every projectile."""
        self.seekers.clear()
        logging.info("All seekers cleared.")

    def clear_projectiles(self, seeker: Seeker) -> None:
        seeker.projectiles.clear()

    def clear_all_projectiles(self) -> None:
        for seeker in self.seekers:
            seeker.projectiles.clear()
        logging.info("All projectiles cleared.")

    # ------------------------------------------------------------------
    # Configuration mutators (call between ticks)
    # ------------------------------------------------------------------

    def update_config(self, **changes: Any) -> SimulationConfig:
        """
        Apply validated configuration changes atomically.

        Raises:
            ConfigurationError: If the result would be invalid; the current
                config is left untouched
        """
        self.config = self.config.with_changes(**changes)
        logging.info(f"Configuration updated: {changes}")
        self._enforce_caps()
        return self.config

    def set_gravity_mode(self, mode) -> SimulationConfig:
        return self.update_config(gravity_mode=coerce_gravity_mode(mode))

    def cycle_gravity_mode(self) -> GravityMode:
        self.set_gravity_mode(self.config.gravity_mode.next())
        return self.config.gravity_mode

    def set_bounce(self, enabled: bool) -> SimulationConfig:
        return self.update_config(bounce_enabled=bool(enabled))

    def toggle_bounce(self) -> bool:
        self.set_bounce(not self.config.bounce_enabled)
        return self.config.bounce_enabled

    def set_decay(self, decay: float) -> SimulationConfig:
        return self.update_config(decay=decay)

    def set_world_bounds(self, width: float, height: float) -> SimulationConfig:
        return self.update_config(world_width=width, world_height=height)

    def set_caps(
        self,
        seeker_cap: Optional[int] = None,
        projectile_cap: Optional[int] = None
    ) -> SimulationConfig:
        changes: Dict[str, int] = {}
        if seeker_cap is not None:
            changes["seeker_cap"] = seeker_cap
        if projectile_cap is not None:
            changes["projectile_cap"] = projectile_cap
        return self.update_config(**changes)

    def set_dynamic(self, enabled: bool) -> SimulationConfig:
        return self.update_config(dynamic=bool(enabled))

    def toggle_dynamic(self) -> bool:
        self.set_dynamic(not self.config.dynamic)
        return self.config.dynamic

    # ------------------------------------------------------------------
    # Field sources
    # ------------------------------------------------------------------

    def set_field_source(self, index: int, point: Vector2) -> None:
        self.field_sources.set(index, point)

    def add_field_source(self, point: Vector2) -> None:
        self.field_sources.add(point)

    def place_field_source(self, point: Vector2) -> None:
        """Pointer placement: append in MULTI_POINT mode, otherwise move the primary."""
        if self.config.gravity_mode == GravityMode.MULTI_POINT:
            self.field_sources.add(point)
        else:
            self.field_sources.set(0, point)

    def reset_field_sources(self) -> None:
        self.field_sources.clear()

    # ------------------------------------------------------------------
    # Frame loop
    # ------------------------------------------------------------------

    def tick(
        self,
        inputs: Optional[TickInput] = None,
        target: Optional[Vector2] = None
    ) -> FrameSnapshot:
        """
        Advance the whole simulation by one frame.

        Args:
            inputs: Held input state; defaults to nothing held
            target: Pointer position; defaults to the previous target

        Returns:
            Snapshot of the state after the frame
        """
        inputs = inputs or TickInput()
        if target is not None:
            self.target = target
        config = self.config

        sources = resolve_source_array(
            config.gravity_mode, self.field_sources, config.default_field_point,
            self.target, config.pointer_gravity
        )
        held = inputs.held_commands()

        advance_batches([s.projectiles for s in self.seekers], config, sources)
        for seeker in self.seekers:
            advance_seeker(seeker, self.target, held, config)

        self._compact()
        self._enforce_caps()
        self._service_triggers(inputs)

        self._previous_input = inputs
        self.frame_index += 1

        # Track performance
        self._tick_count += 1
        if self._tick_count % 100 == 0:
            current_time = time.time()
            elapsed = current_time - self._last_time
            if elapsed > 0:
                self.ticks_per_second = 100.0 / elapsed
            self._last_time = current_time

        return self.snapshot()

    def run(self, n_ticks: int, inputs: Optional[TickInput] = None,
            target: Optional[Vector2] = None) -> FrameSnapshot:
        """Run n_ticks frames with constant input."""
        snapshot = self.snapshot()
        for _ in range(n_ticks):
            snapshot = self.tick(inputs, target)
        return snapshot

    def _compact(self) -> None:
        """Drop marked projectiles, keeping survivors in order."""
        for seeker in self.seekers:
            seeker.projectiles.compact()

    def _enforce_caps(self) -> None:
        config = self.config

        excess = len(self.seekers) - config.seeker_cap
        if excess > 0:
            del self.seekers[:excess]
            logging.debug(f"Evicted {excess} oldest seekers over the cap.")

        overflow = self.projectile_count - config.projectile_cap
        if overflow > 0:
            logging.debug(f"Evicting {overflow} oldest projectiles over the cap.")
            for seeker in self.seekers:
                if overflow <= 0:
                    break
                drop = min(overflow, len(seeker.projectiles))
                if drop:
                    seeker.projectiles.drop_oldest(drop)
                    overflow -= drop

    def _triggered(self, held: bool, was_held: bool) -> bool:
        if not held:
            return False
        if self.config.dynamic:
            return self.frame_index % self.config.trigger_interval == 0
        return not was_held

    def _service_triggers(self, inputs: TickInput) -> None:
        previous = self._previous_input
        if self._triggered(inputs.spawn_held, previous.spawn_held):
            self.spawn_seeker(self.target)
        if self._triggered(inputs.remove_held, previous.remove_held):
            self.remove_oldest_seeker()
        if self._triggered(inputs.fire_held, previous.fire_held):
            self.fire_from_all()

    def snapshot(self) -> FrameSnapshot:
        config = self.config
        seekers = [
            SeekerView(
                position=s.position,
                heading=s.heading,
                projectile_positions=s.projectiles.positions.copy(),
                projectile_velocities=s.projectiles.velocities.copy(),
            )
            for s in self.seekers
        ]
        return FrameSnapshot(
            frame_index=self.frame_index,
            target=self.target,
            seekers=seekers,
            gravity_mode=config.gravity_mode,
            bounce_enabled=config.bounce_enabled,
            decay=config.decay if config.decay_active else None,
            field_sources=tuple(self.field_sources),
        )


def create_simulation(
    params: Optional[Mapping[str, Any]] = None,
    seeker_positions: Optional[Sequence[Tuple[float, float]]] = None,
    field_sources: Optional[Sequence[Tuple[float, float]]] = None
) -> SeekerSimulation:
    """
    Create a simulation from plain parameters.

    Args:
        params: SimulationConfig fields (see SimulationConfig.from_dict)
        seeker_positions: (x, y) positions to spawn seekers at
        field_sources: (x, y) positions of initial gravity wells

    Returns:
        Initialized SeekerSimulation
    """
    config = SimulationConfig.from_dict(params or {})
    sources = [Vector2(float(x), float(y)) for x, y in (field_sources or [])]
    sim = SeekerSimulation(config, sources)

    for x, y in seeker_positions or []:
        sim.spawn_seeker(Vector2(float(x), float(y)))

    return sim
