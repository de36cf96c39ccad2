#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Projectile Motion Integrator
================================================================================

Project:        Seeker Field
Module:         projectile.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 18, 2026
Last Updated:   October 18, 2026

License:        MIT License
================================================================================

Per-tick integration of projectiles under the active force field.

Each tick an active projectile goes through:
1. a(t) = field(x(t))
2. v(t+1) = (v(t) + a(t)) * f        f = decay, or 1 when decay is inactive
3. x(t+1) = x(t) + v(t+1)
4. boundary policy, which may mark the projectile for removal

Removal is terminal: a marked projectile is never advanced or revived.

Projectile state lives in Nx2 arrays, one `ProjectileBatch` per seeker in
fire order. All batches are advanced together by one Numba kernel each
tick; `Projectile` objects are only built as read-only views.
"""

from dataclasses import dataclass, field
from typing import Iterator, Sequence

import numpy as np
from numba import jit, prange

from .boundary import DespawnPolicy, projectile_boundary
from .config import SimulationConfig
from .forces import compute_field_acceleration
from .vector import Vector2


@dataclass(frozen=True)
class Projectile:
    """Read-only view of one projectile."""
    position: Vector2
    velocity: Vector2
    acceleration: Vector2 = field(default_factory=Vector2)
    marked_for_removal: bool = False

    @classmethod
    def launch(cls, origin: Vector2, heading: float, config: SimulationConfig) -> "Projectile":
        """
        Spawn a projectile in front of a shooter.

        Args:
            origin: Shooter position
            heading: Shooter heading (clockwise from up)
            config: Supplies the muzzle offset and projectile speed

        Returns:
            New active projectile
        """
        direction = Vector2.from_heading(heading)
        return cls(
            position=origin + direction * config.muzzle_offset,
            velocity=direction * config.projectile_speed,
        )

    @property
    def heading(self) -> float:
        """Direction of travel, derived from velocity."""
        return self.velocity.heading()

    @property
    def speed(self) -> float:
        return self.velocity.magnitude()

    @property
    def active(self) -> bool:
        return not self.marked_for_removal


class ProjectileBatch:
    """
    Projectiles owned by one seeker, oldest first.

    Attributes:
        positions: Nx2 positions
        velocities: Nx2 velocities
        accelerations: Nx2 accelerations from the last tick
        marked: N removal flags
    """

    def __init__(self):
        self.positions = np.empty((0, 2), dtype=np.float64)
        self.velocities = np.empty((0, 2), dtype=np.float64)
        self.accelerations = np.empty((0, 2), dtype=np.float64)
        self.marked = np.empty(0, dtype=np.bool_)

    def __len__(self) -> int:
        return self.positions.shape[0]

    def __getitem__(self, index: int) -> Projectile:
        n = len(self)
        if index < 0:
            index += n
        if not 0 <= index < n:
            raise IndexError(f"Projectile index {index} out of range for {n} projectiles")
        p = self.positions[index]
        v = self.velocities[index]
        a = self.accelerations[index]
        return Projectile(
            position=Vector2(float(p[0]), float(p[1])),
            velocity=Vector2(float(v[0]), float(v[1])),
            acceleration=Vector2(float(a[0]), float(a[1])),
            marked_for_removal=bool(self.marked[index]),
        )

    def __iter__(self) -> Iterator[Projectile]:
        return (self[i] for i in range(len(self)))

    def add(self, projectile: Projectile) -> None:
        """Append a projectile as the newest row."""
        self.positions = np.vstack([self.positions, [projectile.position.as_tuple()]])
        self.velocities = np.vstack([self.velocities, [projectile.velocity.as_tuple()]])
        self.accelerations = np.vstack(
            [self.accelerations, [projectile.acceleration.as_tuple()]]
        )
        self.marked = np.append(self.marked, projectile.marked_for_removal)

    def mark(self, index: int) -> None:
        self.marked[index] = True

    def compact(self) -> int:
        """
        Drop marked projectiles, keeping survivors in order.

        Returns:
            Number of projectiles dropped
        """
        n_marked = int(np.count_nonzero(self.marked))
        if n_marked:
            self._select(~self.marked)
        return n_marked

    def drop_oldest(self, count: int) -> None:
        self._select(slice(count, None))

    def clear(self) -> None:
        self._select(slice(0, 0))

    def _select(self, rows) -> None:
        self.positions = np.ascontiguousarray(self.positions[rows])
        self.velocities = np.ascontiguousarray(self.velocities[rows])
        self.accelerations = np.ascontiguousarray(self.accelerations[rows])
        self.marked = np.ascontiguousarray(self.marked[rows])


@jit(nopython=True, parallel=True, cache=True)
def integrate_projectiles(
    positions: np.ndarray,
    velocities: np.ndarray,
    accelerations: np.ndarray,
    marked: np.ndarray,
    mode: int,
    sources: np.ndarray,
    strength: float,
    cap_constant: float,
    retention: float,
    min_x: float,
    max_x: float,
    min_y: float,
    max_y: float,
    bounce: bool,
    clamp_and_mark: bool,
    width: float,
    height: float,
    despawn_margin: float
):
    """
    Advance every unmarked projectile by one tick, in place.

    Args:
        positions, velocities, accelerations: Nx2 state arrays
        marked: N removal flags, set for projectiles the boundary removes
        mode: Integer value of a GravityMode
        sources: Nx2 field source array
        strength, cap_constant: Field parameters
        retention: Velocity factor applied after acceleration
        min_x, max_x, min_y, max_y: Bounds for the projectile radius
        bounce, clamp_and_mark: Boundary policy flags
        width, height: World size
        despawn_margin: Extra distance past the world edge before despawning
    """
    n = positions.shape[0]
    for i in prange(n):
        if marked[i]:
            continue

        ax, ay = compute_field_acceleration(
            positions[i, 0], positions[i, 1], mode, sources, strength, cap_constant
        )
        vx = (velocities[i, 0] + ax) * retention
        vy = (velocities[i, 1] + ay) * retention

        x, y, vx, vy, remove = projectile_boundary(
            positions[i, 0] + vx, positions[i, 1] + vy, vx, vy,
            min_x, max_x, min_y, max_y,
            bounce, clamp_and_mark, width, height, despawn_margin
        )

        accelerations[i, 0] = ax
        accelerations[i, 1] = ay
        velocities[i, 0] = vx
        velocities[i, 1] = vy
        positions[i, 0] = x
        positions[i, 1] = y
        if remove:
            marked[i] = True


def advance_batches(
    batches: Sequence[ProjectileBatch],
    config: SimulationConfig,
    sources: np.ndarray
) -> int:
    """
    Advance the projectiles of every batch by a single tick.

    The batches are stacked so the kernel runs once over all of them, then
    each batch takes back its own rows.

    Args:
        batches: Projectile batches to update in place
        config: Configuration bound for this tick
        sources: Nx2 field source array for this tick (see resolve_source_array)

    Returns:
        Number of projectiles still active afterwards
    """
    batches = [b for b in batches if len(b) > 0]
    if not batches:
        return 0

    if len(batches) == 1:
        batch = batches[0]
        positions, velocities = batch.positions, batch.velocities
        accelerations, marked = batch.accelerations, batch.marked
    else:
        positions = np.concatenate([b.positions for b in batches])
        velocities = np.concatenate([b.velocities for b in batches])
        accelerations = np.concatenate([b.accelerations for b in batches])
        marked = np.concatenate([b.marked for b in batches])

    params = config.field_params
    min_x, max_x, min_y, max_y = config.bounds.limits(config.projectile_radius)
    integrate_projectiles(
        positions, velocities, accelerations, marked,
        int(config.gravity_mode), sources,
        float(params.strength), float(params.cap_constant),
        float(config.velocity_retention()),
        min_x, max_x, min_y, max_y,
        bool(config.bounce_enabled),
        config.despawn_policy is DespawnPolicy.CLAMP_AND_MARK,
        float(config.world_width), float(config.world_height),
        float(config.despawn_margin)
    )

    if len(batches) > 1:
        offsets = np.cumsum([len(b) for b in batches])[:-1]
        for batch, p, v, a, m in zip(
            batches,
            np.split(positions, offsets),
            np.split(velocities, offsets),
            np.split(accelerations, offsets),
            np.split(marked, offsets),
        ):
            batch.positions = p
            batch.velocities = v
            batch.accelerations = a
            batch.marked = m

    return int(len(marked) - np.count_nonzero(marked))
