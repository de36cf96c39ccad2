#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Boundary Policy
================================================================================

Project:        Seeker Field
Module:         boundary.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 18, 2026
Last Updated:   October 18, 2026

License:        MIT License
================================================================================

Decides what happens when a body reaches the edge of the world.

The playable area is the world rectangle shrunk by the border margin and the
body's radius:

    [margin + r, width - margin - r] × [margin + r, height - margin - r]

With bounce enabled, each axis is handled independently: a body outside the
bound on that axis is clamped back onto it and its velocity component on that
axis is inverted (elastic, no energy loss).

With bounce disabled, projectiles are despawned according to a
`DespawnPolicy`. Seekers are never despawned; they always bounce.

The per-axis reflection and the projectile policy are Numba-compiled so the
projectile kernel can apply them inside its loop.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Tuple

from numba import jit

from .vector import Vector2


class DespawnPolicy(Enum):
    """How projectiles leave the world when bounce is off."""
    # Mark once the body is past the visible world plus `despawn_margin`,
    # without clamping, so nothing snaps to the wall before vanishing.
    WIDE_MARGIN = "wide_margin"
    # Clamp and reflect like a bounce, then mark for removal.
    CLAMP_AND_MARK = "clamp_and_mark"


class BoundaryOutcome(NamedTuple):
    """Result of applying the boundary policy to one body."""
    position: Vector2
    velocity: Vector2
    remove: bool


@dataclass(frozen=True)
class WorldBounds:
    """World extents and the border drawn inside them."""
    width: float
    height: float
    margin: float = 0.0

    def limits(self, radius: float = 0.0) -> Tuple[float, float, float, float]:
        """(min_x, max_x, min_y, max_y) for a body of the given radius."""
        inset = float(self.margin + radius)
        return (inset, float(self.width) - inset, inset, float(self.height) - inset)

    def contains(self, position: Vector2, radius: float = 0.0) -> bool:
        min_x, max_x, min_y, max_y = self.limits(radius)
        return min_x <= position.x <= max_x and min_y <= position.y <= max_y


@jit(nopython=True, cache=True)
def reflect_axis(value: float, speed: float, low: float, high: float):
    """
    Clamp one coordinate into [low, high], inverting speed on contact.

    Returns:
        (value, speed, hit)
    """
    if value < low:
        return low, -speed, True
    if value > high:
        return high, -speed, True
    return value, speed, False


@jit(nopython=True, cache=True)
def projectile_boundary(
    x: float,
    y: float,
    vx: float,
    vy: float,
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
    Apply the boundary policy to one projectile.

    Args:
        x, y: Position after integration
        vx, vy: Velocity after integration
        min_x, max_x, min_y, max_y: Limits from WorldBounds.limits(radius)
        bounce: Reflect instead of despawning
        clamp_and_mark: With bounce off, reflect and mark instead of using
            the wide despawn margin
        width, height: World size
        despawn_margin: Extra distance past the world edge for WIDE_MARGIN

    Returns:
        (x, y, vx, vy, remove)
    """
    if bounce or clamp_and_mark:
        x, vx, hit_x = reflect_axis(x, vx, min_x, max_x)
        y, vy, hit_y = reflect_axis(y, vy, min_y, max_y)
        remove = (not bounce) and (hit_x or hit_y)
        return x, y, vx, vy, remove

    remove = (
        x < -despawn_margin
        or x > width + despawn_margin
        or y < -despawn_margin
        or y > height + despawn_margin
    )
    return x, y, vx, vy, remove


def reflect_within(
    position: Vector2,
    velocity: Vector2,
    bounds: WorldBounds,
    radius: float = 0.0
) -> Tuple[Vector2, Vector2, bool]:
    """
    Clamp-and-reflect a body against the world bounds.

    Args:
        position: Position after the move
        velocity: Velocity used for the move
        bounds: World bounds
        radius: Body radius

    Returns:
        (position, velocity, hit) where hit is True if any axis was touched
    """
    min_x, max_x, min_y, max_y = bounds.limits(radius)
    x, vx, hit_x = reflect_axis(float(position.x), float(velocity.x), min_x, max_x)
    y, vy, hit_y = reflect_axis(float(position.y), float(velocity.y), min_y, max_y)
    return Vector2(x, y), Vector2(vx, vy), hit_x or hit_y


def apply_seeker_boundary(
    position: Vector2,
    velocity: Vector2,
    bounds: WorldBounds,
    radius: float = 0.0
) -> BoundaryOutcome:
    """Seekers always bounce, whatever the bounce flag says."""
    if bounds.contains(position, radius):
        return BoundaryOutcome(position, velocity, False)
    new_position, new_velocity, _ = reflect_within(position, velocity, bounds, radius)
    return BoundaryOutcome(new_position, new_velocity, False)
