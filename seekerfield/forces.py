#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Force Field Evaluator
================================================================================

Project:        Seeker Field
Module:         forces.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 18, 2026
Last Updated:   October 18, 2026

License:        MIT License
================================================================================

This module computes the acceleration a projectile feels at a given position.
Five gravity laws are available, selected with `GravityMode`:

    OFF            no force
    UNIFORM        unit pull toward the primary field source
    RADIAL_TRUE    unit pull toward the primary field source
    RADIAL_CAPPED  pull toward the primary source with magnitude
                       a(d) = K / d²          for d > √K
                       a(d) = 1               for d ≤ √K
    MULTI_POINT    superposition of RADIAL_CAPPED pulls from every source

Where:
    - K (cap_constant): falloff constant, reference value 10000
    - d: distance between the position and the source

The cap at d ≤ √K keeps the acceleration bounded next to a source, and a
position sitting exactly on a source is pulled "up" with magnitude 1 rather
than producing NaN.

The law table is evaluated inside a single Numba-compiled kernel so that
thousands of projectiles can be advanced every frame.
"""

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List, Optional, Sequence

import numpy as np
from numba import jit

from .vector import Vector2, heading_angle


class GravityMode(IntEnum):
    """Force law applied to projectiles."""
    OFF = 0
    UNIFORM = 1
    RADIAL_TRUE = 2
    RADIAL_CAPPED = 3
    MULTI_POINT = 4

    def next(self) -> "GravityMode":
        """The following mode in declaration order, wrapping back to OFF."""
        members = list(GravityMode)
        return members[(members.index(self) + 1) % len(members)]

    @property
    def is_point_based(self) -> bool:
        return self != GravityMode.OFF


# Integer codes used inside the compiled kernel
_MODE_OFF = 0
_MODE_RADIAL_CAPPED = 3
_MODE_MULTI_POINT = 4


@dataclass(frozen=True)
class FieldParameters:
    """
    Parameters of the gravity field.

    `strength` scales every law (reference 1). `cap_constant` is the K in
    K / d² used by the capped and multi-point laws.
    """
    strength: float = 1.0
    cap_constant: float = 10000.0

    @property
    def capture_radius(self) -> float:
        """Distance below which the capped law saturates: √K."""
        return math.sqrt(self.cap_constant)


@jit(nopython=True, cache=True)
def pull_toward(
    px: float,
    py: float,
    sx: float,
    sy: float,
    strength: float,
    cap_constant: float,
    capped: bool
):
    """
    Acceleration exerted on (px, py) by a single source at (sx, sy).

    Args:
        px, py: Position being accelerated
        sx, sy: Source position
        strength: Magnitude of the pull inside the capture radius
        cap_constant: K in the K / d² falloff
        capped: Apply the K / d² falloff beyond √K

    Returns:
        (ax, ay) acceleration components
    """
    dx = sx - px
    dy = sy - py
    dist_sq = dx * dx + dy * dy

    # A coincident source gives heading 0 and the saturated magnitude
    angle = heading_angle(dx, dy)

    magnitude = strength
    if capped and dist_sq > cap_constant:
        magnitude = strength * cap_constant / dist_sq

    return magnitude * math.sin(angle), -magnitude * math.cos(angle)


@jit(nopython=True, cache=True)
def compute_field_acceleration(
    px: float,
    py: float,
    mode: int,
    sources: np.ndarray,
    strength: float,
    cap_constant: float
):
    """
    Evaluate the gravity law for one position.

    Args:
        px, py: Position being accelerated
        mode: Integer value of a GravityMode
        sources: Nx2 array of source positions, index 0 is the primary
        strength: Field strength
        cap_constant: K in the K / d² falloff

    Returns:
        (ax, ay) acceleration components
    """
    n_sources = sources.shape[0]
    if mode == _MODE_OFF or n_sources == 0:
        return 0.0, 0.0

    if mode == _MODE_MULTI_POINT:
        ax = 0.0
        ay = 0.0
        for i in range(n_sources):
            fx, fy = pull_toward(
                px, py, sources[i, 0], sources[i, 1],
                strength, cap_constant, True
            )
            ax += fx
            ay += fy
        return ax, ay

    return pull_toward(
        px, py, sources[0, 0], sources[0, 1],
        strength, cap_constant, mode == _MODE_RADIAL_CAPPED
    )


def as_source_array(points: Sequence[Vector2]) -> np.ndarray:
    """Pack points into a contiguous Nx2 float64 array for the kernel."""
    array = np.array([[p.x, p.y] for p in points], dtype=np.float64).reshape(-1, 2)
    return np.ascontiguousarray(array)


class FieldSources:
    """
    Ordered gravity wells placed by the host.

    Index 0 is the primary point used by the single-point laws. The
    simulation only reads this collection; the host mutates it.
    """

    def __init__(self, points: Optional[Sequence[Vector2]] = None):
        self._points: List[Vector2] = list(points or [])

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Vector2]:
        return iter(self._points)

    def __getitem__(self, index: int) -> Vector2:
        return self._points[index]

    def add(self, point: Vector2) -> None:
        self._points.append(point)

    def set(self, index: int, point: Vector2) -> None:
        """
        Replace the source at `index`.

        Setting index len(self) appends, so the primary point can be set
        on an empty collection.

        Raises:
            IndexError: If index is negative or beyond len(self)
        """
        if index < 0 or index > len(self._points):
            raise IndexError(
                f"Field source index {index} out of range for {len(self._points)} sources"
            )
        if index == len(self._points):
            self._points.append(point)
        else:
            self._points[index] = point

    def clear(self) -> None:
        self._points.clear()

    def primary(self, default: Vector2) -> Vector2:
        return self._points[0] if self._points else default

    def as_array(self) -> np.ndarray:
        return as_source_array(self._points)


def resolve_source_array(
    mode: GravityMode,
    sources: FieldSources,
    default_point: Vector2,
    pointer: Optional[Vector2] = None,
    pointer_gravity: bool = False
) -> np.ndarray:
    """
    Source array the kernel should see for one tick.

    Args:
        mode: Active gravity mode
        sources: Host-placed field sources
        default_point: Implicit source used when none has been placed
        pointer: Current target point of the host
        pointer_gravity: Let UNIFORM and RADIAL_TRUE pull toward the pointer

    Returns:
        Nx2 array, empty only when the mode is OFF. Single-point modes get
        just the primary source.
    """
    if not mode.is_point_based:
        return as_source_array([])

    if pointer_gravity and pointer is not None and mode in (
        GravityMode.UNIFORM, GravityMode.RADIAL_TRUE
    ):
        return as_source_array([pointer])

    if mode != GravityMode.MULTI_POINT:
        return as_source_array([sources.primary(default_point)])

    if len(sources) == 0:
        return as_source_array([default_point])

    return sources.as_array()


def field_acceleration(
    position: Vector2,
    mode: GravityMode,
    sources,
    params: Optional[FieldParameters] = None,
    default_point: Optional[Vector2] = None
) -> Vector2:
    """
    Acceleration at `position` under the given gravity mode.

    Args:
        position: Point being accelerated
        mode: Gravity law
        sources: FieldSources, a sequence of Vector2, or an Nx2 array
        params: Field parameters (defaults to strength 1, K = 10000)
        default_point: Source used when `sources` is empty

    Returns:
        Acceleration vector
    """
    if params is None:
        params = FieldParameters()

    if isinstance(sources, np.ndarray):
        array = np.ascontiguousarray(sources, dtype=np.float64).reshape(-1, 2)
    elif isinstance(sources, FieldSources):
        array = sources.as_array()
    else:
        array = as_source_array(list(sources))

    if array.shape[0] == 0 and default_point is not None:
        array = as_source_array([default_point])

    ax, ay = compute_field_acceleration(
        float(position.x), float(position.y), int(mode), array,
        float(params.strength), float(params.cap_constant)
    )
    return Vector2(ax, ay)
