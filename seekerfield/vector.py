#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Vector2 Primitive
================================================================================

Project:        Seeker Field
Module:         vector.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 18, 2026
Last Updated:   October 18, 2026

License:        MIT License
================================================================================

Immutable 2D vector used for every position, velocity and acceleration in
the simulation.

Screen coordinates are used throughout: x grows to the right and y grows
downward. Headings are measured clockwise from "up" (the negative y axis):

    heading = 0      ->  (0, -1)   up
    heading = π/2    ->  (1,  0)   right
    heading = π      ->  (0,  1)   down
    heading = 3π/2   ->  (-1, 0)   left

Colour mapping and seeker aiming both depend on this convention.
"""

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np
from numba import jit


TWO_PI = 2.0 * math.pi


@jit(nopython=True, cache=True)
def heading_angle(dx: float, dy: float) -> float:
    """
    Heading of the vector (dx, dy), clockwise from screen-up.

    The zero vector maps to 0 so no caller ever sees NaN.

    Returns:
        Angle in radians in [0, 2π)
    """
    if dx == 0.0 and dy == 0.0:
        return 0.0

    angle = math.atan2(dx, -dy)
    if angle < 0.0:
        angle += TWO_PI
    # -tiny + 2π can round up to exactly 2π
    if angle >= TWO_PI:
        angle -= TWO_PI
    return angle


@jit(nopython=True, cache=True)
def heading_angles(vectors: np.ndarray) -> np.ndarray:
    """Heading of every row of an Nx2 array, with the same zero-vector rule."""
    n = vectors.shape[0]
    headings = np.empty(n)
    for i in range(n):
        headings[i] = heading_angle(vectors[i, 0], vectors[i, 1])
    return headings


@dataclass(frozen=True)
class Vector2:
    """A 2D point or displacement with value semantics."""
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_heading(cls, heading: float, magnitude: float = 1.0) -> "Vector2":
        """Vector of the given magnitude pointing along a clockwise-from-up heading."""
        return cls(magnitude * math.sin(heading), -magnitude * math.cos(heading))

    def add(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def sub(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def scale(self, k: float) -> "Vector2":
        return Vector2(self.x * k, self.y * k)

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> "Vector2":
        """Unit vector in the same direction; the zero vector stays zero."""
        mag = self.magnitude()
        if mag == 0.0:
            return Vector2()
        return Vector2(self.x / mag, self.y / mag)

    def heading(self) -> float:
        return heading_angle(float(self.x), float(self.y))

    def distance_to(self, other: "Vector2") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def rotated(self, angle: float) -> "Vector2":
        """
        Rotate by `angle` radians.

        With y pointing down, a positive angle turns the vector clockwise
        on screen, i.e. it increases the heading by `angle`.
        """
        c = math.cos(angle)
        s = math.sin(angle)
        return Vector2(self.x * c - self.y * s, self.x * s + self.y * c)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __add__(self, other: "Vector2") -> "Vector2":
        return self.add(other)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return self.sub(other)

    def __mul__(self, k: float) -> "Vector2":
        return self.scale(k)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)
