#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Seeker Motion Controller
================================================================================

Project:        Seeker Field
Module:         seeker.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 18, 2026
Last Updated:   October 18, 2026

License:        MIT License
================================================================================

Seekers cruise at a fixed speed MAG and always aim at the host's target
point. Held directional commands move them toward, away from, or around it.

Orbiting moves the seeker along a chord of the circle centred on the target.
For a seeker at distance d, turning the aim by

    θ = acos(MAG / (2d))

and stepping MAG along the turned vector lands exactly back on the circle,
so the orbit radius holds steady and tight orbits turn faster per frame.

Inside a dead zone of radius MAG/2 the seeker stops and faces up, which
keeps it from jittering when the pointer sits on top of it.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Collection

from .boundary import apply_seeker_boundary
from .config import SimulationConfig
from .projectile import ProjectileBatch
from .vector import Vector2


class MotionCommand(Enum):
    """Held directional inputs."""
    APPROACH = "approach"
    RETREAT = "retreat"
    ORBIT_CW = "orbit_cw"
    ORBIT_CCW = "orbit_ccw"


# Held commands are applied in this order every tick
COMMAND_ORDER = (
    MotionCommand.RETREAT,
    MotionCommand.APPROACH,
    MotionCommand.ORBIT_CCW,
    MotionCommand.ORBIT_CW,
)


@dataclass(eq=False)
class Seeker:
    """A pointer-tracking shooter and the projectiles it owns."""
    position: Vector2
    velocity: Vector2
    heading: float = 0.0
    projectiles: ProjectileBatch = field(default_factory=ProjectileBatch)

    @classmethod
    def spawn(cls, position: Vector2, speed: float) -> "Seeker":
        """New seeker facing up."""
        return cls(position=position, velocity=Vector2.from_heading(0.0, speed))


def orbit_angle(speed: float, distance: float) -> float:
    """
    Chord turn angle that keeps an orbit at `distance` from its centre.

    The acos argument is clamped, so distances under speed/2 give 0.
    """
    ratio = speed / (2.0 * distance)
    return math.acos(max(-1.0, min(1.0, ratio)))


def advance_seeker(
    seeker: Seeker,
    target: Vector2,
    held: Collection[MotionCommand],
    config: SimulationConfig
) -> None:
    """
    Move a seeker for one tick and re-aim it at the target.

    Args:
        seeker: Seeker to update in place
        target: Host pointer position
        held: Directional commands held this tick
        config: Configuration bound for this tick
    """
    speed = config.seeker_speed

    if seeker.position.distance_to(target) <= speed / 2:
        seeker.heading = 0.0
        seeker.velocity = Vector2.from_heading(0.0, speed)
        return

    position = seeker.position
    cruise = seeker.velocity

    for command in COMMAND_ORDER:
        if command not in held:
            continue

        if command is MotionCommand.RETREAT:
            position = position - cruise
        elif command is MotionCommand.APPROACH:
            position = position + cruise
        else:
            distance = position.distance_to(target)
            if distance == 0.0:
                continue
            angle = orbit_angle(speed, distance)
            # Turning the aim clockwise swings the seeker counter-clockwise
            # around the target, and vice versa
            if command is MotionCommand.ORBIT_CW:
                angle = -angle
            position = position + cruise.rotated(angle)

    outcome = apply_seeker_boundary(position, cruise, config.bounds)
    seeker.position = outcome.position
    seeker.velocity = outcome.velocity

    offset = target - seeker.position
    if offset.magnitude() > 0.0:
        seeker.heading = offset.heading()
        seeker.velocity = Vector2.from_heading(seeker.heading, speed)
