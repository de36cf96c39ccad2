#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Seeker Field
================================================================================

Project:        Seeker Field
Description:    Motion core of an interactive 2D shooter toy: pointer-tracking
                seekers fire projectiles through selectable gravity fields

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 18, 2026
Last Updated:   October 18, 2026

License:        MIT License
================================================================================

This package implements the per-frame simulation behind the toy:
- Five gravity laws evaluated in a Numba-compiled kernel
- Bounce or despawn at the world boundary
- Seekers that approach, retreat from, and orbit the pointer
- Population caps with oldest-first eviction

Modules:
    - vector: Vector2 value type and the clockwise-from-up heading
    - forces: Gravity modes, field sources and the force kernel
    - boundary: Bounce / despawn policy
    - projectile: Projectile integrator
    - seeker: Seeker motion controller
    - config: SimulationConfig and validation
    - simulation: Entity lifecycle manager and host interface
    - visualization: Matplotlib rendering of frame snapshots
    - utils: Logging setup and JSON config loading
"""

from .config import ConfigurationError, DecayPolicy, SimulationConfig
from .boundary import DespawnPolicy
from .forces import FieldParameters, GravityMode
from .simulation import FrameSnapshot, SeekerSimulation, TickInput, create_simulation
from .vector import Vector2

__version__ = "1.0.0"
__author__ = "Ryan Kamp"

__all__ = [
    "ConfigurationError",
    "DecayPolicy",
    "DespawnPolicy",
    "FieldParameters",
    "FrameSnapshot",
    "GravityMode",
    "SeekerSimulation",
    "SimulationConfig",
    "TickInput",
    "Vector2",
    "create_simulation",
]
