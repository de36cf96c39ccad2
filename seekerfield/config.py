#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Simulation Configuration
================================================================================

Project:        Seeker Field
Module:         config.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 18, 2026
Last Updated:   October 18, 2026

License:        MIT License
================================================================================

Process-wide flags read by every integrator call.

`SimulationConfig` is frozen. Changing a setting means building a new
config with `with_changes()`, which validates the candidate before it is
returned; an invalid change raises `ConfigurationError` and the caller keeps
its previous, valid config. The simulation binds one config object at the
start of each tick, so a projectile never sees two gravity modes in a single
integration step.
"""

import logging
import math
import numbers
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, Mapping

from .boundary import DespawnPolicy, WorldBounds
from .forces import FieldParameters, GravityMode
from .vector import Vector2


class ConfigurationError(ValueError):
    """Raised when a configuration value is rejected."""


_REAL_FIELDS = (
    "world_width", "world_height", "border_margin", "despawn_margin", "decay",
    "projectile_radius", "projectile_speed", "muzzle_offset", "seeker_speed",
)


def _is_finite_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


class DecayPolicy(Enum):
    """When velocity decay (drag) is applied to projectiles."""
    # Only while a gravity law is pulling
    WHEN_FORCED = "when_forced"
    # Every tick, including GravityMode.OFF
    ALWAYS = "always"


@dataclass(frozen=True)
class SimulationConfig:
    """Configuration for the seeker simulation."""
    # World
    world_width: float = 1600.0
    world_height: float = 800.0
    border_margin: float = 12.0
    despawn_margin: float = 12.0

    # Population caps
    seeker_cap: int = 500
    projectile_cap: int = 10000

    # Projectile motion
    gravity_mode: GravityMode = GravityMode.OFF
    field_params: FieldParameters = field(default_factory=FieldParameters)
    pointer_gravity: bool = False
    decay: float = 0.99
    decay_policy: DecayPolicy = DecayPolicy.WHEN_FORCED
    bounce_enabled: bool = False
    despawn_policy: DespawnPolicy = DespawnPolicy.WIDE_MARGIN
    projectile_radius: float = 8.0
    projectile_speed: float = 10.0
    muzzle_offset: float = 40.0

    # Seekers
    seeker_speed: float = 4.0

    # Held triggers repeat every `trigger_interval` frames in dynamic mode
    dynamic: bool = False
    trigger_interval: int = 4

    @property
    def bounds(self) -> WorldBounds:
        return WorldBounds(self.world_width, self.world_height, self.border_margin)

    @property
    def default_field_point(self) -> Vector2:
        """Implicit gravity well used until the host places one: the world centre."""
        return Vector2(self.world_width / 2, self.world_height / 2)

    @property
    def decay_active(self) -> bool:
        """True when the decay policy applies drag under the current gravity mode."""
        return self.decay_policy is DecayPolicy.ALWAYS or self.gravity_mode != GravityMode.OFF

    def velocity_retention(self) -> float:
        """Factor applied to projectile velocity after acceleration."""
        return self.decay if self.decay_active else 1.0

    def validate(self) -> "SimulationConfig":
        """
        Check every invariant of the configuration.

        Returns:
            self, so construction can be chained

        Raises:
            ConfigurationError: Listing every invalid value found
        """
        problems = []

        # Range checks below assume finite real numbers
        for name in _REAL_FIELDS:
            value = getattr(self, name)
            if not _is_finite_real(value):
                problems.append(f"{name} must be a finite number, got {value!r}")
        if not isinstance(self.field_params, FieldParameters):
            problems.append(f"field_params must be FieldParameters, got {self.field_params!r}")
        else:
            for name in ("strength", "cap_constant"):
                value = getattr(self.field_params, name)
                if not _is_finite_real(value):
                    problems.append(f"field {name} must be a finite number, got {value!r}")
        if problems:
            self._reject(problems)

        if not (0.0 < self.decay <= 1.0):
            problems.append(f"decay must be in (0, 1], got {self.decay}")
        if self.world_width <= 0 or self.world_height <= 0:
            problems.append(
                f"world size must be positive, got {self.world_width}x{self.world_height}"
            )
        if self.border_margin < 0:
            problems.append(f"border_margin must be >= 0, got {self.border_margin}")
        if self.despawn_margin < 0:
            problems.append(f"despawn_margin must be >= 0, got {self.despawn_margin}")
        if self.projectile_radius < 0:
            problems.append(f"projectile_radius must be >= 0, got {self.projectile_radius}")

        inset = 2 * (self.border_margin + self.projectile_radius)
        if self.world_width <= inset or self.world_height <= inset:
            problems.append(
                f"world {self.world_width}x{self.world_height} leaves no room inside "
                f"a border of {self.border_margin} for radius {self.projectile_radius}"
            )

        for name in ("seeker_cap", "projectile_cap"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                problems.append(f"{name} must be a non-negative integer, got {value!r}")
        if isinstance(self.trigger_interval, bool) or not isinstance(self.trigger_interval, int) \
                or self.trigger_interval < 1:
            problems.append(f"trigger_interval must be an integer >= 1, got {self.trigger_interval!r}")

        for name in ("seeker_speed", "projectile_speed"):
            if getattr(self, name) <= 0:
                problems.append(f"{name} must be positive, got {getattr(self, name)}")
        if self.muzzle_offset < 0:
            problems.append(f"muzzle_offset must be >= 0, got {self.muzzle_offset}")

        if not isinstance(self.gravity_mode, GravityMode):
            problems.append(f"gravity_mode must be a GravityMode, got {self.gravity_mode!r}")
        if not isinstance(self.decay_policy, DecayPolicy):
            problems.append(f"decay_policy must be a DecayPolicy, got {self.decay_policy!r}")
        if not isinstance(self.despawn_policy, DespawnPolicy):
            problems.append(f"despawn_policy must be a DespawnPolicy, got {self.despawn_policy!r}")
        if self.field_params.strength < 0 or self.field_params.cap_constant <= 0:
            problems.append(
                f"field strength must be >= 0 and cap_constant > 0, got {self.field_params}"
            )

        if problems:
            self._reject(problems)

        return self

    @staticmethod
    def _reject(problems) -> None:
        msg = "Configuration error: " + "; ".join(problems)
        logging.error(msg)
        raise ConfigurationError(msg)

    def with_changes(self, **changes: Any) -> "SimulationConfig":
        """Validated copy of this config with `changes` applied."""
        try:
            candidate = replace(self, **changes)
        except TypeError as exc:
            raise ConfigurationError(f"Configuration error: {exc}") from exc
        return candidate.validate()

    @classmethod
    def from_dict(cls, params: Mapping[str, Any]) -> "SimulationConfig":
        """
        Build a validated config from a plain mapping (e.g. a JSON section).

        Enum fields accept member names ("radial_capped") or values; the
        `field_params` entry accepts a mapping of FieldParameters fields.

        Raises:
            ConfigurationError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(params) - known)
        if unknown:
            msg = f"Configuration error: unknown simulation keys {unknown}"
            logging.error(msg)
            raise ConfigurationError(msg)

        values: Dict[str, Any] = dict(params)
        if "gravity_mode" in values:
            values["gravity_mode"] = coerce_gravity_mode(values["gravity_mode"])
        if "decay_policy" in values:
            values["decay_policy"] = _coerce_enum(DecayPolicy, values["decay_policy"])
        if "despawn_policy" in values:
            values["despawn_policy"] = _coerce_enum(DespawnPolicy, values["despawn_policy"])
        if "field_params" in values and isinstance(values["field_params"], Mapping):
            try:
                values["field_params"] = FieldParameters(**values["field_params"])
            except TypeError as exc:
                raise ConfigurationError(f"Configuration error: {exc}") from exc

        return cls(**values).validate()

    def to_dict(self) -> Dict[str, Any]:
        """Plain mapping of this config, the inverse of from_dict."""
        result: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, GravityMode):
                value = value.name.lower()
            elif isinstance(value, Enum):
                value = value.value
            elif isinstance(value, FieldParameters):
                value = {"strength": value.strength, "cap_constant": value.cap_constant}
            result[f.name] = value
        return result


def coerce_gravity_mode(value: Any) -> GravityMode:
    """GravityMode from a member, an integer code, or a case-insensitive name."""
    if isinstance(value, GravityMode):
        return value
    if isinstance(value, str):
        try:
            return GravityMode[value.strip().upper()]
        except KeyError:
            pass
    elif isinstance(value, int) and not isinstance(value, bool):
        try:
            return GravityMode(value)
        except ValueError:
            pass
    msg = f"Configuration error: unknown gravity mode {value!r}"
    logging.error(msg)
    raise ConfigurationError(msg)


def _coerce_enum(enum_cls, value: Any):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        for member in enum_cls:
            if value.strip().lower() in (member.value, member.name.lower()):
                return member
    msg = f"Configuration error: unknown {enum_cls.__name__} {value!r}"
    logging.error(msg)
    raise ConfigurationError(msg)
