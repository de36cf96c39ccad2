#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Snapshot Visualization
================================================================================

Project:        Seeker Field
Module:         visualization.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 18, 2026
Last Updated:   October 18, 2026

License:        MIT License
================================================================================

Matplotlib rendering of FrameSnapshots for the command line host.

Colours follow the heading convention of the simulation:
- Hue is the heading in degrees (0 = up, 90 = right, ...)
- Projectile saturation grows with speed
- The background hue follows the pointer's horizontal position
"""

import io
from dataclasses import dataclass
from typing import Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import hsv_to_rgb
from matplotlib.patches import Circle, Rectangle

from .config import SimulationConfig
from .forces import GravityMode
from .simulation import FrameSnapshot


@dataclass
class VisualizationConfig:
    """Configuration for visualization."""
    projectile_size: float = 18.0
    seeker_size: float = 260.0
    projectile_value: float = 0.85
    seeker_saturation: float = 0.85
    seeker_value: float = 1.0
    min_saturation: float = 0.5
    max_speed: float = 30.0  # speed at which saturation tops out
    background_saturation: float = 0.2
    background_value: float = 1.0
    border_color: str = "black"
    show_field_sources: bool = True
    show_hud: bool = True
    figsize: Tuple[int, int] = (12, 6)


def heading_to_hue(headings: np.ndarray) -> np.ndarray:
    """Map clockwise-from-up headings (radians) to hues in [0, 1)."""
    degrees = np.degrees(np.asarray(headings, dtype=np.float64))
    return np.mod(degrees, 360.0) / 360.0


def projectile_colors(
    headings: np.ndarray,
    speeds: np.ndarray,
    config: Optional[VisualizationConfig] = None
) -> np.ndarray:
    """
    RGB colours for projectiles.

    Args:
        headings: N headings in radians
        speeds: N speeds
        config: Visualization configuration

    Returns:
        Nx3 RGB array
    """
    if config is None:
        config = VisualizationConfig()

    hue = heading_to_hue(headings)
    speed_fraction = np.clip(np.asarray(speeds, dtype=np.float64) / config.max_speed, 0, 1)
    saturation = config.min_saturation + (1.0 - config.min_saturation) * speed_fraction
    value = np.full_like(hue, config.projectile_value)
    return hsv_to_rgb(np.stack([hue, saturation, value], axis=-1).reshape(-1, 3))


def seeker_colors(
    headings: np.ndarray,
    config: Optional[VisualizationConfig] = None
) -> np.ndarray:
    """Nx3 RGB colours for seekers, hue from heading."""
    if config is None:
        config = VisualizationConfig()

    hue = heading_to_hue(headings)
    saturation = np.full_like(hue, config.seeker_saturation)
    value = np.full_like(hue, config.seeker_value)
    return hsv_to_rgb(np.stack([hue, saturation, value], axis=-1).reshape(-1, 3))


def background_color(
    pointer_x: float,
    world_width: float,
    config: Optional[VisualizationConfig] = None
) -> np.ndarray:
    """Background RGB whose hue follows the pointer across the world."""
    if config is None:
        config = VisualizationConfig()
    hue = float(np.clip(pointer_x / world_width, 0.0, 1.0)) % 1.0
    return hsv_to_rgb(np.array([hue, config.background_saturation, config.background_value]))


def render_snapshot_matplotlib(
    snapshot: FrameSnapshot,
    sim_config: SimulationConfig,
    config: Optional[VisualizationConfig] = None,
    ax: Optional[plt.Axes] = None
) -> plt.Figure:
    """
    Render a snapshot in screen coordinates (y axis pointing down).

    Args:
        snapshot: Frame to draw
        sim_config: Supplies world size and border margin
        config: Visualization configuration
        ax: Optional existing axes to draw on

    Returns:
        Matplotlib figure
    """
    if config is None:
        config = VisualizationConfig()

    width = sim_config.world_width
    height = sim_config.world_height

    if ax is None:
        fig = plt.figure(figsize=config.figsize)
        ax = fig.add_axes([0, 0, 1, 1])
    else:
        fig = ax.figure

    ax.clear()
    bg = background_color(snapshot.target.x, width, config)
    ax.set_facecolor(bg)
    fig.patch.set_facecolor(bg)

    # Bounce walls
    if snapshot.bounce_enabled:
        m = sim_config.border_margin
        ax.add_patch(Rectangle(
            (m, m), width - 2 * m, height - 2 * m,
            fill=False, edgecolor=config.border_color, linewidth=2
        ))

    if config.show_field_sources and snapshot.gravity_mode in (
        GravityMode.RADIAL_CAPPED, GravityMode.MULTI_POINT
    ):
        sources = snapshot.field_sources or (sim_config.default_field_point,)
        if snapshot.gravity_mode != GravityMode.MULTI_POINT:
            sources = sources[:1]
        xs = [p.x for p in sources]
        ys = [p.y for p in sources]
        # Capped laws saturate inside the capture radius
        radius = sim_config.field_params.capture_radius
        for x, y in zip(xs, ys):
            ax.add_patch(Circle(
                (x, y), radius, fill=False, edgecolor=config.border_color,
                linestyle='--', linewidth=1, alpha=0.5
            ))
        ax.scatter(xs, ys, s=120, c='white', edgecolors='black', linewidths=1.5)

    positions = snapshot.projectile_positions()
    if len(positions) > 0:
        colors = projectile_colors(snapshot.projectile_headings(), snapshot.projectile_speeds(), config)
        ax.scatter(
            positions[:, 0], positions[:, 1],
            s=config.projectile_size, c=colors,
            edgecolors='black', linewidths=0.5
        )

    # Triangle markers point up; rotate clockwise by heading
    if snapshot.seekers:
        colors = seeker_colors(snapshot.seeker_headings(), config)
        for seeker, color in zip(snapshot.seekers, colors):
            ax.scatter(
                [seeker.position.x], [seeker.position.y],
                s=config.seeker_size, c=[color],
                marker=(3, 0, -np.degrees(seeker.heading)),
                edgecolors='black', linewidths=1.5
            )

    # Crosshair
    ax.plot([snapshot.target.x], [snapshot.target.y], marker='+', markersize=14,
            color='red', markeredgewidth=2.5)

    if config.show_hud:
        decay_text = "OFF" if snapshot.decay is None else f"{snapshot.decay:g}"
        hud = "\n".join([
            f"X: {snapshot.target.x:.0f}",
            f"Y: {snapshot.target.y:.0f}",
            f"Seeker Count: {snapshot.seeker_count}",
            f"Projectile Count: {snapshot.projectile_count}",
            f"Bounce: {'ON' if snapshot.bounce_enabled else 'OFF'}",
            f"Decay: {decay_text}",
            f"Gravity Mode: {snapshot.gravity_mode.name}",
        ])
        ax.text(0.02, 0.97, hud, transform=ax.transAxes, fontsize=9,
                verticalalignment='top', family='monospace')

    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_aspect('equal')
    ax.set_xticks([])
    ax.set_yticks([])
    ax.axis('off')

    return fig


def render_snapshot_png(
    snapshot: FrameSnapshot,
    sim_config: SimulationConfig,
    config: Optional[VisualizationConfig] = None,
    dpi: int = 80
) -> bytes:
    """Render a snapshot and return PNG bytes."""
    fig = render_snapshot_matplotlib(snapshot, sim_config, config)
    buf = io.BytesIO()
    fig.savefig(buf, format='png', dpi=dpi, facecolor=fig.get_facecolor())
    plt.close(fig)
    buf.seek(0)
    return buf.getvalue()
