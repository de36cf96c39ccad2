#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Seeker Field - Command Line Interface
================================================================================

Project:        Seeker Field
Module:         main.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 18, 2026
Last Updated:   October 18, 2026

License:        MIT License
================================================================================

Command line host for running the Seeker Field simulation headless or as a
matplotlib animation. A scripted pointer and input sequence stands in for a
real mouse and keyboard.
"""

import argparse
import logging
import math
import time
from typing import Any, Dict, Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from seekerfield.config import SimulationConfig, coerce_gravity_mode
from seekerfield.simulation import FrameSnapshot, SeekerSimulation, TickInput
from seekerfield.utils import load_config, setup_logging, simulation_config_from
from seekerfield.vector import Vector2
from seekerfield.visualization import VisualizationConfig, render_snapshot_matplotlib


DEFAULT_RUN_CONTROL = {
    'frames': 600,
    'fps': 60,
    'log_throttle_frames': 120,
}


def scripted_frame(frame: int, config: SimulationConfig) -> Tuple[TickInput, Vector2]:
    """
    Input and pointer position for a scripted session.

    The pointer sweeps a slow ellipse around the world centre. Seekers are
    spawned during the first second, fire continuously, and cycle through
    approach, orbit and retreat every four seconds.
    """
    cx = config.world_width / 2
    cy = config.world_height / 2
    angle = frame * 2 * math.pi / 600
    target = Vector2(cx + 0.35 * cx * math.cos(angle), cy + 0.35 * cy * math.sin(angle))

    phase = (frame // 60) % 4
    inputs = TickInput(
        approach=phase == 0,
        orbit_cw=phase == 1,
        orbit_ccw=phase == 2,
        retreat=phase == 3,
        fire_held=frame >= 60,
        spawn_held=frame < 60,
    )
    return inputs, target


def print_hud(snapshot: FrameSnapshot, ticks_per_second: float) -> None:
    decay_text = "OFF" if snapshot.decay is None else f"{snapshot.decay:g}"
    print(f"  Frame {snapshot.frame_index:5d}: "
          f"seekers = {snapshot.seeker_count:4d}, "
          f"projectiles = {snapshot.projectile_count:5d}, "
          f"mode = {snapshot.gravity_mode.name}, "
          f"bounce = {'ON' if snapshot.bounce_enabled else 'OFF'}, "
          f"decay = {decay_text}, "
          f"ticks/s = {ticks_per_second:.0f}")


def run_demo(config: SimulationConfig, n_frames: int, log_throttle: int = 120):
    """
    Run a scripted session headless and print HUD statistics.

    Args:
        config: Simulation configuration
        n_frames: Number of frames to simulate
        log_throttle: Frames between progress lines
    """
    print("=" * 60)
    print("Seeker Field - Headless Demo")
    print("=" * 60)

    sim = SeekerSimulation(config)

    t_start = time.time()
    snapshot = sim.snapshot()
    for frame in range(n_frames):
        inputs, target = scripted_frame(frame, config)
        snapshot = sim.tick(inputs, target)

        if frame % log_throttle == 0:
            print_hud(snapshot, sim.ticks_per_second)
            logging.debug(
                f"Frame {frame} | seekers {snapshot.seeker_count} | "
                f"projectiles {snapshot.projectile_count}"
            )
    t_end = time.time()

    elapsed = t_end - t_start
    print(f"\nSimulated {n_frames} frames in {elapsed:.2f} seconds")
    if elapsed > 0:
        print(f"Frames per second: {n_frames / elapsed:.1f}")
    print_hud(snapshot, sim.ticks_per_second)
    logging.info(f"Demo finished after {n_frames} frames.")
    return sim


def run_animation(config: SimulationConfig, n_frames: int, fps: int = 60,
                  save_path: Optional[str] = None):
    """
    Animate a scripted session with matplotlib.

    Args:
        config: Simulation configuration
        n_frames: Number of animation frames
        fps: Playback rate
        save_path: Optional GIF path, written with the pillow writer
    """
    print("=" * 60)
    print("Seeker Field - Animation")
    print("=" * 60)

    sim = SeekerSimulation(config)
    vis_config = VisualizationConfig()
    fig = plt.figure(figsize=vis_config.figsize)
    ax = fig.add_axes([0, 0, 1, 1])

    def update(frame):
        inputs, target = scripted_frame(frame, config)
        snapshot = sim.tick(inputs, target)
        render_snapshot_matplotlib(snapshot, sim.config, vis_config, ax=ax)
        return ax,

    ani = FuncAnimation(fig, update, frames=n_frames, interval=1000 / fps, blit=False)

    if save_path:
        print(f"Saving animation to {save_path} (this may take a while)...")
        ani.save(save_path, writer='pillow', fps=min(fps, 30))
        print(f"Animation saved to {save_path}")

    plt.show()


def build_config(args: argparse.Namespace, file_config: Dict[str, Any]) -> SimulationConfig:
    """SimulationConfig from the config file with command line overrides."""
    config = simulation_config_from(file_config)
    overrides: Dict[str, Any] = {}
    if args.mode is not None:
        overrides['gravity_mode'] = coerce_gravity_mode(args.mode)
    if args.bounce:
        overrides['bounce_enabled'] = True
    if args.dynamic:
        overrides['dynamic'] = True
    if overrides:
        config = config.with_changes(**overrides)
    return config


def main():
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Seeker Field - 2D seeker/projectile gravity toy",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --demo                      Run a headless scripted session
  python main.py --demo --mode multi_point   Same, under multi-point gravity
  python main.py --animate --save run.gif    Animate and save a GIF
        """
    )

    parser.add_argument('--demo', action='store_true',
                        help='Run a headless scripted session')
    parser.add_argument('--animate', action='store_true',
                        help='Animate a scripted session')
    parser.add_argument('--config', '-c', default='config.json',
                        help='Path to the JSON config file (default: config.json)')
    parser.add_argument('--frames', '-f', type=int, default=None,
                        help='Number of frames (default: from config)')
    parser.add_argument('--mode', '-m', default=None,
                        help='Gravity mode: off, uniform, radial_true, radial_capped, multi_point')
    parser.add_argument('--bounce', action='store_true',
                        help='Enable bouncing at the world border')
    parser.add_argument('--dynamic', action='store_true',
                        help='Repeat held triggers every few frames')
    parser.add_argument('--save', default=None,
                        help='Save the animation to this GIF path')

    args = parser.parse_args()

    try:
        file_config = load_config(args.config)
    except FileNotFoundError:
        file_config = {}
    except Exception as e:
        print(f"FATAL: Could not load {args.config}. Error: {e}")
        return

    setup_logging(file_config)
    logging.info("--- Seeker Field Starting ---")

    run_control = {**DEFAULT_RUN_CONTROL, **file_config.get('run_control', {})}
    n_frames = args.frames if args.frames is not None else run_control['frames']
    config = build_config(args, file_config)

    if args.demo:
        run_demo(config, n_frames, run_control['log_throttle_frames'])
    elif args.animate:
        run_animation(config, n_frames, run_control['fps'], args.save)
    else:
        parser.print_help()
        print("\nNo action specified. Run with --demo or --animate")

    logging.info("--- Seeker Field Shutting Down ---")


if __name__ == "__main__":
    main()
