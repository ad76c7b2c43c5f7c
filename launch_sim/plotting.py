"""
Launch Mission Simulation - Flight Profile Plots

Renders altitude, speed and fuel profiles from a FlightLog. Uses the
non-interactive Agg backend so it runs headless.
"""

import os
from typing import List

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for batch processing
import matplotlib.pyplot as plt
import numpy as np

from .telemetry import FlightLog


def configure_plot_style() -> None:
    plt.rcParams.update({
        'figure.figsize': (10, 6),
        'axes.grid': True,
        'grid.alpha': 0.3,
        'axes.titlesize': 14,
        'axes.labelsize': 12,
        'savefig.dpi': 150,
    })


def _mark_separation(ax, log: FlightLog) -> None:
    t_sep = log.separation_time()
    if t_sep is not None:
        ax.axvline(t_sep, color='tab:red', linestyle='--', linewidth=1.0,
                   label=f'Stage separation (t={t_sep}s)')
        ax.legend(loc='best')


def _save(fig, output_dir: str, filename: str) -> str:
    path = os.path.join(output_dir, filename)
    fig.savefig(path, bbox_inches='tight')
    plt.close(fig)
    return path


def plot_altitude_profile(log: FlightLog, output_dir: str) -> str:
    fig, ax = plt.subplots()
    ax.plot(np.asarray(log.time), np.asarray(log.altitude), color='tab:blue', linewidth=2)
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Altitude (km)')
    ax.set_title('Altitude Profile')
    _mark_separation(ax, log)
    return _save(fig, output_dir, 'altitude_profile.png')


def plot_speed_profile(log: FlightLog, output_dir: str) -> str:
    fig, ax = plt.subplots()
    ax.plot(np.asarray(log.time), np.asarray(log.speed), color='tab:green', linewidth=2)
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Vertical speed (km/h)')
    ax.set_title('Speed Profile')
    _mark_separation(ax, log)
    return _save(fig, output_dir, 'speed_profile.png')


def plot_fuel_profile(log: FlightLog, output_dir: str) -> str:
    fig, ax = plt.subplots()
    ax.plot(np.asarray(log.time), np.asarray(log.fuel_percent), color='tab:orange', linewidth=2)
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Fuel remaining (%)')
    ax.set_ylim(0.0, 105.0)
    ax.set_title('Fuel Profile')
    _mark_separation(ax, log)
    return _save(fig, output_dir, 'fuel_profile.png')


def generate_all_plots(log: FlightLog, output_dir: str) -> List[str]:
    """
    Write every flight profile plot into ``output_dir``.

    Returns:
        Paths of the generated files (empty if the log has no samples).
    """
    if len(log) == 0:
        return []
    os.makedirs(output_dir, exist_ok=True)
    configure_plot_style()
    return [
        plot_altitude_profile(log, output_dir),
        plot_speed_profile(log, output_dir),
        plot_fuel_profile(log, output_dir),
    ]
