"""
Figures for the pendulum fit and the flywheel trials.
"""

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

plt.rcParams.update({
    'font.size': 10,
    'axes.labelsize': 11,
    'axes.titlesize': 12,
    'legend.fontsize': 9,
    'savefig.dpi': 150,
    'axes.grid': True,
    'grid.alpha': 0.3,
})


def best_fit_segment(readings, fit):
    """End points of the fitted L(T²) line across the measured T² range."""
    if len(readings) < 2:
        return []
    x_vals = [r.period_squared for r in readings]
    x_min, x_max = min(x_vals), max(x_vals)
    return [
        (x_min, fit['slope'] * x_min + fit['intercept']),
        (x_max, fit['slope'] * x_max + fit['intercept']),
    ]


def plot_pendulum_fit(readings, fit, path):
    """Scatter of L vs T² with the best-fit line, saved to `path`."""
    fig, ax = plt.subplots(figsize=(7, 5))

    ax.scatter([r.period_squared for r in readings], [r.length for r in readings],
               color='#3b82f6', alpha=0.7, s=36, label='Data', zorder=3)

    segment = best_fit_segment(readings, fit)
    if segment:
        (x0, y0), (x1, y1) = segment
        ax.plot([x0, x1], [y0, y1], color='#ef4444', linewidth=2, label='Best Fit')
        ax.set_title(f"g = {fit['gravity']:.2f} m/s²  (R² = {fit['r2']:.4f})")

    ax.set_xlabel('T² (s²)')
    ax.set_ylabel('L (m)')
    ax.legend(loc='upper left')

    plt.tight_layout()
    plt.savefig(path)
    plt.close(fig)
    return path


def plot_flywheel_readings(readings, path, true_inertia=None):
    """Per-trial inertia estimates with their running average."""
    fig, ax = plt.subplots(figsize=(7, 5))

    trials = np.arange(1, len(readings) + 1)
    inertias = np.array([r.inertia for r in readings])

    ax.bar(trials, inertias, color='#3b82f6', edgecolor='black', linewidth=0.5, label='Trial I')
    if len(readings):
        running = np.cumsum(inertias) / trials
        ax.plot(trials, running, 'o-', color='#ef4444', linewidth=1.5, label='Running average')
    if true_inertia is not None:
        ax.axhline(y=true_inertia, color='green', linestyle='--', linewidth=1, label='True I')

    ax.set_xlabel('Trial')
    ax.set_ylabel('I (kg·m²)')
    ax.ticklabel_format(axis='y', style='sci', scilimits=(-3, 3))
    ax.legend(loc='lower right')

    plt.tight_layout()
    plt.savefig(path)
    plt.close(fig)
    return path
