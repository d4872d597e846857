from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
import plotly.graph_objects as go

logger = logging.getLogger(__name__)

GROUP_COLORS = ["#1f77b4", "#d62728", "#2ca02c", "#ff7f0e", "#9467bd", "#8c564b"]

FEATURE_AXIS_TITLES = ("x1²", "√2·x1·x2", "x2²")


@dataclass(frozen=True)
class CameraConfig:
    """Plotly scene camera. Only affects rendering."""

    eye: Tuple[float, float, float] = (1.5, 1.5, 0.8)
    up: Tuple[float, float, float] = (0.0, 0.0, 1.0)
    center: Tuple[float, float, float] = (0.0, 0.0, 0.0)

    def to_plotly(self) -> dict:
        return {
            "eye": dict(zip("xyz", self.eye)),
            "up": dict(zip("xyz", self.up)),
            "center": dict(zip("xyz", self.center)),
        }


def _timestamped_path(out_dir: str | Path, prefix: str, timestamp: Optional[str], suffix: str) -> Path:
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    if timestamp is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return out_dir / f"{prefix}_{timestamp}{suffix}"


def _group_color(i: int) -> str:
    return GROUP_COLORS[i % len(GROUP_COLORS)]


def _ordered_labels(groups: np.ndarray, labels: Optional[Sequence[int]]) -> list:
    # colour index i belongs to labels[i], whether or not that group has points
    if labels is None:
        return list(np.unique(groups))
    return list(labels)


def plot_2d_dataset(
    X: np.ndarray,
    groups: np.ndarray,
    out_dir: str | Path = ".",
    prefix: str = "input_space_plot",
    timestamp: Optional[str] = None,
    show: bool = False,
    title: str = "Simulated data in input space",
    labels: Optional[Sequence[int]] = None,
) -> Path:
    """
    Scatter a 2D dataset colored by group and save it as PNG.

    Parameters
    ----------
    X : np.ndarray
        Points of shape (n_samples, 2).
    groups : np.ndarray
        Group label per point, shape (n_samples,).
    out_dir : str or Path
        Directory where the PNG file will be saved.
    prefix : str
        Prefix for the plot filename.
    timestamp : str or None
        If None, current timestamp (YYYYMMDD_HHMMSS) is used.
    show : bool
        Whether to display the plot using plt.show().
    labels : sequence of int or None
        Configured group order, used to pick colours. Defaults to the sorted
        labels present in ``groups``.

    Returns
    -------
    Path
        Path to the saved PNG file.
    """
    X = np.asarray(X)
    groups = np.asarray(groups)
    if X.ndim != 2 or X.shape[1] != 2:
        raise ValueError("plot_2d_dataset requires X to have exactly 2 features.")

    plot_path = _timestamped_path(out_dir, prefix, timestamp, ".png")

    fig, ax = plt.subplots(figsize=(7, 7))
    for i, label in enumerate(_ordered_labels(groups, labels)):
        mask = groups == label
        if not np.any(mask):
            continue
        ax.scatter(
            X[mask, 0],
            X[mask, 1],
            c=_group_color(i),
            label=f"Group {label}",
            alpha=0.6,
            edgecolors="k",
        )
    ax.set_xlabel("x1")
    ax.set_ylabel("x2")
    ax.set_title(title)
    ax.set_aspect("equal", adjustable="datalim")
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(plot_path, dpi=150)
    logger.info("2D plot saved to %s", plot_path)

    if show:
        plt.show()
    plt.close(fig)

    return plot_path


def build_3d_feature_figure(
    Z: np.ndarray,
    groups: np.ndarray,
    camera: Optional[CameraConfig] = None,
    plane_offset: Optional[float] = None,
    title: str = "Data after the quadratic feature map",
    labels: Optional[Sequence[int]] = None,
) -> go.Figure:
    """
    Interactive 3D scatter of mapped points, one trace per group.

    If ``plane_offset`` is given, the plane z1 + z3 = plane_offset is drawn
    as a translucent surface over the extent of the data.
    """
    Z = np.asarray(Z)
    groups = np.asarray(groups)
    if Z.ndim != 2 or Z.shape[1] != 3:
        raise ValueError("build_3d_feature_figure requires Z to have exactly 3 features.")
    camera = camera or CameraConfig()

    fig = go.Figure()
    for i, label in enumerate(_ordered_labels(groups, labels)):
        mask = groups == label
        if not np.any(mask):
            continue
        fig.add_trace(go.Scatter3d(
            x=Z[mask, 0], y=Z[mask, 1], z=Z[mask, 2],
            mode="markers",
            marker=dict(size=3, color=_group_color(i), opacity=0.8),
            name=f"Group {label}",
        ))

    if plane_offset is not None and Z.shape[0] > 0:
        # z3 = c - z1 over the data's (z1, z2) box, clipped at z3 >= 0
        z1 = np.linspace(0.0, max(float(Z[:, 0].max()), plane_offset), 20)
        z2 = np.linspace(float(Z[:, 1].min()), float(Z[:, 1].max()), 20)
        zz1, zz2 = np.meshgrid(z1, z2)
        zz3 = plane_offset - zz1
        zz3 = np.where(zz3 >= 0.0, zz3, np.nan)
        fig.add_trace(go.Surface(
            x=zz1, y=zz2, z=zz3,
            opacity=0.3,
            showscale=False,
            colorscale=[[0.0, "#7f7f7f"], [1.0, "#7f7f7f"]],
            name=f"z1 + z3 = {plane_offset:.3g}",
            hoverinfo="skip",
        ))

    fig.update_layout(
        title=title,
        template="plotly_white",
        scene=dict(
            xaxis_title=FEATURE_AXIS_TITLES[0],
            yaxis_title=FEATURE_AXIS_TITLES[1],
            zaxis_title=FEATURE_AXIS_TITLES[2],
            camera=camera.to_plotly(),
        ),
        legend=dict(itemsizing="constant"),
    )
    return fig


def plot_3d_features(
    Z: np.ndarray,
    groups: np.ndarray,
    camera: Optional[CameraConfig] = None,
    plane_offset: Optional[float] = None,
    out_dir: str | Path = ".",
    prefix: str = "feature_space_plot",
    timestamp: Optional[str] = None,
    show: bool = False,
    labels: Optional[Sequence[int]] = None,
) -> Path:
    """Build the 3D feature-space figure and write it as standalone HTML."""
    fig = build_3d_feature_figure(Z, groups, camera=camera, plane_offset=plane_offset, labels=labels)

    html_path = _timestamped_path(out_dir, prefix, timestamp, ".html")
    fig.write_html(str(html_path), include_plotlyjs=True, full_html=True)
    logger.info("3D plot saved to %s", html_path)

    if show:
        fig.show()

    return html_path
