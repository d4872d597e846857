from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np
import pandas as pd
from scipy import stats

from utils.data.dataset_utils import PolarDataset

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = [
    "group",
    "count",
    "radius_min",
    "radius_max",
    "radius_mean",
    "log_mean",
    "log_std",
    "fit_mu",
    "fit_sigma",
    "ks_pvalue",
    "mu",
    "sigma",
]


def summarize_groups(dataset: PolarDataset) -> pd.DataFrame:
    """
    Per-group radius statistics next to the configured log-normal parameters.

    fit_mu / fit_sigma come from a maximum likelihood log-normal fit with the
    location fixed at 0; ks_pvalue is a Kolmogorov-Smirnov test against the
    configured LogNormal(mu, sigma). Groups with fewer than two samples get NaN.
    """
    config = dataset.config
    rows = []
    for label, mu, sigma in zip(config.group_labels(), config.mu, config.sigma):
        r = np.asarray(dataset.radius[dataset.group_mask(label)])
        row = {"group": int(label), "count": int(r.size), "mu": float(mu), "sigma": float(sigma)}

        if r.size < 2:
            logger.debug("Group %s has %d samples, statistics left as NaN", label, r.size)
            for c in SUMMARY_COLUMNS:
                row.setdefault(c, np.nan)
            rows.append(row)
            continue

        log_r = np.log(r)
        shape, _, scale = stats.lognorm.fit(r, floc=0)
        ks = stats.kstest(r, "lognorm", args=(sigma, 0, math.exp(mu)))

        row.update(
            radius_min=float(r.min()),
            radius_max=float(r.max()),
            radius_mean=float(r.mean()),
            log_mean=float(log_r.mean()),
            log_std=float(log_r.std(ddof=1)),
            fit_mu=float(np.log(scale)),
            fit_sigma=float(shape),
            ks_pvalue=float(ks.pvalue),
        )
        rows.append(row)

    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def separating_plane_offset(mu: Sequence[float]) -> float:
    """
    Offset c of the plane z1 + z3 = c between two rings in feature space.

    z1 + z3 = x1^2 + x2^2 = r^2, so the plane is the circle whose radius is the
    geometric mean of the two median radii exp(mu_a) and exp(mu_b).
    """
    if len(mu) != 2:
        raise ValueError(f"separating_plane_offset requires exactly two groups, got {len(mu)}.")
    return float(math.exp(mu[0] + mu[1]))


def plane_separation_accuracy(
    Z: np.ndarray,
    groups: np.ndarray,
    offset: float,
    inner_label: int,
    outer_label: int,
) -> float:
    """
    Fraction of points on the correct side of z1 + z3 = offset.

    Points of ``inner_label`` should lie below the plane, points of
    ``outer_label`` above it. Other labels are ignored.
    """
    Z = np.asarray(Z, dtype=np.float64)
    groups = np.asarray(groups)
    if Z.ndim != 2 or Z.shape[1] != 3:
        raise ValueError(f"Z must have shape (N, 3), got {Z.shape}")
    if groups.shape[0] != Z.shape[0]:
        raise ValueError("Z and groups must have the same number of rows.")

    level = Z[:, 0] + Z[:, 2]
    inner = groups == inner_label
    outer = groups == outer_label
    n = int(inner.sum() + outer.sum())
    if n == 0:
        return float("nan")

    correct = int(np.sum(level[inner] < offset) + np.sum(level[outer] > offset))
    return correct / n


def inner_outer_labels(dataset: PolarDataset) -> tuple[int, int]:
    """Labels of the groups with the smaller and the larger log-mean radius."""
    config = dataset.config
    if len(config.mu) != 2:
        raise ValueError(f"Expected exactly two groups, got {len(config.mu)}.")
    labels = config.group_labels()
    order = np.argsort(config.mu)
    return int(labels[order[0]]), int(labels[order[1]])
