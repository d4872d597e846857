from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * np.pi

DEFAULT_N: Tuple[int, ...] = (100, 100)
DEFAULT_MU: Tuple[float, ...] = (math.log(1.0), math.log(2.0))
DEFAULT_SIGMA: Tuple[float, ...] = (0.1, 0.1)
DEFAULT_SEED = 789342

CSV_COLUMNS = ("radius", "angle", "x1", "x2", "group")


@dataclass(frozen=True)
class SamplerConfig:
    """Parameters of the two-ring log-normal sampler (one entry per group)."""

    n: Tuple[int, ...] = DEFAULT_N
    mu: Tuple[float, ...] = DEFAULT_MU
    sigma: Tuple[float, ...] = DEFAULT_SIGMA
    seed: Optional[int] = DEFAULT_SEED
    labels: Optional[Tuple[int, ...]] = None

    def group_labels(self) -> Tuple[int, ...]:
        if self.labels is not None:
            return tuple(self.labels)
        return tuple(range(1, len(self.n) + 1))


@dataclass(frozen=True)
class PolarDataset:
    """
    Immutable set of samples in polar coordinates.

    Samples are stored as parallel arrays, ordered group by group in the order
    of ``config.n``. The arrays are flagged read-only.
    """

    radius: np.ndarray
    angle: np.ndarray
    group: np.ndarray
    config: SamplerConfig = field(default_factory=SamplerConfig)

    def __post_init__(self):
        # own read-only copies; the caller's arrays stay writeable
        for name in ("radius", "angle", "group"):
            arr = np.array(getattr(self, name), copy=True)
            arr.setflags(write=False)
            object.__setattr__(self, name, arr)
        if not (self.radius.shape == self.angle.shape == self.group.shape):
            raise ValueError(
                f"radius, angle and group must have the same shape, got "
                f"{self.radius.shape}, {self.angle.shape}, {self.group.shape}"
            )

    def __len__(self) -> int:
        return int(self.radius.shape[0])

    def group_mask(self, label: int) -> np.ndarray:
        return self.group == label


def _as_float(value, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number, got {value!r}.") from exc


def _as_integer(value, name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {value!r}.")
    x = _as_float(value, name)
    if not np.isfinite(x) or int(x) != x:
        raise ValueError(f"{name} must be an integer, got {value!r}.")
    return int(x)


def _validate_sampler_args(
    n: Sequence[int],
    mu: Sequence[float],
    sigma: Sequence[float],
    labels: Optional[Sequence[int]],
) -> None:
    if len(n) == 0:
        raise ValueError("At least one group is required (n is empty).")
    if not (len(n) == len(mu) == len(sigma)):
        raise ValueError(
            f"n, mu and sigma must have the same length, got {len(n)}, {len(mu)}, {len(sigma)}."
        )
    if labels is not None:
        if len(labels) != len(n):
            raise ValueError(f"labels must have length {len(n)}, got {len(labels)}.")
        int_labels = [_as_integer(lab, f"labels[{i}]") for i, lab in enumerate(labels)]
        if len(set(int_labels)) != len(int_labels):
            raise ValueError(f"labels must be distinct, got {list(labels)}.")

    for i, n_i in enumerate(n):
        if _as_integer(n_i, f"n[{i}]") < 0:
            raise ValueError(f"n[{i}] must be >= 0, got {n_i}.")
    for i, mu_i in enumerate(mu):
        if not np.isfinite(_as_float(mu_i, f"mu[{i}]")):
            raise ValueError(f"mu[{i}] must be finite, got {mu_i}.")
    for i, sigma_i in enumerate(sigma):
        s = _as_float(sigma_i, f"sigma[{i}]")
        if not np.isfinite(s) or s <= 0:
            raise ValueError(f"sigma[{i}] must be finite and > 0, got {sigma_i}.")


def validate_sampler_config(config: SamplerConfig) -> None:
    """Raise ValueError if ``config`` cannot be sampled."""
    _validate_sampler_args(config.n, config.mu, config.sigma, config.labels)


def generate_lognormal_polar_data(
    n: Sequence[int] = DEFAULT_N,
    mu: Sequence[float] = DEFAULT_MU,
    sigma: Sequence[float] = DEFAULT_SIGMA,
    random_state: Optional[int] = DEFAULT_SEED,
    labels: Optional[Sequence[int]] = None,
) -> PolarDataset:
    """
    Generate groups of 2D points with log-normal radius and uniform angle.

    Parameters
    ----------
    n : sequence of int
        Number of samples per group. Zero is allowed.
    mu : sequence of float
        Log-mean of the radius distribution of each group.
    sigma : sequence of float
        Log-standard-deviation of each group. Must be > 0.
    random_state : int or None
        Seed for ``np.random.default_rng``. None draws fresh entropy.
    labels : sequence of int or None
        Group identifiers. Defaults to 1..k.

    Returns
    -------
    PolarDataset
        ``sum(n)`` samples; the first ``n[0]`` belong to the first group, the
        next ``n[1]`` to the second and so on.

    Notes
    -----
    Random numbers are consumed in a fixed order: radii group by group,
    then all angles in a single draw.
    """
    _validate_sampler_args(n, mu, sigma, labels)

    config = SamplerConfig(
        n=tuple(int(n_i) for n_i in n),
        mu=tuple(float(m) for m in mu),
        sigma=tuple(float(s) for s in sigma),
        seed=random_state,
        labels=None if labels is None else tuple(int(lab) for lab in labels),
    )
    group_labels = config.group_labels()

    rng = np.random.default_rng(random_state)

    radii = []
    groups = []
    for label, n_i, mu_i, sigma_i in zip(group_labels, config.n, config.mu, config.sigma):
        radii.append(rng.lognormal(mean=mu_i, sigma=sigma_i, size=n_i))
        groups.append(np.full(n_i, label, dtype=np.int64))
        logger.debug("Group %s: %d samples, LogNormal(mu=%.4f, sigma=%.4f)", label, n_i, mu_i, sigma_i)

    radius = np.concatenate(radii).astype(np.float64)
    group = np.concatenate(groups)

    # uniform() may round up to exactly 2*pi
    angle = np.mod(rng.uniform(0.0, TWO_PI, size=radius.shape[0]), TWO_PI)

    logger.info(
        "Generated %d samples in %d groups (seed=%s)", radius.shape[0], len(group_labels), random_state
    )
    return PolarDataset(radius=radius, angle=angle, group=group, config=config)


def sample_dataset(config: SamplerConfig) -> PolarDataset:
    """Run the sampler with all parameters taken from ``config``."""
    return generate_lognormal_polar_data(
        n=config.n,
        mu=config.mu,
        sigma=config.sigma,
        random_state=config.seed,
        labels=config.labels,
    )


def polar_to_cartesian(radius: np.ndarray, angle: np.ndarray) -> np.ndarray:
    """Map (r, theta) pairs to an (N, 2) array of (r cos theta, r sin theta)."""
    radius = np.asarray(radius, dtype=np.float64)
    angle = np.asarray(angle, dtype=np.float64)
    if radius.shape != angle.shape:
        raise ValueError(f"radius and angle must have the same shape, got {radius.shape} and {angle.shape}")

    return np.stack([radius * np.cos(angle), radius * np.sin(angle)], axis=-1)


def dataset_to_cartesian(dataset: PolarDataset) -> np.ndarray:
    return polar_to_cartesian(dataset.radius, dataset.angle)


def save_dataset_to_csv(
    dataset: PolarDataset,
    out_dir: str | Path = ".",
    prefix: str = "lognormal_rings_data",
    timestamp: Optional[str] = None,
) -> Path:
    """
    Save a dataset to a CSV file with columns radius, angle, x1, x2, group.

    Parameters
    ----------
    dataset : PolarDataset
        Samples to save.
    out_dir : str or Path
        Directory where the CSV file will be saved.
    prefix : str
        Prefix for the filename.
    timestamp : str or None
        If None, current timestamp (YYYYMMDD_HHMMSS) is used.

    Returns
    -------
    Path
        Path to the saved CSV file.
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    if timestamp is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    filename = out_dir / f"{prefix}_{timestamp}.csv"

    X = dataset_to_cartesian(dataset)
    data_to_save = np.column_stack((dataset.radius, dataset.angle, X, dataset.group))
    fmt = ["%.18e"] * 4 + ["%d"]

    np.savetxt(filename, data_to_save, delimiter=",", header=",".join(CSV_COLUMNS), comments="", fmt=fmt)
    logger.info("Dataset saved to %s", filename)

    return filename


def load_dataset_from_csv(csv_path: str | Path) -> Tuple[np.ndarray, np.ndarray]:
    """
    Load Cartesian features and group labels from a CSV written by
    ``save_dataset_to_csv``.

    Returns
    -------
    X : np.ndarray
        (N, 2) array of x1, x2.
    y : np.ndarray
        (N,) integer group labels.
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Data file not found at {csv_path}")

    data = np.loadtxt(csv_path, delimiter=",", skiprows=1, ndmin=2)

    X = data[:, 2:4].astype(np.float64)
    y = data[:, 4].astype(np.int64)

    return X, y
