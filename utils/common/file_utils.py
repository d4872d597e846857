from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd

from utils.data.dataset_utils import CSV_COLUMNS, PolarDataset, dataset_to_cartesian


def dataset_to_frame(dataset: PolarDataset) -> pd.DataFrame:
    X = dataset_to_cartesian(dataset)
    return pd.DataFrame(
        {
            "radius": np.asarray(dataset.radius),
            "angle": np.asarray(dataset.angle),
            "x1": X[:, 0],
            "x2": X[:, 1],
            "group": np.asarray(dataset.group),
        },
        columns=list(CSV_COLUMNS),
    )


def to_row(*, dataset: PolarDataset, identity_result, plane_accuracy: Optional[float]):
    config = dataset.config
    row = {
        "seed": config.seed,
        "n_samples": len(dataset),
    }

    for label, n_i, mu_i, sigma_i in zip(config.group_labels(), config.n, config.mu, config.sigma):
        row[f"n_{label}"] = int(n_i)
        row[f"mu_{label}"] = float(mu_i)
        row[f"sigma_{label}"] = float(sigma_i)

    for k, v in asdict(identity_result).items():
        row[f"identity_{k}"] = v
    row["plane_accuracy"] = np.nan if plane_accuracy is None else float(plane_accuracy)

    return row


def save_frame_to_csv(
    df: pd.DataFrame,
    out_dir: str | Path = ".",
    prefix: str = "summary",
    timestamp: Optional[str] = None,
) -> Path:
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    if timestamp is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    path = out_dir / f"{prefix}_{timestamp}.csv"
    df.to_csv(path, index=False)
    return path
