from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence

import numpy as np
import pandas as pd

from evaluation.dataset_summary import (
    inner_outer_labels,
    plane_separation_accuracy,
    separating_plane_offset,
    summarize_groups,
)
from evaluation.kernel_identity import KernelIdentityResult, verify_kernel_identity
from kernels.feature_maps import quadratic_feature_map
from utils.common.file_utils import save_frame_to_csv, to_row
from utils.data.dataset_utils import (
    DEFAULT_MU,
    DEFAULT_N,
    DEFAULT_SEED,
    DEFAULT_SIGMA,
    PolarDataset,
    SamplerConfig,
    dataset_to_cartesian,
    sample_dataset,
    save_dataset_to_csv,
    validate_sampler_config,
)
from utils.visualization.feature_space import CameraConfig, plot_2d_dataset, plot_3d_features

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# render_2d(X, groups) and render_3d(Z, groups, camera, plane_offset)
Render2DFn = Callable[[np.ndarray, np.ndarray], Optional[Path]]
Render3DFn = Callable[[np.ndarray, np.ndarray, CameraConfig, Optional[float]], Optional[Path]]


@dataclass
class DemoConfig:
    sampler: SamplerConfig = field(default_factory=SamplerConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)
    out_dir: Path = Path("results/kernel_trick")
    prefix: str = "kernel_trick"
    draw_plane: bool = True
    save_csv: bool = True
    show: bool = False
    timestamp: Optional[str] = None


@dataclass
class DemoResult:
    dataset: PolarDataset
    X: np.ndarray
    Z: np.ndarray
    identity: KernelIdentityResult
    summary: pd.DataFrame
    plane_offset: Optional[float] = None
    plane_accuracy: Optional[float] = None
    paths: Dict[str, Path] = field(default_factory=dict)


def run_kernel_trick_demo(
    config: Optional[DemoConfig] = None,
    render_2d: Optional[Render2DFn] = None,
    render_3d: Optional[Render3DFn] = None,
) -> DemoResult:
    """
    Sample the rings, plot them, lift them with the quadratic map and plot again.

    Renderers default to the matplotlib (2D) and plotly (3D) writers in
    ``config.out_dir``. Any callable with the same signature can be passed,
    e.g. to keep the run free of file output.
    """
    config = config or DemoConfig()
    timestamp = config.timestamp or datetime.now().strftime("%Y%m%d_%H%M%S")

    if render_2d is None:
        def render_2d(X, groups):
            return plot_2d_dataset(
                X, groups, out_dir=config.out_dir, prefix=f"{config.prefix}_input",
                timestamp=timestamp, show=config.show, labels=config.sampler.group_labels(),
            )

    if render_3d is None:
        def render_3d(Z, groups, camera, plane_offset):
            return plot_3d_features(
                Z, groups, camera=camera, plane_offset=plane_offset, out_dir=config.out_dir,
                prefix=f"{config.prefix}_features", timestamp=timestamp, show=config.show,
                labels=config.sampler.group_labels(),
            )

    dataset = sample_dataset(config.sampler)
    X = dataset_to_cartesian(dataset)
    groups = np.asarray(dataset.group)

    paths: Dict[str, Path] = {}
    path_2d = render_2d(X, groups)
    if path_2d is not None:
        paths["plot_2d"] = Path(path_2d)

    Z = quadratic_feature_map(X)

    plane_offset = None
    plane_accuracy = None
    if len(config.sampler.n) == 2:
        plane_offset = separating_plane_offset(config.sampler.mu)
        inner, outer = inner_outer_labels(dataset)
        plane_accuracy = plane_separation_accuracy(Z, groups, plane_offset, inner, outer)
        logger.info(
            "Plane z1 + z3 = %.4f separates %.1f%% of the points", plane_offset, 100.0 * plane_accuracy
        )

    path_3d = render_3d(Z, groups, config.camera, plane_offset if config.draw_plane else None)
    if path_3d is not None:
        paths["plot_3d"] = Path(path_3d)

    identity = verify_kernel_identity(X)
    summary = summarize_groups(dataset)

    if config.save_csv:
        paths["data"] = save_dataset_to_csv(
            dataset, out_dir=config.out_dir, prefix=f"{config.prefix}_data", timestamp=timestamp
        )
        paths["summary"] = save_frame_to_csv(
            summary, out_dir=config.out_dir, prefix=f"{config.prefix}_summary", timestamp=timestamp
        )
        run_row = to_row(dataset=dataset, identity_result=identity, plane_accuracy=plane_accuracy)
        paths["run"] = save_frame_to_csv(
            pd.DataFrame([run_row]), out_dir=config.out_dir, prefix=f"{config.prefix}_run", timestamp=timestamp
        )

    return DemoResult(
        dataset=dataset,
        X=X,
        Z=Z,
        identity=identity,
        summary=summary,
        plane_offset=plane_offset,
        plane_accuracy=plane_accuracy,
        paths=paths,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Simulate two log-normal rings and show them before and after the quadratic feature map."
    )

    # Sampler
    parser.add_argument("--n", type=int, nargs="+", default=list(DEFAULT_N), help="Samples per group")
    parser.add_argument("--mu", type=float, nargs="+", default=list(DEFAULT_MU), help="Log-mean radius per group")
    parser.add_argument("--sigma", type=float, nargs="+", default=list(DEFAULT_SIGMA),
                        help="Log-std radius per group")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Random seed")

    # Camera
    parser.add_argument("--camera_eye", type=float, nargs=3, default=list(CameraConfig().eye),
                        help="Plotly camera eye position (x y z)")
    parser.add_argument("--camera_up", type=float, nargs=3, default=list(CameraConfig().up),
                        help="Plotly camera up vector (x y z)")

    # IO
    parser.add_argument("--out_dir", type=str, default="results/kernel_trick", help="Output directory")
    parser.add_argument("--prefix", type=str, default="kernel_trick", help="Prefix for output files")
    parser.add_argument("--no_plane", action="store_true", help="Do not draw the separating plane")
    parser.add_argument("--no_csv", action="store_true", help="Do not write CSV files")
    parser.add_argument("--show", action="store_true", help="Open the figures after saving them")
    parser.add_argument("--log_level", type=str, default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def config_from_args(args: argparse.Namespace) -> DemoConfig:
    return DemoConfig(
        sampler=SamplerConfig(
            n=tuple(args.n),
            mu=tuple(args.mu),
            sigma=tuple(args.sigma),
            seed=args.seed,
        ),
        camera=CameraConfig(eye=tuple(args.camera_eye), up=tuple(args.camera_up)),
        out_dir=Path(args.out_dir),
        prefix=args.prefix,
        draw_plane=not args.no_plane,
        save_csv=not args.no_csv,
        show=args.show,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    config = config_from_args(args)
    logger.info(
        "Running kernel trick demo: n=%s mu=%s sigma=%s seed=%s",
        list(config.sampler.n), [round(m, 4) for m in config.sampler.mu], list(config.sampler.sigma),
        config.sampler.seed,
    )

    try:
        validate_sampler_config(config.sampler)
    except ValueError as exc:
        logger.error("Invalid arguments: %s", exc)
        return 2

    result = run_kernel_trick_demo(config)

    for name, path in result.paths.items():
        logger.info("%s -> %s", name, path)
    logger.info("Group summary:\n%s", result.summary.to_string(index=False))

    return 0 if result.identity.holds else 1


if __name__ == "__main__":
    raise SystemExit(main())
