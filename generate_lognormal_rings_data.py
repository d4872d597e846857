import argparse
import logging

from utils.data import generate_lognormal_polar_data, save_dataset_to_csv, dataset_to_cartesian
from utils.data.dataset_utils import DEFAULT_MU, DEFAULT_N, DEFAULT_SEED, DEFAULT_SIGMA
from utils.visualization.feature_space import plot_2d_dataset

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate Log-normal Rings Dataset")
    parser.add_argument("--n", type=int, nargs="+", default=list(DEFAULT_N), help="Samples per group")
    parser.add_argument("--mu", type=float, nargs="+", default=list(DEFAULT_MU), help="Log-mean radius per group")
    parser.add_argument("--sigma", type=float, nargs="+", default=list(DEFAULT_SIGMA), help="Log-std radius per group")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Random seed")
    parser.add_argument("--out_dir", type=str, default="data", help="Output directory")
    parser.add_argument("--no_plot", action="store_true", help="Disable plotting")

    args = parser.parse_args(argv)

    logger.info("Generating %d-group log-normal rings data...", len(args.n))
    dataset = generate_lognormal_polar_data(
        n=args.n,
        mu=args.mu,
        sigma=args.sigma,
        random_state=args.seed,
    )

    prefix = f"lognormal_rings_{len(args.n)}g"
    csv_path = save_dataset_to_csv(dataset, out_dir=args.out_dir, prefix=prefix)
    logger.info("Data saved to: %s", csv_path)

    if not args.no_plot:
        plot_file = plot_2d_dataset(
            dataset_to_cartesian(dataset), dataset.group, out_dir=args.out_dir, prefix=prefix + "_plot", show=False,
            labels=dataset.config.group_labels(),
        )
        logger.info("2D plot saved to: %s", plot_file)


if __name__ == "__main__":
    main()
