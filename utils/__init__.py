from .data import (
    generate_lognormal_polar_data,
    dataset_to_cartesian,
    save_dataset_to_csv,
    load_dataset_from_csv,
)

__all__ = [
    "generate_lognormal_polar_data",
    "dataset_to_cartesian",
    "save_dataset_to_csv",
    "load_dataset_from_csv",
]
