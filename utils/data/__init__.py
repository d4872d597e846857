from .dataset_utils import (
    PolarDataset,
    SamplerConfig,
    generate_lognormal_polar_data,
    sample_dataset,
    validate_sampler_config,
    polar_to_cartesian,
    dataset_to_cartesian,
    load_dataset_from_csv,
    save_dataset_to_csv,
)

__all__ = [
    "PolarDataset",
    "SamplerConfig",
    "generate_lognormal_polar_data",
    "sample_dataset",
    "validate_sampler_config",
    "polar_to_cartesian",
    "dataset_to_cartesian",
    "load_dataset_from_csv",
    "save_dataset_to_csv",
]
