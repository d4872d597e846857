from .feature_maps import quadratic_feature_map, quadratic_kernel, feature_space_gram

__all__ = [
    "quadratic_feature_map",
    "quadratic_kernel",
    "feature_space_gram",
]
