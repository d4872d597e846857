from .kernel_identity import KernelIdentityResult, verify_kernel_identity
from .dataset_summary import (
    summarize_groups,
    separating_plane_offset,
    plane_separation_accuracy,
    inner_outer_labels,
)

__all__ = [
    "KernelIdentityResult",
    "verify_kernel_identity",
    "summarize_groups",
    "separating_plane_offset",
    "plane_separation_accuracy",
    "inner_outer_labels",
]
