import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from kernels.feature_maps import feature_space_gram, quadratic_kernel

logger = logging.getLogger(__name__)


@dataclass
class KernelIdentityResult:
    n_pairs: int
    max_abs_error: float
    max_rel_error: float
    holds: bool


def verify_kernel_identity(
    X: np.ndarray,
    Y: Optional[np.ndarray] = None,
    rtol: float = 1e-9,
    atol: float = 1e-12,
) -> KernelIdentityResult:
    """
    Check <phi(x), phi(y)> == (x . y)^2 for every pair of rows of X and Y.

    Y defaults to X. The identity holds when every pair satisfies
    |explicit - kernel| <= atol + rtol * |x|^2 |y|^2.

    |x|^2 |y|^2 = |phi(x)| |phi(y)| bounds every term of the explicit product,
    also for almost perpendicular pairs where (x . y)^2 is near zero.
    """
    Y_ = X if Y is None else Y
    explicit = feature_space_gram(X, Y_)
    implicit = quadratic_kernel(X, Y_)

    abs_err = np.abs(explicit - implicit)
    n_pairs = int(abs_err.size)
    if n_pairs == 0:
        logger.warning("Kernel identity check on an empty set of pairs")
        return KernelIdentityResult(n_pairs=0, max_abs_error=0.0, max_rel_error=0.0, holds=True)

    sq_x = np.sum(np.atleast_2d(np.asarray(X, dtype=np.float64)) ** 2, axis=1)
    sq_y = np.sum(np.atleast_2d(np.asarray(Y_, dtype=np.float64)) ** 2, axis=1)
    scale = np.outer(sq_x, sq_y).reshape(abs_err.shape)
    rel_err = np.divide(abs_err, scale, out=np.zeros_like(abs_err), where=scale > 0)

    holds = bool(np.all(abs_err <= atol + rtol * scale))
    result = KernelIdentityResult(
        n_pairs=n_pairs,
        max_abs_error=float(abs_err.max()),
        max_rel_error=float(rel_err.max()),
        holds=holds,
    )

    if holds:
        logger.info(
            "Kernel identity holds on %d pairs (max abs err=%.3e, max rel err=%.3e)",
            n_pairs, result.max_abs_error, result.max_rel_error,
        )
    else:
        logger.warning(
            "Kernel identity violated on %d pairs (max abs err=%.3e, max rel err=%.3e)",
            n_pairs, result.max_abs_error, result.max_rel_error,
        )
    return result
