from __future__ import annotations

from typing import Optional

import numpy as np

SQRT2 = np.sqrt(2.0)


def _as_points(X: np.ndarray, name: str = "X") -> np.ndarray:
    X = np.asarray(X, dtype=np.float64)
    if X.ndim == 1 and X.shape[0] == 2:
        return X
    if X.ndim == 2 and X.shape[1] == 2:
        return X
    raise ValueError(f"{name} must have shape (2,) or (N, 2), got {X.shape}")


def quadratic_feature_map(X: np.ndarray) -> np.ndarray:
    """
    Explicit degree-2 feature map phi(x1, x2) = (x1^2, sqrt(2) x1 x2, x2^2).

    Args
    ----
    X : np.ndarray
        Single point of shape (2,) or batch of shape (N, 2).

    Returns
    -------
    np.ndarray
        Shape (3,) for a single point, (N, 3) for a batch.

    Notes
    -----
    The sqrt(2) on the cross term makes <phi(a), phi(b)> equal (a . b)^2.
    """
    X = _as_points(X)
    x1 = X[..., 0]
    x2 = X[..., 1]
    return np.stack([x1 * x1, SQRT2 * x1 * x2, x2 * x2], axis=-1)


def quadratic_kernel(A: np.ndarray, B: np.ndarray) -> np.ndarray:
    """
    k(a, b) = (a . b)^2 evaluated without building phi.

    For two single points returns a scalar array; for batches (N, 2) and
    (M, 2) returns the (N, M) matrix of all pairs.
    """
    A = _as_points(A, "A")
    B = _as_points(B, "B")
    return np.square(A @ B.T)


def feature_space_gram(X: np.ndarray, Y: Optional[np.ndarray] = None) -> np.ndarray:
    """Inner products <phi(x), phi(y)> computed through the explicit map."""
    phi_x = quadratic_feature_map(X)
    phi_y = phi_x if Y is None else quadratic_feature_map(Y)
    return phi_x @ phi_y.T
