import numpy as np
import pytest

from kernels import feature_space_gram, quadratic_feature_map, quadratic_kernel


def test_worked_example():
    a = np.array([1.0, 2.0])
    b = np.array([3.0, 4.0])

    phi_a = quadratic_feature_map(a)
    phi_b = quadratic_feature_map(b)

    np.testing.assert_allclose(phi_a, [1.0, 2.0 * np.sqrt(2.0), 4.0])
    np.testing.assert_allclose(phi_b, [9.0, 12.0 * np.sqrt(2.0), 16.0])
    assert float(phi_a @ phi_b) == pytest.approx(121.0)
    assert float(quadratic_kernel(a, b)) == pytest.approx(121.0)


def test_identity_on_random_pairs():
    rng = np.random.default_rng(0)
    A = rng.normal(scale=3.0, size=(50, 2))
    B = rng.normal(scale=3.0, size=(40, 2))

    np.testing.assert_allclose(feature_space_gram(A, B), quadratic_kernel(A, B), rtol=1e-10, atol=1e-10)


def test_sqrt2_scaling_is_required():
    a = np.array([1.0, 2.0])
    b = np.array([3.0, 4.0])

    def unscaled(x):
        return np.array([x[0] ** 2, x[0] * x[1], x[1] ** 2])

    assert float(unscaled(a) @ unscaled(b)) == pytest.approx(97.0)
    assert float(unscaled(a) @ unscaled(b)) != pytest.approx(float(quadratic_kernel(a, b)))


def test_batch_shapes():
    X = np.arange(10, dtype=float).reshape(5, 2)

    assert quadratic_feature_map(X).shape == (5, 3)
    assert quadratic_kernel(X, X[:3]).shape == (5, 3)
    assert feature_space_gram(X).shape == (5, 5)


def test_batch_matches_single_points():
    X = np.array([[1.0, -2.0], [0.5, 0.0], [-3.0, 4.0]])
    Z = quadratic_feature_map(X)

    for x, z in zip(X, Z):
        np.testing.assert_allclose(quadratic_feature_map(x), z)


def test_mapped_points_keep_squared_norm_in_first_and_last_axis():
    X = np.array([[1.0, 2.0], [-0.3, 0.7]])
    Z = quadratic_feature_map(X)

    np.testing.assert_allclose(Z[:, 0] + Z[:, 2], np.sum(X ** 2, axis=1))


def test_gram_is_symmetric():
    rng = np.random.default_rng(1)
    X = rng.normal(size=(8, 2))
    G = feature_space_gram(X)

    np.testing.assert_allclose(G, G.T)


@pytest.mark.parametrize("shape", [(3,), (4, 3), (2, 2, 2), (1,)])
def test_invalid_shapes_raise(shape):
    with pytest.raises(ValueError):
        quadratic_feature_map(np.zeros(shape))
