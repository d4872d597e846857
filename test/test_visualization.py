import matplotlib

matplotlib.use("Agg")

import numpy as np
import plotly.graph_objects as go
import pytest

from kernels import quadratic_feature_map
from utils.data import SamplerConfig, dataset_to_cartesian, sample_dataset
from utils.visualization.feature_space import (
    GROUP_COLORS,
    CameraConfig,
    build_3d_feature_figure,
    plot_2d_dataset,
    plot_3d_features,
)


@pytest.fixture
def mapped_points():
    dataset = sample_dataset(SamplerConfig(n=(20, 30)))
    X = dataset_to_cartesian(dataset)
    return X, quadratic_feature_map(X), np.asarray(dataset.group)


def test_plot_2d_dataset_writes_png(tmp_path, mapped_points):
    X, _, groups = mapped_points

    path = plot_2d_dataset(X, groups, out_dir=tmp_path / "plots", prefix="rings", timestamp="t0")

    assert path == tmp_path / "plots" / "rings_t0.png"
    assert path.exists()
    assert path.stat().st_size > 0


def test_plot_2d_dataset_rejects_3d_input(tmp_path, mapped_points):
    _, Z, groups = mapped_points

    with pytest.raises(ValueError):
        plot_2d_dataset(Z, groups, out_dir=tmp_path)


def test_3d_figure_has_one_trace_per_group(mapped_points):
    _, Z, groups = mapped_points

    fig = build_3d_feature_figure(Z, groups)

    assert isinstance(fig, go.Figure)
    assert [t.name for t in fig.data] == ["Group 1", "Group 2"]
    assert all(isinstance(t, go.Scatter3d) for t in fig.data)
    assert len(fig.data[0].x) == 20
    assert len(fig.data[1].x) == 30


def test_colours_follow_configured_group_order(mapped_points):
    _, Z, groups = mapped_points
    outer = groups == 2

    full = build_3d_feature_figure(Z, groups, labels=(1, 2))
    only_outer = build_3d_feature_figure(Z[outer], groups[outer], labels=(1, 2))

    assert [t.name for t in only_outer.data] == ["Group 2"]
    assert only_outer.data[0].marker.color == GROUP_COLORS[1]
    assert only_outer.data[0].marker.color == full.data[1].marker.color


def test_plot_2d_dataset_accepts_group_order(tmp_path, mapped_points):
    X, _, groups = mapped_points
    outer = groups == 2

    path = plot_2d_dataset(X[outer], groups[outer], out_dir=tmp_path, timestamp="t0", labels=(1, 2))

    assert path.exists()


def test_3d_figure_uses_camera(mapped_points):
    _, Z, groups = mapped_points
    camera = CameraConfig(eye=(2.0, -1.0, 0.5), up=(0.0, 1.0, 0.0))

    fig = build_3d_feature_figure(Z, groups, camera=camera)

    assert fig.layout.scene.camera.eye.x == 2.0
    assert fig.layout.scene.camera.eye.y == -1.0
    assert fig.layout.scene.camera.up.y == 1.0


def test_camera_does_not_change_data(mapped_points):
    _, Z, groups = mapped_points

    a = build_3d_feature_figure(Z, groups)
    b = build_3d_feature_figure(Z, groups, camera=CameraConfig(eye=(0.1, 0.1, 3.0)))

    for ta, tb in zip(a.data, b.data):
        np.testing.assert_array_equal(ta.x, tb.x)
        np.testing.assert_array_equal(ta.z, tb.z)


def test_3d_figure_with_plane(mapped_points):
    _, Z, groups = mapped_points

    fig = build_3d_feature_figure(Z, groups, plane_offset=2.0)

    assert len(fig.data) == 3
    assert isinstance(fig.data[-1], go.Surface)


def test_build_3d_figure_rejects_2d_input(mapped_points):
    X, _, groups = mapped_points

    with pytest.raises(ValueError):
        build_3d_feature_figure(X, groups)


def test_plot_3d_features_writes_html(tmp_path, mapped_points):
    _, Z, groups = mapped_points

    path = plot_3d_features(Z, groups, plane_offset=2.0, out_dir=tmp_path, prefix="features", timestamp="t0")

    assert path == tmp_path / "features_t0.html"
    assert "plotly" in path.read_text(encoding="utf-8").lower()
