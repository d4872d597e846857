import numpy as np
import pandas as pd

from evaluation import verify_kernel_identity
from utils.common.file_utils import dataset_to_frame, save_frame_to_csv, to_row
from utils.data import dataset_to_cartesian, generate_lognormal_polar_data


def test_dataset_to_frame_columns_and_order():
    dataset = generate_lognormal_polar_data([2, 3], [0.0, 0.7], [0.1, 0.1], random_state=5)

    df = dataset_to_frame(dataset)

    assert list(df.columns) == ["radius", "angle", "x1", "x2", "group"]
    assert len(df) == 5
    np.testing.assert_allclose(df[["x1", "x2"]].to_numpy(), dataset_to_cartesian(dataset))
    assert list(df["group"]) == [1, 1, 2, 2, 2]


def test_to_row_flattens_config_and_identity():
    dataset = generate_lognormal_polar_data([2, 3], [0.0, 0.7], [0.1, 0.2], random_state=5)
    identity = verify_kernel_identity(dataset_to_cartesian(dataset))

    row = to_row(dataset=dataset, identity_result=identity, plane_accuracy=None)

    assert row["seed"] == 5
    assert row["n_samples"] == 5
    assert row["n_2"] == 3
    assert row["sigma_2"] == 0.2
    assert row["identity_holds"] is True
    assert row["identity_n_pairs"] == 25
    assert np.isnan(row["plane_accuracy"])


def test_save_frame_to_csv(tmp_path):
    df = pd.DataFrame({"a": [1, 2], "b": [0.5, 1.5]})

    path = save_frame_to_csv(df, out_dir=tmp_path / "out", prefix="table", timestamp="t0")

    assert path == tmp_path / "out" / "table_t0.csv"
    pd.testing.assert_frame_equal(pd.read_csv(path), df)
