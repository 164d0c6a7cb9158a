import pandas as pd
import pytest

from settings import AnalysisConfig
from spam_data import DatasetError, load_spam_data, to_messages


def test_loads_canonical_columns(spam_csv, messages):
    df = load_spam_data(spam_csv)
    assert list(df.columns) == ["category", "message"]
    assert len(df) == len(messages)
    assert set(df["category"]) == {"ham", "spam"}


def test_labels_are_normalised_and_bad_rows_dropped():
    raw = pd.DataFrame(
        {
            "v1": [" Ham", "SPAM", "eggs", "ham"],
            "v2": ["hello there", "win now", "odd row", None],
        }
    )
    df = to_messages(raw, label_col="v1", text_col="v2")
    assert df["category"].tolist() == ["ham", "spam"]
    assert df.index.tolist() == [0, 1]


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_spam_data(tmp_path / "nope.csv")


def test_missing_columns(spam_csv):
    with pytest.raises(DatasetError, match="Missing columns"):
        load_spam_data(spam_csv, label_col="label")


def test_no_usable_rows():
    raw = pd.DataFrame({"Category": ["eggs"], "Message": ["hello"]})
    with pytest.raises(DatasetError):
        to_messages(raw)


def test_config_rejects_bad_fraction():
    with pytest.raises(ValueError):
        AnalysisConfig(train_fraction=1.0)
    assert AnalysisConfig().max_sparsity == 0.99


def test_config_rejects_single_fold():
    with pytest.raises(ValueError, match="cv_folds"):
        AnalysisConfig(cv_folds=1)
    assert AnalysisConfig(cv_folds=0).cv_folds == 0
    assert AnalysisConfig(cv_folds=5).cv_folds == 5
