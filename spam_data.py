"""
spam_data.py
Loads a labelled spam/ham CSV into a frame with canonical `category` and `message` columns.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import pandas as pd

from settings import LABELS

logger = logging.getLogger(__name__)


class DatasetError(ValueError):
    """Raised when the input CSV does not hold a usable spam/ham dataset."""


def load_spam_data(
    path: Union[str, Path],
    label_col: str = "Category",
    text_col: str = "Message",
    encoding: str = "latin-1",
) -> pd.DataFrame:
    path = Path(path)
    if not path.exists() or path.is_dir():
        raise FileNotFoundError(f"Missing spam dataset: {path}")

    df = pd.read_csv(path, sep=",", header=0, encoding=encoding)
    missing = [col for col in (label_col, text_col) if col not in df.columns]
    if missing:
        raise DatasetError(
            f"Missing columns in {path}: {', '.join(missing)} "
            f"(available: {', '.join(map(str, df.columns))})"
        )
    logger.info("Loaded %d rows from %s", len(df), path)
    return to_messages(df, label_col=label_col, text_col=text_col)


def to_messages(df: pd.DataFrame, label_col: str = "Category", text_col: str = "Message") -> pd.DataFrame:
    """Normalise labels to ham/spam and drop rows that are not usable messages."""
    df = df[[label_col, text_col]].rename(columns={label_col: "category", text_col: "message"})
    df["category"] = df["category"].astype(str).str.strip().str.lower()

    unusable = ~df["category"].isin(LABELS) | df["message"].isna()
    if unusable.any():
        logger.warning("Dropping %d rows with an unknown label or no message", int(unusable.sum()))
        df = df[~unusable]
    if df.empty:
        raise DatasetError("No ham/spam messages left after validation")

    df = df.reset_index(drop=True)
    df["message"] = df["message"].astype(str)
    counts = df["category"].value_counts()
    logger.info("Label distribution: %s", ", ".join(f"{k}={v}" for k, v in counts.items()))
    return df
