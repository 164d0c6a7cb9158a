"""
train_svm_spam.py
Stratified train/test split and a generic training wrapper around scikit-learn estimators.
The default method is a linear-kernel SVM with the default regularisation (C=1).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Sequence

import numpy as np
import pandas as pd
from sklearn.base import ClassifierMixin
from sklearn.linear_model import LogisticRegression
from sklearn.metrics import cohen_kappa_score, make_scorer
from sklearn.model_selection import StratifiedKFold, cross_validate, train_test_split
from sklearn.svm import SVC

from settings import DEFAULT_SEED

logger = logging.getLogger(__name__)


def _svm_linear(seed: int) -> ClassifierMixin:
    return SVC(kernel="linear", C=1.0, random_state=seed)


def _logistic_regression(seed: int) -> ClassifierMixin:
    return LogisticRegression(max_iter=1000, random_state=seed)


METHODS: Dict[str, Callable[[int], ClassifierMixin]] = {
    "svm_linear": _svm_linear,
    "logistic_regression": _logistic_regression,
}


@dataclass(frozen=True)
class DataSplit:
    train_index: np.ndarray
    test_index: np.ndarray

    @property
    def sizes(self):
        return len(self.train_index), len(self.test_index)


@dataclass
class TrainedModel:
    estimator: ClassifierMixin
    method: str
    resampling: Dict[str, float] = field(default_factory=dict)

    def predict(self, X) -> np.ndarray:
        return self.estimator.predict(X)


def split_train_test(
    labels: Sequence[str],
    train_fraction: float = 0.8,
    seed: int = DEFAULT_SEED,
) -> DataSplit:
    labels = pd.Series(np.asarray(labels, dtype=object))
    label_counts = labels.value_counts()
    stratify = labels if label_counts.min() >= 2 else None
    if stratify is None:
        logger.warning("A class has fewer than 2 messages; falling back to an unstratified split")

    train_idx, test_idx = train_test_split(
        np.arange(len(labels)),
        train_size=train_fraction,
        random_state=seed,
        stratify=stratify,
    )
    split = DataSplit(np.sort(train_idx), np.sort(test_idx))
    logger.info("Train size: %d, test size: %d", *split.sizes)
    return split


def _resample(estimator: ClassifierMixin, X, y: np.ndarray, folds: int, seed: int) -> Dict[str, float]:
    smallest = int(pd.Series(y).value_counts().min())
    if folds > smallest:
        raise ValueError(
            f"cv_folds={folds} exceeds the {smallest} messages of the smallest class in the training partition"
        )
    cv = StratifiedKFold(n_splits=folds, shuffle=True, random_state=seed)
    scores = cross_validate(
        estimator,
        X,
        y,
        cv=cv,
        scoring={"accuracy": "accuracy", "kappa": make_scorer(cohen_kappa_score)},
    )
    return {
        "accuracy": float(np.mean(scores["test_accuracy"])),
        "accuracy_sd": float(np.std(scores["test_accuracy"], ddof=1)),
        "kappa": float(np.mean(scores["test_kappa"])),
        "kappa_sd": float(np.std(scores["test_kappa"], ddof=1)),
    }


def train_model(
    X,
    y: Sequence[str],
    method: str = "svm_linear",
    cv_folds: int = 0,
    seed: int = DEFAULT_SEED,
    factory: Optional[Callable[[int], ClassifierMixin]] = None,
) -> TrainedModel:
    if factory is None:
        if method not in METHODS:
            raise ValueError(f"Unknown training method {method!r}; choose one of {sorted(METHODS)}")
        factory = METHODS[method]
    if cv_folds == 1 or cv_folds < 0:
        raise ValueError(f"cv_folds must be 0 (no resampling) or at least 2, got {cv_folds}")

    y = np.asarray(y, dtype=object)
    resampling: Dict[str, float] = {}
    if cv_folds:
        resampling = _resample(factory(seed), X, y, cv_folds, seed)
        logger.info(
            "%d-fold resampling: accuracy %.4f, kappa %.4f",
            cv_folds, resampling["accuracy"], resampling["kappa"],
        )

    estimator = factory(seed)
    logger.info("Fitting %s on %d rows x %d features", method, X.shape[0], X.shape[1])
    estimator.fit(X, y)
    return TrainedModel(estimator=estimator, method=method, resampling=resampling)
