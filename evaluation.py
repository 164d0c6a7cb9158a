"""
evaluation.py
Confusion-matrix report for the held-out partition: accuracy with its exact
binomial interval, the no-information rate test, Cohen's Kappa, McNemar's
test and the per-class rates, all computed against a chosen positive class.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Sequence

import numpy as np
import pandas as pd
from scipy import stats
from sklearn.metrics import cohen_kappa_score, confusion_matrix

from settings import HAM, LABELS


def _ratio(num: float, den: float) -> float:
    return float(num) / den if den else float("nan")


@dataclass
class ConfusionReport:
    table: pd.DataFrame  # rows = prediction, columns = reference
    positive: str
    accuracy: float
    accuracy_ci: tuple
    no_information_rate: float
    accuracy_p_value: float
    kappa: float
    mcnemar_p_value: float
    by_class: Dict[str, float] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return int(self.table.to_numpy().sum())

    def count(self, predicted: str, actual: str) -> int:
        return int(self.table.loc[predicted, actual])


def mcnemar_p_value(table: np.ndarray) -> float:
    """McNemar's chi-squared test with continuity correction on the off-diagonal cells."""
    b, c = float(table[0, 1]), float(table[1, 0])
    if b + c == 0:
        return float("nan")
    statistic = (abs(b - c) - 1.0) ** 2 / (b + c)
    return float(stats.chi2.sf(statistic, df=1))


def evaluate(actual: Sequence[str], predicted: Sequence[str], positive: str = HAM) -> ConfusionReport:
    if positive not in LABELS:
        raise ValueError(f"Positive class must be one of {LABELS}, got {positive!r}")
    actual = np.asarray(actual, dtype=object)
    predicted = np.asarray(predicted, dtype=object)
    if len(actual) != len(predicted):
        raise ValueError(f"Got {len(actual)} reference labels but {len(predicted)} predictions")
    if len(actual) == 0:
        raise ValueError("Cannot evaluate an empty test partition")

    levels = [positive] + [lbl for lbl in LABELS if lbl != positive]
    # sklearn puts the reference on rows; the report reads prediction x reference
    table = confusion_matrix(actual, predicted, labels=levels).T
    n = int(table.sum())
    correct = int(np.trace(table))

    accuracy = correct / n
    ci = stats.binomtest(correct, n).proportion_ci(confidence_level=0.95, method="exact")
    reference_counts = table.sum(axis=0)
    nir = float(reference_counts.max()) / n
    acc_p = float(stats.binomtest(correct, n, p=nir, alternative="greater").pvalue)
    kappa = float(cohen_kappa_score(actual, predicted, labels=levels))

    tp, fp = table[0, 0], table[0, 1]
    fn, tn = table[1, 0], table[1, 1]
    sensitivity = _ratio(tp, tp + fn)
    specificity = _ratio(tn, tn + fp)
    by_class = {
        "sensitivity": sensitivity,
        "specificity": specificity,
        "pos_pred_value": _ratio(tp, tp + fp),
        "neg_pred_value": _ratio(tn, tn + fn),
        "prevalence": _ratio(tp + fn, n),
        "detection_rate": _ratio(tp, n),
        "detection_prevalence": _ratio(tp + fp, n),
        "balanced_accuracy": (sensitivity + specificity) / 2,
    }

    frame = pd.DataFrame(table, index=levels, columns=levels)
    frame.index.name = "Prediction"
    frame.columns.name = "Reference"
    return ConfusionReport(
        table=frame,
        positive=positive,
        accuracy=accuracy,
        accuracy_ci=(float(ci.low), float(ci.high)),
        no_information_rate=nir,
        accuracy_p_value=acc_p,
        kappa=kappa,
        mcnemar_p_value=mcnemar_p_value(table),
        by_class=by_class,
    )


def format_report(report: ConfusionReport) -> str:
    lines = [
        "Confusion Matrix and Statistics",
        "",
        report.table.to_string(),
        "",
        f"{'Accuracy':>24} : {report.accuracy:.4f}",
        f"{'95% CI':>24} : ({report.accuracy_ci[0]:.4f}, {report.accuracy_ci[1]:.4f})",
        f"{'No Information Rate':>24} : {report.no_information_rate:.4f}",
        f"{'P-Value [Acc > NIR]':>24} : {report.accuracy_p_value:.3g}",
        "",
        f"{'Kappa':>24} : {report.kappa:.4f}",
        "",
        f"{'Mcnemar Test P-Value':>24} : {report.mcnemar_p_value:.4g}",
        "",
    ]
    names = {
        "sensitivity": "Sensitivity",
        "specificity": "Specificity",
        "pos_pred_value": "Pos Pred Value",
        "neg_pred_value": "Neg Pred Value",
        "prevalence": "Prevalence",
        "detection_rate": "Detection Rate",
        "detection_prevalence": "Detection Prevalence",
        "balanced_accuracy": "Balanced Accuracy",
    }
    for key, name in names.items():
        lines.append(f"{name:>24} : {report.by_class[key]:.4f}")
    positive_label = "'Positive' Class"
    lines += ["", f"{positive_label:>24} : {report.positive}"]
    return "\n".join(lines)
