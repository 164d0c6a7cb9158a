"""
settings.py
Tunables for the spam/ham text-mining report.
"""
from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_SEED = 42
SEED_ENV = "SPAM_REPORT_SEED"

SPAM = "spam"
HAM = "ham"
LABELS = (HAM, SPAM)


def _seed_from_env() -> str:
    return os.getenv(SEED_ENV, str(DEFAULT_SEED))


class AnalysisConfig(BaseModel):
    data_path: Optional[str] = None
    label_col: str = Field("Category", min_length=1)
    text_col: str = Field("Message", min_length=1)
    encoding: str = "latin-1"
    seed: int = Field(default_factory=_seed_from_env, validate_default=True)
    train_fraction: float = Field(0.8, gt=0.0, lt=1.0)
    max_sparsity: float = Field(0.99, ge=0.0, lt=1.0)
    method: str = "svm_linear"
    cv_folds: int = Field(0, ge=0)
    top_terms: int = Field(10, ge=1)
    wordcloud_max_words: int = Field(100, ge=1)
    figures_dir: str = "figures"
    make_plots: bool = True
    include_emotion_features: bool = False

    @field_validator("cv_folds")
    @classmethod
    def _no_single_fold(cls, value: int) -> int:
        if value == 1:
            raise ValueError("cv_folds must be 0 (no resampling) or at least 2")
        return value
