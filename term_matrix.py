"""
term_matrix.py
Document-term counts, sparse-term pruning and the labelled feature matrix fed to the classifier.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy import sparse
from sklearn.feature_extraction.text import CountVectorizer

from settings import LABELS

logger = logging.getLogger(__name__)

# word runs of three or more characters
TERM_PATTERN = r"(?u)\b\w\w\w+\b"


class EmptyVocabularyError(ValueError):
    """Raised when no term is left to build features from."""


@dataclass(frozen=True)
class FeatureMatrix:
    counts: sparse.csr_matrix
    vocabulary: List[str]
    labels: np.ndarray

    def __post_init__(self):
        n_rows, n_cols = self.counts.shape
        if n_rows != len(self.labels):
            raise ValueError(f"Feature matrix has {n_rows} rows but {len(self.labels)} labels")
        if n_cols != len(self.vocabulary):
            raise ValueError(f"Feature matrix has {n_cols} columns but {len(self.vocabulary)} terms")
        unknown = set(np.unique(self.labels)) - set(LABELS)
        if unknown:
            raise ValueError(f"Unknown labels in feature matrix: {sorted(unknown)}")

    @property
    def shape(self) -> Tuple[int, int]:
        return self.counts.shape

    def to_frame(self) -> pd.DataFrame:
        """Dense view with the label attached as a `category` column."""
        frame = pd.DataFrame.sparse.from_spmatrix(self.counts, columns=self.vocabulary)
        frame["category"] = self.labels
        return frame

    def with_extra_columns(self, extra: pd.DataFrame) -> "FeatureMatrix":
        if len(extra) != self.counts.shape[0]:
            raise ValueError(f"Expected {self.counts.shape[0]} rows of extra features, got {len(extra)}")
        clash = set(extra.columns) & set(self.vocabulary)
        if clash:
            raise ValueError(f"Extra feature names collide with terms: {sorted(clash)}")
        stacked = sparse.hstack(
            [self.counts, sparse.csr_matrix(extra.to_numpy(dtype=float))], format="csr"
        )
        return FeatureMatrix(stacked, self.vocabulary + [str(c) for c in extra.columns], self.labels)


def _vectorizer() -> CountVectorizer:
    return CountVectorizer(lowercase=False, token_pattern=TERM_PATTERN)


def build_document_term_matrix(corpus: Sequence[str]) -> Tuple[sparse.csr_matrix, List[str]]:
    vectorizer = _vectorizer()
    try:
        counts = vectorizer.fit_transform(corpus)
    except ValueError as exc:
        # CountVectorizer refuses to fit when every document is empty
        raise EmptyVocabularyError("Corpus has no terms after cleaning") from exc
    vocabulary = vectorizer.get_feature_names_out().tolist()
    logger.info("Document-term matrix: %d documents x %d terms", counts.shape[0], counts.shape[1])
    return sparse.csr_matrix(counts), vocabulary


def build_term_frequency(corpus: Sequence[str]) -> pd.Series:
    counts, vocabulary = build_document_term_matrix(corpus)
    totals = np.asarray(counts.sum(axis=0)).ravel()
    freq = pd.Series(totals, index=vocabulary, name="freq")
    return freq.sort_values(ascending=False, kind="mergesort")


def term_sparsity(counts: sparse.spmatrix) -> np.ndarray:
    """Fraction of documents in which each term has a zero count."""
    n_docs = counts.shape[0]
    if n_docs == 0:
        return np.ones(counts.shape[1])
    doc_freq = sparse.csc_matrix(counts).getnnz(axis=0)
    return 1.0 - doc_freq / n_docs


def prune_sparse_terms(
    counts: sparse.spmatrix,
    vocabulary: Sequence[str],
    max_sparsity: float = 0.99,
) -> Tuple[sparse.csr_matrix, List[str]]:
    if not 0.0 <= max_sparsity < 1.0:
        raise ValueError(f"max_sparsity must be in [0, 1), got {max_sparsity}")
    if counts.shape[1] != len(vocabulary):
        raise ValueError("Vocabulary does not match the matrix columns")

    # rounded so that 1 - 0.99 compares equal to a 1% document frequency
    keep = np.round(term_sparsity(counts), 10) <= round(max_sparsity, 10)
    if not keep.any():
        raise EmptyVocabularyError(
            f"No term appears in at least {1 - max_sparsity:.2%} of {counts.shape[0]} documents"
        )
    kept_vocab = [term for term, k in zip(vocabulary, keep) if k]
    logger.info("Pruned vocabulary from %d to %d terms (max sparsity %.2f)", len(vocabulary), len(kept_vocab), max_sparsity)
    return sparse.csr_matrix(counts)[:, np.flatnonzero(keep)], kept_vocab


def build_feature_matrix(
    corpus: Sequence[str],
    labels: Sequence[str],
    max_sparsity: float = 0.99,
) -> FeatureMatrix:
    counts, vocabulary = build_document_term_matrix(corpus)
    counts, vocabulary = prune_sparse_terms(counts, vocabulary, max_sparsity)
    return FeatureMatrix(counts, vocabulary, np.asarray(labels, dtype=object))
