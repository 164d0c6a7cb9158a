"""
emotion_scoring.py
Lexicon-based emotion counts (NRC emotion lexicon via NRCLex) and polarity (NLTK VADER) per message.
Scores are computed on the raw message text: the lexicons are keyed by whole, unstemmed words.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

import pandas as pd

from text_cleaning import ensure_nltk_resource

logger = logging.getLogger(__name__)

EMOTION_CATEGORIES = [
    "anger",
    "anticipation",
    "disgust",
    "fear",
    "joy",
    "sadness",
    "surprise",
    "trust",
    "negative",
    "positive",
]


class NrcEmotionScorer:
    """
    Counts NRC lexicon hits per emotion category for one text.
    """
    def __init__(self):
        self._lex = None

    def _load(self):
        if self._lex is not None:
            return
        # TextBlob tokenisation inside NRCLex needs the punkt models
        ensure_nltk_resource("tokenizers/punkt", "punkt")
        ensure_nltk_resource("tokenizers/punkt_tab", "punkt_tab")
        from nrclex import NRCLex
        self._lex = NRCLex()

    def score(self, text: str) -> Dict[str, float]:
        self._load()
        self._lex.load_raw_text(text or "")
        raw = self._lex.raw_emotion_scores
        return {category: float(raw.get(category, 0)) for category in EMOTION_CATEGORIES}


class VaderPolarityScorer:
    """
    Compound VADER polarity in [-1, 1].
    """
    def __init__(self):
        self._analyzer = None

    def _load(self):
        if self._analyzer is not None:
            return
        ensure_nltk_resource("sentiment/vader_lexicon.zip", "vader_lexicon")
        from nltk.sentiment.vader import SentimentIntensityAnalyzer
        self._analyzer = SentimentIntensityAnalyzer()

    def score(self, text: str) -> float:
        self._load()
        return float(self._analyzer.polarity_scores(text or "")["compound"])


def score_messages(
    texts: Iterable[str],
    emotion: Optional[NrcEmotionScorer] = None,
    polarity: Optional[VaderPolarityScorer] = None,
) -> pd.DataFrame:
    emotion = emotion or NrcEmotionScorer()
    polarity = polarity or VaderPolarityScorer()

    rows = []
    for text in texts:
        row = emotion.score(text)
        row["polarity"] = polarity.score(text)
        rows.append(row)
    logger.info("Scored emotions for %d messages", len(rows))
    return pd.DataFrame(rows, columns=EMOTION_CATEGORIES + ["polarity"])


def summarize_emotions(scores: pd.DataFrame) -> pd.DataFrame:
    """Total count and percentage share per emotion category, largest first."""
    totals = scores[EMOTION_CATEGORIES].sum(axis=0)
    grand_total = totals.sum()
    percent = totals / grand_total * 100 if grand_total > 0 else totals * 0.0
    summary = pd.DataFrame({"count": totals, "percent": percent})
    summary.index.name = "emotion"
    return summary.sort_values("count", ascending=False, kind="mergesort")
