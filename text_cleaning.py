"""
text_cleaning.py
Normalisation applied to every message before term counting.

Order matters: stopwords are removed before punctuation is stripped and
before stemming, so the stemmed output can legitimately contain a stem that
happens to spell a stopword.
"""
from __future__ import annotations

import logging
import re
import unicodedata
from functools import lru_cache
from typing import Callable, FrozenSet, Iterable, List, Tuple

import nltk
import pandas as pd
from nltk.stem.snowball import SnowballStemmer

logger = logging.getLogger(__name__)

CUSTOM_STOPWORDS = frozenset({"s", "company", "team"})
SPACE_CHARS = "/@|"

_TO_SPACE_RE = re.compile("[" + re.escape(SPACE_CHARS) + "]")
_DIGITS_RE = re.compile(r"\d+")
_WHITESPACE_RE = re.compile(r"\s+")

_stemmer = SnowballStemmer("english")


def ensure_nltk_resource(resource_path: str, package: str) -> None:
    try:
        nltk.data.find(resource_path)
    except LookupError:
        logger.info("NLTK resource '%s' not found, downloading", package)
        nltk.download(package, quiet=True)


@lru_cache(maxsize=None)
def english_stopwords() -> FrozenSet[str]:
    """The Snowball English stopword list shipped with the NLTK corpora."""
    ensure_nltk_resource("corpora/stopwords", "stopwords")
    from nltk.corpus import stopwords
    return frozenset(stopwords.words("english"))


def _word_pattern(words: Iterable[str]) -> re.Pattern:
    alternatives = sorted(re.escape(w) for w in words)
    return re.compile(r"\b(?:" + "|".join(alternatives) + r")\b")


@lru_cache(maxsize=None)
def _stopwords_re() -> re.Pattern:
    return _word_pattern(english_stopwords())


_CUSTOM_RE = _word_pattern(CUSTOM_STOPWORDS)


def to_space(text: str) -> str:
    return _TO_SPACE_RE.sub(" ", text)


def lowercase(text: str) -> str:
    return text.lower()


def remove_numbers(text: str) -> str:
    return _DIGITS_RE.sub("", text)


def remove_stopwords(text: str) -> str:
    return _stopwords_re().sub("", text)


def remove_custom_words(text: str) -> str:
    return _CUSTOM_RE.sub("", text)


def remove_punctuation(text: str) -> str:
    # Unicode punctuation (P*) and symbols (S*): curly quotes, ellipsis, currency signs
    return "".join(ch for ch in text if unicodedata.category(ch)[0] not in "PS")


def strip_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def stem_words(text: str) -> str:
    if not text:
        return ""
    return " ".join(_stemmer.stem(word) for word in text.split(" "))


def normalization_steps() -> List[Tuple[str, Callable[[str], str]]]:
    return [
        ("to_space", to_space),
        ("lowercase", lowercase),
        ("remove_numbers", remove_numbers),
        ("remove_stopwords", remove_stopwords),
        ("remove_custom_words", remove_custom_words),
        ("remove_punctuation", remove_punctuation),
        ("strip_whitespace", strip_whitespace),
        ("stem", stem_words),
    ]


def clean_text(text) -> str:
    if text is None or (not isinstance(text, str) and pd.isna(text)):
        return ""
    text = str(text)
    for _, step in normalization_steps():
        text = step(text)
    return text


def clean_corpus(texts: Iterable) -> List[str]:
    return [clean_text(t) for t in texts]
