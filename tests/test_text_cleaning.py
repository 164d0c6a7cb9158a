import re
import unicodedata

import numpy as np
import pytest

from conftest import HAM_TEXTS, SPAM_TEXTS
from text_cleaning import CUSTOM_STOPWORDS, clean_corpus, clean_text, english_stopwords, normalization_steps


def _clean_before_stemming(text):
    for name, step in normalization_steps():
        if name == "stem":
            break
        text = step(text)
    return text


def test_steps_run_in_fixed_order():
    names = [name for name, _ in normalization_steps()]
    assert names == [
        "to_space",
        "lowercase",
        "remove_numbers",
        "remove_stopwords",
        "remove_custom_words",
        "remove_punctuation",
        "strip_whitespace",
        "stem",
    ]


def test_separators_become_spaces():
    assert clean_text("Hello/World@Mail|Box") == "hello world mail box"


def test_digits_are_removed():
    out = clean_text("Winner 2024 prize 100")
    assert not re.search(r"\d", out)
    assert out.startswith("winner")


def test_stems_tokens():
    assert clean_text("cats running") == "cat run"


def test_stopword_removed_before_punctuation():
    assert clean_text("the,cat") == "cat"


def test_custom_words_are_removed_as_whole_words():
    assert clean_text("company team s offer") == "offer"
    assert clean_text("bus stops") == "bus stop"


def test_possessive_fragment_is_removed():
    assert clean_text("It's GREAT") == "great"


@pytest.mark.parametrize("value", ["", None, np.nan, "   ", "the and of"])
def test_empty_results_are_allowed(value):
    assert clean_text(value) == ""


@pytest.mark.parametrize("text", HAM_TEXTS + SPAM_TEXTS)
def test_cleaned_text_invariants(text):
    out = clean_text(text)
    assert not re.search(r"\d", out)
    assert not set("/@|") & set(out)
    assert "  " not in out
    tokens = _clean_before_stemming(text).split()
    assert not set(tokens) & (english_stopwords() | CUSTOM_STOPWORDS)


def test_clean_corpus_keeps_one_entry_per_message():
    texts = HAM_TEXTS + ["", None]
    assert len(clean_corpus(texts)) == len(texts)


def test_unicode_punctuation_and_symbols_are_stripped():
    out = clean_text("FREE entry! Call now. It’s £100… don’t miss")
    assert out == "free entri call miss"


@pytest.mark.parametrize("text", ["“Win” €500 — claim™ today…", "café ¿qué? « hola »"])
def test_no_punctuation_or_symbol_survives(text):
    out = clean_text(text)
    assert all(unicodedata.category(ch)[0] not in "PS" for ch in out)
    assert "'" not in out


def test_snowball_stopword_list_keeps_spam_terms():
    stopwords = english_stopwords()
    assert {"the", "and", "don't"} <= stopwords
    assert not {"call", "free", "please"} & stopwords
    assert clean_text("Please call back") == "pleas call back"
