"""
plots.py
Figures for the report: top terms, word cloud and the emotion distribution.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pandas as pd
from wordcloud import WordCloud

logger = logging.getLogger(__name__)


def plot_top_terms(freq: pd.Series, top_n: int = 10):
    top = freq.head(top_n)
    fig, ax = plt.subplots(figsize=(10, 5))
    ax.bar(top.index.astype(str), top.to_numpy(), color="steelblue")
    ax.set_title(f"Top {len(top)} terms")
    ax.set_xlabel("Term")
    ax.set_ylabel("Frequency")
    ax.tick_params(axis="x", rotation=45)
    fig.tight_layout()
    return fig


def plot_word_cloud(freq: pd.Series, seed: int, max_words: int = 100, min_freq: int = 1):
    words = {str(term): float(count) for term, count in freq.items() if count >= min_freq}
    if not words:
        raise ValueError(f"No term occurs at least {min_freq} times; nothing to draw")
    cloud = WordCloud(
        width=800,
        height=400,
        background_color="white",
        colormap="Dark2",
        max_words=max_words,
        random_state=seed,
    ).generate_from_frequencies(words)

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.imshow(cloud, interpolation="bilinear")
    ax.axis("off")
    fig.tight_layout()
    return fig


def plot_emotion_counts(summary: pd.DataFrame):
    fig, ax = plt.subplots(figsize=(10, 5))
    ax.bar(summary.index.astype(str), summary["count"].to_numpy(), color=plt.cm.tab10.colors[: len(summary)])
    ax.set_title("Emotion counts across messages")
    ax.set_ylabel("Count")
    ax.tick_params(axis="x", rotation=45)
    fig.tight_layout()
    return fig


def plot_emotion_percentages(summary: pd.DataFrame):
    ordered = summary.sort_values("percent", ascending=True, kind="mergesort")
    fig, ax = plt.subplots(figsize=(8, 5))
    ax.barh(ordered.index.astype(str), ordered["percent"].to_numpy(), color="indianred")
    ax.set_title("Emotions in messages")
    ax.set_xlabel("Percentage")
    for y, value in enumerate(ordered["percent"].to_numpy()):
        ax.text(value, y, f" {value:.1f}%", va="center")
    fig.tight_layout()
    return fig


def save_figure(fig, directory: Union[str, Path], name: str) -> Path:
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{name}.png"
    fig.savefig(path, dpi=100, bbox_inches="tight")
    plt.close(fig)
    logger.info("Saved figure %s", path)
    return path
