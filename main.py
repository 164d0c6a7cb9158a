"""
main.py
Runs the spam/ham text-mining report end to end: load, clean, plot term
frequencies and emotions, build the pruned document-term matrix, split,
train the linear SVM and print the confusion-matrix report.
Run:
  python main.py --data spam.csv
Outputs:
  figures/*.png and the report on stdout
"""
from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from typing import Optional

import pandas as pd

from emotion_scoring import NrcEmotionScorer, VaderPolarityScorer, score_messages, summarize_emotions
from evaluation import ConfusionReport, evaluate, format_report
from plots import plot_emotion_counts, plot_emotion_percentages, plot_top_terms, plot_word_cloud, save_figure
from settings import AnalysisConfig
from spam_data import DatasetError, load_spam_data
from term_matrix import FeatureMatrix, build_feature_matrix, build_term_frequency
from text_cleaning import clean_corpus
from train_svm_spam import METHODS, DataSplit, TrainedModel, split_train_test, train_model

logger = logging.getLogger(__name__)


@dataclass
class ReportResult:
    messages: pd.DataFrame
    term_frequency: pd.Series
    emotion_summary: pd.DataFrame
    features: FeatureMatrix
    split: DataSplit
    model: TrainedModel
    report: ConfusionReport


def run_report(
    config: AnalysisConfig,
    messages: Optional[pd.DataFrame] = None,
    emotion: Optional[NrcEmotionScorer] = None,
    polarity: Optional[VaderPolarityScorer] = None,
) -> ReportResult:
    if messages is None:
        if not config.data_path:
            raise DatasetError("No dataset path given")
        messages = load_spam_data(config.data_path, config.label_col, config.text_col, config.encoding)
    messages = messages.reset_index(drop=True)

    messages["clean"] = clean_corpus(messages["message"])
    freq = build_term_frequency(messages["clean"])
    logger.info("Most frequent terms: %s", ", ".join(freq.head(config.top_terms).index))

    scores = score_messages(messages["message"], emotion=emotion, polarity=polarity)
    messages = pd.concat([messages, scores], axis=1)
    emotion_summary = summarize_emotions(scores)

    if config.make_plots:
        save_figure(plot_top_terms(freq, config.top_terms), config.figures_dir, "top_terms")
        save_figure(
            plot_word_cloud(freq, seed=config.seed, max_words=config.wordcloud_max_words),
            config.figures_dir,
            "word_cloud",
        )
        save_figure(plot_emotion_counts(emotion_summary), config.figures_dir, "emotion_counts")
        save_figure(plot_emotion_percentages(emotion_summary), config.figures_dir, "emotion_percentages")

    features = build_feature_matrix(messages["clean"], messages["category"], config.max_sparsity)
    if config.include_emotion_features:
        logger.info("Joining %d emotion/polarity columns into the training features", scores.shape[1])
        features = features.with_extra_columns(scores)
    else:
        logger.info("Emotion scores are reported only; training uses term counts alone")

    split = split_train_test(features.labels, config.train_fraction, seed=config.seed)
    X = features.counts
    model = train_model(
        X[split.train_index],
        features.labels[split.train_index],
        method=config.method,
        cv_folds=config.cv_folds,
        seed=config.seed,
    )
    predicted = model.predict(X[split.test_index])
    report = evaluate(features.labels[split.test_index], predicted)

    return ReportResult(
        messages=messages,
        term_frequency=freq,
        emotion_summary=emotion_summary,
        features=features,
        split=split,
        model=model,
        report=report,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Spam/ham text-mining report with a linear SVM.")
    parser.add_argument("--data", required=True)
    parser.add_argument("--label-col", default="Category")
    parser.add_argument("--text-col", default="Message")
    parser.add_argument("--encoding", default="latin-1")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--train-fraction", type=float, default=0.8)
    parser.add_argument("--max-sparsity", type=float, default=0.99)
    parser.add_argument("--method", choices=sorted(METHODS), default="svm_linear")
    parser.add_argument("--cv-folds", type=int, default=0)
    parser.add_argument("--top-terms", type=int, default=10)
    parser.add_argument("--figures-dir", default="figures")
    parser.add_argument("--no-plots", action="store_true")
    parser.add_argument("--with-emotion-features", action="store_true")
    parser.add_argument("--log-level", default="INFO")
    return parser


def main(argv=None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    options = {
        "data_path": args.data,
        "label_col": args.label_col,
        "text_col": args.text_col,
        "encoding": args.encoding,
        "train_fraction": args.train_fraction,
        "max_sparsity": args.max_sparsity,
        "method": args.method,
        "cv_folds": args.cv_folds,
        "top_terms": args.top_terms,
        "figures_dir": args.figures_dir,
        "make_plots": not args.no_plots,
        "include_emotion_features": args.with_emotion_features,
    }
    # without --seed the config falls back to SPAM_REPORT_SEED
    if args.seed is not None:
        options["seed"] = args.seed
    try:
        config = AnalysisConfig(**options)
    except ValueError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc

    try:
        result = run_report(config)
    except (FileNotFoundError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc

    if result.model.resampling:
        r = result.model.resampling
        print(f"\nResampling ({config.cv_folds}-fold CV on the training partition):")
        print(f"  Accuracy {r['accuracy']:.4f} (sd {r['accuracy_sd']:.4f}), Kappa {r['kappa']:.4f} (sd {r['kappa_sd']:.4f})")
    print()
    print(format_report(result.report))


if __name__ == "__main__":
    main()
